"""Auth routes — bootstrap the first admin and sign in."""

from __future__ import annotations

from fastapi import APIRouter, Request
from pydantic import BaseModel

router = APIRouter(prefix="/auth", tags=["auth"])


class Credentials(BaseModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    token: str


@router.post("/initial-admin", status_code=201)
async def create_initial_admin(request: Request, credentials: Credentials) -> TokenResponse:
    """Create the first admin account; rejected once any user exists."""
    auth = request.app.state.core.auth
    token = await auth.create_initial_admin(credentials.email, credentials.password)
    return TokenResponse(token=token)


@router.post("/sign-in")
async def sign_in(request: Request, credentials: Credentials) -> TokenResponse:
    auth = request.app.state.core.auth
    token = await auth.sign_in(credentials.email, credentials.password)
    return TokenResponse(token=token)
