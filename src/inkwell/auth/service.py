"""Sign-in, initial admin bootstrap and token validation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from inkwell.auth.passwords import hash_password, verify_password
from inkwell.auth.tokens import decode_token, issue_token
from inkwell.errors import AdminAlreadyExists, InvalidCredentials, InvalidToken
from inkwell.models.user import User, UserRole

if TYPE_CHECKING:
    from inkwell.config import AuthConfig
    from inkwell.database.repositories.users import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Issues and validates the tokens every content operation requires."""

    def __init__(self, users: UserRepository, config: AuthConfig) -> None:
        self._users = users
        self._config = config

    async def create_initial_admin(self, email: str, password: str) -> str:
        """Create the first admin account and return a token for it.

        Only allowed while no user exists.
        """
        if not email or not password:
            raise InvalidCredentials("An email and password are required")
        if await self._users.count_all() > 0:
            raise AdminAlreadyExists
        user = User(
            email=email.lower(),
            password_hash=await hash_password(password),
            role=UserRole.ADMIN,
        )
        await self._users.claim_bootstrap(user.id)
        await self._users.create(user)
        logger.info("Initial admin created — %s", user.id)
        return issue_token(user.id, self._config)

    async def sign_in(self, email: str, password: str) -> str:
        if not email or not password:
            raise InvalidCredentials
        user = await self._users.get_by_email(email)
        if user is None or not await verify_password(password, user.password_hash):
            logger.warning("Failed sign-in for %s", email)
            raise InvalidCredentials
        return issue_token(user.id, self._config)

    async def validate_token(self, token: str | None) -> str:
        """Return the id of the user ``token`` belongs to, or raise InvalidToken."""
        user_id = decode_token(token, self._config)
        if await self._users.get(user_id) is None:
            raise InvalidToken
        return user_id
