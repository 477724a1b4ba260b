"""User document model — accounts that can sign in and obtain tokens."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum
from uuid import uuid4

from pydantic import BaseModel, Field


class UserRole(StrEnum):
    ADMIN = "admin"
    EDITOR = "editor"


class User(BaseModel):
    """A stored account; ``password_hash`` is a bcrypt hash, never the password."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    email: str
    password_hash: str
    role: UserRole = UserRole.EDITOR
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
