"""Typed failures raised by the content services.

Lookups by id never raise for a missing item; they resolve to ``None``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

if TYPE_CHECKING:
    from pydantic import ValidationError


class InkwellError(Exception):
    """Base class for every failure surfaced to callers."""

    default_message = "Content service failure"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidToken(InkwellError):
    default_message = "A valid token is required"


class InvalidCredentials(InkwellError):
    default_message = "Invalid email or password"


class AdminAlreadyExists(InkwellError):
    default_message = "An initial admin has already been created"


class MissingId(InkwellError):
    default_message = "An item id is required"


class MissingItem(InkwellError):
    default_message = "An item is required"


class VersionNotFound(InkwellError):
    default_message = "The requested version does not exist"


class VersionConflict(InkwellError):
    default_message = "The item was modified concurrently"


class StorageFailure(InkwellError):
    default_message = "The content store is unavailable"


class FieldError(BaseModel):
    """One field-level validation problem."""

    field: str
    message: str


class ValidationFailure(InkwellError):
    """Business fields (or a read query) failed schema constraints."""

    default_message = "Validation failed"

    def __init__(self, details: list[FieldError], message: str | None = None) -> None:
        self.details = details
        super().__init__(message)

    @classmethod
    def from_validation_error(cls, exc: ValidationError) -> ValidationFailure:
        details = [
            FieldError(
                field=".".join(str(part) for part in error["loc"]) or "__root__",
                message=error["msg"],
            )
            for error in exc.errors()
        ]
        return cls(details, f"{exc.title}: {len(details)} invalid field(s)")
