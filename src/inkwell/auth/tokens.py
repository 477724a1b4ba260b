"""Signed bearer tokens (HS256 JWTs) identifying a user."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import jwt

from inkwell.errors import InvalidToken

if TYPE_CHECKING:
    from inkwell.config import AuthConfig


def issue_token(user_id: str, config: AuthConfig) -> str:
    now = datetime.now(UTC)
    claims = {
        "sub": user_id,
        "iat": now,
        "exp": now + timedelta(hours=config.token_ttl_hours),
    }
    return jwt.encode(claims, config.secret, algorithm=config.algorithm)


def decode_token(token: str | None, config: AuthConfig) -> str:
    """Return the user id carried by ``token``.

    Raises InvalidToken when the token is absent, expired, malformed or
    signed with another secret.
    """
    if not token:
        raise InvalidToken
    try:
        claims = jwt.decode(
            token,
            config.secret,
            algorithms=[config.algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.PyJWTError as exc:
        raise InvalidToken from exc
    subject = claims.get("sub")
    if not isinstance(subject, str) or not subject:
        raise InvalidToken
    return subject
