"""Helpers shared by the content and live routers."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from fastapi import HTTPException, Request, status

from inkwell.errors import FieldError, ValidationFailure
from inkwell.models.query import Query

if TYPE_CHECKING:
    from inkwell.services.factory import ContentService


def get_service(request: Request, schema: str) -> ContentService:
    """Resolve the content service for ``schema`` or raise HTTP 404."""
    service = request.app.state.core.service(schema)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown content type {schema!r}",
        )
    return service


def bearer_token(request: Request) -> str | None:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    header = request.headers.get("authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def read_query(
    where: str | None = None,
    skip: int | None = None,
    limit: int | None = None,
    select: str | None = None,
    sort: str | None = None,
    removed: bool = False,
) -> Query:
    """Build a Query from URL parameters; ``where`` is a JSON object."""
    options: dict[str, Any] = {"skip": skip, "limit": limit, "select": select, "sort": sort}
    if removed:
        options["removed"] = True
    if where:
        try:
            options["where"] = json.loads(where)
        except json.JSONDecodeError as exc:
            raise ValidationFailure(
                [FieldError(field="where", message="must be a JSON object")]
            ) from exc
    return Query.coerce(options)


def dump(model: Any) -> Any:
    if model is None:
        return None
    if isinstance(model, list):
        return [item.model_dump(mode="json") for item in model]
    return model.model_dump(mode="json")
