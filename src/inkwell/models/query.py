"""Read query options shared by the content and live read facades."""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from inkwell.errors import ValidationFailure

_FIELD_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _check_name(name: str) -> str:
    if not _FIELD_NAME.match(name):
        msg = f"invalid field name {name!r}"
        raise ValueError(msg)
    return name


class Query(BaseModel):
    """Equality filter, pagination, projection and sort for reads.

    ``select`` accepts a list of field names or a space separated string
    (``"name age"``). ``sort`` names one business field; prefix it with
    ``-`` for descending order. ``removed`` includes removed items in
    content-side reads.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    where: dict[str, Any] = Field(default_factory=dict)
    skip: int | None = Field(default=None, ge=0)
    limit: int | None = Field(default=None, ge=1)
    select: list[str] | None = None
    sort: str | None = None
    removed: bool = False

    @field_validator("where")
    @classmethod
    def _check_where(cls, value: dict[str, Any]) -> dict[str, Any]:
        for name in value:
            _check_name(name)
        return value

    @field_validator("select", mode="before")
    @classmethod
    def _split_select(cls, value: object) -> object:
        if isinstance(value, str):
            return value.split() or None
        return value

    @field_validator("select")
    @classmethod
    def _check_select(cls, value: list[str] | None) -> list[str] | None:
        if value is not None:
            for name in value:
                _check_name(name)
        return value

    @field_validator("sort")
    @classmethod
    def _check_sort(cls, value: str | None) -> str | None:
        if value:
            _check_name(value.removeprefix("-"))
        return value or None

    @property
    def sort_field(self) -> str | None:
        return self.sort.removeprefix("-") if self.sort else None

    @property
    def descending(self) -> bool:
        return bool(self.sort and self.sort.startswith("-"))

    @classmethod
    def coerce(cls, query: Query | dict[str, Any] | None) -> Query:
        """Normalize the ``query`` argument accepted by every read operation."""
        if query is None:
            return cls()
        if isinstance(query, Query):
            return query
        try:
            return cls.model_validate(query)
        except ValidationError as exc:
            raise ValidationFailure.from_validation_error(exc) from exc
