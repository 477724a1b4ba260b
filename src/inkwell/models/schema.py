"""User-declared content schemas and their field validation."""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import cached_property
from typing import Annotated, Any

from pydantic import BaseModel, Field, ValidationError, create_model

from inkwell.errors import ValidationFailure

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


@dataclass(frozen=True)
class ContentSchema:
    """A named content type whose business fields are described by a pydantic model.

    Example::

        class Example(BaseModel):
            name: str
            age: int | None = None

        ContentSchema("Example", Example)
    """

    name: str
    model: type[BaseModel]

    @property
    def container_name(self) -> str:
        """Container used for this schema in both the content and live databases."""
        return _CAMEL_BOUNDARY.sub("_", self.name).lower()

    @cached_property
    def partial_model(self) -> type[BaseModel]:
        """A copy of ``model`` where every field may be omitted."""
        fields: dict[str, Any] = {}
        for name, info in self.model.model_fields.items():
            annotation = (
                Annotated[(info.annotation, *info.metadata)] if info.metadata else info.annotation
            )
            fields[name] = (annotation, Field(default=None, alias=info.alias))
        return create_model(
            f"Partial{self.model.__name__}",
            __config__=self.model.model_config,
            **fields,
        )

    def validate(self, fields: dict[str, Any]) -> dict[str, Any]:
        """Validate a complete field set and return its stored form."""
        try:
            instance = self.model.model_validate(fields)
        except ValidationError as exc:
            raise ValidationFailure.from_validation_error(exc) from exc
        return instance.model_dump(mode="json")

    def validate_partial(self, fields: dict[str, Any]) -> dict[str, Any]:
        """Validate only the supplied fields and return their stored form."""
        try:
            instance = self.partial_model.model_validate(fields)
        except ValidationError as exc:
            raise ValidationFailure.from_validation_error(exc) from exc
        return instance.model_dump(mode="json", exclude_unset=True)
