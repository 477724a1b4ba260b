"""Content item and live snapshot models."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, Field, field_serializer

# Fixed width: string order of stored timestamps matches time order.
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


class ItemStatus(StrEnum):
    VISIBLE = "visible"
    REMOVED = "removed"


class Signature(BaseModel):
    """Who touched an item, and when."""

    by: str
    at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_serializer("at", when_used="json")
    def _serialize_at(self, at: datetime) -> str:
        if at.tzinfo is not None:
            at = at.astimezone(UTC)
        return at.strftime(TIMESTAMP_FORMAT)


class ItemMeta(BaseModel):
    """Version metadata carried by every stored version of an item."""

    version: int = Field(default=1, ge=1)
    status: ItemStatus = ItemStatus.VISIBLE
    created: Signature
    updated: Signature


class ContentItem(BaseModel):
    """One version of a content item: business fields plus metadata.

    ``etag`` is the store's concurrency token for the current-version marker
    the item was read from; it is never serialized.
    """

    id: str = Field(default_factory=lambda: str(uuid4()))
    fields: dict[str, Any] = Field(default_factory=dict)
    meta: ItemMeta
    etag: str | None = Field(default=None, exclude=True)

    @classmethod
    def first(cls, user: str, fields: dict[str, Any]) -> ContentItem:
        """Build version 1 of a brand new item."""
        signature = Signature(by=user)
        return cls(fields=fields, meta=ItemMeta(created=signature, updated=signature))

    def next_version(
        self,
        user: str,
        fields: dict[str, Any],
        status: ItemStatus = ItemStatus.VISIBLE,
    ) -> ContentItem:
        """Build version ``V+1`` of this item, keeping its creation signature."""
        return ContentItem(
            id=self.id,
            fields=fields,
            meta=ItemMeta(
                version=self.meta.version + 1,
                status=status,
                created=self.meta.created,
                updated=Signature(by=user),
            ),
        )


class LiveItem(BaseModel):
    """The published snapshot of an item, served by the live store."""

    id: str
    fields: dict[str, Any] = Field(default_factory=dict)
    meta: ItemMeta
    published: Signature

    @property
    def version(self) -> int:
        return self.meta.version

    @classmethod
    def from_content(cls, item: ContentItem, user: str) -> LiveItem:
        return cls(
            id=item.id,
            fields=dict(item.fields),
            meta=item.meta.model_copy(),
            published=Signature(by=user),
        )
