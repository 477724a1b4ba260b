"""Data models for content items, live snapshots, users and read queries."""

from inkwell.models.item import ContentItem, ItemMeta, ItemStatus, LiveItem, Signature
from inkwell.models.query import Query
from inkwell.models.schema import ContentSchema
from inkwell.models.user import User

__all__ = [
    "ContentItem",
    "ContentSchema",
    "ItemMeta",
    "ItemStatus",
    "LiveItem",
    "Query",
    "Signature",
    "User",
]
