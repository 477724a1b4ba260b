"""Store interfaces the engines depend on."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Protocol, TypeVar

if TYPE_CHECKING:
    from inkwell.models.item import ContentItem, LiveItem
    from inkwell.models.query import Query

T_co = TypeVar("T_co", covariant=True)

TokenValidator = Callable[[str | None], Awaitable[str]]


class ReadableStore(Protocol[T_co]):
    """Query side shared by the content and live stores."""

    async def find(self, query: Query) -> list[T_co]: ...

    async def count(self, query: Query) -> int: ...

    async def exists(self, query: Query) -> bool: ...

    async def get(self, item_id: str, query: Query) -> T_co | None: ...


class ItemStore(ReadableStore["ContentItem"], Protocol):
    """Version history of one schema's items."""

    async def insert(self, item: ContentItem) -> ContentItem: ...

    async def commit(self, current: ContentItem, next_item: ContentItem) -> ContentItem: ...

    async def current(self, item_id: str) -> ContentItem | None: ...

    async def version(self, item_id: str, version: int) -> ContentItem | None: ...

    async def versions(self, item_id: str) -> list[ContentItem]: ...


class LiveStore(ReadableStore["LiveItem"], Protocol):
    """Published snapshots of one schema's items."""

    async def put(self, snapshot: LiveItem) -> LiveItem: ...

    async def remove(self, item_id: str) -> bool: ...

    async def contains(self, item_id: str) -> bool: ...
