"""Read facade — any/count/find/get over a content or live store."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, TypeVar

from inkwell.errors import MissingId
from inkwell.models.query import Query

if TYPE_CHECKING:
    from inkwell.services.protocols import ReadableStore

T = TypeVar("T")

QueryArg = Query | dict[str, Any] | None


class ReadFacade(Generic[T]):
    """Uniform reads; a missing item resolves to None rather than failing."""

    def __init__(self, store: ReadableStore[T]) -> None:
        self._store = store

    async def any(self, query: QueryArg = None) -> bool:
        return await self._store.exists(Query.coerce(query))

    async def count(self, query: QueryArg = None) -> int:
        return await self._store.count(Query.coerce(query))

    async def find(self, query: QueryArg = None) -> list[T]:
        return await self._store.find(Query.coerce(query))

    async def get(self, item_id: str | None, query: QueryArg = None) -> T | None:
        if not item_id:
            raise MissingId
        return await self._store.get(item_id, Query.coerce(query))
