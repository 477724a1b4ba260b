"""Repository for a schema's live container (partitioned by /id)."""

from __future__ import annotations

import logging

from inkwell.database import queries
from inkwell.database.repositories.base import BaseRepository
from inkwell.models.item import LiveItem
from inkwell.models.query import Query

logger = logging.getLogger(__name__)

_META_PATHS = ("meta", "published")


class LiveRepository(BaseRepository[LiveItem]):
    """At most one published snapshot per item id; never holds history."""

    model_class = LiveItem

    async def put(self, snapshot: LiveItem) -> LiveItem:
        """Create or overwrite the snapshot for ``snapshot.id``."""
        await self.upsert(snapshot)
        logger.info("Published — %s/%s v%d", self.name, snapshot.id, snapshot.version)
        return snapshot

    async def remove(self, item_id: str) -> bool:
        removed = await self.delete(item_id, item_id)
        if removed:
            logger.info("Unpublished — %s/%s", self.name, item_id)
        return removed

    async def contains(self, item_id: str) -> bool:
        return await self.read_document(item_id, item_id) is not None

    async def find(self, query: Query) -> list[LiveItem]:
        sql, parameters = queries.find_sql(query, [], _META_PATHS)
        return await self.query(sql, parameters)

    async def count(self, query: Query) -> int:
        sql, parameters = queries.count_sql(query, [])
        return await self.scalar(sql, parameters)

    async def exists(self, query: Query) -> bool:
        sql, parameters = queries.exists_sql(query, [])
        return bool(await self.query_documents(sql, parameters))

    async def get(self, item_id: str, query: Query) -> LiveItem | None:
        sql, parameters = queries.find_sql(
            query.model_copy(update={"skip": None, "limit": None, "sort": None}),
            ["c.id = @item_id"],
            _META_PATHS,
        )
        items = await self.query(
            sql,
            [*parameters, {"name": "@item_id", "value": item_id}],
            partition_key=item_id,
        )
        return items[0] if items else None
