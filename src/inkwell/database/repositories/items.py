"""Repository for a schema's content container (partitioned by /item_id).

Every version of an item is an immutable ``kind = "version"`` document with
id ``<item_id>:<version>``. A ``kind = "current"`` document with id
``<item_id>`` mirrors the highest version and carries the etag that guards
the next commit. Both live in the item's partition, so a commit is one
transactional batch.
"""

from __future__ import annotations

import logging
from typing import Any

from azure.cosmos.exceptions import CosmosBatchOperationError

from inkwell.database import queries
from inkwell.database.repositories.base import BaseRepository, storage_errors
from inkwell.errors import VersionConflict
from inkwell.models.item import ContentItem, ItemStatus
from inkwell.models.query import Query

logger = logging.getLogger(__name__)

_CURRENT = "current"
_VERSION = "version"
_HTTP_CONFLICT = 409
_HTTP_PRECONDITION_FAILED = 412
_META_PATHS = ("item_id", "kind", "meta")


def version_id(item_id: str, version: int) -> str:
    return f"{item_id}:{version}"


class ItemRepository(BaseRepository[ContentItem]):
    """Append-only version history plus a current-version marker per item."""

    model_class = ContentItem

    def from_document(self, data: dict[str, Any]) -> ContentItem:
        return ContentItem.model_validate(
            {
                "id": data["item_id"],
                "fields": data.get("fields", {}),
                "meta": data["meta"],
                "etag": data.get("_etag"),
            }
        )

    def to_document(self, model: ContentItem, kind: str = _VERSION) -> dict[str, Any]:
        doc_id = model.id if kind == _CURRENT else version_id(model.id, model.meta.version)
        return {
            "id": doc_id,
            "item_id": model.id,
            "kind": kind,
            **model.model_dump(mode="json", include={"fields", "meta"}),
        }

    async def insert(self, item: ContentItem) -> ContentItem:
        """Write version 1 and the current-version marker of a new item."""
        await self._batch(
            item.id,
            [
                ("create", (self.to_document(item),)),
                ("create", (self.to_document(item, _CURRENT),)),
            ],
        )
        logger.info("Item created — %s/%s v1", self.name, item.id)
        return item

    async def commit(self, current: ContentItem, next_item: ContentItem) -> ContentItem:
        """Append ``next_item`` if ``current`` is still the stored current version.

        Raises VersionConflict when another writer committed first.
        """
        replace_options = {"if_match_etag": current.etag} if current.etag else {}
        await self._batch(
            current.id,
            [
                ("create", (self.to_document(next_item),)),
                ("replace", (current.id, self.to_document(next_item, _CURRENT)), replace_options),
            ],
        )
        logger.info(
            "Version committed — %s/%s v%d -> v%d",
            self.name,
            current.id,
            current.meta.version,
            next_item.meta.version,
        )
        return next_item

    async def _batch(self, item_id: str, operations: list[tuple[Any, ...]]) -> None:
        with storage_errors(f"commit {self.name}/{item_id}"):
            try:
                await self._container.execute_item_batch(
                    batch_operations=operations, partition_key=item_id
                )
            except CosmosBatchOperationError as exc:
                if exc.status_code in (_HTTP_CONFLICT, _HTTP_PRECONDITION_FAILED):
                    msg = f"Item {item_id} was modified concurrently"
                    raise VersionConflict(msg) from exc
                raise

    async def current(self, item_id: str) -> ContentItem | None:
        """The current version of an item (any status), with its etag."""
        data = await self.read_document(item_id, item_id)
        return self.from_document(data) if data else None

    async def version(self, item_id: str, version: int) -> ContentItem | None:
        data = await self.read_document(version_id(item_id, version), item_id)
        return self.from_document(data) if data else None

    async def versions(self, item_id: str) -> list[ContentItem]:
        """Every stored version of an item, oldest first."""
        return await self.query(
            "SELECT * FROM c WHERE c.item_id = @item_id AND c.kind = @kind"
            " ORDER BY c.meta.version ASC",
            [
                {"name": "@item_id", "value": item_id},
                {"name": "@kind", "value": _VERSION},
            ],
            partition_key=item_id,
        )

    def _conditions(self, query: Query) -> list[str]:
        conditions = [f"c.kind = '{_CURRENT}'"]
        if not query.removed:
            conditions.append(f"c.meta.status != '{ItemStatus.REMOVED.value}'")
        return conditions

    async def find(self, query: Query) -> list[ContentItem]:
        sql, parameters = queries.find_sql(query, self._conditions(query), _META_PATHS)
        return await self.query(sql, parameters)

    async def count(self, query: Query) -> int:
        sql, parameters = queries.count_sql(query, self._conditions(query))
        return await self.scalar(sql, parameters)

    async def exists(self, query: Query) -> bool:
        sql, parameters = queries.exists_sql(query, self._conditions(query))
        return bool(await self.query_documents(sql, parameters))

    async def get(self, item_id: str, query: Query) -> ContentItem | None:
        conditions = [*self._conditions(query), "c.item_id = @item_id"]
        sql, parameters = queries.find_sql(
            query.model_copy(update={"skip": None, "limit": None, "sort": None}),
            conditions,
            _META_PATHS,
        )
        items = await self.query(
            sql,
            [*parameters, {"name": "@item_id", "value": item_id}],
            partition_key=item_id,
        )
        return items[0] if items else None
