"""Version engine — append-only history behind create/update/patch/remove/restore.

Every mutation reads the current version ``V``, builds ``V+1`` and commits it
with a write conditioned on ``V`` still being current. Mutations resolve to
``V``, the state the caller replaced, and ``None`` when the id is unknown.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from inkwell.errors import MissingId, MissingItem, VersionConflict, VersionNotFound
from inkwell.models.item import ContentItem, ItemStatus

if TYPE_CHECKING:
    from collections.abc import Callable

    from inkwell.models.schema import ContentSchema
    from inkwell.services.protocols import ItemStore

logger = logging.getLogger(__name__)


class VersionEngine:
    """Content-side writes and history for one schema."""

    def __init__(self, schema: ContentSchema, items: ItemStore, *, max_attempts: int = 3) -> None:
        self._schema = schema
        self._items = items
        self._max_attempts = max(1, max_attempts)

    async def create(self, user: str, fields: dict[str, Any] | None) -> ContentItem:
        if fields is None:
            raise MissingItem
        item = ContentItem.first(user, self._schema.validate(fields))
        return await self._items.insert(item)

    async def update(
        self, user: str, item_id: str | None, fields: dict[str, Any] | None
    ) -> ContentItem | None:
        """Replace every business field; returns the replaced version."""
        if not item_id:
            raise MissingId
        if fields is None:
            raise MissingItem
        validated = self._schema.validate(fields)
        return await self._mutate(user, item_id, lambda _: (validated, ItemStatus.VISIBLE))

    async def patch(
        self, user: str, item_id: str | None, fields: dict[str, Any] | None
    ) -> ContentItem | None:
        """Overwrite only the supplied fields; returns the replaced version."""
        if not item_id:
            raise MissingId
        if fields is None:
            raise MissingItem
        changes = self._schema.validate_partial(fields)

        def merge(current: ContentItem) -> tuple[dict[str, Any], ItemStatus]:
            return self._schema.validate({**current.fields, **changes}), ItemStatus.VISIBLE

        return await self._mutate(user, item_id, merge)

    async def remove(self, user: str, item_id: str | None) -> ContentItem | None:
        """Mark the item removed in a new version; history is kept."""
        if not item_id:
            raise MissingId
        return await self._mutate(
            user, item_id, lambda current: (dict(current.fields), ItemStatus.REMOVED)
        )

    async def history(self, user: str, item_id: str | None) -> list[ContentItem]:
        if not item_id:
            raise MissingId
        return await self._items.versions(item_id)

    async def preview(self, user: str, item_id: str | None, version: int) -> ContentItem | None:
        if not item_id:
            raise MissingId
        return await self._items.version(item_id, version)

    async def restore(self, user: str, item_id: str | None, version: int) -> ContentItem | None:
        """Commit the fields of an older version as a new version."""
        if not item_id:
            raise MissingId
        if await self._items.current(item_id) is None:
            return None
        source = await self._items.version(item_id, version)
        if source is None:
            msg = f"Item {item_id} has no version {version}"
            raise VersionNotFound(msg)
        fields = self._schema.validate(source.fields)
        return await self._mutate(user, item_id, lambda _: (fields, ItemStatus.VISIBLE))

    async def _mutate(
        self,
        user: str,
        item_id: str,
        next_state: Callable[[ContentItem], tuple[dict[str, Any], ItemStatus]],
    ) -> ContentItem | None:
        for attempt in range(1, self._max_attempts + 1):
            current = await self._items.current(item_id)
            if current is None:
                return None
            fields, status = next_state(current)
            try:
                await self._items.commit(current, current.next_version(user, fields, status))
            except VersionConflict:
                logger.warning(
                    "Commit conflict — %s/%s v%d (attempt %d/%d)",
                    self._schema.name,
                    item_id,
                    current.meta.version,
                    attempt,
                    self._max_attempts,
                )
                continue
            return current
        msg = f"Item {item_id} kept changing; gave up after {self._max_attempts} attempts"
        raise VersionConflict(msg)
