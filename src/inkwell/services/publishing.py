"""Publish engine — copies item versions into and out of the live store."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from inkwell.errors import MissingId, VersionNotFound
from inkwell.models.item import LiveItem

if TYPE_CHECKING:
    from inkwell.services.protocols import ItemStore, LiveStore

logger = logging.getLogger(__name__)


class PublishEngine:
    """Publishing never writes the content store; content writes never touch live."""

    def __init__(self, items: ItemStore, live: LiveStore) -> None:
        self._items = items
        self._live = live

    async def publish(self, user: str, item_id: str | None, version: int | None = None) -> LiveItem:
        """Make ``version`` (default: current) the live snapshot of the item."""
        if not item_id:
            raise MissingId
        if version is None:
            source = await self._items.current(item_id)
        else:
            source = await self._items.version(item_id, version)
        if source is None:
            msg = f"Item {item_id} has no version {version or 'to publish'}"
            raise VersionNotFound(msg)
        return await self._live.put(LiveItem.from_content(source, user))

    async def unpublish(self, user: str, item_id: str | None) -> None:
        """Drop the live snapshot; a no-op when the item is not live."""
        if not item_id:
            raise MissingId
        if not await self._live.remove(item_id):
            logger.debug("Unpublish of %s skipped — not live", item_id)

    async def is_live(self, user: str, item_id: str | None) -> bool:
        if not item_id:
            raise MissingId
        return await self._live.contains(item_id)
