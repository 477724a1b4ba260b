"""Per-schema store handles — the content and live containers of each schema."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from inkwell.database.client import ensure_container
from inkwell.database.repositories.items import ItemRepository
from inkwell.database.repositories.live import LiveRepository

if TYPE_CHECKING:
    from collections.abc import Iterable

    from inkwell.database.client import CosmosClient
    from inkwell.models.schema import ContentSchema

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SchemaStores:
    schema: ContentSchema
    items: ItemRepository
    live: LiveRepository


async def initialize_models(
    cosmos: CosmosClient, schemas: Iterable[ContentSchema]
) -> dict[str, SchemaStores]:
    """Create both containers for every schema and bind repositories to them."""
    stores: dict[str, SchemaStores] = {}
    for schema in schemas:
        if schema.name in stores:
            msg = f"Schema {schema.name!r} is registered twice"
            raise ValueError(msg)
        container = schema.container_name
        await ensure_container(cosmos.content, container, "/item_id")
        await ensure_container(cosmos.live, container, "/id")
        stores[schema.name] = SchemaStores(
            schema=schema,
            items=ItemRepository(cosmos.content, container),
            live=LiveRepository(cosmos.live, container),
        )
    logger.info("Schemas initialized — %s", ", ".join(stores) or "(none)")
    return stores
