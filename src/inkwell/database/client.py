"""Async Cosmos DB client initialization for the content and live databases."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from azure.cosmos import PartitionKey
from azure.cosmos.aio import CosmosClient as AzureCosmosClient
from azure.cosmos.aio import DatabaseProxy

if TYPE_CHECKING:
    from inkwell.config import CosmosConfig

logger = logging.getLogger(__name__)


class CosmosClient:
    """Manages the async Cosmos DB client and both database references."""

    def __init__(self, config: CosmosConfig) -> None:
        self._config = config
        self._client: AzureCosmosClient | None = None
        self._content: DatabaseProxy | None = None
        self._live: DatabaseProxy | None = None

    async def initialize(self) -> None:
        """Create the client and make sure both databases exist."""
        if not self._config.endpoint:
            msg = "COSMOS_ENDPOINT is not set — cannot connect to Cosmos DB"
            raise ConnectionError(msg)
        self._client = AzureCosmosClient(
            self._config.endpoint,
            credential=self._config.key,
            connection_timeout=self._config.timeout,
        )
        self._content = await self._client.create_database_if_not_exists(
            self._config.content_database
        )
        self._live = await self._client.create_database_if_not_exists(self._config.live_database)
        logger.info(
            "Cosmos DB connected — content=%s live=%s",
            self._config.content_database,
            self._config.live_database,
        )

    async def close(self) -> None:
        """Close the underlying client."""
        if self._client:
            await self._client.close()
            self._client = None
            self._content = None
            self._live = None

    @property
    def content(self) -> DatabaseProxy:
        if self._content is None:
            raise RuntimeError("CosmosClient not initialized — call initialize() first")
        return self._content

    @property
    def live(self) -> DatabaseProxy:
        if self._live is None:
            raise RuntimeError("CosmosClient not initialized — call initialize() first")
        return self._live


async def ensure_container(database: DatabaseProxy, name: str, partition_path: str) -> None:
    """Create a container partitioned on ``partition_path`` if it does not exist."""
    await database.create_container_if_not_exists(
        id=name, partition_key=PartitionKey(path=partition_path)
    )
    logger.debug("Container ready — %s/%s (%s)", database.id, name, partition_path)
