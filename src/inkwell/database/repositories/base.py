"""Shared Cosmos DB container access for every repository."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar, cast

from azure.core.exceptions import AzureError
from azure.cosmos.exceptions import CosmosResourceNotFoundError
from pydantic import BaseModel

from inkwell.errors import StorageFailure

if TYPE_CHECKING:
    from azure.cosmos.aio import DatabaseProxy

T = TypeVar("T", bound=BaseModel)

logger = logging.getLogger(__name__)


@contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    """Translate SDK and timeout errors into ``StorageFailure``."""
    try:
        yield
    except (AzureError, TimeoutError) as exc:
        logger.error("Storage operation failed — %s: %s", operation, exc)  # noqa: TRY400
        msg = f"{operation} failed: {exc}"
        raise StorageFailure(msg) from exc


class BaseRepository(Generic[T]):
    """Typed access to one container.

    Subclasses set ``model_class`` and either a fixed ``container_name`` or
    pass one at construction for per-schema containers.
    """

    container_name: ClassVar[str] = ""
    model_class: type[T]

    def __init__(self, database: DatabaseProxy, container_name: str | None = None) -> None:
        self.name = container_name or self.container_name
        self._container = database.get_container_client(self.name)

    def from_document(self, data: dict[str, Any]) -> T:
        return self.model_class.model_validate(data)

    def to_document(self, model: T) -> dict[str, Any]:
        return model.model_dump(mode="json")

    async def read_document(self, doc_id: str, partition_key: str) -> dict[str, Any] | None:
        """Point-read a document, or None when it does not exist."""
        with storage_errors(f"read {self.name}/{doc_id}"):
            try:
                return cast(
                    "dict[str, Any]",
                    await self._container.read_item(item=doc_id, partition_key=partition_key),
                )
            except CosmosResourceNotFoundError:
                return None

    async def query_documents(
        self,
        sql: str,
        parameters: list[dict[str, Any]] | None = None,
        *,
        partition_key: str | None = None,
    ) -> list[dict[str, Any]]:
        """Run a SQL query, optionally scoped to one partition."""
        kwargs: dict[str, Any] = {"parameters": parameters or []}
        if partition_key is not None:
            kwargs["partition_key"] = partition_key
        with storage_errors(f"query {self.name}"):
            return [
                cast("dict[str, Any]", item)
                async for item in self._container.query_items(sql, **kwargs)
            ]

    async def query(
        self,
        sql: str,
        parameters: list[dict[str, Any]] | None = None,
        *,
        partition_key: str | None = None,
    ) -> list[T]:
        documents = await self.query_documents(sql, parameters, partition_key=partition_key)
        return [self.from_document(doc) for doc in documents]

    async def scalar(self, sql: str, parameters: list[dict[str, Any]] | None = None) -> int:
        """Run a ``SELECT VALUE`` aggregate and return its single value."""
        total = 0
        for value in await self.query_documents(sql, parameters):
            total += cast("int", value)
        return total

    async def create(self, model: T) -> T:
        with storage_errors(f"create in {self.name}"):
            await self._container.create_item(body=self.to_document(model))
        return model

    async def upsert(self, model: T) -> T:
        with storage_errors(f"upsert in {self.name}"):
            await self._container.upsert_item(body=self.to_document(model))
        return model

    async def delete(self, doc_id: str, partition_key: str) -> bool:
        """Delete a document; False when it was already absent."""
        with storage_errors(f"delete {self.name}/{doc_id}"):
            try:
                await self._container.delete_item(item=doc_id, partition_key=partition_key)
            except CosmosResourceNotFoundError:
                return False
        return True
