"""Service factory — one token-guarded content service per schema."""

from __future__ import annotations

import logging
from functools import wraps
from typing import TYPE_CHECKING, Any, Concatenate, ParamSpec, TypeVar

from inkwell.services.publishing import PublishEngine
from inkwell.services.reads import ReadFacade
from inkwell.services.versioning import VersionEngine

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine

    from inkwell.models.item import ContentItem, LiveItem
    from inkwell.models.schema import ContentSchema
    from inkwell.services.protocols import ItemStore, LiveStore, TokenValidator
    from inkwell.services.reads import QueryArg

P = ParamSpec("P")
R = TypeVar("R")

logger = logging.getLogger(__name__)


def authenticated(
    func: Callable[Concatenate[ContentService, str, P], Coroutine[Any, Any, R]],
) -> Callable[Concatenate[ContentService, str | None, P], Coroutine[Any, Any, R]]:
    """Swap the caller's token for a user id before anything else runs."""

    @wraps(func)
    async def wrapper(
        self: ContentService, token: str | None, *args: P.args, **kwargs: P.kwargs
    ) -> R:
        user = await self._validate_token(token)
        return await func(self, user, *args, **kwargs)

    return wrapper


class ContentService:
    """Everything callers can do with one schema's content.

    Every operation takes a token first, except reads on ``live``, which
    serve published snapshots.
    """

    def __init__(
        self,
        schema: ContentSchema,
        versions: VersionEngine,
        publishing: PublishEngine,
        content: ReadFacade[ContentItem],
        live: ReadFacade[LiveItem],
        validate_token: TokenValidator,
    ) -> None:
        self.schema = schema
        self.live = live
        self._versions = versions
        self._publishing = publishing
        self._content = content
        self._validate_token = validate_token

    @authenticated
    async def any(self, user: str, query: QueryArg = None) -> bool:
        return await self._content.any(query)

    @authenticated
    async def count(self, user: str, query: QueryArg = None) -> int:
        return await self._content.count(query)

    @authenticated
    async def find(self, user: str, query: QueryArg = None) -> list[ContentItem]:
        return await self._content.find(query)

    @authenticated
    async def get(
        self, user: str, item_id: str | None, query: QueryArg = None
    ) -> ContentItem | None:
        return await self._content.get(item_id, query)

    @authenticated
    async def create(self, user: str, fields: dict[str, Any] | None) -> ContentItem:
        return await self._versions.create(user, fields)

    @authenticated
    async def update(
        self, user: str, item_id: str | None, fields: dict[str, Any] | None
    ) -> ContentItem | None:
        return await self._versions.update(user, item_id, fields)

    @authenticated
    async def patch(
        self, user: str, item_id: str | None, fields: dict[str, Any] | None
    ) -> ContentItem | None:
        return await self._versions.patch(user, item_id, fields)

    @authenticated
    async def remove(self, user: str, item_id: str | None) -> ContentItem | None:
        return await self._versions.remove(user, item_id)

    @authenticated
    async def publish(
        self, user: str, item_id: str | None, version: int | None = None
    ) -> LiveItem:
        return await self._publishing.publish(user, item_id, version)

    @authenticated
    async def unpublish(self, user: str, item_id: str | None) -> None:
        await self._publishing.unpublish(user, item_id)

    @authenticated
    async def is_live(self, user: str, item_id: str | None) -> bool:
        return await self._publishing.is_live(user, item_id)

    @authenticated
    async def history(self, user: str, item_id: str | None) -> list[ContentItem]:
        return await self._versions.history(user, item_id)

    @authenticated
    async def preview(
        self, user: str, item_id: str | None, version: int
    ) -> ContentItem | None:
        return await self._versions.preview(user, item_id, version)

    @authenticated
    async def restore(
        self, user: str, item_id: str | None, version: int
    ) -> ContentItem | None:
        return await self._versions.restore(user, item_id, version)


def create_service(
    schema: ContentSchema,
    items: ItemStore,
    live: LiveStore,
    validate_token: TokenValidator,
    *,
    commit_retries: int = 3,
) -> ContentService:
    """Compose the engines for one schema behind token validation."""
    logger.debug("Building content service — %s", schema.name)
    return ContentService(
        schema=schema,
        versions=VersionEngine(schema, items, max_attempts=commit_retries),
        publishing=PublishEngine(items, live),
        content=ReadFacade(items),
        live=ReadFacade(live),
        validate_token=validate_token,
    )
