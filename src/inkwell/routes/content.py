"""Content routes — token-guarded reads, writes, publishing and history."""

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, HTTPException, Request, Response, status

from inkwell.models.query import Query
from inkwell.routes.common import bearer_token, dump, get_service, read_query

router = APIRouter(prefix="/content/{schema}", tags=["content"])

logger = logging.getLogger(__name__)

ReadQuery = Annotated[Query, Depends(read_query)]
Fields = Annotated[dict[str, Any] | None, Body()]


def _found(item: Any, schema: str, item_id: str) -> Any:
    if item is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{schema} {item_id} not found",
        )
    return dump(item)


@router.get("")
async def find_items(request: Request, schema: str, query: ReadQuery) -> list[dict[str, Any]]:
    service = get_service(request, schema)
    return dump(await service.find(bearer_token(request), query))


@router.get("/count")
async def count_items(request: Request, schema: str, query: ReadQuery) -> dict[str, int]:
    service = get_service(request, schema)
    return {"count": await service.count(bearer_token(request), query)}


@router.get("/any")
async def any_items(request: Request, schema: str, query: ReadQuery) -> dict[str, bool]:
    service = get_service(request, schema)
    return {"any": await service.any(bearer_token(request), query)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_item(request: Request, schema: str, fields: Fields = None) -> dict[str, Any]:
    service = get_service(request, schema)
    item = await service.create(bearer_token(request), fields)
    logger.info("Created %s %s", schema, item.id)
    return dump(item)


@router.get("/{item_id}")
async def get_item(
    request: Request, schema: str, item_id: str, query: ReadQuery
) -> dict[str, Any]:
    service = get_service(request, schema)
    return _found(await service.get(bearer_token(request), item_id, query), schema, item_id)


@router.put("/{item_id}")
async def update_item(
    request: Request, schema: str, item_id: str, fields: Fields = None
) -> dict[str, Any]:
    """Replace all fields; responds with the version that was replaced."""
    service = get_service(request, schema)
    previous = await service.update(bearer_token(request), item_id, fields)
    return _found(previous, schema, item_id)


@router.patch("/{item_id}")
async def patch_item(
    request: Request, schema: str, item_id: str, fields: Fields = None
) -> dict[str, Any]:
    """Overwrite the supplied fields; responds with the version that was replaced."""
    service = get_service(request, schema)
    previous = await service.patch(bearer_token(request), item_id, fields)
    return _found(previous, schema, item_id)


@router.delete("/{item_id}")
async def remove_item(request: Request, schema: str, item_id: str) -> dict[str, Any]:
    service = get_service(request, schema)
    previous = await service.remove(bearer_token(request), item_id)
    return _found(previous, schema, item_id)


@router.get("/{item_id}/history")
async def item_history(request: Request, schema: str, item_id: str) -> list[dict[str, Any]]:
    service = get_service(request, schema)
    return dump(await service.history(bearer_token(request), item_id))


@router.get("/{item_id}/history/{version}")
async def preview_version(
    request: Request, schema: str, item_id: str, version: int
) -> dict[str, Any]:
    service = get_service(request, schema)
    item = await service.preview(bearer_token(request), item_id, version)
    return _found(item, schema, f"{item_id} v{version}")


@router.post("/{item_id}/history/{version}/restore")
async def restore_version(
    request: Request, schema: str, item_id: str, version: int
) -> dict[str, Any]:
    service = get_service(request, schema)
    previous = await service.restore(bearer_token(request), item_id, version)
    return _found(previous, schema, item_id)


@router.post("/{item_id}/publish")
async def publish_item(
    request: Request, schema: str, item_id: str, version: int | None = None
) -> dict[str, Any]:
    service = get_service(request, schema)
    snapshot = await service.publish(bearer_token(request), item_id, version)
    logger.info("Published %s %s v%d", schema, item_id, snapshot.version)
    return dump(snapshot)


@router.delete("/{item_id}/publish", status_code=status.HTTP_204_NO_CONTENT)
async def unpublish_item(request: Request, schema: str, item_id: str) -> Response:
    service = get_service(request, schema)
    await service.unpublish(bearer_token(request), item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{item_id}/publish")
async def is_item_live(request: Request, schema: str, item_id: str) -> dict[str, bool]:
    service = get_service(request, schema)
    return {"live": await service.is_live(bearer_token(request), item_id)}
