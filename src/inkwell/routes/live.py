"""Live routes — public reads of published snapshots."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Request, status

from inkwell.models.query import Query
from inkwell.routes.common import dump, get_service, read_query

router = APIRouter(prefix="/live/{schema}", tags=["live"])

ReadQuery = Annotated[Query, Depends(read_query)]


@router.get("")
async def find_live(request: Request, schema: str, query: ReadQuery) -> list[dict[str, Any]]:
    return dump(await get_service(request, schema).live.find(query))


@router.get("/count")
async def count_live(request: Request, schema: str, query: ReadQuery) -> dict[str, int]:
    return {"count": await get_service(request, schema).live.count(query)}


@router.get("/any")
async def any_live(request: Request, schema: str, query: ReadQuery) -> dict[str, bool]:
    return {"any": await get_service(request, schema).live.any(query)}


@router.get("/{item_id}")
async def get_live(
    request: Request, schema: str, item_id: str, query: ReadQuery
) -> dict[str, Any]:
    snapshot = await get_service(request, schema).live.get(item_id, query)
    if snapshot is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{schema} {item_id} is not live",
        )
    return dump(snapshot)
