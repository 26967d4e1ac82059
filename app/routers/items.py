from uuid import UUID
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.config import settings
from app.core.db import get_session
from app.auth.deps import get_user_session_optional
from app.auth.session import UserSession
from app.services import items as item_service
from app.services import likes as like_service
from app.schemas.items import (
    ItemCreate,
    ItemFacetsOut,
    ItemOut,
    ItemVisibilityIn,
    LikeOut,
    SortOption,
)

router = APIRouter(prefix="/items", tags=["items"])


@router.get("", response_model=list[ItemOut])
async def list_items(
    sort: SortOption = Query("recent"),
    game_version: Optional[str] = Query(None),
    shard_id: Optional[str] = Query(None),
    limit: int = Query(settings.ITEMS_PAGE_LIMIT, ge=1, le=settings.ITEMS_PAGE_LIMIT),
    offset: int = Query(0, ge=0),
    session: AsyncSession = Depends(get_session),
    user_session: Optional[UserSession] = Depends(get_user_session_optional),
):
    return await item_service.list_items(session, user_session, sort, game_version, shard_id, limit, offset)


@router.get("/facets", response_model=ItemFacetsOut)
async def item_facets(
    session: AsyncSession = Depends(get_session),
    user_session: Optional[UserSession] = Depends(get_user_session_optional),
):
    return await item_service.list_facets(session, user_session)


@router.post("", response_model=ItemOut)
async def create_item(
    payload: ItemCreate,
    session: AsyncSession = Depends(get_session),
    user_session: Optional[UserSession] = Depends(get_user_session_optional),
):
    return await item_service.create_item(session, user_session, payload)


@router.get("/{item_id}", response_model=ItemOut)
async def get_item(
    item_id: UUID,
    session: AsyncSession = Depends(get_session),
    user_session: Optional[UserSession] = Depends(get_user_session_optional),
):
    return await item_service.get_item(session, user_session, item_id)


@router.delete("/{item_id}", status_code=204)
async def delete_item(
    item_id: UUID,
    session: AsyncSession = Depends(get_session),
    user_session: Optional[UserSession] = Depends(get_user_session_optional),
):
    await item_service.delete_item(session, item_id, user_session)
    return None


@router.post("/{item_id}/like", response_model=LikeOut)
async def like_item(
    item_id: UUID,
    session: AsyncSession = Depends(get_session),
    user_session: Optional[UserSession] = Depends(get_user_session_optional),
):
    likes = await like_service.like(session, user_session, item_id)
    return LikeOut(item_id=str(item_id), liked=True, likes=likes)


@router.post("/{item_id}/unlike", response_model=LikeOut)
async def unlike_item(
    item_id: UUID,
    session: AsyncSession = Depends(get_session),
    user_session: Optional[UserSession] = Depends(get_user_session_optional),
):
    likes = await like_service.unlike(session, user_session, item_id)
    return LikeOut(item_id=str(item_id), liked=False, likes=likes)


@router.patch("/{item_id}/visibility", response_model=ItemOut)
async def set_item_visibility(
    item_id: UUID,
    payload: ItemVisibilityIn,
    session: AsyncSession = Depends(get_session),
    user_session: Optional[UserSession] = Depends(get_user_session_optional),
):
    return await item_service.set_visibility(session, user_session, item_id, payload.is_public)
