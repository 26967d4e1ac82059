"""Item locations: creation, listing, moderation and cascading delete.

Like counts are always computed from ``item_like`` rows in the listing
query; nothing on ``item`` caches them.
"""
import logging
import uuid
from typing import Optional

from sqlalchemy import delete, exists, func, literal, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.guard import can_administer, require_admin, require_delete, require_write
from app.auth.session import UserSession
from app.core.config import settings
from app.core.errors import NotFound
from app.models.models import Item, Like, User
from app.schemas.items import ItemCreate, ItemFacetsOut, ItemOut, SortOption

logger = logging.getLogger("uvicorn.error")


def _visibility_condition(user_session: Optional[UserSession]):
    if user_session is None:
        return Item.is_public.is_(True)
    if can_administer(user_session):
        return None
    return or_(Item.is_public.is_(True), Item.author_id == user_session.user_id)


async def visible_item(session: AsyncSession, user_session: Optional[UserSession], item_id: uuid.UUID) -> Item:
    """Load an item the caller may see; hidden and missing both read as ``NotFound``."""
    q = select(Item).where(Item.id == item_id)
    cond = _visibility_condition(user_session)
    if cond is not None:
        q = q.where(cond)
    item = (await session.execute(q)).scalar_one_or_none()
    if item is None:
        raise NotFound("item_not_found")
    return item


def _item_query(user_session: Optional[UserSession]):
    counts = (
        select(Like.item_id.label("item_id"), func.count().label("likes"))
        .group_by(Like.item_id)
        .subquery()
    )
    likes = func.coalesce(counts.c.likes, 0).label("likes")
    if user_session is not None:
        liked = exists().where(Like.item_id == Item.id, Like.user_id == user_session.user_id).label("has_liked")
    else:
        liked = literal(False).label("has_liked")
    q = (
        select(Item, User.name, User.avatar_url, likes, liked)
        .outerjoin(User, User.id == Item.author_id)
        .outerjoin(counts, counts.c.item_id == Item.id)
    )
    cond = _visibility_condition(user_session)
    if cond is not None:
        q = q.where(cond)
    return q, likes


def _build_item_out(item: Item, author_name, author_avatar_url, likes, has_liked) -> ItemOut:
    return ItemOut(
        id=str(item.id),
        author_id=str(item.author_id) if item.author_id else None,
        author_name=author_name,
        author_avatar_url=author_avatar_url,
        location=item.location,
        description=item.description,
        game_version=item.game_version,
        shard_id=item.shard_id,
        image_path=item.image_path,
        preview_image_path=item.preview_image_path,
        is_public=bool(item.is_public),
        created_at=item.created_at.isoformat() if item.created_at else None,
        likes=int(likes or 0),
        has_liked=bool(has_liked),
    )


async def list_items(
    session: AsyncSession,
    user_session: Optional[UserSession],
    sort: SortOption = "recent",
    game_version: Optional[str] = None,
    shard_id: Optional[str] = None,
    limit: Optional[int] = None,
    offset: int = 0,
) -> list[ItemOut]:
    q, likes = _item_query(user_session)
    if game_version:
        q = q.where(Item.game_version == game_version)
    if shard_id:
        q = q.where(Item.shard_id == shard_id)
    if sort == "favorite":
        q = q.order_by(likes.desc(), Item.created_at.desc(), Item.id.desc())
    else:
        q = q.order_by(Item.created_at.desc(), Item.id.desc())
    page = min(limit or settings.ITEMS_PAGE_LIMIT, settings.ITEMS_PAGE_LIMIT)
    q = q.limit(page).offset(max(offset, 0))
    res = await session.execute(q)
    return [_build_item_out(*row) for row in res.all()]


async def get_item(session: AsyncSession, user_session: Optional[UserSession], item_id: uuid.UUID) -> ItemOut:
    q, _ = _item_query(user_session)
    res = await session.execute(q.where(Item.id == item_id))
    row = res.first()
    if row is None:
        raise NotFound("item_not_found")
    return _build_item_out(*row)


async def list_facets(session: AsyncSession, user_session: Optional[UserSession]) -> ItemFacetsOut:
    q = select(Item.game_version, Item.shard_id).distinct().order_by(Item.game_version, Item.shard_id)
    cond = _visibility_condition(user_session)
    if cond is not None:
        q = q.where(cond)
    res = await session.execute(q)
    shards: dict[str, list[str]] = {}
    for version, shard in res.all():
        shards.setdefault(version, []).append(shard)
    return ItemFacetsOut(game_versions=list(shards.keys()), shards=shards)


async def create_item(session: AsyncSession, user_session: Optional[UserSession], payload: ItemCreate) -> ItemOut:
    viewer = require_write(user_session)
    item = Item(
        id=uuid.uuid4(),
        author_id=viewer.user_id,
        location=payload.location,
        description=payload.description,
        game_version=payload.game_version,
        shard_id=payload.shard_id,
        image_path=payload.image_path,
        preview_image_path=payload.preview_image_path,
        # contributor submissions wait for moderation
        is_public=can_administer(viewer),
    )
    session.add(item)
    await session.commit()
    await session.refresh(item)
    logger.info("items: created id=%s author_id=%s public=%s", item.id, viewer.user_id, item.is_public)
    return await get_item(session, viewer, item.id)


async def set_visibility(
    session: AsyncSession,
    user_session: Optional[UserSession],
    item_id: uuid.UUID,
    is_public: bool,
) -> ItemOut:
    viewer = require_admin(user_session)
    item = await session.get(Item, item_id)
    if item is None:
        raise NotFound("item_not_found")
    item.is_public = is_public
    await session.commit()
    return await get_item(session, viewer, item_id)


async def delete_item(session: AsyncSession, item_id: uuid.UUID, user_session: Optional[UserSession]) -> None:
    """Delete an item and every like pointing at it, in one transaction."""
    item = await visible_item(session, user_session, item_id)
    require_delete(user_session, item.author_id)
    try:
        await session.execute(delete(Like).where(Like.item_id == item_id))
        res = await session.execute(delete(Item).where(Item.id == item_id))
        if res.rowcount == 0:
            # someone else deleted it first
            raise NotFound("item_not_found")
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    logger.info("items: deleted id=%s by user_id=%s", item_id, user_session.user_id)
