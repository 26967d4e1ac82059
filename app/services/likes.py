import logging
import uuid
from typing import Optional

from sqlalchemy import delete, func, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.guard import require_session
from app.auth.session import UserSession
from app.core.errors import Conflict, NotFound
from app.models.models import Item, Like
from app.services.items import visible_item

logger = logging.getLogger("uvicorn.error")


async def like_count(session: AsyncSession, item_id: uuid.UUID) -> int:
    res = await session.execute(select(func.count()).select_from(Like).where(Like.item_id == item_id))
    return int(res.scalar() or 0)


async def has_liked(session: AsyncSession, user_id: uuid.UUID, item_id: uuid.UUID) -> bool:
    res = await session.execute(select(Like.item_id).where(Like.user_id == user_id, Like.item_id == item_id))
    return res.first() is not None


async def _item_exists(session: AsyncSession, item_id: uuid.UUID) -> bool:
    res = await session.execute(select(Item.id).where(Item.id == item_id))
    return res.first() is not None


async def toggle_like(
    session: AsyncSession,
    user_session: Optional[UserSession],
    item_id: uuid.UUID,
    currently_liked: bool,
) -> int:
    """Remove the caller's like when ``currently_liked`` else add one.

    Returns the item's like count after the change. Adding a like that
    already exists raises ``Conflict`` and leaves the ledger untouched;
    removing one that does not exist is a no-op.
    """
    viewer = require_session(user_session)
    await visible_item(session, viewer, item_id)

    if currently_liked:
        await session.execute(delete(Like).where(Like.user_id == viewer.user_id, Like.item_id == item_id))
        await session.commit()
    else:
        try:
            await session.execute(insert(Like).values(user_id=viewer.user_id, item_id=item_id))
            await session.commit()
        except IntegrityError:
            await session.rollback()
            # the item may have been deleted since it was loaded
            if not await _item_exists(session, item_id):
                raise NotFound("item_not_found")
            logger.info("likes: duplicate like user_id=%s item_id=%s", viewer.user_id, item_id)
            raise Conflict("already_liked")
    return await like_count(session, item_id)


async def like(session: AsyncSession, user_session: Optional[UserSession], item_id: uuid.UUID) -> int:
    return await toggle_like(session, user_session, item_id, currently_liked=False)


async def unlike(session: AsyncSession, user_session: Optional[UserSession], item_id: uuid.UUID) -> int:
    return await toggle_like(session, user_session, item_id, currently_liked=True)
