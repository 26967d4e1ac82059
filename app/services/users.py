import logging
import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.guard import require_admin
from app.auth.roles import UserRole, parse_role
from app.auth.session import UserSession
from app.core.errors import NotFound
from app.models.models import User
from app.schemas.users import UserOut

logger = logging.getLogger("uvicorn.error")


def _build_user_out(user: User) -> UserOut:
    return UserOut(
        id=str(user.id),
        name=user.name,
        email=user.email,
        avatar_url=user.avatar_url,
        discriminator=user.discriminator,
        role=parse_role(user.role),
        created_at=user.created_at.isoformat() if user.created_at else None,
    )


async def list_users(session: AsyncSession, user_session: Optional[UserSession]) -> list[UserOut]:
    require_admin(user_session)
    res = await session.execute(select(User).order_by(User.created_at.desc(), User.name))
    return [_build_user_out(u) for u in res.scalars().all()]


async def apply_role(session: AsyncSession, user_id: uuid.UUID, role: UserRole) -> User:
    user = await session.get(User, user_id)
    if user is None:
        raise NotFound("user_not_found")
    user.role = role.value
    await session.commit()
    return user


async def set_role(
    session: AsyncSession,
    user_session: Optional[UserSession],
    user_id: uuid.UUID,
    role: UserRole,
) -> UserOut:
    viewer = require_admin(user_session)
    user = await apply_role(session, user_id, role)
    logger.info("users: role set user_id=%s role=%s by=%s", user_id, role.value, viewer.user_id)
    return _build_user_out(user)
