from uuid import UUID
from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.db import get_session
from app.auth.deps import get_user_session_optional
from app.auth.session import UserSession
from app.services import users as user_service
from app.schemas.users import RoleIn, UserOut

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[UserOut])
async def list_users(
    session: AsyncSession = Depends(get_session),
    user_session: Optional[UserSession] = Depends(get_user_session_optional),
):
    return await user_service.list_users(session, user_session)


@router.patch("/{user_id}/role", response_model=UserOut)
async def set_user_role(
    user_id: UUID,
    payload: RoleIn,
    session: AsyncSession = Depends(get_session),
    user_session: Optional[UserSession] = Depends(get_user_session_optional),
):
    return await user_service.set_role(session, user_session, user_id, payload.role)
