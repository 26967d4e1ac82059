from typing import Optional
import uuid
import jwt
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from app.auth.jwt import decode_token
from app.auth.session import UserSession, session_from_user
from app.core.db import get_session
from app.core.errors import Unauthenticated
from app.models.models import User

bearer = HTTPBearer(auto_error=False)


def _subject(creds: Optional[HTTPAuthorizationCredentials]) -> Optional[uuid.UUID]:
    if not creds:
        return None
    try:
        data = decode_token(creds.credentials)
    except jwt.PyJWTError:
        return None
    if data.get("typ") != "access":
        return None
    try:
        return uuid.UUID(str(data.get("sub")))
    except ValueError:
        return None


async def get_user_session_optional(
    creds: HTTPAuthorizationCredentials = Depends(bearer),
    db: AsyncSession = Depends(get_session),
) -> Optional[UserSession]:
    # FastAPI caches this per request; nothing survives across requests
    user_id = _subject(creds)
    if user_id is None:
        return None
    user = await db.get(User, user_id)
    if not user:
        return None
    return session_from_user(user)


async def get_user_session(
    session: Optional[UserSession] = Depends(get_user_session_optional),
) -> UserSession:
    if session is None:
        raise Unauthenticated()
    return session
