import logging
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession
import jwt
from uuid import UUID
from app.core.db import get_session
from app.auth import discord
from app.auth.deps import get_user_session
from app.auth.identity import normalize_profile
from app.auth.jwt import mint_access, mint_refresh, mint_state, verify_state, decode_token
from app.auth.session import UserSession
from app.models.models import User
from app.schemas.users import SessionOut
from app.services.sign_in import sign_in

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger("uvicorn.error")

PROVIDER = "discord"


class TokenOut(BaseModel):
    access: str
    refresh: str


class AuthorizeOut(BaseModel):
    url: str
    state: str


class DiscordCallbackIn(BaseModel):
    code: str
    state: str


class RefreshIn(BaseModel):
    refresh: str


def _tokens(user: User) -> TokenOut:
    return TokenOut(access=mint_access(str(user.id)), refresh=mint_refresh(str(user.id)))


@router.get("/discord/authorize", response_model=AuthorizeOut)
async def discord_authorize():
    state = mint_state()
    return AuthorizeOut(url=discord.authorize_url(state), state=state)


@router.post("/discord/callback", response_model=TokenOut)
async def discord_callback(body: DiscordCallbackIn, session: AsyncSession = Depends(get_session)):
    if not verify_state(body.state):
        raise HTTPException(status_code=400, detail="invalid_state")
    access_token = await discord.exchange_code(body.code)
    profile = await discord.fetch_profile(access_token)
    identity = normalize_profile(profile)
    user = await sign_in(session, PROVIDER, identity, profile)
    return _tokens(user)


@router.post("/refresh", response_model=TokenOut)
async def refresh_token(body: RefreshIn, session: AsyncSession = Depends(get_session)):
    try:
        data = decode_token(body.refresh)
    except jwt.PyJWTError:
        raise HTTPException(status_code=401, detail="invalid_refresh")
    if data.get("typ") != "refresh":
        raise HTTPException(status_code=401, detail="invalid_refresh")
    uid = data["sub"]
    try:
        user = await session.get(User, UUID(uid))
    except ValueError:
        user = None
    if not user:
        raise HTTPException(status_code=401, detail="invalid_refresh")
    return _tokens(user)


@router.get("/session", response_model=SessionOut)
async def current_session(
    user_session: UserSession = Depends(get_user_session),
    session: AsyncSession = Depends(get_session),
):
    user = await session.get(User, user_session.user_id)
    return SessionOut(
        user_id=str(user_session.user_id),
        role=user_session.role,
        discriminator=user_session.discriminator,
        name=user.name if user else None,
        avatar_url=user.avatar_url if user else None,
    )
