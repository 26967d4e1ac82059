"""Sign-in: resolve a provider identity to a local user.

Lookup order is the provider account, then (for the configured provider
only) an existing user with the same email, then a new CONTRIBUTOR. Any
other provider whose email is already taken gets ``Conflict``. An existing
user's display fields are refreshed from the profile. Failing to write the
account link or the refreshed fields is logged and does not block sign-in.
"""
import logging
from typing import Optional
from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.identity import Identity
from app.auth.roles import UserRole
from app.core.config import settings
from app.core.errors import Conflict, UpstreamSyncFailure
from app.models.models import Account, User

logger = logging.getLogger("uvicorn.error")


async def _find_by_account(session: AsyncSession, provider: str, external_id: str) -> Optional[User]:
    res = await session.execute(
        select(User).join(Account, Account.user_id == User.id).where(
            Account.provider == provider, Account.provider_user_id == external_id
        )
    )
    return res.scalar_one_or_none()


async def _find_by_email(session: AsyncSession, email: str) -> Optional[User]:
    res = await session.execute(select(User).where(User.email == email))
    return res.scalar_one_or_none()


async def _sync_profile(session: AsyncSession, user: User, identity: Identity) -> None:
    user.name = identity.name
    user.avatar_url = identity.avatar_url
    user.discriminator = identity.discriminator
    try:
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        raise UpstreamSyncFailure() from e


async def _create_user(session: AsyncSession, provider: str, identity: Identity, raw_profile: dict | None) -> User:
    user = User(
        id=uuid4(),
        email=identity.email,
        name=identity.name,
        avatar_url=identity.avatar_url,
        discriminator=identity.discriminator,
        role=UserRole.CONTRIBUTOR.value,
    )
    session.add(user)
    await session.flush()
    session.add(Account(user_id=user.id, provider=provider, provider_user_id=identity.external_id, raw_profile=raw_profile))
    await session.commit()
    logger.info("sign-in: created user id=%s provider=%s", user.id, provider)
    return user


async def sign_in(
    session: AsyncSession,
    provider: str,
    identity: Identity,
    raw_profile: dict | None = None,
) -> User:
    user = await _find_by_account(session, provider, identity.external_id)
    if user is None and identity.email:
        user = await _find_by_email(session, identity.email)
        if user is not None:
            if provider != settings.OAUTH_PROVIDER:
                raise Conflict("account_not_linked")
            user_id = user.id
            session.add(Account(user_id=user_id, provider=provider, provider_user_id=identity.external_id, raw_profile=raw_profile))
            try:
                await session.commit()
                logger.info("sign-in: linked %s account to user id=%s", provider, user_id)
            except SQLAlchemyError as e:
                await session.rollback()
                logger.warning("sign-in: account link failed user_id=%s reason=%s", user_id, e)
                user = await session.get(User, user_id)
    if user is None:
        return await _create_user(session, provider, identity, raw_profile)

    user_id = user.id
    try:
        await _sync_profile(session, user, identity)
    except UpstreamSyncFailure as e:
        logger.warning("sign-in: profile sync failed user_id=%s reason=%s", user_id, e.__cause__)
        # rollback expired the instance; reload whatever the directory still holds
        user = await session.get(User, user_id)
    return user
