from __future__ import annotations

import argparse
import asyncio
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker

from app.auth.roles import UserRole
from app.core.config import settings
from app.models.models import User
from app.services.users import apply_role


async def _resolve_user_id(session, ref: str) -> UUID | None:
    try:
        return UUID(ref)
    except ValueError:
        pass
    res = await session.execute(select(User.id).where(User.email == ref))
    return res.scalar_one_or_none()


async def _run(ref: str, role: UserRole) -> None:
    engine = create_async_engine(settings.DATABASE_URL, echo=False)
    Session = async_sessionmaker(engine, expire_on_commit=False)
    async with Session() as session:
        user_id = await _resolve_user_id(session, ref)
        if user_id is None:
            raise SystemExit(f"No user matches {ref!r}")
        user = await apply_role(session, user_id, role)
        print(f"{user.name or user.id}: role is now {role.value}")
    await engine.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Change a user's role (user id or email).")
    parser.add_argument("user")
    parser.add_argument("role", choices=[r.value for r in UserRole])
    args = parser.parse_args()
    asyncio.run(_run(args.user, UserRole(args.role)))
