from dataclasses import dataclass
import uuid

from app.auth.roles import UserRole, parse_role


@dataclass(frozen=True)
class UserSession:
    """Read-only view of the signed-in user, rebuilt on every request."""

    user_id: uuid.UUID
    role: UserRole
    discriminator: str = ""


def session_from_user(user) -> UserSession:
    return UserSession(
        user_id=user.id,
        role=parse_role(user.role),
        discriminator=user.discriminator or "",
    )
