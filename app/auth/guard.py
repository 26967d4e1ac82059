"""Authorization predicates.

These are the only role checks in the service. Every mutating service
function evaluates them itself, whatever the client chose to show.
"""
from typing import Optional
import uuid

from app.auth.roles import UserRole, WRITE_ROLES
from app.auth.session import UserSession
from app.core.errors import Forbidden, Unauthenticated


def can_delete(session: Optional[UserSession], owner_id: Optional[uuid.UUID]) -> bool:
    if session is None:
        return False
    if session.role == UserRole.ADMIN:
        return True
    return owner_id is not None and str(session.user_id) == str(owner_id)


def can_write(session: Optional[UserSession]) -> bool:
    return session is not None and session.role in WRITE_ROLES


def can_administer(session: Optional[UserSession]) -> bool:
    return session is not None and session.role == UserRole.ADMIN


def require_session(session: Optional[UserSession]) -> UserSession:
    if session is None:
        raise Unauthenticated()
    return session


def require_write(session: Optional[UserSession]) -> UserSession:
    require_session(session)
    if not can_write(session):
        raise Forbidden()
    return session


def require_admin(session: Optional[UserSession]) -> UserSession:
    require_session(session)
    if not can_administer(session):
        raise Forbidden()
    return session


def require_delete(session: Optional[UserSession], owner_id: Optional[uuid.UUID]) -> UserSession:
    require_session(session)
    if not can_delete(session, owner_id):
        raise Forbidden()
    return session
