import uuid

import pytest

from app.auth.guard import (
    can_administer,
    can_delete,
    can_write,
    require_admin,
    require_delete,
    require_session,
    require_write,
)
from app.auth.roles import UserRole
from app.auth.session import UserSession, session_from_user
from app.core.errors import Forbidden, Unauthenticated

OWNER = uuid.uuid4()
OTHER = uuid.uuid4()


def _session(role: UserRole, user_id: uuid.UUID = OTHER) -> UserSession:
    return UserSession(user_id=user_id, role=role)


@pytest.mark.parametrize(
    "session,owner,expected",
    [
        (None, OWNER, False),
        (None, None, False),
        (_session(UserRole.ADMIN), OWNER, True),
        (_session(UserRole.ADMIN), None, True),
        (_session(UserRole.CONTRIBUTOR, OWNER), OWNER, True),
        (_session(UserRole.INVITED, OWNER), OWNER, True),
        (_session(UserRole.CONTRIBUTOR), OWNER, False),
        (_session(UserRole.CONTRIBUTOR), None, False),
        (_session(UserRole.INVITED), OWNER, False),
    ],
)
def test_can_delete(session, owner, expected):
    assert can_delete(session, owner) is expected


def test_owner_match_accepts_string_ids():
    assert can_delete(_session(UserRole.CONTRIBUTOR, OWNER), str(OWNER)) is True


@pytest.mark.parametrize(
    "role,write,admin",
    [
        (UserRole.INVITED, False, False),
        (UserRole.CONTRIBUTOR, True, False),
        (UserRole.ADMIN, True, True),
    ],
)
def test_write_and_admin_predicates(role, write, admin):
    s = _session(role)
    assert can_write(s) is write
    assert can_administer(s) is admin


def test_anonymous_has_no_permissions():
    assert can_write(None) is False
    assert can_administer(None) is False


def test_require_helpers_raise_taxonomy():
    with pytest.raises(Unauthenticated):
        require_session(None)
    with pytest.raises(Unauthenticated):
        require_write(None)
    with pytest.raises(Forbidden):
        require_write(_session(UserRole.INVITED))
    with pytest.raises(Forbidden):
        require_admin(_session(UserRole.CONTRIBUTOR))
    with pytest.raises(Forbidden):
        require_delete(_session(UserRole.CONTRIBUTOR), OWNER)
    assert require_delete(_session(UserRole.ADMIN), OWNER).role == UserRole.ADMIN


class _StoredUser:
    def __init__(self, role, discriminator):
        self.id = OWNER
        self.role = role
        self.discriminator = discriminator


def test_session_defaults_to_invited_without_role():
    s = session_from_user(_StoredUser(None, None))
    assert s.role == UserRole.INVITED
    assert s.discriminator == ""
    assert s.user_id == OWNER


def test_session_copies_role_and_discriminator():
    s = session_from_user(_StoredUser("ADMIN", "0420"))
    assert s.role == UserRole.ADMIN
    assert s.discriminator == "0420"
    assert session_from_user(_StoredUser("SUPERUSER", "1")).role == UserRole.INVITED
