from enum import Enum


class UserRole(str, Enum):
    INVITED = "INVITED"
    CONTRIBUTOR = "CONTRIBUTOR"
    ADMIN = "ADMIN"


WRITE_ROLES = frozenset({UserRole.CONTRIBUTOR, UserRole.ADMIN})


def parse_role(value: str | None) -> UserRole:
    """Map a stored role to ``UserRole``; anything missing or unknown is INVITED."""
    if not value:
        return UserRole.INVITED
    try:
        return UserRole(value)
    except ValueError:
        return UserRole.INVITED
