from pydantic import BaseModel
from typing import Optional
from app.auth.roles import UserRole


class UserOut(BaseModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    avatar_url: Optional[str] = None
    discriminator: Optional[str] = None
    role: UserRole
    created_at: Optional[str] = None


class RoleIn(BaseModel):
    role: UserRole


class SessionOut(BaseModel):
    user_id: str
    role: UserRole
    discriminator: str = ""
    name: Optional[str] = None
    avatar_url: Optional[str] = None
