from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, Boolean, ForeignKey, DateTime, Text, JSON, Uuid, UniqueConstraint, Index
from sqlalchemy.sql import func
import uuid
from datetime import datetime
from app.core.db import Base
from app.auth.roles import UserRole


class User(Base):
    __tablename__ = "user"
    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email: Mapped[str | None] = mapped_column(Text, unique=True, nullable=True)
    name: Mapped[str | None] = mapped_column(Text, nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    discriminator: Mapped[str | None] = mapped_column(String(8), nullable=True)
    role: Mapped[str | None] = mapped_column(String(16), nullable=True, default=UserRole.CONTRIBUTOR.value)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    accounts: Mapped[list["Account"]] = relationship("Account", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)


class Account(Base):
    __tablename__ = "account"
    __table_args__ = (UniqueConstraint("provider", "provider_user_id", name="uq_account_provider_subject"),)
    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), ForeignKey("user.id", ondelete="CASCADE"))
    provider: Mapped[str] = mapped_column(Text)
    provider_user_id: Mapped[str] = mapped_column(Text)
    raw_profile: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    user: Mapped["User"] = relationship("User", back_populates="accounts")


class Item(Base):
    __tablename__ = "item"
    __table_args__ = (Index("ix_item_version_shard", "game_version", "shard_id"),)
    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    author_id: Mapped[uuid.UUID | None] = mapped_column(Uuid(as_uuid=True), ForeignKey("user.id", ondelete="SET NULL"), nullable=True)
    location: Mapped[str] = mapped_column(String(120))
    description: Mapped[str] = mapped_column(Text)
    game_version: Mapped[str] = mapped_column(String(32))
    shard_id: Mapped[str] = mapped_column(String(32))
    image_path: Mapped[str | None] = mapped_column(Text, nullable=True)
    preview_image_path: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_public: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), index=True)


class Like(Base):
    __tablename__ = "item_like"
    # The composite key is what serializes concurrent likes of the same pair
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), ForeignKey("user.id", ondelete="CASCADE"), primary_key=True)
    item_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), ForeignKey("item.id", ondelete="CASCADE"), primary_key=True, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
