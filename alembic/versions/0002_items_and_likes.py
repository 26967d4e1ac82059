"""item locations and likes

Revision ID: 0002_items_and_likes
Revises: 0001_users_and_accounts
Create Date: 2026-09-14
"""
from alembic import op
import sqlalchemy as sa

revision = "0002_items_and_likes"
down_revision = "0001_users_and_accounts"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "item",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("author_id", sa.Uuid(), sa.ForeignKey("user.id", ondelete="SET NULL"), nullable=True),
        sa.Column("location", sa.String(length=120), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("game_version", sa.String(length=32), nullable=False),
        sa.Column("shard_id", sa.String(length=32), nullable=False),
        sa.Column("image_path", sa.Text(), nullable=True),
        sa.Column("preview_image_path", sa.Text(), nullable=True),
        sa.Column("is_public", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
    )
    op.create_index("ix_item_version_shard", "item", ["game_version", "shard_id"])
    op.create_index("ix_item_created_at", "item", ["created_at"])
    # Deleting an item removes its likes in the same statement
    op.create_table(
        "item_like",
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("user.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("item_id", sa.Uuid(), sa.ForeignKey("item.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
    )
    op.create_index("ix_item_like_item_id", "item_like", ["item_id"])


def downgrade() -> None:
    op.drop_index("ix_item_like_item_id", table_name="item_like")
    op.drop_table("item_like")
    op.drop_index("ix_item_created_at", table_name="item")
    op.drop_index("ix_item_version_shard", table_name="item")
    op.drop_table("item")
