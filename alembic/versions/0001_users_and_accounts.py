"""users and provider accounts

Revision ID: 0001_users_and_accounts
Revises: 
Create Date: 2026-09-14

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_users_and_accounts'
down_revision = None
branch_labels = None
depends_on = None

def upgrade() -> None:
    op.create_table('user',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('email', sa.Text(), nullable=True, unique=True),
        sa.Column('name', sa.Text(), nullable=True),
        sa.Column('avatar_url', sa.Text(), nullable=True),
        sa.Column('discriminator', sa.String(length=8), nullable=True),
        sa.Column('role', sa.String(length=16), nullable=True, server_default='CONTRIBUTOR'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
    )
    op.create_table('account',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('user.id', ondelete='CASCADE'), nullable=False),
        sa.Column('provider', sa.Text(), nullable=False),
        sa.Column('provider_user_id', sa.Text(), nullable=False),
        sa.Column('raw_profile', sa.JSON(), nullable=True),
        sa.UniqueConstraint('provider', 'provider_user_id', name='uq_account_provider_subject'),
    )

def downgrade() -> None:
    op.drop_table('account')
    op.drop_table('user')
