"""Initial schema with login credentials and sessions

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create login table
    op.create_table(
        'login',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('username', sa.String(length=255), nullable=False),
        sa.Column('salt', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('refresh_token', sa.String(length=255), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('refresh_token'),
    )
    op.create_index(op.f('ix_login_username'), 'login', ['username'], unique=True)

    # Create session table
    op.create_table(
        'session',
        sa.Column('session_token', sa.String(length=255), primary_key=True),
        sa.Column('account_id', sa.Integer(), sa.ForeignKey('login.id', ondelete='CASCADE'), nullable=False),
        sa.Column('expire_at', sa.Integer(), nullable=False),
    )
    op.create_index(op.f('ix_session_account_id'), 'session', ['account_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_session_account_id'), table_name='session')
    op.drop_table('session')
    op.drop_index(op.f('ix_login_username'), table_name='login')
    op.drop_table('login')
