"""Create system_settings singleton table

Revision ID: 20261019_000001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '20261019_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'system_settings',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('key', sa.String(length=100), nullable=False),
        sa.Column('library_name', sa.String(length=255), nullable=False),
        sa.Column('max_books_per_user', sa.Integer(), nullable=False),
        sa.Column('loan_period_days', sa.Integer(), nullable=False),
        sa.Column('session_timeout_minutes', sa.Integer(), nullable=False),
        sa.Column('password_policy', sa.String(length=20), nullable=False),
        sa.Column('two_factor_auth_mode', sa.String(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint("key = 'system'", name='ck_system_settings_singleton'),
        sa.CheckConstraint('max_books_per_user >= 0', name='ck_system_settings_max_books'),
        sa.CheckConstraint('loan_period_days >= 1', name='ck_system_settings_loan_period'),
        sa.CheckConstraint('session_timeout_minutes >= 1', name='ck_system_settings_session_timeout'),
    )
    op.create_index(op.f('ix_system_settings_key'), 'system_settings', ['key'], unique=True)


def downgrade() -> None:
    op.drop_index(op.f('ix_system_settings_key'), table_name='system_settings')
    op.drop_table('system_settings')
