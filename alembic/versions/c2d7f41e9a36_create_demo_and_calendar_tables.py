"""create_demo_and_calendar_tables

Revision ID: c2d7f41e9a36
Revises: 8b42e6d0c5a1
Create Date: 2026-10-02 09:12:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'c2d7f41e9a36'
down_revision: Union[str, None] = '8b42e6d0c5a1'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create demo sessions and calendar OAuth connections."""
    op.create_table(
        'demo_session',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('session_token', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('demo_business_id', sa.String(36), sa.ForeignKey('business.id', ondelete='SET NULL'), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_demo_session_session_token', 'demo_session', ['session_token'], unique=True)

    op.create_table(
        'calendar_connection',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('business_id', sa.String(36), sa.ForeignKey('business.id', ondelete='CASCADE'), nullable=False),
        sa.Column('program_id', sa.String(36), sa.ForeignKey('program.id', ondelete='CASCADE'), nullable=True),
        sa.Column('provider', sa.String(), nullable=False, server_default='google'),
        sa.Column('calendar_id', sa.String(), nullable=False, server_default='primary'),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('access_token', sa.String(), nullable=False),
        sa.Column('refresh_token', sa.String(), nullable=True),
        sa.Column('token_expires_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('scope', sa.String(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('sync_status', sa.String(), nullable=False, server_default='pending'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint(
            'business_id', 'program_id', 'provider', 'calendar_id',
            name='uix_calendar_connection_target'
        ),
    )


def downgrade() -> None:
    op.drop_table('calendar_connection')
    op.drop_index('ix_demo_session_session_token', table_name='demo_session')
    op.drop_table('demo_session')
