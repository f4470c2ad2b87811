"""create_core_tables

Revision ID: 3f1c9a7d2b10
Revises:
Create Date: 2026-09-14 10:02:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a7d2b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    """Create businesses, their users and programs, calls and patients."""
    op.create_table(
        'business',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(), nullable=True),
        sa.Column('vertical', sa.String(), nullable=True),
        sa.Column('address', sa.String(), nullable=True),
        sa.Column('to_number', sa.String(), nullable=True),
        sa.Column('hours', sa.JSON(), nullable=True),
        sa.Column('services', sa.JSON(), nullable=True),
        sa.Column('staff', sa.JSON(), nullable=True),
        sa.Column('faqs', sa.JSON(), nullable=True),
        sa.Column('promos', sa.JSON(), nullable=True),
        sa.Column('categories', sa.JSON(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_demo', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('demo_phone_number', sa.String(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_business_to_number', 'business', ['to_number'], unique=True)

    op.create_table(
        'user',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('business_id', sa.String(36), sa.ForeignKey('business.id', ondelete='CASCADE'), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('hashed_password', sa.String(), nullable=True),
        sa.Column('full_name', sa.String(), nullable=True),
        sa.Column('role', sa.String(), nullable=False, server_default='staff'),
        sa.Column('owner_onboarding_completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_active', sa.Boolean(), nullable=True, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index('ix_user_email', 'user', ['email'], unique=True)
    op.create_index('ix_user_business_id', 'user', ['business_id'])

    op.create_table(
        'program',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('business_id', sa.String(36), sa.ForeignKey('business.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('extension', sa.String(), nullable=True),
        sa.Column('vertical', sa.String(), nullable=True),
        sa.Column('address', sa.String(), nullable=True),
        sa.Column('hours', sa.JSON(), nullable=True),
        sa.Column('services', sa.JSON(), nullable=True),
        sa.Column('staff', sa.JSON(), nullable=True),
        sa.Column('faqs', sa.JSON(), nullable=True),
        sa.Column('promos', sa.JSON(), nullable=True),
        sa.Column('insurances', sa.JSON(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('settings', sa.JSON(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_program_business_id', 'program', ['business_id'])

    op.create_table(
        'patient',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('business_id', sa.String(36), sa.ForeignKey('business.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(), nullable=True),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('last_call_date', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_patient_business_id', 'patient', ['business_id'])

    op.create_table(
        'call',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('business_id', sa.String(36), sa.ForeignKey('business.id', ondelete='CASCADE'), nullable=False),
        sa.Column('call_id', sa.String(), nullable=False),
        sa.Column('patient_id', sa.String(36), sa.ForeignKey('patient.id', ondelete='SET NULL'), nullable=True),
        sa.Column('status', sa.String(), nullable=True),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('patient_name', sa.String(), nullable=True),
        sa.Column('last_summary', sa.Text(), nullable=True),
        sa.Column('started_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('ended_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_call_business_id', 'call', ['business_id'])


def downgrade() -> None:
    op.drop_table('call')
    op.drop_table('patient')
    op.drop_table('program')
    op.drop_table('user')
    op.drop_table('business')
