"""add_onboarding_to_business

Revision ID: 8b42e6d0c5a1
Revises: 3f1c9a7d2b10
Create Date: 2026-09-21 15:40:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8b42e6d0c5a1'
down_revision: Union[str, None] = '3f1c9a7d2b10'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Track setup-wizard progress on the business row (steps 0-7)."""
    with op.batch_alter_table('business') as batch_op:
        batch_op.add_column(sa.Column('onboarding_step', sa.Integer(), nullable=True, server_default='0'))
        batch_op.add_column(sa.Column('onboarding_completed_at', sa.DateTime(timezone=True), nullable=True))
        batch_op.create_check_constraint(
            'ck_business_onboarding_step',
            'onboarding_step >= 0 AND onboarding_step <= 7'
        )


def downgrade() -> None:
    with op.batch_alter_table('business') as batch_op:
        batch_op.drop_constraint('ck_business_onboarding_step', type_='check')
        batch_op.drop_column('onboarding_completed_at')
        batch_op.drop_column('onboarding_step')
