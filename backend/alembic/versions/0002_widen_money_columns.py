"""widen money columns to NUMERIC(14, 2)

Revision ID: 0002_widen_money_columns
Revises: 0001_initial
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0002_widen_money_columns'
down_revision = '0001_initial'
branch_labels = None
depends_on = None

MONEY_COLUMNS = [
    ('events', 'price'),
    ('bookings', 'total_price'),
    ('cart_items', 'price_per_ticket'),
]


def upgrade() -> None:
    # NUMERIC(10, 2) tops out below 100 million; large bookings overflowed on Postgres.
    for table, column in MONEY_COLUMNS:
        with op.batch_alter_table(table) as batch:
            batch.alter_column(column, existing_type=sa.Numeric(10, 2), type_=sa.Numeric(14, 2), existing_nullable=False)


def downgrade() -> None:
    # Fails if any stored amount no longer fits NUMERIC(10, 2).
    for table, column in MONEY_COLUMNS:
        with op.batch_alter_table(table) as batch:
            batch.alter_column(column, existing_type=sa.Numeric(14, 2), type_=sa.Numeric(10, 2), existing_nullable=False)
