"""create booking tables

Revision ID: 5c1f0a9d2b47
Revises:
Create Date: 2024-05-20 10:14:32.481920

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '5c1f0a9d2b47'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""

    # 1. Profiles, keyed by the identity provider's user id
    op.create_table(
        'users',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('full_name', sa.String(255), nullable=True),
        sa.Column('is_admin', sa.Boolean, nullable=False, server_default=sa.text('false')),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False)
    )
    op.create_index('ix_users_email', 'users', ['email'])

    # 2. Weekly schedule
    op.create_table(
        'availability_weekly',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('day_of_week', sa.Integer, nullable=False),
        sa.Column('day_name', sa.String(10), nullable=False),
        sa.Column('start_time', sa.String(5), nullable=False),
        sa.Column('end_time', sa.String(5), nullable=False),
        sa.CheckConstraint('day_of_week BETWEEN 0 AND 6', name='ck_availability_weekly_day'),
        sa.CheckConstraint('start_time < end_time', name='ck_availability_weekly_range')
    )
    op.create_index('ix_availability_weekly_day_of_week', 'availability_weekly', ['day_of_week'])

    # 3. Date exceptions
    op.create_table(
        'availability_exceptions',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('date', sa.Date, nullable=False, unique=True),
        sa.Column('is_available', sa.Boolean, nullable=False, server_default=sa.text('false')),
        sa.Column('slots', postgresql.JSONB, nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column('reason', sa.String, nullable=True)
    )
    op.create_index('ix_availability_exceptions_date', 'availability_exceptions', ['date'])

    # 4. Bookings
    op.create_table(
        'bookings',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('date', sa.Date, nullable=False),
        sa.Column('time', sa.String(5), nullable=False),
        sa.Column('end_time', sa.String(5), nullable=True),
        sa.Column('customer_name', sa.String, nullable=False),
        sa.Column('customer_email', sa.String, nullable=False),
        sa.Column('customer_phone', sa.String, nullable=True),
        sa.Column('service_type', sa.String, nullable=False, server_default='Consultation'),
        sa.Column('notes', sa.Text, nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='confirmed'),
        sa.Column('cancellation_reason', sa.Text, nullable=True),
        sa.Column('cancelled_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('cancelled_by', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('original_date', sa.Date, nullable=True),
        sa.Column('original_time', sa.String(5), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'))
    )
    op.create_index('ix_bookings_user_id', 'bookings', ['user_id'])
    op.create_index('ix_bookings_date', 'bookings', ['date'])

    # At most one active booking per slot
    op.create_index(
        'uq_bookings_active_slot',
        'bookings',
        ['date', 'time'],
        unique=True,
        postgresql_where=sa.text("status IN ('confirmed', 'rescheduled', 'completed')")
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('uq_bookings_active_slot', table_name='bookings')
    op.drop_index('ix_bookings_date', table_name='bookings')
    op.drop_index('ix_bookings_user_id', table_name='bookings')
    op.drop_table('bookings')

    op.drop_index('ix_availability_exceptions_date', table_name='availability_exceptions')
    op.drop_table('availability_exceptions')

    op.drop_index('ix_availability_weekly_day_of_week', table_name='availability_weekly')
    op.drop_table('availability_weekly')

    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
