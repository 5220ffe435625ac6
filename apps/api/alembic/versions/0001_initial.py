"""initial schema: shops, services, queue, bookings, staff, ads

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID


# revision identifiers, used by Alembic.
revision: str = '0001_initial'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id(name: str) -> sa.Column:
    return sa.Column(name, UUID(as_uuid=True), primary_key=True)


def _fk(name: str, target: str, ondelete: str = "CASCADE", nullable: bool = False) -> sa.Column:
    return sa.Column(name, UUID(as_uuid=True), sa.ForeignKey(target, ondelete=ondelete), nullable=nullable)


def _created_at() -> sa.Column:
    return sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False)


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'shops',
        _id('shop_id'),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('suburb', sa.String(), nullable=True),
        sa.Column('tv_left_percent', sa.Integer(), nullable=False, server_default='70'),
        sa.Column('tv_ad_rotation_seconds', sa.Integer(), nullable=False, server_default='10'),
        _created_at(),
    )

    op.create_table(
        'shop_hours',
        _id('shop_hours_id'),
        _fk('shop_id', 'shops.shop_id'),
        sa.Column('day_of_week', sa.SmallInteger(), nullable=False),
        sa.Column('open_time', sa.Time(), nullable=True),
        sa.Column('close_time', sa.Time(), nullable=True),
        sa.Column('is_closed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.UniqueConstraint('shop_id', 'day_of_week', name='uq_shop_hours_shop_day'),
    )
    op.create_index('ix_shop_hours_shop_id', 'shop_hours', ['shop_id'])

    op.create_table(
        'services',
        _id('service_id'),
        _fk('shop_id', 'shops.shop_id'),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), nullable=False),
        sa.Column('slack_minutes', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('price', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        _created_at(),
        sa.CheckConstraint('duration_minutes > 0', name='ck_services_duration_positive'),
    )
    op.create_index('ix_services_shop_id', 'services', ['shop_id'])

    op.create_table(
        'customers',
        _id('customer_id'),
        sa.Column('first_name', sa.String(), nullable=False),
        sa.Column('last_name', sa.String(), nullable=False),
        sa.Column('phone', sa.String(), nullable=False),
        _created_at(),
    )
    op.create_index('ix_customers_phone', 'customers', ['phone'], unique=True)

    op.create_table(
        'queue_entries',
        _id('queue_entry_id'),
        _fk('shop_id', 'shops.shop_id'),
        _fk('customer_id', 'customers.customer_id'),
        _fk('service_id', 'services.service_id', ondelete='SET NULL', nullable=True),
        sa.Column('status', sa.String(length=9), nullable=False, server_default='queued'),
        _created_at(),
        sa.Column('checked_in_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_queue_entries_shop_status_created', 'queue_entries', ['shop_id', 'status', 'created_at'])

    op.create_table(
        'bookings',
        _id('booking_id'),
        _fk('shop_id', 'shops.shop_id'),
        _fk('service_id', 'services.service_id', ondelete='SET NULL', nullable=True),
        _fk('customer_id', 'customers.customer_id'),
        sa.Column('start_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('status', sa.String(length=9), nullable=False, server_default='booked'),
        _created_at(),
        sa.CheckConstraint('end_at > start_at', name='ck_bookings_end_after_start'),
    )
    op.create_index('ix_bookings_shop_start', 'bookings', ['shop_id', 'start_at'])

    op.create_table(
        'employees',
        _id('employee_id'),
        _fk('shop_id', 'shops.shop_id'),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('role', sa.String(), nullable=False, server_default='staff'),
        sa.Column('pin_hash', sa.String(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        _created_at(),
    )
    op.create_index('ix_employees_shop_id', 'employees', ['shop_id'])

    op.create_table(
        'employee_attendance',
        _id('attendance_id'),
        _fk('shop_id', 'shops.shop_id'),
        _fk('employee_id', 'employees.employee_id'),
        sa.Column('clock_in_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('clock_out_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_employee_attendance_employee_id', 'employee_attendance', ['employee_id'])

    op.create_table(
        'service_sessions',
        _id('service_session_id'),
        _fk('shop_id', 'shops.shop_id'),
        _fk('employee_id', 'employees.employee_id'),
        _fk('queue_entry_id', 'queue_entries.queue_entry_id', ondelete='SET NULL', nullable=True),
        _fk('booking_id', 'bookings.booking_id', ondelete='SET NULL', nullable=True),
        sa.Column('started_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('finished_at', sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint(
            'queue_entry_id IS NOT NULL OR booking_id IS NOT NULL',
            name='ck_service_sessions_target',
        ),
    )
    op.create_index('ix_service_sessions_employee_id', 'service_sessions', ['employee_id'])

    op.create_table(
        'ads',
        _id('ad_id'),
        _fk('shop_id', 'shops.shop_id'),
        sa.Column('title', sa.String(), nullable=True),
        sa.Column('image_url', sa.String(), nullable=True),
        sa.Column('video_url', sa.String(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        _created_at(),
    )
    op.create_index('ix_ads_shop_id', 'ads', ['shop_id'])

    # No two booked appointments of a shop may overlap on [start_at, end_at).
    # This is the authoritative double-booking guard; the API re-check only
    # narrows the window.
    if op.get_bind().dialect.name == 'postgresql':
        op.execute('CREATE EXTENSION IF NOT EXISTS btree_gist')
        op.execute(
            """
            ALTER TABLE bookings
            ADD CONSTRAINT ex_bookings_no_overlap
            EXCLUDE USING gist (
                shop_id WITH =,
                tstzrange(start_at, end_at, '[)') WITH &&
            )
            WHERE (status = 'booked')
            """
        )


def downgrade() -> None:
    """Downgrade schema."""
    for table in (
        'ads',
        'service_sessions',
        'employee_attendance',
        'employees',
        'bookings',
        'queue_entries',
        'customers',
        'services',
        'shop_hours',
        'shops',
    ):
        op.drop_table(table)
