"""booking engine schema

Revision ID: 4c1f0a9d2b7e
Revises:
Create Date: 2026-10-19 09:12:44.301552

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '4c1f0a9d2b7e'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

EMPLOYEE_STATUS = ('ACTIVE', 'INACTIVE', 'DELETED')
EXCEPTION_TYPE = ('VACATION', 'SICK_LEAVE', 'BLOCKED', 'PERSONAL')
APPOINTMENT_STATUS = ('SCHEDULED', 'CONFIRMED', 'IN_PROGRESS', 'COMPLETED', 'CANCELLED', 'NO_SHOW')
APPOINTMENT_SOURCE = ('DIRECT', 'MARKETPLACE')


def upgrade() -> None:
    """Upgrade schema."""

    # 1. Tenant, staff and catalog
    op.create_table(
        'salons',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('timezone', sa.String(50), nullable=False, server_default='UTC'),
        sa.Column('cancellation_window_hours', sa.Integer(), nullable=False, server_default='24'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
    )

    op.create_table(
        'employees',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('salon_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('salons.id'), nullable=False),
        sa.Column('display_name', sa.String(200), nullable=False),
        sa.Column('status', sa.Enum(*EMPLOYEE_STATUS, name='employee_status'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
    )
    op.create_index('ix_employees_salon_id', 'employees', ['salon_id'])

    op.create_table(
        'service_variants',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('salon_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('salons.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), nullable=False),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.CheckConstraint('duration_minutes > 0', name='ck_service_variants_positive_duration'),
    )
    op.create_index('ix_service_variants_salon_id', 'service_variants', ['salon_id'])
    op.create_index('ix_service_variants_is_active', 'service_variants', ['is_active'])

    # 2. Schedules
    op.create_table(
        'weekly_schedules',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('salon_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('salons.id'), nullable=False),
        sa.Column('employee_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('employees.id'), nullable=False),
        sa.Column('day_of_week', sa.Integer(), nullable=False),
        sa.Column('start_time', sa.Time(), nullable=False),
        sa.Column('end_time', sa.Time(), nullable=False),
        sa.Column('is_working_day', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.UniqueConstraint('employee_id', 'day_of_week', name='uq_weekly_schedule_employee_day'),
    )
    op.create_index('ix_weekly_schedules_employee_id', 'weekly_schedules', ['employee_id'])

    op.create_table(
        'schedule_exceptions',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('salon_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('salons.id'), nullable=False),
        sa.Column('employee_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('employees.id'), nullable=False),
        sa.Column('start_at', sa.DateTime(), nullable=False),
        sa.Column('end_at', sa.DateTime(), nullable=False),
        sa.Column('reason', sa.String(), nullable=True),
        sa.Column('type', sa.Enum(*EXCEPTION_TYPE, name='schedule_exception_type'), nullable=False),
        sa.CheckConstraint('end_at > start_at', name='ck_schedule_exception_interval'),
    )
    op.create_index('ix_schedule_exceptions_employee_id', 'schedule_exceptions', ['employee_id'])

    # 3. Appointments
    op.create_table(
        'appointments',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('salon_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('salons.id'), nullable=False),
        sa.Column('client_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('employee_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('employees.id'), nullable=False),
        sa.Column('variant_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('service_variants.id'), nullable=False),
        sa.Column('start_at', sa.DateTime(), nullable=False),
        sa.Column('end_at', sa.DateTime(), nullable=False),
        sa.Column('notes', sa.String(500), nullable=True),
        sa.Column('status', sa.Enum(*APPOINTMENT_STATUS, name='appointment_status'), nullable=False),
        sa.Column('source', sa.Enum(*APPOINTMENT_SOURCE, name='appointment_source'), nullable=False),
        sa.Column('final_price', sa.Numeric(10, 2), nullable=True),
        sa.Column('commission_value', sa.Numeric(10, 2), nullable=True),
        sa.Column('cancellation_reason', sa.String(500), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.CheckConstraint('end_at > start_at', name='ck_appointment_interval'),
    )
    op.create_index('ix_appointments_salon_id', 'appointments', ['salon_id'])
    op.create_index('ix_appointments_employee_start', 'appointments', ['employee_id', 'start_at'])
    op.create_index('ix_appointments_status_end', 'appointments', ['status', 'end_at'])

    # 4. No two blocking appointments of one employee may share an instant.
    # start_at/end_at hold naive UTC, hence tsrange; '[)' lets back-to-back bookings touch.
    op.execute('CREATE EXTENSION IF NOT EXISTS btree_gist')
    op.execute(
        """
        ALTER TABLE appointments
        ADD CONSTRAINT ex_appointments_employee_no_overlap
        EXCLUDE USING gist (
            employee_id WITH =,
            tsrange(start_at, end_at, '[)') WITH &&
        )
        WHERE (status IN ('SCHEDULED', 'CONFIRMED', 'IN_PROGRESS'))
        """
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.execute('ALTER TABLE appointments DROP CONSTRAINT IF EXISTS ex_appointments_employee_no_overlap')

    op.drop_table('appointments')
    op.drop_table('schedule_exceptions')
    op.drop_table('weekly_schedules')
    op.drop_table('service_variants')
    op.drop_table('employees')
    op.drop_table('salons')

    for enum_name in ('appointment_source', 'appointment_status', 'schedule_exception_type', 'employee_status'):
        op.execute(f'DROP TYPE IF EXISTS {enum_name}')
