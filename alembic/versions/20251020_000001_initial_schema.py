"""Initial LandlordPro schema

Revision ID: 20251020_000001
Revises: None
Create Date: 2025-10-20

Creates users, properties, floors, locals, tenants, leases, payment modes,
payments, expenses and notifications. Every table except users and
notifications carries deleted_at for soft deletion.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20251020_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _lifecycle_columns():
    return [
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.Column('deleted_at', sa.DateTime(), nullable=True),
    ]


def upgrade() -> None:
    """Create all tables."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('full_name', sa.String(length=200), nullable=False),
        sa.Column('role', sa.Enum('admin', 'manager', 'employee', name='user_role'), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('avatar', sa.String(length=500), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'properties',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('location', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('number_of_floors', sa.Integer(), nullable=False),
        sa.Column('has_basement', sa.Boolean(), nullable=False),
        sa.Column('manager_id', sa.Integer(), nullable=True),
        *_lifecycle_columns(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['manager_id'], ['users.id'], name='fk_properties_manager_id', ondelete='SET NULL'),
    )
    op.create_index('ix_properties_manager_id', 'properties', ['manager_id'])
    op.create_index('ix_properties_deleted_at', 'properties', ['deleted_at'])

    op.create_table(
        'floors',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('level_number', sa.Integer(), nullable=False),
        *_lifecycle_columns(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['property_id'], ['properties.id'], name='fk_floors_property_id'),
        sa.UniqueConstraint('property_id', 'level_number', name='uq_floors_property_level'),
    )
    op.create_index('ix_floors_property_id', 'floors', ['property_id'])
    op.create_index('ix_floors_deleted_at', 'floors', ['deleted_at'])

    op.create_table(
        'locals',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('reference_code', sa.String(length=100), nullable=False),
        sa.Column(
            'status',
            sa.Enum('available', 'occupied', 'maintenance', name='local_status'),
            nullable=False,
        ),
        sa.Column('size_m2', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('rent_price', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('property_id', sa.Integer(), nullable=False),
        sa.Column('floor_id', sa.Integer(), nullable=False),
        *_lifecycle_columns(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['property_id'], ['properties.id'], name='fk_locals_property_id'),
        sa.ForeignKeyConstraint(['floor_id'], ['floors.id'], name='fk_locals_floor_id'),
    )
    op.create_index('ix_locals_status', 'locals', ['status'])
    op.create_index('ix_locals_property_id', 'locals', ['property_id'])
    op.create_index('ix_locals_floor_id', 'locals', ['floor_id'])
    op.create_index('ix_locals_deleted_at', 'locals', ['deleted_at'])

    op.create_table(
        'tenants',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('company_name', sa.String(length=255), nullable=True),
        sa.Column('tin_number', sa.String(length=100), nullable=True),
        *_lifecycle_columns(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_tenants_deleted_at', 'tenants', ['deleted_at'])

    op.create_table(
        'leases',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('reference', sa.String(length=100), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('lease_amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column(
            'status',
            sa.Enum('active', 'expired', 'cancelled', name='lease_status'),
            nullable=False,
        ),
        sa.Column('local_id', sa.Integer(), nullable=False),
        sa.Column('tenant_id', sa.Integer(), nullable=False),
        *_lifecycle_columns(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('reference', name='uq_leases_reference'),
        sa.ForeignKeyConstraint(['local_id'], ['locals.id'], name='fk_leases_local_id'),
        sa.ForeignKeyConstraint(['tenant_id'], ['tenants.id'], name='fk_leases_tenant_id'),
    )
    op.create_index('ix_leases_end_date', 'leases', ['end_date'])
    op.create_index('ix_leases_status', 'leases', ['status'])
    op.create_index('ix_leases_local_id', 'leases', ['local_id'])
    op.create_index('ix_leases_tenant_id', 'leases', ['tenant_id'])
    op.create_index('ix_leases_deleted_at', 'leases', ['deleted_at'])

    op.create_table(
        'payment_modes',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('code', sa.String(length=50), nullable=False),
        sa.Column('display_name', sa.String(length=100), nullable=False),
        sa.Column('requires_proof', sa.Boolean(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        *_lifecycle_columns(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('code', name='uq_payment_modes_code'),
    )
    op.create_index('ix_payment_modes_deleted_at', 'payment_modes', ['deleted_at'])

    op.create_table(
        'payments',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('invoice_number', sa.String(length=50), nullable=False),
        sa.Column('proof_url', sa.String(length=500), nullable=True),
        sa.Column('lease_id', sa.Integer(), nullable=False),
        sa.Column('payment_mode_id', sa.Integer(), nullable=False),
        *_lifecycle_columns(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('invoice_number', name='uq_payments_invoice_number'),
        sa.ForeignKeyConstraint(['lease_id'], ['leases.id'], name='fk_payments_lease_id'),
        sa.ForeignKeyConstraint(['payment_mode_id'], ['payment_modes.id'], name='fk_payments_payment_mode_id'),
    )
    op.create_index('ix_payments_end_date', 'payments', ['end_date'])
    op.create_index('ix_payments_lease_id', 'payments', ['lease_id'])
    op.create_index('ix_payments_deleted_at', 'payments', ['deleted_at'])

    op.create_table(
        'expenses',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('category', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=True),
        sa.Column('local_id', sa.Integer(), nullable=True),
        *_lifecycle_columns(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['property_id'], ['properties.id'], name='fk_expenses_property_id'),
        sa.ForeignKeyConstraint(['local_id'], ['locals.id'], name='fk_expenses_local_id'),
    )
    op.create_index('ix_expenses_category', 'expenses', ['category'])
    op.create_index('ix_expenses_property_id', 'expenses', ['property_id'])
    op.create_index('ix_expenses_local_id', 'expenses', ['local_id'])
    op.create_index('ix_expenses_deleted_at', 'expenses', ['deleted_at'])

    op.create_table(
        'notifications',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('type', sa.String(length=50), nullable=False),
        sa.Column('is_read', sa.Boolean(), nullable=False),
        sa.Column('lease_id', sa.Integer(), nullable=True),
        sa.Column('payment_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_notifications_user_id', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['lease_id'], ['leases.id'], name='fk_notifications_lease_id'),
        sa.ForeignKeyConstraint(['payment_id'], ['payments.id'], name='fk_notifications_payment_id'),
    )
    op.create_index('ix_notifications_user_id', 'notifications', ['user_id'])
    op.create_index('ix_notifications_type', 'notifications', ['type'])
    op.create_index('ix_notifications_lease_id', 'notifications', ['lease_id'])


def downgrade() -> None:
    """Drop every table, children first."""
    for table in (
        'notifications',
        'expenses',
        'payments',
        'payment_modes',
        'leases',
        'tenants',
        'locals',
        'floors',
        'properties',
        'users',
    ):
        op.drop_table(table)
