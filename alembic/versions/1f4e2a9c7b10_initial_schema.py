"""initial_schema

Revision ID: 1f4e2a9c7b10
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = '1f4e2a9c7b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ASSET_STATES = ('InStorage', 'Assigned', 'UnderRepair', 'Decommissioned')


def _timestamps(updated: bool = True) -> list:
    cols = [sa.Column('created_at', sa.DateTime(timezone=True), nullable=False)]
    if updated:
        cols.append(sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False))
    return cols


def upgrade() -> None:
    op.create_table(
        'brands',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=128), nullable=False),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_brands_id'), 'brands', ['id'], unique=False)
    op.create_index(op.f('ix_brands_name'), 'brands', ['name'], unique=True)

    op.create_table(
        'asset_models',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('category', sa.String(length=64), nullable=True),
        sa.Column('brand_id', sa.Integer(), nullable=False),
        *_timestamps(updated=False),
        sa.ForeignKeyConstraint(['brand_id'], ['brands.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('brand_id', 'name', name='uq_brand_model_name'),
    )
    op.create_index(op.f('ix_asset_models_id'), 'asset_models', ['id'], unique=False)
    op.create_index(op.f('ix_asset_models_brand_id'), 'asset_models', ['brand_id'], unique=False)

    # manager_id FK is added once users exists
    op.create_table(
        'management_areas',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('is_general', sa.Boolean(), nullable=False),
        sa.Column('manager_id', sa.Integer(), nullable=True),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_management_areas_id'), 'management_areas', ['id'], unique=False)
    op.create_index(op.f('ix_management_areas_name'), 'management_areas', ['name'], unique=True)

    op.create_table(
        'departments',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('cost_center', sa.String(length=64), nullable=True),
        sa.Column('management_area_id', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['management_area_id'], ['management_areas.id']),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True,
    )
    op.create_index(op.f('ix_departments_id'), 'departments', ['id'], unique=False)
    op.create_index(op.f('ix_departments_name'), 'departments', ['name'], unique=True)
    op.create_index(op.f('ix_departments_management_area_id'), 'departments', ['management_area_id'], unique=False)

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('first_name', sa.String(length=128), nullable=False),
        sa.Column('last_name', sa.String(length=128), nullable=False),
        sa.Column('employee_number', sa.Integer(), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('position', sa.String(length=255), nullable=True),
        sa.Column('extension', sa.String(length=32), nullable=True),
        sa.Column('department_id', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['department_id'], ['departments.id']),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True,
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    op.create_index(op.f('ix_users_employee_number'), 'users', ['employee_number'], unique=True)
    op.create_index(op.f('ix_users_department_id'), 'users', ['department_id'], unique=False)

    with op.batch_alter_table('management_areas') as batch_op:
        batch_op.create_foreign_key('fk_management_areas_manager_id', 'users', ['manager_id'], ['id'])

    for table, extra in (
        ('computers', [
            sa.Column('hostname', sa.String(length=128), nullable=True),
            sa.Column('processor', sa.String(length=128), nullable=True),
            sa.Column('ram', sa.String(length=64), nullable=True),
            sa.Column('storage', sa.String(length=64), nullable=True),
            sa.Column('operating_system', sa.String(length=128), nullable=True),
            sa.Column('location', sa.String(length=255), nullable=True),
            sa.Column('purchase_date', sa.Date(), nullable=True),
            sa.Column('warranty_until', sa.Date(), nullable=True),
        ]),
        ('devices', [
            sa.Column('asset_tag', sa.String(length=64), nullable=True),
            sa.Column('mac_address', sa.String(length=32), nullable=True),
            sa.Column('location', sa.String(length=255), nullable=True),
            sa.Column('purchase_date', sa.Date(), nullable=True),
        ]),
    ):
        op.create_table(
            table,
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('serial', sa.String(length=128), nullable=False),
            sa.Column('model_id', sa.Integer(), nullable=False),
            *extra,
            sa.Column('notes', sa.String(length=2000), nullable=True),
            sa.Column('state', sa.Enum(*ASSET_STATES, name='assetstate'), nullable=False),
            sa.Column('held_by_user_id', sa.Integer(), nullable=True),
            sa.Column('held_by_department_id', sa.Integer(), nullable=True),
            sa.Column('version', sa.Integer(), nullable=False),
            *_timestamps(),
            sa.CheckConstraint(
                'held_by_user_id IS NULL OR held_by_department_id IS NULL',
                name=f'ck_{table}_single_holder',
            ),
            sa.ForeignKeyConstraint(['model_id'], ['asset_models.id']),
            sa.ForeignKeyConstraint(['held_by_user_id'], ['users.id']),
            sa.ForeignKeyConstraint(['held_by_department_id'], ['departments.id']),
            sa.PrimaryKeyConstraint('id'),
            sqlite_autoincrement=True,
        )
        op.create_index(op.f(f'ix_{table}_id'), table, ['id'], unique=False)
        op.create_index(op.f(f'ix_{table}_serial'), table, ['serial'], unique=True)
        op.create_index(op.f(f'ix_{table}_model_id'), table, ['model_id'], unique=False)
        op.create_index(op.f(f'ix_{table}_state'), table, ['state'], unique=False)
        op.create_index(op.f(f'ix_{table}_held_by_user_id'), table, ['held_by_user_id'], unique=False)
        op.create_index(op.f(f'ix_{table}_held_by_department_id'), table, ['held_by_department_id'], unique=False)

    op.create_table(
        'phone_lines',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('number', sa.String(length=32), nullable=False),
        sa.Column('provider', sa.String(length=128), nullable=False),
        sa.Column('imei', sa.String(length=32), nullable=True),
        sa.Column('plan', sa.String(length=128), nullable=True),
        sa.Column('notes', sa.String(length=2000), nullable=True),
        sa.Column('state', sa.Enum(*ASSET_STATES, name='assetstate'), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True,
    )
    op.create_index(op.f('ix_phone_lines_id'), 'phone_lines', ['id'], unique=False)
    op.create_index(op.f('ix_phone_lines_number'), 'phone_lines', ['number'], unique=True)
    op.create_index(op.f('ix_phone_lines_provider'), 'phone_lines', ['provider'], unique=False)
    op.create_index(op.f('ix_phone_lines_state'), 'phone_lines', ['state'], unique=False)

    op.create_table(
        'assignment_records',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('asset_type', sa.Enum('Computer', 'Device', 'PhoneLine', name='assettype'), nullable=False),
        sa.Column('asset_id', sa.Integer(), nullable=False),
        sa.Column('action_type', sa.Enum('Assignment', 'Return', name='actiontype'), nullable=False),
        sa.Column('target_type', sa.Enum('User', 'Department', name='targettype'), nullable=False),
        sa.Column('target_id', sa.Integer(), nullable=False),
        sa.Column('recorded_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('notes', sa.String(length=1000), nullable=True),
        sa.Column('manager_id', sa.Integer(), nullable=True),
        sa.Column('manager_name', sa.String(length=255), nullable=True),
        sa.Column('reason', sa.String(length=500), nullable=True),
        sa.Column('locality', sa.String(length=255), nullable=True),
        sa.Column('charger_model', sa.String(length=128), nullable=True),
        sa.Column('charger_serial', sa.String(length=128), nullable=True),
        sa.Column('idempotency_key', sa.String(length=64), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('idempotency_key'),
    )
    op.create_index(op.f('ix_assignment_records_id'), 'assignment_records', ['id'], unique=False)
    op.create_index(
        'ix_assignment_records_asset', 'assignment_records', ['asset_type', 'asset_id', 'recorded_at'], unique=False
    )
    op.create_index('ix_assignment_records_target', 'assignment_records', ['target_type', 'target_id'], unique=False)


def downgrade() -> None:
    op.drop_table('assignment_records')
    op.drop_table('phone_lines')
    op.drop_table('devices')
    op.drop_table('computers')
    with op.batch_alter_table('management_areas') as batch_op:
        batch_op.drop_constraint('fk_management_areas_manager_id', type_='foreignkey')
    op.drop_table('users')
    op.drop_table('departments')
    op.drop_table('management_areas')
    op.drop_table('asset_models')
    op.drop_table('brands')
