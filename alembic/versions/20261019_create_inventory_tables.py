"""create_inventory_tables

Revision ID: 20261019_inventory
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = '20261019_inventory'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def table_exists(table_name):
    """Check if a table exists in the database"""
    bind = op.get_bind()
    inspector = inspect(bind)
    return table_name in inspector.get_table_names()


def upgrade():
    # 1. Stores (venues)
    if not table_exists('stores'):
        op.create_table(
            'stores',
            sa.Column('id', sa.String(), primary_key=True),
            sa.Column('store_id', sa.String(), nullable=False, unique=True),
            sa.Column('name', sa.String(), nullable=False),
            sa.Column('address', sa.Text(), nullable=True),
            sa.Column('contact_name', sa.String(), nullable=True),
            sa.Column('contact_phone', sa.String(), nullable=True),
            sa.Column('contact_email', sa.String(), nullable=True),
            sa.Column('access_notes', sa.Text(), nullable=True),
            sa.Column('notes', sa.Text(), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=True),
            sa.Column('updated_at', sa.DateTime(), nullable=True),
        )

    # 2. Machines
    if not table_exists('machines'):
        op.create_table(
            'machines',
            sa.Column('id', sa.String(), primary_key=True),
            sa.Column('machine_id', sa.String(), nullable=False, unique=True),
            sa.Column('display_name', sa.String(), nullable=True),
            sa.Column('gambino_machine_id', sa.String(), nullable=True),
            sa.Column('serial_number', sa.String(), nullable=True),
            sa.Column('manufacturer', sa.String(), nullable=True),
            sa.Column('model', sa.String(), nullable=True),
            sa.Column('purchase_date', sa.Date(), nullable=True),
            sa.Column('purchase_price', sa.Numeric(12, 2), nullable=True),
            sa.Column('rom_version', sa.String(), nullable=True),
            sa.Column('software_version', sa.String(), nullable=True),
            sa.Column('dip_switch_config', sa.Text(), nullable=True),
            sa.Column('credentials_encrypted', sa.Text(), nullable=True),
            sa.Column('current_location', sa.String(), nullable=False, server_default='warehouse'),
            sa.Column('store_id', sa.String(), sa.ForeignKey('stores.id', ondelete='SET NULL'), nullable=True),
            sa.Column('hub_id', sa.String(), nullable=True),
            sa.Column('status', sa.String(20), nullable=False, server_default='storage'),
            sa.Column('game_type', sa.String(), nullable=True),
            sa.Column('game_title', sa.String(), nullable=True),
            sa.Column('notes', sa.Text(), nullable=True),
            sa.Column('qr_token', sa.String(), nullable=True, unique=True),
            sa.Column('qr_generated_at', sa.DateTime(), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=True),
            sa.Column('updated_at', sa.DateTime(), nullable=True),
        )
        op.create_index('idx_machines_store', 'machines', ['store_id'])
        op.create_index('idx_machines_hub', 'machines', ['hub_id'])
        op.create_index('idx_machines_status', 'machines', ['status'])

    # 3. Maintenance logs
    if not table_exists('maintenance_logs'):
        op.create_table(
            'maintenance_logs',
            sa.Column('id', sa.String(), primary_key=True),
            sa.Column('machine_id', sa.String(), sa.ForeignKey('machines.id', ondelete='CASCADE'), nullable=False),
            sa.Column('date', sa.DateTime(), nullable=False),
            sa.Column('technician', sa.String(), nullable=False),
            sa.Column('type', sa.String(20), nullable=False),
            sa.Column('description', sa.Text(), nullable=False),
            sa.Column('parts_replaced', sa.Text(), nullable=True),
            sa.Column('cost', sa.Numeric(12, 2), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=True),
            sa.Column('updated_at', sa.DateTime(), nullable=True),
        )
        op.create_index('idx_maintenance_machine', 'maintenance_logs', ['machine_id'])
        op.create_index('idx_maintenance_date', 'maintenance_logs', ['date'])

    # 4. Asset tags (pre-printed QR stickers)
    if not table_exists('asset_tags'):
        op.create_table(
            'asset_tags',
            sa.Column('id', sa.String(), primary_key=True),
            sa.Column('token', sa.String(), nullable=False),
            sa.Column('status', sa.String(20), nullable=False, server_default='unlinked'),
            sa.Column('machine_id', sa.String(), sa.ForeignKey('machines.id', ondelete='SET NULL'), nullable=True, unique=True),
            sa.Column('created_at', sa.DateTime(), nullable=True),
            sa.Column('linked_at', sa.DateTime(), nullable=True),
            sa.CheckConstraint(
                "(status = 'linked' AND machine_id IS NOT NULL) OR "
                "(status = 'unlinked' AND machine_id IS NULL)",
                name='ck_asset_tags_link_state',
            ),
        )
        op.create_index('ix_asset_tags_token', 'asset_tags', ['token'], unique=True)


def downgrade():
    op.drop_table('asset_tags')
    op.drop_table('maintenance_logs')
    op.drop_table('machines')
    op.drop_table('stores')
