"""0001 initial schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '0001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade():
    op.create_table(
        'product',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=128), nullable=False),
        sa.Column('category', sa.String(length=64), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price', sa.Numeric(12, 2), nullable=False),
        *_timestamps(),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_product_name', 'product', ['name'])

    op.create_table(
        'raw_material',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=128), nullable=False),
        sa.Column('unit', sa.String(length=32), nullable=False),
        sa.Column('stock_quantity', sa.Numeric(14, 3), nullable=False),
        sa.Column('reorder_level', sa.Numeric(14, 3), nullable=False),
        *_timestamps(),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint('stock_quantity >= 0', name='ck_raw_material_stock_non_negative'),
        sa.CheckConstraint('reorder_level >= 0', name='ck_raw_material_reorder_non_negative'),
    )
    op.create_index('ix_raw_material_name', 'raw_material', ['name'], unique=True)

    op.create_table(
        'client',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=128), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=32), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        *_timestamps(),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_client_name', 'client', ['name'])

    op.create_table(
        'vendor',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=128), nullable=False),
        sa.Column('contact', sa.String(length=255), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_vendor_name', 'vendor', ['name'])

    op.create_table(
        'recipe',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('product_id', sa.Integer(), sa.ForeignKey('product.id'), nullable=False),
        sa.Column('yield_quantity', sa.Integer(), nullable=False),
        sa.Column('time_required_mins', sa.Integer(), nullable=False),
        sa.Column('instructions', sa.Text(), nullable=True),
        *_timestamps(),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint('yield_quantity >= 1', name='ck_recipe_yield_positive'),
        sa.CheckConstraint('time_required_mins >= 0', name='ck_recipe_time_non_negative'),
    )
    op.create_index('ix_recipe_product_id', 'recipe', ['product_id'])

    op.create_table(
        'recipe_ingredient',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('recipe_id', sa.Integer(), sa.ForeignKey('recipe.id', ondelete='CASCADE'), nullable=False),
        sa.Column('raw_material_id', sa.Integer(), sa.ForeignKey('raw_material.id'), nullable=False),
        sa.Column('quantity', sa.Numeric(14, 3), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('recipe_id', 'raw_material_id', name='_recipe_material_uc'),
        sa.CheckConstraint('quantity > 0', name='ck_recipe_ingredient_quantity_positive'),
    )
    op.create_index('ix_recipe_ingredient_recipe_id', 'recipe_ingredient', ['recipe_id'])
    op.create_index('ix_recipe_ingredient_raw_material_id', 'recipe_ingredient', ['raw_material_id'])

    op.create_table(
        'production_log',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('product_id', sa.Integer(), sa.ForeignKey('product.id'), nullable=False),
        sa.Column('recipe_id', sa.Integer(), sa.ForeignKey('recipe.id', ondelete='SET NULL'), nullable=True),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('time_spent_mins', sa.Integer(), nullable=True),
        sa.Column('operator_notes', sa.Text(), nullable=True),
        sa.Column('production_cost', sa.Numeric(12, 2), nullable=True),
        sa.Column('production_date', sa.Date(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_production_log_product_id', 'production_log', ['product_id'])
    op.create_index('ix_production_log_recipe_id', 'production_log', ['recipe_id'])
    op.create_index('ix_production_log_production_date', 'production_log', ['production_date'])

    op.create_table(
        'production_log_material',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('production_log_id', sa.Integer(),
                  sa.ForeignKey('production_log.id', ondelete='CASCADE'), nullable=False),
        sa.Column('raw_material_id', sa.Integer(), sa.ForeignKey('raw_material.id'), nullable=False),
        sa.Column('quantity_used', sa.Numeric(14, 3), nullable=False),
        sa.Column('cost_per_unit', sa.Numeric(12, 2), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_production_log_material_production_log_id', 'production_log_material', ['production_log_id'])
    op.create_index('ix_production_log_material_raw_material_id', 'production_log_material', ['raw_material_id'])

    op.create_table(
        'loss_log',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('raw_material_id', sa.Integer(), sa.ForeignKey('raw_material.id'), nullable=True),
        sa.Column('product_id', sa.Integer(), sa.ForeignKey('product.id'), nullable=True),
        sa.Column('quantity_lost', sa.Numeric(14, 3), nullable=False),
        sa.Column('loss_reason', sa.Text(), nullable=True),
        sa.Column('estimated_cost', sa.Numeric(12, 2), nullable=True),
        sa.Column('loss_date', sa.Date(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_loss_log_raw_material_id', 'loss_log', ['raw_material_id'])
    op.create_index('ix_loss_log_product_id', 'loss_log', ['product_id'])

    op.create_table(
        'client_order',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('client_id', sa.Integer(), sa.ForeignKey('client.id'), nullable=False),
        sa.Column('order_date', sa.Date(), nullable=False),
        sa.Column('status', sa.String(length=32), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('total_amount', sa.Numeric(12, 2), nullable=False),
        *_timestamps(),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_client_order_client_id', 'client_order', ['client_id'])
    op.create_index('ix_client_order_status', 'client_order', ['status'])

    op.create_table(
        'order_item',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('order_id', sa.Integer(), sa.ForeignKey('client_order.id', ondelete='CASCADE'), nullable=False),
        sa.Column('product_id', sa.Integer(), sa.ForeignKey('product.id'), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('unit_price', sa.Numeric(12, 2), nullable=False),
        sa.Column('total_price', sa.Numeric(12, 2), nullable=False),
    )
    op.create_index('ix_order_item_order_id', 'order_item', ['order_id'])

    op.create_table(
        'grn',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('grn_number', sa.String(length=32), nullable=False),
        sa.Column('vendor_id', sa.Integer(), sa.ForeignKey('vendor.id'), nullable=False),
        sa.Column('grn_date', sa.Date(), nullable=False),
        sa.Column('total_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('received_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_grn_grn_number', 'grn', ['grn_number'], unique=True)
    op.create_index('ix_grn_vendor_id', 'grn', ['vendor_id'])
    op.create_index('ix_grn_grn_date', 'grn', ['grn_date'])

    op.create_table(
        'grn_item',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('grn_id', sa.Integer(), sa.ForeignKey('grn.id', ondelete='CASCADE'), nullable=False),
        sa.Column('raw_material_id', sa.Integer(), sa.ForeignKey('raw_material.id'), nullable=False),
        sa.Column('expected_quantity', sa.Numeric(14, 3), nullable=False),
        sa.Column('received_quantity', sa.Numeric(14, 3), nullable=False),
        sa.Column('unit_price', sa.Numeric(12, 2), nullable=False),
        sa.Column('total_price', sa.Numeric(12, 2), nullable=False),
    )
    op.create_index('ix_grn_item_grn_id', 'grn_item', ['grn_id'])
    op.create_index('ix_grn_item_raw_material_id', 'grn_item', ['raw_material_id'])

    op.create_table(
        'discrepancy',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('grn_id', sa.Integer(), sa.ForeignKey('grn.id', ondelete='CASCADE'), nullable=False),
        sa.Column('raw_material_id', sa.Integer(), sa.ForeignKey('raw_material.id'), nullable=False),
        sa.Column('expected_quantity', sa.Numeric(14, 3), nullable=False),
        sa.Column('received_quantity', sa.Numeric(14, 3), nullable=False),
        sa.Column('discrepancy_quantity', sa.Numeric(14, 3), nullable=False),
        sa.Column('discrepancy_type', sa.String(length=16), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_discrepancy_grn_id', 'discrepancy', ['grn_id'])
    op.create_index('ix_discrepancy_discrepancy_type', 'discrepancy', ['discrepancy_type'])

    op.create_table(
        'transport_log',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('vehicle_no', sa.String(length=32), nullable=False),
        sa.Column('driver_name', sa.String(length=128), nullable=True),
        sa.Column('cost', sa.Numeric(12, 2), nullable=False),
        sa.Column('transport_date', sa.Date(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_transport_log_transport_date', 'transport_log', ['transport_date'])

    op.create_table(
        'transport_delivery',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('transport_log_id', sa.Integer(),
                  sa.ForeignKey('transport_log.id', ondelete='CASCADE'), nullable=False),
        sa.Column('client_id', sa.Integer(), sa.ForeignKey('client.id'), nullable=False),
        sa.Column('delivery_address', sa.Text(), nullable=True),
        sa.Column('delivery_status', sa.String(length=16), nullable=False),
        sa.UniqueConstraint('transport_log_id', 'client_id', name='_transport_client_uc'),
    )
    op.create_index('ix_transport_delivery_transport_log_id', 'transport_delivery', ['transport_log_id'])
    op.create_index('ix_transport_delivery_client_id', 'transport_delivery', ['client_id'])


def downgrade():
    for table in (
        'transport_delivery',
        'transport_log',
        'discrepancy',
        'grn_item',
        'grn',
        'order_item',
        'client_order',
        'loss_log',
        'production_log_material',
        'production_log',
        'recipe_ingredient',
        'recipe',
        'vendor',
        'client',
        'raw_material',
        'product',
    ):
        op.drop_table(table)
