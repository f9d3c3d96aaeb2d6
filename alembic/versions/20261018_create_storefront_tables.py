"""create_storefront_tables

Revision ID: 20261018_storefront
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = '20261018_storefront'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def table_exists(table_name):
    """Check if a table exists in the database"""
    bind = op.get_bind()
    inspector = inspect(bind)
    return table_name in inspector.get_table_names()


def upgrade():
    # Databases created by the old Node service already have these tables
    if not table_exists('users'):
        op.create_table(
            'users',
            sa.Column('phone', sa.String(32), primary_key=True),
            sa.Column('name', sa.String(255), nullable=False),
            sa.Column('city', sa.String(255), nullable=True),
        )

    if not table_exists('products'):
        op.create_table(
            'products',
            sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column('name', sa.String(255), nullable=False),
            sa.Column('price', sa.Numeric(10, 2), nullable=False),
            sa.Column('description', sa.Text(), nullable=True),
            sa.Column('image_url', sa.String(512), nullable=True),
            sa.Column('category', sa.String(100), nullable=True),
            sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        )

    if not table_exists('orders'):
        op.create_table(
            'orders',
            sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column('user_phone', sa.String(32), sa.ForeignKey('users.phone'), nullable=False),
            sa.Column('total_amount', sa.Numeric(10, 2), nullable=False),
            sa.Column('status', sa.String(32), nullable=False, server_default='Processing'),
            sa.Column('payment_method', sa.String(64), nullable=False),
            sa.Column('shipping_address', sa.String(255), nullable=True),
            sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        )
        op.create_index('ix_orders_user_phone', 'orders', ['user_phone'])

    if not table_exists('order_items'):
        op.create_table(
            'order_items',
            sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column('order_id', sa.Integer(), sa.ForeignKey('orders.id'), nullable=False),
            sa.Column('product_name', sa.String(255), nullable=False),
            sa.Column('price', sa.Numeric(10, 2), nullable=False),
            sa.Column('quantity', sa.Integer(), nullable=False, server_default='1'),
        )
        op.create_index('ix_order_items_order_id', 'order_items', ['order_id'])


def downgrade():
    op.drop_index('ix_order_items_order_id', table_name='order_items')
    op.drop_table('order_items')
    op.drop_index('ix_orders_user_phone', table_name='orders')
    op.drop_table('orders')
    op.drop_table('products')
    op.drop_table('users')
