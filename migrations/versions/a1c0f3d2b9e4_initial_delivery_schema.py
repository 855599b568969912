"""initial delivery schema

Revision ID: a1c0f3d2b9e4
Revises: 
Create Date: 2026-10-19 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'a1c0f3d2b9e4'
down_revision = None
branch_labels = None
depends_on = None

GROCERY_CATEGORIES = ('Fruits', 'Vegetables', 'Dairy', 'Meat', 'Bakery', 'Snacks',
                      'Beverages', 'Pantry', 'Frozen', 'Household')
GROCERY_UNITS = ('kg', 'gram', 'liter', 'piece', 'pack', 'box')


def upgrade():
    op.create_table(
        'roles',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=50), nullable=False, unique=True),
        sa.Column('description', sa.String(length=255), nullable=True),
    )

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=120), nullable=True),
        sa.Column('username', sa.String(length=120), nullable=False),
        sa.Column('email', sa.String(length=120), nullable=True, unique=True),
        sa.Column('mobile', sa.String(length=30), nullable=True, unique=True),
        sa.Column('password', sa.String(length=255), nullable=True),
        sa.Column('role_id', sa.Integer(), sa.ForeignKey('roles.id'), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True)

    op.create_table(
        'restaurants',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('mongo_id', sa.String(length=40), nullable=True, unique=True),
        sa.Column('name_en', sa.String(length=150), nullable=False),
        sa.Column('name_ar', sa.String(length=150), nullable=True),
        sa.Column('address', sa.String(length=255), nullable=True),
        sa.Column('logo_url', sa.String(length=500), nullable=True),
        sa.Column('latitude', sa.Float(), nullable=True),
        sa.Column('longitude', sa.Float(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_restaurants_name_en', 'restaurants', ['name_en'])

    op.create_table(
        'meals',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('mongo_id', sa.String(length=40), nullable=True, unique=True),
        sa.Column('restaurant_id', sa.Integer(), sa.ForeignKey('restaurants.id', ondelete='SET NULL'), nullable=True),
        sa.Column('name_en', sa.String(length=150), nullable=False),
        sa.Column('name_ar', sa.String(length=150), nullable=True),
        sa.Column('price', sa.Numeric(12, 3), nullable=False, server_default='0'),
        sa.Column('offer', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('period', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('cuisine', sa.String(length=80), nullable=True),
        sa.Column('image_url', sa.String(length=500), nullable=True),
        sa.Column('details_en', sa.Text(), nullable=True),
        sa.Column('details_ar', sa.Text(), nullable=True),
        sa.Column('address', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_meals_restaurant_id', 'meals', ['restaurant_id'])
    op.create_index('ix_meals_offer', 'meals', ['offer'])

    op.create_table(
        'orders',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('mongo_id', sa.String(length=40), nullable=True, unique=True),
        sa.Column('restaurant_id', sa.Integer(), sa.ForeignKey('restaurants.id', ondelete='SET NULL'), nullable=True),
        sa.Column('customer_name', sa.String(length=120), nullable=True),
        sa.Column('customer_mobile', sa.String(length=30), nullable=True),
        sa.Column('customer_email', sa.String(length=120), nullable=True),
        sa.Column('city', sa.String(length=80), nullable=True),
        sa.Column('street', sa.String(length=80), nullable=True),
        sa.Column('building', sa.String(length=40), nullable=True),
        sa.Column('apt_no', sa.String(length=20), nullable=True),
        sa.Column('floor', sa.String(length=20), nullable=True),
        sa.Column('zone', sa.String(length=20), nullable=True),
        sa.Column('address_note', sa.Text(), nullable=True),
        sa.Column('latitude', sa.Float(), nullable=True),
        sa.Column('longitude', sa.Float(), nullable=True),
        sa.Column('total_amount', sa.Numeric(12, 3), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='Pending'),
        sa.Column('payment_status', sa.String(length=20), nullable=True),
        sa.Column('gateway_invoice_id', sa.String(length=64), nullable=True),
        sa.Column('source', sa.String(length=20), nullable=False, server_default='web'),
        sa.Column('delivery_person_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('delivery_person_name', sa.String(length=120), nullable=False, server_default=''),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_orders_status', 'orders', ['status'])
    op.create_index('ix_orders_delivery_person_id', 'orders', ['delivery_person_id'])
    op.create_index('ix_orders_created_at', 'orders', ['created_at'])

    op.create_table(
        'order_items',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('order_id', sa.Integer(), sa.ForeignKey('orders.id', ondelete='CASCADE'), nullable=False),
        sa.Column('meal_id', sa.Integer(), sa.ForeignKey('meals.id', ondelete='SET NULL'), nullable=True),
        sa.Column('name', sa.String(length=150), nullable=False, server_default='Item'),
        sa.Column('price', sa.Numeric(12, 3), nullable=False, server_default='0'),
        sa.Column('quantity', sa.Integer(), nullable=False, server_default='1'),
    )
    op.create_index('ix_order_items_order_id', 'order_items', ['order_id'])

    op.create_table(
        'notifications',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('order_id', sa.Integer(), sa.ForeignKey('orders.id', ondelete='CASCADE'), nullable=False, unique=True),
        sa.Column('message', sa.String(length=255), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='unpicked'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        'payments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('order_id', sa.Integer(), sa.ForeignKey('orders.id', ondelete='CASCADE'), nullable=False),
        sa.Column('provider', sa.String(length=30), nullable=False, server_default='myfatoorah'),
        sa.Column('invoice_id', sa.String(length=64), nullable=True),
        sa.Column('payment_id', sa.String(length=64), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('raw_response', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_payments_order_id', 'payments', ['order_id'])

    op.create_table(
        'customers',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('phone', sa.String(length=30), nullable=False, unique=True),
        sa.Column('city', sa.String(length=80), nullable=True),
        sa.Column('street', sa.String(length=80), nullable=True),
        sa.Column('building', sa.String(length=40), nullable=True),
        sa.Column('floor', sa.String(length=20), nullable=True),
        sa.Column('zone', sa.String(length=20), nullable=True),
        sa.Column('apt_no', sa.String(length=20), nullable=True),
        sa.Column('address_note', sa.Text(), nullable=True),
        sa.Column('latitude', sa.Float(), nullable=True),
        sa.Column('longitude', sa.Float(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        'grocery_items',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name_en', sa.String(length=150), nullable=False),
        sa.Column('name_ar', sa.String(length=150), nullable=False),
        sa.Column('description_en', sa.Text(), nullable=True),
        sa.Column('description_ar', sa.Text(), nullable=True),
        sa.Column('price', sa.Numeric(12, 3), nullable=False),
        sa.Column('offer', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('offer_price', sa.Numeric(12, 3), nullable=True),
        sa.Column('image_url', sa.String(length=500), nullable=True),
        sa.Column('category', sa.Enum(*GROCERY_CATEGORIES, name='grocery_category'), nullable=False),
        sa.Column('supermarket_id', sa.Integer(), sa.ForeignKey('restaurants.id'), nullable=False),
        sa.Column('unit', sa.Enum(*GROCERY_UNITS, name='grocery_unit'), nullable=False, server_default='piece'),
        sa.Column('stock_quantity', sa.Integer(), nullable=False, server_default='100'),
        sa.Column('available', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_grocery_items_supermarket_id', 'grocery_items', ['supermarket_id'])


def downgrade():
    op.drop_index('ix_grocery_items_supermarket_id', table_name='grocery_items')
    op.drop_table('grocery_items')
    op.drop_table('customers')
    op.drop_index('ix_payments_order_id', table_name='payments')
    op.drop_table('payments')
    op.drop_table('notifications')
    op.drop_index('ix_order_items_order_id', table_name='order_items')
    op.drop_table('order_items')
    op.drop_index('ix_orders_created_at', table_name='orders')
    op.drop_index('ix_orders_delivery_person_id', table_name='orders')
    op.drop_index('ix_orders_status', table_name='orders')
    op.drop_table('orders')
    op.drop_index('ix_meals_offer', table_name='meals')
    op.drop_index('ix_meals_restaurant_id', table_name='meals')
    op.drop_table('meals')
    op.drop_index('ix_restaurants_name_en', table_name='restaurants')
    op.drop_table('restaurants')
    op.drop_index('ix_users_username', table_name='users')
    op.drop_table('users')
    op.drop_table('roles')
    sa.Enum(name='grocery_unit').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='grocery_category').drop(op.get_bind(), checkfirst=True)
