"""initial marketplace schema

Revision ID: 3c1d9e7a5b20
Revises:
Create Date: 2026-10-19 09:12:41.508113

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3c1d9e7a5b20'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    ]


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('first_name', sa.String(length=120), nullable=True),
        sa.Column('last_name', sa.String(length=120), nullable=True),
        sa.Column('profile_image_url', sa.String(length=1024), nullable=True),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=32), nullable=False, server_default='customer'),
        *_timestamps(),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'categories',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('name', sa.String(length=120), nullable=False, unique=True),
        sa.Column('slug', sa.String(length=140), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_categories_slug', 'categories', ['slug'], unique=True)

    op.create_table(
        'vendors',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('user_id', sa.String(length=36), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('category_id', sa.String(length=36), sa.ForeignKey('categories.id'), nullable=True),
        sa.Column('store_name', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('logo_url', sa.Text(), nullable=True),
        sa.Column('phone', sa.Text(), nullable=True),
        sa.Column('whatsapp', sa.Text(), nullable=True),
        sa.Column('email', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=16), nullable=False, server_default='pending'),
        *_timestamps(),
    )
    op.create_index('ix_vendors_user_id', 'vendors', ['user_id'], unique=True)
    op.create_index('ix_vendors_category_id', 'vendors', ['category_id'])
    op.create_index('ix_vendors_status', 'vendors', ['status'])
    op.create_index('ix_vendors_created_at', 'vendors', ['created_at'])

    op.create_table(
        'products',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('vendor_id', sa.String(length=36), sa.ForeignKey('vendors.id'), nullable=False),
        sa.Column('category_id', sa.String(length=36), sa.ForeignKey('categories.id'), nullable=True),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('image_url', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=16), nullable=False, server_default='active'),
        sa.Column('flag_reason', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_products_vendor_id', 'products', ['vendor_id'])
    op.create_index('ix_products_category_id', 'products', ['category_id'])
    op.create_index('ix_products_status', 'products', ['status'])
    op.create_index('ix_products_created_at', 'products', ['created_at'])

    op.create_table(
        'product_views',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('product_id', sa.String(length=36), sa.ForeignKey('products.id'), nullable=False),
        sa.Column('user_id', sa.String(length=36), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('ip_address', sa.Text(), nullable=True),
        sa.Column('user_agent', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_product_views_product_id', 'product_views', ['product_id'])
    op.create_index('ix_product_views_user_id', 'product_views', ['user_id'])
    op.create_index('ix_product_views_created_at', 'product_views', ['created_at'])

    op.create_table(
        'contact_clicks',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('vendor_id', sa.String(length=36), sa.ForeignKey('vendors.id'), nullable=False),
        sa.Column('contact_type', sa.Text(), nullable=False),
        sa.Column('user_id', sa.String(length=36), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('ip_address', sa.Text(), nullable=True),
        sa.Column('user_agent', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_contact_clicks_vendor_id', 'contact_clicks', ['vendor_id'])
    op.create_index('ix_contact_clicks_contact_type', 'contact_clicks', ['contact_type'])
    op.create_index('ix_contact_clicks_user_id', 'contact_clicks', ['user_id'])
    op.create_index('ix_contact_clicks_created_at', 'contact_clicks', ['created_at'])

    op.create_table(
        'listings',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('role', sa.String(length=16), nullable=False),
        sa.Column('vendor_name', sa.Text(), nullable=False),
        sa.Column('item_name', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('crop_type', sa.Text(), nullable=True),
        sa.Column('contact_phone', sa.Text(), nullable=False),
        sa.Column('contact_email', sa.Text(), nullable=False),
        sa.Column('image_url', sa.Text(), nullable=True),
        sa.Column('password', sa.Text(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_listings_role', 'listings', ['role'])
    op.create_index('ix_listings_crop_type', 'listings', ['crop_type'])
    op.create_index('ix_listings_created_at', 'listings', ['created_at'])

    op.create_table(
        'crop_info',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('body', sa.Text(), nullable=False),
        sa.Column('media_url', sa.Text(), nullable=True),
        sa.Column('tags', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_crop_info_created_at', 'crop_info', ['created_at'])

    op.create_table(
        'questions',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('body', sa.Text(), nullable=False),
        sa.Column('author_name', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_questions_created_at', 'questions', ['created_at'])

    op.create_table(
        'answers',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('question_id', sa.String(length=36), sa.ForeignKey('questions.id', ondelete='CASCADE'), nullable=False),
        sa.Column('body', sa.Text(), nullable=False),
        sa.Column('author_name', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_answers_question_id', 'answers', ['question_id'])
    op.create_index('ix_answers_created_at', 'answers', ['created_at'])


def downgrade():
    op.drop_table('answers')
    op.drop_table('questions')
    op.drop_table('crop_info')
    op.drop_table('listings')
    op.drop_table('contact_clicks')
    op.drop_table('product_views')
    op.drop_table('products')
    op.drop_table('vendors')
    op.drop_table('categories')
    op.drop_table('users')
