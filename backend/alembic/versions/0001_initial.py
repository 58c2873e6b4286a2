# alembic/versions/0001_initial.py
# initial schema: accounts, catalog, identity verification, booking aggregate
from alembic import op
import sqlalchemy as sa

revision = '0001_initial'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table('users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False, unique=True),
        sa.Column('phone', sa.String(length=32), nullable=True),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_users_email', 'users', ['email'])

    op.create_table('items',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('host_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price_per_day', sa.Integer(), nullable=False),
        sa.Column('deposit_per_unit', sa.Integer(), nullable=False),
        sa.Column('stock', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_items_host_id', 'items', ['host_id'])

    op.create_table('identity',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('document_url', sa.String(length=1024), nullable=False),
        sa.Column('verified', sa.Boolean(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('reason', sa.Text(), nullable=True),
        sa.Column('verified_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_identity_user_id', 'identity', ['user_id'])
    op.create_index('ix_identity_status', 'identity', ['status'])
    op.create_index('ix_identity_created_at', 'identity', ['created_at'])

    op.create_table('booking',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('host_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('identity_id', sa.Integer(), sa.ForeignKey('identity.id', ondelete='SET NULL'), nullable=True),
        sa.Column('identity_status', sa.String(length=20), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('locked_until', sa.DateTime(), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('total_days', sa.Integer(), nullable=False),
        sa.Column('delivery_type', sa.String(length=20), nullable=False),
        sa.Column('rental', sa.Integer(), nullable=False),
        sa.Column('deposit', sa.Integer(), nullable=False),
        sa.Column('discount', sa.Integer(), nullable=False),
        sa.Column('total', sa.Integer(), nullable=False),
        sa.Column('outstanding', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_booking_user_id', 'booking', ['user_id'])
    op.create_index('ix_booking_host_id', 'booking', ['host_id'])
    op.create_index('ix_booking_status', 'booking', ['status'])
    op.create_index('ix_booking_start_date', 'booking', ['start_date'])
    op.create_index('ix_booking_end_date', 'booking', ['end_date'])
    op.create_index('ix_booking_created_at', 'booking', ['created_at'])

    op.create_table('booking_item',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('booking_id', sa.Integer(), sa.ForeignKey('booking.id', ondelete='CASCADE'), nullable=False),
        sa.Column('item_id', sa.Integer(), sa.ForeignKey('items.id'), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('price_per_day', sa.Integer(), nullable=False),
        sa.Column('deposit_per_unit', sa.Integer(), nullable=False),
        sa.Column('subtotal_rental', sa.Integer(), nullable=False),
        sa.Column('subtotal_deposit', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_booking_item_booking_id', 'booking_item', ['booking_id'])
    op.create_index('ix_booking_item_item_id', 'booking_item', ['item_id'])

    op.create_table('booking_customer',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('booking_id', sa.Integer(), sa.ForeignKey('booking.id', ondelete='CASCADE'), nullable=False, unique=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=32), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('delivery_address', sa.String(length=512), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )


def downgrade():
    op.drop_table('booking_customer')
    op.drop_table('booking_item')
    op.drop_table('booking')
    op.drop_table('identity')
    op.drop_table('items')
    op.drop_table('users')
