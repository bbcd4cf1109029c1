"""create shops, products and events

Revision ID: 0001_initial
Revises: 
Create Date: 2026-10-18 00:00:00.000000
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '0001_initial'
down_revision = None
branch_labels = None
depends_on = None


def _listable_columns():
    # shared by every listable table, these back the sortable fields
    return [
        sa.Column('id', sa.Integer, primary_key=True, nullable=False),
        sa.Column('rating_avg', sa.Float, nullable=False, server_default=sa.text('0')),
        sa.Column('created_at', sa.DateTime, nullable=False),
        sa.Column('updated_at', sa.DateTime, nullable=False),
    ]


def upgrade() -> None:
    bind = op.get_bind()
    inspector = sa.inspect(bind)

    def create_if_missing(table_name, create_fn):
        if not inspector.has_table(table_name):
            create_fn()

    create_if_missing('shops', lambda: op.create_table(
        'shops',
        *_listable_columns(),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('category', sa.String(length=200), nullable=True),
        sa.Column('location', sa.String(length=512), nullable=True),
        sa.Column('address', sa.String(length=1024), nullable=True),
        sa.Column('description', sa.Text, nullable=True),
        sa.Column('status', sa.String(length=32), nullable=False, server_default='pending'),
    ))
    create_if_missing('products', lambda: op.create_table(
        'products',
        *_listable_columns(),
        sa.Column('shop_id', sa.Integer, sa.ForeignKey('shops.id'), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text, nullable=True),
        sa.Column('price', sa.Float, nullable=False, server_default=sa.text('0')),
        sa.Column('stock', sa.Integer, nullable=False, server_default=sa.text('0')),
        sa.Column('is_deleted', sa.Boolean, nullable=False, server_default=sa.false()),
    ))
    create_if_missing('events', lambda: op.create_table(
        'events',
        *_listable_columns(),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('category', sa.String(length=200), nullable=True),
        sa.Column('location', sa.String(length=512), nullable=True),
        sa.Column('starts_at', sa.DateTime, nullable=True),
        sa.Column('status', sa.String(length=32), nullable=False, server_default='upcoming'),
    ))

    for table, columns in (
        ('shops', ['name', 'category', 'status', 'created_at']),
        ('products', ['shop_id', 'name', 'created_at']),
        ('events', ['title', 'status', 'created_at']),
    ):
        existing = {ix['name'] for ix in sa.inspect(bind).get_indexes(table)}
        for column in columns:
            name = f'ix_{table}_{column}'
            if name not in existing:
                op.create_index(name, table, [column])


def downgrade() -> None:
    op.drop_table('events')
    op.drop_table('products')
    op.drop_table('shops')
