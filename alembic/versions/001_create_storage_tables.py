"""Create location, rack, container and slot tables

Revision ID: 001
Revises:
Create Date: 2026-09-28 10:00:00.000000

"""
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def _tags_type() -> sa.types.TypeEngine:
    return postgresql.ARRAY(sa.Text()).with_variant(sa.JSON(), 'sqlite')


def upgrade() -> None:
    op.create_table('locations',
    sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
    sa.Column('name', sa.String(length=255), nullable=False),
    sa.Column('notes', sa.Text(), nullable=True),
    sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('name')
    )

    op.create_table('racks',
    sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
    sa.Column('name', sa.String(length=255), nullable=False),
    sa.Column('rows', sa.Integer(), nullable=False),
    sa.Column('cols', sa.Integer(), nullable=False),
    sa.Column('location_id', sa.Integer(), nullable=False),
    sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    sa.CheckConstraint('rows >= 1', name='ck_racks_rows_positive'),
    sa.CheckConstraint('cols >= 1', name='ck_racks_cols_positive'),
    sa.ForeignKeyConstraint(['location_id'], ['locations.id'], ),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('name')
    )
    op.create_index('ix_racks_location_id', 'racks', ['location_id'])

    op.create_table('container_types',
    sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
    sa.Column('name', sa.String(length=100), nullable=False),
    sa.Column('code_prefix', sa.String(length=12), nullable=False),
    sa.Column('icon_key', sa.String(length=20), nullable=True),
    sa.Column('description', sa.Text(), nullable=True),
    sa.Column('length', sa.Float(), nullable=True),
    sa.Column('width', sa.Float(), nullable=True),
    sa.Column('height', sa.Float(), nullable=True),
    sa.Column('top_length', sa.Float(), nullable=True),
    sa.Column('top_width', sa.Float(), nullable=True),
    sa.Column('bottom_length', sa.Float(), nullable=True),
    sa.Column('bottom_width', sa.Float(), nullable=True),
    sa.Column('capacity', sa.Float(), nullable=True),
    sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('name')
    )
    op.create_index('ix_container_types_code_prefix', 'container_types', ['code_prefix'])

    # current_slot_id references slots, which does not exist yet; the key is added below
    op.create_table('containers',
    sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
    sa.Column('code', sa.String(length=64), nullable=False),
    sa.Column('label', sa.String(length=255), nullable=False),
    sa.Column('description', sa.Text(), nullable=True),
    sa.Column('status', sa.String(length=8), server_default='ACTIVE', nullable=False),
    sa.Column('tags', _tags_type(), nullable=True),
    sa.Column('current_slot_id', sa.Integer(), nullable=True),
    sa.Column('parent_container_id', sa.Integer(), nullable=True),
    sa.Column('container_type_id', sa.Integer(), nullable=True),
    sa.Column('legacy_type', sa.String(length=100), nullable=True),
    sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    sa.CheckConstraint('current_slot_id IS NULL OR parent_container_id IS NULL', name='ck_containers_racked_xor_nested'),
    sa.CheckConstraint('parent_container_id IS NULL OR parent_container_id != id', name='ck_containers_not_self_nested'),
    sa.ForeignKeyConstraint(['parent_container_id'], ['containers.id'], ),
    sa.ForeignKeyConstraint(['container_type_id'], ['container_types.id'], ),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('code'),
    sa.UniqueConstraint('current_slot_id')
    )
    op.create_index('ix_containers_status', 'containers', ['status'])
    op.create_index('ix_containers_parent_container_id', 'containers', ['parent_container_id'])
    op.create_index('ix_containers_container_type_id', 'containers', ['container_type_id'])

    op.create_table('items',
    sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
    sa.Column('name', sa.String(length=255), nullable=False),
    sa.Column('description', sa.Text(), nullable=True),
    sa.Column('notes', sa.Text(), nullable=True),
    sa.Column('status', sa.String(length=11), server_default='IN_STORAGE', nullable=False),
    sa.Column('category', sa.String(length=16), nullable=True),
    sa.Column('condition', sa.String(length=15), nullable=True),
    sa.Column('isbn', sa.String(length=32), nullable=True),
    sa.Column('quantity', sa.Integer(), server_default='1', nullable=False),
    sa.Column('tags', _tags_type(), nullable=True),
    sa.Column('volume', sa.Float(), nullable=True),
    sa.Column('expiration_date', sa.Date(), nullable=True),
    sa.Column('container_id', sa.Integer(), nullable=True),
    sa.Column('import_key', sa.String(length=512), nullable=True),
    sa.Column('is_container', sa.Boolean(), server_default=sa.false(), nullable=False),
    sa.Column('current_slot_id', sa.Integer(), nullable=True),
    sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    sa.CheckConstraint('quantity >= 1', name='ck_items_quantity_positive'),
    sa.CheckConstraint('volume IS NULL OR volume >= 0', name='ck_items_volume_non_negative'),
    sa.CheckConstraint('is_container = false OR container_id IS NULL', name='ck_items_container_item_not_nested'),
    sa.CheckConstraint('is_container = true OR current_slot_id IS NULL', name='ck_items_only_container_items_racked'),
    sa.ForeignKeyConstraint(['container_id'], ['containers.id'], ),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('import_key'),
    sa.UniqueConstraint('current_slot_id')
    )
    op.create_index('ix_items_name', 'items', ['name'])
    op.create_index('ix_items_status', 'items', ['status'])
    op.create_index('ix_items_category', 'items', ['category'])
    op.create_index('ix_items_container_id', 'items', ['container_id'])

    op.create_table('slots',
    sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
    sa.Column('rack_id', sa.Integer(), nullable=False),
    sa.Column('row', sa.Integer(), nullable=False),
    sa.Column('col', sa.Integer(), nullable=False),
    sa.Column('container_id', sa.Integer(), nullable=True),
    sa.Column('item_id', sa.Integer(), nullable=True),
    sa.Column('version', sa.BigInteger(), server_default='1', nullable=False),
    sa.CheckConstraint('container_id IS NULL OR item_id IS NULL', name='ck_slots_single_occupant'),
    sa.ForeignKeyConstraint(['rack_id'], ['racks.id'], ondelete='CASCADE'),
    sa.ForeignKeyConstraint(['container_id'], ['containers.id'], ),
    sa.ForeignKeyConstraint(['item_id'], ['items.id'], ),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('rack_id', 'row', 'col', name='uq_slots_rack_row_col'),
    sa.UniqueConstraint('container_id'),
    sa.UniqueConstraint('item_id')
    )

    # SQLite cannot add constraints to existing tables
    if op.get_bind().dialect.name != 'sqlite':
        op.create_foreign_key(
            'fk_containers_current_slot_id', 'containers', 'slots', ['current_slot_id'], ['id']
        )
        op.create_foreign_key(
            'fk_items_current_slot_id', 'items', 'slots', ['current_slot_id'], ['id']
        )


def downgrade() -> None:
    if op.get_bind().dialect.name != 'sqlite':
        op.drop_constraint('fk_items_current_slot_id', 'items', type_='foreignkey')
        op.drop_constraint('fk_containers_current_slot_id', 'containers', type_='foreignkey')

    op.drop_table('slots')
    op.drop_index('ix_items_container_id', table_name='items')
    op.drop_index('ix_items_category', table_name='items')
    op.drop_index('ix_items_status', table_name='items')
    op.drop_index('ix_items_name', table_name='items')
    op.drop_table('items')
    op.drop_index('ix_containers_container_type_id', table_name='containers')
    op.drop_index('ix_containers_parent_container_id', table_name='containers')
    op.drop_index('ix_containers_status', table_name='containers')
    op.drop_table('containers')
    op.drop_index('ix_container_types_code_prefix', table_name='container_types')
    op.drop_table('container_types')
    op.drop_index('ix_racks_location_id', table_name='racks')
    op.drop_table('racks')
    op.drop_table('locations')
