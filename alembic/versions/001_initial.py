"""Initial migration

Revision ID: 001
Revises:
Create Date: 2024-10-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


business_kind = sa.Enum('HOTEL', 'RESTAURANT', name='businesskind')
resource_kind = sa.Enum('ROOM', 'TABLE', name='resourcekind')
reservation_kind = sa.Enum('HOTEL', 'RESTAURANT', name='reservationkind')
reservation_status = sa.Enum('PENDING', 'CONFIRMED', 'CANCELLED', 'COMPLETED', name='reservationstatus')


def upgrade() -> None:
    # Create businesses table
    op.create_table(
        'businesses',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('kind', business_kind, nullable=False),
        sa.Column('owner_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('is_active', sa.Boolean(), default=True),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
    )

    # Create resources table (rooms and tables)
    op.create_table(
        'resources',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('business_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('businesses.id'), nullable=False),
        sa.Column('kind', resource_kind, nullable=False),
        sa.Column('number', sa.String(20), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('is_active', sa.Boolean(), default=True),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
        sa.CheckConstraint('capacity >= 1', name='ck_resources_capacity_positive'),
    )

    # Create reservations table
    op.create_table(
        'reservations',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('business_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('businesses.id'), nullable=False),
        sa.Column('resource_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('resources.id'), nullable=False),
        sa.Column('kind', reservation_kind, nullable=False),
        sa.Column('start_date', sa.DateTime(), nullable=False),
        sa.Column('end_date', sa.DateTime(), nullable=False),
        sa.Column('guest_count', sa.Integer(), nullable=False),
        sa.Column('status', reservation_status, nullable=False, server_default='PENDING'),
        sa.Column('total_amount_cents', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('currency', sa.String(3), nullable=False, server_default='USD'),
        sa.Column('special_request', sa.Text()),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
        sa.CheckConstraint('start_date < end_date', name='ck_reservations_interval'),
        sa.CheckConstraint('guest_count >= 1', name='ck_reservations_guest_count'),
        sa.CheckConstraint('total_amount_cents >= 0', name='ck_reservations_amount'),
    )

    # Create indexes
    op.create_index('ix_businesses_owner_id', 'businesses', ['owner_id'])
    op.create_index('ix_resources_business_id', 'resources', ['business_id'])
    op.create_index('ix_reservations_user_id', 'reservations', ['user_id'])
    op.create_index('ix_reservations_business_id', 'reservations', ['business_id'])
    op.create_index('ix_reservations_resource_status', 'reservations', ['resource_id', 'status'])


def downgrade() -> None:
    op.drop_table('reservations')
    op.drop_table('resources')
    op.drop_table('businesses')
    reservation_status.drop(op.get_bind(), checkfirst=True)
    reservation_kind.drop(op.get_bind(), checkfirst=True)
    resource_kind.drop(op.get_bind(), checkfirst=True)
    business_kind.drop(op.get_bind(), checkfirst=True)
