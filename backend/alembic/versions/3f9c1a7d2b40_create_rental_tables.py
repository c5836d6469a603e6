"""create_rental_tables

Revision ID: 3f9c1a7d2b40
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9c1a7d2b40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('full_name', sa.String(255), nullable=True),
        sa.Column('language', sa.String(10), nullable=False, server_default='en'),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'agencies',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('full_name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=True, unique=True),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('avatar', sa.String(255), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_agencies_id', 'agencies', ['id'])
    op.create_index('ix_agencies_full_name', 'agencies', ['full_name'], unique=True)

    op.create_table(
        'locations',
        sa.Column('id', sa.Integer(), primary_key=True),
        *_timestamps(),
    )
    op.create_index('ix_locations_id', 'locations', ['id'])

    op.create_table(
        'location_values',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('location_id', sa.Integer(), sa.ForeignKey('locations.id', ondelete='CASCADE'), nullable=False),
        sa.Column('language', sa.String(10), nullable=False),
        sa.Column('value', sa.String(255), nullable=False),
    )
    op.create_index('ix_location_values_id', 'location_values', ['id'])
    op.create_index('ix_location_values_location_id', 'location_values', ['location_id'])
    op.create_index('ix_location_values_language', 'location_values', ['language'])
    op.create_index('ix_location_values_value', 'location_values', ['value'])

    op.create_table(
        'properties',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('agency_id', sa.Integer(), sa.ForeignKey('agencies.id', ondelete='CASCADE'), nullable=False),
        sa.Column('location_id', sa.Integer(), sa.ForeignKey('locations.id'), nullable=True),
        sa.Column('price', sa.Float(), nullable=True),
        sa.Column('cancellation', sa.Float(), nullable=True),
        sa.Column('available', sa.Boolean(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_properties_id', 'properties', ['id'])
    op.create_index('ix_properties_name', 'properties', ['name'])
    op.create_index('ix_properties_agency_id', 'properties', ['agency_id'])
    op.create_index('ix_properties_location_id', 'properties', ['location_id'])

    op.create_table(
        'bookings',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('property_id', sa.Integer(), sa.ForeignKey('properties.id', ondelete='CASCADE'), nullable=False),
        sa.Column('agency_id', sa.Integer(), sa.ForeignKey('agencies.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('from_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('to_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('status', sa.String(50), nullable=False),
        sa.Column('cancellation', sa.Boolean(), nullable=True),
        sa.Column('cancel_request', sa.Boolean(), nullable=True),
        sa.Column('price', sa.Float(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_bookings_id', 'bookings', ['id'])
    op.create_index('ix_bookings_property_id', 'bookings', ['property_id'])
    op.create_index('ix_bookings_agency_id', 'bookings', ['agency_id'])
    op.create_index('ix_bookings_user_id', 'bookings', ['user_id'])
    op.create_index('ix_bookings_from_date', 'bookings', ['from_date'])
    op.create_index('ix_bookings_status', 'bookings', ['status'])


def downgrade() -> None:
    op.drop_table('bookings')
    op.drop_table('properties')
    op.drop_table('location_values')
    op.drop_table('locations')
    op.drop_table('agencies')
    op.drop_table('users')
