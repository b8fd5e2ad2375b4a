"""initial rental marketplace schema

Revision ID: 4b1d7e9a2c60
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""
import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = '4b1d7e9a2c60'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def _soft_delete():
    return [
        sa.Column('active', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
    ]


def _location():
    return [
        sa.Column('address', sa.String(length=255), nullable=True),
        sa.Column('latitude', sa.Float(), nullable=False),
        sa.Column('longitude', sa.Float(), nullable=False),
        sa.Column('plus_code', sa.String(length=20), nullable=True),
    ]


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(length=50), nullable=False),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('password_hash', sa.String(length=254), nullable=False),
        sa.Column('roles', sa.JSON(), nullable=False),
        sa.Column('email_verified_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('email_verify_token_hash', sa.String(length=64), nullable=True),
        sa.Column('password_reset_token_hash', sa.String(length=64), nullable=True),
        sa.Column('verified', sa.Boolean(), nullable=False),
        sa.Column('last_active_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('first_name', sa.String(length=50), nullable=True),
        sa.Column('other_names', sa.String(length=50), nullable=True),
        sa.Column('last_name', sa.String(length=50), nullable=True),
        sa.Column('enterprise_name', sa.String(length=100), nullable=True),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('address', sa.String(length=255), nullable=True),
        sa.Column('id_type', sa.String(length=30), nullable=True),
        sa.Column('id_number', sa.String(length=30), nullable=True),
        sa.Column('date_of_birth', sa.Date(), nullable=True),
        sa.Column('created_by_id', sa.Integer(), nullable=True),
        *_timestamps(),
        *_soft_delete(),
        sa.ForeignKeyConstraint(
            ['created_by_id'], ['users.id'],
            name='fk_users_created_by_id_users', ondelete='SET NULL',
        ),
        sa.PrimaryKeyConstraint('id', name='pk_users'),
        sa.UniqueConstraint('email', name='uq_users_email'),
        sa.UniqueConstraint('username', name='uq_users_username'),
    )
    op.create_index('ix_users_last_name', 'users', ['last_name'])

    op.create_table(
        'refresh_sessions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('token_hash', sa.String(length=64), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('issued_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('user_agent', sa.String(length=255), nullable=True),
        sa.ForeignKeyConstraint(
            ['user_id'], ['users.id'],
            name='fk_refresh_sessions_user_id_users', ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('id', name='pk_refresh_sessions'),
        sa.UniqueConstraint('token_hash', name='uq_refresh_sessions_token_hash'),
    )
    op.create_index('ix_refresh_sessions_user_id', 'refresh_sessions', ['user_id'])
    op.create_index('ix_refresh_sessions_expires_at', 'refresh_sessions', ['expires_at'])

    op.create_table(
        'vehicles',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('brand', sa.String(length=50), nullable=False),
        sa.Column('model', sa.String(length=50), nullable=False),
        sa.Column('engine_number', sa.String(length=50), nullable=True),
        sa.Column('vin', sa.String(length=50), nullable=True),
        sa.Column('plate_number', sa.String(length=20), nullable=False),
        sa.Column('status', sa.String(length=11), server_default='available', nullable=False),
        sa.Column('verified', sa.Boolean(), nullable=False),
        sa.Column('company_owned', sa.Boolean(), nullable=False),
        sa.Column('due_back_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('added_by_id', sa.Integer(), nullable=False),
        *_timestamps(),
        *_soft_delete(),
        sa.ForeignKeyConstraint(
            ['added_by_id'], ['users.id'],
            name='fk_vehicles_added_by_id_users', ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('id', name='pk_vehicles'),
        sa.UniqueConstraint('plate_number', name='uq_vehicles_plate_number'),
    )
    op.create_index('ix_vehicles_added_by_id', 'vehicles', ['added_by_id'])
    op.create_index('ix_vehicles_brand_model', 'vehicles', ['brand', 'model'])

    op.create_table(
        'vehicle_hires',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('vehicle_id', sa.Integer(), nullable=False),
        sa.Column('hirer_id', sa.Integer(), nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('release_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('due_back_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('returned_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('paid', sa.Boolean(), nullable=False),
        *_timestamps(),
        *_soft_delete(),
        sa.CheckConstraint('due_back_at > release_at', name='ck_vehicle_hires_due_after_release'),
        sa.ForeignKeyConstraint(
            ['vehicle_id'], ['vehicles.id'],
            name='fk_vehicle_hires_vehicle_id_vehicles', ondelete='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['hirer_id'], ['users.id'],
            name='fk_vehicle_hires_hirer_id_users', ondelete='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['owner_id'], ['users.id'],
            name='fk_vehicle_hires_owner_id_users', ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('id', name='pk_vehicle_hires'),
    )
    op.create_index('ix_vehicle_hires_vehicle_id', 'vehicle_hires', ['vehicle_id'])
    op.create_index('ix_vehicle_hires_hirer_id', 'vehicle_hires', ['hirer_id'])
    op.create_index('ix_vehicle_hires_owner_id', 'vehicle_hires', ['owner_id'])

    op.create_table(
        'payments',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('vehicle_hire_id', sa.Integer(), nullable=False),
        sa.Column('vehicle_id', sa.Integer(), nullable=False),
        sa.Column('hirer_id', sa.Integer(), nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('method', sa.String(length=11), nullable=False),
        sa.Column('status', sa.String(length=10), server_default='pending', nullable=False),
        sa.Column('initiated_at', sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
        *_soft_delete(),
        sa.ForeignKeyConstraint(
            ['vehicle_hire_id'], ['vehicle_hires.id'],
            name='fk_payments_vehicle_hire_id_vehicle_hires', ondelete='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['vehicle_id'], ['vehicles.id'],
            name='fk_payments_vehicle_id_vehicles', ondelete='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['hirer_id'], ['users.id'],
            name='fk_payments_hirer_id_users', ondelete='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['owner_id'], ['users.id'],
            name='fk_payments_owner_id_users', ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('id', name='pk_payments'),
    )
    op.create_index('ix_payments_vehicle_hire_id', 'payments', ['vehicle_hire_id'])
    op.create_index('ix_payments_hirer_id', 'payments', ['hirer_id'])

    op.create_table(
        'user_locations',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        *_location(),
        *_timestamps(),
        sa.CheckConstraint('latitude BETWEEN -90 AND 90', name='ck_user_locations_latitude_range'),
        sa.CheckConstraint(
            'longitude BETWEEN -180 AND 180', name='ck_user_locations_longitude_range'
        ),
        sa.ForeignKeyConstraint(
            ['user_id'], ['users.id'],
            name='fk_user_locations_user_id_users', ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('id', name='pk_user_locations'),
        sa.UniqueConstraint('user_id', name='uq_user_locations_user_id'),
    )

    op.create_table(
        'vehicle_locations',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('vehicle_id', sa.Integer(), nullable=False),
        *_location(),
        *_timestamps(),
        sa.CheckConstraint(
            'latitude BETWEEN -90 AND 90', name='ck_vehicle_locations_latitude_range'
        ),
        sa.CheckConstraint(
            'longitude BETWEEN -180 AND 180', name='ck_vehicle_locations_longitude_range'
        ),
        sa.ForeignKeyConstraint(
            ['vehicle_id'], ['vehicles.id'],
            name='fk_vehicle_locations_vehicle_id_vehicles', ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('id', name='pk_vehicle_locations'),
        sa.UniqueConstraint('vehicle_id', name='uq_vehicle_locations_vehicle_id'),
    )

    op.create_table(
        'interactions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('message', sa.String(length=100), nullable=False),
        sa.Column('author_id', sa.Integer(), nullable=False),
        sa.Column('vehicle_id', sa.Integer(), nullable=True),
        sa.Column('vehicle_hire_id', sa.Integer(), nullable=True),
        *_timestamps(),
        *_soft_delete(),
        sa.CheckConstraint(
            '(vehicle_id IS NULL) <> (vehicle_hire_id IS NULL)',
            name='ck_interactions_exactly_one_target',
        ),
        sa.ForeignKeyConstraint(
            ['author_id'], ['users.id'],
            name='fk_interactions_author_id_users', ondelete='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['vehicle_id'], ['vehicles.id'],
            name='fk_interactions_vehicle_id_vehicles', ondelete='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['vehicle_hire_id'], ['vehicle_hires.id'],
            name='fk_interactions_vehicle_hire_id_vehicle_hires', ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('id', name='pk_interactions'),
    )
    op.create_index('ix_interactions_vehicle_id', 'interactions', ['vehicle_id'])
    op.create_index('ix_interactions_vehicle_hire_id', 'interactions', ['vehicle_hire_id'])

    op.create_table(
        'contact_messages',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('title', sa.String(length=30), nullable=False),
        sa.Column('body', sa.String(length=100), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_contact_messages'),
    )


def downgrade():
    op.drop_table('contact_messages')
    op.drop_index('ix_interactions_vehicle_hire_id', table_name='interactions')
    op.drop_index('ix_interactions_vehicle_id', table_name='interactions')
    op.drop_table('interactions')
    op.drop_table('vehicle_locations')
    op.drop_table('user_locations')
    op.drop_index('ix_payments_hirer_id', table_name='payments')
    op.drop_index('ix_payments_vehicle_hire_id', table_name='payments')
    op.drop_table('payments')
    op.drop_index('ix_vehicle_hires_owner_id', table_name='vehicle_hires')
    op.drop_index('ix_vehicle_hires_hirer_id', table_name='vehicle_hires')
    op.drop_index('ix_vehicle_hires_vehicle_id', table_name='vehicle_hires')
    op.drop_table('vehicle_hires')
    op.drop_index('ix_vehicles_brand_model', table_name='vehicles')
    op.drop_index('ix_vehicles_added_by_id', table_name='vehicles')
    op.drop_table('vehicles')
    op.drop_index('ix_refresh_sessions_expires_at', table_name='refresh_sessions')
    op.drop_index('ix_refresh_sessions_user_id', table_name='refresh_sessions')
    op.drop_table('refresh_sessions')
    op.drop_index('ix_users_last_name', table_name='users')
    op.drop_table('users')
