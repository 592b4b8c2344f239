"""initial schema: users, api keys, registrations, achievements

Revision ID: 8f3c2a1d9b7e
Revises:
Create Date: 2025-01-11 00:00:00.000000
"""
import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = '8f3c2a1d9b7e'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
    ]


def _registration_fields():
    return [
        sa.Column('arrival_date', sa.Date(), nullable=False),
        sa.Column('departure_date', sa.Date(), nullable=False),
        sa.Column('food_restrictions', sa.Text(), nullable=False),
        sa.Column('children_count', sa.Integer(), nullable=False),
        sa.Column('cancelled', sa.Boolean(), nullable=False),
        sa.Column('note', sa.Text(), nullable=False),
    ]


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('discord_id', sa.String(length=64), nullable=False),
        sa.Column('username', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=254), nullable=True),
        sa.Column('avatar', sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_users')),
        sa.UniqueConstraint('discord_id', name='uq_users_discord_id'),
    )
    op.create_table(
        'achievements',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('image', sa.String(length=500), nullable=False),
        sa.Column('code', sa.String(length=100), nullable=False),
        sa.Column('discord_role_id', sa.String(length=64), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_achievements')),
        sa.UniqueConstraint('code', name='uq_achievements_code'),
    )
    op.create_table(
        'api_keys',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('key', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('last_used_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name=op.f('fk_api_keys_user_id_users'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_api_keys')),
        sa.UniqueConstraint('key', name='uq_api_keys_key'),
    )
    op.create_index('ix_api_keys_user_id', 'api_keys', ['user_id'], unique=False)

    op.create_table(
        'registrations',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('event', sa.String(length=100), nullable=False),
        *_registration_fields(),
        *_timestamps(),
        sa.CheckConstraint('arrival_date <= departure_date', name=op.f('ck_registrations_arrival_before_departure')),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name=op.f('fk_registrations_user_id_users'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_registrations')),
        sa.UniqueConstraint('user_id', 'event', name='uq_registrations_user_event'),
    )
    op.create_index('ix_registrations_event', 'registrations', ['event'], unique=False)

    op.create_table(
        'registration_history',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('registration_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('event', sa.String(length=100), nullable=False),
        *_registration_fields(),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['registration_id'], ['registrations.id'], name=op.f('fk_registration_history_registration_id_registrations'), ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name=op.f('fk_registration_history_user_id_users'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_registration_history')),
    )
    op.create_index('ix_registration_history_user_created', 'registration_history', ['user_id', 'created_at'], unique=False)
    op.create_index('ix_registration_history_registration_id', 'registration_history', ['registration_id'], unique=False)

    op.create_table(
        'achievement_grants',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('achievement_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('granted_by_id', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['achievement_id'], ['achievements.id'], name=op.f('fk_achievement_grants_achievement_id_achievements'), ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['granted_by_id'], ['users.id'], name=op.f('fk_achievement_grants_granted_by_id_users'), ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name=op.f('fk_achievement_grants_user_id_users'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_achievement_grants')),
        sa.UniqueConstraint('achievement_id', 'user_id', name='uq_achievement_grants_achievement_user'),
    )
    op.create_index('ix_achievement_grants_user_id', 'achievement_grants', ['user_id'], unique=False)


def downgrade():
    op.drop_index('ix_achievement_grants_user_id', table_name='achievement_grants')
    op.drop_table('achievement_grants')
    op.drop_index('ix_registration_history_registration_id', table_name='registration_history')
    op.drop_index('ix_registration_history_user_created', table_name='registration_history')
    op.drop_table('registration_history')
    op.drop_index('ix_registrations_event', table_name='registrations')
    op.drop_table('registrations')
    op.drop_index('ix_api_keys_user_id', table_name='api_keys')
    op.drop_table('api_keys')
    op.drop_table('achievements')
    op.drop_table('users')
