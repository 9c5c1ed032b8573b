"""initial_schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None

user_role = sa.Enum('USER', 'ADMIN', name='userrole')
event_status = sa.Enum('DRAFT', 'PENDING', 'APPROVED', 'REJECTED', name='eventstatus')
registration_status = sa.Enum('PENDING', 'APPROVED', 'REJECTED', 'COMPLETED', name='registrationstatus')
reaction_type = sa.Enum('NONE', 'LIKE', 'LOVE', 'HAHA', 'WOW', 'SAD', 'ANGRY', name='reactiontype')


def timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('firstname', sa.String(length=100), nullable=False),
        sa.Column('lastname', sa.String(length=100), nullable=False),
        sa.Column('username', sa.String(length=100), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('role', user_role, nullable=False),
        *timestamps(),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_username', 'users', ['username'], unique=True)

    op.create_table(
        'events',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('status', event_status, nullable=False),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('date_deadline', sa.DateTime(timezone=True), nullable=False),
        sa.Column('owner_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        *timestamps(),
    )
    op.create_index('ix_events_id', 'events', ['id'])
    op.create_index('ix_events_name', 'events', ['name'])
    op.create_index('ix_events_status', 'events', ['status'])
    op.create_index('ix_events_owner_id', 'events', ['owner_id'])

    op.create_table(
        'registrations',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('event_id', sa.Integer(), sa.ForeignKey('events.id', ondelete='CASCADE'), nullable=False),
        sa.Column('status', registration_status, nullable=False),
        *timestamps(),
        sa.UniqueConstraint('user_id', 'event_id', name='uq_registration_user_event'),
    )
    op.create_index('ix_registrations_id', 'registrations', ['id'])
    op.create_index('ix_registrations_user_id', 'registrations', ['user_id'])
    op.create_index('ix_registrations_event_id', 'registrations', ['event_id'])

    op.create_table(
        'posts',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('event_id', sa.Integer(), sa.ForeignKey('events.id', ondelete='CASCADE'), nullable=False),
        sa.Column('author_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        *timestamps(),
    )
    op.create_index('ix_posts_id', 'posts', ['id'])
    op.create_index('ix_posts_event_id', 'posts', ['event_id'])
    op.create_index('ix_posts_author_id', 'posts', ['author_id'])

    op.create_table(
        'post_media',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('post_id', sa.Integer(), sa.ForeignKey('posts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('resource_id', sa.String(length=64), nullable=False),
        sa.Column('path', sa.String(length=500), nullable=False),
        *timestamps(),
    )
    op.create_index('ix_post_media_id', 'post_media', ['id'])
    op.create_index('ix_post_media_post_id', 'post_media', ['post_id'])

    op.create_table(
        'post_reactions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('post_id', sa.Integer(), sa.ForeignKey('posts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('reaction_type', reaction_type, nullable=False),
        *timestamps(),
        sa.UniqueConstraint('post_id', 'user_id', name='uq_reaction_post_user'),
    )
    op.create_index('ix_post_reactions_id', 'post_reactions', ['id'])
    op.create_index('ix_post_reactions_post_id', 'post_reactions', ['post_id'])
    op.create_index('ix_post_reactions_user_id', 'post_reactions', ['user_id'])

    op.create_table(
        'push_subscriptions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('endpoint', sa.Text(), nullable=False, unique=True),
        sa.Column('p256dh', sa.String(length=255), nullable=False),
        sa.Column('auth', sa.String(length=255), nullable=False),
        *timestamps(),
    )
    op.create_index('ix_push_subscriptions_id', 'push_subscriptions', ['id'])
    op.create_index('ix_push_subscriptions_user_id', 'push_subscriptions', ['user_id'])


def downgrade() -> None:
    op.drop_table('push_subscriptions')
    op.drop_table('post_reactions')
    op.drop_table('post_media')
    op.drop_table('posts')
    op.drop_table('registrations')
    op.drop_table('events')
    op.drop_table('users')

    bind = op.get_bind()
    for enum_type in (reaction_type, registration_status, event_status, user_role):
        enum_type.drop(bind, checkfirst=True)
