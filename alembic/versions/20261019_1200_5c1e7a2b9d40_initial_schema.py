"""initial_schema

Revision ID: 5c1e7a2b9d40
Revises:
Create Date: 2026-10-19 12:00:00.000000+00:00
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = '5c1e7a2b9d40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

suggestion_status = sa.Enum('PENDING', 'APPROVED', 'REJECTED', name='suggestionstatus')


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'access_tokens',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(64), nullable=False),
        sa.Column('token_hash', sa.String(64), nullable=False),
        sa.Column('last_used_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('token_hash'),
    )
    op.create_index('ix_access_tokens_user_id', 'access_tokens', ['user_id'])

    # No unique index on position: shifts pass through transient duplicates
    op.create_table(
        'songs',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('youtube_url', sa.String(255), nullable=False),
        sa.Column('position', sa.Integer(), nullable=True),
        sa.Column('plays_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('youtube_url'),
        sa.CheckConstraint('position IS NULL OR position >= 1', name='ck_songs_position'),
        sa.CheckConstraint('plays_count >= 0', name='ck_songs_plays_count'),
    )
    op.create_index('ix_songs_position', 'songs', ['position'])
    op.create_index('ix_songs_plays_count', 'songs', ['plays_count'])

    op.create_table(
        'song_suggestions',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('artist', sa.String(255), nullable=True),
        sa.Column('youtube_url', sa.String(255), nullable=False),
        sa.Column('status', suggestion_status, nullable=False, server_default='PENDING'),
        sa.Column('suggested_by', sa.String(255), nullable=True),
        sa.Column('suggested_by_name', sa.String(255), nullable=True),
        sa.Column('suggested_by_email', sa.String(255), nullable=True),
        sa.Column('reviewed_by', sa.Integer(), nullable=True),
        sa.Column('reviewed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['reviewed_by'], ['users.id'], ondelete='SET NULL'),
        sa.UniqueConstraint('youtube_url'),
    )
    op.create_index('ix_song_suggestions_status', 'song_suggestions', ['status'])
    op.create_index('ix_song_suggestions_reviewed_at', 'song_suggestions', ['reviewed_at'])


def downgrade() -> None:
    op.drop_index('ix_song_suggestions_reviewed_at', table_name='song_suggestions')
    op.drop_index('ix_song_suggestions_status', table_name='song_suggestions')
    op.drop_table('song_suggestions')
    suggestion_status.drop(op.get_bind(), checkfirst=True)

    op.drop_index('ix_songs_plays_count', table_name='songs')
    op.drop_index('ix_songs_position', table_name='songs')
    op.drop_table('songs')

    op.drop_index('ix_access_tokens_user_id', table_name='access_tokens')
    op.drop_table('access_tokens')

    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
