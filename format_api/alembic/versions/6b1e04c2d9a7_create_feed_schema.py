"""Create feed schema

Revision ID: 6b1e04c2d9a7
Revises: 
Create Date: 2026-10-19 09:12:41.118402

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '6b1e04c2d9a7'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade():
    roles = op.create_table(
        'roles',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('name', sa.String(50), nullable=False),
        sa.UniqueConstraint('name', name='roles_name_key'),
    )
    op.create_table(
        'users',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('login', sa.String(50), nullable=False),
        sa.Column('email', sa.String(100), nullable=False),
        sa.Column('password', sa.Text, nullable=False),
        sa.Column('phone', sa.String(20), nullable=True),
        sa.Column('avatar_url', sa.String(500), nullable=True),
        sa.Column('role_id', sa.Integer, nullable=True),
        sa.UniqueConstraint('login', name='users_login_key'),
        sa.UniqueConstraint('email', name='users_email_key'),
        sa.ForeignKeyConstraint(['role_id'], ['roles.id'], name='users_role_id_fkey'),
    )
    op.create_table(
        'communities',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('description', sa.Text, nullable=True),
        sa.Column('avatar_url', sa.Text, nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('publication_count', sa.Integer, nullable=True, server_default='0'),
        sa.UniqueConstraint('name', name='communities_name_key'),
    )
    op.create_table(
        'topics',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('icon_url', sa.Text, nullable=True),
    )
    op.create_table(
        'posts',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('content', sa.Text, nullable=False),
        sa.Column('media_url', sa.Text, nullable=True),
        sa.Column('share_url', sa.String(500), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('author_id', sa.Integer, nullable=True),
        sa.Column('community_id', sa.Integer, nullable=True),
        sa.Column('topic_id', sa.Integer, nullable=True),
        sa.UniqueConstraint('share_url', name='posts_share_url_key'),
        # Posts outlive their author, community and topic
        sa.ForeignKeyConstraint(['author_id'], ['users.id'], name='posts_author_id_fkey', ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['community_id'], ['communities.id'], name='posts_community_id_fkey', ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['topic_id'], ['topics.id'], name='posts_topic_id_fkey', ondelete='SET NULL'),
    )
    op.create_index('ix_posts_created_at', 'posts', ['created_at'])
    op.create_index('ix_posts_author_id', 'posts', ['author_id'])
    op.create_index('ix_posts_community_id', 'posts', ['community_id'])
    op.create_index('ix_posts_topic_id', 'posts', ['topic_id'])
    op.create_table(
        'comments',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('comment_text', sa.Text, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('post_id', sa.Integer, nullable=False),
        sa.Column('user_id', sa.Integer, nullable=False),
        sa.ForeignKeyConstraint(['post_id'], ['posts.id'], name='comments_post_id_fkey', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='comments_user_id_fkey', ondelete='CASCADE'),
    )
    op.create_index('ix_comments_post_id', 'comments', ['post_id'])
    op.create_index('ix_comments_user_id', 'comments', ['user_id'])
    op.create_table(
        'likes',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('user_id', sa.Integer, nullable=False),
        sa.Column('post_id', sa.Integer, nullable=False),
        sa.UniqueConstraint('user_id', 'post_id', name='likes_user_id_post_id_key'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='likes_user_id_fkey', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['post_id'], ['posts.id'], name='likes_post_id_fkey', ondelete='CASCADE'),
    )
    op.create_index('ix_likes_post_id', 'likes', ['post_id'])
    op.create_table(
        'subscriptions',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('user_id', sa.Integer, nullable=False),
        sa.Column('community_id', sa.Integer, nullable=False),
        sa.UniqueConstraint('user_id', 'community_id', name='subscriptions_user_id_community_id_key'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='subscriptions_user_id_fkey', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['community_id'], ['communities.id'], name='subscriptions_community_id_fkey', ondelete='CASCADE'),
    )
    op.create_index('ix_subscriptions_community_id', 'subscriptions', ['community_id'])

    op.bulk_insert(roles, [
        {'id': 1, 'name': 'admin'},
        {'id': 2, 'name': 'user'},
    ])


def downgrade() -> None:
    """Drop the feed schema."""
    for table in ('subscriptions', 'likes', 'comments', 'posts', 'topics', 'communities', 'users', 'roles'):
        op.drop_table(table)
