"""Initial schema: users, posts, comments, shares, fact checks, follows, notifications

Revision ID: initial_schema
Revises:
Create Date: 2025-10-19 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'initial_schema'
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    # 1. Users; deleted accounts are kept with is_active = false
    op.create_table(
        'users',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('avatar', sa.String(512)),
        sa.Column('credentials', sa.String(255)),
        sa.Column('bio', sa.Text),
        sa.Column('location', sa.String(255)),
        sa.Column('website', sa.String(512)),
        sa.Column('firebase_uid', sa.String(128)),
        sa.Column('is_active', sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_firebase_uid', 'users', ['firebase_uid'], unique=True)

    # 2. Posts
    op.create_table(
        'posts',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('user_id', sa.Integer, sa.ForeignKey('users.id'), nullable=False),
        sa.Column('question', sa.Text, nullable=False),
        sa.Column('answer', sa.Text, nullable=False, server_default=''),
        sa.Column('media_url', sa.String(1024)),
        sa.Column('media_type', sa.String(32)),
        sa.Column('upvotes', sa.Integer, nullable=False, server_default='0'),
        sa.Column('shares', sa.Integer, nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_posts_user_id', 'posts', ['user_id'])
    op.create_index('ix_posts_created_at', 'posts', ['created_at'])

    # 3. Comments
    op.create_table(
        'comments',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('post_id', sa.Integer, sa.ForeignKey('posts.id'), nullable=False),
        sa.Column('user_id', sa.Integer, sa.ForeignKey('users.id'), nullable=False),
        sa.Column('content', sa.Text, nullable=False),
        sa.Column('is_edited', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_comments_post_id', 'comments', ['post_id'])

    # 4. Share log
    op.create_table(
        'post_shares',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('post_id', sa.Integer, sa.ForeignKey('posts.id'), nullable=False),
        sa.Column('user_id', sa.Integer, sa.ForeignKey('users.id')),
        sa.Column('share_type', sa.String(32), nullable=False, server_default='native'),
        sa.Column('platform', sa.String(32), nullable=False, server_default='app'),
        sa.Column('user_agent', sa.String(512)),
        sa.Column('shared_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_post_shares_post_id', 'post_shares', ['post_id'])

    # 5. Fact check history
    op.create_table(
        'fact_checks',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('post_id', sa.Integer, sa.ForeignKey('posts.id'), nullable=False),
        sa.Column('content_analyzed', sa.Text, nullable=False),
        sa.Column('accuracy_score', sa.Float, nullable=False),
        sa.Column('validity_status', sa.String(32), nullable=False),
        sa.Column('confidence_level', sa.String(32), nullable=False),
        sa.Column('analysis', sa.Text),
        sa.Column('sources', sa.JSON),
        sa.Column('corrections', sa.JSON),
        sa.Column('reasoning', sa.Text),
        sa.Column('claims', sa.JSON),
        sa.Column('checked_by', sa.String(255), nullable=False, server_default='system'),
        sa.Column('checked_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('idx_fact_checks_post_checked_at', 'fact_checks', ['post_id', 'checked_at'])

    # 6. Follow edges
    op.create_table(
        'follows',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('follower_id', sa.Integer, sa.ForeignKey('users.id'), nullable=False),
        sa.Column('followed_user_id', sa.Integer, sa.ForeignKey('users.id'), nullable=False),
        sa.Column('type', sa.String(32), nullable=False, server_default='user'),
        sa.Column('followed_at', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('follower_id', 'followed_user_id', 'type', name='uq_follow_edge'),
    )
    op.create_index('ix_follows_follower_id', 'follows', ['follower_id'])
    op.create_index('ix_follows_followed_user_id', 'follows', ['followed_user_id'])

    # 7. Notifications
    op.create_table(
        'notifications',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('user_id', sa.Integer, sa.ForeignKey('users.id'), nullable=False),
        sa.Column('type', sa.String(32), nullable=False),
        sa.Column('message', sa.String(512), nullable=False),
        sa.Column('is_read', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_notifications_user_id', 'notifications', ['user_id'])

def downgrade():
    op.drop_table('notifications')
    op.drop_table('follows')
    op.drop_table('fact_checks')
    op.drop_table('post_shares')
    op.drop_table('comments')
    op.drop_table('posts')
    op.drop_table('users')
