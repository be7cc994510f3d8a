"""Initial schema: users, stories, progress ledger, XP credits, badges

Revision ID: 001_initial
Revises: 
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '001_initial'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Create users table
    op.create_table(
        'users',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('password_hash', sa.String(), nullable=False),
        sa.Column('xp', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_email_verified', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('xp >= 0', name='ck_users_xp_non_negative'),
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    # Create stories table
    op.create_table(
        'stories',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('story_id', sa.String(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('language', sa.String(), nullable=False),
        sa.Column('difficulty', sa.String(), nullable=False, server_default='beginner'),
        sa.Column('pages', postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column('quizzes', postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column('total_xp', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('story_metadata', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('story_id'),
        sa.CheckConstraint('total_xp >= 0', name='ck_stories_total_xp_non_negative'),
    )
    op.create_index('ix_stories_is_active', 'stories', ['is_active'])
    op.create_index('ix_stories_difficulty', 'stories', ['difficulty'])
    op.create_index('ix_stories_language', 'stories', ['language'])

    # Create user_progress table
    op.create_table(
        'user_progress',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('user_id', sa.String(), nullable=False),
        sa.Column('story_id', sa.String(), nullable=False),
        sa.Column('quiz_responses', postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column('total_score', sa.Integer(), nullable=False),
        sa.Column('max_score', sa.Integer(), nullable=False),
        sa.Column('xp_earned', sa.Integer(), nullable=False),
        sa.Column('completed_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'story_id', name='uq_user_progress_user_story'),
        sa.CheckConstraint('total_score >= 0', name='ck_user_progress_total_score_non_negative'),
        sa.CheckConstraint('max_score >= 0', name='ck_user_progress_max_score_non_negative'),
        sa.CheckConstraint('xp_earned >= 0', name='ck_user_progress_xp_non_negative'),
    )
    op.create_index('ix_user_progress_user_id', 'user_progress', ['user_id'])
    op.create_index('ix_user_progress_story_id', 'user_progress', ['story_id'])
    op.create_index('ix_user_progress_completed_at', 'user_progress', ['completed_at'])

    # Create xp_credits table
    op.create_table(
        'xp_credits',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('user_id', sa.String(), nullable=False),
        sa.Column('progress_id', sa.String(), nullable=False),
        sa.Column('amount', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['progress_id'], ['user_progress.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('progress_id', name='uq_xp_credits_progress_id'),
        sa.CheckConstraint('amount >= 0', name='ck_xp_credits_amount_non_negative'),
    )
    op.create_index('ix_xp_credits_user_id', 'xp_credits', ['user_id'])

    # Create nft_badges table
    op.create_table(
        'nft_badges',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('user_id', sa.String(), nullable=False),
        sa.Column('badge_type', sa.String(), nullable=False),
        sa.Column('badge_name', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('image_url', sa.String(), nullable=False),
        sa.Column('badge_link', sa.String(), nullable=False),
        sa.Column('tx_hash', sa.String(), nullable=True),
        sa.Column('xp_required', sa.Integer(), nullable=False),
        sa.Column('issued_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'badge_type', name='uq_nft_badges_user_type'),
    )
    op.create_index('ix_nft_badges_user_id', 'nft_badges', ['user_id'])
    op.create_index('ix_nft_badges_badge_type', 'nft_badges', ['badge_type'])
    op.create_index('ix_nft_badges_issued_at', 'nft_badges', ['issued_at'])


def downgrade() -> None:
    op.drop_index('ix_nft_badges_issued_at', table_name='nft_badges')
    op.drop_index('ix_nft_badges_badge_type', table_name='nft_badges')
    op.drop_index('ix_nft_badges_user_id', table_name='nft_badges')
    op.drop_table('nft_badges')
    op.drop_index('ix_xp_credits_user_id', table_name='xp_credits')
    op.drop_table('xp_credits')
    op.drop_index('ix_user_progress_completed_at', table_name='user_progress')
    op.drop_index('ix_user_progress_story_id', table_name='user_progress')
    op.drop_index('ix_user_progress_user_id', table_name='user_progress')
    op.drop_table('user_progress')
    op.drop_index('ix_stories_language', table_name='stories')
    op.drop_index('ix_stories_difficulty', table_name='stories')
    op.drop_index('ix_stories_is_active', table_name='stories')
    op.drop_table('stories')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_table('users')
