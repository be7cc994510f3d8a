"""Pending email verification code on users

Revision ID: 002_email_verification
Revises: 001_initial
Create Date: 2026-10-19 12:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '002_email_verification'
down_revision = '001_initial'
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.add_column('users', sa.Column('verification_code', sa.String(), nullable=True))
    op.create_index(op.f('ix_users_verification_code'), 'users', ['verification_code'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_users_verification_code'), table_name='users')
    op.drop_column('users', 'verification_code')
