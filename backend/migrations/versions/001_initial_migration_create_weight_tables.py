"""Initial migration - Create users, weight_entries and user_profiles tables

Revision ID: 001
Revises:
Create Date: 2024-01-05 09:30:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    """Create the users, weight_entries and user_profiles tables."""
    op.create_table('users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(length=80), nullable=False),
        sa.Column('email', sa.String(length=120), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True)
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table('weight_entries',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('weight', sa.Float(), nullable=False),
        sa.Column('entry_date', sa.Date(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_weight_entries_user_id', 'weight_entries', ['user_id'], unique=False)
    op.create_index('ix_weight_entries_entry_date', 'weight_entries', ['entry_date'], unique=False)
    op.create_index('idx_weight_entries_user_date', 'weight_entries', ['user_id', 'entry_date'], unique=False)

    op.create_table('user_profiles',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('height', sa.Float(), nullable=True),
        sa.Column('dark_mode', sa.Boolean(), nullable=True),
        sa.Column('weight_goal', sa.Float(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id')
    )


def downgrade():
    """Drop all weight tracker tables."""
    op.drop_table('user_profiles')

    op.drop_index('idx_weight_entries_user_date', table_name='weight_entries')
    op.drop_index('ix_weight_entries_entry_date', table_name='weight_entries')
    op.drop_index('ix_weight_entries_user_id', table_name='weight_entries')
    op.drop_table('weight_entries')

    op.drop_index('ix_users_email', table_name='users')
    op.drop_index('ix_users_username', table_name='users')
    op.drop_table('users')
