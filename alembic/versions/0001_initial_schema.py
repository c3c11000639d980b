"""initial_schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-02-01

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision = '0001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None

# Shared by transactions and habits, so it is created once up front
transaction_type = postgresql.ENUM('INCOME', 'EXPENSE', name='transaction_type', create_type=False)
spending_category = postgresql.ENUM('Planned', 'Unplanned', 'Impulse', name='spending_category', create_type=False)


def upgrade():
    bind = op.get_bind()
    transaction_type.create(bind, checkfirst=True)
    spending_category.create(bind, checkfirst=True)

    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('google_id', sa.String(length=64), nullable=True),
        sa.Column('email', sa.String(length=320), nullable=True),
        sa.Column('hashed_password', sa.String(), nullable=False, server_default=''),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('is_superuser', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_verified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('full_name', sa.String(), nullable=True),
        sa.Column('login_method', sa.String(length=64), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('last_signed_in', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('has_completed_onboarding', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('has_purchased', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('purchased_at', sa.DateTime(), nullable=True),
        sa.Column('revenuecat_app_user_id', sa.String(length=128), nullable=True),
    )
    op.create_index(op.f('ix_users_google_id'), 'users', ['google_id'], unique=True)
    op.create_index(op.f('ix_users_email'), 'users', ['email'])
    op.create_index(op.f('ix_users_revenuecat_app_user_id'), 'users', ['revenuecat_app_user_id'])

    op.create_table(
        'buckets',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('balance', sa.Numeric(10, 2), nullable=False, server_default='0.00'),
        sa.Column('allocated', sa.Numeric(10, 2), nullable=False, server_default='0.00'),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index(op.f('ix_buckets_user_id'), 'buckets', ['user_id'])

    op.create_table(
        'transactions',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('bucket_id', sa.Uuid(), sa.ForeignKey('buckets.id', ondelete='CASCADE'), nullable=False),
        sa.Column('type', transaction_type, nullable=False),
        sa.Column('amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('category', spending_category, nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('date', sa.DateTime(), nullable=False),
        sa.Column('is_recurring', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('recurring_frequency', sa.String(length=50), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index(op.f('ix_transactions_user_id'), 'transactions', ['user_id'])

    op.create_table(
        'goals',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('bucket_id', sa.Uuid(), sa.ForeignKey('buckets.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('target_amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('current_amount', sa.Numeric(10, 2), nullable=False, server_default='0.00'),
        sa.Column('target_date', sa.DateTime(), nullable=True),
        sa.Column('is_completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index(op.f('ix_goals_user_id'), 'goals', ['user_id'])

    op.create_table(
        'habits',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('frequency', sa.String(length=50), nullable=False),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('bucket_id', sa.Uuid(), sa.ForeignKey('buckets.id', ondelete='CASCADE'), nullable=False),
        sa.Column('type', transaction_type, nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index(op.f('ix_habits_user_id'), 'habits', ['user_id'])

    op.create_table(
        'habit_completions',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('habit_id', sa.Uuid(), sa.ForeignKey('habits.id', ondelete='CASCADE'), nullable=False),
        sa.Column('completed_at', sa.DateTime(), nullable=False),
        sa.Column('transaction_id', sa.Uuid(), sa.ForeignKey('transactions.id', ondelete='SET NULL'), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index(op.f('ix_habit_completions_habit_id'), 'habit_completions', ['habit_id'])

    op.create_table(
        'journal_entries',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('financial_snapshot', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index(op.f('ix_journal_entries_user_id'), 'journal_entries', ['user_id'])


def downgrade():
    op.drop_table('journal_entries')
    op.drop_table('habit_completions')
    op.drop_table('habits')
    op.drop_table('goals')
    op.drop_table('transactions')
    op.drop_table('buckets')
    op.drop_index(op.f('ix_users_revenuecat_app_user_id'), table_name='users')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_index(op.f('ix_users_google_id'), table_name='users')
    op.drop_table('users')

    bind = op.get_bind()
    spending_category.drop(bind, checkfirst=True)
    transaction_type.drop(bind, checkfirst=True)
