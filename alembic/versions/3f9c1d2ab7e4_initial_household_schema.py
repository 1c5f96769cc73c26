"""initial_household_schema

Revision ID: 3f9c1d2ab7e4
Revises:
Create Date: 2026-10-18 09:12:41.518204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9c1d2ab7e4'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    ]


def _owner_table(name: str, resource_table: str, resource_fk: str, constraint: str) -> None:
    op.create_table(
        name,
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column(resource_fk, sa.String(length=36), nullable=False),
        sa.Column('profile_id', sa.String(length=36), nullable=False),
        sa.ForeignKeyConstraint([resource_fk], [f'{resource_table}.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint(resource_fk, 'profile_id', name=constraint),
    )
    op.create_index(f'ix_{name}_{resource_fk}', name, [resource_fk])
    op.create_index(f'ix_{name}_profile_id', name, ['profile_id'])


def upgrade() -> None:
    """
    Create the household schema.

    Creates:
    - users, profiles, households, household_members
    - stock accounts with owners, holdings and price history
    - pension accounts with owners and deposits
    - misc assets with owners
    - net worth snapshots
    - household budget: category groups, categories, transactions
    """
    # 1. Identity and households
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('image', sa.String(length=500), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'profiles',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('image', sa.String(length=500), nullable=True),
        sa.Column('color', sa.String(length=7), nullable=True),
        sa.Column('user_id', sa.String(length=36), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id'),
    )

    op.create_table(
        'households',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'household_members',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('household_id', sa.String(length=36), nullable=False),
        sa.Column('profile_id', sa.String(length=36), nullable=False),
        sa.Column(
            'role',
            sa.Enum('owner', 'admin', 'member', name='householdrole', native_enum=False),
            nullable=False,
        ),
        sa.Column('joined_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['household_id'], ['households.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('household_id', 'profile_id', name='uq_household_profile'),
    )
    op.create_index('ix_household_members_household_id', 'household_members', ['household_id'])
    op.create_index('ix_household_members_profile_id', 'household_members', ['profile_id'])

    # 2. Stocks
    op.create_table(
        'stock_accounts',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('broker', sa.String(length=255), nullable=True),
        sa.Column('currency', sa.String(length=3), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    _owner_table('stock_account_owners', 'stock_accounts', 'account_id', 'uq_stock_account_owner')

    op.create_table(
        'stock_holdings',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('symbol', sa.String(length=20), nullable=False),
        sa.Column('quantity', sa.Numeric(precision=18, scale=8), nullable=False),
        sa.Column('avg_cost_basis', sa.Numeric(precision=18, scale=4), nullable=False),
        sa.Column('account_id', sa.String(length=36), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['account_id'], ['stock_accounts.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('account_id', 'symbol', name='uq_stock_holding_symbol'),
    )

    op.create_table(
        'stock_price_history',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('symbol', sa.String(length=20), nullable=False),
        sa.Column('price', sa.Numeric(precision=18, scale=4), nullable=False),
        sa.Column('timestamp', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('symbol', 'timestamp', name='uq_stock_price_symbol_timestamp'),
    )
    op.create_index('ix_stock_price_history_symbol', 'stock_price_history', ['symbol'])

    # 3. Pensions
    op.create_table(
        'pension_accounts',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column(
            'type',
            sa.Enum('pension', 'hishtalmut', name='pensionaccounttype', native_enum=False),
            nullable=False,
        ),
        sa.Column('provider_name', sa.String(length=255), nullable=False),
        sa.Column('account_name', sa.String(length=255), nullable=False),
        sa.Column('current_value', sa.Numeric(precision=18, scale=2), nullable=False),
        sa.Column('fee_from_deposit', sa.Numeric(precision=7, scale=4), nullable=False),
        sa.Column('fee_from_total', sa.Numeric(precision=7, scale=4), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    _owner_table(
        'pension_account_owners', 'pension_accounts', 'account_id', 'uq_pension_account_owner'
    )

    op.create_table(
        'pension_deposits',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('deposit_date', sa.Date(), nullable=False),
        sa.Column('salary_month', sa.Date(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=18, scale=2), nullable=False),
        sa.Column('employer', sa.String(length=255), nullable=False),
        sa.Column('account_id', sa.String(length=36), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['account_id'], ['pension_accounts.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_pension_deposits_salary_month', 'pension_deposits', ['salary_month'])
    op.create_index('ix_pension_deposits_account_id', 'pension_deposits', ['account_id'])

    # 4. Misc assets and liabilities
    op.create_table(
        'misc_assets',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column(
            'type',
            sa.Enum(
                'bank_deposit', 'loan', 'mortgage', 'child_savings',
                name='miscassettype',
                native_enum=False,
            ),
            nullable=False,
        ),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('current_value', sa.Numeric(precision=18, scale=2), nullable=False),
        sa.Column('interest_rate', sa.Numeric(precision=7, scale=4), nullable=False),
        sa.Column('monthly_payment', sa.Numeric(precision=18, scale=2), nullable=True),
        sa.Column('monthly_deposit', sa.Numeric(precision=18, scale=2), nullable=True),
        sa.Column('maturity_date', sa.Date(), nullable=True),
        sa.Column('user_id', sa.String(length=36), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    _owner_table('misc_asset_owners', 'misc_assets', 'asset_id', 'uq_misc_asset_owner')

    # 5. Net worth history
    op.create_table(
        'net_worth_snapshots',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('net_worth', sa.Numeric(precision=18, scale=2), nullable=False),
        sa.Column('portfolio', sa.Numeric(precision=18, scale=2), nullable=False),
        sa.Column('pension', sa.Numeric(precision=18, scale=2), nullable=False),
        sa.Column('assets', sa.Numeric(precision=18, scale=2), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'date', name='uq_net_worth_user_date'),
    )
    op.create_index('ix_net_worth_snapshots_user_id', 'net_worth_snapshots', ['user_id'])
    op.create_index('ix_net_worth_snapshots_date', 'net_worth_snapshots', ['date'])

    # 6. Household budget
    op.create_table(
        'budget_category_groups',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('sort_order', sa.Integer(), nullable=False),
        sa.Column('household_id', sa.String(length=36), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['household_id'], ['households.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        'ix_budget_category_groups_household_id', 'budget_category_groups', ['household_id']
    )

    op.create_table(
        'budget_categories',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('group_id', sa.String(length=36), nullable=False),
        sa.Column('budget', sa.Numeric(precision=18, scale=2), nullable=True),
        sa.Column('is_must', sa.Boolean(), nullable=False),
        sa.Column('sort_order', sa.Integer(), nullable=False),
        sa.Column('household_id', sa.String(length=36), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['group_id'], ['budget_category_groups.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['household_id'], ['households.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_budget_categories_group_id', 'budget_categories', ['group_id'])
    op.create_index('ix_budget_categories_household_id', 'budget_categories', ['household_id'])

    op.create_table(
        'budget_transactions',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column(
            'type',
            sa.Enum('income', 'expense', name='transactiontype', native_enum=False),
            nullable=False,
        ),
        sa.Column('transaction_date', sa.Date(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=18, scale=2), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False),
        sa.Column('category_id', sa.String(length=36), nullable=True),
        sa.Column('profile_id', sa.String(length=36), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('household_id', sa.String(length=36), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['category_id'], ['budget_categories.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['household_id'], ['households.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        'ix_budget_transactions_household_date',
        'budget_transactions',
        ['household_id', 'transaction_date'],
    )


def downgrade() -> None:
    """
    Drop the household schema.

    WARNING: This deletes all data.
    """
    # Children before the tables they reference
    for table in (
        'budget_transactions',
        'budget_categories',
        'budget_category_groups',
        'net_worth_snapshots',
        'misc_asset_owners',
        'misc_assets',
        'pension_deposits',
        'pension_account_owners',
        'pension_accounts',
        'stock_price_history',
        'stock_holdings',
        'stock_account_owners',
        'stock_accounts',
        'household_members',
        'households',
        'profiles',
        'users',
    ):
        op.drop_table(table)
