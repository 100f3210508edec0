"""initial schema

Revision ID: 3b1f0c7d2a91
Revises:
Create Date: 2026-10-12 18:04:21.512733

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3b1f0c7d2a91'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _identity():
    return [
        sa.Column('seq', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'groups',
        *_identity(),
        sa.Column('id', sa.String(), nullable=False, unique=True, index=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=False),
        sa.Column('emoji', sa.String(), nullable=False),
        sa.Column('owner_id', sa.String(), nullable=False, index=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        'group_members',
        *_identity(),
        sa.Column('id', sa.String(), nullable=False, unique=True, index=True),
        sa.Column('group_id', sa.String(), nullable=False),
        sa.Column('user_id', sa.String(), nullable=True, index=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('role', sa.String(), nullable=False),

        sa.ForeignKeyConstraint(['group_id'], ['groups.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('group_id', 'email', name='uq_group_member_email'),
    )

    op.create_table(
        'group_expenses',
        *_identity(),
        sa.Column('id', sa.String(), nullable=False, unique=True, index=True),
        sa.Column('group_id', sa.String(), nullable=False, index=True),
        sa.Column('paid_by', sa.String(), nullable=False),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('category', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('split_type', sa.String(), nullable=False),

        sa.ForeignKeyConstraint(['group_id'], ['groups.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['paid_by'], ['group_members.id'], ondelete='CASCADE'),
    )

    op.create_table(
        'expense_shares',
        sa.Column('seq', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('expense_id', sa.String(), nullable=False, index=True),
        sa.Column('member_id', sa.String(), nullable=False),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),

        sa.ForeignKeyConstraint(['expense_id'], ['group_expenses.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['member_id'], ['group_members.id'], ondelete='CASCADE'),
    )

    op.create_table(
        'rules',
        *_identity(),
        sa.Column('id', sa.String(), nullable=False, unique=True, index=True),
        sa.Column('user_id', sa.String(), nullable=False, index=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('condition', sa.JSON(), nullable=False),
        sa.Column('action', sa.JSON(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        'splits',
        *_identity(),
        sa.Column('id', sa.String(), nullable=False, unique=True, index=True),
        sa.Column('user_id', sa.String(), nullable=False, index=True),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('total_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('read', sa.Boolean(), nullable=False),
    )

    op.create_table(
        'split_participants',
        sa.Column('seq', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('id', sa.String(), nullable=False, index=True),
        sa.Column('split_id', sa.String(), nullable=False, index=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('share_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('paid_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('role', sa.String(), nullable=False),
        sa.Column('status', sa.String(), nullable=False),
        sa.Column('paid_at', sa.DateTime(timezone=True), nullable=True),

        sa.ForeignKeyConstraint(['split_id'], ['splits.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('split_id', 'id', name='uq_participant_per_split'),
    )

    op.create_table(
        'budgets',
        *_identity(),
        sa.Column('id', sa.String(), nullable=False, unique=True, index=True),
        sa.Column('user_id', sa.String(), nullable=False, index=True),
        sa.Column('category', sa.String(), nullable=False),
        sa.Column('limit', sa.Numeric(12, 2), nullable=False),
        sa.Column('period', sa.String(), nullable=False),
        sa.Column('spent', sa.Numeric(12, 2), nullable=False),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),

        sa.UniqueConstraint('user_id', 'category', 'period', name='uq_budget_category_period'),
    )


def downgrade() -> None:
    op.drop_table('budgets')
    op.drop_table('split_participants')
    op.drop_table('splits')
    op.drop_table('rules')
    op.drop_table('expense_shares')
    op.drop_table('group_expenses')
    op.drop_table('group_members')
    op.drop_table('groups')
