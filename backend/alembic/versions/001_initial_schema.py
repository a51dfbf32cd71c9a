"""initial schema: transactions, budgets, category rules, goals

Revision ID: 001
Revises: 
Create Date: 2026-10-19 09:00:00
"""

from alembic import op
import sqlalchemy as sa


revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "transactions",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("owner", sa.String(64), nullable=False),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("occurred_on", sa.DateTime(), nullable=False),
        sa.Column("is_income", sa.Boolean(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_transactions_owner", "transactions", ["owner"])
    op.create_index("idx_transaction_owner_date", "transactions", ["owner", "occurred_on"])
    op.create_index("idx_transaction_owner_category", "transactions", ["owner", "category"])

    op.create_table(
        "budgets",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("owner", sa.String(64), nullable=False),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("month", sa.Integer(), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_budgets_owner", "budgets", ["owner"])
    op.create_index("idx_budget_owner_period", "budgets", ["owner", "year", "month"])

    op.create_table(
        "category_rules",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("owner", sa.String(64), nullable=False),
        sa.Column("keyword", sa.String(100), nullable=False),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("owner", "keyword", name="uq_category_rule_owner_keyword"),
    )
    op.create_index("ix_category_rules_owner", "category_rules", ["owner"])

    op.create_table(
        "goals",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("owner", sa.String(64), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("target_amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("current_amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("target_date", sa.DateTime(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_completed", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_goals_owner", "goals", ["owner"])


def downgrade() -> None:
    op.drop_index("ix_goals_owner", table_name="goals")
    op.drop_table("goals")
    op.drop_index("ix_category_rules_owner", table_name="category_rules")
    op.drop_table("category_rules")
    op.drop_index("idx_budget_owner_period", table_name="budgets")
    op.drop_index("ix_budgets_owner", table_name="budgets")
    op.drop_table("budgets")
    op.drop_index("idx_transaction_owner_category", table_name="transactions")
    op.drop_index("idx_transaction_owner_date", table_name="transactions")
    op.drop_index("ix_transactions_owner", table_name="transactions")
    op.drop_table("transactions")
