"""
Pydantic schemas package.
"""

from app.schemas.budget import (
    BudgetStatus,
    ChangeDirection,
    BudgetCreate,
    BudgetResponse,
    BudgetWithSpent,
    BudgetReport,
    SpendingInsight,
    SpendingAlert,
    InsightsResult,
    SpendingInsightsResponse,
)
from app.schemas.category_rule import (
    CategoryRuleCreate,
    CategoryRuleUpdate,
    CategoryRuleResponse,
)
from app.schemas.goal import (
    GoalCreate,
    GoalUpdate,
    GoalProgressUpdate,
    GoalResponse,
    GoalStats,
)
from app.schemas.transaction import (
    TransactionBase,
    TransactionCreate,
    TransactionUpdate,
    TransactionResponse,
    TransactionListResponse,
    TransactionSummary,
    CategoryAmount,
    MonthAmount,
    ChartData,
    BulkDeleteRequest,
    CategoryDeleteRequest,
)

__all__ = [
    "BudgetStatus",
    "ChangeDirection",
    "BudgetCreate",
    "BudgetResponse",
    "BudgetWithSpent",
    "BudgetReport",
    "SpendingInsight",
    "SpendingAlert",
    "InsightsResult",
    "SpendingInsightsResponse",
    "CategoryRuleCreate",
    "CategoryRuleUpdate",
    "CategoryRuleResponse",
    "GoalCreate",
    "GoalUpdate",
    "GoalProgressUpdate",
    "GoalResponse",
    "GoalStats",
    "TransactionBase",
    "TransactionCreate",
    "TransactionUpdate",
    "TransactionResponse",
    "TransactionListResponse",
    "TransactionSummary",
    "CategoryAmount",
    "MonthAmount",
    "ChartData",
    "BulkDeleteRequest",
    "CategoryDeleteRequest",
]
