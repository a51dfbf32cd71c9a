"""
Database models package.
"""

from app.models.transaction import Transaction
from app.models.budget import Budget
from app.models.category_rule import CategoryRule
from app.models.goal import Goal

__all__ = [
    "Transaction",
    "Budget",
    "CategoryRule",
    "Goal",
]
