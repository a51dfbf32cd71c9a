"""
Budget and spending-analytics schemas.
"""

from pydantic import BaseModel, Field, field_validator
from typing import List
from datetime import datetime
from enum import Enum


class BudgetStatus(str, Enum):
    """How much of a budget has been consumed."""
    safe = "safe"
    caution = "caution"
    warning = "warning"
    over = "over"


class ChangeDirection(str, Enum):
    """Month-over-month spending direction."""
    increase = "increase"
    decrease = "decrease"
    stable = "stable"


class BudgetBase(BaseModel):
    category: str = Field(..., min_length=1, max_length=100)
    amount: float
    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=1970, le=9999)

    @field_validator("category", mode="before")
    @classmethod
    def strip_category(cls, v):
        # Runs ahead of the length check so a blank name is rejected
        return v.strip() if isinstance(v, str) else v


class BudgetCreate(BudgetBase):
    pass


class BudgetResponse(BudgetBase):
    id: str
    owner: str
    created_at: datetime

    model_config = {"from_attributes": True}


class BudgetWithSpent(BudgetResponse):
    spent: float
    remaining: float


class BudgetReport(BaseModel):
    category: str
    budget_amount: float
    spent_amount: float
    remaining_amount: float
    percentage_spent: float
    status: BudgetStatus
    month: int
    year: int


class SpendingInsight(BaseModel):
    category: str
    current_month_total: float
    previous_month_total: float
    percent_change: float
    change_direction: ChangeDirection


class SpendingAlert(BaseModel):
    severity: str = "warning"
    category: str
    message: str


class InsightsResult(BaseModel):
    insights: List[SpendingInsight]
    alerts: List[SpendingAlert]
    total_current: float
    total_previous: float


class SpendingInsightsResponse(BaseModel):
    insights: List[SpendingInsight]
    alerts: List[SpendingAlert]
    total_current_month: float
    total_last_month: float
