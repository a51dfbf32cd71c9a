"""
Transaction schemas.
"""

from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime


def _clean_tags(tags: Optional[List[str]]) -> Optional[List[str]]:
    if tags is None:
        return None
    cleaned = []
    for tag in tags:
        tag = tag.strip()
        if tag and tag not in cleaned:
            cleaned.append(tag)
    return cleaned


def _strip(value):
    return value.strip() if isinstance(value, str) else value


class TransactionBase(BaseModel):
    amount: float = Field(..., ge=0)
    occurred_on: datetime
    is_income: bool = False
    description: Optional[str] = None
    tags: List[str] = []

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, v):
        return _clean_tags(v)


class TransactionCreate(TransactionBase):
    # When omitted, category rules are applied to the description
    category: Optional[str] = Field(None, min_length=1, max_length=100)

    @field_validator("category", mode="before")
    @classmethod
    def strip_category(cls, v):
        return _strip(v)


class TransactionUpdate(BaseModel):
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    amount: Optional[float] = Field(None, ge=0)
    occurred_on: Optional[datetime] = None
    is_income: Optional[bool] = None
    description: Optional[str] = None
    tags: Optional[List[str]] = None

    @field_validator("category", mode="before")
    @classmethod
    def strip_category(cls, v):
        return _strip(v)

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, v):
        return _clean_tags(v)


class TransactionResponse(BaseModel):
    id: str
    owner: str
    category: str
    amount: float
    occurred_on: datetime
    is_income: bool
    description: Optional[str]
    tags: List[str]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TransactionListResponse(BaseModel):
    items: list[TransactionResponse]
    total: int
    page: int
    pages: int


class TransactionSummary(BaseModel):
    """All-time income, expenses and balance for one owner."""
    total_income: float
    total_expenses: float
    balance: float
    transaction_count: int
    recent_transactions: List[TransactionResponse]


class CategoryAmount(BaseModel):
    category: str
    amount: float


class MonthAmount(BaseModel):
    month: str  # YYYY-MM
    amount: float


class ChartData(BaseModel):
    expenses_by_category: List[CategoryAmount]
    expenses_over_time: List[MonthAmount]
    income_over_time: List[MonthAmount]


class BulkDeleteRequest(BaseModel):
    transaction_ids: List[str] = Field(..., min_length=1)


class CategoryDeleteRequest(BaseModel):
    category: str = Field(..., min_length=1, max_length=100)

    @field_validator("category", mode="before")
    @classmethod
    def strip_category(cls, v):
        return _strip(v)
