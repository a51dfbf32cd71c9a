"""
Savings goal schemas.
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class GoalCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    target_amount: float = Field(..., gt=0)
    current_amount: float = Field(0, ge=0)
    target_date: Optional[datetime] = None
    description: Optional[str] = None


class GoalUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    target_amount: Optional[float] = Field(None, gt=0)
    current_amount: Optional[float] = Field(None, ge=0)
    target_date: Optional[datetime] = None
    description: Optional[str] = None


class GoalProgressUpdate(BaseModel):
    amount: float


class GoalResponse(BaseModel):
    id: str
    owner: str
    name: str
    target_amount: float
    current_amount: float
    target_date: Optional[datetime]
    description: Optional[str]
    is_completed: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class GoalStats(BaseModel):
    total_goals: int
    completed_goals: int
    active_goals: int
    total_target_amount: float
    total_current_amount: float
    average_progress: float
