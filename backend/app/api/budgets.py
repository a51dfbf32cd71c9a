"""
Budget API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from app.dependencies import get_db, get_current_owner
from app.models.budget import Budget
from app.schemas.budget import (
    BudgetCreate,
    BudgetResponse,
    BudgetWithSpent,
    BudgetReport,
    SpendingInsightsResponse,
)
from app.services import budget_service

router = APIRouter(prefix="/budgets", tags=["budgets"])


@router.post("", response_model=BudgetResponse, status_code=201)
def create_budget(
    budget: BudgetCreate,
    owner: str = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    """Create a budget for one category and month."""
    db_budget = Budget(
        owner=owner,
        category=budget.category,
        amount=budget.amount,
        month=budget.month,
        year=budget.year
    )
    db.add(db_budget)
    db.commit()
    db.refresh(db_budget)
    return db_budget


@router.get("", response_model=List[BudgetWithSpent])
def list_budgets(
    owner: str = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    """List budgets with amount spent and remaining in each budget's month."""
    return budget_service.get_budgets_with_spent(db, owner)


@router.get("/status", response_model=List[BudgetReport])
def get_budget_status(
    month: Optional[int] = Query(None, ge=1, le=12),
    year: Optional[int] = Query(None, ge=1970, le=9999),
    owner: str = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    """
    Budget vs actual for the current month.
    Returns: [{category, budget_amount, spent_amount, remaining_amount, percentage_spent, status, month, year}, ...]
    """
    return budget_service.get_budget_status(db, owner, year=year, month=month)


@router.get("/insights", response_model=SpendingInsightsResponse)
def get_spending_insights(
    month: Optional[int] = Query(None, ge=1, le=12),
    year: Optional[int] = Query(None, ge=1970, le=9999),
    owner: str = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    """Month-over-month spending per category, with alerts for sharp increases."""
    result = budget_service.get_spending_insights(db, owner, year=year, month=month)

    return SpendingInsightsResponse(
        insights=result.insights,
        alerts=result.alerts,
        total_current_month=result.total_current,
        total_last_month=result.total_previous
    )


@router.delete("/{budget_id}")
def delete_budget(
    budget_id: str,
    owner: str = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    """Delete a budget."""
    budget = db.query(Budget).filter(
        Budget.id == budget_id,
        Budget.owner == owner
    ).first()
    if not budget:
        raise HTTPException(status_code=404, detail="Budget not found")

    db.delete(budget)
    db.commit()
    return {"message": "Budget deleted successfully"}
