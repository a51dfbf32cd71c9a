"""
Savings goal API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List

from app.dependencies import get_db, get_current_owner
from app.models.goal import Goal
from app.schemas.goal import (
    GoalCreate,
    GoalUpdate,
    GoalProgressUpdate,
    GoalResponse,
    GoalStats,
)
from app.services.goal_service import compute_goal_stats

router = APIRouter(prefix="/goals", tags=["goals"])


def _get_owned(db: Session, owner: str, goal_id: str) -> Goal:
    goal = db.query(Goal).filter(Goal.id == goal_id, Goal.owner == owner).first()
    if not goal:
        raise HTTPException(status_code=404, detail="Goal not found")
    return goal


@router.get("", response_model=List[GoalResponse])
def list_goals(
    owner: str = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    """List goals, newest first."""
    return db.query(Goal).filter(Goal.owner == owner).order_by(Goal.created_at.desc()).all()


@router.get("/stats", response_model=GoalStats)
def get_goal_stats(
    owner: str = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    """Counts and average progress across the caller's goals."""
    goals = db.query(Goal).filter(Goal.owner == owner).all()
    return compute_goal_stats(goals)


@router.post("", response_model=GoalResponse, status_code=201)
def create_goal(
    goal: GoalCreate,
    owner: str = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    """Create a savings goal."""
    db_goal = Goal(owner=owner, **goal.model_dump())
    db_goal.refresh_completion()
    db.add(db_goal)
    db.commit()
    db.refresh(db_goal)
    return db_goal


@router.get("/{goal_id}", response_model=GoalResponse)
def get_goal(
    goal_id: str,
    owner: str = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    """Get a single goal."""
    return _get_owned(db, owner, goal_id)


@router.put("/{goal_id}", response_model=GoalResponse)
def update_goal(
    goal_id: str,
    update: GoalUpdate,
    owner: str = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    """Update the fields that were provided."""
    goal = _get_owned(db, owner, goal_id)

    for field, value in update.model_dump(exclude_unset=True).items():
        if value is None and field in ("name", "target_amount", "current_amount"):
            continue
        setattr(goal, field, value)

    goal.refresh_completion()
    db.commit()
    db.refresh(goal)
    return goal


@router.patch("/{goal_id}/progress", response_model=GoalResponse)
def update_progress(
    goal_id: str,
    progress: GoalProgressUpdate,
    owner: str = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    """Add (or subtract, with a negative amount) to a goal's saved amount."""
    if progress.amount == 0:
        raise HTTPException(status_code=400, detail="Valid amount is required")

    goal = _get_owned(db, owner, goal_id)

    new_amount = float(goal.current_amount or 0) + progress.amount
    if new_amount < 0:
        raise HTTPException(status_code=400, detail="Progress cannot be negative")

    goal.current_amount = new_amount
    goal.refresh_completion()
    db.commit()
    db.refresh(goal)
    return goal


@router.delete("/{goal_id}")
def delete_goal(
    goal_id: str,
    owner: str = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    """Delete a goal."""
    goal = _get_owned(db, owner, goal_id)
    db.delete(goal)
    db.commit()
    return {"message": "Goal deleted successfully"}
