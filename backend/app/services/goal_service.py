"""Service for savings goal progress."""

from typing import List

from app.models.goal import Goal
from app.schemas.goal import GoalStats
from app.services.budget_service import round2


def progress_percent(goal: Goal) -> float:
    target = float(goal.target_amount)
    if target <= 0:
        return 0.0
    return float(goal.current_amount or 0) / target * 100


def compute_goal_stats(goals: List[Goal]) -> GoalStats:
    """Aggregate counts and progress across goals."""
    completed = sum(1 for g in goals if g.is_completed)
    average = round2(sum(progress_percent(g) for g in goals) / len(goals)) if goals else 0

    return GoalStats(
        total_goals=len(goals),
        completed_goals=completed,
        active_goals=len(goals) - completed,
        total_target_amount=sum(float(g.target_amount) for g in goals),
        total_current_amount=sum(float(g.current_amount or 0) for g in goals),
        average_progress=average,
    )
