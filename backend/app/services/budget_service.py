"""Budget-vs-actual and month-over-month spending analytics.

The ``compute_*`` functions are pure: they take already-fetched budgets,
transactions or per-category totals and return freshly built report objects.
The ``get_*`` functions are the database-facing wrappers used by the API.
"""

import calendar
import logging
import math
from datetime import date, datetime, timezone
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.budget import Budget
from app.models.transaction import Transaction
from app.schemas.budget import (
    BudgetReport,
    BudgetStatus,
    BudgetWithSpent,
    ChangeDirection,
    InsightsResult,
    SpendingAlert,
    SpendingInsight,
)

logger = logging.getLogger(__name__)

# Budget status thresholds (percent of budget used), checked high to low
OVER_THRESHOLD = 100
WARNING_THRESHOLD = 80
CAUTION_THRESHOLD = 60

# Month-over-month change below this magnitude counts as stable
STABLE_BAND = 10
ALERT_THRESHOLD = 50


def round2(value: float) -> float:
    """Round half-up to two decimal places. Non-finite values pass through."""
    if not math.isfinite(value):
        return float(value)
    with localcontext() as ctx:
        # Enough digits for any finite float plus two decimals
        ctx.prec = 400
        return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def month_bounds(year: int, month: int) -> Tuple[datetime, datetime]:
    """Return the first and last instant of a calendar month, both inclusive."""
    last_day = calendar.monthrange(year, month)[1]
    start = datetime(year, month, 1)
    end = datetime(year, month, last_day, 23, 59, 59, 999999)
    return start, end


def previous_month(year: int, month: int) -> Tuple[int, int]:
    """Return (year, month) of the calendar month before the given one."""
    if month == 1:
        return year - 1, 12
    return year, month - 1


def classify_budget_status(percentage_spent: float) -> BudgetStatus:
    if percentage_spent >= OVER_THRESHOLD:
        return BudgetStatus.over
    if percentage_spent >= WARNING_THRESHOLD:
        return BudgetStatus.warning
    if percentage_spent >= CAUTION_THRESHOLD:
        return BudgetStatus.caution
    return BudgetStatus.safe


def classify_change(percent_change: float) -> ChangeDirection:
    if percent_change > STABLE_BAND:
        return ChangeDirection.increase
    if percent_change < -STABLE_BAND:
        return ChangeDirection.decrease
    return ChangeDirection.stable


def _as_datetime(value) -> datetime:
    if isinstance(value, datetime):
        # Month windows are naive UTC, the way the database stores them
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    return value


def sum_spent(budget, transactions: Iterable) -> float:
    """Sum expense amounts in the budget's category within its own month."""
    start, end = month_bounds(budget.year, budget.month)
    spent = 0.0
    for t in transactions:
        if t.is_income or t.category != budget.category:
            continue
        if start <= _as_datetime(t.occurred_on) <= end:
            spent += float(t.amount)
    return spent


def compute_budget_report(budgets: Iterable, transactions: Iterable) -> List[BudgetReport]:
    """
    Build one BudgetReport per budget.

    Budgets are evaluated independently; two budgets for the same category and
    month each get their own report. A non-positive budget amount reports 0%.
    """
    transactions = list(transactions)
    reports = []

    for b in budgets:
        budget_amount = float(b.amount)
        spent = sum_spent(b, transactions)
        percentage = round2(spent / budget_amount * 100) if budget_amount > 0 else 0

        reports.append(BudgetReport(
            category=b.category,
            budget_amount=budget_amount,
            spent_amount=spent,
            remaining_amount=budget_amount - spent,
            percentage_spent=percentage,
            status=classify_budget_status(percentage),
            month=b.month,
            year=b.year,
        ))

    return reports


def compute_insights(
    current_month_totals: Mapping[str, float],
    previous_month_totals: Mapping[str, float],
) -> InsightsResult:
    """
    Compare this month's per-category spending with last month's.

    Only categories with spending this month produce a row. A category with no
    spending last month reports a 0% change.
    """
    ordered = sorted(
        current_month_totals.items(),
        key=lambda item: (-float(item[1]), item[0])
    )

    insights = []
    alerts = []
    for category, current in ordered:
        current = float(current)
        previous = float(previous_month_totals.get(category, 0))
        change = round2((current - previous) / previous * 100) if previous > 0 else 0

        insight = SpendingInsight(
            category=category,
            current_month_total=current,
            previous_month_total=previous,
            percent_change=change,
            change_direction=classify_change(change),
        )
        insights.append(insight)

        if insight.percent_change > ALERT_THRESHOLD:
            alerts.append(SpendingAlert(
                category=category,
                message=f"Your {category} spending increased by {insight.percent_change:.1f}% compared to last month",
            ))

    return InsightsResult(
        insights=insights,
        alerts=alerts,
        total_current=sum(float(v) for v in current_month_totals.values()),
        total_previous=sum(float(v) for v in previous_month_totals.values()),
    )


def get_month_category_totals(db: Session, owner: str, year: int, month: int) -> Dict[str, float]:
    """Total expense amount per category for one calendar month."""
    start, end = month_bounds(year, month)

    rows = db.query(
        Transaction.category,
        func.sum(Transaction.amount)
    ).filter(
        Transaction.owner == owner,
        Transaction.is_income == False,
        Transaction.occurred_on >= start,
        Transaction.occurred_on <= end
    ).group_by(Transaction.category).all()

    return {category: float(total or 0) for category, total in rows}


def _transactions_for_budgets(db: Session, owner: str, budgets: List[Budget]) -> List[Transaction]:
    if not budgets:
        return []

    windows = [month_bounds(b.year, b.month) for b in budgets]
    earliest = min(start for start, _ in windows)
    latest = max(end for _, end in windows)

    return db.query(Transaction).filter(
        Transaction.owner == owner,
        Transaction.is_income == False,
        Transaction.category.in_(sorted({b.category for b in budgets})),
        Transaction.occurred_on >= earliest,
        Transaction.occurred_on <= latest
    ).all()


def get_budget_status(
    db: Session,
    owner: str,
    year: Optional[int] = None,
    month: Optional[int] = None
) -> List[BudgetReport]:
    """Budget-vs-actual for the owner's budgets of one month (default: now)."""
    today = date.today()
    year = year or today.year
    month = month or today.month

    budgets = db.query(Budget).filter(
        Budget.owner == owner,
        Budget.year == year,
        Budget.month == month
    ).order_by(Budget.created_at).all()

    if not budgets:
        return []

    transactions = _transactions_for_budgets(db, owner, budgets)
    reports = compute_budget_report(budgets, transactions)

    over = [r.category for r in reports if r.status == BudgetStatus.over]
    if over:
        logger.info(f"Owner {owner} is over budget in {len(over)} categories for {year}-{month:02d}")

    return reports


def get_budgets_with_spent(db: Session, owner: str) -> List[BudgetWithSpent]:
    """All of the owner's budgets, each with spending for its own month."""
    budgets = db.query(Budget).filter(
        Budget.owner == owner
    ).order_by(Budget.year.desc(), Budget.month.desc(), Budget.created_at).all()

    transactions = _transactions_for_budgets(db, owner, budgets)

    results = []
    for b in budgets:
        spent = sum_spent(b, transactions)
        results.append(BudgetWithSpent(
            id=b.id,
            owner=b.owner,
            category=b.category,
            amount=float(b.amount),
            month=b.month,
            year=b.year,
            created_at=b.created_at,
            spent=spent,
            remaining=float(b.amount) - spent,
        ))
    return results


def get_spending_insights(
    db: Session,
    owner: str,
    year: Optional[int] = None,
    month: Optional[int] = None
) -> InsightsResult:
    """Insights for one month (default: now) against the month before it."""
    today = date.today()
    year = year or today.year
    month = month or today.month
    prev_year, prev_month = previous_month(year, month)

    current = get_month_category_totals(db, owner, year, month)
    previous = get_month_category_totals(db, owner, prev_year, prev_month)

    return compute_insights(current, previous)
