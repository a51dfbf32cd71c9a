"""Transaction-level aggregates, bulk maintenance and CSV export."""

import csv
import logging
from datetime import date
from io import StringIO
from typing import List, Optional, Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.transaction import Transaction
from app.schemas.transaction import (
    CategoryAmount,
    ChartData,
    MonthAmount,
    TransactionResponse,
    TransactionSummary,
)
from app.services.budget_service import month_bounds, previous_month

logger = logging.getLogger(__name__)

# Transactions of a deleted category are moved here
FALLBACK_CATEGORY = "Miscellaneous"

RECENT_LIMIT = 5

EXPORT_HEADER = ["Date", "Type", "Category", "Amount", "Description", "Tags"]


def _totals_by_type(query) -> tuple:
    income = 0.0
    expenses = 0.0
    for is_income, total in query.group_by(Transaction.is_income).all():
        if is_income:
            income = float(total or 0)
        else:
            expenses = float(total or 0)
    return income, expenses


def get_summary(db: Session, owner: str) -> TransactionSummary:
    """All-time totals plus the most recent transactions."""
    income, expenses = _totals_by_type(
        db.query(Transaction.is_income, func.sum(Transaction.amount)).filter(Transaction.owner == owner)
    )

    count = db.query(Transaction).filter(Transaction.owner == owner).count()

    recent = db.query(Transaction).filter(
        Transaction.owner == owner
    ).order_by(
        Transaction.occurred_on.desc(),
        Transaction.created_at.desc()
    ).limit(RECENT_LIMIT).all()

    return TransactionSummary(
        total_income=income,
        total_expenses=expenses,
        balance=income - expenses,
        transaction_count=count,
        recent_transactions=[TransactionResponse.model_validate(t) for t in recent],
    )


def get_chart_data(db: Session, owner: str, months: int = 6, today: Optional[date] = None) -> ChartData:
    """
    Per-month income and expense totals for the last ``months`` calendar
    months (oldest first, current month last), and expenses by category over
    the same window.
    """
    today = today or date.today()

    # Walk back from the current month, then reverse into chronological order
    periods = []
    year, month = today.year, today.month
    for _ in range(months):
        periods.append((year, month))
        year, month = previous_month(year, month)
    periods.reverse()

    expenses_over_time = []
    income_over_time = []
    for year, month in periods:
        start, end = month_bounds(year, month)
        income, expenses = _totals_by_type(
            db.query(Transaction.is_income, func.sum(Transaction.amount)).filter(
                Transaction.owner == owner,
                Transaction.occurred_on >= start,
                Transaction.occurred_on <= end
            )
        )
        label = f"{year}-{month:02d}"
        expenses_over_time.append(MonthAmount(month=label, amount=expenses))
        income_over_time.append(MonthAmount(month=label, amount=income))

    window_start, _ = month_bounds(*periods[0])
    _, window_end = month_bounds(*periods[-1])

    rows = db.query(
        Transaction.category,
        func.sum(Transaction.amount)
    ).filter(
        Transaction.owner == owner,
        Transaction.is_income == False,
        Transaction.occurred_on >= window_start,
        Transaction.occurred_on <= window_end
    ).group_by(Transaction.category).all()

    by_category = sorted(
        (CategoryAmount(category=category, amount=float(total or 0)) for category, total in rows),
        key=lambda c: (-c.amount, c.category)
    )

    return ChartData(
        expenses_by_category=by_category,
        expenses_over_time=expenses_over_time,
        income_over_time=income_over_time,
    )


def bulk_delete(db: Session, owner: str, transaction_ids: Sequence[str]) -> int:
    """Delete the owner's transactions among the given ids. Unknown or foreign ids are ignored."""
    deleted = db.query(Transaction).filter(
        Transaction.owner == owner,
        Transaction.id.in_(sorted(set(transaction_ids)))
    ).delete(synchronize_session=False)
    db.commit()

    logger.info(f"Owner {owner} bulk-deleted {deleted} of {len(transaction_ids)} requested transactions")
    return deleted


def reassign_category(db: Session, owner: str, category: str) -> int:
    """Move every transaction in ``category`` to the fallback category."""
    if category == FALLBACK_CATEGORY:
        return 0

    updated = db.query(Transaction).filter(
        Transaction.owner == owner,
        Transaction.category == category
    ).update({Transaction.category: FALLBACK_CATEGORY}, synchronize_session=False)
    db.commit()

    logger.info(f"Owner {owner} removed category {category!r}; {updated} transactions moved to {FALLBACK_CATEGORY}")
    return updated


def sanitize_csv_value(value: str) -> str:
    """Prefix values that a spreadsheet would evaluate as a formula."""
    if not value:
        return ""
    if value.startswith(("=", "+", "-", "@", "\t", "\r")):
        return "\t" + value
    return value


def export_csv(transactions: List[Transaction]) -> str:
    output = StringIO()
    writer = csv.writer(output)
    writer.writerow(EXPORT_HEADER)
    for t in transactions:
        writer.writerow([
            t.occurred_on.isoformat(),
            "income" if t.is_income else "expense",
            sanitize_csv_value(t.category),
            f"{float(t.amount):.2f}",
            sanitize_csv_value(t.description or ""),
            sanitize_csv_value(";".join(t.tags or [])),
        ])
    return output.getvalue()
