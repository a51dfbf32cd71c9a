"""
Transaction API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date, datetime, time

from app.dependencies import get_db, get_current_owner
from app.models.transaction import Transaction
from app.schemas.transaction import (
    TransactionCreate,
    TransactionResponse,
    TransactionUpdate,
    TransactionListResponse,
    TransactionSummary,
    ChartData,
    BulkDeleteRequest,
    CategoryDeleteRequest
)
from app.services import transaction_service
from app.services.category_rule_service import categorize

router = APIRouter(prefix="/transactions", tags=["transactions"])


def _get_owned(db: Session, owner: str, transaction_id: str) -> Transaction:
    transaction = db.query(Transaction).filter(
        Transaction.id == transaction_id,
        Transaction.owner == owner
    ).first()
    if not transaction:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return transaction


@router.post("", response_model=TransactionResponse, status_code=201)
def create_transaction(
    txn: TransactionCreate,
    owner: str = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    """Record an income or expense. Without a category, category rules decide."""
    category = txn.category if txn.category else categorize(db, owner, txn.description)

    transaction = Transaction(
        owner=owner,
        category=category,
        amount=txn.amount,
        occurred_on=txn.occurred_on,
        is_income=txn.is_income,
        description=txn.description,
        tags=txn.tags
    )
    db.add(transaction)
    db.commit()
    db.refresh(transaction)
    return TransactionResponse.model_validate(transaction)


@router.get("", response_model=TransactionListResponse)
def list_transactions(
    page: int = Query(1, ge=1),
    per_page: int = Query(50, ge=1, le=100),
    category: Optional[str] = None,
    is_income: Optional[bool] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    tag: Optional[str] = None,
    owner: str = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    """List transactions with filtering and pagination"""
    query = db.query(Transaction).filter(Transaction.owner == owner)

    if category:
        query = query.filter(Transaction.category == category)
    if is_income is not None:
        query = query.filter(Transaction.is_income == is_income)
    if start_date:
        query = query.filter(Transaction.occurred_on >= datetime.combine(start_date, time.min))
    if end_date:
        query = query.filter(Transaction.occurred_on <= datetime.combine(end_date, time.max))

    query = query.order_by(Transaction.occurred_on.desc())

    if tag:
        # Tags live in a JSON column, so tag filtering happens in Python
        transactions = [t for t in query.all() if tag in (t.tags or [])]
        total = len(transactions)
        transactions = transactions[(page - 1) * per_page:page * per_page]
    else:
        total = query.count()
        transactions = query.offset((page - 1) * per_page).limit(per_page).all()

    pages = (total + per_page - 1) // per_page

    return TransactionListResponse(
        items=[TransactionResponse.model_validate(t) for t in transactions],
        total=total,
        page=page,
        pages=pages
    )


@router.get("/tags", response_model=List[str])
def list_tags(
    owner: str = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    """All distinct tags used by the owner."""
    tags = set()
    for (txn_tags,) in db.query(Transaction.tags).filter(Transaction.owner == owner).all():
        tags.update(txn_tags or [])
    return sorted(tags)


@router.get("/categories", response_model=List[str])
def list_categories(
    is_income: Optional[bool] = None,
    owner: str = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    """All distinct categories used by the owner."""
    query = db.query(Transaction.category).filter(Transaction.owner == owner)
    if is_income is not None:
        query = query.filter(Transaction.is_income == is_income)
    return sorted({category for (category,) in query.distinct().all()})


@router.get("/summary", response_model=TransactionSummary)
def get_transaction_summary(
    owner: str = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    """Total income, total expenses, balance and the latest transactions."""
    return transaction_service.get_summary(db, owner)


@router.get("/charts", response_model=ChartData)
def get_chart_data(
    months: int = Query(6, ge=1, le=24),
    owner: str = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    """
    Chart series for the dashboard.
    Returns: expenses_by_category, expenses_over_time, income_over_time
    """
    return transaction_service.get_chart_data(db, owner, months=months)


@router.get("/export")
def export_transactions(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    owner: str = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    """Download the owner's transactions as CSV, newest first."""
    query = db.query(Transaction).filter(Transaction.owner == owner)
    if start_date:
        query = query.filter(Transaction.occurred_on >= datetime.combine(start_date, time.min))
    if end_date:
        query = query.filter(Transaction.occurred_on <= datetime.combine(end_date, time.max))

    csv_text = transaction_service.export_csv(query.order_by(Transaction.occurred_on.desc()).all())
    filename = f"transactions_{date.today().isoformat()}.csv"
    return StreamingResponse(
        iter([csv_text]),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )


@router.delete("/bulk")
def bulk_delete_transactions(
    request: BulkDeleteRequest,
    owner: str = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    """Delete several transactions at once"""
    deleted = transaction_service.bulk_delete(db, owner, request.transaction_ids)
    return {"message": f"{deleted} transactions deleted", "deleted": deleted}


@router.delete("/category")
def delete_category(
    request: CategoryDeleteRequest,
    owner: str = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    """Remove a category by moving its transactions to the fallback category."""
    updated = transaction_service.reassign_category(db, owner, request.category)
    return {
        "message": f"Category '{request.category}' deleted",
        "updated": updated,
        "moved_to": transaction_service.FALLBACK_CATEGORY
    }


@router.get("/{transaction_id}", response_model=TransactionResponse)
def get_transaction(
    transaction_id: str,
    owner: str = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    """Get a single transaction"""
    return TransactionResponse.model_validate(_get_owned(db, owner, transaction_id))


@router.patch("/{transaction_id}", response_model=TransactionResponse)
def update_transaction(
    transaction_id: str,
    update: TransactionUpdate,
    owner: str = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    """Update a transaction"""
    transaction = _get_owned(db, owner, transaction_id)

    update_data = update.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        # Only description may be cleared
        if value is None and field != "description":
            continue
        setattr(transaction, field, value)

    db.commit()
    db.refresh(transaction)

    return TransactionResponse.model_validate(transaction)


@router.delete("/{transaction_id}")
def delete_transaction(
    transaction_id: str,
    owner: str = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    """Delete a transaction"""
    transaction = _get_owned(db, owner, transaction_id)
    db.delete(transaction)
    db.commit()
    return {"message": "Transaction deleted successfully"}
