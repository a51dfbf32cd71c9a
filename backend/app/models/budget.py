"""
Budget database model.
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, DateTime, Numeric, Index
from app.database import Base


class Budget(Base):
    """Spending limit for one category in one calendar month."""

    __tablename__ = "budgets"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    owner = Column(String(64), nullable=False, index=True)
    category = Column(String(100), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    month = Column(Integer, nullable=False)  # 1-12
    year = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Duplicates per (owner, category, month, year) are allowed
    __table_args__ = (
        Index("idx_budget_owner_period", "owner", "year", "month"),
    )
