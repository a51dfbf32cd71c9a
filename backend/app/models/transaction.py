"""
Transaction database model.
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, Numeric, Text, JSON, Index
from app.database import Base


class Transaction(Base):
    """Income or expense record."""

    __tablename__ = "transactions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    owner = Column(String(64), nullable=False, index=True)
    category = Column(String(100), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)  # Always >= 0; direction comes from is_income
    occurred_on = Column(DateTime, nullable=False, default=datetime.utcnow)
    is_income = Column(Boolean, default=False, nullable=False)
    description = Column(Text, nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Indexes for common queries
    __table_args__ = (
        Index("idx_transaction_owner_date", "owner", "occurred_on"),
        Index("idx_transaction_owner_category", "owner", "category"),
    )
