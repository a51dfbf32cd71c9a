"""
Category rule database model.
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, UniqueConstraint
from app.database import Base


class CategoryRule(Base):
    """Maps a description keyword to a category."""

    __tablename__ = "category_rules"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    owner = Column(String(64), nullable=False, index=True)
    keyword = Column(String(100), nullable=False)  # Stored lower-cased
    category = Column(String(100), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint("owner", "keyword", name="uq_category_rule_owner_keyword"),
    )
