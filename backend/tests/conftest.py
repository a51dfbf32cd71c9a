"""Shared test fixtures."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient
from datetime import datetime
from decimal import Decimal
import uuid

from app.database import Base
from app.dependencies import get_db
from app.main import app
from app.models.transaction import Transaction
from app.models.budget import Budget
from app.models.category_rule import CategoryRule
from app.models.goal import Goal

OWNER = "user-1"


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test using in-memory SQLite."""
    # Use StaticPool to ensure all connections use the same in-memory database
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    Base.metadata.create_all(bind=engine)

    # Create session
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database override, acting as OWNER."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app, headers={"X-User-Id": OWNER}) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_transaction(db_session):
    """Factory for persisted transactions."""
    def _make(category, amount, occurred_on, is_income=False, owner=OWNER, description=None, tags=None):
        txn = Transaction(
            id=str(uuid.uuid4()),
            owner=owner,
            category=category,
            amount=Decimal(str(amount)),
            occurred_on=occurred_on,
            is_income=is_income,
            description=description,
            tags=tags or []
        )
        db_session.add(txn)
        db_session.commit()
        db_session.refresh(txn)
        return txn
    return _make


@pytest.fixture
def make_budget(db_session):
    """Factory for persisted budgets."""
    def _make(category, amount, month, year, owner=OWNER):
        budget = Budget(
            id=str(uuid.uuid4()),
            owner=owner,
            category=category,
            amount=Decimal(str(amount)),
            month=month,
            year=year
        )
        db_session.add(budget)
        db_session.commit()
        db_session.refresh(budget)
        return budget
    return _make


@pytest.fixture
def sample_rule(db_session):
    """Create a sample category rule."""
    rule = CategoryRule(
        id=str(uuid.uuid4()),
        owner=OWNER,
        keyword="starbucks",
        category="Coffee"
    )
    db_session.add(rule)
    db_session.commit()
    db_session.refresh(rule)
    return rule


@pytest.fixture
def sample_goal(db_session):
    """Create a sample savings goal."""
    goal = Goal(
        id=str(uuid.uuid4()),
        owner=OWNER,
        name="Emergency fund",
        target_amount=Decimal("1000.00"),
        current_amount=Decimal("250.00"),
        created_at=datetime(2024, 1, 1)
    )
    db_session.add(goal)
    db_session.commit()
    db_session.refresh(goal)
    return goal
