"""Pytest fixtures for testing"""

import itertools
import pytest
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Callable, Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from expense_tracker.api.main import create_app
from expense_tracker.infrastructure.database.models import Base
from expense_tracker.infrastructure.database.session import get_db
from expense_tracker.infrastructure.storage.memory import InMemoryRecordStore
from expense_tracker.domain.models import ExpenseRecord, ExpenseStatus
from expense_tracker.services.ledger import ExpenseLedger


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

BASE_TIME = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def clock() -> Callable[[], datetime]:
    """Deterministic clock advancing one second per call"""
    ticks = itertools.count()
    return lambda: BASE_TIME + timedelta(seconds=next(ticks))


@pytest.fixture
def ledger(clock: Callable[[], datetime]) -> ExpenseLedger:
    """Ledger over an empty in-memory store"""
    return ExpenseLedger(InMemoryRecordStore(), clock=clock)


@pytest.fixture
def make_expense() -> Callable[..., ExpenseRecord]:
    """Factory for expense records with sensible defaults"""
    counter = itertools.count(1)

    def _make(
        person: str = "Martyna",
        item: str = "Groceries",
        cost: str = "10.00",
        minutes: int | None = None,
        paid_batch_id: str | None = None,
        paid_minutes: int = 100,
        expense_id: str | None = None,
    ) -> ExpenseRecord:
        n = next(counter)
        paid = paid_batch_id is not None
        return ExpenseRecord(
            id=expense_id or f"exp-{n}",
            person=person,
            item=item,
            cost=Decimal(cost),
            status=ExpenseStatus.PAID if paid else ExpenseStatus.UNPAID,
            added_at=BASE_TIME + timedelta(minutes=n if minutes is None else minutes),
            paid_at=BASE_TIME + timedelta(minutes=paid_minutes) if paid else None,
            paid_batch_id=paid_batch_id,
        )

    return _make
