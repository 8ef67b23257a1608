"""Pytest configuration and shared fixtures for DebtTrack tests.

Provides a throwaway SQLite database, repository fixtures, record factories
and plain in-memory records for exercising the pure computations with raw
(string-dated) data.
"""

from __future__ import annotations

import tempfile
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from itertools import count
from pathlib import Path
from typing import Any, Optional

import pytest
from sqlmodel import Session, SQLModel, create_engine

# Import all models to ensure they're registered with SQLModel metadata
from debttrack.infra.repositories import SQLModelDebtRepository, SQLModelPaymentRepository
from debttrack.models import Debt, Payment
from debttrack.services.dashboard import DebtTracker


# =============================================================================
# Plain records (what a remote record store would hand back)
# =============================================================================

_ids = count(1)


@dataclass
class DebtRecord:
    total_amount: Any
    created_at: Any = "2024-01-01T09:00:00"
    description: Optional[str] = None
    id: int = field(default_factory=lambda: next(_ids))


@dataclass
class PaymentRecord:
    amount: Any
    payment_date: Any
    note: Optional[str] = None
    debt_id: int = 1
    id: int = field(default_factory=lambda: next(_ids))


@pytest.fixture
def make_debt():
    """Factory for in-memory debt records."""

    def _make(total_amount: Any = 5000.0, created_at: Any = "2024-01-01", **kwargs) -> DebtRecord:
        return DebtRecord(total_amount=total_amount, created_at=created_at, **kwargs)

    return _make


@pytest.fixture
def make_payment():
    """Factory for in-memory payment records."""

    def _make(amount: Any, payment_date: Any, note: Optional[str] = None) -> PaymentRecord:
        return PaymentRecord(amount=amount, payment_date=payment_date, note=note)

    return _make


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching what repositories expect (Callable[[], Session])."""

    def factory():
        return Session(db_engine, expire_on_commit=False)

    return factory


@pytest.fixture
def debt_repo(session_factory) -> SQLModelDebtRepository:
    return SQLModelDebtRepository(session_factory)


@pytest.fixture
def payment_repo(session_factory) -> SQLModelPaymentRepository:
    return SQLModelPaymentRepository(session_factory)


@pytest.fixture
def tracker(debt_repo, payment_repo) -> DebtTracker:
    return DebtTracker(debt_repo, payment_repo)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def debt_factory(db_engine):
    """Factory for persisted debts.

    Returns:
        Callable: Function that creates and persists Debt instances
    """

    def _create_debt(
        total_amount: float = 5000.0,
        description: str | None = "Car loan",
        created_at: datetime | None = None,
    ) -> Debt:
        debt = Debt(
            total_amount=total_amount,
            description=description,
            created_at=created_at or datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc),
        )
        with Session(db_engine, expire_on_commit=False) as session:
            session.add(debt)
            session.commit()
            session.refresh(debt)
        return debt

    return _create_debt


@pytest.fixture
def payment_factory(db_engine):
    """Factory for persisted payments.

    Returns:
        Callable: Function that creates and persists Payment instances
    """

    def _create_payment(
        debt: Debt,
        amount: float,
        payment_date: date,
        note: str | None = None,
    ) -> Payment:
        payment = Payment(debt_id=debt.id, amount=amount, payment_date=payment_date, note=note)
        with Session(db_engine, expire_on_commit=False) as session:
            session.add(payment)
            session.commit()
            session.refresh(payment)
        return payment

    return _create_payment


# =============================================================================
# Helper Utilities
# =============================================================================


def assert_float_equal(actual: float, expected: float, tolerance: float = 0.01):
    """Assert that two floats are equal within a tolerance (default one cent)."""
    assert (
        abs(actual - expected) < tolerance
    ), f"Expected {expected}, got {actual} (diff: {abs(actual - expected)})"
