"""SQLModel implementation of the Debt repository."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Optional

from sqlmodel import Session, select

from ...errors import RecordNotFoundError
from ...logging_config import get_logger
from ...models.debt import Debt
from ._errors import KEEP, store_errors

logger = get_logger(__name__)


class SQLModelDebtRepository:
    """SQLModel-based debt repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_debt(self) -> Optional[Debt]:
        """Return the most recently created debt, or None."""
        with store_errors("fetching the debt"), self.session_factory() as session:
            statement = (
                select(Debt)
                .order_by(Debt.created_at.desc(), Debt.id.desc())  # type: ignore
                .limit(1)
            )
            return session.exec(statement).first()

    def exists(self) -> bool:
        """Return True when a debt has been set up."""
        return self.get_debt() is not None

    def create_debt(self, total_amount: float, description: Optional[str] = None) -> Debt:
        """Create the debt."""
        if total_amount <= 0:
            raise ValueError("total_amount must be positive")
        with store_errors("creating the debt"), self.session_factory() as session:
            debt = Debt(total_amount=float(total_amount), description=description)
            session.add(debt)
            session.commit()
            session.refresh(debt)
            logger.info("Debt created", extra={"debt_id": debt.id, "total_amount": debt.total_amount})
            return debt

    def update_debt(
        self,
        debt_id: int,
        total_amount: Optional[float] = KEEP,  # type: ignore[assignment]
        description: Optional[str] = KEEP,  # type: ignore[assignment]
    ) -> Debt:
        """Update amount and/or description; omitted arguments are left unchanged."""
        with store_errors("updating the debt"), self.session_factory() as session:
            debt = session.get(Debt, debt_id)
            if debt is None:
                raise RecordNotFoundError("Debt", debt_id)
            if total_amount is not KEEP and total_amount is not None:
                if total_amount <= 0:
                    raise ValueError("total_amount must be positive")
                debt.total_amount = float(total_amount)
            if description is not KEEP:
                debt.description = description
            debt.updated_at = datetime.now(timezone.utc)
            session.add(debt)
            session.commit()
            session.refresh(debt)
            logger.info("Debt updated", extra={"debt_id": debt.id})
            return debt
