"""SQLModel implementation of the Payment repository."""

from __future__ import annotations

from datetime import date
from typing import Callable, Optional

from sqlmodel import Session, select

from ...errors import RecordNotFoundError
from ...logging_config import get_logger
from ...models.payment import Payment
from ._errors import KEEP, store_errors

logger = get_logger(__name__)


class SQLModelPaymentRepository:
    """SQLModel-based payment repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def list_payments(self, debt_id: int) -> list[Payment]:
        """List payments for a debt, newest payment date first."""
        with store_errors("listing payments"), self.session_factory() as session:
            statement = (
                select(Payment)
                .where(Payment.debt_id == debt_id)
                .order_by(Payment.payment_date.desc(), Payment.id.desc())  # type: ignore
            )
            return list(session.exec(statement).all())

    def get_payment(self, payment_id: int) -> Optional[Payment]:
        """Retrieve a payment by ID."""
        with store_errors("fetching a payment"), self.session_factory() as session:
            return session.get(Payment, payment_id)

    def create_payment(
        self, debt_id: int, amount: float, payment_date: date, note: Optional[str] = None
    ) -> Payment:
        """Record a payment against ``debt_id``."""
        if amount <= 0:
            raise ValueError("amount must be positive")
        with store_errors("adding a payment"), self.session_factory() as session:
            payment = Payment(
                debt_id=debt_id, amount=float(amount), payment_date=payment_date, note=note
            )
            session.add(payment)
            session.commit()
            session.refresh(payment)
            logger.info(
                "Payment recorded",
                extra={"payment_id": payment.id, "debt_id": debt_id, "amount": payment.amount},
            )
            return payment

    def update_payment(
        self,
        payment_id: int,
        amount: Optional[float] = KEEP,  # type: ignore[assignment]
        payment_date: Optional[date] = KEEP,  # type: ignore[assignment]
        note: Optional[str] = KEEP,  # type: ignore[assignment]
    ) -> Payment:
        """Edit amount, date and/or note. The owning debt never changes."""
        with store_errors("updating a payment"), self.session_factory() as session:
            payment = session.get(Payment, payment_id)
            if payment is None:
                raise RecordNotFoundError("Payment", payment_id)
            if amount is not KEEP and amount is not None:
                if amount <= 0:
                    raise ValueError("amount must be positive")
                payment.amount = float(amount)
            if payment_date is not KEEP and payment_date is not None:
                payment.payment_date = payment_date
            if note is not KEEP:
                payment.note = note
            session.add(payment)
            session.commit()
            session.refresh(payment)
            logger.info("Payment updated", extra={"payment_id": payment.id})
            return payment

    def delete_payment(self, payment_id: int) -> None:
        """Delete a payment by ID."""
        with store_errors("deleting a payment"), self.session_factory() as session:
            payment = session.get(Payment, payment_id)
            if payment is None:
                raise RecordNotFoundError("Payment", payment_id)
            session.delete(payment)
            session.commit()
            logger.info("Payment deleted", extra={"payment_id": payment_id})
