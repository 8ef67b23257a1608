"""Payment repository protocol."""

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from ...models.payment import Payment


class PaymentRepository(Protocol):
    """Repository for payments recorded against a debt."""

    def list_payments(self, debt_id: int) -> list[Payment]:
        """List payments for a debt, newest payment date first."""
        ...

    def get_payment(self, payment_id: int) -> Optional[Payment]:
        """Retrieve a payment by ID."""
        ...

    def create_payment(
        self, debt_id: int, amount: float, payment_date: date, note: Optional[str] = None
    ) -> Payment:
        """Record a payment."""
        ...

    def update_payment(
        self,
        payment_id: int,
        amount: Optional[float] = None,
        payment_date: Optional[date] = None,
        note: Optional[str] = None,
    ) -> Payment:
        """Edit amount, date and/or note."""
        ...

    def delete_payment(self, payment_id: int) -> None:
        """Delete a payment."""
        ...
