"""Debt repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.debt import Debt


class DebtRepository(Protocol):
    """Repository for the tracked debt."""

    def get_debt(self) -> Optional[Debt]:
        """Return the most recently created debt, if any."""
        ...

    def create_debt(self, total_amount: float, description: Optional[str] = None) -> Debt:
        """Create the debt."""
        ...

    def update_debt(
        self,
        debt_id: int,
        total_amount: Optional[float] = None,
        description: Optional[str] = None,
    ) -> Debt:
        """Update amount and/or description."""
        ...
