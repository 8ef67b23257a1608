"""Paid / remaining / progress totals for the tracked debt."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from .money import to_amount


@dataclass(slots=True, frozen=True)
class DebtTotals:
    """Headline numbers for the dashboard and the report."""

    total_amount: float
    total_paid: float
    remaining: float  # raw, negative when overpaid
    progress_percentage: float

    @property
    def remaining_display(self) -> float:
        return max(self.remaining, 0.0)

    @property
    def progress_display(self) -> float:
        """Progress clamped to [0, 100] for bars and labels."""
        return min(max(self.progress_percentage, 0.0), 100.0)

    @property
    def is_paid_off(self) -> bool:
        return self.remaining <= 0


def total_paid(payments: Iterable[Any]) -> float:
    """Sum of all payment amounts."""

    return sum((to_amount(getattr(p, "amount", None)) for p in payments), 0.0)


def progress_percentage(paid: float, total_amount: float) -> float:
    if total_amount == 0:
        return 0.0
    return paid / total_amount * 100


def compute_totals(debt: Any, payments: Iterable[Any]) -> DebtTotals:
    """Return totals for ``debt`` given its payments; a missing debt yields zeros."""

    if debt is None:
        return DebtTotals(0.0, 0.0, 0.0, 0.0)
    total_amount = to_amount(getattr(debt, "total_amount", None))
    paid = total_paid(payments)
    return DebtTotals(
        total_amount=total_amount,
        total_paid=paid,
        remaining=total_amount - paid,
        progress_percentage=progress_percentage(paid, total_amount),
    )


__all__ = ["DebtTotals", "compute_totals", "total_paid", "progress_percentage"]
