"""Running-balance series for the debt chart."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, Sequence

from ..logging_config import get_logger
from .money import to_amount, try_parse_date

logger = get_logger(__name__)

MIN_CHART_POINTS = 2


@dataclass(slots=True)
class BalancePoint:
    """Remaining balance as of ``date``."""

    date: date
    balance: float


def _debt_total(debt: Any) -> float | None:
    """Return the debt principal, or None when it is missing or unusable."""

    raw = getattr(debt, "total_amount", None) if debt is not None else None
    if raw is None:
        return None
    try:
        total = float(raw)
    except (TypeError, ValueError):
        return None
    if math.isnan(total) or total == 0:
        return None
    if total < 0:
        raise ValueError(f"total_amount must be positive, got {total}")
    return total


def sort_payments_by_date(payments: Iterable[Any]) -> list[Any]:
    """Return payments ordered by payment date, oldest first.

    The sort is stable, so payments sharing a date keep their input order.
    Unparsable dates sort first.
    """

    def _key(payment: Any) -> date:
        return try_parse_date(getattr(payment, "payment_date", None)) or date.min

    return sorted(payments, key=_key)


def build_balance_series(debt: Any, payments: Sequence[Any] | None) -> list[BalancePoint]:
    """Build a chronological, non-increasing balance series.

    The series starts at ``(debt.created_at, total_amount)``. Each payment
    dated on or before the last point reduces that point in place; later
    payments append a new point. Balances never drop below zero.
    """

    total = _debt_total(debt)
    if total is None or payments is None:
        return []

    ordered = sort_payments_by_date(payments)
    series: list[BalancePoint] = []

    created = try_parse_date(getattr(debt, "created_at", None))
    if created is not None:
        series.append(BalancePoint(date=created, balance=total))
    else:
        first_date = next(
            (
                parsed
                for parsed in (try_parse_date(p.payment_date) for p in ordered)
                if parsed is not None
            ),
            None,
        )
        if first_date is None:
            return []
        logger.warning(
            "Invalid debt created_at; seeding balance series at first payment",
            extra={"created_at": getattr(debt, "created_at", None)},
        )
        series.append(BalancePoint(date=first_date, balance=total))

    current_balance = total
    for payment in ordered:
        amount = to_amount(payment.amount)
        last = series[-1]
        paid_on = try_parse_date(payment.payment_date)
        if paid_on is None:
            logger.warning(
                "Malformed payment date merged into previous balance point",
                extra={"payment_id": getattr(payment, "id", None), "payment_date": payment.payment_date},
            )
        # last.balance always equals max(0, current_balance)
        current_balance -= amount
        if paid_on is None or paid_on <= last.date:
            last.balance = max(0.0, current_balance)
        else:
            series.append(BalancePoint(date=paid_on, balance=max(0.0, current_balance)))

    return series


def has_enough_data(series: Sequence[BalancePoint]) -> bool:
    """A series needs at least two points to be worth charting."""

    return len(series) >= MIN_CHART_POINTS


__all__ = [
    "BalancePoint",
    "build_balance_series",
    "has_enough_data",
    "sort_payments_by_date",
    "MIN_CHART_POINTS",
]
