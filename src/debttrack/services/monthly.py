"""Calendar-month payment aggregates for a single year."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, Sequence

from ..logging_config import get_logger
from .money import month_end, to_amount, try_parse_date

logger = get_logger(__name__)


@dataclass(slots=True, frozen=True)
class MonthlyBucket:
    """Payments made within one calendar month."""

    month: date  # first day of the month
    total: float
    count: int

    @property
    def label(self) -> str:
        return self.month.strftime("%b")

    @property
    def is_active(self) -> bool:
        return self.total > 0


@dataclass(slots=True, frozen=True)
class MonthlySummary:
    """Current-month figures and the average over months with payments."""

    year: int
    total_this_month: float
    payments_this_month: int
    average_monthly_payment: float
    active_months: int


def _dated_payments(payments: Iterable[Any]) -> list[tuple[date, float]]:
    dated: list[tuple[date, float]] = []
    for payment in payments:
        paid_on = try_parse_date(getattr(payment, "payment_date", None))
        if paid_on is None:
            logger.warning(
                "Skipping payment with malformed date in monthly aggregation",
                extra={
                    "payment_id": getattr(payment, "id", None),
                    "payment_date": getattr(payment, "payment_date", None),
                },
            )
            continue
        dated.append((paid_on, to_amount(payment.amount)))
    return dated


def aggregate_monthly(
    payments: Iterable[Any], year: int | None = None, *, today: date | None = None
) -> list[MonthlyBucket]:
    """Return twelve buckets, January through December of ``year``.

    Each bucket covers ``[month start, min(today, month end)]``, so months
    after ``today`` are empty and the current month only counts payments made
    so far. Payments with unparsable dates are left out of every bucket.
    """

    current = today or date.today()
    target_year = current.year if year is None else year
    dated = _dated_payments(payments)

    buckets: list[MonthlyBucket] = []
    for month_number in range(1, 13):
        start = date(target_year, month_number, 1)
        end = min(current, month_end(start))
        amounts = [amount for paid_on, amount in dated if start <= paid_on <= end]
        buckets.append(MonthlyBucket(month=start, total=sum(amounts, 0.0), count=len(amounts)))
    return buckets


def summarize_months(buckets: Sequence[MonthlyBucket], *, today: date | None = None) -> MonthlySummary:
    """Derive current-month totals and the active-month average from buckets."""

    current = today or date.today()
    this_month = next(
        (
            b
            for b in buckets
            if b.month.year == current.year and b.month.month == current.month
        ),
        None,
    )
    active = [b for b in buckets if b.is_active]
    average = sum(b.total for b in active) / len(active) if active else 0.0
    year = buckets[0].month.year if buckets else current.year
    return MonthlySummary(
        year=year,
        total_this_month=this_month.total if this_month else 0.0,
        payments_this_month=this_month.count if this_month else 0,
        average_monthly_payment=average,
        active_months=len(active),
    )


__all__ = ["MonthlyBucket", "MonthlySummary", "aggregate_monthly", "summarize_months"]
