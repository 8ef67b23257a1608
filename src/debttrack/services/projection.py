"""Linear payoff-date projection from historical payment velocity."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import Any, Sequence

from ..config import BaseConfig
from ..logging_config import get_logger
from .money import add_months, months_between, month_start, try_parse_date
from .totals import compute_totals

logger = get_logger(__name__)

FAR_FUTURE_LABEL = "Far future"


@dataclass(slots=True, frozen=True)
class PayoffProjection:
    """Estimated payoff. ``payoff_date`` is None when ``far_future`` is set."""

    average_monthly_payment: float
    months_remaining: int | None
    payoff_date: date | None
    far_future: bool = False

    @property
    def label(self) -> str:
        if self.far_future or self.payoff_date is None:
            return FAR_FUTURE_LABEL
        return self.payoff_date.strftime("%B %Y")


def months_elapsed(first_payment: date, today: date) -> int:
    """Months from the start of the first payment's month through today, at least 1."""

    return max(1, months_between(month_start(first_payment), today) + 1)


def months_to_payoff(
    remaining: float,
    average_monthly_payment: float,
    *,
    horizon: int = BaseConfig.PROJECTION_HORIZON_MONTHS,
) -> int | None:
    """Whole months needed to clear ``remaining`` at the given monthly rate.

    Returns None when the rate is not positive or the result is not finite or
    lies beyond ``horizon`` months.
    """

    if average_monthly_payment <= 0:
        return None
    ratio = remaining / average_monthly_payment
    if not math.isfinite(ratio):
        return None
    months = math.ceil(ratio)
    if months > horizon:
        return None
    return months


def project_payoff(
    debt: Any,
    payments: Sequence[Any],
    today: date | None = None,
    *,
    horizon: int = BaseConfig.PROJECTION_HORIZON_MONTHS,
) -> PayoffProjection | None:
    """Project when the debt will be repaid.

    Returns None when the debt is already paid off or there is not enough
    data, and a far-future projection when the estimate exceeds ``horizon``
    months.
    """

    if debt is None:
        return None
    current = today or date.today()
    totals = compute_totals(debt, payments)
    if totals.remaining <= 0 or not payments:
        return None

    payment_dates = [try_parse_date(getattr(p, "payment_date", None)) for p in payments]
    valid_dates = [d for d in payment_dates if d is not None]
    if len(valid_dates) != len(payment_dates):
        logger.warning(
            "Ignoring malformed payment dates when locating the first payment",
            extra={"skipped": len(payment_dates) - len(valid_dates)},
        )
    if not valid_dates:
        return None

    elapsed = months_elapsed(min(valid_dates), current)
    average = totals.total_paid / elapsed
    if average <= 0:
        return None

    months = months_to_payoff(totals.remaining, average, horizon=horizon)
    if months is None:
        return PayoffProjection(
            average_monthly_payment=average,
            months_remaining=None,
            payoff_date=None,
            far_future=True,
        )
    return PayoffProjection(
        average_monthly_payment=average,
        months_remaining=months,
        payoff_date=add_months(current, months),
    )


__all__ = [
    "FAR_FUTURE_LABEL",
    "PayoffProjection",
    "months_elapsed",
    "months_to_payoff",
    "project_payoff",
]
