"""Currency formatting and defensive date helpers shared by every component."""

from __future__ import annotations

import calendar
import math
import re
from datetime import date, datetime
from typing import Any

from ..config import BaseConfig
from ..logging_config import get_logger

logger = get_logger(__name__)

_TIME_OF_DAY = re.compile(r"\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?(?:[+-]\d{2}:?\d{2})?")


def format_currency(amount: Any, *, symbol: str = BaseConfig.CURRENCY_SYMBOL) -> str:
    """Format ``amount`` with two decimals and thousands separators.

    ``None``, NaN and non-numeric input format as zero rather than raising.
    """

    try:
        value = float(amount)
    except (TypeError, ValueError):
        return f"{symbol}0.00"
    if math.isnan(value) or math.isinf(value):
        return f"{symbol}0.00"
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"


def to_amount(value: Any) -> float:
    """Coerce a stored amount (float, Decimal, numeric string) to float."""

    if value is None:
        raise ValueError("amount is missing")
    amount = float(value)
    if math.isnan(amount):
        raise ValueError(f"amount is not a number: {value!r}")
    return amount


def try_parse_date(value: Any) -> date | None:
    """Return the calendar date for ``value`` or None when it cannot be parsed.

    Accepts ``date``/``datetime`` objects and ISO-8601 strings, either
    date-only (``2024-02-01``) or full timestamps (``2024-02-01T10:30:00Z``).
    Time of day is dropped. Timezone-aware timestamps (the record store
    writes UTC) give the calendar date in local time; naive ones are taken
    as they are. Anything after the date other than a time is rejected.
    """

    if value is None:
        return None
    if isinstance(value, datetime):
        return _local_date(value)
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return _local_date(datetime.fromisoformat(text))
    except ValueError:
        pass
    # Timestamp variants fromisoformat rejects on older interpreters
    if text[10:11] not in ("T", " ") or not _TIME_OF_DAY.fullmatch(text[11:]):
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def _local_date(value: datetime) -> date:
    if value.tzinfo is None:
        return value.date()
    return value.astimezone().date()


def month_start(value: date) -> date:
    return value.replace(day=1)


def month_end(value: date) -> date:
    last_day = calendar.monthrange(value.year, value.month)[1]
    return value.replace(day=last_day)


def add_months(value: date, months: int) -> date:
    """Shift ``value`` by ``months``, clamping the day to the target month's end."""

    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def months_between(start: date, end: date) -> int:
    """Whole calendar months from ``start``'s month to ``end``'s month."""

    return (end.year - start.year) * 12 + (end.month - start.month)


__all__ = [
    "format_currency",
    "to_amount",
    "try_parse_date",
    "month_start",
    "month_end",
    "add_months",
    "months_between",
]
