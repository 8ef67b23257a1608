"""Tests for currency formatting and the shared date helpers."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from debttrack.services.money import (
    add_months,
    format_currency,
    month_end,
    months_between,
    to_amount,
    try_parse_date,
)


class TestFormatCurrency:
    @pytest.mark.parametrize(
        ("amount", "expected"),
        [
            (0, "$0.00"),
            (5, "$5.00"),
            (1234.5, "$1,234.50"),
            (1234567.891, "$1,234,567.89"),
            ("42.1", "$42.10"),
            (Decimal("19.999"), "$20.00"),
            (-75.25, "-$75.25"),
        ],
    )
    def test_formats_two_decimals_with_separators(self, amount, expected):
        assert format_currency(amount) == expected

    @pytest.mark.parametrize("amount", [None, "abc", float("nan"), float("inf"), object()])
    def test_unusable_values_format_as_zero(self, amount):
        assert format_currency(amount) == "$0.00"

    def test_custom_symbol(self):
        assert format_currency(10, symbol="EUR ") == "EUR 10.00"


class TestToAmount:
    def test_coerces_numeric_types(self):
        assert to_amount("12.50") == 12.5
        assert to_amount(Decimal("3.25")) == 3.25
        assert to_amount(7) == 7.0

    @pytest.mark.parametrize("value", [None, float("nan")])
    def test_rejects_missing_or_nan(self, value):
        with pytest.raises(ValueError):
            to_amount(value)


class TestTryParseDate:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("2024-02-01", date(2024, 2, 1)),
            ("2024-02-01T10:30:00", date(2024, 2, 1)),
            ("  2024-02-01  ", date(2024, 2, 1)),
            (date(2023, 5, 6), date(2023, 5, 6)),
            (datetime(2023, 5, 6, 22, 15), date(2023, 5, 6)),
        ],
    )
    def test_accepts_dates_and_iso_strings(self, value, expected):
        assert try_parse_date(value) == expected

    def test_naive_timestamp_with_space_separator(self):
        assert try_parse_date("2024-02-01 10:30:00") == date(2024, 2, 1)

    @pytest.mark.parametrize(
        ("value", "instant"),
        [
            ("2024-02-01T23:59:59Z", datetime(2024, 2, 1, 23, 59, 59, tzinfo=timezone.utc)),
            (
                "2024-02-01T10:30:00.123456+02:00",
                datetime(2024, 2, 1, 10, 30, 0, 123456, tzinfo=timezone(timedelta(hours=2))),
            ),
        ],
    )
    def test_aware_strings_use_local_calendar_date(self, value, instant):
        assert try_parse_date(value) == instant.astimezone().date()

    def test_aware_datetime_uses_local_calendar_date(self):
        stamp = datetime(2024, 1, 1, 0, 30, tzinfo=timezone.utc)

        assert try_parse_date(stamp) == stamp.astimezone().date()

    @pytest.mark.parametrize(
        "value",
        [
            None,
            "",
            "   ",
            "garbage",
            "2024-13-01",
            "31/02/2024",
            20240201,
            "2024-02-01junk",
            "2024-02-01 not a date",
            "2024-02-01T10:30 and more",
        ],
    )
    def test_returns_none_for_unparsable_values(self, value):
        assert try_parse_date(value) is None


class TestCalendarHelpers:
    def test_add_months_clamps_to_month_end(self):
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
        assert add_months(date(2023, 1, 31), 1) == date(2023, 2, 28)

    def test_add_months_crosses_years(self):
        assert add_months(date(2024, 11, 15), 3) == date(2025, 2, 15)
        assert add_months(date(2024, 6, 1), 120) == date(2034, 6, 1)

    def test_month_end(self):
        assert month_end(date(2024, 2, 10)) == date(2024, 2, 29)
        assert month_end(date(2024, 12, 1)) == date(2024, 12, 31)

    def test_months_between_ignores_days(self):
        assert months_between(date(2024, 1, 31), date(2024, 2, 1)) == 1
        assert months_between(date(2023, 12, 1), date(2024, 12, 31)) == 12
        assert months_between(date(2024, 5, 1), date(2024, 3, 1)) == -2
