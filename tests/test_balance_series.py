"""Tests for the running-balance series."""

from __future__ import annotations

import logging
import random
from datetime import date

import pytest

from debttrack.services.balance import (
    BalancePoint,
    build_balance_series,
    has_enough_data,
    sort_payments_by_date,
)
from tests.conftest import assert_float_equal


def _as_tuples(series: list[BalancePoint]) -> list[tuple[date, float]]:
    return [(point.date, point.balance) for point in series]


class TestScenarios:
    """Worked examples of the balance series."""

    def test_payments_on_distinct_dates_append_points(self, make_debt, make_payment):
        debt = make_debt(5000, "2024-01-01")
        payments = [make_payment(1000, "2024-02-01"), make_payment(500, "2024-03-01")]

        series = build_balance_series(debt, payments)

        assert _as_tuples(series) == [
            (date(2024, 1, 1), 5000.0),
            (date(2024, 2, 1), 4000.0),
            (date(2024, 3, 1), 3500.0),
        ]

    def test_overpayment_clamps_to_zero(self, make_debt, make_payment):
        debt = make_debt(5000, "2024-01-01")

        series = build_balance_series(debt, [make_payment(6000, "2024-02-01")])

        assert _as_tuples(series) == [(date(2024, 1, 1), 5000.0), (date(2024, 2, 1), 0.0)]

    def test_same_day_payments_merge_into_one_point(self, make_debt, make_payment):
        debt = make_debt(5000, "2024-01-01")
        payments = [make_payment(300, "2024-02-01"), make_payment(200, "2024-02-01")]

        series = build_balance_series(debt, payments)

        assert _as_tuples(series) == [(date(2024, 1, 1), 5000.0), (date(2024, 2, 1), 4500.0)]

    def test_no_payments_with_valid_creation_date_gives_single_point(self, make_debt):
        series = build_balance_series(make_debt(5000, "2024-01-01"), [])

        assert _as_tuples(series) == [(date(2024, 1, 1), 5000.0)]
        assert not has_enough_data(series)


class TestOrdering:
    """Sorting and merge behavior."""

    def test_unordered_input_is_sorted_chronologically(self, make_debt, make_payment):
        debt = make_debt(1000, "2024-01-01")
        payments = [
            make_payment(100, "2024-04-01"),
            make_payment(100, "2024-02-01"),
            make_payment(100, "2024-03-01"),
        ]

        series = build_balance_series(debt, payments)

        assert [p.date for p in series] == [
            date(2024, 1, 1),
            date(2024, 2, 1),
            date(2024, 3, 1),
            date(2024, 4, 1),
        ]
        assert [p.balance for p in series] == [1000.0, 900.0, 800.0, 700.0]

    def test_same_date_ties_keep_input_order(self, make_payment):
        first = make_payment(10, "2024-02-01", note="first")
        second = make_payment(20, "2024-02-01", note="second")
        earlier = make_payment(30, "2024-01-15", note="earlier")

        ordered = sort_payments_by_date([first, second, earlier])

        assert [p.note for p in ordered] == ["earlier", "first", "second"]

    def test_payment_before_creation_reduces_seed_point(self, make_debt, make_payment):
        debt = make_debt(2000, "2024-03-01")
        payments = [make_payment(250, "2024-01-10"), make_payment(250, "2024-04-01")]

        series = build_balance_series(debt, payments)

        assert _as_tuples(series) == [(date(2024, 3, 1), 1750.0), (date(2024, 4, 1), 1500.0)]

    def test_payment_on_creation_day_merges_into_seed(self, make_debt, make_payment):
        debt = make_debt(800, "2024-05-05T18:30:00")

        series = build_balance_series(debt, [make_payment(100, "2024-05-05")])

        assert _as_tuples(series) == [(date(2024, 5, 5), 700.0)]

    def test_merge_after_clamp_stays_at_zero(self, make_debt, make_payment):
        debt = make_debt(100, "2024-01-01")
        payments = [
            make_payment(150, "2024-02-01"),
            make_payment(50, "2024-02-01"),
            make_payment(10, "2024-03-01"),
        ]

        series = build_balance_series(debt, payments)

        assert [p.balance for p in series] == [100.0, 0.0, 0.0]

    def test_string_amounts_are_accepted(self, make_debt, make_payment):
        debt = make_debt("1200.50", "2024-01-01")

        series = build_balance_series(debt, [make_payment("200.25", "2024-01-20")])

        assert_float_equal(series[-1].balance, 1000.25)

    def test_inputs_are_not_mutated(self, make_debt, make_payment):
        debt = make_debt(1000, "2024-01-01")
        payments = [make_payment(100, "2024-03-01"), make_payment(100, "2024-02-01")]
        before = list(payments)

        build_balance_series(debt, payments)

        assert payments == before
        assert debt.total_amount == 1000


class TestInvalidData:
    """Missing totals and malformed dates."""

    @pytest.mark.parametrize("total", [None, 0, "not-a-number", float("nan")])
    def test_missing_or_invalid_total_returns_empty(self, make_debt, make_payment, total):
        debt = make_debt(total, "2024-01-01")

        assert build_balance_series(debt, [make_payment(10, "2024-02-01")]) == []

    def test_missing_debt_returns_empty(self, make_payment):
        assert build_balance_series(None, [make_payment(10, "2024-02-01")]) == []

    def test_missing_payment_collection_returns_empty(self, make_debt):
        assert build_balance_series(make_debt(100, "2024-01-01"), None) == []

    def test_negative_total_is_a_contract_violation(self, make_debt):
        with pytest.raises(ValueError):
            build_balance_series(make_debt(-5, "2024-01-01"), [])

    def test_invalid_creation_date_seeds_from_first_payment(self, make_debt, make_payment, caplog):
        debt = make_debt(1000, "yesterday-ish")
        payments = [make_payment(300, "2024-03-01"), make_payment(200, "2024-02-01")]

        with caplog.at_level(logging.WARNING, logger="debttrack"):
            series = build_balance_series(debt, payments)

        # Seed at the earliest payment, which then merges into it.
        assert _as_tuples(series) == [(date(2024, 2, 1), 800.0), (date(2024, 3, 1), 500.0)]
        assert any("created_at" in record.getMessage() for record in caplog.records)

    def test_invalid_creation_date_and_no_payments_returns_empty(self, make_debt):
        assert build_balance_series(make_debt(1000, "garbage"), []) == []

    def test_malformed_payment_date_is_merged_not_crashing(self, make_debt, make_payment):
        debt = make_debt(1000, "2024-01-01")
        payments = [
            make_payment(100, "2024-02-01"),
            make_payment(50, "31/02/2024"),
            make_payment(100, "2024-03-01"),
        ]

        series = build_balance_series(debt, payments)

        assert _as_tuples(series) == [
            (date(2024, 1, 1), 950.0),
            (date(2024, 2, 1), 850.0),
            (date(2024, 3, 1), 750.0),
        ]


class TestProperties:
    """Monotonicity and conservation over generated data."""

    @pytest.mark.parametrize("seed", range(20))
    def test_balances_never_increase_or_go_negative(self, make_debt, make_payment, seed):
        rng = random.Random(seed)
        debt = make_debt(rng.choice([500, 2500, 10000]), "2023-06-15")
        payments = [
            make_payment(
                round(rng.uniform(0.01, 1500), 2),
                date(2023, rng.randint(1, 12), rng.randint(1, 28)).isoformat(),
            )
            for _ in range(rng.randint(0, 25))
        ]

        series = build_balance_series(debt, payments)

        balances = [point.balance for point in series]
        assert all(b >= 0 for b in balances)
        assert all(a >= b for a, b in zip(balances, balances[1:]))
        dates = [point.date for point in series]
        assert dates == sorted(dates)
        assert len(set(dates)) == len(dates)

    def test_final_balance_matches_remaining_when_not_overpaid(self, make_debt, make_payment):
        debt = make_debt(3000, "2024-01-01")
        payments = [make_payment(333.33, f"2024-{m:02d}-10") for m in range(1, 7)]

        series = build_balance_series(debt, payments)

        assert_float_equal(series[-1].balance, 3000 - 6 * 333.33)
