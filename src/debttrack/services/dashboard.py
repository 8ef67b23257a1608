"""Record-store adapter that caches fetched records and derived dashboard values."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from ..domain.repositories import DebtRepository, PaymentRepository
from ..errors import (
    ChartExportError,
    DebtNotConfiguredError,
    DebtTrackError,
    ReportError,
    ReportExportError,
)
from ..logging_config import get_logger
from ..models import Debt, Payment
from ..schemas import DebtCreate, DebtUpdate, PaymentCreate, PaymentUpdate
from . import charts
from .balance import BalancePoint, build_balance_series, has_enough_data, sort_payments_by_date
from .monthly import MonthlyBucket, MonthlySummary, aggregate_monthly, summarize_months
from .projection import PayoffProjection, project_payoff
from .reports import export_report_pdf
from .totals import DebtTotals, compute_totals

logger = get_logger(__name__)


@dataclass(frozen=True)
class DashboardSnapshot:
    """Everything the presentation layer shows, computed from one fetch."""

    today: date
    debt: Debt
    payments: tuple[Payment, ...]
    totals: DebtTotals
    balance_series: list[BalancePoint]
    monthly: list[MonthlyBucket]
    monthly_summary: MonthlySummary
    projection: Optional[PayoffProjection]

    @property
    def has_chart_data(self) -> bool:
        return has_enough_data(self.balance_series)


class DebtTracker:
    """Thin shell around the record store for the single tracked debt.

    Fetched records are cached until a mutation goes through this tracker;
    snapshots are memoized per ``today`` on top of that cache.
    """

    def __init__(self, debt_repo: DebtRepository, payment_repo: PaymentRepository) -> None:
        self.debt_repo = debt_repo
        self.payment_repo = payment_repo
        self._debt: Optional[Debt] = None
        self._payments: Optional[tuple[Payment, ...]] = None
        self._snapshots: dict[date, DashboardSnapshot] = {}

    # -- cache -----------------------------------------------------------

    def invalidate(self) -> None:
        """Drop cached records and snapshots."""
        self._debt = None
        self._payments = None
        self._snapshots.clear()

    def get_debt(self) -> Optional[Debt]:
        if self._debt is None:
            self._debt = self.debt_repo.get_debt()
        return self._debt

    def require_debt(self) -> Debt:
        debt = self.get_debt()
        if debt is None or debt.id is None:
            raise DebtNotConfiguredError("No debt has been set up yet")
        return debt

    def list_payments(self) -> tuple[Payment, ...]:
        """Payments for the tracked debt as returned by the store (newest first)."""
        if self._payments is None:
            debt = self.require_debt()
            self._payments = tuple(self.payment_repo.list_payments(debt.id))
        return self._payments

    # -- mutations -------------------------------------------------------

    def setup_debt(self, data: DebtCreate) -> Debt:
        if self.get_debt() is not None:
            raise DebtTrackError("A debt is already set up; edit it instead")
        debt = self.debt_repo.create_debt(data.total_amount, data.description)
        self.invalidate()
        return debt

    def edit_debt(self, data: DebtUpdate) -> Debt:
        debt = self.require_debt()
        changes = data.model_dump(exclude_unset=True)
        updated = self.debt_repo.update_debt(debt.id, **changes)
        self.invalidate()
        return updated

    def add_payment(self, data: PaymentCreate) -> Payment:
        debt = self.require_debt()
        payment = self.payment_repo.create_payment(
            debt.id, data.amount, data.payment_date, data.note
        )
        self.invalidate()
        return payment

    def edit_payment(self, payment_id: int, data: PaymentUpdate) -> Payment:
        changes = data.model_dump(exclude_unset=True)
        payment = self.payment_repo.update_payment(payment_id, **changes)
        self.invalidate()
        return payment

    def delete_payment(self, payment_id: int) -> None:
        self.payment_repo.delete_payment(payment_id)
        self.invalidate()

    # -- derived values --------------------------------------------------

    def snapshot(self, today: date | None = None) -> DashboardSnapshot:
        """Return derived metrics for ``today``, reusing a cached result when possible."""

        current = today or date.today()
        cached = self._snapshots.get(current)
        if cached is not None:
            return cached

        debt = self.require_debt()
        payments = self.list_payments()
        buckets = aggregate_monthly(payments, current.year, today=current)
        snapshot = DashboardSnapshot(
            today=current,
            debt=debt,
            payments=payments,
            totals=compute_totals(debt, payments),
            balance_series=build_balance_series(debt, payments),
            monthly=buckets,
            monthly_summary=summarize_months(buckets, today=current),
            projection=project_payoff(debt, payments, current),
        )
        self._snapshots[current] = snapshot
        return snapshot

    # -- exports ---------------------------------------------------------

    def export_report(
        self, output_path: Path, *, generated_at: datetime | None = None
    ) -> Path:
        """Write the PDF summary; any failure surfaces as ReportExportError."""

        debt = self.require_debt()
        payments = sort_payments_by_date(self.list_payments())
        totals = compute_totals(debt, payments)
        try:
            path = export_report_pdf(
                debt,
                payments,
                totals.total_paid,
                totals.remaining,
                output_path=output_path,
                generated_at=generated_at,
            )
        except (ReportError, OSError, ValueError) as exc:
            logger.error("PDF export failed", exc_info=True, extra={"output_path": str(output_path)})
            raise ReportExportError(f"Export failed: {exc}") from exc
        logger.info("PDF exported", extra={"output_path": str(path)})
        return path

    def export_balance_chart(self, output_path: Path, *, today: date | None = None) -> Path:
        series = self.snapshot(today).balance_series
        return self._save_chart(charts.build_balance_chart(series), output_path)

    def export_monthly_chart(
        self, output_path: Path, *, year: int | None = None, today: date | None = None
    ) -> Path:
        current = today or date.today()
        if year is None or year == current.year:
            buckets = self.snapshot(current).monthly
        else:
            buckets = aggregate_monthly(self.list_payments(), year, today=current)
        return self._save_chart(charts.build_monthly_chart(buckets), output_path)

    def _save_chart(self, fig, output_path: Path) -> Path:
        try:
            path = charts.save_figure(fig, output_path=output_path)
        except (OSError, ValueError) as exc:
            logger.error("Chart export failed", exc_info=True, extra={"output_path": str(output_path)})
            raise ChartExportError(f"Chart export failed: {exc}") from exc
        logger.info("Chart exported", extra={"output_path": str(path)})
        return path


__all__ = ["DashboardSnapshot", "DebtTracker"]
