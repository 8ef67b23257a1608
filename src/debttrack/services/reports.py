"""Printable PDF summary of the debt and its payment history."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any, Sequence

from fpdf import FPDF
from fpdf.fonts import FontFace

from ..errors import ReportError
from ..logging_config import get_logger
from .money import format_currency, try_parse_date

logger = get_logger(__name__)

TITLE = "Debt Repayment Summary"
EMPTY_HISTORY_TEXT = "No payments recorded yet"
PAGE_WIDTH = 182  # A4 width minus 14 mm margins
SUCCESS_GREEN = (46, 125, 50)


@dataclass(slots=True, frozen=True)
class _ReportRow:
    paid_on: date
    amount: float
    note: str


def _latin1(text: str) -> str:
    """Core PDF fonts only cover latin-1; replace anything else."""
    return text.encode("latin-1", errors="replace").decode("latin-1")


def _report_rows(payments: Sequence[Any]) -> list[_ReportRow]:
    """Validate and sort payments for tabulation without touching the inputs."""

    rows: list[_ReportRow] = []
    for index, payment in enumerate(payments):
        raw_date = getattr(payment, "payment_date", None)
        paid_on = try_parse_date(raw_date)
        if paid_on is None:
            raise ReportError(f"Payment #{index + 1} has an invalid date: {raw_date!r}")
        try:
            amount = float(getattr(payment, "amount", None))
        except (TypeError, ValueError) as exc:
            raise ReportError(
                f"Payment #{index + 1} has an invalid amount: {getattr(payment, 'amount', None)!r}"
            ) from exc
        if math.isnan(amount):
            raise ReportError(f"Payment #{index + 1} has an invalid amount: {amount!r}")
        rows.append(_ReportRow(paid_on=paid_on, amount=amount, note=getattr(payment, "note", None) or "-"))
    rows.sort(key=lambda row: row.paid_on)
    return rows


class _SummaryPDF(FPDF):
    """A4 document with a centered "Page X of Y" footer."""

    def footer(self) -> None:
        self.set_y(-15)
        self.set_font("Helvetica", size=8)
        self.set_text_color(150, 150, 150)
        self.cell(0, 10, f"Page {self.page_no()} of {{nb}}", align="C")


def render_report(
    debt: Any,
    payments: Sequence[Any],
    total_paid: float,
    remaining: float,
    *,
    generated_at: datetime | None = None,
) -> FPDF:
    """Lay out the repayment summary and return the unsaved document.

    Layout: title, generation date, optional description, a totals box, a
    progress bar and the payment history sorted by date (oldest first).
    Malformed input raises ``ReportError``; nothing is recovered here.
    """

    try:
        total_amount = float(getattr(debt, "total_amount", None))
    except (TypeError, ValueError) as exc:
        raise ReportError("Debt total amount is missing or not a number") from exc
    if math.isnan(total_amount) or total_amount <= 0:
        raise ReportError(f"Debt total amount must be positive, got {total_amount}")

    rows = _report_rows(payments)
    progress = total_paid / total_amount * 100
    stamp = generated_at or datetime.now()

    pdf = _SummaryPDF(orientation="portrait", unit="mm", format="A4")
    pdf.set_creation_date(stamp.astimezone())
    pdf.set_margins(14, 14, 14)
    pdf.set_auto_page_break(auto=True, margin=20)
    pdf.add_page()

    pdf.set_font("Helvetica", size=20)
    pdf.set_text_color(40, 40, 40)
    pdf.text(14, 22, TITLE)

    pdf.set_font("Helvetica", size=10)
    pdf.set_text_color(120, 120, 120)
    pdf.text(14, 30, f"Generated on {stamp.strftime('%d %B %Y')}")

    y = 40
    description = getattr(debt, "description", None)
    if description:
        pdf.set_font("Helvetica", size=11)
        pdf.set_text_color(80, 80, 80)
        pdf.set_xy(14, 34)
        pdf.multi_cell(PAGE_WIDTH, 5, _latin1(description))
        y = max(48, int(pdf.get_y()) + 4)

    # Totals box
    pdf.set_fill_color(240, 240, 240)
    pdf.rect(14, y, PAGE_WIDTH, 35, style="F")
    pdf.set_font("Helvetica", size=11)
    labels = (
        ("Total debt:", format_currency(total_amount), (60, 60, 60)),
        ("Already repaid:", format_currency(total_paid), SUCCESS_GREEN),
        ("Remaining:", format_currency(remaining), (60, 60, 60)),
    )
    for offset, (label, value, color) in zip((10, 20, 30), labels):
        pdf.set_font("Helvetica", style="", size=11)
        pdf.set_text_color(60, 60, 60)
        pdf.text(20, y + offset, label)
        pdf.set_font("Helvetica", style="B", size=11)
        pdf.set_text_color(*color)
        pdf.text(160 - pdf.get_string_width(value), y + offset, value)

    # Progress bar
    bar_y = y + 40
    bar_height = 8
    pdf.set_fill_color(230, 230, 230)
    pdf.rect(14, bar_y, PAGE_WIDTH, bar_height, style="F")
    fill_ratio = min(max(progress, 0.0), 100.0) / 100
    if fill_ratio > 0:
        pdf.set_fill_color(*SUCCESS_GREEN)
        pdf.rect(14, bar_y, PAGE_WIDTH * fill_ratio, bar_height, style="F")
    pdf.set_font("Helvetica", style="", size=9)
    pdf.set_text_color(80, 80, 80)
    percent_label = f"{progress:.1f}%"
    pdf.text(14 + (PAGE_WIDTH - pdf.get_string_width(percent_label)) / 2, bar_y + 5.5, percent_label)

    # Payment history
    table_y = bar_y + 18
    pdf.set_font("Helvetica", style="B", size=13)
    pdf.set_text_color(40, 40, 40)
    pdf.text(14, table_y, "Payment history")

    if not rows:
        pdf.set_font("Helvetica", style="", size=10)
        pdf.set_text_color(120, 120, 120)
        pdf.text(14, table_y + 10, EMPTY_HISTORY_TEXT)
    else:
        pdf.set_xy(14, table_y + 5)
        pdf.set_font("Helvetica", style="", size=9)
        pdf.set_text_color(60, 60, 60)
        headings_style = FontFace(emphasis="BOLD", color=(255, 255, 255), fill_color=SUCCESS_GREEN)
        with pdf.table(
            width=PAGE_WIDTH,
            col_widths=(35, 35, 112),
            text_align=("LEFT", "RIGHT", "LEFT"),
            headings_style=headings_style,
            cell_fill_color=(248, 248, 248),
            cell_fill_mode="ROWS",
            line_height=6,
        ) as table:
            heading = table.row()
            for title in ("Date", "Amount", "Note"):
                heading.cell(title)
            for row in rows:
                cells = table.row()
                cells.cell(row.paid_on.strftime("%d/%m/%Y"))
                cells.cell(format_currency(row.amount))
                cells.cell(_latin1(row.note))

    return pdf


def build_report_artifact(
    debt: Any,
    payments: Sequence[Any],
    total_paid: float,
    remaining: float,
    *,
    generated_at: datetime | None = None,
) -> bytes:
    """Render the repayment summary as PDF bytes. See ``render_report``."""

    pdf = render_report(debt, payments, total_paid, remaining, generated_at=generated_at)
    artifact = bytes(pdf.output())
    logger.info(
        "Report built",
        extra={"pages": pdf.pages_count, "payments": len(payments), "bytes": len(artifact)},
    )
    return artifact


def default_report_filename(today: date | None = None) -> str:
    """File name for an export made on ``today``."""

    return f"repayments-{(today or date.today()).isoformat()}.pdf"


def export_report_pdf(
    debt: Any,
    payments: Sequence[Any],
    total_paid: float,
    remaining: float,
    *,
    output_path: Path,
    generated_at: datetime | None = None,
) -> Path:
    """Build the report and write it to ``output_path``.

    The document is fully rendered before the file is opened, so a failed
    build never leaves a partial PDF behind.
    """

    artifact = build_report_artifact(
        debt, payments, total_paid, remaining, generated_at=generated_at
    )
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(artifact)
    return output_path


__all__ = [
    "EMPTY_HISTORY_TEXT",
    "TITLE",
    "build_report_artifact",
    "default_report_filename",
    "export_report_pdf",
    "render_report",
]
