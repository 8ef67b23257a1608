"""Matplotlib charts for the balance series and monthly payments."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, Sequence

import matplotlib

matplotlib.use("Agg")
import matplotlib.dates as mdates
import matplotlib.pyplot as plt
import matplotlib.ticker as mticker
from matplotlib.figure import Figure

from ..config import BaseConfig
from .balance import BalancePoint, has_enough_data
from .monthly import MonthlyBucket

NOT_ENOUGH_DATA_TEXT = "Not enough data to chart the remaining balance"
PRIMARY_COLOR = "#2E7D32"
MUTED_COLOR = "#D1D5DB"


class ChartRenderer(Protocol):
    """Protocol describing renderer behavior."""

    def render(self, figure: Figure, *, output_path: Path) -> None:  # pragma: no cover - interface
        ...


def _currency_tick(value: float, _position: int) -> str:
    symbol = BaseConfig.CURRENCY_SYMBOL
    if abs(value) >= 1000:
        return f"{symbol}{value / 1000:.0f}k"
    return f"{symbol}{value:.0f}"


def _placeholder(message: str, *, figsize: tuple[float, float] = (8, 4)) -> Figure:
    fig, ax = plt.subplots(figsize=figsize)
    ax.text(0.5, 0.5, message, ha="center", va="center", fontsize=12, color="#999")
    ax.axis("off")
    return fig


def build_balance_chart(series: Sequence[BalancePoint]) -> Figure:
    """Line chart of the remaining balance over time.

    Series with fewer than two points render a placeholder instead.
    """

    if not has_enough_data(series):
        return _placeholder(NOT_ENOUGH_DATA_TEXT)

    dates = [point.date for point in series]
    balances = [point.balance for point in series]

    fig, ax = plt.subplots(figsize=(10, 5))
    ax.plot(dates, balances, linewidth=2.5, color=PRIMARY_COLOR, label="Balance")
    ax.fill_between(dates, balances, color=PRIMARY_COLOR, alpha=0.08)

    ax.grid(True, axis="y", linestyle="--", alpha=0.3)
    ax.set_axisbelow(True)
    for spine in ("top", "right"):
        ax.spines[spine].set_visible(False)

    ax.set_title("Remaining balance", fontsize=14, fontweight="bold", pad=15)
    ax.xaxis.set_major_formatter(mdates.DateFormatter("%b %y"))
    ax.yaxis.set_major_formatter(mticker.FuncFormatter(_currency_tick))
    ax.set_ylim(bottom=0)
    fig.autofmt_xdate()

    plt.tight_layout()
    return fig


def build_monthly_chart(buckets: Sequence[MonthlyBucket]) -> Figure:
    """Bar chart of monthly payment totals; months without payments are muted."""

    if not buckets:
        return _placeholder("No monthly data")

    labels = [bucket.label for bucket in buckets]
    totals = [bucket.total for bucket in buckets]
    colors = [PRIMARY_COLOR if bucket.is_active else MUTED_COLOR for bucket in buckets]
    year = buckets[0].month.year

    fig, ax = plt.subplots(figsize=(10, 4))
    bars = ax.bar(range(len(labels)), totals, color=colors)

    for bar, bucket in zip(bars, buckets):
        if not bucket.is_active:
            continue
        noun = "payment" if bucket.count == 1 else "payments"
        ax.annotate(
            f"{bucket.count} {noun}",
            (bar.get_x() + bar.get_width() / 2, bar.get_height()),
            textcoords="offset points",
            xytext=(0, 4),
            ha="center",
            fontsize=8,
            color="#374151",
        )

    ax.set_xticks(range(len(labels)))
    ax.set_xticklabels(labels)
    ax.yaxis.set_major_formatter(mticker.FuncFormatter(_currency_tick))
    ax.grid(True, axis="y", linestyle="--", alpha=0.3)
    ax.set_axisbelow(True)
    ax.set_title(f"Monthly payments ({year})", fontsize=14, fontweight="bold", pad=15)

    plt.tight_layout()
    return fig


def save_figure(
    fig: Figure, *, output_path: Path, renderer: ChartRenderer | None = None
) -> Path:
    """Write ``fig`` to ``output_path`` as PNG and release it."""

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        if renderer is not None:
            renderer.render(fig, output_path=output_path)
        else:
            fig.savefig(output_path, bbox_inches="tight", dpi=120)
    finally:
        plt.close(fig)
    return output_path


__all__ = [
    "ChartRenderer",
    "NOT_ENOUGH_DATA_TEXT",
    "build_balance_chart",
    "build_monthly_chart",
    "save_figure",
]
