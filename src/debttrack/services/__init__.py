"""Service module exports."""

from . import balance, charts, dashboard, money, monthly, projection, reports, totals

__all__ = [
    "balance",
    "charts",
    "dashboard",
    "money",
    "monthly",
    "projection",
    "reports",
    "totals",
]
