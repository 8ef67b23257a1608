"""DebtTrack: personal debt repayment tracker."""

from __future__ import annotations

from .config import BaseConfig
from .services.balance import build_balance_series
from .services.monthly import aggregate_monthly
from .services.projection import project_payoff
from .services.reports import build_report_artifact

__all__ = [
    "BaseConfig",
    "aggregate_monthly",
    "build_balance_series",
    "build_report_artifact",
    "project_payoff",
]
