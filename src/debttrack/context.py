"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from sqlmodel import Session

from .config import BaseConfig
from .infra.database import bootstrap_database
from .infra.repositories import SQLModelDebtRepository, SQLModelPaymentRepository
from .services.dashboard import DebtTracker


@dataclass
class AppContext:
    """Configuration, repositories and the tracker shared by CLI commands."""

    config: BaseConfig
    session_factory: Callable[[], Session]
    debt_repo: SQLModelDebtRepository
    payment_repo: SQLModelPaymentRepository
    tracker: DebtTracker


def create_app_context(config: Optional[BaseConfig] = None) -> AppContext:
    """Create the engine, schema and repositories for ``config``."""

    if config is None:
        config = BaseConfig()

    _engine, session_factory = bootstrap_database(config)
    debt_repo = SQLModelDebtRepository(session_factory)
    payment_repo = SQLModelPaymentRepository(session_factory)

    return AppContext(
        config=config,
        session_factory=session_factory,
        debt_repo=debt_repo,
        payment_repo=payment_repo,
        tracker=DebtTracker(debt_repo, payment_repo),
    )
