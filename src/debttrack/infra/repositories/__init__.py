"""Concrete repository implementations using SQLModel."""

from .debt import SQLModelDebtRepository
from .payment import SQLModelPaymentRepository

__all__ = ["SQLModelDebtRepository", "SQLModelPaymentRepository"]
