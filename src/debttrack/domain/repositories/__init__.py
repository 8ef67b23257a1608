"""Repository protocol definitions for domain layer."""

from .debt import DebtRepository
from .payment import PaymentRepository

__all__ = ["DebtRepository", "PaymentRepository"]
