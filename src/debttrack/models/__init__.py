"""SQLModel table exports."""

from .debt import Debt
from .payment import Payment

__all__ = ["Debt", "Payment"]
