"""Payment entity: one repayment event against the debt."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import TYPE_CHECKING, ClassVar, Optional

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:  # pragma: no cover - import guard for circular dependency
    from .debt import Debt


class Payment(SQLModel, table=True):
    """A dated repayment. ``debt_id`` never changes after creation."""

    __tablename__: ClassVar[str] = "payment"

    id: Optional[int] = Field(default=None, primary_key=True)
    debt_id: int = Field(foreign_key="debt.id", nullable=False, index=True)
    amount: float = Field(nullable=False)
    payment_date: date = Field(nullable=False, index=True)
    note: Optional[str] = Field(default=None, max_length=280)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), nullable=False
    )

    debt: "Debt" = Relationship(
        sa_relationship=relationship("Debt", back_populates="payments")
    )
