"""Debt entity: the single principal being repaid."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, ClassVar, Optional

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:  # pragma: no cover - import guard for circular dependency
    from .payment import Payment


class Debt(SQLModel, table=True):
    """Original principal and the moment tracking started."""

    __tablename__: ClassVar[str] = "debt"

    id: Optional[int] = Field(default=None, primary_key=True)
    total_amount: float = Field(nullable=False)
    description: Optional[str] = Field(default=None, max_length=280)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), nullable=False, index=True
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), nullable=False
    )

    payments: list["Payment"] = Relationship(
        back_populates="debt",
        sa_relationship=relationship(
            "Payment", back_populates="debt", cascade="all, delete-orphan"
        ),
    )
