"""Validated input models for creating and editing records."""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import field_validator
from sqlmodel import Field, SQLModel

EARLIEST_PAYMENT_DATE = date(1900, 1, 1)


def _clean_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class DebtCreate(SQLModel):
    """Initial debt setup."""

    total_amount: float = Field(ge=0.01)
    description: Optional[str] = Field(default=None, max_length=280)

    @field_validator("total_amount")
    @classmethod
    def _round_amount(cls, value: float) -> float:
        return round(value, 2)

    @field_validator("description")
    @classmethod
    def _strip_description(cls, value: Optional[str]) -> Optional[str]:
        return _clean_text(value)


class DebtUpdate(SQLModel):
    """Partial edit of the debt; unset fields are left untouched."""

    total_amount: Optional[float] = Field(default=None, ge=0.01)
    description: Optional[str] = Field(default=None, max_length=280)

    @field_validator("total_amount")
    @classmethod
    def _round_amount(cls, value: Optional[float]) -> Optional[float]:
        return None if value is None else round(value, 2)

    @field_validator("description")
    @classmethod
    def _strip_description(cls, value: Optional[str]) -> Optional[str]:
        return _clean_text(value)


class PaymentCreate(SQLModel):
    """A new payment against the debt."""

    amount: float = Field(ge=0.01)
    payment_date: date
    note: Optional[str] = Field(default=None, max_length=280)

    @field_validator("amount")
    @classmethod
    def _round_amount(cls, value: float) -> float:
        return round(value, 2)

    @field_validator("payment_date")
    @classmethod
    def _check_payment_date(cls, value: date) -> date:
        return validate_payment_date(value)

    @field_validator("note")
    @classmethod
    def _strip_note(cls, value: Optional[str]) -> Optional[str]:
        return _clean_text(value)


class PaymentUpdate(SQLModel):
    """Partial edit of a payment. ``debt_id`` is deliberately absent."""

    amount: Optional[float] = Field(default=None, ge=0.01)
    payment_date: Optional[date] = None
    note: Optional[str] = Field(default=None, max_length=280)

    @field_validator("amount")
    @classmethod
    def _round_amount(cls, value: Optional[float]) -> Optional[float]:
        return None if value is None else round(value, 2)

    @field_validator("payment_date")
    @classmethod
    def _check_payment_date(cls, value: Optional[date]) -> Optional[date]:
        return None if value is None else validate_payment_date(value)

    @field_validator("note")
    @classmethod
    def _strip_note(cls, value: Optional[str]) -> Optional[str]:
        return _clean_text(value)


def validate_payment_date(value: date, *, today: date | None = None) -> date:
    """Reject payment dates before 1900-01-01 or after today."""

    current = today or date.today()
    if value < EARLIEST_PAYMENT_DATE:
        raise ValueError("Payment date must be on or after 1900-01-01")
    if value > current:
        raise ValueError("Payment date cannot be in the future")
    return value


__all__ = [
    "DebtCreate",
    "DebtUpdate",
    "PaymentCreate",
    "PaymentUpdate",
    "validate_payment_date",
    "EARLIEST_PAYMENT_DATE",
]
