"""Validated ledger input."""

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_AMOUNT = Decimal("999999.99")
PAYMENT_METHODS = ("credit", "debit")


def _add_years(day: date, years: int) -> date:
    try:
        return day.replace(year=day.year + years)
    except ValueError:
        # 29 February in a non-leap target year
        return day.replace(year=day.year + years, day=28)


class SpendEntry(BaseModel):
    """One spend line in the ledger."""

    model_config = ConfigDict(str_strip_whitespace=True)

    date: str = Field(description="YYYY-MM-DD, within 10 years past and 1 year ahead")
    name: str = Field(min_length=1, max_length=100)
    amount: Decimal
    category: str = Field(min_length=1)
    subcategory: str = Field(min_length=1)
    payment_method: str
    notes: str = ""

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: str) -> str:
        try:
            day = date.fromisoformat(v)
        except ValueError:
            raise ValueError("Date must be in YYYY-MM-DD format") from None
        if len(v) != 10:
            raise ValueError("Date must be in YYYY-MM-DD format")

        today = date.today()
        if day > _add_years(today, 1):
            raise ValueError("Date cannot be more than 1 year in the future")
        if day < _add_years(today, -10):
            raise ValueError("Date cannot be more than 10 years in the past")
        return v

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount(cls, v: Any) -> Decimal:
        if v is None or isinstance(v, bool):
            raise ValueError("Amount must be a valid number")
        try:
            amount = Decimal(str(v).strip())
        except InvalidOperation:
            raise ValueError("Amount must be a valid number") from None
        if not amount.is_finite():
            raise ValueError("Amount must be a valid number")
        return amount

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v: Decimal) -> Decimal:
        if v <= 0:
            raise ValueError("Amount must be positive")
        if v > MAX_AMOUNT:
            raise ValueError("Amount cannot exceed 999,999.99")
        exponent = v.normalize().as_tuple().exponent
        if isinstance(exponent, int) and exponent < -2:
            raise ValueError("Amount cannot have more than 2 decimal places")
        return v

    @field_validator("payment_method")
    @classmethod
    def validate_payment_method(cls, v: str) -> str:
        method = v.lower()
        if method not in PAYMENT_METHODS:
            raise ValueError('Payment method must be either "credit" or "debit"')
        return method

    @field_validator("notes", mode="before")
    @classmethod
    def default_notes(cls, v: Any) -> str:
        return "" if v is None else str(v)
