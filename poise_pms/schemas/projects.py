from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .people import PersonSummary

CENTS = Decimal("0.01")
MAX_AMOUNT = Decimal("9999999999.99")  # largest value a Numeric(12, 2) column holds


def to_cents(value: Optional[Decimal]) -> Optional[Decimal]:
    """Round an amount to cents, rejecting values the store cannot hold."""
    if value is None:
        return None
    if abs(value) > MAX_AMOUNT:
        raise ValueError(f"amount must not exceed {MAX_AMOUNT}")
    return value.quantize(CENTS)


class ProjectBase(BaseModel):
    name: str = ""  # blank: generated from building type and customer last name
    building_type: str = Field(min_length=1)
    address: str = Field(min_length=1)
    erf_number: str = Field(min_length=1)
    total_fee: Decimal = Field(ge=0)
    amount_paid: Decimal = Field(ge=0)
    deadline: date
    structural_engineer: Optional[str] = None

    @field_validator("total_fee", "amount_paid")
    @classmethod
    def _round_to_cents(cls, value: Decimal) -> Decimal:
        return to_cents(value)


class ProjectCreate(ProjectBase):
    customer_id: int
    architect_id: int
    project_manager_id: int
    contractor_id: Optional[int] = None


class ProjectUpdate(BaseModel):
    """Fields left as None (or blank) keep their stored value."""

    name: Optional[str] = None
    deadline: Optional[date] = None
    amount_paid: Optional[Decimal] = Field(default=None, ge=0)

    @field_validator("name", "deadline", "amount_paid", mode="before")
    @classmethod
    def _blank_is_unset(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("amount_paid")
    @classmethod
    def _round_to_cents(cls, value: Optional[Decimal]) -> Optional[Decimal]:
        return to_cents(value)


class ProjectRead(ProjectBase):
    id: int
    completion_date: Optional[date] = None
    finalised: bool = False
    customer: Optional[PersonSummary] = None
    architect: Optional[PersonSummary] = None
    project_manager: Optional[PersonSummary] = None
    contractor: Optional[PersonSummary] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @property
    def balance_due(self) -> Decimal:
        return self.total_fee - self.amount_paid
