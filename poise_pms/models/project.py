"""Project model."""

from datetime import date
from decimal import Decimal
from typing import Optional

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from .base import IntegerIdMixin, TimestampMixin


class Project(IntegerIdMixin, TimestampMixin, SQLModel, table=True):
    __tablename__ = "Project"

    name: str = Field(nullable=False, max_length=255, index=True)
    building_type: str = Field(nullable=False, max_length=100)
    address: str = Field(nullable=False, max_length=255)
    erf_number: str = Field(nullable=False, max_length=50)
    total_fee: Decimal = Field(default=Decimal("0.00"), sa_type=sa.Numeric(12, 2), nullable=False)
    amount_paid: Decimal = Field(default=Decimal("0.00"), sa_type=sa.Numeric(12, 2), nullable=False)
    deadline: date = Field(nullable=False)
    completion_date: Optional[date] = None
    finalised: bool = Field(default=False, nullable=False)
    structural_engineer: Optional[str] = Field(default=None, max_length=200)

    customer_id: int = Field(foreign_key="Customer.id", nullable=False)
    architect_id: int = Field(foreign_key="Architect.id", nullable=False)
    project_manager_id: int = Field(foreign_key="ProjectManager.id", nullable=False)
    contractor_id: Optional[int] = Field(default=None, foreign_key="Contractor.id")
