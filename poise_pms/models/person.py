"""Person models: one table per role, all sharing the same columns."""

from sqlmodel import Field, SQLModel

from .base import IntegerIdMixin


class PersonBase(IntegerIdMixin, SQLModel):
    first_name: str = Field(nullable=False, max_length=100)
    last_name: str = Field(nullable=False, max_length=100)
    email: str = Field(default="", max_length=255)
    phone: str = Field(default="", max_length=50)
    address: str = Field(default="", max_length=255)


class Customer(PersonBase, table=True):
    __tablename__ = "Customer"


class Architect(PersonBase, table=True):
    __tablename__ = "Architect"


class ProjectManager(PersonBase, table=True):
    __tablename__ = "ProjectManager"


class Contractor(PersonBase, table=True):
    __tablename__ = "Contractor"
