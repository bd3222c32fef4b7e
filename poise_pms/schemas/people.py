from typing import Optional

from pydantic import BaseModel, Field

from .common import PersonRole, ResolutionStatus


class PersonCreate(BaseModel):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: str = ""
    phone: str = ""
    address: str = ""


class PersonSummary(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: str = ""

    model_config = {"from_attributes": True}

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class PersonResolution(BaseModel):
    """Outcome of selecting an existing person or creating a new one.

    ``person_id`` is only set when ``status`` is ``ok``; ``created`` marks a
    person inserted by this selection.
    """

    role: PersonRole
    status: ResolutionStatus
    person_id: Optional[int] = None
    detail: str = ""
    created: bool = False

    @property
    def ok(self) -> bool:
        return self.status == ResolutionStatus.OK
