"""
People service: the customers, architects, project managers and contractors
a project points at.

Every role has its own table with identical columns. The table is chosen from
the closed PersonRole enumeration, never from user text.
"""

from __future__ import annotations

from typing import Callable, Optional

import structlog
from sqlalchemy.orm import Session
from sqlmodel import select

from poise_pms.database import StoreError, unit_of_work
from poise_pms.models import Architect, Contractor, Customer, PersonBase, ProjectManager
from poise_pms.schemas import (
    NEW_PERSON_MARKER,
    PersonCreate,
    PersonResolution,
    PersonRole,
    PersonSummary,
    ResolutionStatus,
)

log = structlog.get_logger()

ROLE_MODELS: dict[PersonRole, type[PersonBase]] = {
    PersonRole.CUSTOMER: Customer,
    PersonRole.ARCHITECT: Architect,
    PersonRole.PROJECT_MANAGER: ProjectManager,
    PersonRole.CONTRACTOR: Contractor,
}


def model_for(role: PersonRole | str) -> type[PersonBase]:
    """Map a role to its table model. Unknown roles raise ValueError."""
    return ROLE_MODELS[PersonRole(role)]


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def list_people(session: Session, role: PersonRole) -> list[PersonSummary]:
    model = model_for(role)
    with unit_of_work(session):
        result = session.execute(select(model).order_by(model.id))
        rows = result.scalars().all()
    return [PersonSummary.model_validate(p) for p in rows]


def get_person(session: Session, role: PersonRole, person_id: int) -> Optional[PersonSummary]:
    model = model_for(role)
    with unit_of_work(session):
        person = session.get(model, person_id, populate_existing=True)
    return PersonSummary.model_validate(person) if person else None


def get_last_name(session: Session, role: PersonRole, person_id: int) -> str:
    """Last name of a person, or an empty string if it cannot be found."""
    model = model_for(role)
    try:
        with unit_of_work(session):
            result = session.execute(select(model.last_name).where(model.id == person_id))
            last_name = result.scalar_one_or_none()
    except StoreError:
        return ""
    return last_name or ""


# ---------------------------------------------------------------------------
# Create / resolve
# ---------------------------------------------------------------------------


def create_person(session: Session, role: PersonRole, person_in: PersonCreate) -> PersonSummary:
    model = model_for(role)
    person = model(**person_in.model_dump())
    with unit_of_work(session):
        session.add(person)
        session.flush()

    log.info("person.created", role=PersonRole(role).value, person_id=person.id)
    return PersonSummary.model_validate(person)


def resolve_or_create_person(
    session: Session,
    role: PersonRole,
    selection: str,
    new_person: Callable[[], PersonCreate],
) -> PersonResolution:
    """Resolve a typed selection to a person id for ``role``.

    Typing the ``new`` marker calls ``new_person`` for the details and inserts
    a fresh row (committed on its own, before any project that uses it).
    Anything else must be the id of an existing person of that role.
    """
    role = PersonRole(role)
    token = selection.strip()

    try:
        if token.lower() == NEW_PERSON_MARKER:
            created = create_person(session, role, new_person())
            return PersonResolution(
                role=role, status=ResolutionStatus.OK, person_id=created.id, created=True
            )

        try:
            person_id = int(token)
        except ValueError:
            return PersonResolution(
                role=role,
                status=ResolutionStatus.INVALID_FORMAT,
                detail=f"'{token}' is not a valid {role.label} ID",
            )

        if get_person(session, role, person_id) is None:
            return PersonResolution(
                role=role,
                status=ResolutionStatus.NOT_FOUND,
                detail=f"No {role.label} found with ID {person_id}",
            )
        return PersonResolution(role=role, status=ResolutionStatus.OK, person_id=person_id)

    except StoreError as exc:
        return PersonResolution(role=role, status=ResolutionStatus.STORE_ERROR, detail=str(exc))
