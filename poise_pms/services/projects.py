"""
Project service layer: business logic for construction projects.

Handles:
- Listing (all, incomplete, overdue) with the people attached to each project
- Create with automatic naming from building type and customer last name
- Partial update, delete and finalise, each reporting rows affected
- Search by exact id or case-insensitive name substring

Every operation is its own commit. Store failures surface as StoreError;
a missing id is not an error and shows up as 0 rows affected.
"""

from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

import structlog
from sqlalchemy import delete, or_, update
from sqlalchemy.orm import Session
from sqlmodel import col, select

from poise_pms.database import unit_of_work
from poise_pms.models import Architect, Contractor, Customer, Project, ProjectManager
from poise_pms.schemas import (
    PersonRole,
    PersonSummary,
    ProjectCreate,
    ProjectRead,
    ProjectUpdate,
)
from poise_pms.services.people import get_last_name

log = structlog.get_logger()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _project_query():
    """Projects joined with their people, in storage order."""
    return (
        select(Project, Customer, Architect, ProjectManager, Contractor)
        .join(Customer, Customer.id == Project.customer_id, isouter=True)
        .join(Architect, Architect.id == Project.architect_id, isouter=True)
        .join(ProjectManager, ProjectManager.id == Project.project_manager_id, isouter=True)
        .join(Contractor, Contractor.id == Project.contractor_id, isouter=True)
        .order_by(Project.id)
        .execution_options(populate_existing=True)
    )


def _summary(person) -> Optional[PersonSummary]:
    return PersonSummary.model_validate(person) if person is not None else None


def _to_read(row: Sequence) -> ProjectRead:
    project, customer, architect, manager, contractor = row
    return ProjectRead(
        **project.model_dump(),
        customer=_summary(customer),
        architect=_summary(architect),
        project_manager=_summary(manager),
        contractor=_summary(contractor),
    )


def _fetch(session: Session, *conditions) -> list[ProjectRead]:
    stmt = _project_query()
    if conditions:
        stmt = stmt.where(*conditions)
    with unit_of_work(session):
        rows = session.execute(stmt).all()
    return [_to_read(row) for row in rows]


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def generate_project_name(session: Session, building_type: str, customer_id: int) -> str:
    """Default project name: building type followed by the customer's last name."""
    return f"{building_type} {get_last_name(session, PersonRole.CUSTOMER, customer_id)}"


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def list_projects(session: Session) -> list[ProjectRead]:
    return _fetch(session)


def get_project(session: Session, project_id: int) -> Optional[ProjectRead]:
    found = _fetch(session, Project.id == project_id)
    return found[0] if found else None


def list_incomplete_projects(session: Session) -> list[ProjectRead]:
    return _fetch(session, Project.finalised == False)  # noqa: E712


def list_overdue_projects(session: Session, today: Optional[date] = None) -> list[ProjectRead]:
    """Unfinalised projects whose deadline is strictly before ``today``."""
    today = today or date.today()
    return _fetch(
        session,
        Project.finalised == False,  # noqa: E712
        Project.deadline < today,
    )


def search_projects(session: Session, term: str) -> list[ProjectRead]:
    """Match ``term`` against the exact project id or anywhere in the name."""
    term = term.strip()
    if not term:
        return []

    condition = col(Project.name).ilike(f"%{_escape_like(term)}%", escape="\\")
    if term.isdecimal():
        condition = or_(Project.id == int(term), condition)
    return _fetch(session, condition)


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------


def create_project(session: Session, project_in: ProjectCreate) -> ProjectRead:
    """Insert a project (never finalised on creation) and return it as stored."""
    name = project_in.name.strip()
    if not name:
        name = generate_project_name(session, project_in.building_type, project_in.customer_id)

    fields = project_in.model_dump(exclude={"name"})
    project = Project(
        **fields,
        name=name,
        finalised=False,
    )
    with unit_of_work(session):
        session.add(project)
        session.flush()

    log.info("project.created", project_id=project.id, name=name)
    return get_project(session, project.id)


def update_project(session: Session, project_id: int, changes: ProjectUpdate) -> int:
    """Apply the supplied fields; unset ones keep their stored value."""
    values = changes.model_dump(exclude_none=True)
    if not values:
        return 1 if get_project(session, project_id) is not None else 0

    stmt = update(Project).where(Project.id == project_id).values(**values)
    with unit_of_work(session):
        rowcount = session.execute(stmt).rowcount

    log.info("project.updated", project_id=project_id, fields=sorted(values), rows=rowcount)
    return rowcount


def delete_project(session: Session, project_id: int) -> int:
    """Remove a project row. The people it referenced are left in place."""
    stmt = delete(Project).where(Project.id == project_id)
    with unit_of_work(session):
        rowcount = session.execute(stmt).rowcount

    log.info("project.deleted", project_id=project_id, rows=rowcount)
    return rowcount


def finalise_project(
    session: Session,
    project_id: int,
    completion_date: Optional[date] = None,
) -> int:
    """Mark a project finalised and stamp its completion date (default today).

    Already finalised projects are left untouched and count as 0 rows.
    """
    completion_date = completion_date or date.today()
    stmt = (
        update(Project)
        .where(Project.id == project_id, Project.finalised == False)  # noqa: E712
        .values(finalised=True, completion_date=completion_date)
    )
    with unit_of_work(session):
        rowcount = session.execute(stmt).rowcount

    log.info(
        "project.finalised",
        project_id=project_id,
        completion_date=completion_date.isoformat(),
        rows=rowcount,
    )
    return rowcount
