"""
Numbered console menu.

Reads one choice per loop, gathers the fields an operation needs through the
InputReader, calls the project service and prints the outcome. Store errors
and rejected values are reported and the loop carries on; only choice 0 ends it.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Callable, Optional

import structlog
from pydantic import ValidationError
from sqlalchemy.orm import Session

from poise_pms.database import StoreError
from poise_pms.prompts import InputReader
from poise_pms.schemas import (
    NEW_PERSON_MARKER,
    PersonRole,
    ProjectCreate,
    ProjectRead,
    ProjectUpdate,
    ResolutionStatus,
)
from poise_pms.services import people, projects

log = structlog.get_logger()

MENU_TITLE = "=== PoisePMS Menu ==="
EXIT_CHOICE = 0


class ProjectMenu:
    """Interactive loop over the project service for one open session."""

    def __init__(self, session: Session, reader: InputReader):
        self._session = session
        self._reader = reader
        self._commands: dict[int, tuple[str, str, Callable[[], None]]] = {
            1: ("View All Projects", "fetching projects", self.view_all),
            2: ("Add New Project", "adding project", self.add_project),
            3: ("Update Existing Project", "updating project", self.update_project),
            4: ("Delete Project", "deleting project", self.delete_project),
            5: ("Finalise Project", "finalising project", self.finalise_project),
            6: ("View Incomplete Projects", "fetching incomplete projects", self.view_incomplete),
            7: ("View Overdue Projects", "fetching overdue projects", self.view_overdue),
            8: ("Search Project by Number or Name", "searching for project", self.search),
        }

    def run(self) -> None:
        while True:
            self.show_menu()
            choice = self._reader.read_int("Enter your choice")
            if choice == EXIT_CHOICE:
                self._reader.say("Exiting application.")
                return
            self.dispatch(choice)

    def show_menu(self) -> None:
        say = self._reader.say
        say()
        say(MENU_TITLE)
        for number, (label, _, _) in self._commands.items():
            say(f"{number}. {label}")
        say(f"{EXIT_CHOICE}. Exit")

    def dispatch(self, choice: int) -> None:
        command = self._commands.get(choice)
        if command is None:
            self._reader.say("Invalid choice. Please try again.")
            return

        _, action, handler = command
        try:
            handler()
        except StoreError as exc:
            log.warning("menu.command_failed", choice=choice, error=str(exc))
            self._reader.say(f"Error {action}: {exc}")
        except ValidationError as exc:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
            )
            log.warning("menu.invalid_input", choice=choice, error=problems)
            self._reader.say(f"Error {action}: {problems}")

    # --- Listings ---

    def view_all(self) -> None:
        self._show(projects.list_projects(self._session), "No projects recorded.")

    def view_incomplete(self) -> None:
        self._show(projects.list_incomplete_projects(self._session), "No incomplete projects.")

    def view_overdue(self) -> None:
        self._show(projects.list_overdue_projects(self._session), "No overdue projects.")

    def search(self) -> None:
        term = self._reader.read_string("Enter Project Number or Name to search")
        self._show(
            projects.search_projects(self._session, term),
            "No project found with the given number or name.",
        )

    # --- Mutations ---

    def add_project(self) -> None:
        read = self._reader
        building_type = read.read_string("Enter Building Type (e.g., House)")
        name = read.read_string("Enter Project Name (leave blank to auto-generate)", allow_blank=True)
        address = read.read_string("Enter Address")
        erf_number = read.read_string("Enter ERF Number")
        total_fee = read.read_decimal("Enter Total Fee", minimum=Decimal("0"))
        amount_paid = read.read_decimal("Enter Amount Paid", minimum=Decimal("0"))
        deadline = read.read_date("Enter Deadline")

        customer_id = self._select_person(PersonRole.CUSTOMER)
        architect_id = self._select_person(PersonRole.ARCHITECT)
        manager_id = self._select_person(PersonRole.PROJECT_MANAGER)
        contractor_id = self._select_person(PersonRole.CONTRACTOR, optional=True)
        structural_engineer = read.read_string("Enter Structural Engineer's Name", allow_blank=True)

        project = projects.create_project(
            self._session,
            ProjectCreate(
                name=name,
                building_type=building_type,
                address=address,
                erf_number=erf_number,
                total_fee=total_fee,
                amount_paid=amount_paid,
                deadline=deadline,
                customer_id=customer_id,
                architect_id=architect_id,
                project_manager_id=manager_id,
                contractor_id=contractor_id,
                structural_engineer=structural_engineer or None,
            ),
        )
        if not name:
            read.say(f"Generated Project Name: {project.name}")
        read.say(f"1 project(s) added successfully with ID {project.id}.")

    def update_project(self) -> None:
        read = self._reader
        project_id = read.read_int("Enter Project ID to update")
        name = read.read_string("Enter New Name (or leave blank to keep current)", allow_blank=True)
        deadline = read.read_date("Enter New Deadline", allow_blank=True)
        amount_paid = read.read_decimal(
            "Enter New Amount Paid (or leave blank to keep current)",
            minimum=Decimal("0"),
            allow_blank=True,
        )
        changes = ProjectUpdate(name=name, deadline=deadline, amount_paid=amount_paid)

        if projects.update_project(self._session, project_id, changes):
            read.say("Project updated successfully.")
        else:
            read.say("No project found with the given ID.")

    def delete_project(self) -> None:
        project_id = self._reader.read_int("Enter Project ID to delete")
        rows = projects.delete_project(self._session, project_id)
        self._reader.say(f"{rows} project(s) deleted successfully.")

    def finalise_project(self) -> None:
        read = self._reader
        project_id = read.read_int("Enter Project ID to finalise")
        completion_date = read.read_date("Enter Completion Date (blank for today)", allow_blank=True)
        rows = projects.finalise_project(self._session, project_id, completion_date)
        if rows:
            read.say(f"{rows} project(s) finalised successfully.")
        else:
            read.say("0 project(s) finalised: no unfinalised project with the given ID.")

    # --- Helpers ---

    def _select_person(self, role: PersonRole, optional: bool = False) -> Optional[int]:
        read = self._reader
        read.say()
        read.say(f"Available {role.label}s:")
        for person in people.list_people(self._session, role):
            read.say(f"{person.id}: {person.full_name}")

        prompt = f"Enter {role.label} ID or type '{NEW_PERSON_MARKER}' to create"
        if optional:
            prompt += " (blank to skip)"

        while True:
            selection = read.read_string(prompt, allow_blank=optional)
            if optional and not selection:
                return None
            resolution = people.resolve_or_create_person(
                self._session, role, selection, read.read_person
            )
            if resolution.ok:
                if resolution.created:
                    read.say(f"{role.label} created successfully with ID: {resolution.person_id}")
                return resolution.person_id
            if resolution.status == ResolutionStatus.STORE_ERROR:
                raise StoreError(resolution.detail)
            read.say(f"{resolution.detail}. Please try again.")

    def _show(self, found: list[ProjectRead], empty_message: str) -> None:
        if not found:
            self._reader.say(empty_message)
            return
        for project in found:
            self._reader.say(format_project(project))


def _person_line(label: str, person) -> str:
    if person is None:
        return f"{label}: -"
    line = f"{label}: {person.full_name}"
    if person.email:
        line += f" <{person.email}>"
    return line


def format_project(project: ProjectRead) -> str:
    """Multi-line text block describing one project."""
    lines = [
        "",
        f"Project ID: {project.id}",
        f"Project Name: {project.name}",
        f"Building Type: {project.building_type}",
        f"Address: {project.address} (ERF {project.erf_number})",
        f"Total Fee: {project.total_fee:.2f}",
        f"Amount Paid: {project.amount_paid:.2f}",
        f"Deadline: {project.deadline.isoformat()}",
        f"Finalised: {'Yes' if project.finalised else 'No'}",
    ]
    if project.completion_date:
        lines.append(f"Completion Date: {project.completion_date.isoformat()}")
    lines.append(_person_line("Customer", project.customer))
    lines.append(_person_line("Architect", project.architect))
    lines.append(_person_line("Project Manager", project.project_manager))
    if project.contractor is not None:
        lines.append(_person_line("Contractor", project.contractor))
    if project.structural_engineer:
        lines.append(f"Structural Engineer: {project.structural_engineer}")
    return "\n".join(lines)
