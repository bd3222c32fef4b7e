"""
Tests for the console menu driven through scripted input.
"""

from __future__ import annotations

from datetime import date

from sqlalchemy import text

from poise_pms.menu import ProjectMenu, format_project
from poise_pms.schemas import PersonRole
from poise_pms.services import people, projects

NEW_PERSON = ["new", "{first}", "{last}", "", "", ""]


def _new_person(first: str, last: str) -> list[str]:
    return [line.format(first=first, last=last) for line in NEW_PERSON]


def _add_project_lines(name: str = "", deadline: str = "2030-01-31") -> list[str]:
    return [
        "2",
        "House",
        name,
        "1 Main Rd",
        "ERF 7",
        "100000",
        "2500.5",
        deadline,
        *_new_person("A", "B"),
        *_new_person("Pieter", "van Wyk"),
        *_new_person("Lerato", "Dlamini"),
        "",  # no contractor
        "",  # no structural engineer
    ]


def _run(session, make_reader, *lines: str) -> str:
    reader = make_reader(*lines)
    ProjectMenu(session, reader).run()
    return reader.out.getvalue()


def test_menu_lists_every_command_and_exits(session, make_reader):
    output = _run(session, make_reader, "0")
    assert "=== PoisePMS Menu ===" in output
    for number in range(9):
        assert f"{number}. " in output
    assert "Exiting application." in output


def test_out_of_range_and_non_numeric_choices_reloop(session, make_reader):
    output = _run(session, make_reader, "9", "abc", "0")
    assert "Invalid choice. Please try again." in output
    assert "Please enter a whole number" in output
    assert output.count("=== PoisePMS Menu ===") == 2


def test_add_project_with_new_people_and_generated_name(session, make_reader):
    output = _run(session, make_reader, *_add_project_lines(), "0")

    assert "Generated Project Name: House B" in output
    assert "1 project(s) added successfully with ID 1." in output
    assert "Customer created successfully with ID: 1" in output

    stored = projects.get_project(session, 1)
    assert stored.name == "House B"
    assert stored.contractor is None
    assert stored.structural_engineer is None
    assert str(stored.amount_paid) == "2500.50"


def test_person_selection_reprompts_on_bad_id(session, make_reader, team):
    lines = [
        "2", "Store", "Paarl Store", "5 Lady Grey St", "ERF 740", "1300000", "0", "2030-01-31",
        "abc", "99", str(team["customer"]),
        str(team["architect"]),
        str(team["manager"]),
        "",
        "M. Naidoo",
        "0",
    ]
    output = _run(session, make_reader, *lines)

    assert "'abc' is not a valid Customer ID. Please try again." in output
    assert "No Customer found with ID 99. Please try again." in output
    assert "Available Customers:" in output
    assert f"{team['customer']}: A B" in output

    [stored] = projects.search_projects(session, "paarl")
    assert stored.customer.id == team["customer"]
    assert stored.structural_engineer == "M. Naidoo"


def test_update_with_blank_fields_keeps_values(session, make_reader, project_in):
    created = projects.create_project(session, project_in(name="Oak House"))
    output = _run(session, make_reader, "3", str(created.id), "", "", "", "0")

    assert "Project updated successfully." in output
    stored = projects.get_project(session, created.id)
    assert stored.name == "Oak House"
    assert stored.deadline == created.deadline


def test_update_missing_project_reports_not_found(session, make_reader):
    output = _run(session, make_reader, "3", "404", "New Name", "", "", "0")
    assert "No project found with the given ID." in output


def test_finalise_twice_then_delete(session, make_reader, project_in, team):
    created = projects.create_project(session, project_in())
    pid = str(created.id)

    output = _run(
        session, make_reader,
        "5", pid, "2024-03-01",
        "5", pid, "2024-04-01",
        "4", pid,
        "0",
    )

    assert "1 project(s) finalised successfully." in output
    assert "0 project(s) finalised" in output
    assert "1 project(s) deleted successfully." in output
    assert projects.get_project(session, created.id) is None
    assert people.get_person(session, PersonRole.CUSTOMER, team["customer"]) is not None


def test_listings_and_search(session, make_reader, project_in):
    projects.create_project(session, project_in(name="Late House", deadline=date(2000, 1, 1)))
    done = projects.create_project(session, project_in(name="Done House"))
    projects.finalise_project(session, done.id, date(2024, 3, 1))

    output = _run(session, make_reader, "6", "0")
    assert "Late House" in output
    assert "Done House" not in output

    output = _run(session, make_reader, "7", "0")
    assert "Late House" in output

    output = _run(session, make_reader, "8", "done", "0")
    assert "Done House" in output
    assert "Completion Date: 2024-03-01" in output

    output = _run(session, make_reader, "8", "nothing like it", "0")
    assert "No project found with the given number or name." in output


def test_store_error_is_reported_and_loop_continues(session, make_reader):
    session.execute(text("DROP TABLE Project"))
    session.commit()

    output = _run(session, make_reader, "1", "6", "0")
    assert "Error fetching projects:" in output
    assert "Error fetching incomplete projects:" in output
    assert "Exiting application." in output


def test_format_project(session, project_in):
    created = projects.create_project(session, project_in(name="Oak House"))
    block = format_project(created)
    assert "Project Name: Oak House" in block
    assert "Total Fee: 850000.00" in block
    assert "Finalised: No" in block
    assert "Customer: A B" in block
    assert "Contractor" not in block


def test_fee_beyond_store_range_is_reported_and_loop_continues(session, make_reader):
    lines = _add_project_lines()
    lines[5] = "1e30"  # total fee
    output = _run(session, make_reader, *lines, "1", "0")

    assert "Error adding project: total_fee: Value error, amount must not exceed" in output
    assert "No projects recorded." in output
    assert "Exiting application." in output


def test_update_with_amount_beyond_store_range_is_reported(session, make_reader, project_in):
    created = projects.create_project(session, project_in())
    output = _run(session, make_reader, "3", str(created.id), "", "", "1e30", "0")

    assert "Error updating project: amount_paid: Value error, amount must not exceed" in output
    assert projects.get_project(session, created.id).amount_paid == created.amount_paid


def test_id_beyond_integer_range_is_reported_and_loop_continues(session, make_reader, project_in):
    projects.create_project(session, project_in(name="Oak House"))
    huge = "99999999999999999999"

    output = _run(session, make_reader, "4", huge, "5", huge, "", "8", huge, "1", "0")

    assert "Error deleting project:" in output
    assert "Error finalising project:" in output
    assert "Error searching for project:" in output
    assert "Oak House" in output
    assert "Exiting application." in output
