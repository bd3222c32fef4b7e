"""
Shared fixtures: a file-backed SQLite store per test and scripted input.
"""

import io
from datetime import date
from decimal import Decimal

import pytest

from poise_pms.config import DatabaseConfig
from poise_pms.database import create_db_engine, init_db, open_session
from poise_pms.prompts import InputReader
from poise_pms.schemas import PersonCreate, PersonRole, ProjectCreate
from poise_pms.services import people


@pytest.fixture
def engine(tmp_path):
    config = DatabaseConfig(
        url=f"sqlite:///{tmp_path / 'poise.db'}",
        password_env="POISE_TEST_PASSWORD_UNSET",
    )
    eng = create_db_engine(config)
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session(engine):
    with open_session(engine) as s:
        yield s


@pytest.fixture
def make_reader():
    """Build an InputReader fed by the given lines; its output is readable via .out."""

    def _make(*lines: str) -> InputReader:
        stdin = io.StringIO("".join(f"{line}\n" for line in lines))
        return InputReader(stdin=stdin, stdout=io.StringIO())

    return _make


@pytest.fixture
def team(session):
    """One person per role; the customer is "A B"."""
    return {
        "customer": people.create_person(
            session, PersonRole.CUSTOMER, PersonCreate(first_name="A", last_name="B")
        ).id,
        "architect": people.create_person(
            session, PersonRole.ARCHITECT, PersonCreate(first_name="Pieter", last_name="van Wyk")
        ).id,
        "manager": people.create_person(
            session, PersonRole.PROJECT_MANAGER, PersonCreate(first_name="Lerato", last_name="Dlamini")
        ).id,
    }


@pytest.fixture
def project_in(team):
    """Factory for ProjectCreate payloads wired to the ``team`` people."""

    def _make(**overrides) -> ProjectCreate:
        fields = {
            "name": "",
            "building_type": "House",
            "address": "12 Oak Ave",
            "erf_number": "ERF 1021",
            "total_fee": Decimal("850000.00"),
            "amount_paid": Decimal("250000.00"),
            "deadline": date(2030, 1, 31),
            "customer_id": team["customer"],
            "architect_id": team["architect"],
            "project_manager_id": team["manager"],
        }
        fields.update(overrides)
        return ProjectCreate(**fields)

    return _make
