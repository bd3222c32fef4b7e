"""Tests for person lookup, creation and selection."""

import pytest
from sqlalchemy import text

from poise_pms.schemas import PersonCreate, PersonRole, ResolutionStatus
from poise_pms.services import people


def _no_new_person():
    raise AssertionError("create path should not be taken")


def test_create_and_list_people_by_role(session):
    first = people.create_person(
        session, PersonRole.ARCHITECT, PersonCreate(first_name="Zola", last_name="Budd")
    )
    second = people.create_person(
        session, PersonRole.ARCHITECT, PersonCreate(first_name="Amy", last_name="Ash", email="amy@x.dev")
    )

    listed = people.list_people(session, PersonRole.ARCHITECT)
    assert [p.id for p in listed] == [first.id, second.id]
    assert listed[1].full_name == "Amy Ash"
    assert listed[1].email == "amy@x.dev"

    # Roles are separate tables
    assert people.list_people(session, PersonRole.CUSTOMER) == []


def test_model_for_rejects_unknown_role():
    with pytest.raises(ValueError):
        people.model_for("Plumber")


def test_get_last_name(session, team):
    assert people.get_last_name(session, PersonRole.CUSTOMER, team["customer"]) == "B"
    assert people.get_last_name(session, PersonRole.CUSTOMER, 9999) == ""


class TestResolveOrCreatePerson:
    def test_existing_id(self, session, team):
        res = people.resolve_or_create_person(
            session, PersonRole.CUSTOMER, str(team["customer"]), _no_new_person
        )
        assert res.ok
        assert res.status == ResolutionStatus.OK
        assert res.person_id == team["customer"]
        assert not res.created

    def test_new_marker_creates_person(self, session):
        calls = []

        def new_person():
            calls.append(1)
            return PersonCreate(first_name="Sipho", last_name="Nkosi")

        res = people.resolve_or_create_person(session, PersonRole.CONTRACTOR, " NEW ", new_person)
        assert res.ok
        assert calls == [1]
        assert res.created
        created = people.get_person(session, PersonRole.CONTRACTOR, res.person_id)
        assert created.full_name == "Sipho Nkosi"

    def test_invalid_format(self, session):
        res = people.resolve_or_create_person(session, PersonRole.CUSTOMER, "abc", _no_new_person)
        assert not res.ok
        assert res.status == ResolutionStatus.INVALID_FORMAT
        assert res.person_id is None
        assert "abc" in res.detail

    def test_not_found(self, session):
        res = people.resolve_or_create_person(session, PersonRole.CUSTOMER, "42", _no_new_person)
        assert res.status == ResolutionStatus.NOT_FOUND
        assert res.person_id is None
        assert "42" in res.detail

    def test_store_error(self, session):
        session.execute(text("DROP TABLE Architect"))
        session.commit()

        res = people.resolve_or_create_person(session, PersonRole.ARCHITECT, "1", _no_new_person)
        assert res.status == ResolutionStatus.STORE_ERROR
        assert res.person_id is None
        assert res.detail
