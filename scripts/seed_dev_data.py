#!/usr/bin/env python3
"""Seed a development database with sample people and projects.

Usage:
    python scripts/seed_dev_data.py [-c poise-pms.yaml]

Uses the same configuration as the console (POISE_DATABASE__URL and
POISE_DB_PASSWORD, or a YAML file). Tables are created if missing.
"""

import argparse
from datetime import date
from decimal import Decimal

from sqlmodel import select

from poise_pms.config import load_config
from poise_pms.database import create_db_engine, init_db, open_session
from poise_pms.models import Architect, Contractor, Customer, Project, ProjectManager

# Fixed ids for reproducibility
PERSON_ID = 1

PEOPLE = [
    (Customer, "Thandi", "Mokoena", "thandi@example.com", "082 555 0101", "12 Oak Ave, Cape Town"),
    (Architect, "Pieter", "van Wyk", "pieter@archi.example", "021 555 0110", "3 Long St, Cape Town"),
    (ProjectManager, "Lerato", "Dlamini", "lerato@poised.example", "021 555 0120", "1 Dock Rd, Cape Town"),
    (Contractor, "Sipho", "Nkosi", "sipho@build.example", "083 555 0130", "44 Main Rd, Paarl"),
]

# name, building type, address, erf, fee, paid, deadline, finalised, completion
PROJECTS = [
    ("House Mokoena", "House", "12 Oak Ave, Cape Town", "ERF 1021",
     Decimal("850000.00"), Decimal("250000.00"), date(2026, 12, 15), False, None),
    ("Apartment Block Sea Point", "Apartment", "88 Beach Rd, Sea Point", "ERF 5533",
     Decimal("4200000.00"), Decimal("4200000.00"), date(2025, 6, 30), True, date(2025, 6, 20)),
    ("Store Paarl", "Store", "5 Lady Grey St, Paarl", "ERF 740",
     Decimal("1300000.00"), Decimal("400000.00"), date(2025, 1, 31), False, None),
]


def seed(config_path=None):
    config = load_config(config_path)
    engine = create_db_engine(config.database)
    init_db(engine)

    with open_session(engine) as session:
        for model, first, last, email, phone, address in PEOPLE:
            if session.get(model, PERSON_ID) is None:
                session.add(model(
                    id=PERSON_ID, first_name=first, last_name=last,
                    email=email, phone=phone, address=address,
                ))
        session.flush()

        for name, btype, address, erf, fee, paid, deadline, finalised, completed in PROJECTS:
            existing = session.execute(select(Project).where(Project.name == name)).first()
            if existing:
                continue
            session.add(Project(
                name=name, building_type=btype, address=address, erf_number=erf,
                total_fee=fee, amount_paid=paid, deadline=deadline,
                finalised=finalised, completion_date=completed,
                customer_id=PERSON_ID, architect_id=PERSON_ID,
                project_manager_id=PERSON_ID, contractor_id=PERSON_ID,
            ))

        session.commit()

    engine.dispose()
    print("Seeded development data:")
    print(f"  People:   {len(PEOPLE)}")
    print(f"  Projects: {len(PROJECTS)}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed development data.")
    parser.add_argument("-c", "--config", default=None, help="Path to a YAML configuration file")
    args = parser.parse_args()

    seed(args.config)
