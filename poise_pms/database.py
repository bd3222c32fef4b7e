"""
Database connection and session management.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import structlog
from sqlalchemy import Engine, create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlmodel import SQLModel

from poise_pms import models  # noqa: F401
from poise_pms.config import DatabaseConfig

log = structlog.get_logger()


class StoreError(Exception):
    """A statement failed in the store (connectivity, constraint, malformed SQL)."""


def create_db_engine(config: DatabaseConfig) -> Engine:
    return create_engine(
        config.resolved_url(),
        echo=config.echo,
        future=True,
    )


def init_db(engine: Engine) -> None:
    """Create all tables (development only; the schema is not migrated)."""
    SQLModel.metadata.create_all(engine)


@contextmanager
def open_session(engine: Engine) -> Iterator[Session]:
    """Open the single session used for a whole interactive run.

    The connection is acquired up front so an unreachable store fails here,
    before the menu is shown.
    """
    session_factory = sessionmaker(engine, class_=Session, expire_on_commit=False)
    with session_factory() as session:
        session.connection()
        yield session


@contextmanager
def unit_of_work(session: Session) -> Iterator[Session]:
    """Commit one statement's work, or roll back and raise StoreError.

    OverflowError covers integers the driver cannot bind (ids beyond the
    column range).
    """
    try:
        yield session
        session.commit()
    except (SQLAlchemyError, OverflowError) as exc:
        session.rollback()
        message = str(getattr(exc, "orig", None) or exc)
        log.warning("store.error", error=message)
        raise StoreError(message) from exc
