"""
Poise PMS entry point.

Loads configuration, configures logging, opens the database session and runs
the menu until the user exits.
"""

from __future__ import annotations

import argparse
import logging
import sys

import structlog
from sqlalchemy.exc import SQLAlchemyError

from .config import load_config
from .database import StoreError, create_db_engine, init_db, open_session
from .menu import ProjectMenu
from .prompts import InputReader


def configure_logging(level: str = "warning", fmt: str = "text") -> None:
    """Configure structlog with the specified level and format, writing to stderr."""
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if fmt == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper(), logging.WARNING)
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def run(argv: list[str] | None = None) -> None:
    """CLI entry point for the project tracker."""
    parser = argparse.ArgumentParser(description="Poise project management console")
    parser.add_argument(
        "-c", "--config",
        default=None,
        help="Path to a YAML configuration file (default: environment / .env only)",
    )
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except FileNotFoundError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    except Exception as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        sys.exit(1)

    configure_logging(config.logging.level, config.logging.format)
    log = structlog.get_logger()
    log.info("pms.starting", database=config.database.resolved_url().render_as_string())

    engine = create_db_engine(config.database)
    try:
        if config.database.create_schema:
            init_db(engine)
        with open_session(engine) as session:
            print("Connected to PoisePMS database.")
            ProjectMenu(session, InputReader()).run()
    except (KeyboardInterrupt, EOFError):
        print("\nExiting application.")
    except (SQLAlchemyError, StoreError) as exc:
        log.error("pms.failed", error=str(exc))
        print(f"An unexpected error occurred: {exc}", file=sys.stderr)
        sys.exit(1)
    except Exception as exc:
        log.error("pms.crashed", error=repr(exc))
        print(f"An unexpected error occurred: {exc}", file=sys.stderr)
        sys.exit(1)
    finally:
        engine.dispose()
        log.info("pms.stopped")


if __name__ == "__main__":
    run()
