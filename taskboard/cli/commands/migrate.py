"""Apply Alembic migrations to the configured database."""

from __future__ import annotations

import argparse

from taskboard.common.logging import setup_logging
from taskboard.db.migrations import run_migrations
from taskboard.settings import get_settings


def register_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "revision",
        nargs="?",
        default="head",
        help="Target revision (default: head).",
    )


def migrate(args: argparse.Namespace) -> None:
    settings = get_settings()
    setup_logging(settings.logging_level)
    run_migrations(settings, revision=str(args.revision))
    print(f"Database migrated to {args.revision}.")
