"""Argument parser construction for the ``taskboard`` command."""

from __future__ import annotations

import argparse

from .commands import auth, migrate, start, workspaces


def build_cli_app() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="taskboard",
        description="Run the Taskboard API or talk to a running instance.",
    )
    subparsers = parser.add_subparsers(dest="command")

    start_parser = subparsers.add_parser("start", help="Serve the API with uvicorn.")
    start.register_arguments(start_parser)
    start_parser.set_defaults(handler=start.start)

    migrate_parser = subparsers.add_parser("migrate", help="Apply database migrations.")
    migrate.register_arguments(migrate_parser)
    migrate_parser.set_defaults(handler=migrate.migrate)

    login_parser = subparsers.add_parser("login", help="Sign in and store the session.")
    auth.register_login_arguments(login_parser)
    login_parser.set_defaults(handler=auth.login)

    logout_parser = subparsers.add_parser("logout", help="Forget the stored session.")
    logout_parser.set_defaults(handler=auth.logout)

    workspaces_parser = subparsers.add_parser(
        "workspaces", help="List or create workspaces for the signed-in user."
    )
    workspaces.register_arguments(workspaces_parser)
    workspaces_parser.set_defaults(handler=workspaces.run)

    return parser


__all__ = ["build_cli_app"]
