"""Launch the Taskboard server from the CLI."""

from __future__ import annotations

import argparse

import uvicorn

from taskboard.settings import get_settings

CLIArgs = argparse.Namespace


def register_arguments(parser: argparse.ArgumentParser) -> None:
    """Attach command-line options for the `taskboard start` command."""

    settings = get_settings()
    parser.add_argument(
        "--host",
        default=settings.server_host,
        help=f"Host interface for uvicorn (default: {settings.server_host}).",
    )
    parser.add_argument(
        "--port",
        default=settings.server_port,
        type=int,
        help=f"Port for uvicorn to bind (default: {settings.server_port}).",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development.",
    )


def start(args: CLIArgs) -> None:
    """Run the Taskboard FastAPI application."""

    uvicorn.run(
        "taskboard.main:create_app",
        factory=True,
        host=str(args.host),
        port=int(args.port),
        reload=bool(args.reload),
        log_config=None,
    )
