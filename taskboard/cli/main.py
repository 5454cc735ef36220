"""``taskboard`` console script."""

from __future__ import annotations

import argparse
import asyncio
import inspect
import sys
from collections.abc import Sequence

from taskboard.client.errors import ApiError

from .app import build_cli_app

__all__ = ["main"]


def _fail(message: str) -> int:
    print(f"Error: {message}", file=sys.stderr)
    return 1


def _dispatch(args: argparse.Namespace) -> None:
    # Client commands are coroutines; server commands run synchronously.
    outcome = args.handler(args)
    if inspect.iscoroutine(outcome):
        asyncio.run(outcome)


def main(argv: Sequence[str] | None = None) -> int:
    """Parse ``argv``, run the selected command and return the exit status."""

    parser = build_cli_app()
    args = parser.parse_args(argv)
    if getattr(args, "handler", None) is None:
        parser.print_help()
        return 1

    try:
        _dispatch(args)
    except ApiError as exc:
        return _fail(exc.message)
    except (ValueError, FileNotFoundError) as exc:
        return _fail(str(exc))
    except KeyboardInterrupt:
        return _fail("Aborted")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
