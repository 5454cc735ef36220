"""`taskboard login` / `taskboard logout`."""

from __future__ import annotations

import argparse
import getpass

from taskboard.client import FileTokenStore, Session, get_client_settings

from ._client import build_client


def register_login_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("email", help="Account email address.")
    parser.add_argument(
        "--password",
        default=None,
        help="Password (prompted when omitted).",
    )


async def login(args: argparse.Namespace) -> None:
    password = args.password or getpass.getpass("Password: ")
    async with build_client() as client:
        body = await client.login(email=args.email, password=password)
    print(f"Signed in as {body['user']['email']}.")


def logout(args: argparse.Namespace) -> None:
    _ = args
    Session(FileTokenStore(get_client_settings().token_file)).clear()
    print("Signed out.")
