"""`taskboard workspaces [--create NAME]`."""

from __future__ import annotations

import argparse

from ._client import build_client


def register_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--create",
        metavar="NAME",
        default=None,
        help="Create a workspace with this name instead of listing.",
    )
    parser.add_argument("--description", default=None, help="Description for --create.")


async def run(args: argparse.Namespace) -> None:
    async with build_client() as client:
        if args.create:
            body = await client.create_workspace(args.create, args.description)
            workspace = body["workspace"]
            print(f"Created {workspace['name']} ({workspace['id']}).")
            return

        body = await client.list_workspaces()
        workspaces = body.get("workspaces", [])
        if not workspaces:
            print("No workspaces.")
            return
        for workspace in workspaces:
            print(f"{workspace['id']}  {workspace['role']:<6}  {workspace['name']}")
