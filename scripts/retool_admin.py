"""Command-line helper for inspecting and managing a Retool organization.

This module serves as a CLI wrapper around retool_sdk services.
"""
from __future__ import annotations
import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path

SCRIPT_DIR = Path(__file__).parent
PROJECT_ROOT = SCRIPT_DIR.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from retool_sdk import (
    ConfigurationVariableService,
    FolderService,
    GroupService,
    RetoolClient,
    SpaceService,
    UserService,
)
from retool_sdk.config import build_client, load_settings
from retool_sdk.exceptions import RetoolError


def _to_jsonable(value):
    if dataclasses.is_dataclass(value):
        return dataclasses.asdict(value)
    if isinstance(value, list):
        return [_to_jsonable(item) for item in value]
    return value


def _emit(value) -> None:
    print(json.dumps(_to_jsonable(value), indent=2, default=str))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Retool admin helper")
    parser.add_argument("--endpoint", help="Defaults to RETOOL_ENDPOINT")
    parser.add_argument("--api-key", help="Defaults to /run/secrets/retool_api_key or RETOOL_API_KEY")
    parser.add_argument("--timeout", type=float, help="Seconds, defaults to RETOOL_TIMEOUT or 10")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log every request")

    sub = parser.add_subparsers(dest="cmd")

    lu = sub.add_parser("list-users")
    lu.add_argument("--email")
    lu.add_argument("--first-name")
    lu.add_argument("--last-name")

    gu = sub.add_parser("get-user")
    gu.add_argument("--id", required=True)

    sub.add_parser("list-groups")

    gg = sub.add_parser("get-group")
    gg.add_argument("--id", required=True)

    sub.add_parser("list-folders")

    gf = sub.add_parser("get-folder")
    gf.add_argument("--id", required=True)

    cf = sub.add_parser("create-folder")
    cf.add_argument("--name", required=True)
    cf.add_argument("--parent-folder-id")
    cf.add_argument("--folder-type", choices=["app", "workflow", "resource"])

    df = sub.add_parser("delete-folder")
    df.add_argument("--id", required=True)

    sub.add_parser("list-spaces")
    sub.add_parser("list-config-vars")

    return parser


def run(args: argparse.Namespace, client: RetoolClient):
    """Dispatch a parsed command and return its result."""
    if args.cmd == "list-users":
        return UserService(client).list_users(args.email, args.first_name, args.last_name)
    if args.cmd == "get-user":
        return UserService(client).get_user(args.id)
    if args.cmd == "list-groups":
        return GroupService(client).list_groups()
    if args.cmd == "get-group":
        return GroupService(client).get_group(args.id)
    if args.cmd == "list-folders":
        return FolderService(client).list_folders()
    if args.cmd == "get-folder":
        return FolderService(client).get_folder(args.id)
    if args.cmd == "create-folder":
        return FolderService(client).create_folder(args.name, args.parent_folder_id, args.folder_type)
    if args.cmd == "delete-folder":
        FolderService(client).delete_folder(args.id)
        return {"deleted": args.id}
    if args.cmd == "list-spaces":
        return SpaceService(client).list_spaces()
    if args.cmd == "list-config-vars":
        return ConfigurationVariableService(client).list_configuration_variables()
    raise ValueError(f"Unknown command: {args.cmd}")


def main() -> None:
    """Command-line entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.cmd:
        parser.print_help()
        return

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings(api_key=args.api_key, endpoint=args.endpoint)
        if args.timeout is not None:
            settings.timeout = args.timeout
        with build_client(settings) as client:
            result = run(args, client)
    except RetoolError as e:
        print(f"[{args.cmd}] Error: {e}", file=sys.stderr)
        sys.exit(1)

    _emit(result)


if __name__ == "__main__":
    main()
