from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Sequence

from .config import ConfigError, load_config
from .exceptions import ApiError
from .logging_setup import configure_logging
from .models import PaginatedQuery
from .result import Result
from .session import RESOURCE_CLIENTS, ApiSession
from .ui_errors import to_user_facing_error


def _emit(payload: Any) -> None:
    print(json.dumps(payload, indent=2, default=str))


def _fail(error: ApiError) -> int:
    facing = to_user_facing_error(error)
    _emit({"error": error.code, "message": facing.message, "details": facing.technical_details})
    return 1


def _finish(result: Result[Any], render) -> int:
    if not result.ok:
        assert result.error is not None
        return _fail(result.error)
    _emit(render(result.value))
    return 0


def _session(args: argparse.Namespace) -> ApiSession:
    config = load_config(args.env_file)
    configure_logging(config.log_level)
    return ApiSession(config)


def cmd_login(args: argparse.Namespace) -> int:
    result = _session(args).auth_gateway().login(args.email, args.password)
    return _finish(result, lambda user: {"user": user.model_dump(by_alias=True)})


def cmd_logout(args: argparse.Namespace) -> int:
    return _finish(_session(args).auth_gateway().logout(), lambda _: {"signed_out": True})


def cmd_whoami(args: argparse.Namespace) -> int:
    user = _session(args).auth_gateway().current_user()
    if user is None:
        _emit({"error": "NOT_AUTHENTICATED", "message": "No stored session. Run 'login' first."})
        return 1
    _emit(user.model_dump(by_alias=True))
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    client = _session(args).resource(args.resource)
    query = PaginatedQuery(
        page_index=args.page,
        page_size=args.page_size,
        keyword=args.keyword,
        status=args.status,
        role=args.role,
        type=args.type,
    )
    return _finish(client.list(query), lambda page: page.model_dump(by_alias=True))


def cmd_get(args: argparse.Namespace) -> int:
    client = _session(args).resource(args.resource)
    return _finish(client.get_by_id(args.id), lambda record: record.model_dump(by_alias=True))


def cmd_delete(args: argparse.Namespace) -> int:
    client = _session(args).resource(args.resource)
    return _finish(client.delete(args.id), lambda _: {"deleted": args.id})


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="admin-console", description="Admin console API client")
    parser.add_argument("--env-file", default=None)
    subparsers = parser.add_subparsers(dest="command", required=True)

    login_parser = subparsers.add_parser("login")
    login_parser.add_argument("--email", required=True)
    login_parser.add_argument("--password", required=True)
    login_parser.set_defaults(func=cmd_login)

    logout_parser = subparsers.add_parser("logout")
    logout_parser.set_defaults(func=cmd_logout)

    whoami_parser = subparsers.add_parser("whoami")
    whoami_parser.set_defaults(func=cmd_whoami)

    resources = sorted(RESOURCE_CLIENTS)

    list_parser = subparsers.add_parser("list")
    list_parser.add_argument("resource", choices=resources)
    list_parser.add_argument("--page", type=int, default=1)
    list_parser.add_argument("--page-size", type=int, default=10)
    list_parser.add_argument("--keyword")
    list_parser.add_argument("--status")
    list_parser.add_argument("--role")
    list_parser.add_argument("--type")
    list_parser.set_defaults(func=cmd_list)

    get_parser = subparsers.add_parser("get")
    get_parser.add_argument("resource", choices=resources)
    get_parser.add_argument("id")
    get_parser.set_defaults(func=cmd_get)

    delete_parser = subparsers.add_parser("delete")
    delete_parser.add_argument("resource", choices=resources)
    delete_parser.add_argument("id")
    delete_parser.set_defaults(func=cmd_delete)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except ConfigError as exc:
        _emit({"error": "CONFIG_ERROR", "message": str(exc)})
        return 2
    except ValueError as exc:
        _emit({"error": "INVALID_ARGUMENT", "message": str(exc)})
        return 2


if __name__ == "__main__":
    sys.exit(main())
