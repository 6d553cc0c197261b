"""Text-mode entry point over the user view models."""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional, Sequence

from ..domain.entities import UserRecord
from ..adapters.user_rest_mock import UserRestMock
from ..utils import logging as logging_utils
from ..viewmodels.error_state import ErrorState
from ..viewmodels.user_detail_vm import DONE
from ..viewmodels.user_list_vm import EMPTY, ERROR
from .settings import ClientConfig
from .wiring import UserServices, build_services

_DEMO_USERS = (
    UserRecord(1, "Leanne Graham", "sincere@april.biz"),
    UserRecord(2, "Ervin Howell", "shanna@melissa.tv"),
)


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="roster", description="List, view, save and delete users.")
    parser.add_argument("--offline", action="store_true", help="use an in-memory remote with demo users")
    parser.add_argument("--log-level", default="WARNING")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("list")
    show = sub.add_parser("show")
    show.add_argument("user_id", type=int)
    save = sub.add_parser("save")
    save.add_argument("user_id", type=int)
    save.add_argument("name")
    save.add_argument("email")
    delete = sub.add_parser("delete")
    delete.add_argument("user_id", type=int)
    return parser.parse_args(argv)


def _format_error(error: Optional[ErrorState]) -> str:
    if error is None:
        return "error"
    hint = " (retry possible)" if error.is_retryable else ""
    return f"{error.title}: {error.message}{hint}"


def run(services: UserServices, args: argparse.Namespace) -> List[str]:
    """Execute one command and return the lines to print."""
    if args.command == "list":
        state = services.user_list_vm().load()
        if state.phase == ERROR:
            return [_format_error(state.error)]
        if state.phase == EMPTY:
            return ["No users."]
        return [f"{user.id}\t{user.name}\t{user.email}" for user in state.users]

    detail = services.user_detail_vm()
    if args.command == "show":
        state = detail.load(args.user_id)
        if state.user is None:
            return [_format_error(state.error)]
        return [f"{state.user.id}\t{state.user.name}\t{state.user.email}"]
    if args.command == "save":
        op = detail.save(args.name, args.email, user_id=args.user_id)
    else:
        detail.user_id = args.user_id
        op = detail.delete()
    if op.phase == DONE:
        return [op.message]
    return [_format_error(op.error)]


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    level = logging_utils.configure_root(args.log_level)
    log = logging.getLogger(__name__)
    log.debug("Effective log level: %s", logging.getLevelName(level))

    remote = UserRestMock.with_records(_DEMO_USERS) if args.offline else None
    services = build_services(ClientConfig.from_env(), remote=remote)
    lines = run(services, args)
    for line in lines:
        print(line)
    if not services.repository.wait_for_cache_writes(timeout=2.0):
        log.debug("cache write-through still running at exit")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
