#!/usr/bin/env python3
"""Console entrypoint: send one TACACS+ authorization request.

usage: tacplus [-v] [-m method] [-s service] [-t type] [attr=value [...]] name
"""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Callable, Mapping
from typing import Any, NoReturn

from tacplus_client.authorization.author_request import (
    EXIT_FAILURE,
    PROG,
    AuthorizationProfile,
    ClientOptions,
    run_authorization,
)
from tacplus_client.config.constants import ENV_LOG_LEVEL
from tacplus_client.tacacs.lookup import METHODS, SERVICES, TYPES, lookup
from tacplus_client.tacacs.session import TacacsSession
from tacplus_client.utils.exceptions import TacacsError, ValidationError
from tacplus_client.utils.logger import configure, get_logger
from tacplus_client.utils.validation import InputValidator

logger = get_logger(__name__)


def usage_text() -> str:
    """Usage line followed by the accepted names of each axis, in table order."""
    return (
        f"usage: {PROG} [-v] [-m method] [-s service] [-t type] "
        "[attr=value [...]] name\n"
        f"\nmethod  = {', '.join(METHODS)}"
        f"\nservice = {', '.join(SERVICES)}"
        f"\ntype    = {', '.join(TYPES)}\n"
    )


class _UsageParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        self.exit(EXIT_FAILURE, f"{self.prog}: {message}\n{usage_text()}")


def _resolver(table: Mapping[str, int], axis: str) -> Callable[[str], int]:
    def resolve(name: str) -> int:
        code = lookup(table, name)
        if code is None:
            raise argparse.ArgumentTypeError(f"unknown {axis} {name!r}")
        return code

    resolve.__name__ = axis
    return resolve


def build_parser() -> argparse.ArgumentParser:
    parser = _UsageParser(prog=PROG, usage=argparse.SUPPRESS, add_help=False)
    defaults = AuthorizationProfile()
    parser.add_argument("-v", dest="verbose", action="store_true")
    parser.add_argument(
        "-m", dest="method", type=_resolver(METHODS, "method"), default=defaults.method
    )
    parser.add_argument(
        "-s", dest="service", type=_resolver(SERVICES, "service"), default=defaults.service
    )
    parser.add_argument(
        "-t", dest="authen_type", type=_resolver(TYPES, "type"), default=defaults.authen_type
    )
    parser.add_argument("args", nargs="+", metavar="name")
    return parser


def parse_options(argv: list[str] | None = None) -> ClientOptions:
    """Parse and validate the command line; usage errors exit with status 1."""
    parser = build_parser()
    args = parser.parse_intermixed_args(argv)

    *pairs, user = args.args
    try:
        av_pairs = InputValidator.validate_av_pairs(pairs)
        InputValidator.validate_username(user)
    except ValidationError as exc:
        parser.error(str(exc))

    return ClientOptions(
        user=user,
        profile=AuthorizationProfile(
            method=args.method, authen_type=args.authen_type, service=args.service
        ),
        av_pairs=tuple(av_pairs),
        verbose=args.verbose,
    )


def main(argv: list[str] | None = None, session_factory: Any = TacacsSession) -> int:
    configure(os.environ.get(ENV_LOG_LEVEL))
    try:
        options = parse_options(argv)
    except SystemExit as exc:
        return int(exc.code or 0)

    try:
        return run_authorization(
            options.profile,
            options.user,
            options.av_pairs,
            options.verbose,
            session_factory=session_factory,
        )
    except TacacsError as exc:
        logger.debug(
            "Authorization aborted",
            event="tacplus.cli.aborted",
            error_type=type(exc).__name__,
            error=str(exc),
        )
        print(f"{PROG}: {exc}", file=sys.stderr)
        return EXIT_FAILURE


if __name__ == "__main__":
    raise SystemExit(main())
