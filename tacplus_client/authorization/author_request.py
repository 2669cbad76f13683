"""TACACS+ authorization workflow.

Builds one authorization request from a resolved profile, sends it
through a session and turns the reply status into a process outcome.
"""

from __future__ import annotations

import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TextIO

from tacplus_client.tacacs.constants import (
    TAC_PLUS_AUTHEN_METH,
    TAC_PLUS_AUTHEN_SVC,
    TAC_PLUS_AUTHEN_TYPE,
    TAC_PLUS_AUTHOR_STATUS,
    TAC_PLUS_AV_FLAG_NONE,
)
from tacplus_client.tacacs.session import TacacsSession
from tacplus_client.utils.exceptions import ConfigurationError, TacacsError, TransportError
from tacplus_client.utils.logger import get_logger, logging_context

logger = get_logger(__name__)

PROG = "tacplus"

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


@dataclass(frozen=True)
class AuthorizationProfile:
    """The (method, type, service) triple carried by the request."""

    method: int = TAC_PLUS_AUTHEN_METH.TAC_PLUS_AUTHEN_METH_NOT_SET
    authen_type: int = TAC_PLUS_AUTHEN_TYPE.TAC_PLUS_AUTHEN_TYPE_NOT_SET
    service: int = TAC_PLUS_AUTHEN_SVC.TAC_PLUS_AUTHEN_SVC_NONE


@dataclass(frozen=True)
class ClientOptions:
    """Everything parsed from the command line, resolved once."""

    user: str
    profile: AuthorizationProfile = field(default_factory=AuthorizationProfile)
    av_pairs: tuple[str, ...] = ()
    verbose: bool = False


class AuthorOutcome(Enum):
    PASS_ADD = "pass-add"
    PASS_REPLACE = "pass-replace"
    FAIL = "fail"
    ERROR = "error"
    UNRECOGNIZED = "unrecognized"

    @property
    def succeeded(self) -> bool:
        return self in (AuthorOutcome.PASS_ADD, AuthorOutcome.PASS_REPLACE)

    def describe(self, status: int) -> str:
        """Message reported for this outcome; includes the raw unknown status."""
        if self is AuthorOutcome.UNRECOGNIZED:
            return f"unrecognized server response: {status:#x}"
        return _MESSAGES[self]


_MESSAGES = {
    AuthorOutcome.PASS_ADD: "authorization passed (add)",
    AuthorOutcome.PASS_REPLACE: "authorization passed (replace)",
    AuthorOutcome.FAIL: "authorization failed",
    AuthorOutcome.ERROR: "server error",
}

_STATUS_OUTCOMES = {
    TAC_PLUS_AUTHOR_STATUS.TAC_PLUS_AUTHOR_STATUS_PASS_ADD: AuthorOutcome.PASS_ADD,
    TAC_PLUS_AUTHOR_STATUS.TAC_PLUS_AUTHOR_STATUS_PASS_REPL: AuthorOutcome.PASS_REPLACE,
    TAC_PLUS_AUTHOR_STATUS.TAC_PLUS_AUTHOR_STATUS_FAIL: AuthorOutcome.FAIL,
    TAC_PLUS_AUTHOR_STATUS.TAC_PLUS_AUTHOR_STATUS_ERROR: AuthorOutcome.ERROR,
}


def classify_status(status: int) -> AuthorOutcome:
    """Map a reply status to exactly one outcome.

    FOLLOW is not supported and, like any other value, is unrecognized.
    """
    return _STATUS_OUTCOMES.get(status, AuthorOutcome.UNRECOGNIZED)


def _step(session: Any, operation: str, func: Callable[..., Any], *args: Any) -> Any:
    """Run one collaborator call, reporting failures as ``operation: diagnostic``."""
    try:
        return func(*args)
    except TransportError as exc:
        raise type(exc)(operation, session.strerror() or exc.message) from exc


def run_authorization(
    profile: AuthorizationProfile,
    user: str,
    av_pairs: Sequence[str],
    verbose: bool = False,
    *,
    config_source: str | None = None,
    session_factory: Callable[[], Any] = TacacsSession,
    stream: TextIO | None = None,
) -> int:
    """Perform one authorization exchange and return the process exit code.

    Collaborator failures raise TacacsError subclasses; negative answers
    from the server are reported on ``stream`` and yield EXIT_FAILURE.
    The session is closed on every path once it has been opened.
    """
    out = stream or sys.stderr

    try:
        session = session_factory()
    except (OSError, TacacsError) as exc:
        raise TransportError("open session", str(exc)) from exc
    if session is None:
        raise TransportError("open session", "no session available")

    with session, logging_context(user=user):
        try:
            session.configure(config_source)
        except ConfigurationError as exc:
            raise ConfigurationError(f"configure: {exc}") from exc
        request = _step(
            session,
            "create request",
            session.create_author,
            profile.method,
            profile.authen_type,
            profile.service,
        )
        _step(session, "set user", request.set_user, user)
        for pair in av_pairs:
            _step(session, "add attribute", request.set_av, TAC_PLUS_AV_FLAG_NONE, pair)

        logger.debug(
            "Sending authorization request",
            event="tacplus.author.send",
            method=profile.method,
            authen_type=profile.authen_type,
            service=profile.service,
            av_count=len(av_pairs),
        )
        result = _step(session, "send failed", request.send)

        outcome = classify_status(result.status)
        logger.info(
            "Authorization reply classified",
            event="tacplus.author.outcome",
            outcome=outcome.value,
            status=result.status,
            av_count=result.av_count,
        )
        if not outcome.succeeded:
            print(f"{PROG}: {outcome.describe(result.status)}", file=out)
            if verbose and result.server_msg:
                print(f"server message: {result.server_msg}", file=out)
            return EXIT_FAILURE

        if verbose:
            print(outcome.describe(result.status), file=out)
            if result.server_msg:
                print(f"server message: {result.server_msg}", file=out)
            for index in range(result.av_count):
                av = _step(session, f"get attribute {index}", request.get_av, index)
                print(f"{index:2d} {av}", file=out)

    return EXIT_SUCCESS
