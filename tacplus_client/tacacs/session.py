"""Session adapter over the ``tacacs_plus`` client library.

The library owns the wire format (header, MD5 body obfuscation, socket
I/O).  This module exposes the small session/request contract the
authorization workflow is written against and keeps the last diagnostic
message for ``strerror()``.
"""

from __future__ import annotations

import ipaddress
import socket
import struct
from dataclasses import dataclass, field

from tacacs_plus.authorization import (
    TACACSAuthorizationReply,
    TACACSAuthorizationStart,
)
from tacacs_plus.client import TACACSClient
from tacacs_plus.flags import TAC_PLUS_AUTHOR

from tacplus_client.config import ClientConfigSchema, ServerAddress, load_client_config
from tacplus_client.utils.exceptions import ProtocolError, TacacsError, TransportError
from tacplus_client.utils.logger import get_logger, set_level

from .constants import TAC_PLUS_AV_FLAG_NONE, TAC_PLUS_PRIV_LVL_MIN

logger = get_logger(__name__)


@dataclass(frozen=True)
class AuthorizationResult:
    """Decoded authorization REPLY."""

    status: int
    av_count: int
    server_msg: str = ""
    data: bytes = b""
    arguments: tuple[str, ...] = field(default=(), repr=False)


def _address_family(host: str, port: int) -> int:
    """Family of an address literal, or of the first address a name resolves to."""
    try:
        addr = ipaddress.ip_address(host)
    except ValueError:
        # gaierror is an OSError, so an unresolvable name fails over
        infos = socket.getaddrinfo(host, port, type=socket.SOCK_STREAM)
        return infos[0][0]
    return socket.AF_INET6 if addr.version == 6 else socket.AF_INET


def _decode(value: bytes) -> str:
    return value.decode("utf-8", errors="replace")


class AuthorRequest:
    """One authorization request, scoped to its session."""

    def __init__(
        self, session: TacacsSession, method: int, authen_type: int, service: int
    ):
        self._session = session
        self.method = method
        self.authen_type = authen_type
        self.service = service
        self.user: str | None = None
        self.av_pairs: list[str] = []
        self._result: AuthorizationResult | None = None

    def set_user(self, name: str) -> None:
        if self._result is not None:
            raise self._session._fail("set user", "request already sent")
        self.user = name

    def set_av(self, flags: int, av: str) -> None:
        """Append ``av`` to the request; only unflagged pairs are supported."""
        if self._result is not None:
            raise self._session._fail("add attribute", "request already sent")
        if flags != TAC_PLUS_AV_FLAG_NONE:
            raise self._session._fail("add attribute", f"unsupported flags {flags:#x}")
        if "=" not in av:
            raise self._session._fail("add attribute", f"malformed pair {av!r}")
        self.av_pairs.append(av)

    def _start_body(self, config: ClientConfigSchema) -> TACACSAuthorizationStart:
        body = TACACSAuthorizationStart(
            self.user or "",
            self.method,
            TAC_PLUS_PRIV_LVL_MIN,
            self.authen_type,
            [av.encode("utf-8") for av in self.av_pairs],
            rem_addr=config.rem_addr,
            port=config.tty,
        )
        # the library always fills in LOGIN here
        body.service = self.service
        return body

    def _exchange(
        self, server: ServerAddress, config: ClientConfigSchema
    ) -> TACACSAuthorizationReply:
        client = TACACSClient(
            server.host,
            server.port,
            config.secret,
            timeout=config.timeout,
            family=_address_family(server.host, server.port),
        )
        with client.closing():
            packet = client.send(self._start_body(config), TAC_PLUS_AUTHOR)
            return TACACSAuthorizationReply.unpacked(packet.body)

    def send(self) -> AuthorizationResult:
        """Send the request, trying each configured server in order.

        Blocks until a server answers or every server has failed.
        """
        config = self._session.config
        if config is None:
            raise self._session._fail("send", "session is not configured")
        if self.user is None:
            raise self._session._fail("send", "no user name set")

        last_error = "no server reachable"
        for server in config.servers:
            try:
                reply = self._exchange(server, config)
            except OSError as exc:
                last_error = f"{server}: {exc}"
                logger.info(
                    "TACACS+ server unreachable, trying next",
                    event="tacplus.session.server_failed",
                    server=str(server),
                    error=str(exc),
                )
                continue
            except (ValueError, struct.error) as exc:
                raise self._session._fail(
                    "send", f"{server}: bad reply: {exc}", ProtocolError
                ) from exc

            arguments = tuple(_decode(arg) for arg in reply.arguments)
            self._result = AuthorizationResult(
                status=int(reply.status),
                av_count=len(arguments),
                server_msg=_decode(reply.server_msg or b""),
                data=reply.data or b"",
                arguments=arguments,
            )
            logger.debug(
                "Authorization reply received",
                event="tacplus.session.reply",
                server=str(server),
                status=self._result.status,
                av_count=self._result.av_count,
            )
            return self._result

        raise self._session._fail("send", last_error)

    def get_av(self, index: int) -> str:
        """Return the ``index``-th AV pair of the reply."""
        if self._result is None:
            raise self._session._fail("get attribute", "no reply received")
        if not 0 <= index < self._result.av_count:
            raise self._session._fail(
                "get attribute", f"index {index} out of range"
            )
        return self._result.arguments[index]


class TacacsSession:
    """An open client context: configuration plus the current request.

    Usable as a context manager; ``close()`` is idempotent.
    """

    def __init__(self) -> None:
        self.config: ClientConfigSchema | None = None
        self.request: AuthorRequest | None = None
        self.closed = False
        self._error = ""

    def __enter__(self) -> TacacsSession:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _fail(
        self, operation: str, message: str, error: type[TransportError] = TransportError
    ) -> TransportError:
        self._error = message
        return error(operation, message)

    def strerror(self) -> str:
        """Diagnostic text of the last failed operation."""
        return self._error

    def configure(self, source: str | None = None) -> None:
        try:
            self.config = load_client_config(source)
        except TacacsError as exc:
            self._error = str(exc)
            raise
        set_level(self.config.log_level)
        logger.debug(
            "Session configured",
            event="tacplus.session.configured",
            servers=[str(s) for s in self.config.servers],
            timeout=self.config.timeout,
        )

    def create_author(self, method: int, authen_type: int, service: int) -> AuthorRequest:
        if self.closed:
            raise self._fail("create request", "session is closed")
        if self.config is None:
            raise self._fail("create request", "session is not configured")
        for name, value in (
            ("method", method),
            ("type", authen_type),
            ("service", service),
        ):
            if not 0 <= value <= 0xFF:
                raise self._fail("create request", f"{name} {value} out of range")
        self.request = AuthorRequest(self, method, authen_type, service)
        return self.request

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self.request = None
        logger.debug("Session closed", event="tacplus.session.closed")
