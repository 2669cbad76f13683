"""Unit tests for the session adapter over tacacs_plus."""

import socket
import struct
from contextlib import contextmanager
from types import SimpleNamespace

import pytest

from tacplus_client.tacacs import session as session_mod
from tacplus_client.tacacs.session import TacacsSession
from tacplus_client.utils.exceptions import ConfigurationError, ProtocolError, TransportError


def author_reply(status: int, args: list[bytes], server_msg: bytes = b"") -> bytes:
    """Pack an authorization REPLY body (RFC 8907 §6.2)."""
    body = struct.pack("!BBHH", status, len(args), len(server_msg), 0)
    body += bytes(len(a) for a in args)
    body += server_msg
    for arg in args:
        body += arg
    return body


class FakeClient:
    """Replaces TACACSClient; answers per host from ``behaviour``."""

    behaviour: dict = {}
    created: list = []

    def __init__(self, host, port, secret, timeout=10, family=socket.AF_INET):
        self.host = host
        self.port = port
        self.secret = secret
        self.timeout = timeout
        self.family = family
        self.sent = []
        self.closed = False
        FakeClient.created.append(self)

    @contextmanager
    def closing(self):
        try:
            yield
        finally:
            self.closed = True

    def send(self, body, req_type):
        self.sent.append((body.packed, req_type))
        answer = self.behaviour[self.host]
        if isinstance(answer, Exception):
            raise answer
        return SimpleNamespace(body=answer)


@pytest.fixture
def fake_client(monkeypatch):
    FakeClient.behaviour = {}
    FakeClient.created = []
    monkeypatch.setattr(session_mod, "TACACSClient", FakeClient)
    monkeypatch.setenv("TACACS_SECRET", "s3cret")
    monkeypatch.setenv("TACACS_SERVER_HOSTS", "192.0.2.1, 192.0.2.2:4949")
    return FakeClient


def _request(method=6, authen_type=1, service=1):
    session = TacacsSession()
    session.configure()
    request = session.create_author(method, authen_type, service)
    request.set_user("alice")
    return session, request


def test_send_packs_profile_user_and_pairs(fake_client):
    fake_client.behaviour = {"192.0.2.1": author_reply(0x01, [b"priv-lvl=15"])}
    session, request = _request(method=0x06, authen_type=0x02, service=0x03)
    request.set_av(0, "service=shell")
    request.set_av(0, "cmd=show")

    result = request.send()

    client = fake_client.created[0]
    packed, req_type = client.sent[0]
    assert req_type == 0x02  # TAC_PLUS_AUTHOR
    assert packed[:4] == bytes([0x06, 0x00, 0x02, 0x03])
    assert packed[7] == 2  # arg_cnt
    assert packed.endswith(b"service=shellcmd=show")
    assert b"alice" in packed
    assert client.secret == "s3cret"
    assert client.closed
    assert result.status == 0x01
    assert result.av_count == 1
    assert request.get_av(0) == "priv-lvl=15"
    session.close()


def test_unreachable_server_falls_over_to_next(fake_client):
    fake_client.behaviour = {
        "192.0.2.1": ConnectionRefusedError("refused"),
        "192.0.2.2": author_reply(0x10, [], b"denied"),
    }
    _, request = _request()

    result = request.send()

    assert [c.host for c in fake_client.created] == ["192.0.2.1", "192.0.2.2"]
    assert fake_client.created[1].port == 4949
    assert result.status == 0x10
    assert result.server_msg == "denied"


def test_all_servers_failing_reports_last_error(fake_client):
    fake_client.behaviour = {
        "192.0.2.1": socket.timeout("timed out"),
        "192.0.2.2": ConnectionRefusedError("refused"),
    }
    session, request = _request()

    with pytest.raises(TransportError) as excinfo:
        request.send()

    assert excinfo.value.operation == "send"
    assert "192.0.2.2:4949" in excinfo.value.message
    assert session.strerror() == excinfo.value.message


def test_malformed_reply_is_fatal_without_failover(fake_client):
    fake_client.behaviour = {
        "192.0.2.1": ValueError("Unable to extract data from header"),
        "192.0.2.2": author_reply(0x01, []),
    }
    session, request = _request()

    with pytest.raises(ProtocolError, match="bad reply") as excinfo:
        request.send()
    assert excinfo.value.operation == "send"
    assert session.strerror() == excinfo.value.message
    assert len(fake_client.created) == 1


def test_ipv6_servers_use_inet6_family(fake_client, monkeypatch):
    monkeypatch.setenv("TACACS_SERVER_HOSTS", "[2001:db8::5]")
    fake_client.behaviour = {"2001:db8::5": author_reply(0x01, [])}
    _, request = _request()

    request.send()

    assert fake_client.created[0].family == socket.AF_INET6


def test_host_names_use_the_resolved_family(fake_client, monkeypatch):
    resolved = []

    def fake_getaddrinfo(host, port, *args, **kwargs):
        resolved.append((host, port))
        return [(socket.AF_INET6, socket.SOCK_STREAM, 6, "", ("2001:db8::9", port, 0, 0))]

    monkeypatch.setattr(session_mod.socket, "getaddrinfo", fake_getaddrinfo)
    monkeypatch.setenv("TACACS_SERVER_HOSTS", "tac6.example.net:4949")
    fake_client.behaviour = {"tac6.example.net": author_reply(0x01, [])}
    _, request = _request()

    request.send()

    assert resolved == [("tac6.example.net", 4949)]
    assert fake_client.created[0].family == socket.AF_INET6


def test_unresolvable_host_name_fails_over(fake_client, monkeypatch):
    def fake_getaddrinfo(host, port, *args, **kwargs):
        raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")

    monkeypatch.setattr(session_mod.socket, "getaddrinfo", fake_getaddrinfo)
    monkeypatch.setenv("TACACS_SERVER_HOSTS", "gone.example.net, 192.0.2.2")
    fake_client.behaviour = {"192.0.2.2": author_reply(0x01, [])}
    _, request = _request()

    result = request.send()

    assert result.status == 0x01
    assert [c.host for c in fake_client.created] == ["192.0.2.2"]


def test_get_av_outside_reply_range(fake_client):
    fake_client.behaviour = {"192.0.2.1": author_reply(0x01, [b"a=1"])}
    _, request = _request()

    with pytest.raises(TransportError, match="no reply received"):
        request.get_av(0)

    request.send()
    with pytest.raises(TransportError, match="index 1 out of range"):
        request.get_av(1)


def test_request_rejects_flags_and_malformed_pairs(fake_client):
    _, request = _request()
    with pytest.raises(TransportError, match="unsupported flags"):
        request.set_av(1, "a=1")
    with pytest.raises(TransportError, match="malformed pair"):
        request.set_av(0, "novalue")


def test_create_requires_configuration_and_open_session():
    session = TacacsSession()
    with pytest.raises(TransportError, match="not configured"):
        session.create_author(0, 0, 0)
    session.close()
    session.close()
    with pytest.raises(TransportError, match="closed"):
        session.create_author(0, 0, 0)


def test_configure_failure_keeps_diagnostic():
    session = TacacsSession()
    with pytest.raises(ConfigurationError):
        session.configure()
    assert "no TACACS+ servers configured" in session.strerror()


def test_context_manager_closes(fake_client):
    with TacacsSession() as session:
        session.configure()
    assert session.closed
