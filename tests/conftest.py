"""
Test configuration and fixtures.

The transport adapter is replaced by a recording fake session so the
authorization workflow can be exercised without a TACACS+ server.
"""

from __future__ import annotations

import os

import pytest

from tests.utils.fake_session import FakeScript, RecordingSession


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    """Keep host TACACS_* settings and config files out of every test."""
    for key in list(os.environ):
        if key.startswith("TACACS_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("TACACS_CONFIG", str(tmp_path / "absent.conf"))
    yield


@pytest.fixture
def script() -> FakeScript:
    return FakeScript()


@pytest.fixture
def fake_sessions(script):
    """Session factory bound to ``script``; returns (factory, opened sessions)."""
    opened: list[RecordingSession] = []

    def factory() -> RecordingSession:
        session = RecordingSession(script)
        opened.append(session)
        return session

    return factory, opened
