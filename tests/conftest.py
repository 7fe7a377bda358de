"""Shared test fixtures for nationauth.

Provides isolated data directories, a profile store rooted in ``tmp_path``,
a scripted fake API server for :class:`httpx.MockTransport`, and a Typer
CLI runner.  These fixtures are discovered automatically by pytest.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

import httpx
import pytest

from nationauth.models import ClientConfig, Credentials, Nation, Pin, Profile
from nationauth.output import reset_output
from nationauth.store import ProfileStore

API_URL = "https://api.test/cgi-bin/api.cgi"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> Iterator[None]:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr; once
    CliRunner has swapped and closed those streams the cached references
    go stale.  The same goes for the log handler the CLI installs on the
    ``nationauth`` logger, so that logger is restored too.
    """
    logger = logging.getLogger("nationauth")
    handlers, level = list(logger.handlers), logger.level
    yield
    reset_output()
    logger.handlers[:] = handlers
    logger.setLevel(level)


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_data(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG_DATA_HOME into tmp_path and clear NATIONAUTH_* variables."""
    data_dir = tmp_path / "data"
    monkeypatch.setenv("XDG_DATA_HOME", str(data_dir))
    monkeypatch.setattr("nationauth.config._is_xdg_platform", lambda: True)
    for var in ["NATIONAUTH_PROFILE", "NATIONAUTH_USER_AGENT", "NATIONAUTH_BASE_URL"]:
        monkeypatch.delenv(var, raising=False)
    return tmp_path


# ---------------------------------------------------------------------------
# Model helpers
# ---------------------------------------------------------------------------


def fresh_pin(value: int = 1234, age: timedelta = timedelta(minutes=5)) -> Pin:
    """A pin issued *age* ago."""
    return Pin(value=value, timestamp=datetime.now(timezone.utc) - age)


def make_profile(name: str = "Testlandia", **credentials: object) -> Profile:
    """A single-nation profile with the given credential fields."""
    return Profile(nations=[Nation(name=name, credentials=Credentials(**credentials))])


def ping_body(nation: str = "testlandia") -> str:
    return f'<NATION id="{nation}"><PING>1</PING></NATION>'


# ---------------------------------------------------------------------------
# Store and config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def profile_path(tmp_path: Path) -> Path:
    return tmp_path / "profile.json"


@pytest.fixture
def store(profile_path: Path) -> ProfileStore:
    return ProfileStore(profile_path)


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(base_url=API_URL, user_agent="nationauth-tests")


# ---------------------------------------------------------------------------
# Fake API server
# ---------------------------------------------------------------------------


class FakeServer:
    """Scripted stand-in for the NationStates API.

    Each queued reply is returned for one request, in order.  Every request
    received is kept in :attr:`requests` so tests can count attempts and
    inspect the auth headers that were sent.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._replies: list[httpx.Response] = []

    def reply(
        self,
        status: int = 200,
        body: Optional[str] = None,
        autologin: Optional[str] = None,
        pin: Optional[str] = None,
    ) -> FakeServer:
        headers: dict[str, str] = {"content-type": "text/xml"}
        if autologin is not None:
            headers["X-Autologin"] = autologin
        if pin is not None:
            headers["X-Pin"] = pin
        if body is None:
            body = ping_body() if status == 200 else ""
        self._replies.append(httpx.Response(status, text=body, headers=headers))
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        assert self._replies, f"unexpected request: {request.url}"
        return self._replies.pop(0)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def auth_kinds(self) -> list[str]:
        """Which auth header each received request carried."""
        kinds = []
        for request in self.requests:
            for header, kind in (
                ("X-Pin", "pin"),
                ("X-Autologin", "autologin"),
                ("X-Password", "password"),
            ):
                if header in request.headers:
                    kinds.append(kind)
        return kinds


@pytest.fixture
def server() -> FakeServer:
    return FakeServer()


@pytest.fixture
def save_profile(store: ProfileStore) -> Callable[[Profile], ProfileStore]:
    """Write a profile into the test store and return the store."""

    def _save(profile: Profile) -> ProfileStore:
        store.save(profile)
        return store

    return _save


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
