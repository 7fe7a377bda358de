"""Canonical Pydantic models shared across nationauth modules.

**Credential models** -- persisted in the profile document:
    :class:`Pin`, :class:`Credentials`, :class:`Nation` and :class:`Profile`.

**Configuration models** -- resolved at startup, never persisted:
    :class:`ClientConfig`.

A :class:`Credentials` instance is the per-nation credential set.  It owns the
mutation rules that keep the stored set converging on the cheapest working
credential: a renewed autologin supersedes the password, a renewed pin
replaces the old one, and a rejected pin is dropped without touching the
longer-lived credentials.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from nationauth.exceptions import AccountNotFoundError


PIN_LIFETIME = timedelta(hours=2)
"""How long the server honours a session pin after issuing it."""

DEFAULT_BASE_URL = "https://www.nationstates.net/cgi-bin/api.cgi"
DEFAULT_API_VERSION = 11


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# --- Credential models ---


class Pin(BaseModel):
    """A server-issued session pin.

    Pins expire :data:`PIN_LIFETIME` after issue.  The server also revokes a
    pin whenever the nation logs in elsewhere, which the client can only
    discover by having a request rejected, so :meth:`valid` is a necessary
    but not a sufficient condition.
    """

    value: int = Field(ge=0, description="Opaque unsigned pin value")
    timestamp: datetime = Field(description="When the pin was received (UTC)")

    def valid(self, now: Optional[datetime] = None) -> bool:
        """Return ``True`` while the pin is younger than :data:`PIN_LIFETIME`."""
        now = _as_utc(now) if now is not None else _utcnow()
        return now - _as_utc(self.timestamp) < PIN_LIFETIME


class Credentials(BaseModel):
    """The credential set of one nation.

    Any subset of the three fields may be present; a set with none of them
    is unusable and makes every request fail before anything is sent.
    Storage prefers autologin tokens over passwords, since an autologin
    lives at least as long as the password it was issued for.

    Secrets are kept out of ``repr()`` so that credential sets can be logged
    or printed while debugging.
    """

    password: Optional[str] = Field(default=None, repr=False)
    autologin: Optional[str] = Field(default=None, repr=False)
    pin: Optional[Pin] = None

    def is_usable(self) -> bool:
        """Return ``True`` if at least one credential is present."""
        return any(
            value is not None for value in (self.password, self.autologin, self.pin)
        )

    def apply_renewal(
        self,
        autologin: Optional[str] = None,
        pin: Optional[Pin] = None,
    ) -> bool:
        """Fold credentials returned by a successful request into the set.

        A renewed autologin is stored and the password is dropped.  A renewed
        pin replaces whatever pin was stored before.

        Args:
            autologin: Autologin token from the response, if any.
            pin: Pin from the response, if any.

        Returns:
            ``True`` if the set changed.
        """
        changed = False
        if autologin is not None:
            if autologin != self.autologin or self.password is not None:
                changed = True
            self.autologin = autologin
            self.password = None
        if pin is not None:
            if pin != self.pin:
                changed = True
            self.pin = pin
        return changed

    def invalidate_pin(self) -> bool:
        """Drop the stored pin after the server rejected it.

        Returns:
            ``True`` if a pin was present.
        """
        had_pin = self.pin is not None
        self.pin = None
        return had_pin


def canonical_name(name: str) -> str:
    """Normalise a nation name the way the server compares them.

    NationStates treats names case-insensitively and spaces and underscores
    as the same character.
    """
    return name.strip().lower().replace(" ", "_")


class Nation(BaseModel):
    """A named nation and its credential set."""

    name: str
    credentials: Credentials = Field(default_factory=Credentials)

    @property
    def key(self) -> str:
        """The canonical form of :attr:`name` used for lookups."""
        return canonical_name(self.name)


class Profile(BaseModel):
    """The persisted collection of nations.

    Loaded and saved as a whole by :class:`~nationauth.store.ProfileStore`.
    Nation names are unique under :func:`canonical_name`.
    """

    nations: list[Nation] = Field(default_factory=list)

    def find(self, name: str) -> Nation:
        """Return the nation called *name*.

        Raises:
            AccountNotFoundError: If no nation matches.
        """
        key = canonical_name(name)
        for nation in self.nations:
            if nation.key == key:
                return nation
        raise AccountNotFoundError(f"Nation '{name}' not found in profile")

    @field_validator("nations")
    @classmethod
    def unique_names(cls, nations: list[Nation]) -> list[Nation]:
        seen: set[str] = set()
        for nation in nations:
            if nation.key in seen:
                raise ValueError(f"duplicate nation '{nation.name}'")
            seen.add(nation.key)
        return nations


# --- Configuration models ---


class ClientConfig(BaseModel):
    """Settings for the HTTP transport and the API endpoint.

    NationStates requires every client to identify itself with a
    descriptive User-Agent, typically including a contact address.
    """

    base_url: str = Field(default=DEFAULT_BASE_URL, description="API endpoint")
    api_version: int = Field(default=DEFAULT_API_VERSION, description="API version")
    user_agent: str = Field(
        default="nationauth", description="User-Agent sent with every request"
    )
    timeout: float = Field(default=30, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")
