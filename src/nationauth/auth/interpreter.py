"""Classify API responses into protocol outcomes.

The server answers every authentication failure with the same 403, whether
the rejected credential was a pin or a password.  The interpreter therefore
takes the credential kind that was *sent* alongside the response:

============  ===============  ==========================
Status        Kind sent        Outcome
============  ===============  ==========================
200           any              :class:`Success`
403           pin              ``Failure(BAD_PIN)``
403           autologin/pass   ``Failure(BAD_AUTH)``
other         any              ``Failure(OTHER, status)``
============  ===============  ==========================

Renewed credentials are read from the ``X-Autologin`` and ``X-Pin`` response
headers of successful responses, whether or not they were asked for.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Union

import httpx

from nationauth.api.payload import NationData, parse_nation_data
from nationauth.auth.authenticator import AUTOLOGIN_HEADER, PIN_HEADER
from nationauth.auth.selector import CredentialKind
from nationauth.exceptions import (
    BadAuthError,
    BadPinError,
    NationAuthError,
    NoCredentialError,
    RequestFailedError,
)
from nationauth.models import Pin

HTTP_OK = 200
HTTP_FORBIDDEN = 403


class FailureReason(str, enum.Enum):
    NO_AUTH = "no_auth"
    BAD_PIN = "bad_pin"
    BAD_AUTH = "bad_auth"
    OTHER = "other"


@dataclass(frozen=True)
class Success:
    """A 200 response with its parsed payload and any renewed credentials."""

    data: NationData
    autologin: Optional[str] = None
    pin: Optional[Pin] = None


@dataclass(frozen=True)
class Failure:
    """A classified failure.  ``status`` is set for ``OTHER``."""

    reason: FailureReason
    status: Optional[int] = None

    def to_error(self) -> NationAuthError:
        """Map the failure onto the exception hierarchy."""
        if self.reason is FailureReason.NO_AUTH:
            return NoCredentialError("No usable credential is stored for this nation")
        if self.reason is FailureReason.BAD_PIN:
            return BadPinError("The server rejected the session pin")
        if self.reason is FailureReason.BAD_AUTH:
            return BadAuthError(
                "The server rejected the stored autologin or password"
            )
        return RequestFailedError(self.status or 0)


Outcome = Union[Success, Failure]


def _renewed_autologin(headers: httpx.Headers) -> Optional[str]:
    return headers.get(AUTOLOGIN_HEADER) or None


def _renewed_pin(headers: httpx.Headers, received_at: datetime) -> Optional[Pin]:
    raw = headers.get(PIN_HEADER)
    if raw is None:
        return None
    raw = raw.strip()
    # Unsigned decimal only; int() would also take signs and underscores.
    if not (raw.isascii() and raw.isdigit()):
        return None
    return Pin(value=int(raw), timestamp=received_at)


def interpret(
    response: httpx.Response,
    kind: CredentialKind,
    received_at: Optional[datetime] = None,
) -> Outcome:
    """Classify *response* to an attempt authenticated with *kind*.

    Args:
        response: The transport response.
        kind: The credential kind that was attached to the request.
        received_at: When the response arrived; stamps any renewed pin.
            Defaults to now.

    Returns:
        A :class:`Success` or a :class:`Failure`.

    Raises:
        SchemaError: If a 200 body does not match the payload schema.
    """
    status = response.status_code
    if status == HTTP_OK:
        if received_at is None:
            received_at = datetime.now(timezone.utc)
        data = parse_nation_data(response.text)
        return Success(
            data=data,
            autologin=_renewed_autologin(response.headers),
            pin=_renewed_pin(response.headers, received_at),
        )
    if status == HTTP_FORBIDDEN:
        if kind is CredentialKind.PIN:
            return Failure(FailureReason.BAD_PIN)
        return Failure(FailureReason.BAD_AUTH)
    return Failure(FailureReason.OTHER, status=status)
