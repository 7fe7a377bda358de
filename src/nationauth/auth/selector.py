"""Credential selection -- pick the cheapest credential for one attempt.

Priority, cheapest first:

1. a pin that is still inside its validity window,
2. the autologin token,
3. the password.

:func:`select_credential` returns either a :class:`Credential` tagged with its
:class:`CredentialKind`, or the :data:`NO_CREDENTIAL` variant when nothing
qualifies.  It never touches the network and never mutates its input.

See Also:
    :func:`~nationauth.auth.authenticator.authenticate` -- turns the
    selection into request headers.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Union

from nationauth.models import Credentials


class CredentialKind(str, enum.Enum):
    """The three interchangeable ways to prove a nation's identity."""

    PIN = "pin"
    AUTOLOGIN = "autologin"
    PASSWORD = "password"


@dataclass(frozen=True)
class Credential:
    """A selected credential ready to be attached to a request."""

    kind: CredentialKind
    value: str = field(repr=False)


@dataclass(frozen=True)
class NoCredential:
    """Selection result when the set holds nothing usable."""

    excluded: Optional[CredentialKind] = None


NO_CREDENTIAL = NoCredential()

Selection = Union[Credential, NoCredential]


def select_credential(
    credentials: Credentials,
    exclude: Optional[CredentialKind] = None,
    now: Optional[datetime] = None,
) -> Selection:
    """Choose the credential to send for one attempt.

    Args:
        credentials: The nation's credential set.  Not modified.
        exclude: A kind that must not be chosen, e.g. ``PIN`` after the
            server has just rejected the pin.
        now: Reference time for pin validity; defaults to the current time.

    Returns:
        A :class:`Credential`, or a :class:`NoCredential` when no
        permitted kind is present.
    """
    pin = credentials.pin
    if exclude is not CredentialKind.PIN and pin is not None and pin.valid(now):
        return Credential(CredentialKind.PIN, str(pin.value))
    if exclude is not CredentialKind.AUTOLOGIN and credentials.autologin is not None:
        return Credential(CredentialKind.AUTOLOGIN, credentials.autologin)
    if exclude is not CredentialKind.PASSWORD and credentials.password is not None:
        return Credential(CredentialKind.PASSWORD, credentials.password)
    if exclude is None:
        return NO_CREDENTIAL
    return NoCredential(excluded=exclude)
