"""Attach a selected credential to a request.

Each credential kind travels in its own header, and exactly one of them is
present per attempt.  The resulting :class:`AuthenticatedCall` records which
kind it carries, so that a 403 can later be attributed to the pin or to the
longer-lived credentials.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from nationauth.api.request import Request
from nationauth.auth.selector import Credential, CredentialKind
from nationauth.models import ClientConfig

PIN_HEADER = "X-Pin"
AUTOLOGIN_HEADER = "X-Autologin"
PASSWORD_HEADER = "X-Password"

AUTH_HEADERS: dict[CredentialKind, str] = {
    CredentialKind.PIN: PIN_HEADER,
    CredentialKind.AUTOLOGIN: AUTOLOGIN_HEADER,
    CredentialKind.PASSWORD: PASSWORD_HEADER,
}


@dataclass(frozen=True)
class AuthenticatedCall:
    """A fully specified outbound GET.

    Attributes:
        url: Endpoint URL, without query string.
        params: Query parameters (nation, shards, API version).
        headers: Request headers including exactly one auth header.
        kind: The credential kind carried in :attr:`headers`.
    """

    url: str
    params: dict[str, str]
    headers: dict[str, str] = field(repr=False)
    kind: CredentialKind


def authenticate(
    request: Request,
    credential: Credential,
    config: ClientConfig,
) -> AuthenticatedCall:
    """Build the outbound call for *request* authenticated by *credential*."""
    headers = {
        "User-Agent": config.user_agent,
        AUTH_HEADERS[credential.kind]: credential.value,
    }
    return AuthenticatedCall(
        url=config.base_url,
        params=request.query_params(config.api_version),
        headers=headers,
        kind=credential.kind,
    )
