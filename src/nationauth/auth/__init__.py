"""Credential selection, rotation and recovery for nation requests.

The pieces, in the order a request passes through them:

- :func:`select_credential` -- choose pin, autologin, or password.
- :func:`authenticate` -- attach it to a request as the matching header.
- :func:`interpret` -- classify the response, attributing a 403 to the
  credential kind that was sent.
- :class:`PingOrchestrator` -- apply the outcome to the stored credential
  set, persist it, and retry once without the pin if it was rejected.

Typical usage::

    from nationauth.auth import PingOrchestrator

    orchestrator = PingOrchestrator(store, config, retry_pin=True)
    data = orchestrator.run(client, "testlandia")
"""

from nationauth.auth.authenticator import AuthenticatedCall, authenticate
from nationauth.auth.interpreter import Failure, FailureReason, Success, interpret
from nationauth.auth.orchestrator import AttemptState, PingOrchestrator
from nationauth.auth.selector import (
    NO_CREDENTIAL,
    Credential,
    CredentialKind,
    NoCredential,
    select_credential,
)

__all__ = [
    "AttemptState",
    "AuthenticatedCall",
    "Credential",
    "CredentialKind",
    "Failure",
    "FailureReason",
    "NO_CREDENTIAL",
    "NoCredential",
    "PingOrchestrator",
    "Success",
    "authenticate",
    "interpret",
    "select_credential",
]
