"""The public operation surface.

Each function takes the :class:`~nationauth.store.ProfileStore` explicitly;
the profile is loaded at the start of the operation and saved whenever the
credential set changes.

- :func:`ping` / :func:`aping` -- register activity for a nation and rotate
  its credentials.
- :func:`add_account` / :func:`change_password` -- declared, not yet
  supported.
"""

from __future__ import annotations

from nationauth.api.payload import NationData
from nationauth.auth.orchestrator import PingOrchestrator
from nationauth.client import AsyncClient, SyncClient
from nationauth.exceptions import NotSupportedError
from nationauth.store import ProfileStore


def ping(
    store: ProfileStore,
    client: SyncClient,
    name: str,
    retry_pin: bool = False,
) -> NationData:
    """Ping *name*, using and refreshing its stored credentials.

    Args:
        store: The profile store.
        client: An open :class:`~nationauth.client.SyncClient`.
        name: Nation name, matched case-insensitively.
        retry_pin: Retry once with the autologin or password if the stored
            pin is rejected.

    Returns:
        The parsed ``ping`` payload.

    Raises:
        NationAuthError: Any failure in the taxonomy of
            :mod:`nationauth.exceptions`.
    """
    orchestrator = PingOrchestrator(store, client.config, retry_pin=retry_pin)
    return orchestrator.run(client, name)


async def aping(
    store: ProfileStore,
    client: AsyncClient,
    name: str,
    retry_pin: bool = False,
) -> NationData:
    """Async counterpart of :func:`ping`."""
    orchestrator = PingOrchestrator(store, client.config, retry_pin=retry_pin)
    return await orchestrator.arun(client, name)


def add_account(store: ProfileStore, name: str, password: str) -> None:
    """Add a nation to the profile.  Not yet supported."""
    raise NotSupportedError("Adding nations to the profile is not yet supported")


def change_password(store: ProfileStore, name: str, new_password: str) -> None:
    """Store a new password for a nation.  Not yet supported."""
    raise NotSupportedError("Password changes are not yet supported")
