"""nationauth -- credential rotation for the NationStates API.

A nation can authenticate with a password, an autologin token, or a
short-lived session pin.  This package keeps all three in a persisted
*profile*, picks the cheapest one that still works for each request, and
folds whatever the server hands back (a renewed autologin, a fresh pin) into
the stored credentials so the next request is cheaper still.

Typical usage::

    from nationauth import ProfileStore, SyncClient, ping

    store = ProfileStore.default()
    with SyncClient(config) as client:
        data = ping(store, client, "testlandia", retry_pin=True)

Modules:
    models: Pydantic models for pins, credential sets, nations and profiles.
    auth: Credential selection, request authentication, response
        interpretation and the retry orchestrator.
    api: Request/shard construction and the XML payload schema.
    client: Synchronous and asynchronous httpx transports.
    store: Atomic load/save of the profile document.
    config: XDG-aware paths and client configuration precedence.
    operations: The public operation surface (``ping`` and friends).
    exceptions: Exception hierarchy with exit-code mapping.
"""

__version__ = "0.1.0"

from nationauth.client import AsyncClient, SyncClient
from nationauth.operations import add_account, aping, change_password, ping
from nationauth.store import ProfileStore

__all__ = [
    "AsyncClient",
    "ProfileStore",
    "SyncClient",
    "__version__",
    "add_account",
    "aping",
    "change_password",
    "ping",
]
