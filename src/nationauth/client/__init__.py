"""HTTP transports for nationauth.

Provides synchronous and asynchronous clients that wrap :mod:`httpx` and
send :class:`~nationauth.auth.authenticator.AuthenticatedCall` objects.

Classes:
    :class:`SyncClient` -- blocking client backed by :class:`httpx.Client`.
    :class:`AsyncClient` -- non-blocking client backed by :class:`httpx.AsyncClient`.

Both are context managers and take a :class:`~nationauth.models.ClientConfig`.
Status codes are returned untouched; classifying them is the interpreter's
job.  Only network-level failures are raised, as
:class:`~nationauth.exceptions.TransportError`.

Example::

    from nationauth.client import SyncClient

    with SyncClient(config) as client:
        response = client.send(call)
"""

from nationauth.client.async_client import AsyncClient
from nationauth.client.sync_client import SyncClient

__all__ = ["SyncClient", "AsyncClient"]
