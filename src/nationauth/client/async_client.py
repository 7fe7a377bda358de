"""Asynchronous transport -- mirrors :class:`~nationauth.client.sync_client.SyncClient`.

Wraps :class:`httpx.AsyncClient` so that
:meth:`~nationauth.auth.orchestrator.PingOrchestrator.arun` can run inside
an event loop.  Operations on different nations may run concurrently;
operations on the same nation must not.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from nationauth.auth.authenticator import AuthenticatedCall
from nationauth.exceptions import TransportError
from nationauth.models import ClientConfig

logger = logging.getLogger(__name__)


class AsyncClient:
    """Non-blocking HTTP transport.  Must be used as an async context manager.

    Args:
        config: Timeout and TLS settings.
        transport: Optional httpx async transport, e.g.
            :class:`httpx.MockTransport` in tests.

    Example::

        async with AsyncClient(config) as client:
            response = await client.send(call)
    """

    def __init__(
        self,
        config: ClientConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._config = config
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def config(self) -> ClientConfig:
        """The transport settings this client was created with."""
        return self._config

    async def __aenter__(self) -> AsyncClient:
        self._client = httpx.AsyncClient(
            timeout=self._config.timeout,
            verify=self._config.verify_ssl,
            follow_redirects=True,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *args: object) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def send(self, call: AuthenticatedCall) -> httpx.Response:
        """Send *call* and return the raw response.

        Raises:
            TransportError: On connection, timeout, or other network errors.
        """
        assert self._client is not None, "Client not initialised -- use as async context manager"

        logger.debug("GET %s q=%s", call.url, call.params.get("q"))
        try:
            response = await self._client.get(
                call.url, params=call.params, headers=call.headers
            )
        except httpx.TransportError as exc:
            raise TransportError(f"Request to {call.url} failed: {exc}") from exc
        logger.debug("HTTP %d from %s", response.status_code, call.url)
        return response
