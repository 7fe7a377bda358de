"""Synchronous transport for authenticated calls.

:class:`SyncClient` wraps :class:`httpx.Client` and sends one
:class:`~nationauth.auth.authenticator.AuthenticatedCall` per
:meth:`~SyncClient.send`.  It does not interpret status codes.

See Also:
    :class:`~nationauth.client.async_client.AsyncClient` for the
    equivalent non-blocking implementation.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from nationauth.auth.authenticator import AuthenticatedCall
from nationauth.exceptions import TransportError
from nationauth.models import ClientConfig

logger = logging.getLogger(__name__)


class SyncClient:
    """Blocking HTTP transport.

    Must be used as a context manager so that the underlying connection
    pool is opened and closed.

    Args:
        config: Timeout and TLS settings.
        transport: Optional httpx transport, e.g. :class:`httpx.MockTransport`
            in tests.

    Example::

        with SyncClient(config) as client:
            response = client.send(call)
    """

    def __init__(
        self,
        config: ClientConfig,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._config = config
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    @property
    def config(self) -> ClientConfig:
        """The transport settings this client was created with."""
        return self._config

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> SyncClient:
        self._client = httpx.Client(
            timeout=self._config.timeout,
            verify=self._config.verify_ssl,
            follow_redirects=True,
            transport=self._transport,
        )
        return self

    def __exit__(self, *args: object) -> None:
        if self._client:
            self._client.close()
            self._client = None

    # ------------------------------------------------------------------ #
    # Sending
    # ------------------------------------------------------------------ #

    def send(self, call: AuthenticatedCall) -> httpx.Response:
        """Send *call* and return the raw response.

        Raises:
            TransportError: On connection, timeout, or other network errors.
        """
        assert self._client is not None, "Client not initialised -- use as context manager"

        logger.debug("GET %s q=%s", call.url, call.params.get("q"))
        try:
            response = self._client.get(call.url, params=call.params, headers=call.headers)
        except httpx.TransportError as exc:
            raise TransportError(f"Request to {call.url} failed: {exc}") from exc
        logger.debug("HTTP %d from %s", response.status_code, call.url)
        return response
