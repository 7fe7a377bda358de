"""Tests for the asynchronous transport."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from nationauth.api.request import Request
from nationauth.auth.authenticator import authenticate
from nationauth.auth.selector import Credential, CredentialKind
from nationauth.client.async_client import AsyncClient
from nationauth.exceptions import TransportError
from nationauth.models import ClientConfig


def test_send(config: ClientConfig) -> None:
    call = authenticate(Request("testlandia"), Credential(CredentialKind.PIN, "12"), config)
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(403)

    async def go() -> httpx.Response:
        async with AsyncClient(config, transport=httpx.MockTransport(handler)) as client:
            return await client.send(call)

    response = asyncio.run(go())

    assert response.status_code == 403
    assert seen[0].headers["X-Pin"] == "12"


def test_closes_on_exit(config: ClientConfig) -> None:
    async def go() -> AsyncClient:
        async with AsyncClient(config) as client:
            assert client._client is not None
        return client

    assert asyncio.run(go())._client is None


def test_network_error_mapped(config: ClientConfig) -> None:
    call = authenticate(Request("x"), Credential(CredentialKind.PASSWORD, "pw"), config)

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    async def go() -> None:
        async with AsyncClient(config, transport=httpx.MockTransport(handler)) as client:
            await client.send(call)

    with pytest.raises(TransportError):
        asyncio.run(go())
