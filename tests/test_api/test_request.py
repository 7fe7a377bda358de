"""Tests for request construction."""

from __future__ import annotations

import dataclasses

import pytest

from nationauth.api.request import Request, Shard


def test_default_shard_is_ping() -> None:
    assert Request("testlandia").shards == (Shard.PING,)


def test_query_params() -> None:
    params = Request("testlandia").query_params(11)
    assert params == {"nation": "testlandia", "q": "ping", "v": "11"}


def test_shards_joined_with_plus() -> None:
    assert Request("x", (Shard.PING, Shard.PING)).query_string() == "ping+ping"


def test_request_is_immutable() -> None:
    request = Request("testlandia")
    with pytest.raises(dataclasses.FrozenInstanceError):
        request.nation = "other"  # type: ignore[misc]


def test_shard_tags() -> None:
    assert Shard.PING.tag == "PING"
    assert Shard.from_tag("PING") is Shard.PING
    with pytest.raises(ValueError):
        Shard.from_tag("FLAG")
