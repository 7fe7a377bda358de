"""Immutable request descriptions for the nation API.

A :class:`Request` names a nation and the shards to fetch.  It carries no
credentials; :func:`~nationauth.auth.authenticator.authenticate` attaches
those per attempt, so the same request can be re-sent with a different
credential after a pin is rejected.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class Shard(str, enum.Enum):
    """A named unit of nation data the API can return.

    The value is the query-string segment; :attr:`tag` is the element name
    the API uses for the shard in its XML response.
    """

    PING = "ping"

    @property
    def tag(self) -> str:
        return self.value.upper()

    @classmethod
    def from_tag(cls, tag: str) -> Shard:
        """Look up a shard by its response element name.

        Raises:
            ValueError: If *tag* does not name a known shard.
        """
        return cls(tag.lower())


@dataclass(frozen=True)
class Request:
    """A request for *shards* of *nation*.

    Example::

        Request("testlandia", (Shard.PING,)).query_params(11)
        # {"nation": "testlandia", "q": "ping", "v": "11"}
    """

    nation: str
    shards: tuple[Shard, ...] = (Shard.PING,)

    def query_string(self) -> str:
        """Join the shard segments the way the API expects (``a+b+c``)."""
        return "+".join(shard.value for shard in self.shards)

    def query_params(self, api_version: int) -> dict[str, str]:
        return {
            "nation": self.nation,
            "q": self.query_string(),
            "v": str(api_version),
        }
