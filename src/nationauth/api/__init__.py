"""NationStates API request construction and payload parsing.

- :class:`Request` / :class:`Shard` -- what to ask the API for.
- :func:`parse_nation_data` -- turn a 200 response body into :class:`NationData`.
"""

from nationauth.api.payload import NationData, parse_nation_data
from nationauth.api.request import Request, Shard

__all__ = ["NationData", "Request", "Shard", "parse_nation_data"]
