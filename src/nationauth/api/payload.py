"""Wire schema for successful nation responses.

A 200 response carries an XML document of the form::

    <NATION id="testlandia">
      <PING>1</PING>
    </NATION>

:func:`parse_nation_data` validates that shape and returns a
:class:`NationData` keyed by :class:`~nationauth.api.request.Shard`.  Any
deviation -- malformed XML, a different root element, or a child element
that is not a known shard -- raises :class:`~nationauth.exceptions.SchemaError`.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Optional

from pydantic import BaseModel, Field

from nationauth.api.request import Shard
from nationauth.exceptions import SchemaError

_ROOT_TAG = "NATION"


class NationData(BaseModel):
    """Shard values returned for one nation."""

    nation: Optional[str] = Field(default=None, description="The root element's id")
    shards: dict[Shard, str] = Field(default_factory=dict)

    def __getitem__(self, shard: Shard) -> str:
        return self.shards[shard]

    def __contains__(self, shard: object) -> bool:
        return shard in self.shards


def parse_nation_data(text: str) -> NationData:
    """Parse a response body into :class:`NationData`.

    Args:
        text: The raw XML body.

    Returns:
        The parsed shards.  Empty shard elements map to ``""``.

    Raises:
        SchemaError: If the body does not match the nation schema.
    """
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise SchemaError(f"Response body is not valid XML: {exc}") from exc

    if root.tag != _ROOT_TAG:
        raise SchemaError(f"Expected <{_ROOT_TAG}> root element, got <{root.tag}>")

    shards: dict[Shard, str] = {}
    for child in root:
        try:
            shard = Shard.from_tag(child.tag)
        except ValueError:
            raise SchemaError(f"Unexpected element <{child.tag}> in response") from None
        shards[shard] = (child.text or "").strip()

    return NationData(nation=root.get("id"), shards=shards)
