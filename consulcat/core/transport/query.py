"""URL and query string helpers for catalog requests.

Query values are emitted verbatim. Untrusted values (node names, service
names, tags) must go through ``encode_url`` before they reach this layer.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any
from urllib.parse import quote

from consulcat.core.parameters import BlockFor, Consistency
from consulcat.datastructures.type_aliases import (
    DatacenterName,
    QueryPair,
    UrlPath,
    UrlString,
)


def encode_url(segment: str) -> str:
    """Percent-encode everything except RFC 3986 unreserved characters."""
    return quote(str(segment), safe="")


def _encode_value(name: str, value: Any) -> list[QueryPair]:
    if value is None:
        return []
    if isinstance(value, Consistency):
        if value is Consistency.DEFAULT:
            return []
        return [(value.value, None)]
    if isinstance(value, BlockFor):
        return [("index", str(value.index)), ("wait", f"{value.wait_ms}ms")]
    if isinstance(value, bool):
        return [(name, None)] if value else []
    return [(name, str(value))]


def encode_query(
    params: Mapping[str, Any],
    *,
    datacenter: DatacenterName | None = None,
) -> list[QueryPair]:
    """Render request parameters as ordered ``(name, value)`` query pairs.

    A ``None`` value in a pair marks a bare flag such as ``stale``.
    """
    pairs: list[QueryPair] = []
    dc = params.get("dc", datacenter)
    if dc:
        pairs.append(("dc", encode_url(dc)))
    for name, value in params.items():
        if name == "dc":
            continue
        pairs.extend(_encode_value(name, value))
    return pairs


def make_url(
    base: UrlString, path: UrlPath, query: Sequence[QueryPair] = ()
) -> UrlString:
    url = f"{base.rstrip('/')}{path}"
    if not query:
        return url
    rendered = "&".join(
        name if value is None else f"{name}={value}" for name, value in query
    )
    return f"{url}?{rendered}"
