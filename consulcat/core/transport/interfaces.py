"""
Interfaces the catalog layer consumes from a transport.

Anything with a ``default_consistency`` attribute and an async ``get`` that
returns the raw response body can back a ``Catalog``; the aiohttp based
``Consul`` is the production implementation and tests use recording stubs.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from consulcat.core.parameters import Consistency
from consulcat.datastructures.type_aliases import UrlPath


@runtime_checkable
class CatalogTransport(Protocol):
    """Protocol for the HTTP transport behind a catalog client."""

    @property
    def default_consistency(self) -> Consistency: ...

    async def get(self, path: UrlPath, **params: Any) -> bytes: ...
