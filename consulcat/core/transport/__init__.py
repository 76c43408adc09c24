"""
consulcat transport layer.

The catalog client only needs ``get(path, **params) -> bytes`` and a default
consistency from its transport; ``Consul`` provides both over aiohttp.

Example Usage:
    async with Consul(ConsulSettings(host="10.0.0.5")) as consul:
        body = await consul.get("/v1/catalog/datacenters")
"""

from .http import Consul
from .interfaces import CatalogTransport
from .query import encode_query, encode_url, make_url

__all__ = [
    "CatalogTransport",
    "Consul",
    "encode_query",
    "encode_url",
    "make_url",
]
