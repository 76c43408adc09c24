"""
consulcat - typed catalog client for Consul-style service registries

Enumerate datacenters, nodes and services, and find which services run on
which nodes, without hand-building URLs or picking apart JSON.

## Quick Start

```python
from consulcat import Catalog, Consistency, Consul, ConsulSettings

async with Consul(ConsulSettings(host="10.0.0.5", datacenter="dc1")) as consul:
    catalog = Catalog(consul, consistency=Consistency.STALE)
    for instance in await catalog.service("web", "prod"):
        print(instance.node.name, instance.service.port)
```

Every operation takes only the optional parameters it understands; anything
else raises ParameterContractError before a request is sent.
"""

from loguru import logger

from .catalog import INVALID_NODE, Catalog, Node, NodeServices, ServiceAndNode
from .core import (
    BadStatus,
    BlockFor,
    Consistency,
    ConsulError,
    ConsulSettings,
    DecodeError,
    NotFoundError,
    ParameterContractError,
    TransportConnectionError,
    TransportError,
    TransportTimeoutError,
)
from .core.transport import Consul, encode_url
from .datastructures import ServiceInfo

# Library records stay silent until the application opts in
logger.disable("consulcat")

__version__ = "0.1.0"

__all__ = [
    "BadStatus",
    "BlockFor",
    "Catalog",
    "Consistency",
    "Consul",
    "ConsulError",
    "ConsulSettings",
    "DecodeError",
    "INVALID_NODE",
    "Node",
    "NodeServices",
    "NotFoundError",
    "ParameterContractError",
    "ServiceAndNode",
    "ServiceInfo",
    "TransportConnectionError",
    "TransportError",
    "TransportTimeoutError",
    "encode_url",
]
