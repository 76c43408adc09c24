from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from consulcat.datastructures.service import ServiceInfo
from consulcat.datastructures.type_aliases import (
    HostAddress,
    JsonDict,
    NodeName,
    ServiceId,
)


@dataclass(frozen=True, slots=True)
class Node:
    """A catalog node. ``Node()`` is the "no such node" value."""

    name: NodeName = ""
    address: HostAddress = ""

    def valid(self) -> bool:
        return bool(self.name) and bool(self.address)

    def to_dict(self) -> JsonDict:
        return {"name": self.name, "address": self.address}


INVALID_NODE = Node()


@dataclass(frozen=True, slots=True)
class NodeServices:
    """A node and the services registered on it, keyed by service id."""

    node: Node = INVALID_NODE
    services: dict[ServiceId, ServiceInfo] = field(default_factory=dict)

    def __iter__(self) -> Iterator[Any]:
        yield self.node
        yield self.services

    def to_dict(self) -> JsonDict:
        return {
            "node": self.node.to_dict(),
            "services": {
                service_id: service.to_dict()
                for service_id, service in self.services.items()
            },
        }


@dataclass(frozen=True, slots=True)
class ServiceAndNode:
    """One service instance and the node it runs on."""

    service: ServiceInfo
    node: Node

    def __iter__(self) -> Iterator[Any]:
        yield self.service
        yield self.node

    def to_dict(self) -> JsonDict:
        return {"service": self.service.to_dict(), "node": self.node.to_dict()}
