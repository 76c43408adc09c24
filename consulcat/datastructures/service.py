from __future__ import annotations

from dataclasses import dataclass, field

from consulcat.datastructures.type_aliases import (
    HostAddress,
    JsonDict,
    PortNumber,
    ServiceId,
    ServiceName,
    Tags,
)


def _normalize_tags(tags: object) -> Tags:
    if tags is None:
        return frozenset()
    if isinstance(tags, (list, tuple, set, frozenset)):
        return frozenset(str(tag) for tag in tags)
    return frozenset({str(tags)})


@dataclass(frozen=True, slots=True)
class ServiceInfo:
    """A service instance as registered with a catalog agent."""

    name: ServiceName
    address: HostAddress = ""
    port: PortNumber = 0
    tags: Tags = field(default_factory=frozenset)
    id: ServiceId = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", str(self.name))
        object.__setattr__(self, "address", str(self.address))
        object.__setattr__(self, "port", int(self.port))
        object.__setattr__(self, "tags", _normalize_tags(self.tags))
        object.__setattr__(self, "id", str(self.id))

    def to_dict(self) -> JsonDict:
        return {
            "id": self.id,
            "name": self.name,
            "address": self.address,
            "port": int(self.port),
            "tags": sorted(self.tags),
        }
