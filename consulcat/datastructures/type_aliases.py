"""
Semantic type aliases for consulcat datastructures.

Catalog payloads are mostly strings and small integers; these aliases keep
signatures readable about which string is which.
"""

from typing import Any, TypeAlias

# Time types
DurationSeconds: TypeAlias = float
DurationMilliseconds: TypeAlias = int

# Catalog identifiers
DatacenterName: TypeAlias = str
NodeName: TypeAlias = str
ServiceName: TypeAlias = str
ServiceId: TypeAlias = str
TagName: TypeAlias = str
Tags: TypeAlias = frozenset[TagName]

# Network types
HostAddress: TypeAlias = str
PortNumber: TypeAlias = int
UrlString: TypeAlias = str
UrlPath: TypeAlias = str

# Blocking query types
ConsulIndex: TypeAlias = int

# Serialization types
JsonDict: TypeAlias = dict[str, Any]
RawBody: TypeAlias = bytes | str

# Query string types
QueryPair: TypeAlias = tuple[str, str | None]
