"""
Response mapping for the catalog endpoints.

Each ``parse_*`` function takes a raw response body and returns typed values.
A payload of the wrong shape raises DecodeError; the only absence that maps
to a value is a missing node in ``parse_node``, which yields
``NodeServices(INVALID_NODE, {})``. ``Tags`` and ``Address`` fields of a
service may be null or omitted by the agent and map to empty values.
"""

from __future__ import annotations

from typing import Any

from consulcat.core.errors import DecodeError
from consulcat.datastructures.service import ServiceInfo
from consulcat.datastructures.type_aliases import RawBody, ServiceName, Tags
from consulcat.serialization import json_serializer

from .models import INVALID_NODE, Node, NodeServices, ServiceAndNode


def _type_name(value: object) -> str:
    return "null" if value is None else type(value).__name__


def _expect_list(value: object, what: str) -> list[Any]:
    if not isinstance(value, list):
        raise DecodeError(f"Expected array for {what}, got {_type_name(value)}")
    return value


def _expect_object(value: object, what: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise DecodeError(f"Expected object for {what}, got {_type_name(value)}")
    return value


def _require_str(obj: dict[str, Any], key: str, what: str) -> str:
    if key not in obj:
        raise DecodeError(f"Missing '{key}' in {what}")
    value = obj[key]
    if not isinstance(value, str):
        raise DecodeError(f"Expected string '{key}' in {what}, got {_type_name(value)}")
    return value


def _require_int(obj: dict[str, Any], key: str, what: str) -> int:
    if key not in obj:
        raise DecodeError(f"Missing '{key}' in {what}")
    value = obj[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(
            f"Expected integer '{key}' in {what}, got {_type_name(value)}"
        )
    return value


def _optional_str(obj: dict[str, Any], key: str, what: str) -> str:
    value = obj.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DecodeError(f"Expected string '{key}' in {what}, got {_type_name(value)}")
    return value


def _tags(value: object, what: str) -> Tags:
    if value is None:
        return frozenset()
    items = _expect_list(value, what)
    for item in items:
        if not isinstance(item, str):
            raise DecodeError(f"Expected string tags in {what}, got {_type_name(item)}")
    return frozenset(items)


def _node(obj: object, what: str) -> Node:
    entry = _expect_object(obj, what)
    return Node(
        name=_require_str(entry, "Node", what),
        address=_require_str(entry, "Address", what),
    )


def _node_service(obj: object, what: str) -> ServiceInfo:
    entry = _expect_object(obj, what)
    return ServiceInfo(
        id=_require_str(entry, "ID", what),
        name=_require_str(entry, "Service", what),
        address=_optional_str(entry, "Address", what),
        port=_require_int(entry, "Port", what),
        tags=_tags(entry.get("Tags"), f"{what} Tags"),
    )


def _service_and_node(obj: object, what: str) -> ServiceAndNode:
    entry = _expect_object(obj, what)
    service = ServiceInfo(
        id=_require_str(entry, "ServiceID", what),
        name=_require_str(entry, "ServiceName", what),
        address=_optional_str(entry, "ServiceAddress", what),
        port=_require_int(entry, "ServicePort", what),
        tags=_tags(entry.get("ServiceTags"), f"{what} ServiceTags"),
    )
    return ServiceAndNode(service=service, node=_node(entry, what))


def parse_datacenters(body: RawBody) -> list[str]:
    payload = _expect_list(json_serializer.deserialize(body), "datacenters")
    for item in payload:
        if not isinstance(item, str):
            raise DecodeError(f"Expected datacenter name, got {_type_name(item)}")
    return list(payload)


def parse_nodes(body: RawBody) -> list[Node]:
    payload = _expect_list(json_serializer.deserialize(body), "nodes")
    return [_node(entry, f"nodes[{i}]") for i, entry in enumerate(payload)]


def parse_node(body: RawBody) -> NodeServices:
    """Map a ``/v1/catalog/node/<name>`` body to the node and its services.

    The agent answers an unknown node with ``null`` (or an object whose
    ``Node`` is null); both produce ``NodeServices(INVALID_NODE, {})``.
    """
    payload = json_serializer.deserialize(body)
    if payload is None:
        return NodeServices(INVALID_NODE, {})
    payload = _expect_object(payload, "node")
    if payload.get("Node") is None:
        return NodeServices(INVALID_NODE, {})

    node = _node(payload["Node"], "node")
    raw_services = payload.get("Services")
    if raw_services is None:
        return NodeServices(node, {})
    raw_services = _expect_object(raw_services, "node Services")
    services = {
        service_id: _node_service(entry, f"service '{service_id}'")
        for service_id, entry in raw_services.items()
    }
    return NodeServices(node, services)


def parse_services(body: RawBody) -> dict[ServiceName, Tags]:
    payload = _expect_object(json_serializer.deserialize(body), "services")
    return {
        name: _tags(tags, f"tags of service '{name}'")
        for name, tags in payload.items()
    }


def parse_service(body: RawBody) -> list[ServiceAndNode]:
    payload = _expect_list(json_serializer.deserialize(body), "service")
    return [
        _service_and_node(entry, f"service[{i}]") for i, entry in enumerate(payload)
    ]
