"""Typed client for the catalog endpoints (datacenters, nodes, services)."""

from .client import Catalog
from .models import INVALID_NODE, Node, NodeServices, ServiceAndNode
from .parsing import (
    parse_datacenters,
    parse_node,
    parse_nodes,
    parse_service,
    parse_services,
)

__all__ = [
    "Catalog",
    "INVALID_NODE",
    "Node",
    "NodeServices",
    "ServiceAndNode",
    "parse_datacenters",
    "parse_node",
    "parse_nodes",
    "parse_service",
    "parse_services",
]
