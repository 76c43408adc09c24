from __future__ import annotations

from typing import Any

from loguru import logger

from consulcat.core.parameters import (
    CATALOG_PARAMS,
    GET_PARAMS,
    NO_PARAMS,
    SERVICE_TAG_PARAMS,
    Consistency,
    ParamGroup,
    consistency,
    get_param,
)
from consulcat.core.transport.interfaces import CatalogTransport
from consulcat.core.transport.query import encode_url
from consulcat.datastructures.type_aliases import (
    DatacenterName,
    NodeName,
    ServiceName,
    TagName,
    Tags,
    UrlPath,
)

from .models import Node, NodeServices, ServiceAndNode
from .parsing import (
    parse_datacenters,
    parse_node,
    parse_nodes,
    parse_service,
    parse_services,
)

CATALOG_PREFIX: UrlPath = "/v1/catalog"


class Catalog:
    """Read-only client for the catalog endpoints.

    Optional parameters are keyword arguments checked against the operation's
    parameter group before anything else happens:

        catalog = Catalog(consul, consistency=Consistency.STALE)
        nodes = await catalog.nodes(block_for=BlockFor(wait=30, index=1200))
        node, services = await catalog.node("web-1")
        instances = await catalog.service("web", "prod")

    ``nodes``, ``node``, ``services`` and ``service`` accept ``consistency``
    and ``block_for``; ``service`` additionally accepts a tag, positionally or
    as ``tag=``. ``datacenters`` accepts nothing. An unsupported parameter
    raises ParameterContractError without issuing a request.
    """

    __slots__ = ("_consul", "_default_consistency")

    def __init__(self, consul: CatalogTransport, **params: Any) -> None:
        """
        Args:
            consul: Transport shared with other clients; not owned.
            **params: ``consistency`` only, the default for every request
                that supports it. Falls back to the transport's default.
        """
        checked = CATALOG_PARAMS.check(params)
        self._consul = consul
        self._default_consistency: Consistency = get_param(
            checked, consistency, consul.default_consistency
        )

    @property
    def default_consistency(self) -> Consistency:
        return self._default_consistency

    def _resolve(self, checked: dict[str, Any]) -> dict[str, Any]:
        resolved: dict[str, Any] = {
            consistency.name: get_param(
                checked, consistency, self._default_consistency
            )
        }
        for name, value in checked.items():
            if name != consistency.name:
                resolved[name] = value
        return resolved

    async def _query(
        self,
        group: ParamGroup,
        path: UrlPath,
        params: dict[str, Any] | list[tuple[str, Any]],
    ) -> bytes:
        checked = group.check(params)
        if "tag" in checked:
            checked["tag"] = encode_url(checked["tag"])
        query = self._resolve(checked) if group is not NO_PARAMS else {}
        logger.debug("catalog {} {}", group.name, path)
        return await self._consul.get(path, **query)

    async def datacenters(self, **params: Any) -> list[DatacenterName]:
        """List known datacenters in the order the servers report them."""
        body = await self._query(NO_PARAMS, f"{CATALOG_PREFIX}/datacenters", params)
        return parse_datacenters(body)

    async def nodes(self, **params: Any) -> list[Node]:
        body = await self._query(GET_PARAMS, f"{CATALOG_PREFIX}/nodes", params)
        return parse_nodes(body)

    async def node(self, name: NodeName, **params: Any) -> NodeServices:
        """Return a node and its services.

        An unknown node is not an error: the result is
        ``NodeServices(INVALID_NODE, {})`` and ``result.node.valid()`` is false.
        """
        path = f"{CATALOG_PREFIX}/node/{encode_url(name)}"
        return parse_node(await self._query(GET_PARAMS, path, params))

    async def services(self, **params: Any) -> dict[ServiceName, Tags]:
        body = await self._query(GET_PARAMS, f"{CATALOG_PREFIX}/services", params)
        return parse_services(body)

    async def service(
        self, name: ServiceName, tag: TagName | None = None, /, **params: Any
    ) -> list[ServiceAndNode]:
        """List instances of a service with the nodes they run on.

        With a tag, only instances carrying that tag are returned; the
        filtering is done by the servers.
        """
        path = f"{CATALOG_PREFIX}/service/{encode_url(name)}"
        if tag is None and "tag" not in params:
            return parse_service(await self._query(GET_PARAMS, path, params))
        pairs: list[tuple[str, Any]] = [] if tag is None else [("tag", tag)]
        pairs.extend(params.items())
        return parse_service(await self._query(SERVICE_TAG_PARAMS, path, pairs))
