import pytest

from consulcat.catalog import INVALID_NODE, Catalog, Node, NodeServices
from consulcat.core.errors import (
    BadStatus,
    DecodeError,
    ParameterContractError,
    TransportConnectionError,
)
from consulcat.core.parameters import BlockFor, Consistency
from tests import catalog_payloads as payloads

ALL_RESPONSES = {
    "/v1/catalog/datacenters": payloads.DATACENTERS,
    "/v1/catalog/nodes": payloads.NODES,
    "/v1/catalog/node/n1": payloads.NODE_N1,
    "/v1/catalog/node/missing-node": payloads.NODE_MISSING,
    "/v1/catalog/services": payloads.SERVICES,
    "/v1/catalog/service/web": payloads.SERVICE_WEB,
}


class TestParameterContract:
    """Disallowed parameters fail before the transport is touched."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "call",
        [
            lambda c: c.datacenters(consistency=Consistency.STALE),
            lambda c: c.nodes(tag="prod"),
            lambda c: c.nodes(dc="dc2"),
            lambda c: c.node("n1", tag="prod"),
            lambda c: c.services(index=5),
            lambda c: c.service("web", wait="10s"),
            lambda c: c.service("web", "prod", near="_agent"),
            lambda c: c.nodes(consistency="stale"),
        ],
    )
    async def test_disallowed_parameter_issues_no_request(
        self, stub_consul, call
    ) -> None:
        consul = stub_consul(ALL_RESPONSES)
        catalog = Catalog(consul)
        with pytest.raises(ParameterContractError):
            await call(catalog)
        assert consul.calls == []

    @pytest.mark.asyncio
    async def test_tag_given_twice_is_rejected(self, stub_consul) -> None:
        consul = stub_consul(ALL_RESPONSES)
        catalog = Catalog(consul)
        with pytest.raises(ParameterContractError, match="more than once"):
            await catalog.service("web", "prod", tag="canary")
        assert consul.calls == []

    def test_constructor_accepts_only_consistency(self, stub_consul) -> None:
        with pytest.raises(ParameterContractError):
            Catalog(stub_consul(), block_for=BlockFor(wait=1, index=1))
        with pytest.raises(ParameterContractError):
            Catalog(stub_consul(), tag="prod")


class TestConsistencyResolution:
    def test_default_comes_from_transport(self, stub_consul) -> None:
        consul = stub_consul(default_consistency=Consistency.CONSISTENT)
        assert Catalog(consul).default_consistency is Consistency.CONSISTENT

    @pytest.mark.asyncio
    async def test_client_default_sent_on_every_call(self, stub_consul) -> None:
        consul = stub_consul(ALL_RESPONSES)
        catalog = Catalog(consul, consistency=Consistency.STALE)

        await catalog.nodes()
        await catalog.node("n1")
        await catalog.services()
        await catalog.service("web")

        assert [call.params["consistency"] for call in consul.calls] == [
            Consistency.STALE
        ] * 4

    @pytest.mark.asyncio
    async def test_call_override_applies_to_that_call_only(self, stub_consul) -> None:
        consul = stub_consul(ALL_RESPONSES)
        catalog = Catalog(consul, consistency=Consistency.STALE)

        await catalog.nodes(consistency=Consistency.CONSISTENT)
        await catalog.nodes()

        assert consul.calls[0].params["consistency"] is Consistency.CONSISTENT
        assert consul.calls[1].params["consistency"] is Consistency.STALE
        assert catalog.default_consistency is Consistency.STALE

    @pytest.mark.asyncio
    async def test_datacenters_sends_no_parameters(self, stub_consul) -> None:
        consul = stub_consul(ALL_RESPONSES)
        await Catalog(consul, consistency=Consistency.STALE).datacenters()
        assert consul.calls[0].path == "/v1/catalog/datacenters"
        assert consul.calls[0].params == {}


class TestOperations:
    @pytest.mark.asyncio
    async def test_datacenters(self, stub_consul) -> None:
        catalog = Catalog(stub_consul(ALL_RESPONSES))
        assert await catalog.datacenters() == ["dc1", "dc2"]

    @pytest.mark.asyncio
    async def test_datacenters_is_idempotent(self, stub_consul) -> None:
        consul = stub_consul(ALL_RESPONSES)
        catalog = Catalog(consul)
        first = await catalog.datacenters()
        second = await catalog.datacenters()
        assert first == second == ["dc1", "dc2"]
        assert len(consul.calls) == 2

    @pytest.mark.asyncio
    async def test_nodes_passes_blocking_parameters(self, stub_consul) -> None:
        consul = stub_consul(ALL_RESPONSES)
        wait = BlockFor(wait=30, index=1200)
        nodes = await Catalog(consul).nodes(block_for=wait)
        assert nodes == [Node("n1", "10.0.0.1"), Node("n2", "10.0.0.2")]
        assert consul.calls[0].path == "/v1/catalog/nodes"
        assert consul.calls[0].params == {
            "consistency": Consistency.DEFAULT,
            "block_for": wait,
        }

    @pytest.mark.asyncio
    async def test_node_found(self, stub_consul) -> None:
        node, services = await Catalog(stub_consul(ALL_RESPONSES)).node("n1")
        assert node == Node("n1", "10.0.0.1")
        assert set(services) == {"web-1", "db"}

    @pytest.mark.asyncio
    async def test_missing_node_is_invalid_not_error(self, stub_consul) -> None:
        result = await Catalog(stub_consul(ALL_RESPONSES)).node("missing-node")
        assert result == NodeServices(INVALID_NODE, {})
        assert result.node == Node("", "")
        assert not result.node.valid()

    @pytest.mark.asyncio
    async def test_services(self, stub_consul) -> None:
        services = await Catalog(stub_consul(ALL_RESPONSES)).services()
        assert services == {"web": frozenset({"v1", "prod"}), "db": frozenset()}

    @pytest.mark.asyncio
    async def test_service_with_tag(self, stub_consul) -> None:
        consul = stub_consul(ALL_RESPONSES)
        instances = await Catalog(consul).service("web", "prod")
        assert len(instances) == 2
        assert consul.calls[0].path == "/v1/catalog/service/web"
        assert consul.calls[0].params["tag"] == "prod"
        assert consul.calls[0].params["consistency"] is Consistency.DEFAULT

    @pytest.mark.asyncio
    async def test_service_tag_as_keyword(self, stub_consul) -> None:
        consul = stub_consul(ALL_RESPONSES)
        await Catalog(consul).service("web", tag="prod")
        assert consul.calls[0].params["tag"] == "prod"

    @pytest.mark.asyncio
    async def test_service_without_tag_sends_no_tag(self, stub_consul) -> None:
        consul = stub_consul(ALL_RESPONSES)
        await Catalog(consul).service("web")
        assert "tag" not in consul.calls[0].params


class TestUrlEncoding:
    @pytest.mark.asyncio
    async def test_node_name_is_percent_encoded(self, stub_consul) -> None:
        consul = stub_consul({"/v1/catalog/node/my%20node": payloads.NODE_MISSING})
        await Catalog(consul).node("my node")
        assert consul.calls[0].path == "/v1/catalog/node/my%20node"

    @pytest.mark.asyncio
    async def test_path_injection_is_neutralized(self, stub_consul) -> None:
        consul = stub_consul({"/v1/catalog/node/..%2Fservices%3Fx": b"null"})
        await Catalog(consul).node("../services?x")
        assert consul.calls[0].path == "/v1/catalog/node/..%2Fservices%3Fx"

    @pytest.mark.asyncio
    async def test_service_name_and_tag_are_encoded(self, stub_consul) -> None:
        consul = stub_consul({"/v1/catalog/service/my%20web": b"[]"})
        assert await Catalog(consul).service("my web", "v1 & v2") == []
        assert consul.calls[0].path == "/v1/catalog/service/my%20web"
        assert consul.calls[0].params["tag"] == "v1%20%26%20v2"


class TestErrorPropagation:
    @pytest.mark.asyncio
    async def test_transport_errors_propagate_unchanged(self, stub_consul) -> None:
        error = TransportConnectionError("connection refused")
        catalog = Catalog(stub_consul(error=error))
        with pytest.raises(TransportConnectionError) as exc_info:
            await catalog.nodes()
        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_bad_status_propagates(self, stub_consul) -> None:
        catalog = Catalog(stub_consul(error=BadStatus(500, "rpc error")))
        with pytest.raises(BadStatus) as exc_info:
            await catalog.services()
        assert exc_info.value.status == 500

    @pytest.mark.asyncio
    async def test_decode_errors_propagate(self, stub_consul) -> None:
        catalog = Catalog(stub_consul({"/v1/catalog/services": b"[1, 2]"}))
        with pytest.raises(DecodeError):
            await catalog.services()


def test_node_equality_is_structural() -> None:
    assert Node("n1", "10.0.0.1") == Node("n1", "10.0.0.1")
    assert Node("n1", "10.0.0.1") != Node("n2", "10.0.0.1")
    assert Node("n1", "10.0.0.1") != Node("n1", "10.0.0.2")


def test_node_validity_requires_both_fields() -> None:
    assert Node("n1", "10.0.0.1").valid()
    assert not Node("n1", "").valid()
    assert not Node("", "10.0.0.1").valid()
    assert not INVALID_NODE.valid()
