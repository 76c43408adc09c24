#!/usr/bin/env python3
"""
Command line entry point for browsing a catalog.

Each command issues a single catalog query and prints the result as a table
or as JSON:
- datacenters, nodes and services listings
- services registered on one node
- instances of one service, optionally filtered by tag
"""

import asyncio
import sys
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..catalog import Catalog, NodeServices, ServiceAndNode
from ..core.config import DEFAULT_HOST, DEFAULT_PORT, ConsulSettings
from ..core.errors import ConsulError
from ..core.logging import configure_logging
from ..core.parameters import Consistency
from ..core.transport import Consul
from ..serialization import JsonSerializer

T = TypeVar("T")

console = Console()

OUTPUT_OPTION = click.option(
    "--output",
    "-o",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format",
)


def _format_tags(tags: frozenset[str]) -> str:
    return ", ".join(sorted(tags))


def _echo_json(data: Any) -> None:
    click.echo(JsonSerializer(indent=True).serialize(data).decode("utf-8"))


def _run_query(
    ctx: click.Context, query: Callable[[Catalog], Awaitable[T]]
) -> T:
    settings: ConsulSettings = ctx.obj["settings"]

    async def _query() -> T:
        async with Consul(settings) as consul:
            return await query(Catalog(consul))

    try:
        return asyncio.run(_query())
    except ConsulError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        ctx.exit(1)


@click.group()
@click.option(
    "--address",
    "-a",
    envvar="CONSUL_HTTP_ADDR",
    default=f"{DEFAULT_HOST}:{DEFAULT_PORT}",
    show_default=True,
    help="Agent address as host:port or scheme://host:port",
)
@click.option("--datacenter", "-d", default=None, help="Datacenter to query")
@click.option(
    "--consistency",
    type=click.Choice([mode.value for mode in Consistency]),
    default=Consistency.DEFAULT.value,
    show_default=True,
    help="Read consistency mode",
)
@click.option("--timeout", type=float, default=10.0, help="Request timeout (s)")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.pass_context
def cli(
    ctx,
    address: str,
    datacenter: str | None,
    consistency: str,
    timeout: float,
    verbose: bool,
):
    """
    Catalog browser.

    Lists datacenters, nodes and services registered with a Consul-style
    agent, and shows which services run on which nodes.
    """
    configure_logging("DEBUG" if verbose else "WARNING", colorize=False)
    ctx.ensure_object(dict)
    try:
        ctx.obj["settings"] = ConsulSettings.from_address(
            address,
            datacenter=datacenter,
            consistency=Consistency(consistency),
            timeout=timeout,
        )
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--address") from e


@cli.command()
@OUTPUT_OPTION
@click.pass_context
def datacenters(ctx, output: str):
    """List known datacenters."""
    names = _run_query(ctx, lambda catalog: catalog.datacenters())

    if output == "json":
        _echo_json(names)
        return

    table = Table(title="Datacenters")
    table.add_column("Name", style="cyan")
    for name in names:
        table.add_row(name)
    console.print(table)


@cli.command()
@OUTPUT_OPTION
@click.pass_context
def nodes(ctx, output: str):
    """List nodes in the datacenter."""
    found = _run_query(ctx, lambda catalog: catalog.nodes())

    if output == "json":
        _echo_json([node.to_dict() for node in found])
        return

    table = Table(title="Nodes")
    table.add_column("Node", style="cyan")
    table.add_column("Address")
    for node in found:
        table.add_row(node.name, node.address)
    console.print(table)


@cli.command()
@click.argument("name")
@OUTPUT_OPTION
@click.pass_context
def node(ctx, name: str, output: str):
    """Show the services registered on node NAME."""
    result: NodeServices = _run_query(ctx, lambda catalog: catalog.node(name))

    if output == "json":
        _echo_json(result.to_dict())
        return

    if not result.node.valid():
        console.print(f"[yellow]Node '{name}' not found[/yellow]")
        return

    table = Table(title=f"Services on {result.node.name} ({result.node.address})")
    table.add_column("ID", style="cyan")
    table.add_column("Service")
    table.add_column("Address")
    table.add_column("Port", justify="right")
    table.add_column("Tags")
    for service_id, service in sorted(result.services.items()):
        table.add_row(
            service_id,
            service.name,
            service.address,
            str(service.port),
            _format_tags(service.tags),
        )
    console.print(table)


@cli.command()
@OUTPUT_OPTION
@click.pass_context
def services(ctx, output: str):
    """List service names and their tags."""
    found = _run_query(ctx, lambda catalog: catalog.services())

    if output == "json":
        _echo_json({name: sorted(tags) for name, tags in found.items()})
        return

    table = Table(title="Services")
    table.add_column("Service", style="cyan")
    table.add_column("Tags")
    for name, tags in sorted(found.items()):
        table.add_row(name, _format_tags(tags))
    console.print(table)


@cli.command()
@click.argument("name")
@click.option("--tag", "-t", default=None, help="Only instances with this tag")
@OUTPUT_OPTION
@click.pass_context
def service(ctx, name: str, tag: str | None, output: str):
    """List instances of service NAME and the nodes they run on."""
    instances: list[ServiceAndNode] = _run_query(
        ctx, lambda catalog: catalog.service(name, tag)
    )

    if output == "json":
        _echo_json([instance.to_dict() for instance in instances])
        return

    title = f"Instances of {name}" + (f" tagged {tag}" if tag else "")
    table = Table(title=title)
    table.add_column("Node", style="cyan")
    table.add_column("Node Address")
    table.add_column("Service ID")
    table.add_column("Address")
    table.add_column("Port", justify="right")
    table.add_column("Tags")
    for instance in instances:
        table.add_row(
            instance.node.name,
            instance.node.address,
            instance.service.id,
            instance.service.address,
            str(instance.service.port),
            _format_tags(instance.service.tags),
        )
    console.print(table)


def main():
    """Main CLI entry point."""
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(1)


if __name__ == "__main__":
    main()
