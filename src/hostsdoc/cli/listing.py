"""Read-only listings by IP, CIDR, hostname or comment."""

from __future__ import annotations

from typing import Annotated

import typer

from hostsdoc.cli.common import open_service, require_valid
from hostsdoc.hostsfile import validator

list_app = typer.Typer(help="List hostnames or IP addresses.", no_args_is_help=True)


@list_app.command("ip")
def list_ip(
    ctx: typer.Context,
    ips: Annotated[list[str], typer.Argument(help="IP addresses.")],
) -> None:
    """List hosts for one or more IP addresses."""
    require_valid(ips, validator.is_valid_ip, "ip address")
    for address, host in open_service(ctx).list_by_addresses(ips):
        typer.echo(f"{address} {host}")


@list_app.command("cidr")
def list_cidr(
    ctx: typer.Context,
    cidrs: Annotated[list[str], typer.Argument(help="CIDR ranges.")],
) -> None:
    """List hosts for one or more CIDR ranges."""
    require_valid(cidrs, validator.is_valid_cidr, "CIDR")
    for cidr, address, host in open_service(ctx).list_by_cidrs(cidrs):
        typer.echo(f"{cidr} {address} {host}")


@list_app.command("host")
def list_host(
    ctx: typer.Context,
    hostnames: Annotated[list[str], typer.Argument(help="Hostnames.")],
    exact: Annotated[bool, typer.Option("--exact", "-e", help="Exact match only.")] = False,
) -> None:
    """List IP addresses for one or more hostnames."""
    require_valid(hostnames, validator.is_valid_hostname, "hostname")
    for address, host in open_service(ctx).list_by_hostnames(hostnames, exact):
        typer.echo(f"{address} {host}")


@list_app.command("bycomment")
def list_by_comment(
    ctx: typer.Context,
    comment: Annotated[str, typer.Argument(help="Comment to match.")],
) -> None:
    """List hostnames on lines that carry the comment."""
    for host in open_service(ctx).list_by_comment(comment):
        typer.echo(host)
