"""Remove hostnames, addresses, CIDR ranges or commented groups."""

from __future__ import annotations

from typing import Annotated

import typer

from hostsdoc.cli.common import fail, info, open_service, require_valid, save_hosts
from hostsdoc.core.errors import InvalidCIDRError
from hostsdoc.hostsfile import validator

remove_app = typer.Typer(help="Remove hostnames or ip addresses.", no_args_is_help=True)


@remove_app.command("host")
def remove_host(
    ctx: typer.Context,
    hostnames: Annotated[list[str], typer.Argument(help="Hostnames to remove.")],
) -> None:
    """Remove one or more hostnames."""
    require_valid(hostnames, validator.is_valid_hostname, "hostname")
    info(ctx, f'Removing host(s) "{" ".join(hostnames)}"')
    service = open_service(ctx)
    service.remove_hosts(hostnames)
    save_hosts(ctx, service)


@remove_app.command("ip")
def remove_ip(
    ctx: typer.Context,
    ips: Annotated[list[str], typer.Argument(help="IP addresses to remove.")],
) -> None:
    """Remove every line for one or more IP addresses."""
    require_valid(ips, validator.is_valid_ip, "ip address")
    info(ctx, f'Removing ip(s) "{" ".join(ips)}"')
    service = open_service(ctx)
    service.remove_addresses(ips)
    save_hosts(ctx, service)


@remove_app.command("cidr")
def remove_cidr(
    ctx: typer.Context,
    cidrs: Annotated[list[str], typer.Argument(help="CIDR ranges, e.g. 10.0.0.0/24.")],
) -> None:
    """Remove every line whose address falls in one of the CIDR ranges."""
    require_valid(cidrs, validator.is_valid_cidr, "CIDR")
    info(ctx, f'Removing ip ranges(s) "{" ".join(cidrs)}"')
    service = open_service(ctx)
    try:
        service.remove_cidrs(cidrs)
    except InvalidCIDRError as exc:
        fail(f"there was a problem parsing a CIDR. Reason: {exc}")
    save_hosts(ctx, service)


@remove_app.command("bycomment")
def remove_by_comment(
    ctx: typer.Context,
    comment: Annotated[str, typer.Argument(help="Comment shared by the lines to remove.")],
) -> None:
    """Remove all host entries that carry the comment."""
    info(ctx, f'Removing all hosts with comment "{comment}"')
    service = open_service(ctx)
    service.remove_by_comments([comment])
    save_hosts(ctx, service)
