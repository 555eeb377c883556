"""Top-level commands: show, add, update."""

from __future__ import annotations

from typing import Annotated, Optional

import typer

from hostsdoc.cli.common import fail, info, open_service, require_valid, save_hosts, split_comment
from hostsdoc.hostsfile import validator


def show(ctx: typer.Context) -> None:
    """Show the content of the hosts file."""
    service = open_service(ctx)
    typer.echo(service.render(), nl=False)


def add(
    ctx: typer.Context,
    ip: Annotated[str, typer.Argument(help="IPv4 or IPv6 address.")],
    hostnames: Annotated[list[str], typer.Argument(help="Hostnames, optionally followed by :COMMENT.")],
    comment: Annotated[Optional[str], typer.Option("--comment", "-c", help="Inline comment.")] = None,
) -> None:
    """Add/associate one or more hostnames to an IP address."""
    hosts, inline_comment = split_comment(hostnames)
    if not validator.is_valid_ip(ip):
        fail("the IP address provided is not a valid ipv4 or ipv6 address")
    if not hosts:
        fail('the "add" command requires an IP address and at least one hostname')
    require_valid(hosts, validator.is_valid_hostname, "hostname")

    info(ctx, f'Adding host(s) "{" ".join(hosts)}" to IP address {ip}')
    service = open_service(ctx)
    service.add(ip, hosts, comment if comment is not None else inline_comment)
    save_hosts(ctx, service)


def update(
    ctx: typer.Context,
    old_ip: Annotated[str, typer.Argument(help="Address the hostnames are mapped to now.")],
    new_ip: Annotated[str, typer.Argument(help="Address to move them to.")],
    hostnames: Annotated[list[str], typer.Argument(help="Hostnames, optionally followed by :COMMENT.")],
    comment: Annotated[Optional[str], typer.Option("--comment", "-c", help="Inline comment.")] = None,
) -> None:
    """Move hostnames from one IP address to another."""
    hosts, inline_comment = split_comment(hostnames)
    if not validator.is_valid_ip(old_ip):
        fail("the Original IP address provided is not a valid ipv4 or ipv6 address")
    if not validator.is_valid_ip(new_ip):
        fail("the New IP address provided is not a valid ipv4 or ipv6 address")
    if not hosts:
        fail('the "update" command requires an Original IP address, a New IP address and at least one hostname')
    require_valid(hosts, validator.is_valid_hostname, "hostname")

    info(ctx, f'Updating host(s) "{" ".join(hosts)}" from IP address {old_ip} to {new_ip}')
    service = open_service(ctx)
    service.update(old_ip, new_ip, hosts, comment if comment is not None else inline_comment)
    save_hosts(ctx, service)
