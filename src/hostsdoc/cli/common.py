"""Shared CLI plumbing: per-invocation config, document opening, save policy."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from hostsdoc.core.config import HostsConfig
from hostsdoc.core.errors import HostsError
from hostsdoc.hosts import Hosts
from hostsdoc.hostsfile import validator
from hostsdoc.services.hosts_service import HostsService

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)

COMMENT_MARKER = ":"


@dataclass(frozen=True, slots=True)
class CliConfig:
    """Root options, built once per invocation and stored on ``ctx.obj``."""

    read_path: str = ""
    write_path: str = ""
    dry_run: bool = False
    quiet: bool = False
    flush: bool = False
    max_hosts_per_line: int = 0

    def hosts_config(self) -> HostsConfig:
        return HostsConfig(
            read_file_path=self.read_path,
            write_file_path=self.write_path,
            max_hosts_per_line=self.max_hosts_per_line,
            auto_flush=self.flush,
        )


def get_config(ctx: typer.Context) -> CliConfig:
    cfg = ctx.find_root().obj
    return cfg if isinstance(cfg, CliConfig) else CliConfig()


def open_service(ctx: typer.Context) -> HostsService:
    """Load the hosts document named by the root options, or exit 1."""
    cfg = get_config(ctx)
    try:
        hosts = Hosts(cfg.hosts_config())
    except (OSError, HostsError) as exc:
        fail(str(exc))
    return HostsService(hosts)


def fail(message: str) -> NoReturn:
    err_console.print(f"[red]Error:[/red] {escape(message)}")
    raise typer.Exit(1)


def info(ctx: typer.Context, message: str) -> None:
    """Print a status line unless ``--quiet``."""
    if not get_config(ctx).quiet:
        console.print(escape(message))


def require_valid(values: list[str], check, label: str) -> None:
    bad = validator.first_invalid(values, check)
    if bad is not None:
        fail(f'"{bad}" is not a valid {label}')


def split_comment(args: list[str]) -> tuple[list[str], str]:
    """
    Split ``host1 host2 :some comment words`` into hostnames and a comment.

    Everything from the first argument starting with ``:`` on is the comment.
    """
    for i, arg in enumerate(args):
        if arg.startswith(COMMENT_MARKER):
            words = [arg[len(COMMENT_MARKER):], *args[i + 1:]]
            return args[:i], " ".join(words).strip()
    return list(args), ""


def save_hosts(ctx: typer.Context, service: HostsService) -> None:
    """Dry-run / save / flush policy shared by every mutating command."""
    cfg = get_config(ctx)
    if cfg.dry_run:
        typer.echo(service.render(), nl=False)
        return

    try:
        result = service.commit()
    except (OSError, HostsError) as exc:
        fail(f"could not save {service.hosts.write_file_path}. Reason: {exc}")

    if result.flush_error:
        err_console.print(
            f"[yellow]Warning:[/yellow] hosts file saved but DNS cache flush failed: "
            f"{escape(result.flush_error)}"
        )
        if not cfg.quiet:
            err_console.print("DNS cache may be stale. You can flush manually.")
        return

    if result.flushed and not cfg.quiet:
        console.print("DNS cache flushed.")
