import logging
from importlib.metadata import PackageNotFoundError, version as package_version
from typing import Annotated

import typer

from hostsdoc.cli.common import CliConfig, console
from hostsdoc.cli.edit import add, show, update
from hostsdoc.cli.listing import list_app
from hostsdoc.cli.remove import remove_app
from hostsdoc.cli.serve import serve

app = typer.Typer(
    name="hostsdoc",
    help="hostsdoc: add, remove and re-associate hostname entries in your hosts file.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def root(
    ctx: typer.Context,
    read: Annotated[str, typer.Option("--read", "-r", help="(override) Path to read the hosts file.")] = "",
    write: Annotated[str, typer.Option("--write", "-w", help="(override) Path to write the hosts file.")] = "",
    dryrun: Annotated[bool, typer.Option("--dryrun", "-d", help="Dry run, output to stdout (ignores quiet).")] = False,
    quiet: Annotated[bool, typer.Option("--quiet", "-q", help="No output.")] = False,
    flush: Annotated[
        bool,
        typer.Option("--flush", "-f", envvar="HOSTSDOC_AUTO_FLUSH", help="Flush DNS cache after modifying the hosts file."),
    ] = False,
    max_hosts_per_line: Annotated[
        int,
        typer.Option("--max-hosts-per-line", "-m", help="Max hostnames per line (0=auto, -1=unlimited, >0=explicit)."),
    ] = 0,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging.")] = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s  %(name)s  %(levelname)s  %(message)s",
    )
    ctx.obj = CliConfig(
        read_path=read,
        write_path=write,
        dry_run=dryrun,
        quiet=quiet,
        flush=flush,
        max_hosts_per_line=max_hosts_per_line,
    )


def version() -> None:
    """Print the version number."""
    try:
        current = package_version("hostsdoc")
    except PackageNotFoundError:
        current = "unknown"
    console.print(f"hostsdoc Version: {current}")


app.command("show")(show)
app.command("add")(add)
app.command("update")(update)
app.add_typer(remove_app, name="remove")
app.add_typer(list_app, name="list")
app.command("version")(version)
app.command("serve")(serve)


def main() -> None:
    app()
