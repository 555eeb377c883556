"""Serve the HTTP API for the selected hosts document."""

from __future__ import annotations

from typing import Annotated

import typer
import uvicorn
from rich.markup import escape

from hostsdoc.app.main import create_app
from hostsdoc.cli.common import console, open_service


def serve(
    ctx: typer.Context,
    host: Annotated[str, typer.Option(help="Bind address.")] = "127.0.0.1",
    port: Annotated[int, typer.Option(help="Bind port.")] = 8000,
) -> None:
    """Start the HTTP API with uvicorn."""
    service = open_service(ctx)
    console.print(f"Serving [bold]{escape(service.hosts.read_file_path)}[/bold] on http://{host}:{port}")
    uvicorn.run(create_app(service), host=host, port=port)
