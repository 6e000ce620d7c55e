"""
CLI: ``attrmatrix serve`` — start the API server.
"""

from __future__ import annotations

import typer
import uvicorn

from attrmatrix.cli.utils import console, err_console
from attrmatrix.core.errors import MissingConfigError
from attrmatrix.core.settings import get_settings


def serve_command(
    host: str | None = typer.Option(None, "--host", "-h", help="Bind address"),
    port: int | None = typer.Option(None, "--port", "-p", help="Bind port"),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on changes"),
    workers: int = typer.Option(1, "--workers", "-w", help="Number of workers"),
    require_auth: bool = typer.Option(
        False, "--require-auth", help="Refuse to start without JWT secret and admin hash"
    ),
) -> None:
    """Start the attrmatrix REST API server."""
    settings = get_settings()
    if require_auth:
        try:
            settings.validate_for_production()
        except MissingConfigError as exc:
            err_console.print(f"[bold red]Error[/bold red] ({exc.code}): {exc.message}")
            raise typer.Exit(code=1) from exc

    host = host or settings.host
    port = port or settings.port
    console.print(f"[bold green]Starting attrmatrix API[/bold green] on {host}:{port}")
    uvicorn.run(
        "attrmatrix.api:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        workers=workers,
        log_level=settings.log_level.lower(),
    )
