"""
Root Typer application for the attrmatrix CLI.
"""

from __future__ import annotations

import typer
from typer import Typer

from attrmatrix import __version__
from attrmatrix.core.logging import configure_logging

app = Typer(
    name="attrmatrix",
    help="attrmatrix — multi-axis attribute matrix editor.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"attrmatrix {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    log_level: str = typer.Option("WARNING", "--log-level", help="Log level for CLI commands"),
) -> None:
    """attrmatrix CLI — manage the table, its database, and the API server."""
    configure_logging(level=log_level, json_format=False)


# ── Sub-command registration ─────────────────────────────────────────────

from attrmatrix.cli.auth import hash_password_command  # noqa: E402
from attrmatrix.cli.db import app as db_app  # noqa: E402
from attrmatrix.cli.serve import serve_command  # noqa: E402
from attrmatrix.cli.table import app as table_app  # noqa: E402
from attrmatrix.cli.transfer import export_command, import_command  # noqa: E402

app.add_typer(db_app, name="db", help="Database operations.")
app.add_typer(table_app, name="table", help="Inspect the attribute matrix.")
app.command("serve", help="Start the API server.")(serve_command)
app.command("export")(export_command)
app.command("import")(import_command)
app.command("hash-password")(hash_password_command)
