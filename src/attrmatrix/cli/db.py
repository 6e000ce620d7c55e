"""
CLI: ``attrmatrix db`` — database management commands.
"""

from __future__ import annotations

import typer

from attrmatrix.cli.utils import make_context, output_result

app = typer.Typer(no_args_is_help=True)


@app.command()
def init(
    database: str | None = typer.Option(None, "--database", "-d", help="Database URL"),
    drop: bool = typer.Option(False, "--drop", help="Drop existing tables first"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Preview without changes"),
    json_out: bool = typer.Option(False, "--json", help="JSON output"),
) -> None:
    """Initialise database schema (create tables)."""
    from attrmatrix.ops.database import initialize_database
    from attrmatrix.ops.requests import DatabaseInitRequest

    with make_context(database, dry_run=dry_run, ensure_schema=False) as ctx:
        result = initialize_database(ctx, DatabaseInitRequest(drop_existing=drop))
        output_result(result, as_json=json_out, title="Database Init")


@app.command()
def health(
    database: str | None = typer.Option(None, "--database", "-d"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Check database connectivity."""
    from attrmatrix.ops.database import check_database_health

    with make_context(database, ensure_schema=False) as ctx:
        result = check_database_health(ctx)
        output_result(result, as_json=json_out, title="Database Health")
