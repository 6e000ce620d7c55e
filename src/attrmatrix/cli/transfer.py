"""
CLI: ``attrmatrix export`` / ``attrmatrix import`` — bulk transfer.
"""

from __future__ import annotations

import json
from pathlib import Path

import typer

from attrmatrix.cli.utils import console, err_console, fail, make_context, output_result


def export_command(
    output: Path | None = typer.Option(None, "--output", "-o", help="Write to FILE instead of stdout"),
    database: str | None = typer.Option(None, "--database", "-d", help="Database URL"),
) -> None:
    """Export the table as a JSON document that ``import`` accepts."""
    from attrmatrix.ops.transfer import export_table

    with make_context(database) as ctx:
        result = export_table(ctx)
    if not result.success:
        fail(result)

    text = json.dumps(result.data, indent=2, ensure_ascii=False)
    if output is None:
        typer.echo(text)
        return
    output.write_text(text + "\n", encoding="utf-8")
    data = result.data["data"]
    console.print(
        f"[green]Exported[/green] {len(data['columns'])} columns, "
        f"{len(data['rows'])} rows to {output}"
    )


def import_command(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
    database: str | None = typer.Option(None, "--database", "-d", help="Database URL"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Validate and preview without changes"),
    json_out: bool = typer.Option(False, "--json", help="JSON output"),
) -> None:
    """Merge an exported document into the table."""
    from attrmatrix.ops.requests import ImportTableRequest
    from attrmatrix.ops.transfer import import_table

    try:
        document = json.loads(file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        err_console.print(f"[bold red]Error[/bold red] (INVALID_INPUT): {file} is not JSON: {exc}")
        raise typer.Exit(code=1) from exc

    with make_context(database, dry_run=dry_run) as ctx:
        result = import_table(ctx, ImportTableRequest(data=document))
        output_result(result, as_json=json_out, title="Import")
