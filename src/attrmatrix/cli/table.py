"""
CLI: ``attrmatrix table`` — inspect the matrix.
"""

from __future__ import annotations

import json

import typer
from rich.table import Table

from attrmatrix.cli.utils import console, fail, make_context, output_result

app = typer.Typer(no_args_is_help=True)


@app.command()
def show(
    database: str | None = typer.Option(None, "--database", "-d", help="Database URL"),
    json_out: bool = typer.Option(False, "--json", help="JSON output"),
) -> None:
    """Print the whole table, one line per row."""
    from attrmatrix.ops.table import get_table

    with make_context(database) as ctx:
        result = get_table(ctx)
    if not result.success:
        fail(result)

    view = result.data
    if json_out:
        console.print_json(json.dumps(view.to_dict(), ensure_ascii=False))
        return
    if not view.rows and not view.columns:
        console.print("[dim]Table is empty.[/dim]")
        return

    table = Table(title="Attribute matrix", pad_edge=False)
    table.add_column("name", style="bold")
    table.add_column("spell", style="dim")
    for column in view.columns:
        table.add_column(column, justify="right")
    table.add_column("annotation", overflow="fold")
    for row in view.rows:
        table.add_row(
            row.name,
            row.spell,
            *(str(row.attributes.get(c, 0)) for c in view.columns),
            row.annotation or "",
        )
    console.print(table)


@app.command("columns")
def list_columns(
    database: str | None = typer.Option(None, "--database", "-d"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """List columns in display order."""
    from attrmatrix.ops.columns import list_columns as _list

    with make_context(database) as ctx:
        result = _list(ctx)
        output_result(result, as_json=json_out, title="Columns")
