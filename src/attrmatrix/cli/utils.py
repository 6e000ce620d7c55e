"""
CLI utility helpers — output formatting and connection management.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import asdict
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from attrmatrix.core.database import create_matrix_engine, open_connection
from attrmatrix.core.schema import create_schema
from attrmatrix.core.settings import get_settings
from attrmatrix.ops.context import OperationContext
from attrmatrix.ops.result import OperationResult

console = Console()
err_console = Console(stderr=True)


# ── Connection helper ────────────────────────────────────────────────────


@contextmanager
def make_context(
    database: str | None = None,
    *,
    dry_run: bool = False,
    ensure_schema: bool = True,
) -> Iterator[OperationContext]:
    """Yield an ``OperationContext`` on a fresh connection for one CLI command.

    ``database`` is a SQLAlchemy URL; it defaults to
    ``ATTRMATRIX_DATABASE_URL``.  Missing tables are created first unless
    ``ensure_schema`` is off or the settings disable auto-creation.
    """
    settings = get_settings()
    engine = create_matrix_engine(
        database or settings.database_url,
        connect_timeout=settings.connect_timeout_seconds,
        statement_timeout_ms=settings.statement_timeout_ms,
    )
    try:
        if ensure_schema and settings.auto_create_schema:
            create_schema(engine)
        with open_connection(engine) as conn:
            yield OperationContext(conn=conn, caller="cli", dry_run=dry_run)
    finally:
        engine.dispose()


# ── Output helpers ───────────────────────────────────────────────────────


def _to_dict(obj: Any) -> dict[str, Any]:
    """Convert model / dataclass / dict to plain dict."""
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    if hasattr(obj, "__dataclass_fields__"):
        return asdict(obj)
    if isinstance(obj, dict):
        return obj
    return {"value": obj}


def fail(result: OperationResult) -> None:
    """Print the error of a failed result and exit non-zero."""
    err = result.error
    msg = err.message if err else "Unknown error"
    code = err.code if err else "ERROR"
    err_console.print(f"[bold red]Error[/bold red] ({code}): {msg}")
    raise typer.Exit(code=1)


def output_result(
    result: OperationResult,
    *,
    as_json: bool = False,
    title: str = "",
) -> None:
    """Render an ``OperationResult`` to the terminal."""
    if not result.success:
        fail(result)

    data = result.data

    if as_json:
        payload = _to_dict(data) if not isinstance(data, list | tuple) else [_to_dict(d) for d in data]
        console.print_json(json.dumps(payload, default=str, ensure_ascii=False))
        return

    if isinstance(data, list):
        if not data:
            console.print("[dim]No items.[/dim]")
            return
        _print_table(data, title=title)
    else:
        _print_dict(_to_dict(data), title=title)


# ── Private helpers ──────────────────────────────────────────────────────


def _print_table(items: list, *, title: str = "") -> None:
    """Render a list of dataclasses/dicts as a Rich table."""
    first = _to_dict(items[0])
    table = Table(title=title or None, show_lines=False, pad_edge=False)
    for col in first:
        table.add_column(col, overflow="fold")
    for item in items:
        d = _to_dict(item)
        table.add_row(*(str(v) for v in d.values()))
    console.print(table)


def _print_dict(data: dict[str, Any], *, title: str = "") -> None:
    """Render a single dict as key-value pairs."""
    if title:
        console.print(f"[bold]{title}[/bold]")
    for k, v in data.items():
        console.print(f"  [cyan]{k}[/cyan]: {v}")
