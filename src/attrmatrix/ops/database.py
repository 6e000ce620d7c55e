"""
Database operations.

Thin wrappers around :mod:`attrmatrix.core.schema` for table creation and
health checks.
"""

from __future__ import annotations

from sqlalchemy import inspect, text

from attrmatrix.core.schema import TABLES, create_schema, drop_schema
from attrmatrix.ops.context import OperationContext
from attrmatrix.ops.requests import DatabaseInitRequest
from attrmatrix.ops.responses import DatabaseHealth, DatabaseInitResult
from attrmatrix.ops.result import OperationResult, start_timer
from attrmatrix.ops.transaction import run_operation


def initialize_database(
    ctx: OperationContext,
    request: DatabaseInitRequest | None = None,
) -> OperationResult[DatabaseInitResult]:
    """Create all attrmatrix tables (idempotent).

    With ``drop_existing`` every managed table is dropped first.  In
    ``dry_run`` mode the table names are reported and nothing is created.
    """
    request = request or DatabaseInitRequest()

    if ctx.dry_run:
        timer = start_timer()
        return OperationResult.ok(
            DatabaseInitResult(
                tables_created=[t.name for t in TABLES],
                dropped=request.drop_existing,
                dry_run=True,
            ),
            elapsed_ms=timer.elapsed_ms,
        )

    def work(ws):
        if request.drop_existing:
            drop_schema(ws.conn)
        return DatabaseInitResult(
            tables_created=create_schema(ws.conn),
            dropped=request.drop_existing,
        )

    return run_operation(ctx, "initialize_database", work)


def check_database_health(ctx: OperationContext) -> OperationResult[DatabaseHealth]:
    """Ping the database and count the managed tables present."""
    timer = start_timer()

    def work(ws):
        ws.conn.execute(text("SELECT 1"))
        present = set(inspect(ws.conn).get_table_names())
        return DatabaseHealth(
            connected=True,
            backend=ws.conn.dialect.name,
            table_count=sum(1 for t in TABLES if t.name in present),
            latency_ms=round(timer.elapsed_ms, 2),
        )

    return run_operation(ctx, "check_database_health", work, mutates=False)
