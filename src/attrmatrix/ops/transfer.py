"""
Bulk export / import operations.

``import_table`` parses and validates the whole document before touching
the store, then reconciles columns, rows and cells in a single
transaction: a failure part-way leaves the table as it was.
"""

from __future__ import annotations

from typing import Any

from attrmatrix.core.models import ImportSummary
from attrmatrix.core.transfer import parse_snapshot
from attrmatrix.ops.context import OperationContext
from attrmatrix.ops.requests import ImportTableRequest
from attrmatrix.ops.result import OperationResult
from attrmatrix.ops.transaction import run_operation


def export_table(ctx: OperationContext) -> OperationResult[dict[str, Any]]:
    """Return ``{"data": snapshot, "timestamp": ..., "version": "1.0"}``."""
    return run_operation(ctx, "export_table", lambda ws: ws.transfer.export(), mutates=False)


def import_table(
    ctx: OperationContext,
    request: ImportTableRequest,
) -> OperationResult[ImportSummary]:
    """Merge a snapshot into the table.

    Columns are created first, then rows (existing rows keep their
    annotation unless the snapshot carries a non-empty one), then cells.
    Attribute keys naming no column are skipped.
    """

    def work(ws):
        snapshot = parse_snapshot(request.data)
        return ws.transfer.import_snapshot(snapshot)

    return run_operation(ctx, "import_table", work)
