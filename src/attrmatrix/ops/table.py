"""
Table operations.

Read-only views over the whole matrix.
"""

from __future__ import annotations

from attrmatrix.core.models import TableView
from attrmatrix.ops.context import OperationContext
from attrmatrix.ops.result import OperationResult
from attrmatrix.ops.transaction import run_operation


def get_table(ctx: OperationContext) -> OperationResult[TableView]:
    """Return every column and every row with its dense attribute map.

    Columns and rows are in creation order; a missing cell reads as ``0``.
    """
    return run_operation(ctx, "get_table", lambda ws: ws.matrix.render_table(), mutates=False)
