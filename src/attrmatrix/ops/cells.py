"""
Cell operations.

Cells are addressed by row and column name.  A write to a missing cell
creates it; a read of a missing cell returns ``0``.
"""

from __future__ import annotations

from attrmatrix.core.models import CellWrite
from attrmatrix.ops.context import OperationContext
from attrmatrix.ops.requests import GetCellRequest, SetCellRequest
from attrmatrix.ops.result import OperationResult
from attrmatrix.ops.transaction import run_operation


def set_cell(ctx: OperationContext, request: SetCellRequest) -> OperationResult[CellWrite]:
    """Write one cell value."""
    return run_operation(
        ctx,
        "set_cell",
        lambda ws: ws.matrix.set_cell(request.row_name, request.column_name, request.value),
    )


def get_cell(ctx: OperationContext, request: GetCellRequest) -> OperationResult[int]:
    """Read one cell value."""

    def work(ws):
        row = ws.formulas.require(request.row_name)
        column = ws.criteria.require(request.column_name)
        return ws.matrix.get_cell(row.id, column.id)

    return run_operation(ctx, "get_cell", work, mutates=False)
