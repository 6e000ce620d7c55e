"""
Column (criterion) operations.

Adding a column fills it with a ``0`` cell for every existing row in the
same transaction; deleting one removes its cells first.
"""

from __future__ import annotations

from attrmatrix.core.models import Criterion
from attrmatrix.ops.context import OperationContext
from attrmatrix.ops.requests import AddColumnRequest, DeleteColumnRequest
from attrmatrix.ops.result import OperationResult
from attrmatrix.ops.transaction import run_operation


def list_columns(ctx: OperationContext) -> OperationResult[list[Criterion]]:
    """List all columns in creation order."""
    return run_operation(
        ctx, "list_columns", lambda ws: ws.criteria.list_columns(), mutates=False
    )


def add_column(
    ctx: OperationContext,
    request: AddColumnRequest,
) -> OperationResult[Criterion]:
    """Create a column and back-fill a zero cell for every row."""
    return run_operation(
        ctx, "add_column", lambda ws: ws.criteria.add_column(request.column_name)
    )


def delete_column(
    ctx: OperationContext,
    request: DeleteColumnRequest,
) -> OperationResult[Criterion]:
    """Delete a column and all of its cells.

    Axis settings that reference the column are left as they are.
    """
    return run_operation(
        ctx, "delete_column", lambda ws: ws.criteria.delete_column(request.column_name)
    )
