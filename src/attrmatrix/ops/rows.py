"""
Row (formula) operations.

Rows carry a name, an optional annotation and a spell key derived from
the name.  Creating a row back-fills a zero cell for every column.
"""

from __future__ import annotations

from attrmatrix.core.models import Formula
from attrmatrix.ops.context import OperationContext
from attrmatrix.ops.requests import (
    AddRowRequest,
    DeleteRowRequest,
    RenameRowRequest,
    UpdateAnnotationRequest,
)
from attrmatrix.ops.result import OperationResult
from attrmatrix.ops.transaction import run_operation


def list_rows(ctx: OperationContext) -> OperationResult[list[Formula]]:
    """List all rows, with their cells, in creation order."""
    return run_operation(ctx, "list_rows", lambda ws: ws.formulas.list_rows(), mutates=False)


def add_row(ctx: OperationContext, request: AddRowRequest) -> OperationResult[Formula]:
    """Create a row with its spell key and a zero cell per column."""
    return run_operation(
        ctx,
        "add_row",
        lambda ws: ws.formulas.add_row(request.name, annotation=request.annotation),
    )


def rename_row(ctx: OperationContext, request: RenameRowRequest) -> OperationResult[Formula]:
    """Rename a row and re-derive its spell key.  Cells are untouched."""
    return run_operation(
        ctx,
        "rename_row",
        lambda ws: ws.formulas.rename_row(request.row_name, request.new_name),
    )


def update_annotation(
    ctx: OperationContext,
    request: UpdateAnnotationRequest,
) -> OperationResult[Formula]:
    """Replace a row's annotation.  An empty string clears it."""
    return run_operation(
        ctx,
        "update_annotation",
        lambda ws: ws.formulas.update_annotation(request.row_name, request.annotation),
    )


def delete_row(ctx: OperationContext, request: DeleteRowRequest) -> OperationResult[Formula]:
    """Delete a row and all of its cells."""
    return run_operation(ctx, "delete_row", lambda ws: ws.formulas.delete_row(request.row_name))
