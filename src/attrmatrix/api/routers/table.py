"""
Table router — columns, rows, cells and annotations.

GET    /table
POST   /column
DELETE /column/{column_name}
POST   /row
PUT    /row/{row_name}/name
DELETE /row/{row_name}
GET    /cell?row_id=...&column_name=...
PUT    /cell
PUT    /annotation

Rows and columns are addressed by name.  ``row_id`` in the cell and
annotation bodies is the row name.
"""

from __future__ import annotations

from fastapi import APIRouter, Query, Request

from attrmatrix.api.deps import OpContext
from attrmatrix.api.schemas.common import SuccessResponse
from attrmatrix.api.schemas.matrix import (
    AnnotationBody,
    CellBody,
    CellWriteSchema,
    ColumnBody,
    CriterionSchema,
    FormulaSchema,
    RenameRowBody,
    RowBody,
    TableSchema,
)
from attrmatrix.api.utils import _dc, _handle_error
from attrmatrix.ops import cells, columns, rows
from attrmatrix.ops import table as table_ops
from attrmatrix.ops.requests import (
    AddColumnRequest,
    AddRowRequest,
    DeleteColumnRequest,
    DeleteRowRequest,
    GetCellRequest,
    RenameRowRequest,
    SetCellRequest,
    UpdateAnnotationRequest,
)

router = APIRouter()


def _formula(data) -> FormulaSchema:
    return FormulaSchema(
        id=data.id, name=data.name, annotation=data.annotation, spell=data.spell
    )


@router.get("/table", response_model=SuccessResponse[TableSchema])
def get_table(ctx: OpContext, request: Request):
    """Return the whole table.

    Example:
        GET /api/table

        Response:
        {
            "data": {
                "columns": ["Speed", "Power"],
                "rows": [
                    {"name": "Fire", "annotation": null, "spell": "Fire",
                     "attributes": {"Speed": 3, "Power": 0}}
                ]
            }
        }
    """
    result = table_ops.get_table(ctx)
    if not result.success:
        return _handle_error(result, request.url.path)
    return SuccessResponse(
        data=TableSchema(**_dc(result.data)),
        elapsed_ms=result.elapsed_ms,
        warnings=result.warnings,
    )


# ── Columns ──────────────────────────────────────────────────────────────


@router.post("/column", response_model=SuccessResponse[CriterionSchema], status_code=201)
def add_column(body: ColumnBody, ctx: OpContext, request: Request):
    """Add a column; every existing row gets a ``0`` cell for it."""
    result = columns.add_column(ctx, AddColumnRequest(column_name=body.column_name))
    if not result.success:
        return _handle_error(result, request.url.path)
    return SuccessResponse(
        data=CriterionSchema(**_dc(result.data)),
        elapsed_ms=result.elapsed_ms,
    )


@router.delete("/column/{column_name}", status_code=204)
def delete_column(column_name: str, ctx: OpContext, request: Request):
    """Delete a column and its cells."""
    result = columns.delete_column(ctx, DeleteColumnRequest(column_name=column_name))
    if not result.success:
        return _handle_error(result, request.url.path)
    return None


# ── Rows ─────────────────────────────────────────────────────────────────


@router.post("/row", response_model=SuccessResponse[FormulaSchema], status_code=201)
def add_row(body: RowBody, ctx: OpContext, request: Request):
    """Add a row; it gets a ``0`` cell for every column."""
    result = rows.add_row(ctx, AddRowRequest(name=body.name, annotation=body.annotation))
    if not result.success:
        return _handle_error(result, request.url.path)
    return SuccessResponse(data=_formula(result.data), elapsed_ms=result.elapsed_ms)


@router.put("/row/{row_name}/name", response_model=SuccessResponse[FormulaSchema])
def rename_row(row_name: str, body: RenameRowBody, ctx: OpContext, request: Request):
    result = rows.rename_row(ctx, RenameRowRequest(row_name=row_name, new_name=body.new_name))
    if not result.success:
        return _handle_error(result, request.url.path)
    return SuccessResponse(data=_formula(result.data), elapsed_ms=result.elapsed_ms)


@router.delete("/row/{row_name}", status_code=204)
def delete_row(row_name: str, ctx: OpContext, request: Request):
    """Delete a row and its cells."""
    result = rows.delete_row(ctx, DeleteRowRequest(row_name=row_name))
    if not result.success:
        return _handle_error(result, request.url.path)
    return None


@router.put("/annotation", response_model=SuccessResponse[FormulaSchema])
def update_annotation(body: AnnotationBody, ctx: OpContext, request: Request):
    result = rows.update_annotation(
        ctx, UpdateAnnotationRequest(row_name=body.row_id, annotation=body.annotation)
    )
    if not result.success:
        return _handle_error(result, request.url.path)
    return SuccessResponse(data=_formula(result.data), elapsed_ms=result.elapsed_ms)


# ── Cells ────────────────────────────────────────────────────────────────


@router.get("/cell", response_model=SuccessResponse[int])
def get_cell(
    ctx: OpContext,
    request: Request,
    row_id: str = Query(..., description="Row name"),
    column_name: str = Query(...),
):
    result = cells.get_cell(ctx, GetCellRequest(row_name=row_id, column_name=column_name))
    if not result.success:
        return _handle_error(result, request.url.path)
    return SuccessResponse(data=result.data, elapsed_ms=result.elapsed_ms)


@router.put("/cell", response_model=SuccessResponse[CellWriteSchema])
def set_cell(body: CellBody, ctx: OpContext, request: Request):
    """Write a cell; a missing cell is created.

    Example:
        PUT /api/cell
        {"row_id": "Fire", "column_name": "Speed", "value": 3}
    """
    result = cells.set_cell(
        ctx,
        SetCellRequest(row_name=body.row_id, column_name=body.column_name, value=body.value),
    )
    if not result.success:
        return _handle_error(result, request.url.path)
    return SuccessResponse(
        data=CellWriteSchema(**_dc(result.data)),
        elapsed_ms=result.elapsed_ms,
    )
