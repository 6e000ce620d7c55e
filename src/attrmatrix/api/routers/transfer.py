"""
Transfer router — bulk export and import.

GET  /export
POST /import
"""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from attrmatrix.api.deps import OpContext
from attrmatrix.api.schemas.common import SuccessResponse
from attrmatrix.api.schemas.matrix import ImportBody, ImportSummarySchema
from attrmatrix.api.utils import _dc, _handle_error
from attrmatrix.ops import transfer as ops
from attrmatrix.ops.requests import ImportTableRequest

router = APIRouter()


@router.get("/export")
def export_table(ctx: OpContext, request: Request):
    """Return the export document as is, without the success envelope.

    Example:
        GET /api/export

        Response:
        {
            "data": {"columns": ["Speed"], "rows": [{"name": "Fire", ...}]},
            "timestamp": "2026-01-01T00:00:00+00:00",
            "version": "1.0"
        }
    """
    result = ops.export_table(ctx)
    if not result.success:
        return _handle_error(result, request.url.path)
    return JSONResponse(content=result.data)


@router.post("/import", response_model=SuccessResponse[ImportSummarySchema])
def import_table(body: ImportBody, ctx: OpContext, request: Request):
    """Merge a snapshot (``{"data": {"columns": [...], "rows": [...]}}``) into the table."""
    result = ops.import_table(ctx, ImportTableRequest(data=body.data))
    if not result.success:
        return _handle_error(result, request.url.path)
    return SuccessResponse(
        data=ImportSummarySchema(**_dc(result.data)),
        elapsed_ms=result.elapsed_ms,
    )
