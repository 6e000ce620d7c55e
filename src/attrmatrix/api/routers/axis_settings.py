"""
Axis settings router.

GET    /axis-settings
POST   /axis-settings
GET    /axis-settings/{setting_id}
PUT    /axis-settings/{setting_id}
DELETE /axis-settings/{setting_id}
"""

from __future__ import annotations

from fastapi import APIRouter, Path, Request

from attrmatrix.api.deps import OpContext
from attrmatrix.api.schemas.common import SuccessResponse
from attrmatrix.api.schemas.matrix import AxisSettingBody, AxisSettingSchema
from attrmatrix.api.utils import _dc, _handle_error
from attrmatrix.ops import axis_settings as ops
from attrmatrix.ops.requests import AxisSettingIdRequest, AxisSettingRequest

router = APIRouter(prefix="/axis-settings")


def _request(body: AxisSettingBody, setting_id: int | None = None) -> AxisSettingRequest:
    return AxisSettingRequest(
        name=body.name,
        x_negative=body.x_negative,
        x_positive=body.x_positive,
        y_negative=body.y_negative,
        y_positive=body.y_positive,
        setting_id=setting_id,
    )


@router.get("", response_model=SuccessResponse[list[AxisSettingSchema]])
def list_axis_settings(ctx: OpContext, request: Request):
    """List axis settings with each end resolved to its column.

    Example:
        GET /api/axis-settings

        Response:
        {
            "data": [
                {"id": 1, "name": "Default",
                 "axes": {"xNegative": {"id": 1, "name": "Speed"}, "xPositive": ...}}
            ]
        }
    """
    result = ops.list_axis_settings(ctx)
    if not result.success:
        return _handle_error(result, request.url.path)
    return SuccessResponse(
        data=[AxisSettingSchema(**_dc(s)) for s in (result.data or [])],
        elapsed_ms=result.elapsed_ms,
    )


@router.post("", response_model=SuccessResponse[AxisSettingSchema], status_code=201)
def create_axis_setting(body: AxisSettingBody, ctx: OpContext, request: Request):
    result = ops.create_axis_setting(ctx, _request(body))
    if not result.success:
        return _handle_error(result, request.url.path)
    return SuccessResponse(
        data=AxisSettingSchema(**_dc(result.data)),
        elapsed_ms=result.elapsed_ms,
    )


@router.get("/{setting_id}", response_model=SuccessResponse[AxisSettingSchema])
def get_axis_setting(ctx: OpContext, request: Request, setting_id: int = Path(...)):
    result = ops.get_axis_setting(ctx, AxisSettingIdRequest(setting_id=setting_id))
    if not result.success:
        return _handle_error(result, request.url.path)
    return SuccessResponse(
        data=AxisSettingSchema(**_dc(result.data)),
        elapsed_ms=result.elapsed_ms,
    )


@router.put("/{setting_id}", response_model=SuccessResponse[AxisSettingSchema])
def update_axis_setting(
    body: AxisSettingBody,
    ctx: OpContext,
    request: Request,
    setting_id: int = Path(...),
):
    result = ops.update_axis_setting(ctx, _request(body, setting_id))
    if not result.success:
        return _handle_error(result, request.url.path)
    return SuccessResponse(
        data=AxisSettingSchema(**_dc(result.data)),
        elapsed_ms=result.elapsed_ms,
    )


@router.delete("/{setting_id}", status_code=204)
def delete_axis_setting(ctx: OpContext, request: Request, setting_id: int = Path(...)):
    result = ops.delete_axis_setting(ctx, AxisSettingIdRequest(setting_id=setting_id))
    if not result.success:
        return _handle_error(result, request.url.path)
    return None
