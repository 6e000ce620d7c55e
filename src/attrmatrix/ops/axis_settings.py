"""
Axis setting operations.

An axis setting binds four columns to the ends of two chart axes.  All
five fields are validated before any lookup, and every column name must
resolve before anything is written.
"""

from __future__ import annotations

from attrmatrix.core.errors import InvalidInputError
from attrmatrix.core.models import AxisSetting, AxisSettingView
from attrmatrix.ops.context import OperationContext
from attrmatrix.ops.requests import AxisSettingIdRequest, AxisSettingRequest
from attrmatrix.ops.result import OperationResult
from attrmatrix.ops.transaction import run_operation


def list_axis_settings(ctx: OperationContext) -> OperationResult[list[AxisSettingView]]:
    """List settings with each end resolved to its current column."""
    return run_operation(
        ctx, "list_axis_settings", lambda ws: ws.axis_settings.list(), mutates=False
    )


def get_axis_setting(
    ctx: OperationContext,
    request: AxisSettingIdRequest,
) -> OperationResult[AxisSettingView]:
    def work(ws):
        return ws.axis_settings.get(_require_id(request.setting_id))

    return run_operation(ctx, "get_axis_setting", work, mutates=False)


def create_axis_setting(
    ctx: OperationContext,
    request: AxisSettingRequest,
) -> OperationResult[AxisSettingView]:
    """Create a named setting from four column names."""
    return run_operation(
        ctx,
        "create_axis_setting",
        lambda ws: ws.axis_settings.create(
            request.name,
            request.x_negative,
            request.x_positive,
            request.y_negative,
            request.y_positive,
        ),
    )


def update_axis_setting(
    ctx: OperationContext,
    request: AxisSettingRequest,
) -> OperationResult[AxisSettingView]:
    """Overwrite all five fields of an existing setting."""

    def work(ws):
        return ws.axis_settings.update(
            _require_id(request.setting_id),
            request.name,
            request.x_negative,
            request.x_positive,
            request.y_negative,
            request.y_positive,
        )

    return run_operation(ctx, "update_axis_setting", work)


def delete_axis_setting(
    ctx: OperationContext,
    request: AxisSettingIdRequest,
) -> OperationResult[AxisSetting]:
    def work(ws):
        return ws.axis_settings.delete(_require_id(request.setting_id))

    return run_operation(ctx, "delete_axis_setting", work)


def _require_id(setting_id: object) -> int:
    if isinstance(setting_id, bool) or not isinstance(setting_id, int):
        raise InvalidInputError("setting id must be an integer", field="id")
    return setting_id
