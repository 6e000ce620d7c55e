"""Tests for axis setting operations."""

from __future__ import annotations

import pytest

from attrmatrix.ops.axis_settings import (
    create_axis_setting,
    delete_axis_setting,
    get_axis_setting,
    list_axis_settings,
    update_axis_setting,
)
from attrmatrix.ops.columns import add_column, delete_column
from attrmatrix.ops.context import OperationContext
from attrmatrix.ops.requests import (
    AddColumnRequest,
    AxisSettingIdRequest,
    AxisSettingRequest,
    DeleteColumnRequest,
)


@pytest.fixture()
def columns(ctx: OperationContext) -> OperationContext:
    for name in ("X1", "X2", "Y1", "Y2"):
        add_column(ctx, AddColumnRequest(column_name=name))
    return ctx


def _req(name="S", *ends, setting_id=None) -> AxisSettingRequest:
    xn, xp, yn, yp = ends or ("X1", "X2", "Y1", "Y2")
    return AxisSettingRequest(
        name=name, x_negative=xn, x_positive=xp, y_negative=yn, y_positive=yp, setting_id=setting_id
    )


class TestAxisSettingOps:
    def test_create_get_list(self, columns: OperationContext):
        created = create_axis_setting(columns, _req())
        assert created.success
        fetched = get_axis_setting(columns, AxisSettingIdRequest(setting_id=created.data.id))
        assert fetched.data.to_dict() == created.data.to_dict()
        assert [s.name for s in list_axis_settings(columns).data] == ["S"]

    def test_create_unknown_criterion(self, ctx: OperationContext):
        result = create_axis_setting(ctx, _req())
        assert result.error.code == "NOT_FOUND"
        assert list_axis_settings(ctx).data == []

    def test_create_missing_field(self, columns: OperationContext):
        result = create_axis_setting(columns, _req("S", "X1", "X2", "Y1", None))
        assert result.error.code == "INVALID_INPUT"

    def test_duplicate(self, columns: OperationContext):
        create_axis_setting(columns, _req())
        assert create_axis_setting(columns, _req()).error.code == "DUPLICATE_NAME"

    def test_update(self, columns: OperationContext):
        created = create_axis_setting(columns, _req())
        result = update_axis_setting(
            columns, _req("T", "Y1", "Y2", "X1", "X2", setting_id=created.data.id)
        )
        assert result.success
        assert result.data.name == "T"

    def test_update_requires_id(self, columns: OperationContext):
        assert update_axis_setting(columns, _req()).error.code == "INVALID_INPUT"

    def test_get_missing(self, ctx: OperationContext):
        assert get_axis_setting(ctx, AxisSettingIdRequest(setting_id=42)).error.code == "NOT_FOUND"

    def test_delete(self, columns: OperationContext):
        created = create_axis_setting(columns, _req())
        assert delete_axis_setting(columns, AxisSettingIdRequest(setting_id=created.data.id)).success
        assert list_axis_settings(columns).data == []

    def test_column_delete_leaves_setting(self, columns: OperationContext):
        create_axis_setting(columns, _req())
        assert delete_column(columns, DeleteColumnRequest(column_name="Y2")).success
        (view,) = list_axis_settings(columns).data
        assert view.axes["yPositive"] is None
