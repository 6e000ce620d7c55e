"""Tests for export / import operations."""

from __future__ import annotations

from attrmatrix.core.matrix import AttributeMatrix
from attrmatrix.ops.cells import set_cell
from attrmatrix.ops.columns import add_column, list_columns
from attrmatrix.ops.context import OperationContext
from attrmatrix.ops.requests import (
    AddColumnRequest,
    AddRowRequest,
    ImportTableRequest,
    SetCellRequest,
)
from attrmatrix.ops.rows import add_row
from attrmatrix.ops.table import get_table
from attrmatrix.ops.transfer import export_table, import_table


class TestExportImport:
    def test_export_document(self, ctx: OperationContext):
        add_column(ctx, AddColumnRequest(column_name="C"))
        add_row(ctx, AddRowRequest(name="A", annotation="a"))
        set_cell(ctx, SetCellRequest(row_name="A", column_name="C", value=3))

        doc = export_table(ctx).data
        assert doc["version"] == "1.0"
        assert doc["data"]["rows"] == [{"name": "A", "annotation": "a", "attributes": {"C": 3}}]

    def test_round_trip(self, ctx: OperationContext):
        add_column(ctx, AddColumnRequest(column_name="C"))
        add_row(ctx, AddRowRequest(name="A"))
        before = get_table(ctx).data

        result = import_table(ctx, ImportTableRequest(data=export_table(ctx).data))
        assert result.success
        assert result.data.columns_created == 0
        assert result.data.rows_created == 0
        assert get_table(ctx).data == before

    def test_invalid_document_mutates_nothing(self, ctx: OperationContext):
        result = import_table(ctx, ImportTableRequest(data={"columns": ["New"]}))
        assert result.error.code == "INVALID_INPUT"
        assert list_columns(ctx).data == []

    def test_import_all_or_nothing(self, ctx: OperationContext, monkeypatch):
        calls = {"n": 0}
        original = AttributeMatrix.upsert

        def _flaky(self, row_id, column_id, value):
            calls["n"] += 1
            if calls["n"] == 2:
                raise RuntimeError("lost the disk")
            return original(self, row_id, column_id, value)

        monkeypatch.setattr(AttributeMatrix, "upsert", _flaky)
        document = {
            "columns": ["C1", "C2"],
            "rows": [{"name": "A", "attributes": {"C1": 1, "C2": 2}}],
        }
        result = import_table(ctx, ImportTableRequest(data=document))

        assert result.error.code == "INTERNAL"
        table = get_table(ctx).data
        assert table.columns == []
        assert table.rows == []
