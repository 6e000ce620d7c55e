"""Tests for the criteria and formula registries and the attribute matrix."""

from __future__ import annotations

import pytest

from attrmatrix.core import spell as spell_module
from attrmatrix.core.errors import DuplicateNameError, InvalidInputError, NotFoundError
from attrmatrix.core.matrix import normalize_value
from attrmatrix.core.workspace import MatrixWorkspace


def _cell(ws: MatrixWorkspace, row: str, column: str) -> int:
    return ws.matrix.get_cell(ws.formulas.require(row).id, ws.criteria.require(column).id)


class TestCriteriaRegistry:
    def test_add_column_fills_existing_rows(self, ws: MatrixWorkspace):
        ws.formulas.add_row("A")
        ws.formulas.add_row("B")
        column = ws.criteria.add_column("Speed")
        assert column.name == "Speed"
        assert ws.matrix.count_cells() == 2
        assert _cell(ws, "A", "Speed") == 0

    def test_add_column_trims_name(self, ws: MatrixWorkspace):
        assert ws.criteria.add_column("  Speed ").name == "Speed"

    @pytest.mark.parametrize("name", ["", "   ", None, 5])
    def test_add_column_rejects_empty(self, ws: MatrixWorkspace, name):
        with pytest.raises(InvalidInputError):
            ws.criteria.add_column(name)

    def test_add_column_duplicate(self, ws: MatrixWorkspace):
        ws.criteria.add_column("Speed")
        with pytest.raises(DuplicateNameError):
            ws.criteria.add_column("Speed")

    def test_list_columns_in_creation_order(self, ws: MatrixWorkspace):
        for name in ("Zeta", "Alpha", "Mid"):
            ws.criteria.add_column(name)
        assert [c.name for c in ws.criteria.list_columns()] == ["Zeta", "Alpha", "Mid"]

    def test_delete_column_removes_its_cells(self, ws: MatrixWorkspace):
        ws.formulas.add_row("A")
        ws.criteria.add_column("C1")
        ws.criteria.add_column("C2")
        ws.criteria.delete_column("C1")
        assert [c.name for c in ws.criteria.list_columns()] == ["C2"]
        assert ws.matrix.count_cells() == 1

    def test_delete_missing_column(self, ws: MatrixWorkspace):
        with pytest.raises(NotFoundError):
            ws.criteria.delete_column("nope")

    def test_padded_name_finds_trimmed_column(self, ws: MatrixWorkspace):
        ws.criteria.add_column(" Speed ")
        assert ws.criteria.delete_column(" Speed ").name == "Speed"
        assert ws.criteria.list_columns() == []


class TestFormulaRegistry:
    def test_two_rows_present_and_independently_deletable(self, ws: MatrixWorkspace):
        ws.formulas.add_row("n1")
        ws.formulas.add_row("n2")
        assert [r.name for r in ws.formulas.list_rows()] == ["n1", "n2"]

        ws.formulas.delete_row("n1")
        assert [r.name for r in ws.formulas.list_rows()] == ["n2"]
        ws.formulas.delete_row("n2")
        assert ws.formulas.list_rows() == []

    def test_add_row_twice_is_duplicate(self, ws: MatrixWorkspace):
        ws.formulas.add_row("n")
        with pytest.raises(DuplicateNameError):
            ws.formulas.add_row("n")

    def test_add_row_fills_existing_columns(self, ws: MatrixWorkspace):
        ws.criteria.add_column("C1")
        ws.criteria.add_column("C2")
        row = ws.formulas.add_row("A", annotation="note")
        assert row.annotation == "note"
        assert {c.value for c in ws.matrix.cells_for_row(row.id)} == {0}
        assert len(ws.matrix.cells_for_row(row.id)) == 2

    def test_add_row_rejects_non_text_annotation(self, ws: MatrixWorkspace):
        with pytest.raises(InvalidInputError):
            ws.formulas.add_row("A", annotation=12)

    def test_spell_derived_on_create(self, ws: MatrixWorkspace):
        assert ws.formulas.add_row("火焰").spell == "HuoYan"

    def test_spell_failure_still_creates_row(self, ws: MatrixWorkspace, monkeypatch):
        def _boom(*args, **kwargs):
            raise RuntimeError("dictionary unavailable")

        monkeypatch.setattr(spell_module, "lazy_pinyin", _boom)
        row = ws.formulas.add_row("火")
        assert row.spell == ""
        assert ws.formulas.get("火") is not None

    def test_rename_recomputes_spell_like_creation(self, ws: MatrixWorkspace):
        ws.formulas.add_row("old")
        renamed = ws.formulas.rename_row("old", "火焰")
        created = ws.formulas.add_row("水")
        assert renamed.spell == "HuoYan"
        assert ws.formulas.get("火焰").spell == "HuoYan"
        assert created.spell == "Shui"

    def test_rename_keeps_id_and_cells(self, ws: MatrixWorkspace):
        ws.criteria.add_column("C")
        row = ws.formulas.add_row("A")
        ws.matrix.set_cell("A", "C", 4)

        renamed = ws.formulas.rename_row("A", "B")
        assert renamed.id == row.id
        assert _cell(ws, "B", "C") == 4
        assert ws.formulas.get("A") is None

    def test_rename_missing_row(self, ws: MatrixWorkspace):
        with pytest.raises(NotFoundError):
            ws.formulas.rename_row("nope", "x")

    def test_rename_to_empty(self, ws: MatrixWorkspace):
        ws.formulas.add_row("A")
        with pytest.raises(InvalidInputError) as exc:
            ws.formulas.rename_row("A", "  ")
        assert exc.value.context.field == "new_name"

    def test_rename_to_existing_name(self, ws: MatrixWorkspace):
        ws.formulas.add_row("A")
        ws.formulas.add_row("B")
        with pytest.raises(DuplicateNameError):
            ws.formulas.rename_row("A", "B")

    def test_rename_to_same_name(self, ws: MatrixWorkspace):
        ws.formulas.add_row("A")
        assert ws.formulas.rename_row("A", "A").name == "A"

    def test_update_annotation(self, ws: MatrixWorkspace):
        ws.formulas.add_row("A", annotation="first")
        ws.formulas.update_annotation("A", "")
        assert ws.formulas.get("A").annotation == ""

    def test_update_annotation_missing_row(self, ws: MatrixWorkspace):
        with pytest.raises(NotFoundError):
            ws.formulas.update_annotation("nope", "x")

    def test_padded_name_finds_trimmed_row(self, ws: MatrixWorkspace):
        ws.formulas.add_row(" A ")
        assert ws.formulas.rename_row(" A ", "B").name == "B"
        assert ws.formulas.delete_row(" B ").name == "B"
        assert ws.formulas.list_rows() == []

    def test_delete_row_cascades_to_cells(self, ws: MatrixWorkspace):
        ws.criteria.add_column("C1")
        ws.criteria.add_column("C2")
        ws.formulas.add_row("R")
        ws.formulas.add_row("Other")
        assert ws.matrix.count_cells() == 4

        ws.formulas.delete_row("R")
        assert ws.matrix.count_cells() == 2
        with pytest.raises(NotFoundError):
            ws.matrix.set_cell("R", "C1", 1)

    def test_list_rows_attaches_cells(self, ws: MatrixWorkspace):
        ws.criteria.add_column("C")
        ws.formulas.add_row("A")
        (row,) = ws.formulas.list_rows()
        assert len(row.cells) == 1


class TestAttributeMatrix:
    def test_densification(self, ws: MatrixWorkspace):
        ws.formulas.add_row("A")
        ws.criteria.add_column("C")
        assert _cell(ws, "A", "C") == 0

        ws.formulas.add_row("B")
        view = ws.matrix.render_table()
        assert view.columns == ["C"]
        assert [(r.name, r.attributes) for r in view.rows] == [("A", {"C": 0}), ("B", {"C": 0})]

    def test_idempotent_cell_write(self, ws: MatrixWorkspace):
        ws.formulas.add_row("A")
        ws.criteria.add_column("C")
        ws.matrix.set_cell("A", "C", 5)
        ws.matrix.set_cell("A", "C", 5)
        assert ws.matrix.count_cells() == 1
        assert _cell(ws, "A", "C") == 5

    def test_set_cell_self_heals_missing_cell(self, ws: MatrixWorkspace):
        ws.formulas.add_row("A")
        column = ws.criteria.add_column("C")
        row = ws.formulas.get("A")
        ws.matrix.delete_column_cells(column.id)

        write = ws.matrix.set_cell("A", "C", -3)
        assert write.created is True
        assert ws.matrix.get_cell(row.id, column.id) == -3

    def test_set_cell_overwrites(self, ws: MatrixWorkspace):
        ws.formulas.add_row("A")
        ws.criteria.add_column("C")
        assert ws.matrix.set_cell("A", "C", 1).created is False

    def test_set_cell_trims_names(self, ws: MatrixWorkspace):
        ws.formulas.add_row(" A ")
        ws.criteria.add_column("C")
        write = ws.matrix.set_cell(" A", "C ", 4)
        assert (write.row, write.column) == ("A", "C")
        assert _cell(ws, "A", "C") == 4

    @pytest.mark.parametrize(("row", "column"), [("nope", "C"), ("A", "nope")])
    def test_set_cell_unresolved_names(self, ws: MatrixWorkspace, row, column):
        ws.formulas.add_row("A")
        ws.criteria.add_column("C")
        with pytest.raises(NotFoundError):
            ws.matrix.set_cell(row, column, 1)

    def test_set_cell_rejects_non_integer(self, ws: MatrixWorkspace):
        ws.formulas.add_row("A")
        ws.criteria.add_column("C")
        with pytest.raises(InvalidInputError):
            ws.matrix.set_cell("A", "C", "lots")

    def test_missing_cell_reads_as_zero(self, ws: MatrixWorkspace):
        ws.formulas.add_row("A")
        column = ws.criteria.add_column("C")
        ws.matrix.delete_column_cells(column.id)
        assert ws.matrix.render_table().rows[0].attributes == {"C": 0}
        assert ws.matrix.get_cell(ws.formulas.get("A").id, column.id) == 0

    def test_render_empty_table(self, ws: MatrixWorkspace):
        view = ws.matrix.render_table()
        assert view.columns == []
        assert view.rows == []


class TestNormalizeValue:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(None, 0), ("", 0), ("  ", 0), (0, 0), (7, 7), (-2, -2), ("12", 12), (" -4 ", -4), (3.0, 3)],
    )
    def test_accepted(self, raw, expected):
        assert normalize_value(raw) == expected

    @pytest.mark.parametrize("raw", [True, 1.5, "1.5", "abc", [1], {"v": 1}])
    def test_rejected(self, raw):
        with pytest.raises(InvalidInputError):
            normalize_value(raw)
