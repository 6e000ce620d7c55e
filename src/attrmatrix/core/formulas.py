"""
Formula registry — the row definitions of the matrix.

Rows are identified by name at the API boundary and by id everywhere
else: cells key on ``formula_id``, so renaming a row never touches its
cells.  The derived ``spell`` key is recomputed at exactly two points,
:meth:`FormulaRegistry.add_row` and :meth:`FormulaRegistry.rename_row`;
annotation edits leave it alone.

Tags:
    attrmatrix, registry, rows, spell
"""

from __future__ import annotations

from collections import defaultdict
from typing import Any

from sqlalchemy import delete, select, update

from attrmatrix.core.errors import DuplicateNameError, InvalidInputError, NotFoundError
from attrmatrix.core.logging import get_logger
from attrmatrix.core.matrix import AttributeMatrix
from attrmatrix.core.models import Cell, Formula
from attrmatrix.core.repository import BaseRepository, lookup_name, require_name
from attrmatrix.core.schema import formula_table
from attrmatrix.core.spell import derive_spell

logger = get_logger(__name__)


class FormulaRegistry(BaseRepository):
    """Adds, renames, annotates, deletes and lists rows."""

    def __init__(self, conn: Any, matrix: AttributeMatrix | None = None) -> None:
        super().__init__(conn)
        self.matrix = matrix or AttributeMatrix(conn)

    # -- Lookups -----------------------------------------------------------

    def get(self, name: Any) -> Formula | None:
        key = lookup_name(name)
        if key is None:
            return None
        row = self.query_one(select(formula_table).where(formula_table.c.name == key))
        return _formula(row) if row else None

    def require(self, name: Any) -> Formula:
        formula = self.get(name)
        if formula is None:
            raise NotFoundError("row", name)
        return formula

    def list_rows(self) -> list[Formula]:
        """Rows in creation order, each with its attached cells."""
        rows = self.query(select(formula_table).order_by(formula_table.c.id))
        cells: dict[int, list[Cell]] = defaultdict(list)
        for cell in self.matrix.all_cells():
            cells[cell.formula_id].append(cell)
        return [_formula(r, tuple(cells.get(r["id"], ()))) for r in rows]

    # -- Mutations ---------------------------------------------------------

    def add_row(self, name: Any, annotation: str | None = None) -> Formula:
        """Create a row (with its spell key) and a ``0`` cell per column.

        Raises:
            InvalidInputError: *name* is empty.
            DuplicateNameError: A row named *name* exists.
        """
        name = require_name(name, "name")
        if annotation is not None and not isinstance(annotation, str):
            raise InvalidInputError("annotation must be text", field="annotation")
        if self.get(name) is not None:
            raise DuplicateNameError("row", name)

        spell = derive_spell(name)
        row_id = self.insert(
            formula_table,
            {"name": name, "annotation": annotation, "spell": spell},
        )
        filled = self.matrix.fill_row(row_id)
        logger.info("row_added", name=name, id=row_id, cells_created=filled)
        return Formula(id=row_id, name=name, annotation=annotation, spell=spell)

    def rename_row(self, old_name: Any, new_name: Any) -> Formula:
        """Rename a row and recompute its spell key.

        Raises:
            NotFoundError: No row named *old_name*.
            InvalidInputError: *new_name* is empty.
            DuplicateNameError: *new_name* belongs to another row.
        """
        formula = self.require(old_name)
        new_name = require_name(new_name, "new_name")
        if new_name != formula.name:
            other = self.get(new_name)
            if other is not None and other.id != formula.id:
                raise DuplicateNameError("row", new_name)

        spell = derive_spell(new_name)
        self.execute(
            update(formula_table)
            .where(formula_table.c.id == formula.id)
            .values(name=new_name, spell=spell)
        )
        logger.info("row_renamed", old_name=formula.name, new_name=new_name, id=formula.id)
        return Formula(id=formula.id, name=new_name, annotation=formula.annotation, spell=spell)

    def update_annotation(self, name: Any, annotation: str | None) -> Formula:
        """Overwrite a row's annotation (empty is allowed)."""
        formula = self.require(name)
        if annotation is not None and not isinstance(annotation, str):
            raise InvalidInputError("annotation must be text", field="annotation")
        self.execute(
            update(formula_table)
            .where(formula_table.c.id == formula.id)
            .values(annotation=annotation)
        )
        return Formula(id=formula.id, name=formula.name, annotation=annotation, spell=formula.spell)

    def delete_row(self, name: Any) -> Formula:
        """Delete every cell of the row, then the row."""
        formula = self.require(name)
        removed = self.matrix.delete_row_cells(formula.id)
        self.execute(delete(formula_table).where(formula_table.c.id == formula.id))
        logger.info("row_deleted", name=formula.name, id=formula.id, cells_deleted=removed)
        return formula


def _formula(row: dict[str, Any], cells: tuple[Cell, ...] = ()) -> Formula:
    return Formula(
        id=row["id"],
        name=row["name"],
        annotation=row["annotation"],
        spell=row["spell"] or "",
        cells=cells,
    )


__all__ = ["FormulaRegistry"]
