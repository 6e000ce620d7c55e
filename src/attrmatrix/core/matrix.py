"""
Attribute matrix — the grid of integer cells keyed by (row, column).

The matrix is stored as individual ``attribute`` rows but is *logically
dense*: every formula has one cell for every criterion.  Density is kept
by the registries (auto-fill on create, cascade on delete) and repaired
on demand:

- readers treat a missing cell as ``0`` (read-time densification)
- :meth:`AttributeMatrix.set_cell` creates a missing cell instead of
  failing (write-time self-healing)

Architecture:
    ::

        CriteriaRegistry ──fill_column / delete_column_cells──┐
                                                               ▼
        FormulaRegistry  ──fill_row / delete_row_cells──► AttributeMatrix
                                                               ▲
        TableTransfer    ──upsert──────────────────────────────┘

Examples:
    >>> matrix = AttributeMatrix(conn)
    >>> matrix.set_cell("Ammonia", "Toxicity", 3)
    CellWrite(row='Ammonia', column='Toxicity', value=3, created=False)
    >>> matrix.render_table().rows[0].attributes
    {'Toxicity': 3, 'Cost': 0}

Tags:
    attrmatrix, matrix, cells, density
"""

from __future__ import annotations

import re
from typing import Any

from sqlalchemy import delete, func, select, update

from attrmatrix.core.errors import InvalidInputError, NotFoundError
from attrmatrix.core.logging import get_logger
from attrmatrix.core.models import Cell, CellWrite, TableRow, TableView
from attrmatrix.core.repository import BaseRepository, lookup_name
from attrmatrix.core.schema import attribute_table, criteria_table, formula_table

logger = get_logger(__name__)

_INT_PATTERN = re.compile(r"^[+-]?\d+$")


def normalize_value(value: Any) -> int:
    """Coerce a submitted cell value to ``int``.

    ``None`` and empty strings become ``0``.  Integers, integral floats
    and integer strings are accepted; anything else is rejected.
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        raise InvalidInputError("Cell value must be an integer", field="value")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        if _INT_PATTERN.match(text):
            return int(text)
    raise InvalidInputError(f"Cell value must be an integer, got {value!r}", field="value")


class AttributeMatrix(BaseRepository):
    """Cell-level reads and writes over the ``attribute`` table."""

    # -- Reads -------------------------------------------------------------

    def find_cell(self, row_id: int, column_id: int) -> Cell | None:
        row = self.query_one(
            select(attribute_table).where(
                attribute_table.c.formula_id == row_id,
                attribute_table.c.criteria_id == column_id,
            )
        )
        return _cell(row) if row is not None else None

    def get_cell(self, row_id: int, column_id: int) -> int:
        """Stored value, or ``0`` when the cell is missing."""
        cell = self.find_cell(row_id, column_id)
        return cell.value if cell is not None else 0

    def cells_for_row(self, row_id: int) -> list[Cell]:
        rows = self.query(
            select(attribute_table)
            .where(attribute_table.c.formula_id == row_id)
            .order_by(attribute_table.c.criteria_id)
        )
        return [_cell(r) for r in rows]

    def all_cells(self) -> list[Cell]:
        rows = self.query(select(attribute_table).order_by(attribute_table.c.id))
        return [_cell(r) for r in rows]

    def count_cells(self) -> int:
        return self.conn.execute(
            select(func.count()).select_from(attribute_table)
        ).scalar_one()

    # -- Writes ------------------------------------------------------------

    def upsert(self, row_id: int, column_id: int, value: int) -> bool:
        """Write *value* at (row, column).  Returns ``True`` if a cell was created."""
        existing = self.find_cell(row_id, column_id)
        if existing is not None:
            self.execute(
                update(attribute_table)
                .where(attribute_table.c.id == existing.id)
                .values(value=value)
            )
            return False
        self.insert(
            attribute_table,
            {"formula_id": row_id, "criteria_id": column_id, "value": value},
        )
        return True

    def set_cell(self, row_name: str, column_name: str, value: Any) -> CellWrite:
        """Write a cell addressed by row and column *names*.

        Raises:
            NotFoundError: Either name does not resolve.
            InvalidInputError: *value* is not an integer.
        """
        normalized = normalize_value(value)
        row_id, row = self._resolve(formula_table, row_name, "row")
        column_id, column = self._resolve(criteria_table, column_name, "column")
        created = self.upsert(row_id, column_id, normalized)
        if created:
            logger.info("cell_self_healed", row=row, column=column)
        return CellWrite(row=row, column=column, value=normalized, created=created)

    def fill_row(self, row_id: int) -> int:
        """Create a ``0`` cell for every column *row_id* lacks."""
        present = set(
            self.conn.execute(
                select(attribute_table.c.criteria_id).where(
                    attribute_table.c.formula_id == row_id
                )
            ).scalars()
        )
        column_ids = self.conn.execute(
            select(criteria_table.c.id).order_by(criteria_table.c.id)
        ).scalars()
        return self.insert_many(
            attribute_table,
            [
                {"formula_id": row_id, "criteria_id": cid, "value": 0}
                for cid in column_ids
                if cid not in present
            ],
        )

    def fill_column(self, column_id: int) -> int:
        """Create a ``0`` cell for every row lacking one in *column_id*."""
        present = set(
            self.conn.execute(
                select(attribute_table.c.formula_id).where(
                    attribute_table.c.criteria_id == column_id
                )
            ).scalars()
        )
        row_ids = self.conn.execute(
            select(formula_table.c.id).order_by(formula_table.c.id)
        ).scalars()
        return self.insert_many(
            attribute_table,
            [
                {"formula_id": rid, "criteria_id": column_id, "value": 0}
                for rid in row_ids
                if rid not in present
            ],
        )

    def delete_row_cells(self, row_id: int) -> int:
        result = self.execute(
            delete(attribute_table).where(attribute_table.c.formula_id == row_id)
        )
        return result.rowcount

    def delete_column_cells(self, column_id: int) -> int:
        result = self.execute(
            delete(attribute_table).where(attribute_table.c.criteria_id == column_id)
        )
        return result.rowcount

    # -- Views -------------------------------------------------------------

    def render_table(self) -> TableView:
        """Dense view of the whole table in creation order."""
        columns = self.query(select(criteria_table).order_by(criteria_table.c.id))
        rows = self.query(select(formula_table).order_by(formula_table.c.id))
        values = {
            (c.formula_id, c.criteria_id): c.value for c in self.all_cells()
        }
        return TableView(
            columns=[c["name"] for c in columns],
            rows=[
                TableRow(
                    name=r["name"],
                    annotation=r["annotation"],
                    spell=r["spell"] or "",
                    attributes={
                        c["name"]: values.get((r["id"], c["id"]), 0) for c in columns
                    },
                )
                for r in rows
            ],
        )

    # -- Internal ----------------------------------------------------------

    def _resolve(self, table: Any, name: Any, entity: str) -> tuple[int, str]:
        key = lookup_name(name)
        if key is None:
            raise NotFoundError(entity, name)
        found = self.conn.execute(
            select(table.c.id).where(table.c.name == key)
        ).scalar_one_or_none()
        if found is None:
            raise NotFoundError(entity, name)
        return int(found), key


def _cell(row: dict[str, Any]) -> Cell:
    return Cell(
        id=row["id"],
        formula_id=row["formula_id"],
        criteria_id=row["criteria_id"],
        value=row["value"],
    )


__all__ = ["AttributeMatrix", "normalize_value"]
