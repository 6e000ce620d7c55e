"""Criteria registry — the column definitions of the matrix."""

from __future__ import annotations

from typing import Any

from sqlalchemy import delete, select

from attrmatrix.core.errors import DuplicateNameError, NotFoundError
from attrmatrix.core.logging import get_logger
from attrmatrix.core.matrix import AttributeMatrix
from attrmatrix.core.models import Criterion
from attrmatrix.core.repository import BaseRepository, lookup_name, require_name
from attrmatrix.core.schema import criteria_table

logger = get_logger(__name__)


class CriteriaRegistry(BaseRepository):
    """Adds, deletes and lists criteria, keeping the matrix dense.

    Adding a column auto-fills a ``0`` cell for every existing row;
    deleting one removes its cells first.  Both steps run on the caller's
    connection so they commit or roll back with the criterion itself.
    """

    def __init__(self, conn: Any, matrix: AttributeMatrix | None = None) -> None:
        super().__init__(conn)
        self.matrix = matrix or AttributeMatrix(conn)

    def get(self, name: Any) -> Criterion | None:
        key = lookup_name(name)
        if key is None:
            return None
        row = self.query_one(select(criteria_table).where(criteria_table.c.name == key))
        return Criterion(id=row["id"], name=row["name"]) if row else None

    def get_by_id(self, criterion_id: int) -> Criterion | None:
        row = self.query_one(select(criteria_table).where(criteria_table.c.id == criterion_id))
        return Criterion(id=row["id"], name=row["name"]) if row else None

    def require(self, name: Any) -> Criterion:
        criterion = self.get(name)
        if criterion is None:
            raise NotFoundError("column", name)
        return criterion

    def list_columns(self) -> list[Criterion]:
        """Criteria in creation order (the column display order)."""
        rows = self.query(select(criteria_table).order_by(criteria_table.c.id))
        return [Criterion(id=r["id"], name=r["name"]) for r in rows]

    def add_column(self, name: Any) -> Criterion:
        """Create a criterion and a ``0`` cell for it in every existing row.

        Raises:
            InvalidInputError: *name* is empty.
            DuplicateNameError: A criterion named *name* exists.
        """
        name = require_name(name, "column_name")
        if self.get(name) is not None:
            raise DuplicateNameError("column", name)

        column_id = self.insert(criteria_table, {"name": name})
        filled = self.matrix.fill_column(column_id)
        logger.info("column_added", name=name, id=column_id, cells_created=filled)
        return Criterion(id=column_id, name=name)

    def delete_column(self, name: Any) -> Criterion:
        """Delete every cell of the column, then the criterion.

        Raises:
            NotFoundError: No criterion named *name*.
        """
        criterion = self.require(name)
        removed = self.matrix.delete_column_cells(criterion.id)
        self.execute(delete(criteria_table).where(criteria_table.c.id == criterion.id))
        logger.info("column_deleted", name=criterion.name, id=criterion.id, cells_deleted=removed)
        return criterion


__all__ = ["CriteriaRegistry"]
