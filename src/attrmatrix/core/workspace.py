"""Explicit handle bundling the matrix components over one connection.

Nothing in the core reaches for a global session: every operation builds
a :class:`MatrixWorkspace` from the connection it was handed, so tests can
run any number of isolated tables side by side.
"""

from __future__ import annotations

from sqlalchemy.engine import Connection

from attrmatrix.core.axis_settings import AxisSettingRegistry
from attrmatrix.core.criteria import CriteriaRegistry
from attrmatrix.core.formulas import FormulaRegistry
from attrmatrix.core.matrix import AttributeMatrix
from attrmatrix.core.transfer import TableTransfer


class MatrixWorkspace:
    """Criteria, formulas, cells, axis settings and transfer on one connection."""

    def __init__(self, conn: Connection) -> None:
        self.conn = conn
        self.matrix = AttributeMatrix(conn)
        self.criteria = CriteriaRegistry(conn, self.matrix)
        self.formulas = FormulaRegistry(conn, self.matrix)
        self.axis_settings = AxisSettingRegistry(conn, self.criteria)
        self.transfer = TableTransfer(self.criteria, self.formulas, self.matrix)


__all__ = ["MatrixWorkspace"]
