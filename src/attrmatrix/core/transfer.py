"""
Import/export coordinator — bulk transport of the whole table.

Export takes a dense snapshot and wraps it with a format version and a
generation timestamp.  Import reconciles a snapshot against the current
rows and columns in a single pass:

    ┌───────────────┐    ┌──────────────────────┐    ┌──────────────────┐
    │ a. columns    │ ─► │ b. rows              │ ─► │ c. cells         │
    │ create missing│    │ update annotation or │    │ upsert by column │
    │ (+ auto-fill) │    │ create (+ auto-fill) │    │ name; skip       │
    └───────────────┘    └──────────────────────┘    │ unresolvable     │
                                                     └──────────────────┘

Columns are reconciled in full before any row, so every row created in
step b is auto-filled against the complete column set.  The pass itself
does not commit: the caller runs it inside one transaction and rolls back
on any fault.

Document shape::

    {
      "data": {
        "columns": ["Cost", "Toxicity"],
        "rows": [
          {"name": "Ammonia", "annotation": "", "attributes": {"Cost": 2}}
        ]
      },
      "timestamp": "2026-10-18T09:30:00.000000+00:00",
      "version": "1.0"
    }

Tags:
    attrmatrix, import, export, reconciliation
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from attrmatrix.core.criteria import CriteriaRegistry
from attrmatrix.core.errors import InvalidInputError
from attrmatrix.core.formulas import FormulaRegistry
from attrmatrix.core.logging import get_logger
from attrmatrix.core.matrix import AttributeMatrix, normalize_value
from attrmatrix.core.models import ImportSummary, SnapshotRow, TableSnapshot

logger = get_logger(__name__)

FORMAT_VERSION = "1.0"


def parse_snapshot(document: Any) -> TableSnapshot:
    """Validate a snapshot document without touching the store.

    Accepts the bare snapshot (``{"columns", "rows"}``) or an export
    envelope (``{"data": {...}}``).

    Raises:
        InvalidInputError: ``columns`` or ``rows`` is missing or malformed.
    """
    if isinstance(document, Mapping) and "data" in document and "columns" not in document:
        document = document["data"]
    if not isinstance(document, Mapping):
        raise InvalidInputError("Invalid data format", field="data")

    columns = document.get("columns")
    rows = document.get("rows")
    if not isinstance(columns, list) or not isinstance(rows, list):
        raise InvalidInputError("Invalid data format: columns and rows are required", field="data")

    column_names: list[str] = []
    for name in columns:
        if not isinstance(name, str) or not name.strip():
            raise InvalidInputError(f"Invalid column name: {name!r}", field="columns")
        if name.strip() not in column_names:
            column_names.append(name.strip())

    parsed: list[SnapshotRow] = []
    for index, row in enumerate(rows):
        if not isinstance(row, Mapping):
            raise InvalidInputError(f"Row {index} is not an object", field="rows")
        name = row.get("name")
        if not isinstance(name, str) or not name.strip():
            raise InvalidInputError(f"Row {index} has no name", field="rows")
        attributes = row.get("attributes") or {}
        if not isinstance(attributes, Mapping):
            raise InvalidInputError(f"Row {name!r} attributes must be an object", field="rows")
        annotation = row.get("annotation")
        if annotation is not None and not isinstance(annotation, str):
            raise InvalidInputError(f"Row {name!r} annotation must be text", field="rows")
        parsed.append(
            SnapshotRow(
                name=name.strip(),
                annotation=annotation,
                attributes={str(k).strip(): normalize_value(v) for k, v in attributes.items()},
            )
        )

    return TableSnapshot(columns=column_names, rows=parsed)


class TableTransfer:
    """Export/import over one connection."""

    def __init__(
        self,
        criteria: CriteriaRegistry,
        formulas: FormulaRegistry,
        matrix: AttributeMatrix,
    ) -> None:
        self.criteria = criteria
        self.formulas = formulas
        self.matrix = matrix

    def snapshot(self) -> TableSnapshot:
        view = self.matrix.render_table()
        return TableSnapshot(
            columns=view.columns,
            rows=[
                SnapshotRow(name=r.name, annotation=r.annotation, attributes=r.attributes)
                for r in view.rows
            ],
        )

    def export(self, *, now: datetime | None = None) -> dict[str, Any]:
        """Snapshot wrapped with timestamp and format version."""
        snapshot = self.snapshot()
        logger.info("table_exported", columns=len(snapshot.columns), rows=len(snapshot.rows))
        return {
            "data": snapshot.to_dict(),
            "timestamp": (now or datetime.now(UTC)).isoformat(),
            "version": FORMAT_VERSION,
        }

    def import_snapshot(self, snapshot: TableSnapshot) -> ImportSummary:
        """Reconcile *snapshot* into the table.  Does not commit."""
        summary = ImportSummary()

        # a. columns, in full, before any row
        columns = {c.name: c for c in self.criteria.list_columns()}
        for name in snapshot.columns:
            if name not in columns:
                columns[name] = self.criteria.add_column(name)
                summary.columns_created += 1

        # b. rows
        for row in snapshot.rows:
            formula = self.formulas.get(row.name)
            if formula is None:
                formula = self.formulas.add_row(row.name, annotation=row.annotation or "")
                summary.rows_created += 1
            elif row.annotation:
                self.formulas.update_annotation(row.name, row.annotation)
                summary.rows_updated += 1

            # c. cells
            for column_name, value in row.attributes.items():
                column = columns.get(column_name)
                if column is None:
                    summary.cells_skipped += 1
                    continue
                self.matrix.upsert(formula.id, column.id, value)
                summary.cells_written += 1

        logger.info(
            "import_reconciled",
            columns_created=summary.columns_created,
            rows_created=summary.rows_created,
            rows_updated=summary.rows_updated,
            cells_written=summary.cells_written,
            cells_skipped=summary.cells_skipped,
        )
        return summary


__all__ = ["FORMAT_VERSION", "TableTransfer", "parse_snapshot"]
