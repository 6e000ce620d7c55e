"""
Domain entities and views for the attribute matrix.

Plain frozen dataclasses with no storage binding.  Repositories build them
from result rows; the ops layer hands them to transports, which convert
them with ``dataclasses.asdict`` or the ``to_dict`` helpers below.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

AXIS_ENDS: tuple[str, ...] = ("xNegative", "xPositive", "yNegative", "yPositive")


@dataclass(frozen=True, slots=True)
class Criterion:
    """A named column of the matrix."""

    id: int
    name: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name}


@dataclass(frozen=True, slots=True)
class Cell:
    """Integer value at one (row, column) intersection."""

    id: int
    formula_id: int
    criteria_id: int
    value: int = 0


@dataclass(frozen=True, slots=True)
class Formula:
    """A named row with a free-text annotation and a derived spell key."""

    id: int
    name: str
    annotation: str | None = None
    spell: str = ""
    cells: tuple[Cell, ...] = ()


@dataclass(frozen=True, slots=True)
class AxisSetting:
    """Stored binding of four criterion ids to the ends of two axes."""

    id: int
    name: str
    x_negative_id: int
    x_positive_id: int
    y_negative_id: int
    y_positive_id: int

    def criterion_ids(self) -> dict[str, int]:
        """Axis end → criterion id, in display order."""
        return {
            "xNegative": self.x_negative_id,
            "xPositive": self.x_positive_id,
            "yNegative": self.y_negative_id,
            "yPositive": self.y_positive_id,
        }


@dataclass(frozen=True, slots=True)
class AxisSettingView:
    """Axis setting with each end resolved to its current criterion.

    An end whose criterion has since been deleted resolves to ``None``.
    """

    id: int
    name: str
    axes: dict[str, Criterion | None]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "axes": {
                end: (c.to_dict() if c is not None else None)
                for end, c in self.axes.items()
            },
        }


@dataclass(frozen=True, slots=True)
class TableRow:
    """One row of the dense table view / snapshot."""

    name: str
    annotation: str | None
    attributes: dict[str, int]
    spell: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "annotation": self.annotation,
            "spell": self.spell,
            "attributes": dict(self.attributes),
        }


@dataclass(frozen=True, slots=True)
class TableView:
    """Dense table: ordered column names × ordered rows."""

    columns: list[str]
    rows: list[TableRow]

    def to_dict(self) -> dict[str, Any]:
        return {
            "columns": list(self.columns),
            "rows": [r.to_dict() for r in self.rows],
        }


@dataclass(frozen=True, slots=True)
class SnapshotRow:
    """Row as carried by an import/export document."""

    name: str
    annotation: str | None = None
    attributes: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "annotation": self.annotation,
            "attributes": dict(self.attributes),
        }


@dataclass(frozen=True, slots=True)
class TableSnapshot:
    """Transport document for bulk export/import."""

    columns: list[str]
    rows: list[SnapshotRow]

    def to_dict(self) -> dict[str, Any]:
        return {
            "columns": list(self.columns),
            "rows": [r.to_dict() for r in self.rows],
        }


@dataclass(frozen=True, slots=True)
class CellWrite:
    """Outcome of a single cell write."""

    row: str
    column: str
    value: int
    created: bool


@dataclass(slots=True)
class ImportSummary:
    """Counters collected during one import reconciliation pass."""

    columns_created: int = 0
    rows_created: int = 0
    rows_updated: int = 0
    cells_written: int = 0
    cells_skipped: int = 0


__all__ = [
    "AXIS_ENDS",
    "Criterion",
    "Cell",
    "Formula",
    "AxisSetting",
    "AxisSettingView",
    "TableRow",
    "TableView",
    "SnapshotRow",
    "TableSnapshot",
    "CellWrite",
    "ImportSummary",
]
