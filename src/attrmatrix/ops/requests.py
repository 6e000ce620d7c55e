"""
Typed request objects for operations.

Each dataclass represents the *input* contract for a single operation
function.  Requests carry transport-agnostic data only — no raw HTTP
bodies, no Typer params.  Field values are passed through as received;
the operations validate them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# ------------------------------------------------------------------ #
# Database operations
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class DatabaseInitRequest:
    """Request for :func:`attrmatrix.ops.database.initialize_database`."""

    drop_existing: bool = False


# ------------------------------------------------------------------ #
# Columns
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class AddColumnRequest:
    column_name: Any = None


@dataclass(frozen=True, slots=True)
class DeleteColumnRequest:
    column_name: Any = None


# ------------------------------------------------------------------ #
# Rows
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class AddRowRequest:
    """Request for :func:`attrmatrix.ops.rows.add_row`.

    Attributes:
        name: Row name; must be non-empty after trimming.
        annotation: Optional free text stored with the row.
    """

    name: Any = None
    annotation: Any = None


@dataclass(frozen=True, slots=True)
class RenameRowRequest:
    row_name: Any = None
    new_name: Any = None


@dataclass(frozen=True, slots=True)
class UpdateAnnotationRequest:
    row_name: Any = None
    annotation: Any = None


@dataclass(frozen=True, slots=True)
class DeleteRowRequest:
    row_name: Any = None


# ------------------------------------------------------------------ #
# Cells
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class SetCellRequest:
    """Request for :func:`attrmatrix.ops.cells.set_cell`.

    Cells are addressed by row and column *name*.  ``value`` may be an
    integer, an integer string, or empty (stored as ``0``).
    """

    row_name: Any = None
    column_name: Any = None
    value: Any = None


@dataclass(frozen=True, slots=True)
class GetCellRequest:
    row_name: Any = None
    column_name: Any = None


# ------------------------------------------------------------------ #
# Axis settings
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class AxisSettingRequest:
    """Request body shared by create and update.

    All five fields are required.  ``setting_id`` is only read by
    :func:`attrmatrix.ops.axis_settings.update_axis_setting`.
    """

    name: Any = None
    x_negative: Any = None
    x_positive: Any = None
    y_negative: Any = None
    y_positive: Any = None
    setting_id: int | None = None


@dataclass(frozen=True, slots=True)
class AxisSettingIdRequest:
    setting_id: int | None = None


# ------------------------------------------------------------------ #
# Transfer
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class ImportTableRequest:
    """Request for :func:`attrmatrix.ops.transfer.import_table`.

    ``data`` is the snapshot document, bare or wrapped in an export
    envelope.
    """

    data: Any = None
