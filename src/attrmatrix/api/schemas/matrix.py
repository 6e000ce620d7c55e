"""
Request bodies and response payloads for the matrix endpoints.

Request fields are typed ``Any``; the operations layer owns validation,
so an empty or mistyped field yields the same ``INVALID_INPUT`` problem
whatever the transport.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# ── Requests ─────────────────────────────────────────────────────────────


class LoginBody(BaseModel):
    password: str = ""


class ColumnBody(BaseModel):
    column_name: Any = None


class RowBody(BaseModel):
    name: Any = None
    annotation: Any = None


class RenameRowBody(BaseModel):
    new_name: Any = None


class CellBody(BaseModel):
    """``row_id`` carries the row *name*."""

    row_id: Any = None
    column_name: Any = None
    value: Any = None


class AnnotationBody(BaseModel):
    row_id: Any = None
    annotation: Any = None


class AxisSettingBody(BaseModel):
    """Four column names bound to the ends of the x and y axes."""

    model_config = ConfigDict(populate_by_name=True)

    name: Any = None
    x_negative: Any = Field(default=None, alias="xNegative")
    x_positive: Any = Field(default=None, alias="xPositive")
    y_negative: Any = Field(default=None, alias="yNegative")
    y_positive: Any = Field(default=None, alias="yPositive")


class ImportBody(BaseModel):
    data: Any = None


# ── Responses ────────────────────────────────────────────────────────────


class TokenSchema(BaseModel):
    token: str
    username: str
    token_type: str = "bearer"


class SessionSchema(BaseModel):
    authenticated: bool
    username: str | None = None


class CriterionSchema(BaseModel):
    id: int
    name: str


class FormulaSchema(BaseModel):
    id: int
    name: str
    annotation: str | None = None
    spell: str = ""


class TableRowSchema(BaseModel):
    name: str
    annotation: str | None = None
    spell: str = ""
    attributes: dict[str, int] = Field(default_factory=dict)


class TableSchema(BaseModel):
    columns: list[str] = Field(default_factory=list)
    rows: list[TableRowSchema] = Field(default_factory=list)


class CellWriteSchema(BaseModel):
    row: str
    column: str
    value: int
    created: bool = Field(description="True when the cell did not exist and was created")


class AxisSettingSchema(BaseModel):
    """Axis setting with each end resolved; a deleted column reads as ``null``."""

    id: int
    name: str
    axes: dict[str, CriterionSchema | None]


class ImportSummarySchema(BaseModel):
    columns_created: int = 0
    rows_created: int = 0
    rows_updated: int = 0
    cells_written: int = 0
    cells_skipped: int = 0
