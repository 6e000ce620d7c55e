"""Explicit table definitions for the attribute matrix.

The storage layout is declared once here as SQLAlchemy Core ``Table``
objects on a single ``MetaData``.  Domain entities (see
:mod:`attrmatrix.core.models`) carry no storage binding; repositories map
rows to entities by hand.

Cascades are deliberately *not* declared at the store level (no
``ON DELETE CASCADE``): deleting a row or column removes its cells in an
explicit registry step inside the same transaction.

Tags:
    attrmatrix, schema, sqlalchemy, tables

Doc-Types:
    api-reference, data-model
"""

from __future__ import annotations

from sqlalchemy import (
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.engine import Connection, Engine

metadata = MetaData()

criteria_table = Table(
    "criteria",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String, nullable=False),
    Index("ix_criteria_name", "name", unique=True),
)

formula_table = Table(
    "formula",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String, nullable=False),
    Column("annotation", Text, nullable=True),
    Column("spell", String, nullable=False, server_default=""),
    Index("ix_formula_name", "name", unique=True),
)

attribute_table = Table(
    "attribute",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("formula_id", Integer, ForeignKey("formula.id"), nullable=False),
    Column("criteria_id", Integer, ForeignKey("criteria.id"), nullable=False),
    Column("value", Integer, nullable=False, server_default="0"),
    Index("ix_attribute_formula_criteria", "formula_id", "criteria_id", unique=True),
)

# Axis ends reference criteria without a store-level constraint: a
# criterion may be deleted while a setting still points at it.
axis_setting_table = Table(
    "axis_setting",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String, nullable=False),
    Column("x_negative_criteria_id", Integer, nullable=False),
    Column("x_positive_criteria_id", Integer, nullable=False),
    Column("y_negative_criteria_id", Integer, nullable=False),
    Column("y_positive_criteria_id", Integer, nullable=False),
    Index("ix_axis_setting_name", "name", unique=True),
)

TABLES: tuple[Table, ...] = (
    criteria_table,
    formula_table,
    attribute_table,
    axis_setting_table,
)


def create_schema(bind: Engine | Connection) -> list[str]:
    """Create any missing tables and return the names of all managed tables."""
    metadata.create_all(bind, checkfirst=True)
    return [t.name for t in TABLES]


def drop_schema(bind: Engine | Connection) -> None:
    """Drop every managed table (tests and ``db reset`` only)."""
    metadata.drop_all(bind, checkfirst=True)


__all__ = [
    "metadata",
    "criteria_table",
    "formula_table",
    "attribute_table",
    "axis_setting_table",
    "TABLES",
    "create_schema",
    "drop_schema",
]
