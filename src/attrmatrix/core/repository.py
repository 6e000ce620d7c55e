"""Base repository over a SQLAlchemy Core connection.

Provides :class:`BaseRepository` — a thin base class holding the
request-scoped :class:`~sqlalchemy.engine.Connection` so that the
registries can build statements from the explicit tables in
:mod:`attrmatrix.core.schema` without knowing which database sits behind
the engine.

Architecture::

    ┌────────────────────────────────────────────────────────────────┐
    │                       BaseRepository                           │
    │                                                                │
    │   conn: Connection         ← one per operation / transaction   │
    │                                                                │
    │   execute(stmt)            → CursorResult                      │
    │   query(stmt)              → list[dict]                        │
    │   query_one(stmt)          → dict | None                       │
    │   insert(table, data)      → new primary key                   │
    └────────────────────────────────────────────────────────────────┘

Repositories never commit.  The operation that owns the connection decides
whether the whole unit of work is committed or rolled back.

Tags:
    repository, database, sqlalchemy-core
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import Table
from sqlalchemy.engine import Connection, CursorResult
from sqlalchemy.sql import Executable

from attrmatrix.core.errors import InvalidInputError


class BaseRepository:
    """Connection-holding base class for data-access repositories.

    Parameters:
        conn: An open SQLAlchemy ``Connection``.  Its transaction is owned
              by the caller.
    """

    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    # -- Query helpers -----------------------------------------------------

    def execute(self, stmt: Executable, params: Any = None) -> CursorResult:
        """Execute a statement and return the raw result."""
        if params is None:
            return self.conn.execute(stmt)
        return self.conn.execute(stmt, params)

    def query(self, stmt: Executable) -> list[dict[str, Any]]:
        """Execute a SELECT and return rows as dicts."""
        return [dict(row) for row in self.conn.execute(stmt).mappings()]

    def query_one(self, stmt: Executable) -> dict[str, Any] | None:
        """Execute a SELECT and return the first row as a dict (or None)."""
        row = self.conn.execute(stmt).mappings().first()
        return dict(row) if row is not None else None

    # -- Insert helpers ----------------------------------------------------

    def insert(self, table: Table, data: dict[str, Any]) -> int:
        """Insert a single row and return its generated primary key."""
        result = self.conn.execute(table.insert().values(**data))
        return int(result.inserted_primary_key[0])

    def insert_many(self, table: Table, rows: list[dict[str, Any]]) -> int:
        """Insert multiple rows.  Returns the number of rows inserted."""
        if not rows:
            return 0
        self.conn.execute(table.insert(), rows)
        return len(rows)


def require_name(value: Any, field: str) -> str:
    """Return *value* stripped, or raise :class:`InvalidInputError` if empty."""
    if value is None or not isinstance(value, str) or not value.strip():
        raise InvalidInputError(f"{field} is required", field=field)
    return value.strip()


def lookup_name(value: Any) -> str | None:
    """Normalise a name used as a lookup key the way names are stored.

    Returns ``None`` for anything that cannot name a stored entity.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip()


__all__ = [
    "BaseRepository",
    "lookup_name",
    "require_name",
]
