"""SQLAlchemy engine factory and request-scoped connections.

Manifesto:
    One engine per process, one connection (and so one transaction) per
    operation.  Timeouts live on the engine so every statement inherits the
    same ceiling: callers see an over-long statement as a transient
    failure, never as a hang.

This module provides:

* ``create_matrix_engine``  -- Create an engine from a URL with pool and
  timeout settings applied per dialect.
* ``engine_from_settings``  -- Same, driven by :class:`AttrMatrixSettings`.
* ``open_connection``       -- Context manager yielding a ``Connection``
  that is rolled back if the caller leaves without committing.

Tags:
    attrmatrix, sqlalchemy, engine, connection, timeouts

Doc-Types:
    api-reference
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import (
    DBAPIError,
    DisconnectionError,
    IntegrityError,
    OperationalError,
    SQLAlchemyError,
)
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.pool import StaticPool

from attrmatrix.core.errors import (
    DuplicateNameError,
    InternalFailureError,
    MatrixError,
    TransientStoreError,
)
from attrmatrix.core.settings import AttrMatrixSettings


def create_matrix_engine(
    url: str = "sqlite:///attrmatrix.db",
    *,
    echo: bool = False,
    pool_size: int | None = None,
    connect_timeout: int = 5,
    statement_timeout_ms: int | None = 1500,
    **kwargs: Any,
) -> Engine:
    """Create a SQLAlchemy engine with sane defaults.

    Parameters
    ----------
    url:
        Database URL (``sqlite:///…``, ``postgresql+psycopg://…``, etc.)
    echo:
        If ``True``, log all SQL.
    pool_size:
        Connection pool size (ignored for SQLite).
    connect_timeout:
        Seconds to wait for a new connection.
    statement_timeout_ms:
        Per-statement ceiling.  Applied as ``statement_timeout`` on
        PostgreSQL and as the busy timeout on SQLite.
    """
    if url.startswith("sqlite"):
        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        connect_args.setdefault("timeout", max(connect_timeout, (statement_timeout_ms or 0) / 1000))
        if ":memory:" in url or url in ("sqlite://", "sqlite:///"):
            # a single shared connection, or every checkout sees an empty db
            kwargs.setdefault("poolclass", StaticPool)

        engine = create_engine(url, echo=echo, connect_args=connect_args, **kwargs)

        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_connection: Any, _rec: Any) -> None:
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    connect_args = kwargs.pop("connect_args", {})
    if url.startswith("postgresql"):
        connect_args.setdefault("connect_timeout", connect_timeout)
        if statement_timeout_ms:
            connect_args.setdefault("options", f"-c statement_timeout={statement_timeout_ms}")

    pool_kwargs: dict[str, Any] = {"pool_pre_ping": True}
    if pool_size is not None:
        pool_kwargs["pool_size"] = pool_size

    return create_engine(url, echo=echo, connect_args=connect_args, **pool_kwargs, **kwargs)


def engine_from_settings(settings: AttrMatrixSettings) -> Engine:
    """Build the process engine from settings."""
    return create_matrix_engine(
        settings.database_url,
        echo=settings.database_echo,
        pool_size=settings.database_pool_size,
        connect_timeout=settings.connect_timeout_seconds,
        statement_timeout_ms=settings.statement_timeout_ms,
    )


@contextmanager
def open_connection(engine: Engine) -> Iterator[Connection]:
    """Yield a connection; uncommitted work is rolled back on exit."""
    with engine.connect() as conn:
        try:
            yield conn
        finally:
            if conn.in_transaction():
                conn.rollback()


# A unique hit on the cell index means two writers created the same cell;
# the retry finds the cell and updates it.
_CELL_INDEX_MARKERS = ("ix_attribute_formula_criteria", "attribute.formula_id")

_TRANSIENT_MARKERS = (
    "statement timeout",
    "canceling statement",
    "database is locked",
    "server closed the connection",
    "connection refused",
    "timeout expired",
)


def translate_db_error(exc: SQLAlchemyError) -> MatrixError:
    """Map a driver-level failure onto the core error taxonomy.

    * unique-constraint violations on a name (a concurrent writer won the
      race) → :class:`DuplicateNameError`
    * unique-constraint violations on the cell index → retryable
      :class:`TransientStoreError`
    * timeouts and dropped connections → :class:`TransientStoreError`
    * everything else → :class:`InternalFailureError`
    """
    text = str(getattr(exc, "orig", None) or exc).lower()

    if isinstance(exc, IntegrityError) and "unique" in text:
        if any(marker in text for marker in _CELL_INDEX_MARKERS):
            return TransientStoreError("Cell was written concurrently, retry", cause=exc)
        return DuplicateNameError("entity", "", message="Name already exists")

    if isinstance(exc, (PoolTimeoutError, DisconnectionError)) or (
        isinstance(exc, (OperationalError, DBAPIError))
        and (
            getattr(exc, "connection_invalidated", False)
            or any(marker in text for marker in _TRANSIENT_MARKERS)
        )
    ):
        return TransientStoreError("Database temporarily unavailable, retry later", cause=exc)

    return InternalFailureError("Internal failure", cause=exc)


__all__ = [
    "create_matrix_engine",
    "engine_from_settings",
    "open_connection",
    "translate_db_error",
]
