"""
FastAPI dependency injection — shared singletons and per-request factories.

Usage in routers::

    from attrmatrix.api.deps import OpContext, Settings

    @router.get("/table")
    def get_table(ctx: OpContext):
        ...

The engine is created once by the app factory and kept on
``app.state``; every request gets its own connection, and so its own
transaction, which the operation commits or rolls back.
"""

from __future__ import annotations

import uuid
from collections.abc import Generator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.engine import Connection, Engine

from attrmatrix.core.database import open_connection
from attrmatrix.core.settings import AttrMatrixSettings, get_settings
from attrmatrix.ops.context import OperationContext

# ── Database (engine singleton, connection per request) ──────────────────


def get_engine(request: Request) -> Engine:
    return request.app.state.engine


def get_connection(
    engine: Annotated[Engine, Depends(get_engine)],
) -> Generator[Connection, None, None]:
    """Yield a connection for the request lifespan; uncommitted work is rolled back."""
    with open_connection(engine) as conn:
        yield conn


# ── Operation context (per-request) ──────────────────────────────────────


def get_operation_context(
    request: Request,
    conn: Annotated[Connection, Depends(get_connection)],
) -> OperationContext:
    """Build an :class:`OperationContext` from the current request."""
    return OperationContext(
        conn=conn,
        request_id=getattr(request.state, "request_id", str(uuid.uuid4())),
        caller="api",
        user=getattr(request.state, "user", None),
    )


# ── Convenience type aliases ─────────────────────────────────────────────

Settings = Annotated[AttrMatrixSettings, Depends(get_settings)]
Conn = Annotated[Connection, Depends(get_connection)]
OpContext = Annotated[OperationContext, Depends(get_operation_context)]
