"""
Health router — liveness plus a database round-trip.

GET /health
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from attrmatrix import __version__
from attrmatrix.api.deps import get_engine
from attrmatrix.api.utils import _dc
from attrmatrix.core.database import open_connection
from attrmatrix.core.logging import get_logger
from attrmatrix.ops.context import OperationContext
from attrmatrix.ops.database import check_database_health

logger = get_logger(__name__)

router = APIRouter()


@router.get("/health")
def health(request: Request, engine: Annotated[Engine, Depends(get_engine)]):
    """``200`` when the database answers, ``503`` otherwise."""
    database: dict = {"connected": False}
    try:
        with open_connection(engine) as conn:
            ctx = OperationContext(
                conn=conn,
                request_id=getattr(request.state, "request_id", ""),
                caller="api",
            )
            result = check_database_health(ctx)
            if result.success:
                database = _dc(result.data)
    except SQLAlchemyError as exc:
        logger.warning("health_check_failed", error=str(exc))

    healthy = database.get("connected", False)
    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "status": "healthy" if healthy else "unhealthy",
            "version": __version__,
            "database": database,
        },
    )
