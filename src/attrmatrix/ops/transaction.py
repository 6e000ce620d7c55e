"""
Unit-of-work runner shared by every operation.

:func:`run_operation` builds a :class:`MatrixWorkspace` on ``ctx.conn``,
calls the work function and settles the transaction: commit on success
(unless read-only or ``dry_run``), rollback on any failure.  Core errors
become :class:`OperationResult` failures; driver errors are translated
first.  Nothing escapes.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from attrmatrix.core.database import translate_db_error
from attrmatrix.core.errors import InternalFailureError, MatrixError
from attrmatrix.core.logging import get_logger
from attrmatrix.core.workspace import MatrixWorkspace
from attrmatrix.ops.context import OperationContext
from attrmatrix.ops.result import OperationResult, start_timer

logger = get_logger(__name__)


def run_operation[T](
    ctx: OperationContext,
    name: str,
    work: Callable[[MatrixWorkspace], T],
    *,
    mutates: bool = True,
) -> OperationResult[T]:
    """Run *work* in one transaction and wrap the outcome."""
    timer = start_timer()
    conn = ctx.conn

    try:
        data = work(MatrixWorkspace(conn))
        if mutates and not ctx.dry_run:
            conn.commit()
        else:
            conn.rollback()
    except MatrixError as exc:
        _rollback(conn)
        logger.info(
            "op_rejected",
            op=name,
            code=exc.code,
            reason=exc.message,
            request_id=ctx.request_id,
        )
        return OperationResult.from_error(exc, elapsed_ms=timer.elapsed_ms)
    except SQLAlchemyError as exc:
        _rollback(conn)
        error = translate_db_error(exc)
        logger.exception("op_failed", op=name, code=error.code, request_id=ctx.request_id)
        return OperationResult.from_error(error, elapsed_ms=timer.elapsed_ms)
    except Exception as exc:
        _rollback(conn)
        logger.exception("op_failed", op=name, code="INTERNAL", request_id=ctx.request_id)
        return OperationResult.from_error(
            InternalFailureError("Internal failure", cause=exc),
            elapsed_ms=timer.elapsed_ms,
        )

    metadata: dict[str, Any] = {"dry_run": True} if ctx.dry_run and mutates else {}
    return OperationResult.ok(data, elapsed_ms=timer.elapsed_ms, metadata=metadata)


def _rollback(conn: Any) -> None:
    try:
        conn.rollback()
    except SQLAlchemyError:
        logger.warning("rollback_failed", exc_info=True)
