"""
Operations layer — the business-facing API of attrmatrix.

Every function here follows the same contract:

- accepts ``OperationContext`` as first argument
- returns ``OperationResult[T]`` (never raises)
- runs in one transaction on ``ctx.conn``: commit on success, rollback on
  any failure
- honours ``ctx.dry_run`` (validate and preview, then roll back)

Usage::

    from attrmatrix.ops import OperationContext
    from attrmatrix.ops.columns import add_column
    from attrmatrix.ops.requests import AddColumnRequest

    ctx = OperationContext(conn=conn)
    result = add_column(ctx, AddColumnRequest(column_name="speed"))
    assert result.success
"""

from attrmatrix.ops.context import OperationContext
from attrmatrix.ops.result import OperationError, OperationResult

__all__ = [
    "OperationContext",
    "OperationError",
    "OperationResult",
]
