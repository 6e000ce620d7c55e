"""
Request-scoped context for operations.

Every operation function receives an :class:`OperationContext` as its first
argument.  The context owns the connection for one unit of work; the
operation commits it on success and rolls it back on any failure.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.engine import Connection


@dataclass
class OperationContext:
    """Context passed to every operation function.

    Attributes:
        conn: Open SQLAlchemy connection.  One operation, one transaction.
        request_id: Unique ID for this operation invocation (auto-generated).
        caller: Origin of the request — ``"api"``, ``"cli"``, ``"test"``.
        user: Optional authenticated user identifier.
        dry_run: When ``True``, mutations are validated and previewed, then
            rolled back.
        metadata: Arbitrary key/value pairs forwarded to logging.
    """

    conn: Connection
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    caller: str = "sdk"
    user: str | None = None
    dry_run: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)
