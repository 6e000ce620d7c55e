"""Shared fixtures for attrmatrix.ops tests."""

import pytest
from sqlalchemy.engine import Connection

from attrmatrix.ops.context import OperationContext


@pytest.fixture()
def ctx(conn: Connection) -> OperationContext:
    """Default OperationContext wired to the in-memory connection."""
    return OperationContext(conn=conn, caller="test")


@pytest.fixture()
def dry_ctx(conn: Connection) -> OperationContext:
    """OperationContext with dry_run=True."""
    return OperationContext(conn=conn, caller="test", dry_run=True)
