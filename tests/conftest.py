"""
Shared pytest fixtures and configuration for attrmatrix tests.

This module provides:
- An in-memory SQLite engine with the schema created
- A connection and a :class:`MatrixWorkspace` bound to it
- Location-based ``unit`` / ``integration`` markers
"""

from collections.abc import Generator
from pathlib import Path

import pytest
from sqlalchemy.engine import Connection, Engine

from attrmatrix.core.database import create_matrix_engine, open_connection
from attrmatrix.core.schema import create_schema
from attrmatrix.core.workspace import MatrixWorkspace


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        test_path = Path(item.fspath).relative_to(Path(__file__).parent)

        # HTTP and CLI tests run the full stack against a database file
        if test_path.parts[0] in ("api", "cli"):
            item.add_marker(pytest.mark.integration)

        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    """In-memory SQLite engine (single shared connection) with all tables."""
    engine = create_matrix_engine("sqlite://")
    create_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def conn(engine: Engine) -> Generator[Connection, None, None]:
    with open_connection(engine) as c:
        yield c


@pytest.fixture()
def ws(conn: Connection) -> MatrixWorkspace:
    """Workspace over the test connection."""
    return MatrixWorkspace(conn)
