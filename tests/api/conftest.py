"""Shared fixtures for API tests."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from attrmatrix.api.app import create_app
from attrmatrix.api.auth import hash_password
from attrmatrix.core.settings import AttrMatrixSettings

ADMIN_PASSWORD = "s3cret"


@pytest.fixture(scope="session")
def admin_password() -> str:
    return ADMIN_PASSWORD


def _settings(tmp_path, **overrides) -> AttrMatrixSettings:
    values = {
        "database_url": f"sqlite:///{tmp_path / 'api.db'}",
        "log_format": "console",
        "jwt_secret": None,
        "admin_password_hash": None,
    }
    values.update(overrides)
    return AttrMatrixSettings(**values)


@pytest.fixture()
def client(tmp_path):
    """Client for an app with authentication disabled."""
    app = create_app(settings=_settings(tmp_path))
    with TestClient(app) as c:
        yield c


@pytest.fixture(scope="session")
def admin_hash() -> str:
    return hash_password(ADMIN_PASSWORD)


@pytest.fixture()
def secure_client(tmp_path, admin_hash):
    """Client for an app that requires a bearer token."""
    app = create_app(
        settings=_settings(tmp_path, jwt_secret="test-secret", admin_password_hash=admin_hash)
    )
    with TestClient(app) as c:
        yield c
