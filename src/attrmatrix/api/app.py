"""
FastAPI application factory.

``create_app()`` wires middleware, routers, error handlers, and
lifespan events into a single ``FastAPI`` instance.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from attrmatrix.api.middleware.auth import AuthMiddleware, public_paths
from attrmatrix.api.middleware.errors import (
    unhandled_exception_handler,
    validation_exception_handler,
)
from attrmatrix.api.middleware.request_id import RequestIDMiddleware
from attrmatrix.api.middleware.timing import TimingMiddleware
from attrmatrix.core.database import engine_from_settings
from attrmatrix.core.logging import configure_logging, get_logger
from attrmatrix.core.schema import create_schema
from attrmatrix.core.settings import AttrMatrixSettings, get_settings


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan — startup / shutdown hooks."""
    settings: AttrMatrixSettings = app.state.settings
    configure_logging(level=settings.log_level, json_format=settings.json_logs)

    log = get_logger("attrmatrix.api")
    log.info("api_starting", version=app.version, auth_enabled=settings.auth_enabled)
    if not settings.auth_enabled:
        log.warning("auth_disabled", reason="ATTRMATRIX_JWT_SECRET is not set")

    if settings.auto_create_schema:
        try:
            tables = create_schema(app.state.engine)
            log.info("database_initialized", tables=tables)
        except SQLAlchemyError as exc:
            log.warning("database_auto_init_failed", error=str(exc))

    yield

    app.state.engine.dispose()
    log.info("api_shutting_down")


def create_app(
    *,
    settings: AttrMatrixSettings | None = None,
    engine: Engine | None = None,
) -> FastAPI:
    """Build and return a fully-configured FastAPI application.

    Parameters
    ----------
    settings : AttrMatrixSettings | None
        Override settings (useful for testing).  When ``None`` the cached
        singleton from :func:`get_settings` is used.
    engine : Engine | None
        Override the database engine.  When ``None`` one is built from
        ``settings``.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        lifespan=lifespan,
        docs_url=f"{settings.api_prefix}/docs",
        redoc_url=f"{settings.api_prefix}/redoc",
        openapi_url=f"{settings.api_prefix}/openapi.json",
    )

    app.state.settings = settings
    app.state.engine = engine or engine_from_settings(settings)

    # Override DI so endpoints use the provided settings
    app.dependency_overrides[get_settings] = lambda: settings

    # ── Middleware (outermost → innermost) ────────────────────────────
    app.add_middleware(TimingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        AuthMiddleware,
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        public=public_paths(settings.api_prefix),
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Exception handlers ───────────────────────────────────────────
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # ── Routers ──────────────────────────────────────────────────────
    from attrmatrix.api.routers import auth, axis_settings, health, table, transfer

    prefix = settings.api_prefix

    # Health at root level (no prefix) for container healthchecks
    app.include_router(health.router, tags=["health"])

    app.include_router(auth.router, prefix=prefix, tags=["auth"])
    app.include_router(table.router, prefix=prefix, tags=["table"])
    app.include_router(axis_settings.router, prefix=prefix, tags=["axis-settings"])
    app.include_router(transfer.router, prefix=prefix, tags=["transfer"])

    return app
