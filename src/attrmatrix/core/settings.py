"""
Centralized settings for attrmatrix.

All values can be overridden via environment variables prefixed with
``ATTRMATRIX_`` (e.g. ``ATTRMATRIX_DATABASE_URL``) or a ``.env`` file.

Order of precedence (highest → lowest):
    1. Explicit keyword arguments (tests)
    2. Environment variables
    3. ``.env`` file
    4. Defaults below
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from attrmatrix.core.errors import MissingConfigError

# Vite dev server of the editor frontend
DEV_FRONTEND_ORIGIN = "http://localhost:5173"


class AttrMatrixSettings(BaseSettings):
    """attrmatrix configuration."""

    model_config = SettingsConfigDict(
        env_prefix="ATTRMATRIX_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Server ───────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=3000, description="Bind port")
    debug: bool = Field(default=False, description="Expose error detail in 500 responses")

    # ── API ──────────────────────────────────────────────────────
    api_prefix: str = Field(default="/api", description="URL prefix for all endpoints")
    api_title: str = Field(default="attrmatrix API")
    api_version: str = Field(default="1.0.0")

    # ── Database ─────────────────────────────────────────────────
    database_url: str = Field(default="sqlite:///attrmatrix.db")
    database_echo: bool = Field(default=False)
    database_pool_size: int = Field(default=10)
    connect_timeout_seconds: int = Field(default=5)
    statement_timeout_ms: int = Field(
        default=1500, description="Ceiling on a single database statement"
    )
    auto_create_schema: bool = Field(
        default=True, description="Create missing tables on API startup"
    )

    # ── Auth ─────────────────────────────────────────────────────
    jwt_secret: str | None = Field(default=None, description="HS256 signing secret; None disables auth")
    jwt_algorithm: str = Field(default="HS256")
    jwt_expire_minutes: int = Field(default=24 * 60)
    admin_password_hash: str | None = Field(default=None, description="bcrypt hash of the admin password")

    # ── CORS ─────────────────────────────────────────────────────
    cors_origins: list[str] = Field(default_factory=list)

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="auto", description="json, console, or auto")

    @property
    def auth_enabled(self) -> bool:
        return bool(self.jwt_secret)

    @property
    def allowed_origins(self) -> list[str]:
        """Configured origins plus the local editor dev server."""
        origins = list(self.cors_origins)
        if DEV_FRONTEND_ORIGIN not in origins:
            origins.append(DEV_FRONTEND_ORIGIN)
        return origins

    @property
    def json_logs(self) -> bool | None:
        if self.log_format == "json":
            return True
        if self.log_format == "console":
            return False
        return None

    def missing_production_settings(self) -> list[str]:
        """Names of the variables a deployed instance cannot run without."""
        missing = []
        if not self.jwt_secret:
            missing.append("ATTRMATRIX_JWT_SECRET")
        if not self.admin_password_hash:
            missing.append("ATTRMATRIX_ADMIN_PASSWORD_HASH")
        if not self.database_url:
            missing.append("ATTRMATRIX_DATABASE_URL")
        return missing

    def validate_for_production(self) -> None:
        """Raise :class:`MissingConfigError` listing every missing variable."""
        missing = self.missing_production_settings()
        if missing:
            raise MissingConfigError(missing)


@lru_cache(maxsize=1)
def get_settings() -> AttrMatrixSettings:
    """Cached settings — loaded once per process."""
    return AttrMatrixSettings()
