"""
Typed response objects for operations that have no core model.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class DatabaseInitResult:
    tables_created: list[str] = field(default_factory=list)
    dropped: bool = False
    dry_run: bool = False


@dataclass(frozen=True, slots=True)
class DatabaseHealth:
    """Connectivity check result for ``/health``."""

    connected: bool = False
    backend: str = "unknown"
    table_count: int = 0
    latency_ms: float = 0.0
