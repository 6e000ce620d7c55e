"""
Common API schemas — shared envelopes and RFC 7807 errors.

Every endpoint returns either :class:`SuccessResponse` (200/201)
or :class:`ProblemDetail` (4xx/5xx).  ``GET /export`` is the one
exception: it returns the raw export document so it can be saved and
re-imported as is.

Response Envelope Conventions:
    - All 2xx responses use ``SuccessResponse[T]``
    - All 4xx/5xx responses use ``ProblemDetail`` (RFC 7807)
    - ``elapsed_ms`` tracks server-side processing time
    - ``warnings`` contains non-fatal issues to display to users
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


# ── RFC 7807 Problem Detail ─────────────────────────────────────────────


class ErrorDetail(BaseModel):
    """Machine-readable error code plus the offending field, if any."""

    code: str = Field(description="Machine-readable error code (e.g., 'INVALID_INPUT')")
    message: str = Field(description="Human-readable error description")
    field: str | None = Field(default=None, description="Field path if error is field-specific")


class ProblemDetail(BaseModel):
    """RFC 7807 «Problem Details for HTTP APIs».

    Error Codes:
        - ``INVALID_INPUT`` (400): Missing or malformed field
        - ``UNAUTHORIZED`` (401): Missing, invalid or expired token
        - ``NOT_FOUND`` (404): Row, column or axis setting does not exist
        - ``DUPLICATE_NAME`` (409): Name already taken
        - ``TRANSIENT`` (503): Database timeout, retry later
        - ``INTERNAL`` (500): Unexpected server error

    Example:
        {
            "type": "about:blank",
            "title": "row 'Fire' not found",
            "status": 404,
            "detail": "",
            "instance": "/api/row/Fire",
            "errors": [{"code": "NOT_FOUND", "message": "...", "field": null}]
        }
    """

    type: str = Field(default="about:blank", description="Error type URI (usually 'about:blank')")
    title: str = Field(description="Short human-readable error summary")
    status: int = Field(description="HTTP status code (e.g., 400, 404, 500)")
    detail: str = Field(default="", description="Human-readable explanation of the error")
    instance: str = Field(default="", description="URI of the failing request")
    errors: list[ErrorDetail] = Field(
        default_factory=list,
        description="List of field-level or nested error details",
    )


# ── Success Envelope ─────────────────────────────────────────────────────


class SuccessResponse(BaseModel, Generic[T]):
    """Standard success envelope."""

    data: T = Field(description="Response payload (type varies by endpoint)")
    elapsed_ms: float = Field(default=0.0, description="Server-side processing time in milliseconds")
    warnings: list[str] = Field(
        default_factory=list,
        description="Non-fatal warnings to display to users",
    )
