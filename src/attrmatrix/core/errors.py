"""
Structured error types for the attribute matrix.

Every failure the core can report is one of a small set of typed errors.
Components raise them; the operations layer turns them into
``OperationResult.fail(code, ...)`` so that nothing escapes past the ops
boundary.

Manifesto:
    - **Typed taxonomy:** invalid input, not found, duplicate name,
      transient store fault, internal failure
    - **Stable codes:** each error type carries the machine-readable code
      the HTTP layer maps to a status
    - **Rich context:** errors carry the entity kind and name for logging
    - **Error chaining:** underlying driver exceptions are kept as ``cause``

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────────┐
        │                        MatrixError                            │
        │          (category, code, retryable, context, cause)          │
        ├──────────────────────────────────────────────────────────────┤
        │  InvalidInputError   NotFoundError     DuplicateNameError     │
        │  (VALIDATION/400)    (NOT_FOUND/404)   (CONFLICT/409)         │
        │                                                               │
        │  TransientStoreError InternalFailureError                     │
        │  (DATABASE/503)      (INTERNAL/500)                           │
        │                                                               │
        │  ConfigError ── MissingConfigError    AuthenticationError     │
        └──────────────────────────────────────────────────────────────┘

Examples:
    >>> err = NotFoundError("row", "Ammonia")
    >>> err.code
    'NOT_FOUND'
    >>> err.context.entity
    'row'
    >>> is_retryable(TransientStoreError("statement timeout"))
    True

Tags:
    error-handling, exception-hierarchy, attrmatrix
"""

from __future__ import annotations

from dataclasses import dataclass, field as dataclass_field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and routing."""

    VALIDATION = "VALIDATION"     # Missing/empty field, malformed snapshot
    NOT_FOUND = "NOT_FOUND"       # Unknown row, column, or axis setting
    CONFLICT = "CONFLICT"         # Uniqueness violation
    DATABASE = "DATABASE"         # Statement timeout, lost connection
    CONFIG = "CONFIG"             # Missing or invalid settings
    AUTH = "AUTH"                 # Bad password or token
    INTERNAL = "INTERNAL"         # Bugs, unexpected state
    UNKNOWN = "UNKNOWN"


@dataclass
class ErrorContext:
    """Structured metadata attached to an error.

    Attributes:
        entity: Kind of entity involved (``"row"``, ``"column"``,
            ``"axis_setting"``, ``"snapshot"``).
        name: Name or id of the entity involved.
        field: Request field that failed validation.
        metadata: Additional key/value pairs.
    """

    entity: str | None = None
    name: str | None = None
    field: str | None = None
    metadata: dict[str, Any] = dataclass_field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result: dict[str, Any] = {}
        for key in ("entity", "name", "field"):
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class MatrixError(Exception):
    """
    Base exception for all attribute matrix errors.

    Subclasses set ``default_category``, ``default_retryable`` and ``code``
    class attributes. ``code`` is what the operations layer reports and what
    the API maps to an HTTP status.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False
    code: str = "INTERNAL"

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> MatrixError:
        """Add context to this error (fluent API).

        Known keys go to the matching :class:`ErrorContext` field, anything
        else lands in ``metadata``.
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Serialize for structured logging."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = repr(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, code={self.code})"


# =============================================================================
# CLIENT ERRORS
# =============================================================================


class InvalidInputError(MatrixError):
    """Missing or empty required field, or a malformed snapshot."""

    default_category = ErrorCategory.VALIDATION
    code = "INVALID_INPUT"

    def __init__(self, message: str, *, field: str | None = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        if field is not None:
            self.context.field = field


class NotFoundError(MatrixError):
    """A referenced row, column, or axis setting does not exist."""

    default_category = ErrorCategory.NOT_FOUND
    code = "NOT_FOUND"

    def __init__(self, entity: str, name: Any, message: str | None = None):
        super().__init__(
            message or f"{entity.replace('_', ' ').capitalize()} not found: {name}",
            context=ErrorContext(entity=entity, name=str(name)),
        )


class DuplicateNameError(MatrixError):
    """A create or rename would violate a unique name."""

    default_category = ErrorCategory.CONFLICT
    code = "DUPLICATE_NAME"

    def __init__(self, entity: str, name: str, message: str | None = None):
        super().__init__(
            message or f"{entity.replace('_', ' ').capitalize()} already exists: {name}",
            context=ErrorContext(entity=entity, name=name),
        )


# =============================================================================
# SERVER ERRORS
# =============================================================================


class TransientStoreError(MatrixError):
    """Statement timeout or dropped connection. Safe to retry."""

    default_category = ErrorCategory.DATABASE
    default_retryable = True
    code = "TRANSIENT"


class InternalFailureError(MatrixError):
    """Storage fault or unexpected state. Detail is logged, never returned."""

    default_category = ErrorCategory.INTERNAL
    code = "INTERNAL"


# =============================================================================
# CONFIGURATION / AUTH ERRORS
# =============================================================================


class ConfigError(MatrixError):
    """Configuration error. Never retryable."""

    default_category = ErrorCategory.CONFIG
    code = "CONFIG"


class MissingConfigError(ConfigError):
    """One or more required settings are missing."""

    def __init__(self, keys: list[str], message: str | None = None):
        self.keys = list(keys)
        super().__init__(
            message or f"Missing required environment variables: {', '.join(self.keys)}"
        )


class AuthenticationError(MatrixError):
    """Password or token rejected."""

    default_category = ErrorCategory.AUTH
    code = "UNAUTHORIZED"


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def is_retryable(error: Exception) -> bool:
    """Check if an error is retryable."""
    if isinstance(error, MatrixError):
        return error.retryable
    return isinstance(error, (ConnectionError, TimeoutError))


def categorize_error(error: Exception) -> ErrorCategory:
    """Get the category of an error."""
    if isinstance(error, MatrixError):
        return error.category
    if isinstance(error, ValueError):
        return ErrorCategory.VALIDATION
    return ErrorCategory.UNKNOWN


def error_code_for(error: Exception) -> str:
    """Resolve the ops error code for any exception."""
    if isinstance(error, MatrixError):
        return error.code
    return "INTERNAL"


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "MatrixError",
    "InvalidInputError",
    "NotFoundError",
    "DuplicateNameError",
    "TransientStoreError",
    "InternalFailureError",
    "ConfigError",
    "MissingConfigError",
    "AuthenticationError",
    "is_retryable",
    "categorize_error",
    "error_code_for",
]
