"""
Shared API router utilities.

- ``_dc()`` — convert an ops payload (model with ``to_dict``, dataclass
  or dict) to a plain dict
- ``_handle_error()`` — convert a failed OperationResult to a
  ``problem_response``
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from fastapi.responses import JSONResponse

from attrmatrix.api.middleware.errors import problem_response, status_for_error_code
from attrmatrix.ops.result import OperationResult


def _dc(obj: Any) -> dict[str, Any]:
    """Convert an ops payload to a plain dict.

    Returns an empty dict for objects that are neither dataclasses nor dicts.
    """
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    if hasattr(obj, "__dataclass_fields__"):
        return asdict(obj)
    return obj if isinstance(obj, dict) else {}


def _handle_error(result: OperationResult[Any], instance: str = "") -> JSONResponse:
    """Convert a failed ``OperationResult`` into a Problem Details response.

    Uses the error code from the result to determine the HTTP status code,
    and the error message as the problem title.
    """
    error = result.error
    if error is None:
        return problem_response(status=500, title="Operation failed", instance=instance)
    return problem_response(
        status=status_for_error_code(error.code),
        title=error.message,
        instance=instance,
        errors=[
            {
                "code": error.code,
                "message": error.message,
                "field": error.details.get("field"),
            }
        ],
        headers={"Retry-After": "1"} if error.retryable else None,
    )
