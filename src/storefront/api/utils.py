"""
Shared API router utilities.

- ``_dc()`` — convert a dataclass or dict to a plain dict
- ``_handle_error()`` — convert a failed OperationResult to a ``problem_response``
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from fastapi.responses import JSONResponse

from storefront.api.middleware.errors import problem_response, status_for_error_code
from storefront.ops.result import OperationResult


def _dc(obj: Any) -> dict[str, Any]:
    """Convert a dataclass (or dict) to a plain dict.

    Returns an empty dict for objects that are neither dataclasses nor dicts.
    """
    if hasattr(obj, "__dataclass_fields__"):
        return asdict(obj)
    return obj if isinstance(obj, dict) else {}


def _handle_error(result: OperationResult[Any], instance: str = "") -> JSONResponse:
    """Convert a failed ``OperationResult`` into a Problem Details response.

    Field-level validation failures are listed under ``errors``.
    """
    error = result.error
    code = error.code if error else "INTERNAL"
    errors = None
    if error and "field" in error.details:
        errors = [{"code": code, "message": error.message, "field": error.details["field"]}]
    return problem_response(
        status=status_for_error_code(code),
        title=error.message if error else "Operation failed",
        detail=code,
        instance=instance,
        errors=errors,
    )
