"""
Result envelopes for catalog, seed and database operations.

Operations never raise to their callers. They return an
:class:`OperationResult` (or :class:`PagedResult` for listings) and the
transport decides what a failure means:

    ┌────────────────────┬──────┬──────────────────────────────────────────┐
    │ code               │ HTTP │ raised by                                │
    ├────────────────────┼──────┼──────────────────────────────────────────┤
    │ NOT_FOUND          │ 404  │ get_product, get_category                │
    │ VALIDATION_FAILED  │ 400  │ bad sort/lookup keys, unknown seed       │
    │                    │      │ category, unknown migration revision     │
    │ CONFLICT           │ 409  │ seed rows clashing on a unique slug      │
    │ UNAVAILABLE        │ 503  │ database unreachable or schema missing   │
    │ INTERNAL           │ 500  │ any other SQLAlchemy failure             │
    └────────────────────┴──────┴──────────────────────────────────────────┘

The CLI prints ``Error (<code>): <message>`` and exits with status 1; the
static builder turns a failure into a :class:`~storefront.core.errors.DatabaseError`.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from storefront.core.errors import ErrorCategory, StorefrontError

T = TypeVar("T")

NOT_FOUND = "NOT_FOUND"
VALIDATION_FAILED = "VALIDATION_FAILED"
CONFLICT = "CONFLICT"
UNAVAILABLE = "UNAVAILABLE"
INTERNAL = "INTERNAL"


@dataclass(frozen=True, slots=True)
class OperationError:
    """Why an operation failed.

    ``details`` carries the offending ``field`` (surfaced by the API as a
    per-field error) and the ``entity`` / ``identifier`` looked up.
    """

    code: str
    message: str
    category: ErrorCategory | None = None
    details: dict[str, Any] = field(default_factory=dict)
    retryable: bool = False


@dataclass
class OperationResult(Generic[T]):
    """Success payload or :class:`OperationError`, plus how long it took.

    Build instances with :meth:`ok`, :meth:`fail` or :meth:`from_exception`.
    """

    success: bool
    data: T | None = None
    error: OperationError | None = None
    elapsed_ms: float = 0.0

    @classmethod
    def ok(cls, data: T, *, elapsed_ms: float = 0.0) -> OperationResult[T]:
        return cls(success=True, data=data, elapsed_ms=elapsed_ms)

    @classmethod
    def fail(
        cls,
        code: str,
        message: str,
        *,
        category: ErrorCategory | None = None,
        details: dict[str, Any] | None = None,
        retryable: bool = False,
        elapsed_ms: float = 0.0,
    ) -> OperationResult[T]:
        return cls(
            success=False,
            error=OperationError(
                code=code,
                message=message,
                category=category,
                details=details or {},
                retryable=retryable,
            ),
            elapsed_ms=elapsed_ms,
        )

    @classmethod
    def from_exception(
        cls,
        code: str,
        exc: StorefrontError,
        *,
        elapsed_ms: float = 0.0,
    ) -> OperationResult[T]:
        """Fail with the message, category and context of *exc*."""
        return cls.fail(
            code,
            exc.message,
            category=exc.category,
            details=exc.context.to_dict(),
            retryable=exc.retryable,
            elapsed_ms=elapsed_ms,
        )

    def failed_with(self, code: str) -> bool:
        """``True`` when the operation failed with *code*."""
        return not self.success and self.error is not None and self.error.code == code

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict form used for logging and ``--json`` error output."""
        d: dict[str, Any] = {"success": self.success}
        if self.data is not None:
            d["data"] = self.data
        if self.error is not None:
            d["error"] = {
                "code": self.error.code,
                "message": self.error.message,
                "retryable": self.error.retryable,
            }
            if self.error.details:
                d["error"]["details"] = self.error.details
        if self.elapsed_ms:
            d["elapsed_ms"] = round(self.elapsed_ms, 2)
        return d


@dataclass
class PagedResult(OperationResult[list[T]]):
    """A page of a listing; ``total`` counts matches before ``limit``/``offset``."""

    total: int = 0
    limit: int = 50
    offset: int = 0
    has_more: bool = False

    @classmethod
    def from_items(
        cls,
        items: list[T],
        total: int,
        *,
        limit: int = 50,
        offset: int = 0,
        elapsed_ms: float = 0.0,
    ) -> PagedResult[T]:
        return cls(
            success=True,
            data=items,
            total=total,
            limit=limit,
            offset=offset,
            has_more=(offset + limit) < total,
            elapsed_ms=elapsed_ms,
        )

    def to_dict(self) -> dict[str, Any]:
        d = super().to_dict()
        d.update(total=self.total, limit=self.limit, offset=self.offset, has_more=self.has_more)
        return d


class _Timer:
    __slots__ = ("_start",)

    def __init__(self) -> None:
        self._start = time.perf_counter()

    @property
    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self._start) * 1000


def start_timer() -> _Timer:
    """Stopwatch for ``elapsed_ms``; read ``timer.elapsed_ms`` when done."""
    return _Timer()
