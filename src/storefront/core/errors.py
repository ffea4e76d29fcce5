"""
Structured error types for the storefront.

Instead of generic exceptions that lose context, ``StorefrontError`` and its
subclasses carry:

- **Category:** What kind of error (database, validation, not-found, ...)
- **Retryable:** Whether the caller may retry the same call
- **Context:** Entity, identifier and route involved, plus free metadata
- **Cause:** Chained underlying exception for root cause analysis

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────┐
        │                    StorefrontError                        │
        │   (category, retryable, context, cause)                  │
        ├──────────────────────────────────────────────────────────┤
        │  DatabaseError        ValidationError     ConfigError     │
        │  (DATABASE)           (VALIDATION)        (CONFIG)        │
        │     │                                        │            │
        │  DatabaseConnectionError               MissingConfigError │
        │  (retryable)                                              │
        │                                                           │
        │  RenderError                                              │
        │  (RENDER)                                                 │
        └──────────────────────────────────────────────────────────┘

Usage:
    from storefront.core.errors import ValidationError

    raise ValidationError("Unknown category", field="category_ids").with_context(
        entity="product", identifier="prod_classic_tee"
    )

Tags:
    error-handling, exception-hierarchy, error-context, storefront

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and routing."""

    DATABASE = "DATABASE"
    VALIDATION = "VALIDATION"
    CONFIG = "CONFIG"
    NOT_FOUND = "NOT_FOUND"
    RENDER = "RENDER"
    INTERNAL = "INTERNAL"
    UNKNOWN = "UNKNOWN"


@dataclass
class ErrorContext:
    """
    Structured metadata context for errors.

    Attributes:
        entity: Kind of record involved (``"product"``, ``"category"``)
        identifier: Slug or id that was looked up
        route: Page route being generated, if any
        metadata: Additional key-value pairs
    """

    entity: str | None = None
    identifier: str | None = None
    route: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["entity", "identifier", "route"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class StorefrontError(Exception):
    """
    Base exception for all storefront errors.

    Subclasses set ``default_category`` and ``default_retryable`` so callers
    rarely pass them explicitly.

    Examples:
        >>> error = StorefrontError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.retryable
        False
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

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

    def with_context(self, **kwargs: Any) -> StorefrontError:
        """
        Add context to this error (fluent API).

        Known fields are set on :class:`ErrorContext`; anything else lands
        in ``context.metadata``.
        """
        for key, value in kwargs.items():
            if key != "metadata" and hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# DATABASE ERRORS
# =============================================================================


class DatabaseError(StorefrontError):
    """Database query or transaction error."""

    default_category = ErrorCategory.DATABASE
    default_retryable = False


class DatabaseConnectionError(DatabaseError):
    """Database unreachable; usually resolves on its own."""

    default_retryable = True


# =============================================================================
# VALIDATION / CONFIG ERRORS
# =============================================================================


class ValidationError(StorefrontError):
    """
    Input or seed data validation error.

    Never retryable - data must be fixed.
    """

    default_category = ErrorCategory.VALIDATION
    default_retryable = False

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        if self.value is not None:
            result["value"] = repr(self.value)
        return result


class ConfigError(StorefrontError):
    """Configuration error."""

    default_category = ErrorCategory.CONFIG
    default_retryable = False


class MissingConfigError(ConfigError):
    """Required configuration value is missing."""

    def __init__(self, key: str, message: str | None = None):
        super().__init__(message or f"Missing required configuration: {key}")
        self.key = key


# =============================================================================
# RENDER ERRORS
# =============================================================================


class RenderError(StorefrontError):
    """A page template failed to render."""

    default_category = ErrorCategory.RENDER
    default_retryable = False


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "StorefrontError",
    "DatabaseError",
    "DatabaseConnectionError",
    "ValidationError",
    "ConfigError",
    "MissingConfigError",
    "RenderError",
]
