"""Core primitives shared by every storefront layer.

Modules
-------
settings    StorefrontSettings (pydantic-settings) + cached get_settings()
logging     structlog configuration and context helpers
errors      Typed error hierarchy with categories and context
orm         SQLAlchemy 2.0 models, engine and session factories
"""

from storefront.core.errors import (
    ErrorCategory,
    ErrorContext,
    StorefrontError,
    ValidationError,
)
from storefront.core.logging import configure_logging, get_logger
from storefront.core.settings import StorefrontSettings, get_settings

__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "StorefrontError",
    "ValidationError",
    "StorefrontSettings",
    "configure_logging",
    "get_logger",
    "get_settings",
]
