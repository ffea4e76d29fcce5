"""HTTP transport for the storefront.

JSON catalog endpoints live under the configured ``api_prefix``; the
rendered pages (``/`` and ``/products/{slug}``) are served at the root.

Usage::

    uvicorn storefront.api:create_app --factory
"""

from storefront.api.app import create_app

__all__ = ["create_app"]
