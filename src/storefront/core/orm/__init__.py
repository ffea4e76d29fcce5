"""SQLAlchemy 2.0 ORM layer for the storefront catalog.

The catalog is two record kinds joined by a many-to-many association:
a product can sit in several categories and a category lists many products.

Modules
-------
base        StorefrontBase (declarative base) + TimestampMixin
session     Engine factory, StorefrontSession, session_scope
tables      CategoryTable, ProductTable, product_categories

Tags:
    storefront, orm, sqlalchemy, declarative

Doc-Types:
    package-overview, module-index
"""

from __future__ import annotations

from storefront.core.orm.base import StorefrontBase, TimestampMixin
from storefront.core.orm.session import (
    StorefrontSession,
    create_schema,
    create_storefront_engine,
    drop_schema,
    session_scope,
    storefront_session_factory,
)
from storefront.core.orm.tables import CategoryTable, ProductTable, product_categories

__all__ = [
    "StorefrontBase",
    "TimestampMixin",
    "StorefrontSession",
    "create_schema",
    "create_storefront_engine",
    "drop_schema",
    "session_scope",
    "storefront_session_factory",
    "CategoryTable",
    "ProductTable",
    "product_categories",
]
