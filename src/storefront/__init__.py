"""
Storefront - database-backed catalog for an e-commerce storefront.

Subpackages:
- storefront.core: settings, logging, errors and the SQLAlchemy ORM layer
- storefront.ops: transport-agnostic operations (catalog queries, seeding, database)
- storefront.site: static page generation with incremental regeneration
- storefront.api: FastAPI application
- storefront.cli: Typer command line
"""

__version__ = "0.1.0"
