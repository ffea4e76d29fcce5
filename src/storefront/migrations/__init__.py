"""Alembic migration environment for the storefront catalog."""
