"""
Typed request objects for operations.

Each dataclass represents the *input* contract for a single operation
function. Requests carry only validated, transport-agnostic data — no
raw HTTP bodies, no Typer params.
"""

from __future__ import annotations

from dataclasses import dataclass

PRODUCT_SORT_FIELDS = ("name", "price", "created_at")

# ------------------------------------------------------------------ #
# Catalog operations
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class ListProductsRequest:
    """Request for :func:`storefront.ops.catalog.list_products`.

    Attributes:
        category: Only products in the category with this slug.
        available_only: Skip products not available for sale.
        sort: One of ``name``, ``price``, ``created_at``.
        order: ``asc`` or ``desc``.
        limit: Page size; ``None`` returns every matching product.
        offset: Rows to skip.
    """

    category: str | None = None
    available_only: bool = False
    sort: str = "name"
    order: str = "asc"
    limit: int | None = 50
    offset: int = 0


@dataclass(frozen=True, slots=True)
class GetProductRequest:
    """Request for :func:`storefront.ops.catalog.get_product`.

    At least one of ``slug`` or ``product_id`` must be given; when both are,
    the first product matching either is returned.
    """

    slug: str | None = None
    product_id: str | None = None


@dataclass(frozen=True, slots=True)
class ListCategoriesRequest:
    """Request for :func:`storefront.ops.catalog.list_categories`."""

    limit: int | None = None
    offset: int = 0


# ------------------------------------------------------------------ #
# Seed / database operations
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class SeedRequest:
    """Request for :func:`storefront.ops.seed.seed_database`.

    Attributes:
        refresh: Re-apply literal values to rows that already exist.
            ``False`` keeps existing rows as they are (empty update).
    """

    refresh: bool = True


@dataclass(frozen=True, slots=True)
class MigrateRequest:
    """Request for :func:`storefront.ops.database.migrate_database`."""

    database_url: str
    revision: str = "head"
