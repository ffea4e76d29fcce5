"""
Typed response objects for operations.

Each dataclass represents the *output* of a single operation beyond the
generic :class:`OperationResult` envelope. Responses carry only domain
data — no HTTP status codes, no CLI formatting, no ORM instances.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

# ------------------------------------------------------------------ #
# Catalog responses
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class CategoryRef:
    """Category as embedded in a product."""

    id: str
    slug: str
    name: str


@dataclass(frozen=True, slots=True)
class ProductSummary:
    """Product row for listing pages."""

    id: str
    slug: str
    name: str
    price_cents: int
    currency: str
    image_url: str | None = None
    available_for_sale: bool = True
    categories: list[CategoryRef] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class ProductDetail:
    """Full product for the detail page."""

    id: str
    slug: str
    name: str
    description: str
    price_cents: int
    currency: str
    image_url: str | None = None
    available_for_sale: bool = True
    categories: list[CategoryRef] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class CategorySummary:
    """Category row with the number of products it holds."""

    id: str
    slug: str
    name: str
    description: str | None = None
    product_count: int = 0


@dataclass(frozen=True, slots=True)
class CategoryDetail:
    """Category with its products."""

    id: str
    slug: str
    name: str
    description: str | None = None
    products: list[ProductSummary] = field(default_factory=list)


# ------------------------------------------------------------------ #
# Seed / database responses
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class SeedResult:
    """Result payload for :func:`storefront.ops.seed.seed_database`."""

    categories_created: int = 0
    categories_updated: int = 0
    products_created: int = 0
    products_updated: int = 0
    dry_run: bool = False


@dataclass(frozen=True, slots=True)
class DatabaseInitResult:
    """Result payload for :func:`storefront.ops.database.initialize_database`."""

    tables_created: list[str]
    dry_run: bool = False


@dataclass(frozen=True, slots=True)
class MigrationResult:
    """Result payload for :func:`storefront.ops.database.migrate_database`."""

    revision: str
    backend: str


@dataclass(frozen=True, slots=True)
class TableCount:
    """Row count for a single table."""

    table: str
    count: int


@dataclass(frozen=True, slots=True)
class DatabaseHealth:
    """Database health for :func:`storefront.ops.database.check_database_health`."""

    connected: bool
    backend: str = "unknown"  # "sqlite", "postgresql"
    latency_ms: float = 0.0
