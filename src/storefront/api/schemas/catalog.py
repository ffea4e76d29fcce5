"""
Catalog and database schemas.

Pydantic mirrors of the dataclasses in :mod:`storefront.ops.responses`.
Routers build them with ``Schema(**_dc(result.data))``.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class CategoryRefSchema(BaseModel):
    """Category as embedded in a product."""

    id: str
    slug: str
    name: str


class ProductSummarySchema(BaseModel):
    """Product row for listing views.

    Example:
        {
            "id": "prod_mug",
            "slug": "mug",
            "name": "Mug",
            "price_cents": 1500,
            "currency": "USD",
            "available_for_sale": true,
            "categories": [{"id": "cat_drinkware", "slug": "drinkware", "name": "Drinkware"}]
        }
    """

    id: str
    slug: str
    name: str
    price_cents: int = Field(description="Price in minor currency units")
    currency: str = Field(default="USD", description="ISO 4217 code")
    image_url: str | None = None
    available_for_sale: bool = True
    categories: list[CategoryRefSchema] = Field(default_factory=list)


class ProductDetailSchema(ProductSummarySchema):
    """Full product for the detail view."""

    description: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CategorySummarySchema(BaseModel):
    """Category with its product count."""

    id: str
    slug: str
    name: str
    description: str | None = None
    product_count: int = 0


class CategoryDetailSchema(BaseModel):
    """Category with its products."""

    id: str
    slug: str
    name: str
    description: str | None = None
    products: list[ProductSummarySchema] = Field(default_factory=list)


class RevalidateSchema(BaseModel):
    """Routes dropped from the page cache."""

    revalidated: list[str] = Field(default_factory=list)
    all: bool = Field(default=False, description="True when every page was dropped")


class TableCountSchema(BaseModel):
    """Row count for a single database table."""

    table: str
    count: int = 0


class DatabaseHealthSchema(BaseModel):
    """Database connectivity and latency."""

    connected: bool = False
    backend: str = Field(default="", description="'sqlite' or 'postgresql'")
    latency_ms: float = 0.0
