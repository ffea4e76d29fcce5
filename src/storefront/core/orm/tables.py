"""Catalog table definitions — categories, products and their association.

Tags:
    storefront, orm, sqlalchemy, tables, catalog

Doc-Types:
    api-reference, data-model
"""

from __future__ import annotations

from sqlalchemy import Boolean, Column, ForeignKey, Integer, Table, Text, true
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.core.orm.base import StorefrontBase, TimestampMixin

product_categories = Table(
    "product_categories",
    StorefrontBase.metadata,
    Column(
        "product_id",
        Text,
        ForeignKey("products.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "category_id",
        Text,
        ForeignKey("categories.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class CategoryTable(TimestampMixin, StorefrontBase):
    __tablename__ = "categories"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    slug: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text)

    # --- relationships ---
    products: Mapped[list[ProductTable]] = relationship(
        "ProductTable",
        secondary=product_categories,
        back_populates="categories",
    )

    def __repr__(self) -> str:
        return f"CategoryTable(id={self.id!r}, slug={self.slug!r})"


class ProductTable(TimestampMixin, StorefrontBase):
    __tablename__ = "products"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    slug: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    # Minor currency units (cents)
    price_cents: Mapped[int] = mapped_column(Integer, nullable=False)
    currency: Mapped[str] = mapped_column(Text, nullable=False, default="USD")
    image_url: Mapped[str | None] = mapped_column(Text)
    available_for_sale: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )

    # --- relationships ---
    categories: Mapped[list[CategoryTable]] = relationship(
        "CategoryTable",
        secondary=product_categories,
        back_populates="products",
        order_by="CategoryTable.name",
    )

    def __repr__(self) -> str:
        return f"ProductTable(id={self.id!r}, slug={self.slug!r})"


__all__ = ["CategoryTable", "ProductTable", "product_categories"]
