"""Tests for storefront.ops.catalog against a seeded in-memory database."""

from __future__ import annotations

from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from storefront.ops.catalog import (
    get_category,
    get_product,
    list_categories,
    list_product_slugs,
    list_products,
)
from storefront.ops.context import OperationContext
from storefront.ops.requests import GetProductRequest, ListCategoriesRequest, ListProductsRequest
from storefront.ops.result import NOT_FOUND, UNAVAILABLE, VALIDATION_FAILED


class TestListProducts:
    def test_default_sort_by_name(self, seeded_ctx):
        result = list_products(seeded_ctx, ListProductsRequest())
        assert result.success
        assert result.total == 8
        assert [p.slug for p in result.data][:3] == ["baseball-cap", "classic-tee", "long-sleeve-tee"]

    def test_categories_included(self, seeded_ctx):
        result = list_products(seeded_ctx, ListProductsRequest(limit=None))
        mug = next(p for p in result.data if p.slug == "mug")
        assert [c.slug for c in mug.categories] == ["accessories", "drinkware"]

    def test_sort_by_price_desc(self, seeded_ctx):
        result = list_products(seeded_ctx, ListProductsRequest(sort="price", order="desc"))
        prices = [p.price_cents for p in result.data]
        assert prices == sorted(prices, reverse=True)
        assert result.data[0].slug == "zip-hoodie"

    def test_filter_by_category(self, seeded_ctx):
        result = list_products(seeded_ctx, ListProductsRequest(category="drinkware"))
        assert [p.slug for p in result.data] == ["mug", "water-bottle"]
        assert result.total == 2

    def test_unknown_category_is_empty(self, seeded_ctx):
        result = list_products(seeded_ctx, ListProductsRequest(category="nope"))
        assert result.success
        assert result.data == []
        assert result.total == 0

    def test_available_only(self, seeded_ctx):
        result = list_products(seeded_ctx, ListProductsRequest(available_only=True))
        assert result.total == 7
        assert "pullover-hoodie" not in [p.slug for p in result.data]

    def test_pagination(self, seeded_ctx):
        result = list_products(seeded_ctx, ListProductsRequest(limit=3, offset=3))
        assert len(result.data) == 3
        assert result.has_more is True
        assert result.data[0].slug == "mug"

    def test_limit_none_returns_all(self, seeded_ctx):
        result = list_products(seeded_ctx, ListProductsRequest(limit=None))
        assert len(result.data) == 8
        assert result.limit == 8
        assert result.has_more is False

    def test_invalid_sort(self, seeded_ctx):
        result = list_products(seeded_ctx, ListProductsRequest(sort="colour"))
        assert not result.success
        assert result.error.code == VALIDATION_FAILED
        assert result.error.details == {"field": "sort"}

    def test_invalid_order(self, seeded_ctx):
        result = list_products(seeded_ctx, ListProductsRequest(order="sideways"))
        assert result.error.code == VALIDATION_FAILED

    def test_empty_database(self, ctx):
        result = list_products(ctx, ListProductsRequest())
        assert result.success
        assert result.data == []

    def test_database_unavailable(self):
        session = MagicMock()
        session.scalars.side_effect = OperationalError("SELECT", {}, Exception("down"))
        result = list_products(OperationContext(session=session), ListProductsRequest())
        assert not result.success
        assert result.error.code == UNAVAILABLE
        assert result.error.retryable is True


class TestGetProduct:
    def test_by_slug(self, seeded_ctx):
        result = get_product(seeded_ctx, GetProductRequest(slug="classic-tee"))
        assert result.success
        product = result.data
        assert product.id == "prod_classic_tee"
        assert product.price_cents == 2000
        assert product.description.startswith("A relaxed")
        assert [c.slug for c in product.categories] == ["shirts"]
        assert product.created_at is not None

    def test_by_id(self, seeded_ctx):
        result = get_product(seeded_ctx, GetProductRequest(product_id="prod_mug"))
        assert result.data.slug == "mug"

    def test_not_found(self, seeded_ctx):
        result = get_product(seeded_ctx, GetProductRequest(slug="missing"))
        assert not result.success
        assert result.error.code == NOT_FOUND
        assert result.error.details == {"entity": "product", "identifier": "missing"}

    def test_requires_key(self, seeded_ctx):
        result = get_product(seeded_ctx, GetProductRequest())
        assert result.error.code == VALIDATION_FAILED


class TestSlugsAndCategories:
    def test_slugs_sorted(self, seeded_ctx):
        result = list_product_slugs(seeded_ctx)
        assert result.data == sorted(result.data)
        assert len(result.data) == 8

    def test_list_categories_with_counts(self, seeded_ctx):
        result = list_categories(seeded_ctx, ListCategoriesRequest())
        counts = {c.slug: c.product_count for c in result.data}
        assert [c.slug for c in result.data] == ["accessories", "drinkware", "hoodies", "shirts"]
        assert counts == {"accessories": 4, "drinkware": 2, "hoodies": 2, "shirts": 2}
        assert result.total == 4

    def test_get_category(self, seeded_ctx):
        result = get_category(seeded_ctx, "drinkware")
        assert result.success
        assert [p.slug for p in result.data.products] == ["mug", "water-bottle"]

    def test_get_category_missing(self, seeded_ctx):
        result = get_category(seeded_ctx, "nope")
        assert result.error.code == NOT_FOUND
