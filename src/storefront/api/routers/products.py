"""
Products router — catalog listing and detail.

Endpoints:
    GET /products           List products (filter, sort, paginate)
    GET /products/{slug}    First product with this slug
"""

from __future__ import annotations

from fastapi import APIRouter, Query, Request

from storefront.api.deps import OpContext, Pagination
from storefront.api.schemas.catalog import ProductDetailSchema, ProductSummarySchema
from storefront.api.schemas.common import PagedResponse, PageMeta, SuccessResponse
from storefront.api.utils import _dc, _handle_error
from storefront.ops.catalog import get_product as _get
from storefront.ops.catalog import list_products as _list
from storefront.ops.requests import GetProductRequest, ListProductsRequest

router = APIRouter(prefix="/products")


@router.get("", response_model=PagedResponse[ProductSummarySchema])
def list_products(
    request: Request,
    ctx: OpContext,
    pagination: Pagination,
    category: str | None = Query(None, description="Only products in this category slug"),
    available_only: bool = Query(False, description="Skip products not available for sale"),
    sort: str = Query("name", description="name | price | created_at"),
    order: str = Query("asc", description="asc | desc"),
):
    """List products with their categories.

    Example:
        GET /api/v1/products?category=drinkware&sort=price

        Response:
        {
            "data": [
                {"id": "prod_mug", "slug": "mug", "price_cents": 1500, ...},
                {"id": "prod_water_bottle", "slug": "water-bottle", "price_cents": 3200, ...}
            ],
            "page": {"total": 2, "limit": 50, "offset": 0, "has_more": false, ...}
        }
    """
    req = ListProductsRequest(
        category=category,
        available_only=available_only,
        sort=sort,
        order=order,
        limit=pagination.limit,
        offset=pagination.offset,
    )
    result = _list(ctx, req)
    if not result.success:
        return _handle_error(result, instance=str(request.url))
    items = [ProductSummarySchema(**_dc(p)) for p in (result.data or [])]
    return PagedResponse(
        data=items,
        page=PageMeta.from_result(total=result.total, limit=result.limit, offset=result.offset),
        elapsed_ms=result.elapsed_ms,
    )


@router.get("/{slug}", response_model=SuccessResponse[ProductDetailSchema])
def get_product(request: Request, ctx: OpContext, slug: str):
    """Return the first product whose slug matches; 404 problem when none does."""
    result = _get(ctx, GetProductRequest(slug=slug))
    if not result.success:
        return _handle_error(result, instance=str(request.url))
    return SuccessResponse(
        data=ProductDetailSchema(**_dc(result.data)),
        elapsed_ms=result.elapsed_ms,
    )
