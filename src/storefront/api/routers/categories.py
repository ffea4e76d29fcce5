"""
Categories router.

Endpoints:
    GET /categories         List categories with product counts
    GET /categories/{slug}  Category with its products
"""

from __future__ import annotations

from fastapi import APIRouter, Request

from storefront.api.deps import OpContext, Pagination
from storefront.api.schemas.catalog import CategoryDetailSchema, CategorySummarySchema
from storefront.api.schemas.common import PagedResponse, PageMeta, SuccessResponse
from storefront.api.utils import _dc, _handle_error
from storefront.ops.catalog import get_category as _get
from storefront.ops.catalog import list_categories as _list
from storefront.ops.requests import ListCategoriesRequest

router = APIRouter(prefix="/categories")


@router.get("", response_model=PagedResponse[CategorySummarySchema])
def list_categories(request: Request, ctx: OpContext, pagination: Pagination):
    """List categories ordered by name."""
    result = _list(ctx, ListCategoriesRequest(limit=pagination.limit, offset=pagination.offset))
    if not result.success:
        return _handle_error(result, instance=str(request.url))
    return PagedResponse(
        data=[CategorySummarySchema(**_dc(c)) for c in (result.data or [])],
        page=PageMeta.from_result(total=result.total, limit=result.limit, offset=result.offset),
        elapsed_ms=result.elapsed_ms,
    )


@router.get("/{slug}", response_model=SuccessResponse[CategoryDetailSchema])
def get_category(request: Request, ctx: OpContext, slug: str):
    result = _get(ctx, slug)
    if not result.success:
        return _handle_error(result, instance=str(request.url))
    return SuccessResponse(
        data=CategoryDetailSchema(**_dc(result.data)),
        elapsed_ms=result.elapsed_ms,
    )
