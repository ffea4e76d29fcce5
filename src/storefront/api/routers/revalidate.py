"""
On-demand revalidation.

    POST /revalidate?path=/products/mug   drop one page
    POST /revalidate                      drop every page

Dropped pages are regenerated on their next request.
"""

from __future__ import annotations

from fastapi import APIRouter, Query

from storefront.api.deps import Pages
from storefront.api.schemas.catalog import RevalidateSchema
from storefront.api.schemas.common import SuccessResponse

router = APIRouter(prefix="/revalidate")


@router.post("", response_model=SuccessResponse[RevalidateSchema])
def revalidate(
    cache: Pages,
    path: str | None = Query(None, description="Page route, e.g. /products/mug"),
):
    dropped = cache.invalidate(path)
    return SuccessResponse(data=RevalidateSchema(revalidated=dropped, all=path is None))
