"""
Rendered storefront pages.

    GET /                   listing page
    GET /products/{slug}    product detail page

Pages come from the :class:`~storefront.site.isr.PageCache`. A stale page is
served as is and regenerated after the response is sent.
"""

from __future__ import annotations

from fastapi import APIRouter, BackgroundTasks
from fastapi.responses import HTMLResponse

from storefront.api.deps import Pages
from storefront.site.isr import PageCache
from storefront.site.props import product_route

router = APIRouter()

# Pages without a revalidation interval are cached for a year
_IMMUTABLE_MAX_AGE = 31_536_000


def _serve(cache: PageCache, route: str, background_tasks: BackgroundTasks) -> HTMLResponse:
    lookup = cache.get(route)
    if lookup.state == "STALE":
        background_tasks.add_task(cache.refresh, lookup.page.route)

    page = lookup.page
    max_age = page.revalidate if page.revalidate is not None else _IMMUTABLE_MAX_AGE
    return HTMLResponse(
        content=page.html,
        status_code=page.status_code,
        headers={
            "Cache-Control": f"s-maxage={max_age}, stale-while-revalidate",
            "X-Page-Cache": lookup.state,
        },
    )


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
def home_page(cache: Pages, background_tasks: BackgroundTasks):
    return _serve(cache, "/", background_tasks)


@router.get("/products/{slug}", response_class=HTMLResponse, include_in_schema=False)
def product_page(slug: str, cache: Pages, background_tasks: BackgroundTasks):
    return _serve(cache, product_route(slug), background_tasks)
