"""
Static-generation data fetching for the storefront pages.

Each page has a props function that runs the catalog queries and returns a
:class:`StaticProps`; the detail page also has a paths function listing every
slug to pre-render at build time. Props functions run both at build time
(``site build``) and on regeneration (``PageCache``).

A failed catalog query raises :class:`~storefront.core.errors.DatabaseError`
so a build aborts and a regeneration keeps the previous page. A missing
product is not an error: it yields ``StaticProps(not_found=True)``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from storefront.core.errors import DatabaseConnectionError, DatabaseError
from storefront.ops.catalog import get_product, list_categories, list_product_slugs, list_products
from storefront.ops.context import OperationContext
from storefront.ops.requests import GetProductRequest, ListCategoriesRequest, ListProductsRequest
from storefront.ops.result import NOT_FOUND, OperationResult


@dataclass(frozen=True, slots=True)
class StaticProps:
    """Props handed to a page template.

    Attributes:
        props: Template context.
        revalidate: Seconds after which the page is regenerated; ``None`` never.
        not_found: Render the 404 page instead.
    """

    props: dict[str, Any] = field(default_factory=dict)
    revalidate: int | None = None
    not_found: bool = False


@dataclass(frozen=True, slots=True)
class StaticPaths:
    """Routes to pre-render for a dynamic page.

    ``fallback="blocking"`` renders unknown paths on first request;
    ``False`` answers them with 404.
    """

    paths: list[str] = field(default_factory=list)
    fallback: Literal["blocking"] | Literal[False] = "blocking"


def product_route(slug: str) -> str:
    return f"/products/{slug}"


def get_home_props(ctx: OperationContext, revalidate: int | None = None) -> StaticProps:
    """Listing page: every product with its categories, plus the category list."""
    products = _unwrap(
        list_products(ctx, ListProductsRequest(limit=None)),
        "Failed to load products",
    )
    categories = _unwrap(
        list_categories(ctx, ListCategoriesRequest()),
        "Failed to load categories",
    )
    return StaticProps(
        props={"products": products, "categories": categories},
        revalidate=revalidate,
    )


def get_product_paths(ctx: OperationContext) -> StaticPaths:
    """One detail route per product slug."""
    slugs = _unwrap(list_product_slugs(ctx), "Failed to load product slugs")
    return StaticPaths(paths=[product_route(s) for s in slugs], fallback="blocking")


def get_product_props(
    ctx: OperationContext,
    slug: str,
    revalidate: int | None = None,
) -> StaticProps:
    """Detail page: the first product with this slug."""
    result = get_product(ctx, GetProductRequest(slug=slug))
    if result.failed_with(NOT_FOUND):
        return StaticProps(not_found=True, revalidate=revalidate)
    product = _unwrap(result, f"Failed to load product '{slug}'")
    return StaticProps(props={"product": product}, revalidate=revalidate)


def _unwrap(result: OperationResult[Any], action: str) -> Any:
    if result.success:
        return result.data
    error = result.error
    message = error.message if error else "unknown error"
    error_cls = DatabaseConnectionError if error and error.retryable else DatabaseError
    raise error_cls(f"{action}: {message}").with_context(**(error.details if error else {}))
