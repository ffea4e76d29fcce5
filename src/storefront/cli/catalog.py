"""
CLI: ``storefront products`` and ``storefront categories``.
"""

from __future__ import annotations

import typer

from storefront.cli.utils import DATABASE_HELP, make_context, output_paged, output_result
from storefront.ops.catalog import get_product, list_categories, list_products
from storefront.ops.requests import GetProductRequest, ListCategoriesRequest, ListProductsRequest

products_app = typer.Typer(no_args_is_help=True)
categories_app = typer.Typer(no_args_is_help=True)

_PRODUCT_COLUMNS = ("slug", "name", "price_cents", "currency", "available_for_sale", "categories")


@products_app.command("list")
def products_list(
    category: str | None = typer.Option(None, "--category", "-c", help="Category slug"),
    available_only: bool = typer.Option(False, "--available-only"),
    sort: str = typer.Option("name", "--sort", help="name | price | created_at"),
    order: str = typer.Option("asc", "--order", help="asc | desc"),
    limit: int = typer.Option(50, "--limit", "-n", min=1, max=500),
    offset: int = typer.Option(0, "--offset", min=0),
    database: str | None = typer.Option(None, "--database", "-d", help=DATABASE_HELP),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """List products with their categories."""
    request = ListProductsRequest(
        category=category,
        available_only=available_only,
        sort=sort,
        order=order,
        limit=limit,
        offset=offset,
    )
    with make_context(database) as ctx:
        result = list_products(ctx, request)
    output_paged(result, as_json=json_out, title="Products", columns=_PRODUCT_COLUMNS)


@products_app.command("show")
def products_show(
    slug: str = typer.Argument(..., help="Product slug"),
    database: str | None = typer.Option(None, "--database", "-d", help=DATABASE_HELP),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Show the first product with SLUG."""
    with make_context(database) as ctx:
        result = get_product(ctx, GetProductRequest(slug=slug))
    output_result(result, as_json=json_out, title="Product")


@categories_app.command("list")
def categories_list(
    database: str | None = typer.Option(None, "--database", "-d", help=DATABASE_HELP),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """List categories with their product counts."""
    with make_context(database) as ctx:
        result = list_categories(ctx, ListCategoriesRequest())
    output_paged(
        result,
        as_json=json_out,
        title="Categories",
        columns=("slug", "name", "product_count"),
    )
