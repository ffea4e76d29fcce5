"""
Catalog operations — the data fetching behind the storefront pages.

``list_products`` is the many-row query of the listing page (every product
with its categories eagerly loaded); ``get_product`` is the first-match query
of the detail page. Both return plain response dataclasses so nothing
downstream touches a live ORM instance.
"""

from __future__ import annotations

from sqlalchemy import Select, func, or_, select
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import selectinload

from storefront.core.errors import ErrorCategory
from storefront.core.logging import get_logger
from storefront.core.orm.tables import CategoryTable, ProductTable, product_categories
from storefront.ops.context import OperationContext
from storefront.ops.requests import (
    PRODUCT_SORT_FIELDS,
    GetProductRequest,
    ListCategoriesRequest,
    ListProductsRequest,
)
from storefront.ops.responses import (
    CategoryDetail,
    CategoryRef,
    CategorySummary,
    ProductDetail,
    ProductSummary,
)
from storefront.ops.result import (
    INTERNAL,
    NOT_FOUND,
    UNAVAILABLE,
    VALIDATION_FAILED,
    OperationError,
    OperationResult,
    PagedResult,
    start_timer,
)

logger = get_logger(__name__)

_SORT_COLUMNS = {
    "name": ProductTable.name,
    "price": ProductTable.price_cents,
    "created_at": ProductTable.created_at,
}


def list_products(
    ctx: OperationContext,
    request: ListProductsRequest,
) -> PagedResult[ProductSummary]:
    """List products with their categories, filtered, sorted and paged."""
    timer = start_timer()

    if request.sort not in PRODUCT_SORT_FIELDS:
        return PagedResult(
            success=False,
            error=_validation(f"Unknown sort field '{request.sort}'", "sort"),
            elapsed_ms=timer.elapsed_ms,
        )
    if request.order not in ("asc", "desc"):
        return PagedResult(
            success=False,
            error=_validation(f"Unknown sort order '{request.order}'", "order"),
            elapsed_ms=timer.elapsed_ms,
        )

    try:
        stmt = _filtered(select(ProductTable), request)
        count_stmt = _filtered(select(func.count()).select_from(ProductTable), request)

        column = _SORT_COLUMNS[request.sort]
        stmt = stmt.options(selectinload(ProductTable.categories)).order_by(
            column.desc() if request.order == "desc" else column.asc(),
            ProductTable.id,
        )
        if request.offset:
            stmt = stmt.offset(request.offset)
        if request.limit is not None:
            stmt = stmt.limit(request.limit)

        products = ctx.session.scalars(stmt).all()
        total = ctx.session.scalar(count_stmt) or 0

        items = [_to_summary(p) for p in products]
        logger.debug("products_listed", count=len(items), total=total, category=request.category)
        return PagedResult.from_items(
            items,
            total=total,
            limit=request.limit if request.limit is not None else total,
            offset=request.offset,
            elapsed_ms=timer.elapsed_ms,
        )
    except SQLAlchemyError as exc:
        logger.exception("op_failed", op="list_products", error=str(exc))
        return PagedResult(
            success=False,
            error=_db_error(exc, "Failed to list products"),
            elapsed_ms=timer.elapsed_ms,
        )


def get_product(
    ctx: OperationContext,
    request: GetProductRequest,
) -> OperationResult[ProductDetail]:
    """Return the first product matching the slug or id."""
    timer = start_timer()

    conditions = []
    if request.slug:
        conditions.append(ProductTable.slug == request.slug)
    if request.product_id:
        conditions.append(ProductTable.id == request.product_id)
    if not conditions:
        return OperationResult.fail(
            VALIDATION_FAILED,
            "Either slug or product_id is required",
            category=ErrorCategory.VALIDATION,
            elapsed_ms=timer.elapsed_ms,
        )

    try:
        stmt = (
            select(ProductTable)
            .options(selectinload(ProductTable.categories))
            .where(or_(*conditions))
            .order_by(ProductTable.id)
            .limit(1)
        )
        product = ctx.session.scalars(stmt).first()
    except SQLAlchemyError as exc:
        logger.exception("op_failed", op="get_product", error=str(exc))
        return OperationResult(
            success=False,
            error=_db_error(exc, "Failed to fetch product"),
            elapsed_ms=timer.elapsed_ms,
        )

    if product is None:
        identifier = request.slug or request.product_id
        return OperationResult.fail(
            NOT_FOUND,
            f"Product '{identifier}' not found",
            category=ErrorCategory.NOT_FOUND,
            details={"entity": "product", "identifier": identifier},
            elapsed_ms=timer.elapsed_ms,
        )

    return OperationResult.ok(_to_detail(product), elapsed_ms=timer.elapsed_ms)


def list_product_slugs(ctx: OperationContext) -> OperationResult[list[str]]:
    """Every product slug, ordered — the static paths of the detail page."""
    timer = start_timer()
    try:
        slugs = list(ctx.session.scalars(select(ProductTable.slug).order_by(ProductTable.slug)))
    except SQLAlchemyError as exc:
        logger.exception("op_failed", op="list_product_slugs", error=str(exc))
        return OperationResult(
            success=False,
            error=_db_error(exc, "Failed to list product slugs"),
            elapsed_ms=timer.elapsed_ms,
        )
    return OperationResult.ok(slugs, elapsed_ms=timer.elapsed_ms)


def list_categories(
    ctx: OperationContext,
    request: ListCategoriesRequest,
) -> PagedResult[CategorySummary]:
    """List categories ordered by name, each with its product count."""
    timer = start_timer()
    try:
        product_count = func.count(product_categories.c.product_id)
        stmt = (
            select(CategoryTable, product_count)
            .outerjoin(product_categories, product_categories.c.category_id == CategoryTable.id)
            .group_by(CategoryTable.id)
            .order_by(CategoryTable.name, CategoryTable.id)
        )
        if request.offset:
            stmt = stmt.offset(request.offset)
        if request.limit is not None:
            stmt = stmt.limit(request.limit)

        rows = ctx.session.execute(stmt).all()
        total = ctx.session.scalar(select(func.count()).select_from(CategoryTable)) or 0

        items = [
            CategorySummary(
                id=category.id,
                slug=category.slug,
                name=category.name,
                description=category.description,
                product_count=count,
            )
            for category, count in rows
        ]
        return PagedResult.from_items(
            items,
            total=total,
            limit=request.limit if request.limit is not None else total,
            offset=request.offset,
            elapsed_ms=timer.elapsed_ms,
        )
    except SQLAlchemyError as exc:
        logger.exception("op_failed", op="list_categories", error=str(exc))
        return PagedResult(
            success=False,
            error=_db_error(exc, "Failed to list categories"),
            elapsed_ms=timer.elapsed_ms,
        )


def get_category(ctx: OperationContext, slug: str) -> OperationResult[CategoryDetail]:
    """Return a category with its products ordered by name."""
    timer = start_timer()
    try:
        stmt = (
            select(CategoryTable)
            .options(selectinload(CategoryTable.products).selectinload(ProductTable.categories))
            .where(CategoryTable.slug == slug)
        )
        category = ctx.session.scalars(stmt).first()
    except SQLAlchemyError as exc:
        logger.exception("op_failed", op="get_category", error=str(exc))
        return OperationResult(
            success=False,
            error=_db_error(exc, "Failed to fetch category"),
            elapsed_ms=timer.elapsed_ms,
        )

    if category is None:
        return OperationResult.fail(
            NOT_FOUND,
            f"Category '{slug}' not found",
            category=ErrorCategory.NOT_FOUND,
            details={"entity": "category", "identifier": slug},
            elapsed_ms=timer.elapsed_ms,
        )

    products = sorted(category.products, key=lambda p: (p.name, p.id))
    return OperationResult.ok(
        CategoryDetail(
            id=category.id,
            slug=category.slug,
            name=category.name,
            description=category.description,
            products=[_to_summary(p) for p in products],
        ),
        elapsed_ms=timer.elapsed_ms,
    )


# ------------------------------------------------------------------ #
# Helpers
# ------------------------------------------------------------------ #


def _filtered(stmt: Select, request: ListProductsRequest) -> Select:
    if request.category:
        stmt = stmt.where(ProductTable.categories.any(CategoryTable.slug == request.category))
    if request.available_only:
        stmt = stmt.where(ProductTable.available_for_sale.is_(True))
    return stmt


def _refs(product: ProductTable) -> list[CategoryRef]:
    return [CategoryRef(id=c.id, slug=c.slug, name=c.name) for c in product.categories]


def _to_summary(product: ProductTable) -> ProductSummary:
    return ProductSummary(
        id=product.id,
        slug=product.slug,
        name=product.name,
        price_cents=product.price_cents,
        currency=product.currency,
        image_url=product.image_url,
        available_for_sale=bool(product.available_for_sale),
        categories=_refs(product),
    )


def _to_detail(product: ProductTable) -> ProductDetail:
    return ProductDetail(
        id=product.id,
        slug=product.slug,
        name=product.name,
        description=product.description,
        price_cents=product.price_cents,
        currency=product.currency,
        image_url=product.image_url,
        available_for_sale=bool(product.available_for_sale),
        categories=_refs(product),
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


def _validation(message: str, field_name: str) -> OperationError:
    return OperationError(
        code=VALIDATION_FAILED,
        message=message,
        category=ErrorCategory.VALIDATION,
        details={"field": field_name},
    )


def _db_error(exc: SQLAlchemyError, message: str) -> OperationError:
    if isinstance(exc, OperationalError):
        return OperationError(
            code=UNAVAILABLE,
            message=f"{message}: database unavailable",
            category=ErrorCategory.DATABASE,
            retryable=True,
        )
    return OperationError(
        code=INTERNAL,
        message=f"{message}: {exc}",
        category=ErrorCategory.DATABASE,
    )
