"""
Seed operations — idempotent upsert of the baseline catalog.

Categories are upserted first, then products, each product connected to its
categories by id. Running the seeder any number of times leaves exactly one
row per literal record.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, TypeVar

from sqlalchemy.exc import IntegrityError as SAIntegrityError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.core.errors import ErrorCategory, ValidationError
from storefront.core.logging import get_logger
from storefront.core.orm.base import StorefrontBase
from storefront.core.orm.tables import CategoryTable, ProductTable
from storefront.ops.context import OperationContext
from storefront.ops.requests import SeedRequest
from storefront.ops.responses import SeedResult
from storefront.ops.result import (
    CONFLICT,
    INTERNAL,
    VALIDATION_FAILED,
    OperationResult,
    start_timer,
)
from storefront.ops.seed_data import CATEGORIES, PRODUCTS

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=StorefrontBase)


def upsert(
    session: Session,
    model: type[ModelT],
    where_id: str,
    *,
    create: Mapping[str, Any],
    update: Mapping[str, Any],
) -> tuple[ModelT, bool]:
    """Insert ``create`` when no row has ``where_id``, else apply ``update``.

    Relationship attributes (``categories``) may appear in either payload.
    Returns the instance and whether it was created.
    """
    instance = session.get(model, where_id)
    if instance is None:
        instance = model(**{**create, "id": where_id})
        session.add(instance)
        return instance, True

    for key, value in update.items():
        setattr(instance, key, value)
    return instance, False


def seed_database(
    ctx: OperationContext,
    request: SeedRequest,
    *,
    categories: Sequence[Mapping[str, Any]] = CATEGORIES,
    products: Sequence[Mapping[str, Any]] = PRODUCTS,
) -> OperationResult[SeedResult]:
    """Upsert every literal category and product by id."""
    timer = start_timer()
    session = ctx.session

    counts = {"categories_created": 0, "categories_updated": 0,
              "products_created": 0, "products_updated": 0}
    try:
        if ctx.dry_run:
            return OperationResult.ok(
                _preview(session, categories, products),
                elapsed_ms=timer.elapsed_ms,
            )

        by_id: dict[str, CategoryTable] = {}
        for record in categories:
            fields = dict(record)
            category, created = upsert(
                session,
                CategoryTable,
                fields["id"],
                create=fields,
                update=fields if request.refresh else {},
            )
            by_id[category.id] = category
            counts["categories_created" if created else "categories_updated"] += 1

        for record in products:
            fields = dict(record)
            linked = _resolve_categories(session, by_id, fields)
            fields["categories"] = linked
            _, created = upsert(
                session,
                ProductTable,
                fields["id"],
                create=fields,
                update=fields if request.refresh else {},
            )
            counts["products_created" if created else "products_updated"] += 1

        session.commit()
    except ValidationError as exc:
        session.rollback()
        logger.warning("seed_rejected", error=exc.message, **exc.context.to_dict())
        return OperationResult.fail(
            VALIDATION_FAILED,
            exc.message,
            category=ErrorCategory.VALIDATION,
            details=exc.to_dict().get("context", {}),
            elapsed_ms=timer.elapsed_ms,
        )
    except SAIntegrityError as exc:
        session.rollback()
        logger.exception("seed_failed", error=str(exc.orig))
        return OperationResult.fail(
            CONFLICT,
            f"Seed data conflicts with existing rows: {exc.orig}",
            category=ErrorCategory.DATABASE,
            elapsed_ms=timer.elapsed_ms,
        )
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("seed_failed", error=str(exc))
        return OperationResult.fail(
            INTERNAL,
            f"Failed to seed database: {exc}",
            category=ErrorCategory.DATABASE,
            elapsed_ms=timer.elapsed_ms,
        )

    result = SeedResult(**counts)
    logger.info("seed_completed", refresh=request.refresh, **counts)
    return OperationResult.ok(result, elapsed_ms=timer.elapsed_ms)


# ------------------------------------------------------------------ #
# Helpers
# ------------------------------------------------------------------ #


def _resolve_categories(
    session: Session,
    by_id: dict[str, CategoryTable],
    fields: dict[str, Any],
) -> list[CategoryTable]:
    """Pop ``category_ids`` from *fields* and load the matching categories."""
    linked: list[CategoryTable] = []
    for category_id in fields.pop("category_ids", []):
        category = by_id.get(category_id) or session.get(CategoryTable, category_id)
        if category is None:
            raise _unknown_category(fields["id"], category_id)
        linked.append(category)
    return linked


def _unknown_category(product_id: str, category_id: str) -> ValidationError:
    return ValidationError(
        f"Product '{product_id}' references unknown category '{category_id}'",
        field="category_ids",
        value=category_id,
    ).with_context(entity="product", identifier=product_id)


def _preview(
    session: Session,
    categories: Sequence[Mapping[str, Any]],
    products: Sequence[Mapping[str, Any]],
) -> SeedResult:
    """Count what a real run would create or update, applying the same checks."""
    seeded_ids = {r["id"] for r in categories}
    existing_categories = sum(
        1 for r in categories if session.get(CategoryTable, r["id"]) is not None
    )
    existing_products = 0
    for record in products:
        for category_id in record.get("category_ids", []):
            if category_id not in seeded_ids and session.get(CategoryTable, category_id) is None:
                raise _unknown_category(record["id"], category_id)
        if session.get(ProductTable, record["id"]) is not None:
            existing_products += 1
    return SeedResult(
        categories_created=len(categories) - existing_categories,
        categories_updated=existing_categories,
        products_created=len(products) - existing_products,
        products_updated=existing_products,
        dry_run=True,
    )
