"""
Database operations.

Thin wrappers around the ORM metadata and Alembic for table creation,
migrations, row counts and health checks.
"""

from __future__ import annotations

from pathlib import Path

from sqlalchemy import func, select, text
from sqlalchemy.exc import SQLAlchemyError

from storefront.core.errors import ErrorCategory, MissingConfigError
from storefront.core.logging import get_logger
from storefront.core.orm.base import StorefrontBase
from storefront.core.orm.session import create_schema
from storefront.ops.context import OperationContext
from storefront.ops.requests import MigrateRequest
from storefront.ops.responses import (
    DatabaseHealth,
    DatabaseInitResult,
    MigrationResult,
    TableCount,
)
from storefront.ops.result import (
    INTERNAL,
    UNAVAILABLE,
    VALIDATION_FAILED,
    OperationResult,
    start_timer,
)

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parent.parent / "migrations"


def initialize_database(ctx: OperationContext) -> OperationResult[DatabaseInitResult]:
    """Create all catalog tables straight from the ORM metadata (idempotent)."""
    timer = start_timer()
    table_names = sorted(StorefrontBase.metadata.tables)

    if ctx.dry_run:
        return OperationResult.ok(
            DatabaseInitResult(tables_created=table_names, dry_run=True),
            elapsed_ms=timer.elapsed_ms,
        )

    try:
        table_names = create_schema(ctx.session.get_bind())
    except SQLAlchemyError as exc:
        logger.exception("op_failed", op="initialize_database", error=str(exc))
        return OperationResult.fail(
            INTERNAL,
            f"Failed to create tables: {exc}",
            category=ErrorCategory.DATABASE,
            elapsed_ms=timer.elapsed_ms,
        )

    logger.info("schema_created", tables=table_names)
    return OperationResult.ok(
        DatabaseInitResult(tables_created=table_names),
        elapsed_ms=timer.elapsed_ms,
    )


def alembic_config(database_url: str):
    """Build an Alembic ``Config`` pointing at the packaged migrations."""
    from alembic.config import Config

    if not database_url:
        raise MissingConfigError("database_url")

    cfg = Config()
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    # Percent signs in passwords would otherwise be read as interpolation
    cfg.set_main_option("sqlalchemy.url", database_url.replace("%", "%%"))
    cfg.attributes["database_url"] = database_url
    return cfg


def migrate_database(request: MigrateRequest) -> OperationResult[MigrationResult]:
    """Upgrade the database to ``request.revision`` with Alembic."""
    from alembic import command
    from alembic.util import CommandError

    timer = start_timer()
    try:
        cfg = alembic_config(request.database_url)
    except MissingConfigError as exc:
        return OperationResult.from_exception(VALIDATION_FAILED, exc, elapsed_ms=timer.elapsed_ms)

    backend = request.database_url.split(":", 1)[0].split("+", 1)[0]
    try:
        command.upgrade(cfg, request.revision)
    except CommandError as exc:
        logger.warning("migration_rejected", revision=request.revision, error=str(exc))
        return OperationResult.fail(
            VALIDATION_FAILED,
            str(exc),
            category=ErrorCategory.VALIDATION,
            details={"field": "revision", "revision": request.revision},
            elapsed_ms=timer.elapsed_ms,
        )
    except SQLAlchemyError as exc:
        logger.exception("op_failed", op="migrate_database", error=str(exc))
        return OperationResult.fail(
            INTERNAL,
            f"Migration to '{request.revision}' failed: {exc}",
            category=ErrorCategory.DATABASE,
            elapsed_ms=timer.elapsed_ms,
        )

    logger.info("database_migrated", revision=request.revision, backend=backend)
    return OperationResult.ok(
        MigrationResult(revision=request.revision, backend=backend),
        elapsed_ms=timer.elapsed_ms,
    )


def get_table_counts(ctx: OperationContext) -> OperationResult[list[TableCount]]:
    """Row counts for every managed table."""
    timer = start_timer()
    try:
        counts = [
            TableCount(table=name, count=ctx.session.scalar(select(func.count()).select_from(table)) or 0)
            for name, table in sorted(StorefrontBase.metadata.tables.items())
        ]
    except SQLAlchemyError as exc:
        logger.exception("op_failed", op="get_table_counts", error=str(exc))
        return OperationResult.fail(
            INTERNAL,
            f"Failed to count rows: {exc}",
            category=ErrorCategory.DATABASE,
            elapsed_ms=timer.elapsed_ms,
        )
    return OperationResult.ok(counts, elapsed_ms=timer.elapsed_ms)


def check_database_health(ctx: OperationContext) -> OperationResult[DatabaseHealth]:
    """Round-trip ``SELECT 1`` and report backend and latency."""
    timer = start_timer()
    backend = ctx.session.get_bind().dialect.name
    try:
        ctx.session.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.warning("database_unhealthy", backend=backend, error=str(exc))
        return OperationResult.fail(
            UNAVAILABLE,
            f"Database unreachable: {exc}",
            category=ErrorCategory.DATABASE,
            retryable=True,
            details={"backend": backend},
            elapsed_ms=timer.elapsed_ms,
        )
    return OperationResult.ok(
        DatabaseHealth(connected=True, backend=backend, latency_ms=round(timer.elapsed_ms, 2)),
        elapsed_ms=timer.elapsed_ms,
    )
