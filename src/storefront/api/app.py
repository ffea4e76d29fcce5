"""
FastAPI application factory.

``create_app()`` wires middleware, routers, error handlers, and
lifespan events into a single ``FastAPI`` instance.

The lifespan owns the database engine, the session factory and the page
cache; they live on ``app.state`` and are handed to routers through
:mod:`storefront.api.deps`.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from storefront.api.middleware.errors import storefront_error_handler, unhandled_exception_handler
from storefront.api.middleware.request_id import RequestIDMiddleware
from storefront.api.middleware.timing import TimingMiddleware
from storefront.api.routers import categories, database, pages, products, revalidate
from storefront.core.errors import StorefrontError
from storefront.core.health import HealthCheck, create_health_router
from storefront.core.logging import configure_logging, get_logger
from storefront.core.orm.session import (
    create_schema,
    create_storefront_engine,
    storefront_session_factory,
)
from storefront.core.settings import StorefrontSettings, get_settings
from storefront.site.isr import PageCache
from storefront.site.renderer import PageRenderer


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan — startup / shutdown hooks."""
    settings: StorefrontSettings = app.state.settings
    configure_logging(
        level=settings.log_level,
        json_format=settings.json_logs,
        cache_loggers=settings.log_cache,
    )
    log = get_logger("storefront.api")
    log.info("storefront API starting", version=app.version, backend=settings.backend)

    engine = create_storefront_engine(
        settings.database_url,
        echo=settings.echo_sql,
        pool_size=settings.pool_size,
        max_overflow=settings.max_overflow,
    )
    if settings.create_schema_on_startup:
        tables = create_schema(engine)
        log.info("database initialized", tables=tables)

    session_factory = storefront_session_factory(engine)
    app.state.engine = engine
    app.state.session_factory = session_factory
    app.state.page_cache = PageCache(
        session_factory,
        PageRenderer(store_name=settings.store_name, default_currency=settings.default_currency),
        revalidate_seconds=settings.revalidate_seconds,
        max_pages=settings.page_cache_max_pages,
    )

    try:
        yield
    finally:
        engine.dispose()
        log.info("storefront API shutting down")


def _database_check(app: FastAPI) -> HealthCheck:
    def _select_one() -> None:
        with app.state.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    async def _ping() -> bool:
        await asyncio.to_thread(_select_one)
        return True

    return HealthCheck("database", _ping)


def create_app(*, settings: StorefrontSettings | None = None) -> FastAPI:
    """Build and return a fully-configured FastAPI application.

    Parameters
    ----------
    settings : StorefrontSettings | None
        Override settings (useful for testing). When ``None`` the cached
        singleton from :func:`get_settings` is used.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        lifespan=lifespan,
        docs_url=f"{settings.api_prefix}/docs",
        redoc_url=f"{settings.api_prefix}/redoc",
        openapi_url=f"{settings.api_prefix}/openapi.json",
    )
    app.state.settings = settings

    # ── Middleware (outermost → innermost) ────────────────────────────
    app.add_middleware(TimingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Exception handlers ───────────────────────────────────────────
    app.add_exception_handler(StorefrontError, storefront_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # ── Routers ──────────────────────────────────────────────────────
    prefix = settings.api_prefix

    # Health endpoints at root level (no prefix) for container healthchecks
    app.include_router(
        create_health_router("storefront", version=settings.api_version, checks=[_database_check(app)])
    )

    app.include_router(products.router, prefix=prefix, tags=["products"])
    app.include_router(categories.router, prefix=prefix, tags=["categories"])
    app.include_router(revalidate.router, prefix=prefix, tags=["revalidate"])
    app.include_router(database.router, prefix=prefix, tags=["database"])

    # Rendered pages at the root
    app.include_router(pages.router)

    return app
