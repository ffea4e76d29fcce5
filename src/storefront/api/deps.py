"""
FastAPI dependency injection — shared singletons and per-request factories.

Usage in routers::

    from storefront.api.deps import OpContext, Pagination

    @router.get("/products")
    def list_products(ctx: OpContext, pagination: Pagination):
        ...

The engine, session factory and page cache are created in the app lifespan
and read from ``request.app.state``; sessions and operation contexts are
created per request.
"""

from __future__ import annotations

import uuid
from collections.abc import Generator
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Query, Request
from sqlalchemy.orm import Session

from storefront.core.orm.session import session_scope
from storefront.ops.context import OperationContext
from storefront.site.isr import PageCache

# ── Database session (per-request) ───────────────────────────────────────


def get_session(request: Request) -> Generator[Session, None, None]:
    """Yield a session that commits when the request succeeds."""
    with session_scope(request.app.state.session_factory) as session:
        yield session


# ── Operation context (per-request) ──────────────────────────────────────


def get_operation_context(
    request: Request,
    session: Annotated[Session, Depends(get_session)],
) -> OperationContext:
    """Build an :class:`OperationContext` from the current request."""
    request_id = getattr(request.state, "request_id", str(uuid.uuid4()))
    return OperationContext(
        session=session,
        request_id=request_id,
        caller="api",
    )


# ── Page cache (singleton) ───────────────────────────────────────────────


def get_page_cache(request: Request) -> PageCache:
    return request.app.state.page_cache


# ── Pagination parameters (per-request) ─────────────────────────────────


@dataclass(frozen=True, slots=True)
class PaginationParams:
    """Offset pagination for list endpoints."""

    limit: int = 50
    offset: int = 0


def get_pagination(
    limit: int = Query(50, ge=1, le=500, description="Maximum items to return (1-500)"),
    offset: int = Query(0, ge=0, description="Pagination offset"),
) -> PaginationParams:
    return PaginationParams(limit=limit, offset=offset)


# ── Convenience type aliases ─────────────────────────────────────────────

OpContext = Annotated[OperationContext, Depends(get_operation_context)]
Pages = Annotated[PageCache, Depends(get_page_cache)]
Pagination = Annotated[PaginationParams, Depends(get_pagination)]
