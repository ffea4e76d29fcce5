"""
Database router — table counts and connectivity.

GET  /database/tables
GET  /database/health
"""

from __future__ import annotations

from fastapi import APIRouter

from storefront.api.deps import OpContext
from storefront.api.schemas.catalog import DatabaseHealthSchema, TableCountSchema
from storefront.api.schemas.common import SuccessResponse
from storefront.api.utils import _dc, _handle_error
from storefront.ops.database import check_database_health, get_table_counts

router = APIRouter(prefix="/database")


@router.get("/health", response_model=SuccessResponse[DatabaseHealthSchema])
def database_health(ctx: OpContext):
    """Check database connectivity.

    Example:
        GET /api/v1/database/health

        Response:
        {"data": {"connected": true, "backend": "sqlite", "latency_ms": 0.4}}
    """
    result = check_database_health(ctx)
    if not result.success:
        return _handle_error(result)
    return SuccessResponse(
        data=DatabaseHealthSchema(**_dc(result.data)),
        elapsed_ms=result.elapsed_ms,
    )


@router.get("/tables", response_model=SuccessResponse[list[TableCountSchema]])
def table_counts(ctx: OpContext):
    """Row counts for the catalog tables."""
    result = get_table_counts(ctx)
    if not result.success:
        return _handle_error(result)
    return SuccessResponse(
        data=[TableCountSchema(**_dc(tc)) for tc in (result.data or [])],
        elapsed_ms=result.elapsed_ms,
    )
