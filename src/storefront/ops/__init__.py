"""
Operations layer — transport-agnostic business logic.

Every function takes an :class:`OperationContext` (carrying the ORM session)
and a typed request, and returns an :class:`OperationResult` or
:class:`PagedResult`. The API, CLI and site builder are thin adapters over
these functions.

Modules
-------
catalog     Product/category data fetching (list + first-match lookups)
seed        Literal catalog data and the idempotent upsert seeder
database    Schema creation, Alembic migrations, counts, health
"""

from storefront.ops.context import OperationContext
from storefront.ops.result import OperationError, OperationResult, PagedResult

__all__ = [
    "OperationContext",
    "OperationError",
    "OperationResult",
    "PagedResult",
]
