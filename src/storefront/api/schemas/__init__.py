"""API schemas package.

Pydantic schemas define the HTTP contract; ops dataclasses are converted
into them at the router boundary.
"""

from storefront.api.schemas.catalog import (
    CategoryDetailSchema,
    CategoryRefSchema,
    CategorySummarySchema,
    DatabaseHealthSchema,
    ProductDetailSchema,
    ProductSummarySchema,
    RevalidateSchema,
    TableCountSchema,
)
from storefront.api.schemas.common import (
    ErrorDetail,
    PagedResponse,
    PageMeta,
    ProblemDetail,
    SuccessResponse,
)

__all__ = [
    "CategoryDetailSchema",
    "CategoryRefSchema",
    "CategorySummarySchema",
    "DatabaseHealthSchema",
    "ErrorDetail",
    "PageMeta",
    "PagedResponse",
    "ProblemDetail",
    "ProductDetailSchema",
    "ProductSummarySchema",
    "RevalidateSchema",
    "SuccessResponse",
    "TableCountSchema",
]
