"""Comparison cache, pagination and orchestration."""

from .cache import ComparisonCache
from .models import (
    CachedComparison,
    ComparisonNotFoundError,
    ComparisonResult,
    InvalidPageRequestError,
    PageSet,
    SheetPage,
)
from .pagination import DEFAULT_PAGE_SIZE, page_sheet, paginate
from .service import ComparisonService

__all__ = [
    "ComparisonCache",
    "CachedComparison",
    "ComparisonNotFoundError",
    "ComparisonResult",
    "InvalidPageRequestError",
    "PageSet",
    "SheetPage",
    "DEFAULT_PAGE_SIZE",
    "page_sheet",
    "paginate",
    "ComparisonService",
]
