"""Row-window pagination over cached workbooks."""

from typing import Optional

from ..workbook.models import Sheet
from .models import CachedComparison, InvalidPageRequestError, PageSet, SheetPage

DEFAULT_PAGE_SIZE = 25


def validate_page_args(start_row: int, limit: int):
    """Reject a negative start row or a non-positive limit."""
    if limit <= 0:
        raise InvalidPageRequestError(f"limit must be a positive integer, got {limit}")
    if start_row < 0:
        raise InvalidPageRequestError(
            f"startRow must be zero or greater, got {start_row}"
        )


def page_sheet(sheet: Sheet, start_row: int, limit: int) -> SheetPage:
    """Slice the data rows ``[start_row, start_row + limit)`` of a sheet.

    Rows are 0-indexed from the first row after the header. A start row past
    the end yields an empty page rather than an error.
    """
    validate_page_args(start_row, limit)
    window = sheet.rows[start_row:start_row + limit]
    return SheetPage(
        headers=list(sheet.headers),
        rows=[[value.to_json() for value in row] for row in window],
        total_rows=sheet.total_rows,
        has_more=start_row + limit < sheet.total_rows,
    )


def _page_or_none(sheet: Optional[Sheet], start_row: int, limit: int) -> Optional[SheetPage]:
    if sheet is None:
        return None
    return page_sheet(sheet, start_row, limit)


def paginate(
    comparison: CachedComparison,
    sheet_name: str,
    start_row: int = 0,
    limit: int = DEFAULT_PAGE_SIZE,
) -> PageSet:
    """Take the same row window from the named sheet of both workbooks."""
    validate_page_args(start_row, limit)
    return PageSet(
        file1=_page_or_none(comparison.workbook1.sheet(sheet_name), start_row, limit),
        file2=_page_or_none(comparison.workbook2.sheet(sheet_name), start_row, limit),
    )
