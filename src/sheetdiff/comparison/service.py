"""Comparison orchestration: load, diff, cache and paginate."""

import logging
import time
from datetime import datetime, timezone
from typing import Optional

from ..engine import DiffSummary, WorkbookDiffer
from ..workbook import WorkbookLoader
from .cache import ComparisonCache
from .models import ComparisonNotFoundError, ComparisonResult
from .pagination import DEFAULT_PAGE_SIZE, paginate, validate_page_args

logger = logging.getLogger(__name__)


class ComparisonService:
    """
    Service behind the compare and paginate endpoints.

    A comparison is cached only after both files have loaded and the diff
    has completed, so a failed request never leaves a partial entry behind.
    """

    def __init__(
        self,
        cache: ComparisonCache,
        loader: Optional[WorkbookLoader] = None,
        differ: Optional[WorkbookDiffer] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        """
        Initialize the comparison service.

        Args:
            cache: Store for compared workbooks
            loader: Spreadsheet loader (created if not provided)
            differ: Diff engine (created if not provided)
            page_size: Number of data rows sent per sheet in the first response
        """
        self.cache = cache
        self.loader = loader or WorkbookLoader()
        self.differ = differ or WorkbookDiffer()
        self.page_size = page_size

    def compare(
        self,
        file1_name: str,
        file1_content: bytes,
        file2_name: str,
        file2_content: bytes,
    ) -> ComparisonResult:
        """
        Compare two uploaded files.

        Args:
            file1_name: Original name of the first file
            file1_content: Bytes of the first file
            file2_name: Original name of the second file
            file2_content: Bytes of the second file

        Returns:
            ComparisonResult with the differences and the first page of
            every sheet in both files

        Raises:
            LoadError: If either file cannot be parsed
        """
        start_time = time.time()
        logger.info(f"Comparing '{file1_name}' with '{file2_name}'")

        workbook1 = self.loader.load(file1_content, file1_name)
        workbook2 = self.loader.load(file2_content, file2_name)

        differences = self.differ.compare(workbook1, workbook2)

        file1_data = self.differ.extract_normalized(workbook1)
        file2_data = self.differ.extract_normalized(workbook2)
        comparison_id = self.cache.put(file1_data, file2_data)

        summary = DiffSummary.from_differences(differences)
        logger.info(
            f"Comparison {comparison_id}: {summary.text} "
            f"({(time.time() - start_time) * 1000:.2f}ms)"
        )

        return ComparisonResult(
            id=comparison_id,
            file1_name=file1_name,
            file2_name=file2_name,
            differences=differences,
            summary=summary,
            file1_data=file1_data.to_dict(max_rows=self.page_size),
            file2_data=file2_data.to_dict(max_rows=self.page_size),
            timestamp=datetime.now(timezone.utc),
        )

    def get_page(
        self,
        comparison_id: str,
        sheet: str,
        start_row: int = 0,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> dict:
        """
        Fetch a window of data rows from a cached comparison.

        Raises:
            InvalidPageRequestError: If start_row or limit is out of bounds
            ComparisonNotFoundError: If the comparison is unknown or expired
        """
        validate_page_args(start_row, limit)

        comparison = self.cache.get(comparison_id)
        if comparison is None:
            logger.warning(f"Comparison {comparison_id} not found")
            raise ComparisonNotFoundError(comparison_id)

        pages = paginate(comparison, sheet, start_row, limit)
        return {
            "comparisonId": comparison_id,
            "sheet": sheet,
            "file1": pages.file1.to_dict() if pages.file1 else None,
            "file2": pages.file2.to_dict() if pages.file2 else None,
            "startRow": start_row,
            "limit": limit,
        }
