"""Data models for cached comparisons and paginated views."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from ..engine.models import DiffSummary, Difference
from ..workbook.models import Workbook


class ComparisonNotFoundError(Exception):
    """Raised when a comparison id is unknown or has expired."""

    def __init__(self, comparison_id: str):
        self.comparison_id = comparison_id
        super().__init__(
            f"Comparison '{comparison_id}' not found. Please re-upload files."
        )


class InvalidPageRequestError(ValueError):
    """Raised for malformed pagination arguments."""


@dataclass(frozen=True)
class CachedComparison:
    """Both workbooks of a comparison, held until ``expires_at``."""

    id: str
    workbook1: Workbook
    workbook2: Workbook
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at


@dataclass(frozen=True)
class SheetPage:
    """A window of data rows from one sheet."""

    headers: list[str]
    rows: list[list[Any]]
    total_rows: int
    has_more: bool

    def to_dict(self) -> dict:
        return {
            "headers": list(self.headers),
            "rows": self.rows,
            "totalRows": self.total_rows,
            "hasMore": self.has_more,
        }


@dataclass(frozen=True)
class PageSet:
    """The same window taken from both workbooks; ``None`` where a sheet is missing."""

    file1: Optional[SheetPage]
    file2: Optional[SheetPage]


class ComparisonResult(BaseModel):
    """Result of comparing two uploaded files."""

    id: str
    file1_name: str
    file2_name: str
    differences: list[Difference] = Field(default_factory=list)
    summary: DiffSummary
    file1_data: dict
    file2_data: dict
    timestamp: datetime

    def to_response(self) -> dict:
        return {
            "id": self.id,
            "file1Name": self.file1_name,
            "file2Name": self.file2_name,
            "differences": [diff.to_dict() for diff in self.differences],
            "summary": self.summary.to_dict(),
            "file1Data": self.file1_data,
            "file2Data": self.file2_data,
            "timestamp": self.timestamp.isoformat(),
        }
