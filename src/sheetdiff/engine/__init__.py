"""Workbook diff engine."""

from .differ import WorkbookDiffer
from .models import DiffSummary, DiffType, Difference

__all__ = ["WorkbookDiffer", "DiffSummary", "DiffType", "Difference"]
