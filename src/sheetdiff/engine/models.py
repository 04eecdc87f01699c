"""Data models for workbook differences."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


SHEET_LEVEL_LABEL = "N/A"


class DiffType(str, Enum):
    """Kinds of difference between two workbooks."""

    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"


@dataclass(frozen=True)
class Difference:
    """A single cell-level or sheet-level difference.

    ``row`` and ``column`` are 1-based, with the header as row 1. Sheet-level
    differences use ``row=0``, ``column=0`` and the ``"N/A"`` cell label.
    """

    sheet: str
    row: int
    column: int
    cell_label: str
    type: DiffType
    old_value: Any
    new_value: Any
    description: str

    @property
    def is_sheet_level(self) -> bool:
        return self.row == 0 and self.column == 0

    def to_dict(self) -> dict:
        return {
            "sheet": self.sheet,
            "row": self.row,
            "column": self.column,
            "cellLabel": self.cell_label,
            "type": self.type.value,
            "oldValue": self.old_value,
            "newValue": self.new_value,
            "description": self.description,
        }


@dataclass
class DiffSummary:
    """Aggregate counts over a list of differences."""

    total: int = 0
    added: int = 0
    removed: int = 0
    modified: int = 0
    sheets_affected: list[str] = field(default_factory=list)
    sheets_added: list[str] = field(default_factory=list)
    sheets_removed: list[str] = field(default_factory=list)

    @classmethod
    def from_differences(cls, differences: list[Difference]) -> "DiffSummary":
        summary = cls(total=len(differences))
        for diff in differences:
            if diff.type is DiffType.ADDED:
                summary.added += 1
            elif diff.type is DiffType.REMOVED:
                summary.removed += 1
            else:
                summary.modified += 1

            if diff.sheet not in summary.sheets_affected:
                summary.sheets_affected.append(diff.sheet)
            if diff.is_sheet_level:
                target = (
                    summary.sheets_added
                    if diff.type is DiffType.ADDED
                    else summary.sheets_removed
                )
                target.append(diff.sheet)
        return summary

    @property
    def text(self) -> str:
        if not self.total:
            return "No differences found."
        return (
            f"{self.total} difference(s) across {len(self.sheets_affected)} sheet(s): "
            f"{self.added} added, {self.removed} removed, {self.modified} modified."
        )

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "added": self.added,
            "removed": self.removed,
            "modified": self.modified,
            "sheetsAffected": list(self.sheets_affected),
            "sheetsAdded": list(self.sheets_added),
            "sheetsRemoved": list(self.sheets_removed),
            "text": self.text,
        }
