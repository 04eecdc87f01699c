"""Cell-level diff generation between two workbooks."""

import logging
from typing import Optional

from ..workbook.models import CellValue, Sheet, Workbook
from ..workbook.notation import encode_cell
from .models import SHEET_LEVEL_LABEL, DiffType, Difference

logger = logging.getLogger(__name__)


class WorkbookDiffer:
    """Generates differences between two normalized workbooks."""

    def compare(self, old: Workbook, new: Workbook) -> list[Difference]:
        """
        Compare two workbooks sheet by sheet and cell by cell.

        Sheets are visited in order of first appearance in ``old`` then
        ``new``. Within a sheet, cells are visited row by row over the
        bounding rectangle of both occupied ranges, header row included.

        Args:
            old: The original workbook
            new: The workbook to compare against it

        Returns:
            Differences in sheet, row, column order
        """
        differences: list[Difference] = []
        sheet_names = list(dict.fromkeys(old.sheet_names + new.sheet_names))

        for name in sheet_names:
            old_sheet = old.sheet(name)
            new_sheet = new.sheet(name)

            if old_sheet is None:
                differences.append(self._sheet_difference(name, DiffType.ADDED))
                continue
            if new_sheet is None:
                differences.append(self._sheet_difference(name, DiffType.REMOVED))
                continue

            differences.extend(self.compare_sheets(old_sheet, new_sheet))

        logger.info(
            f"Compared {len(sheet_names)} sheet(s), found {len(differences)} difference(s)"
        )
        return differences

    def compare_sheets(self, old: Sheet, new: Sheet) -> list[Difference]:
        """Compare two sheets with the same name over their raw grids."""
        differences = []
        max_row = max(old.last_row, new.last_row)
        max_col = max(old.last_col, new.last_col)

        for row in range(max_row + 1):
            for col in range(max_col + 1):
                diff = self.diff_cell(old.name, row, col, old.cell(row, col), new.cell(row, col))
                if diff is not None:
                    differences.append(diff)

        logger.debug(
            f"Sheet '{old.name}': scanned {(max_row + 1) * (max_col + 1)} cell(s), "
            f"{len(differences)} difference(s)"
        )
        return differences

    def diff_cell(
        self,
        sheet: str,
        row: int,
        col: int,
        old_value: CellValue,
        new_value: CellValue,
    ) -> Optional[Difference]:
        """Classify a single 0-based address; ``None`` when both sides agree."""
        if old_value == new_value:
            return None

        label = encode_cell(row, col)
        prefix = "Header cell" if row == 0 else "Cell"

        if old_value.is_absent:
            diff_type = DiffType.ADDED
            description = f"{prefix} {label} added with value: {new_value.display()}"
        elif new_value.is_absent:
            diff_type = DiffType.REMOVED
            description = f"{prefix} {label} removed (was: {old_value.display()})"
        else:
            diff_type = DiffType.MODIFIED
            description = (
                f'{prefix} {label} changed from "{old_value.display()}" '
                f'to "{new_value.display()}"'
            )

        return Difference(
            sheet=sheet,
            row=row + 1,
            column=col + 1,
            cell_label=label,
            type=diff_type,
            old_value=old_value.to_json(),
            new_value=new_value.to_json(),
            description=description,
        )

    @staticmethod
    def _sheet_difference(name: str, diff_type: DiffType) -> Difference:
        verb = "added" if diff_type is DiffType.ADDED else "removed"
        return Difference(
            sheet=name,
            row=0,
            column=0,
            cell_label=SHEET_LEVEL_LABEL,
            type=diff_type,
            old_value=None,
            new_value=None,
            description=f'Sheet "{name}" {verb} in new file',
        )

    def extract_normalized(self, workbook: Workbook) -> Workbook:
        """Snapshot a loaded workbook for caching and display.

        Workbooks are normalized at load time, so this returns its input.
        """
        return workbook
