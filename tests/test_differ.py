"""Tests for the workbook diff engine."""

import pytest

from sheetdiff.engine import DiffSummary, DiffType, WorkbookDiffer
from sheetdiff.workbook import CellValue, Sheet, Workbook


@pytest.fixture
def differ() -> WorkbookDiffer:
    return WorkbookDiffer()


def _key(diff):
    return (diff.sheet, diff.row, diff.column, diff.type, diff.old_value, diff.new_value)


class TestCellDifferences:
    """Test cell-level comparison."""

    def test_modified_and_appended_rows(self, differ, scenario_workbooks):
        old, new = scenario_workbooks

        diffs = differ.compare(old, new)

        assert [(d.row, d.column, d.type, d.old_value, d.new_value) for d in diffs] == [
            (3, 2, DiffType.MODIFIED, 2, 3),
            (4, 1, DiffType.ADDED, None, "c"),
            (4, 2, DiffType.ADDED, None, 4),
        ]
        assert [d.cell_label for d in diffs] == ["B3", "A4", "B4"]

    def test_descriptions(self, differ, scenario_workbooks):
        old, new = scenario_workbooks

        diffs = differ.compare(old, new)

        assert diffs[0].description == 'Cell B3 changed from "2" to "3"'
        assert diffs[1].description == "Cell A4 added with value: c"

    def test_removed_cell(self, differ, workbook_factory):
        old = workbook_factory({"S": [["h"], ["x"], ["y"]]})
        new = workbook_factory({"S": [["h"], ["x"]]})

        diffs = differ.compare(old, new)

        assert len(diffs) == 1
        assert diffs[0].type is DiffType.REMOVED
        assert diffs[0].old_value == "y"
        assert diffs[0].new_value is None
        assert diffs[0].description == "Cell A3 removed (was: y)"

    def test_identical_workbooks(self, differ, workbook_factory):
        wb = workbook_factory({"S": [["h", "i"], [1, True]]})

        assert differ.compare(wb, wb) == []

    def test_empty_string_differs_from_absent(self, differ):
        old = Workbook(sheets=[Sheet(name="S", cells={(0, 0): CellValue.string("h")})])
        new = Workbook(
            sheets=[
                Sheet(
                    name="S",
                    cells={(0, 0): CellValue.string("h"), (1, 0): CellValue.string("")},
                )
            ]
        )

        diffs = differ.compare(old, new)

        assert len(diffs) == 1
        assert diffs[0].type is DiffType.ADDED
        assert diffs[0].new_value == ""

    def test_boolean_vs_number_is_modified(self, differ, workbook_factory):
        old = workbook_factory({"S": [["flag"], [1]]})
        new = workbook_factory({"S": [["flag"], [True]]})

        diffs = differ.compare(old, new)

        assert len(diffs) == 1
        assert diffs[0].type is DiffType.MODIFIED
        assert diffs[0].old_value == 1
        assert diffs[0].new_value is True
        assert diffs[0].description == 'Cell A2 changed from "1" to "TRUE"'

    def test_int_and_float_equal(self, differ, workbook_factory):
        old = workbook_factory({"S": [["n"], [2]]})
        new = workbook_factory({"S": [["n"], [2.0]]})

        assert differ.compare(old, new) == []

    def test_header_row_is_compared(self, differ, workbook_factory):
        old = workbook_factory({"S": [["Name", "Qty"], ["a", 1]]})
        new = workbook_factory({"S": [["Name", "Quantity"], ["a", 1]]})

        diffs = differ.compare(old, new)

        assert len(diffs) == 1
        assert diffs[0].row == 1
        assert diffs[0].column == 2
        assert diffs[0].type is DiffType.MODIFIED
        assert diffs[0].description == 'Header cell B1 changed from "Qty" to "Quantity"'

    def test_range_covers_wider_sheet(self, differ, workbook_factory):
        old = workbook_factory({"S": [["a"]]})
        new = workbook_factory({"S": [["a", None, "c"]]})

        diffs = differ.compare(old, new)

        assert [(d.cell_label, d.type) for d in diffs] == [("C1", DiffType.ADDED)]

    def test_empty_sheet_against_populated(self, differ, workbook_factory):
        old = Workbook(sheets=[Sheet(name="S")])
        new = workbook_factory({"S": [["h"], ["v"]]})

        diffs = differ.compare(old, new)

        assert [(d.cell_label, d.type) for d in diffs] == [
            ("A1", DiffType.ADDED),
            ("A2", DiffType.ADDED),
        ]

    def test_both_sheets_empty(self, differ):
        old = Workbook(sheets=[Sheet(name="S")])
        new = Workbook(sheets=[Sheet(name="S")])

        assert differ.compare(old, new) == []


class TestSheetDifferences:
    """Test sheet-level additions and removals."""

    def test_removed_sheet(self, differ, workbook_factory):
        old = workbook_factory({"Sheet1": [["a"]], "Extra": [["x"], ["y"]]})
        new = workbook_factory({"Sheet1": [["a"]]})

        diffs = differ.compare(old, new)

        assert len(diffs) == 1
        diff = diffs[0]
        assert diff.type is DiffType.REMOVED
        assert diff.sheet == "Extra"
        assert diff.row == 0
        assert diff.column == 0
        assert diff.cell_label == "N/A"
        assert diff.old_value is None
        assert diff.new_value is None
        assert diff.is_sheet_level
        assert diff.description == 'Sheet "Extra" removed in new file'

    def test_added_sheet(self, differ, workbook_factory):
        old = workbook_factory({"Sheet1": [["a"]]})
        new = workbook_factory({"Sheet1": [["a"]], "New": [["n"]]})

        diffs = differ.compare(old, new)

        assert len(diffs) == 1
        assert diffs[0].type is DiffType.ADDED
        assert diffs[0].cell_label == "N/A"
        assert diffs[0].description == 'Sheet "New" added in new file'

    def test_sheet_order_old_then_new(self, differ, workbook_factory):
        old = workbook_factory({"B": [["1"]], "A": [["1"]]})
        new = workbook_factory({"C": [["1"]], "A": [["2"]], "B": [["1"]]})

        diffs = differ.compare(old, new)

        assert [(d.sheet, d.cell_label) for d in diffs] == [("A", "A1"), ("C", "N/A")]


class TestDiffProperties:
    """Test properties that hold for any pair of workbooks."""

    @pytest.fixture
    def pair(self, workbook_factory):
        old = workbook_factory(
            {
                "Main": [["id", "name", "score"], [1, "ann", 9.5], [2, "bob", None], [3, "cy", 7]],
                "OnlyOld": [["x"]],
            }
        )
        new = workbook_factory(
            {
                "Main": [["id", "name", "points"], [1, "ann", 9.5], [2, "rob", 4], [None, "cy"]],
                "OnlyNew": [["y"]],
            }
        )
        return old, new

    def test_idempotent(self, differ, pair):
        old, new = pair

        assert differ.compare(old, new) == differ.compare(old, new)

    def test_symmetry(self, differ, pair):
        old, new = pair
        forward = differ.compare(old, new)
        backward = {_key(d) for d in differ.compare(new, old)}

        swap = {
            DiffType.ADDED: DiffType.REMOVED,
            DiffType.REMOVED: DiffType.ADDED,
            DiffType.MODIFIED: DiffType.MODIFIED,
        }
        for diff in forward:
            mirrored = (diff.sheet, diff.row, diff.column, swap[diff.type], diff.new_value, diff.old_value)
            assert mirrored in backward

    def test_completeness(self, differ, pair):
        old, new = pair
        diffs = differ.compare(old, new)
        cell_diffs = {(d.row - 1, d.column - 1) for d in diffs if d.sheet == "Main"}

        old_sheet, new_sheet = old.sheet("Main"), new.sheet("Main")
        expected = {
            (row, col)
            for row in range(max(old_sheet.last_row, new_sheet.last_row) + 1)
            for col in range(max(old_sheet.last_col, new_sheet.last_col) + 1)
            if old_sheet.cell(row, col) != new_sheet.cell(row, col)
        }

        assert cell_diffs == expected
        assert len([d for d in diffs if d.sheet == "Main"]) == len(expected)

    def test_row_major_ordering(self, differ, pair):
        old, new = pair
        main = [(d.row, d.column) for d in differ.compare(old, new) if d.sheet == "Main"]

        assert main == sorted(main)


class TestExtractNormalized:
    """Test the normalization snapshot."""

    def test_returns_same_workbook(self, differ, workbook_factory):
        wb = workbook_factory({"S": [["h"]]})

        assert differ.extract_normalized(wb) is wb


class TestDiffSummary:
    """Test summary aggregation."""

    def test_counts(self, differ, scenario_workbooks):
        summary = DiffSummary.from_differences(differ.compare(*scenario_workbooks))

        assert summary.total == 3
        assert summary.added == 2
        assert summary.modified == 1
        assert summary.removed == 0
        assert summary.sheets_affected == ["Sheet1"]
        assert summary.text == "3 difference(s) across 1 sheet(s): 2 added, 0 removed, 1 modified."

    def test_sheet_level_tracking(self, differ, workbook_factory):
        old = workbook_factory({"Gone": [["a"]]})
        new = workbook_factory({"Fresh": [["b"]]})

        summary = DiffSummary.from_differences(differ.compare(old, new))

        assert summary.sheets_removed == ["Gone"]
        assert summary.sheets_added == ["Fresh"]

    def test_empty(self):
        summary = DiffSummary.from_differences([])

        assert summary.total == 0
        assert summary.text == "No differences found."

    def test_to_dict_keys(self, differ, scenario_workbooks):
        data = DiffSummary.from_differences(differ.compare(*scenario_workbooks)).to_dict()

        assert data["total"] == 3
        assert data["sheetsAffected"] == ["Sheet1"]
        assert "text" in data


class TestDifferenceSerialization:
    """Test the wire form of a difference."""

    def test_to_dict(self, differ, scenario_workbooks):
        diff = differ.compare(*scenario_workbooks)[0]

        assert diff.to_dict() == {
            "sheet": "Sheet1",
            "row": 3,
            "column": 2,
            "cellLabel": "B3",
            "type": "modified",
            "oldValue": 2,
            "newValue": 3,
            "description": 'Cell B3 changed from "2" to "3"',
        }
