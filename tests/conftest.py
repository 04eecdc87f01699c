"""Pytest configuration and shared fixtures."""

import io
import zipfile
from pathlib import Path
from typing import Any, Callable

import openpyxl
import pytest

from sheetdiff.workbook import Sheet, Workbook

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def build_workbook(sheets: dict[str, list[list[Any]]]) -> Workbook:
    """Build an in-memory workbook from ``{sheet name: rows}``, header row first."""
    return Workbook(sheets=[Sheet.from_rows(name, rows) for name, rows in sheets.items()])


def build_xlsx_bytes(sheets: dict[str, list[list[Any]]]) -> bytes:
    """Write ``{sheet name: rows}`` to an .xlsx file in memory."""
    wb = openpyxl.Workbook()
    wb.remove(wb.active)
    for name, rows in sheets.items():
        ws = wb.create_sheet(title=name)
        for row_index, row in enumerate(rows, start=1):
            for col_index, value in enumerate(row, start=1):
                if value is not None:
                    ws.cell(row=row_index, column=col_index, value=value)
    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def workbook_factory() -> Callable[[dict], Workbook]:
    """Factory for in-memory workbooks."""
    return build_workbook


@pytest.fixture
def xlsx_bytes() -> Callable[[dict], bytes]:
    """Factory for .xlsx file contents."""
    return build_xlsx_bytes


def replace_zip_member(data: bytes, member: str, content: bytes) -> bytes:
    """Return a copy of a zip archive with one member's content swapped."""
    source = zipfile.ZipFile(io.BytesIO(data))
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as target:
        for item in source.infolist():
            payload = content if item.filename == member else source.read(item.filename)
            target.writestr(item, payload)
    return buffer.getvalue()


@pytest.fixture
def zip_member_swapper() -> Callable[[bytes, str, bytes], bytes]:
    """Rewrites one member of a zip archive, e.g. a worksheet inside an .xlsx."""
    return replace_zip_member


@pytest.fixture
def typed_xls_path() -> Path:
    """Legacy .xls workbook with a 'Data' sheet of mixed cell types and an empty 'Notes' sheet."""
    return FIXTURES_DIR / "typed_values.xls"


@pytest.fixture
def xlsx_file(tmp_path: Path) -> Callable[[str, dict], Path]:
    """Factory writing an .xlsx file under tmp_path."""

    def _write(filename: str, sheets: dict[str, list[list[Any]]]) -> Path:
        path = tmp_path / filename
        path.write_bytes(build_xlsx_bytes(sheets))
        return path

    return _write


@pytest.fixture
def csv_file(tmp_path: Path) -> Callable[[str, str], Path]:
    """Factory writing a CSV file under tmp_path."""

    def _write(filename: str, text: str) -> Path:
        path = tmp_path / filename
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def scenario_workbooks() -> tuple[Workbook, Workbook]:
    """Two versions of a small sheet: one value modified and one row appended."""
    old = build_workbook({"Sheet1": [["Name", "Value"], ["a", 1], ["b", 2]]})
    new = build_workbook({"Sheet1": [["Name", "Value"], ["a", 1], ["b", 3], ["c", 4]]})
    return old, new
