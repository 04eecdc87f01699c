"""Spreadsheet loader producing normalized workbooks."""

import csv
import io
import logging
import math
import re
import struct
import zipfile
from pathlib import Path
from typing import Any, Optional, Union

import xlrd
from openpyxl import load_workbook as open_xlsx
from openpyxl.utils.exceptions import InvalidFileException
from xlrd.compdoc import CompDocError

from .models import CellValue, LoadError, Sheet, Workbook

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".xlsx", ".xlsm", ".xls", ".csv")

CSV_SHEET_NAME = "Sheet1"

_NUMBER_PATTERN = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


def _parse_csv_field(text: str) -> CellValue:
    """Type a CSV field the way spreadsheet applications do on import."""
    stripped = text.strip()
    upper = stripped.upper()
    if upper in ("TRUE", "FALSE"):
        return CellValue.boolean(upper == "TRUE")
    if _NUMBER_PATTERN.fullmatch(stripped):
        if re.fullmatch(r"[+-]?\d+", stripped):
            return CellValue.number(int(stripped))
        number = float(stripped)
        if math.isfinite(number):
            return CellValue.number(number)
    return CellValue.string(text)


class WorkbookLoader:
    """Parses .xlsx, .xls and .csv files into :class:`Workbook` objects."""

    def load(
        self, source: Union[bytes, Path, str], filename: Optional[str] = None
    ) -> Workbook:
        """
        Load a workbook from raw bytes or a file path.

        Args:
            source: File contents or a path to the file
            filename: Original file name, used to pick the format. Defaults
                to the path name when ``source`` is a path.

        Returns:
            The normalized workbook

        Raises:
            LoadError: If the file is unreadable or not a supported format
        """
        if isinstance(source, (str, Path)):
            path = Path(source)
            filename = filename or path.name
            try:
                data = path.read_bytes()
            except OSError as e:
                raise LoadError(f"Failed to read file: {e}", filename) from e
        else:
            data = source

        name = filename or ""
        extension = Path(name).suffix.lower()
        if extension not in SUPPORTED_EXTENSIONS:
            raise LoadError(
                f"Unsupported file type '{extension or 'unknown'}'", filename
            )

        if extension == ".csv":
            workbook = self._load_csv(data, name)
        elif extension == ".xls":
            workbook = self._load_xls(data, name)
        else:
            workbook = self._load_xlsx(data, name)

        logger.info(
            f"Loaded '{name}' with {len(workbook.sheets)} sheet(s): "
            f"{', '.join(workbook.sheet_names)}"
        )
        return workbook

    # ------------------------------------------------------------------ #
    # Format readers
    # ------------------------------------------------------------------ #

    def _load_xlsx(self, data: bytes, filename: str) -> Workbook:
        try:
            wb = open_xlsx(io.BytesIO(data), read_only=True, data_only=True)
        except (
            InvalidFileException,
            zipfile.BadZipFile,
            KeyError,
            ValueError,
            OSError,
            SyntaxError,
        ) as e:
            raise LoadError(f"Failed to read Excel file: {e}", filename) from e

        try:
            sheets = []
            for ws in wb.worksheets:
                # Stored dimensions can be stale; scan every row instead.
                ws.reset_dimensions()
                cells = {}
                # Rows are parsed lazily; malformed sheet XML raises ParseError here.
                for row_index, row in enumerate(ws.iter_rows(values_only=True)):
                    for col_index, value in enumerate(row):
                        if not _is_blank(value):
                            cells[(row_index, col_index)] = CellValue.from_python(value)
                sheets.append(self._build_sheet(ws.title, cells))
        except (KeyError, ValueError, zipfile.BadZipFile, SyntaxError) as e:
            raise LoadError(f"Failed to read Excel file: {e}", filename) from e
        finally:
            wb.close()

        return Workbook(sheets=sheets)

    def _load_xls(self, data: bytes, filename: str) -> Workbook:
        try:
            book = xlrd.open_workbook(file_contents=data)
        except (
            xlrd.XLRDError,
            CompDocError,
            struct.error,
            AssertionError,
            ValueError,
            IndexError,
        ) as e:
            raise LoadError(f"Failed to read Excel file: {e}", filename) from e

        sheets = []
        for sh in book.sheets():
            cells = {}
            for row_index in range(sh.nrows):
                for col_index in range(sh.ncols):
                    value = self._xls_value(sh.cell(row_index, col_index), book.datemode)
                    if not _is_blank(value):
                        cells[(row_index, col_index)] = CellValue.from_python(value)
            sheets.append(self._build_sheet(sh.name, cells))

        return Workbook(sheets=sheets)

    @staticmethod
    def _xls_value(cell: "xlrd.sheet.Cell", datemode: int) -> Any:
        if cell.ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK, xlrd.XL_CELL_ERROR):
            return None
        if cell.ctype == xlrd.XL_CELL_BOOLEAN:
            return bool(cell.value)
        if cell.ctype == xlrd.XL_CELL_DATE:
            try:
                return xlrd.xldate.xldate_as_datetime(cell.value, datemode)
            except xlrd.xldate.XLDateError:
                return cell.value
        return cell.value

    def _load_csv(self, data: bytes, filename: str) -> Workbook:
        try:
            text = data.decode("utf-8-sig")
        except UnicodeDecodeError:
            text = data.decode("latin-1")

        cells = {}
        try:
            reader = csv.reader(io.StringIO(text, newline=""))
            for row_index, row in enumerate(reader):
                for col_index, field_text in enumerate(row):
                    if field_text != "":
                        cells[(row_index, col_index)] = _parse_csv_field(field_text)
        except csv.Error as e:
            raise LoadError(f"Failed to parse CSV file: {e}", filename) from e

        return Workbook(sheets=[self._build_sheet(CSV_SHEET_NAME, cells)])

    @staticmethod
    def _build_sheet(name: str, cells: dict) -> Sheet:
        sheet = Sheet(name=name, cells=cells)
        logger.debug(
            f"Sheet '{name}': {len(sheet.cells)} populated cell(s), "
            f"range {sheet.dimensions or 'empty'}"
        )
        return sheet


_default_loader = WorkbookLoader()


def load_workbook(
    source: Union[bytes, Path, str], filename: Optional[str] = None
) -> Workbook:
    """Load a workbook with the default loader."""
    return _default_loader.load(source, filename)
