"""Workbook model and spreadsheet loading."""

from .loader import WorkbookLoader, load_workbook, SUPPORTED_EXTENSIONS
from .models import CellKind, CellValue, LoadError, Sheet, Workbook
from .notation import (
    col_letter_to_index,
    encode_cell,
    index_to_col_letter,
    parse_cell_notation,
)

__all__ = [
    "WorkbookLoader",
    "load_workbook",
    "SUPPORTED_EXTENSIONS",
    "CellKind",
    "CellValue",
    "LoadError",
    "Sheet",
    "Workbook",
    "col_letter_to_index",
    "encode_cell",
    "index_to_col_letter",
    "parse_cell_notation",
]
