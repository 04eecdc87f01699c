"""Data models for normalized workbooks."""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum
from typing import Any, Optional

from .notation import col_letter_to_index, encode_cell, parse_cell_notation


class LoadError(Exception):
    """Raised when a file cannot be parsed as a supported spreadsheet."""

    def __init__(self, message: str, filename: Optional[str] = None):
        self.filename = filename
        self.message = message
        super().__init__(f"{filename}: {message}" if filename else message)


class CellKind(str, Enum):
    """Tags for the cell value variant."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ABSENT = "absent"


@dataclass(frozen=True, eq=False)
class CellValue:
    """A single cell value tagged with its kind.

    ``absent`` marks an address that was never populated. It is distinct from
    an empty string and only equals another ``absent``. Numbers compare by
    numeric value, so ``2`` equals ``2.0``, but a boolean never equals a
    number.
    """

    kind: CellKind
    value: Any = None

    @classmethod
    def string(cls, value: str) -> "CellValue":
        return cls(CellKind.STRING, value)

    @classmethod
    def number(cls, value: float) -> "CellValue":
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        return cls(CellKind.NUMBER, value)

    @classmethod
    def boolean(cls, value: bool) -> "CellValue":
        return cls(CellKind.BOOLEAN, bool(value))

    @classmethod
    def absent(cls) -> "CellValue":
        return _ABSENT

    @classmethod
    def from_python(cls, value: Any) -> "CellValue":
        """Build a tagged value from whatever a spreadsheet reader returned."""
        if value is None:
            return _ABSENT
        if isinstance(value, CellValue):
            return value
        if isinstance(value, bool):
            return cls.boolean(value)
        if isinstance(value, (int, float)):
            return cls.number(value)
        if isinstance(value, (datetime, date, time)):
            return cls.string(value.isoformat())
        return cls.string(str(value))

    @property
    def is_absent(self) -> bool:
        return self.kind is CellKind.ABSENT

    def to_json(self) -> Any:
        """Plain JSON value; ``None`` for absent."""
        return None if self.is_absent else self.value

    def display(self) -> str:
        """Text used in headers and difference descriptions."""
        if self.kind is CellKind.BOOLEAN:
            return "TRUE" if self.value else "FALSE"
        if self.is_absent:
            return ""
        return str(self.value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CellValue):
            return NotImplemented
        return self.kind is other.kind and self.value == other.value

    def __hash__(self) -> int:
        return hash((self.kind, self.value))

    def __repr__(self) -> str:
        if self.is_absent:
            return "CellValue.absent()"
        return f"CellValue.{self.kind.value}({self.value!r})"


_ABSENT = CellValue(CellKind.ABSENT)
_EMPTY = CellValue(CellKind.STRING, "")


@dataclass
class Sheet:
    """A named grid of cells.

    ``cells`` is the raw grid keyed by 0-based ``(row, col)`` and holds only
    populated addresses. ``headers`` and ``rows`` are the display views
    derived from it: row 0 becomes the headers and every later row within the
    occupied range becomes a data row, padded with empty strings.
    """

    name: str
    cells: dict[tuple[int, int], CellValue] = field(default_factory=dict)
    last_row: int = field(init=False, default=-1)
    last_col: int = field(init=False, default=-1)
    headers: list[str] = field(init=False, default_factory=list)
    rows: list[list[CellValue]] = field(init=False, default_factory=list)

    def __post_init__(self):
        self.cells = {
            address: value
            for address, value in self.cells.items()
            if not value.is_absent
        }
        if self.cells:
            self.last_row = max(row for row, _ in self.cells)
            self.last_col = max(col for _, col in self.cells)

        width = self.last_col + 1
        self.headers = [
            self.cells[(0, col)].display() if (0, col) in self.cells else f"Column {col + 1}"
            for col in range(width)
        ]
        self.rows = [
            [self.cells.get((row, col), _EMPTY) for col in range(width)]
            for row in range(1, self.last_row + 1)
        ]

    @classmethod
    def from_rows(cls, name: str, rows: list[list[Any]]) -> "Sheet":
        """Build a sheet from a list of rows, header row first.

        ``None`` entries are left unpopulated.
        """
        cells = {}
        for row_index, row in enumerate(rows):
            for col_index, value in enumerate(row):
                cell = CellValue.from_python(value)
                if not cell.is_absent:
                    cells[(row_index, col_index)] = cell
        return cls(name=name, cells=cells)

    @property
    def is_empty(self) -> bool:
        return not self.cells

    @property
    def total_rows(self) -> int:
        return len(self.rows)

    def cell(self, row: int, col: int) -> CellValue:
        """Raw value at a 0-based address; absent if never populated."""
        return self.cells.get((row, col), _ABSENT)

    def cell_at(self, label: str) -> CellValue:
        """Raw value at an A1 address such as ``"B3"``."""
        col, row = parse_cell_notation(label)
        return self.cell(row - 1, col_letter_to_index(col))

    @property
    def dimensions(self) -> str:
        """Occupied range in A1 notation, e.g. ``"A1:C10"``."""
        if self.is_empty:
            return ""
        return f"A1:{encode_cell(self.last_row, self.last_col)}"

    def to_dict(self, max_rows: Optional[int] = None) -> dict:
        rows = self.rows if max_rows is None else self.rows[:max_rows]
        return {
            "name": self.name,
            "headers": list(self.headers),
            "rows": [[value.to_json() for value in row] for row in rows],
        }


@dataclass
class Workbook:
    """An ordered collection of uniquely named sheets."""

    sheets: list[Sheet] = field(default_factory=list)

    def __post_init__(self):
        seen = set()
        for sheet in self.sheets:
            if sheet.name in seen:
                raise ValueError(f"Duplicate sheet name: {sheet.name}")
            seen.add(sheet.name)
        self._by_name = {sheet.name: sheet for sheet in self.sheets}

    @property
    def sheet_names(self) -> list[str]:
        return [sheet.name for sheet in self.sheets]

    def sheet(self, name: str) -> Optional[Sheet]:
        return self._by_name.get(name)

    def to_dict(self, max_rows: Optional[int] = None) -> dict:
        """Wire form ``{"sheets": [{name, headers, rows}]}``."""
        return {"sheets": [sheet.to_dict(max_rows) for sheet in self.sheets]}
