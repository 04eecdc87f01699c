"""A1 notation helpers."""

import re


def col_letter_to_index(col: str) -> int:
    """Convert column letter(s) to 0-based index. A=0, B=1, ..., Z=25, AA=26, etc."""
    result = 0
    for char in col.upper():
        result = result * 26 + (ord(char) - ord("A") + 1)
    return result - 1


def index_to_col_letter(index: int) -> str:
    """Convert 0-based index to column letter(s)."""
    if index < 0:
        raise ValueError(f"Column index must be non-negative: {index}")
    result = ""
    index += 1
    while index > 0:
        index -= 1
        result = chr(ord("A") + (index % 26)) + result
        index //= 26
    return result


def encode_cell(row: int, col: int) -> str:
    """Encode a 0-based (row, col) address as A1 notation, e.g. (2, 1) -> "B3"."""
    return f"{index_to_col_letter(col)}{row + 1}"


def parse_cell_notation(cell: str) -> tuple[str, int]:
    """Parse A1 notation into column letters and row number."""
    match = re.fullmatch(r"([A-Za-z]+)(\d+)", cell)
    if not match:
        raise ValueError(f"Invalid cell notation: {cell}")
    return match.group(1).upper(), int(match.group(2))
