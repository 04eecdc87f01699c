"""SheetDiff - side-by-side spreadsheet comparison."""

__version__ = "0.1.0"
