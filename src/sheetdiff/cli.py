"""Command-line interface for SheetDiff."""

import argparse
import json
import logging
import sys

import uvicorn

from .engine import DiffSummary, WorkbookDiffer
from .workbook import LoadError, WorkbookLoader


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="SheetDiff - Side-by-side spreadsheet comparison"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Server command
    server_parser = subparsers.add_parser("serve", help="Start the web server")
    server_parser.add_argument(
        "--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)"
    )
    server_parser.add_argument(
        "--port", type=int, default=8000, help="Port to bind to (default: 8000)"
    )
    server_parser.add_argument(
        "--reload", action="store_true", help="Enable auto-reload for development"
    )

    # Diff command
    diff_parser = subparsers.add_parser(
        "diff", help="Compare two spreadsheet files and print the differences"
    )
    diff_parser.add_argument("file1", help="Original file (.xlsx, .xls or .csv)")
    diff_parser.add_argument("file2", help="File to compare against the original")
    diff_parser.add_argument(
        "--json", action="store_true", help="Print differences as JSON"
    )
    diff_parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )

    args = parser.parse_args(argv)

    if args.command == "serve":
        run_server(args.host, args.port, args.reload)
    elif args.command == "diff":
        sys.exit(run_diff(args.file1, args.file2, args.json, args.verbose))
    else:
        parser.print_help()
        sys.exit(1)


def run_server(host: str, port: int, reload: bool):
    """Run the web server."""
    from .config import settings

    uvicorn.run(
        "sheetdiff.api:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
        log_level="debug" if settings.debug else "info",
    )


def run_diff(file1: str, file2: str, as_json: bool = False, verbose: bool = False) -> int:
    """
    Compare two files on disk and print the result.

    Returns:
        0 if the files are identical, 1 if they differ, 2 if either file
        could not be loaded
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    loader = WorkbookLoader()
    try:
        workbook1 = loader.load(file1)
        workbook2 = loader.load(file2)
    except LoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    differences = WorkbookDiffer().compare(workbook1, workbook2)
    summary = DiffSummary.from_differences(differences)

    if as_json:
        print(
            json.dumps(
                {
                    "differences": [diff.to_dict() for diff in differences],
                    "summary": summary.to_dict(),
                },
                indent=2,
                default=str,
            )
        )
    else:
        for diff in differences:
            print(f"[{diff.sheet}] {diff.description}")
        print(summary.text)

    return 1 if differences else 0


if __name__ == "__main__":
    main()
