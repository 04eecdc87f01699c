"""HTTP API for SheetDiff."""

from .app import create_app

__all__ = ["create_app"]
