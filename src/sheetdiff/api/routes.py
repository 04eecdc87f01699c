"""API routes for SheetDiff."""

import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, Request, UploadFile
from fastapi.concurrency import run_in_threadpool

from ..comparison import (
    ComparisonNotFoundError,
    ComparisonService,
    InvalidPageRequestError,
)
from ..config import Settings
from ..workbook import LoadError

logger = logging.getLogger(__name__)

router = APIRouter()


def get_comparison_service(request: Request) -> ComparisonService:
    """Comparison service owned by the running application."""
    return request.app.state.comparison_service


def get_settings(request: Request) -> Settings:
    """Settings the running application was created with."""
    return request.app.state.settings


async def _read_upload(upload: UploadFile, app_settings: Settings) -> tuple[str, bytes]:
    """Check an upload against the upload policy and return its name and bytes."""
    filename = upload.filename or ""
    extension = Path(filename).suffix.lower()
    if extension not in app_settings.allowed_extensions:
        logger.warning(f"Rejected upload '{filename}': unsupported extension")
        allowed = ", ".join(app_settings.allowed_extensions)
        raise HTTPException(
            status_code=400,
            detail=f"Only Excel files ({allowed}) are allowed",
        )

    content = await upload.read()
    if len(content) > app_settings.max_upload_size_bytes:
        logger.warning(f"Rejected upload '{filename}': {len(content)} bytes")
        raise HTTPException(
            status_code=413,
            detail=f"File '{filename}' exceeds the {app_settings.max_upload_size_mb}MB limit",
        )
    return filename, content


# Comparison endpoints


@router.post("/compare")
async def compare_files(
    file1: UploadFile = File(...),
    file2: UploadFile = File(...),
    service: ComparisonService = Depends(get_comparison_service),
    app_settings: Settings = Depends(get_settings),
):
    """Compare two uploaded spreadsheets and return the first page of each."""
    file1_name, file1_content = await _read_upload(file1, app_settings)
    file2_name, file2_content = await _read_upload(file2, app_settings)

    try:
        # Loading and diffing are CPU-bound; keep them off the event loop.
        result = await run_in_threadpool(
            service.compare, file1_name, file1_content, file2_name, file2_content
        )
    except LoadError as e:
        logger.warning(f"Comparison failed: {e}")
        raise HTTPException(status_code=400, detail=f"Failed to compare files: {e}")

    return result.to_response()


@router.get("/data")
async def get_paginated_data(
    comparison_id: str = Query(..., alias="comparisonId"),
    sheet: str = Query(...),
    start_row: int = Query(0, alias="startRow"),
    limit: Optional[int] = Query(None),
    service: ComparisonService = Depends(get_comparison_service),
):
    """Get a window of rows from one sheet of a cached comparison."""
    if limit is None:
        limit = service.page_size

    try:
        return service.get_page(comparison_id, sheet, start_row, limit)
    except InvalidPageRequestError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ComparisonNotFoundError:
        raise HTTPException(
            status_code=404,
            detail="Comparison data not found. Please re-upload files.",
        )


# Health check


@router.get("/health")
async def health_check(
    service: ComparisonService = Depends(get_comparison_service),
    app_settings: Settings = Depends(get_settings),
):
    """Health check endpoint with diagnostics."""
    return {
        "status": "ok",
        "service": "sheetdiff",
        "config": {
            "cache_ttl_minutes": app_settings.comparison_ttl_minutes,
            "page_size": service.page_size,
            "cached_comparisons": service.cache.size(),
        },
    }


@router.get("/config/limits")
async def get_config_limits(app_settings: Settings = Depends(get_settings)):
    """Get upload and pagination limits."""
    return {
        "upload_limits": {
            "max_upload_size_mb": app_settings.max_upload_size_mb,
            "allowed_extensions": app_settings.allowed_extensions,
        },
        "pagination": {
            "page_size": app_settings.page_size,
            "comparison_ttl_minutes": app_settings.comparison_ttl_minutes,
        },
    }
