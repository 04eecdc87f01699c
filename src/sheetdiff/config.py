"""Configuration management for SheetDiff."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


def _parse_list(env_name: str, default: list[str]) -> list[str]:
    """Parse a comma-separated list from an environment variable."""
    value = os.getenv(env_name)
    if value:
        return [item.strip() for item in value.split(",") if item.strip()]
    return default


def _parse_cors_origins() -> list[str]:
    """Parse CORS origins from environment variable."""
    return _parse_list("CORS_ALLOW_ORIGINS", ["*"])


def _parse_allowed_extensions() -> list[str]:
    """Parse accepted upload extensions from environment variable."""
    return [
        ext.lower() if ext.startswith(".") else f".{ext.lower()}"
        for ext in _parse_list("ALLOWED_EXTENSIONS", [".xlsx", ".xls", ".csv"])
    ]


class Settings(BaseModel):
    """Application settings."""

    # Server settings
    host: str = os.getenv("HOST", "127.0.0.1")
    port: int = int(os.getenv("PORT", "8000"))
    debug: bool = os.getenv("DEBUG", "false").lower() == "true"

    # CORS settings (comma-separated list of allowed origins, or * for all)
    cors_allow_origins: list[str] = _parse_cors_origins()

    # How long a comparison stays available for pagination
    comparison_ttl_minutes: int = int(os.getenv("COMPARISON_TTL_MINUTES", "30"))

    # Rows per sheet in the compare response and default page limit
    page_size: int = int(os.getenv("PAGE_SIZE", "25"))

    # Upload policy
    max_upload_size_mb: int = int(os.getenv("MAX_UPLOAD_SIZE_MB", "10"))
    allowed_extensions: list[str] = _parse_allowed_extensions()

    @property
    def max_upload_size_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024


settings = Settings()
