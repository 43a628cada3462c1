"""Configuration loader with environment variable support."""
import os
from typing import Optional
from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()


def _int_env(name: str, default: int) -> int:
    value: Optional[str] = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _float_env(name: str, default: float) -> float:
    value: Optional[str] = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        return default


class Config:
    """Application configuration."""

    # API Configuration
    GOOGLE_BOOKS_API_KEY: str = os.getenv("GOOGLE_BOOKS_API_KEY", "")

    # API Endpoints
    GOOGLE_BOOKS_API_URL: str = os.getenv("GOOGLE_BOOKS_API_URL", "https://www.googleapis.com/books/v1")
    OPEN_LIBRARY_API_URL: str = os.getenv("OPEN_LIBRARY_API_URL", "https://openlibrary.org")
    OPEN_LIBRARY_COVERS_URL: str = os.getenv("OPEN_LIBRARY_COVERS_URL", "https://covers.openlibrary.org/b/id")
    PLACEHOLDER_COVER_URL: str = os.getenv(
        "PLACEHOLDER_COVER_URL", "https://placehold.co/128x196?text=No+Cover"
    )

    # Transport
    REQUEST_TIMEOUT: float = _float_env("REQUEST_TIMEOUT", 10.0)
    USER_AGENT: str = os.getenv("USER_AGENT", "catalog-search/1.0")

    # Freshness window (seconds) for identical repeated requests
    CACHE_TTL_SECONDS: int = _int_env("CACHE_TTL_SECONDS", 600)
    AUTHOR_CACHE_TTL_SECONDS: int = _int_env("AUTHOR_CACHE_TTL_SECONDS", 3600)
    CACHE_MAX_ENTRIES: int = _int_env("CACHE_MAX_ENTRIES", 1024)

    # Callers cap pagination for display; the browser never does
    MAX_NAVIGABLE_PAGES: int = _int_env("MAX_NAVIGABLE_PAGES", 10)

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_DIR: str = os.getenv("LOG_DIR", "logs")
    LOG_FILE: str = os.getenv("LOG_FILE", "")

