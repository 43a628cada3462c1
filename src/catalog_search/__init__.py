"""Catalog search package."""
from .config_loader import Config
from .models import BrowseResult, CatalogEntry, CatalogStats, Category, SearchResult
from .service import (
    CatalogService,
    browse_category,
    combined_search,
    get_catalog_stats,
    get_entry_by_id,
    get_service,
    get_trending,
    set_service,
)

__version__ = "1.0.0"
__all__ = [
    "Config",
    "BrowseResult",
    "CatalogEntry",
    "CatalogStats",
    "Category",
    "SearchResult",
    "CatalogService",
    "browse_category",
    "combined_search",
    "get_catalog_stats",
    "get_entry_by_id",
    "get_service",
    "get_trending",
    "set_service",
]
