"""
Catalog Search - Core functionality

Wires the provider clients into the four operations the surrounding
application calls. None of them raises on a provider failure.
"""
import logging
import threading
from typing import Any, Dict, Optional

from .browser import CategoryBrowser, DEFAULT_PAGE_SIZE
from .details import DetailResolver
from .models import BrowseResult, CatalogEntry, CatalogStats, SearchResult
from .providers import GOOGLE_BOOKS, ProviderClient, SORT_RELEVANCE, build_providers
from .search import DEFAULT_LIMIT, MultiProviderSearchEngine, SOURCE_ALL
from .stats import ActiveUsersCounter, StatsAggregator
from .trending import DEFAULT_LANGUAGE, TrendingFeed
from .utils.api_utils import Transport

logger = logging.getLogger(__name__)


class CatalogService:
    def __init__(
        self,
        providers: Optional[Dict[str, ProviderClient]] = None,
        active_users: Optional[ActiveUsersCounter] = None,
        transport: Optional[Transport] = None,
    ):
        self.providers = providers if providers is not None else build_providers(transport)

        self.search_engine = MultiProviderSearchEngine(self.providers)
        self.browser = CategoryBrowser(self.providers[GOOGLE_BOOKS])
        self.details = DetailResolver(self.providers)
        self.stats = StatsAggregator(self.providers[GOOGLE_BOOKS], active_users)
        self.trending = TrendingFeed(self.providers[GOOGLE_BOOKS])

    def combined_search(
        self,
        query: str,
        limit: int = DEFAULT_LIMIT,
        language: Optional[str] = None,
        source: str = SOURCE_ALL,
    ) -> SearchResult:
        return self.search_engine.search(query, limit=limit, language=language, source=source)

    def browse_category(
        self,
        category: Any,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        filter_label: Optional[str] = None,
        sort_order: str = SORT_RELEVANCE,
        language: Optional[str] = None,
    ) -> BrowseResult:
        return self.browser.browse(
            category,
            page=page,
            limit=limit,
            filter_label=filter_label,
            sort_order=sort_order,
            language=language,
        )

    def get_entry_by_id(self, entry_id: str) -> Optional[CatalogEntry]:
        return self.details.get_by_id(entry_id)

    def get_catalog_stats(self) -> CatalogStats:
        return self.stats.get_catalog_stats()

    def get_trending(self, language: Optional[str] = DEFAULT_LANGUAGE) -> SearchResult:
        return self.trending.get_trending(language)


# Singleton service instance
_service = None
_service_lock = threading.Lock()


def get_service() -> CatalogService:
    global _service
    if _service is None:
        with _service_lock:
            if _service is None:
                _service = CatalogService()
    return _service


def set_service(service: Optional[CatalogService]) -> None:
    """Replace the default service (None resets it to be rebuilt lazily)."""
    global _service
    with _service_lock:
        _service = service


def combined_search(query: str, **options: Any) -> SearchResult:
    return get_service().combined_search(query, **options)


def browse_category(category: Any, **options: Any) -> BrowseResult:
    return get_service().browse_category(category, **options)


def get_entry_by_id(entry_id: str) -> Optional[CatalogEntry]:
    return get_service().get_entry_by_id(entry_id)


def get_catalog_stats() -> CatalogStats:
    return get_service().get_catalog_stats()


def get_trending(language: Optional[str] = DEFAULT_LANGUAGE) -> SearchResult:
    return get_service().get_trending(language)
