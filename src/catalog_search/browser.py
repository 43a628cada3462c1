"""Paginated category browsing over Google Books."""
import logging
import math
from typing import Any, Optional

from . import category_queries
from .config_loader import Config
from .models import BrowseResult, Category
from .providers import ProviderClient, SearchOptions, SORT_RELEVANCE

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 12


def start_index(page: int, limit: int) -> int:
    return (page - 1) * limit


def navigable_pages(total_items: int, limit: int, max_pages: Optional[int] = None) -> int:
    """Number of pages a caller should offer for a browse result.

    Provider totals for broad queries are large and imprecise, so callers cap
    navigation here. :class:`CategoryBrowser` never caps anything itself.
    """
    if max_pages is None:
        max_pages = Config.MAX_NAVIGABLE_PAGES
    if total_items <= 0 or limit <= 0:
        return 0
    return min(math.ceil(total_items / limit), max_pages)


class CategoryBrowser:
    """Browse a category page by page, broadening empty filtered pages once."""

    def __init__(self, provider: ProviderClient):
        self.provider = provider

    def browse(
        self,
        category: Any,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        filter_label: Optional[str] = None,
        sort_order: str = SORT_RELEVANCE,
        language: Optional[str] = None,
    ) -> BrowseResult:
        """
        Fetch one page of a category.

        If a filtered page comes back empty, the ``"All"`` query is tried once
        at the same offset. No other retry happens.

        Args:
            category: One of the catalog categories (unknown ones use a generic query)
            page: 1-based page number
            limit: Page size
            filter_label: Human filter label from the category's table
            sort_order: ``"relevance"`` or ``"newest"``
            language: Optional language restriction

        Returns:
            The page of entries and the total the provider reports
        """
        page = page if page and page > 0 else 1
        limit = limit if limit and limit > 0 else DEFAULT_PAGE_SIZE
        options = SearchOptions(
            limit=limit,
            start_index=start_index(page, limit),
            order_by=sort_order,
            language=language,
            category=Category.parse(category) or Category.DIGITAL_BOOK,
        )

        resolved = category_queries.resolve(category, filter_label)
        result = self.provider.search(resolved.query, options)

        if not result.entries and not resolved.is_broad:
            logger.info(f"No results for {resolved.label!r} in {category}, trying broader query...")
            broad = category_queries.resolve_all(category)
            result = self.provider.search(broad.query, options)
            return BrowseResult(result.entries, result.total_items, page, limit, broadened=True)

        return BrowseResult(result.entries, result.total_items, page, limit)
