"""Google Books client (the commercial book metadata index)."""
import logging
from typing import Any, Dict, Optional

from ..config_loader import Config
from ..models import CatalogEntry, Category, current_year, synthetic_views
from ..utils.api_utils import ProviderMalformedResponse, Transport
from ..utils.error_handling import provider_boundary
from .base import ProviderResult, SearchOptions, SORT_ORDERS, SORT_RELEVANCE

logger = logging.getLogger(__name__)

API_NAME = "Google Books API"

# Largest usable image first
COVER_PRIORITY = ("large", "medium", "thumbnail", "smallThumbnail")


def secure_link(url: str) -> str:
    """Upgrade an ``http:`` image link to ``https:``."""
    if url.startswith("http:"):
        return "https:" + url[len("http:"):]
    return url


def pick_cover(image_links: Any) -> str:
    """Pick the best cover from a volume's ``imageLinks``."""
    if isinstance(image_links, dict):
        for size in COVER_PRIORITY:
            link = image_links.get(size)
            if isinstance(link, str) and link:
                return secure_link(link)
    return Config.PLACEHOLDER_COVER_URL


def parse_year(published_date: Any) -> int:
    """Year from ``publishedDate`` (``2019``, ``2019-05`` or ``2019-05-01``)."""
    if isinstance(published_date, str):
        try:
            return int(published_date[:4])
        except ValueError:
            pass
    return current_year()


class GoogleBooksClient:
    """Google Books API client."""

    name = "google"

    def __init__(self, transport: Optional[Transport] = None, api_key: Optional[str] = None,
                 base_url: Optional[str] = None):
        self.transport = transport or Transport()
        self.api_key = Config.GOOGLE_BOOKS_API_KEY if api_key is None else api_key
        self.volumes_url = f"{(base_url or Config.GOOGLE_BOOKS_API_URL).rstrip('/')}/volumes"

    def _params(self, **params: Any) -> Dict[str, Any]:
        if self.api_key:
            params["key"] = self.api_key
        return params

    def _search_params(self, query: str, options: SearchOptions) -> Dict[str, Any]:
        order_by = options.order_by if options.order_by in SORT_ORDERS else SORT_RELEVANCE
        params = self._params(
            q=query,
            maxResults=options.limit,
            orderBy=order_by,
            startIndex=max(0, options.start_index),
        )
        if options.language:
            params["langRestrict"] = options.language
        return params

    def fetch_volumes(self, query: str, options: Optional[SearchOptions] = None) -> Dict[str, Any]:
        """Raw volume search. Unlike :meth:`search`, failures propagate."""
        options = options or SearchOptions()
        return self.transport.get_json(self.volumes_url, self._search_params(query, options), api_name=API_NAME)

    def count(self, query: str) -> int:
        """Total the index reports for ``query``, asking for a single item.

        Raises on provider failure so callers can tell an outage from zero.
        """
        data = self.fetch_volumes(query, SearchOptions(limit=1))
        return int(data.get("totalItems") or 0)

    @provider_boundary(ProviderResult, "Google Books")
    def search(self, query: str, options: Optional[SearchOptions] = None) -> ProviderResult:
        """Volume search; the reported ``totalItems`` drives pagination."""
        options = options or SearchOptions()
        data = self.fetch_volumes(query, options)

        total = int(data.get("totalItems") or 0)
        items = data.get("items")
        if not items:
            return ProviderResult(entries=[], total_items=total)
        if not isinstance(items, list):
            raise ProviderMalformedResponse(f"{API_NAME} returned items of type {type(items).__name__}")

        entries = [self._parse_volume(item, options.category) for item in items if isinstance(item, dict)]
        return ProviderResult(entries=entries, total_items=total)

    @provider_boundary(lambda: None, "Google Books")
    def get_by_id(self, entry_id: str) -> Optional[CatalogEntry]:
        """Fetch one volume by its native id; a missing volume is not-found."""
        entry_id = (entry_id or "").strip()
        if not entry_id or "/" in entry_id:
            return None

        data = self.transport.get_json(
            f"{self.volumes_url}/{entry_id}", self._params(), api_name=API_NAME, allow_not_found=True
        )
        if not data or not data.get("id"):
            return None

        entry = self._parse_volume(data, Category.DIGITAL_BOOK)
        if not entry.publisher:
            entry.publisher = "Unknown Publisher"
        if not entry.description:
            entry.description = "No description available"
        return entry

    def _parse_volume(self, item: Dict[str, Any], category: Category) -> CatalogEntry:
        """Parse a Google Books volume into a catalog entry."""
        info = item.get("volumeInfo") or {}
        authors = info.get("authors") or []
        identifiers = info.get("industryIdentifiers") or []

        isbn = ""
        if identifiers and isinstance(identifiers[0], dict):
            isbn = identifiers[0].get("identifier", "")

        return CatalogEntry(
            id=str(item.get("id", "")),
            title=info.get("title") or "",
            author=authors[0] if authors else "",
            cover_url=pick_cover(info.get("imageLinks")),
            category=category,
            year=parse_year(info.get("publishedDate")),
            views=synthetic_views(),
            description=info.get("description") or "",
            language=info.get("language") or "en",
            isbn=isbn,
            publisher=info.get("publisher") or "",
            page_count=info.get("pageCount") or 0,
            preview_link=info.get("previewLink") or None,
        )
