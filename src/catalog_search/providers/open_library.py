"""Open Library client (the open bibliographic index)."""
import logging
import random
from typing import Any, Dict, List, Optional

from ..config_loader import Config
from ..models import CatalogEntry, Category, UNKNOWN_AUTHOR, current_year, synthetic_views
from ..utils.api_utils import APIError, ProviderMalformedResponse, Transport
from ..utils.error_handling import provider_boundary
from .base import ProviderResult, SearchOptions

logger = logging.getLogger(__name__)

API_NAME = "Open Library API"
WORK_MARKER = "works/"
KEY_PREFIX = "OL"


def looks_like_work_id(entry_id: str) -> bool:
    """Whether an identifier has the shape of an Open Library work reference."""
    entry_id = (entry_id or "").strip()
    return WORK_MARKER in entry_id or entry_id.startswith(KEY_PREFIX)


def work_key(entry_id: str) -> Optional[str]:
    """Reduce ``/works/OL1W``, ``works/OL1W`` or ``OL1W`` to ``OL1W``."""
    if not looks_like_work_id(entry_id):
        return None
    key = entry_id.strip().strip("/")
    if WORK_MARKER in key:
        key = key.split(WORK_MARKER, 1)[1]
    if key.endswith(".json"):
        key = key[:-len(".json")]
    key = key.strip("/")
    if not key or "/" in key:
        return None
    return key


def _text_value(value: Any) -> str:
    """Open Library stores some text either bare or as ``{"type": ..., "value": ...}``."""
    if isinstance(value, dict):
        value = value.get("value")
    if isinstance(value, str):
        return value.strip()
    return ""


def _first(values: Any, default: Any = "") -> Any:
    if isinstance(values, list) and values:
        return values[0]
    return default


class OpenLibraryClient:
    """Open Library API client."""

    name = "openlibrary"

    def __init__(self, transport: Optional[Transport] = None, base_url: Optional[str] = None,
                 covers_url: Optional[str] = None):
        self.transport = transport or Transport()
        self.base_url = (base_url or Config.OPEN_LIBRARY_API_URL).rstrip("/")
        self.covers_url = (covers_url or Config.OPEN_LIBRARY_COVERS_URL).rstrip("/")

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def cover_for(self, cover_id: Any) -> str:
        if cover_id in (None, "", 0, -1):
            return Config.PLACEHOLDER_COVER_URL
        return f"{self.covers_url}/{cover_id}-L.jpg"

    @provider_boundary(ProviderResult, "Open Library")
    def search(self, query: str, options: Optional[SearchOptions] = None) -> ProviderResult:
        """Full-text search; only ``limit`` and ``category`` of the options apply."""
        options = options or SearchOptions()
        params = {"q": query, "limit": options.limit}
        data = self.transport.get_json(self._url("search.json"), params, api_name=API_NAME)

        docs = data.get("docs", [])
        if not isinstance(docs, list):
            raise ProviderMalformedResponse(f"{API_NAME} returned docs of type {type(docs).__name__}")

        entries = [self._parse_doc(doc, options.category) for doc in docs if isinstance(doc, dict)]
        total = data.get("numFound", data.get("num_found", len(entries)))
        return ProviderResult(entries=entries, total_items=int(total or 0))

    @provider_boundary(lambda: None, "Open Library")
    def get_by_id(self, entry_id: str) -> Optional[CatalogEntry]:
        """Look up a work, then its first author's display name."""
        key = work_key(entry_id)
        if key is None:
            logger.warning(f"Not an Open Library work reference: {entry_id!r}")
            return None

        data = self.transport.get_json(self._url(f"works/{key}.json"), api_name=API_NAME, allow_not_found=True)
        if data is None:
            return None

        return self._parse_work(key, data, self._resolve_author(data))

    def _resolve_author(self, work: Dict[str, Any]) -> str:
        """Second, dependent fetch; its failure only costs the author name."""
        authors = work.get("authors")
        if not isinstance(authors, list) or not authors:
            return UNKNOWN_AUTHOR
        try:
            ref = authors[0]
            author_key = ref["author"]["key"] if "author" in ref else ref["key"]
            data = self.transport.get_json(
                self._url(f"{author_key}.json"),
                api_name=API_NAME,
                ttl=Config.AUTHOR_CACHE_TTL_SECONDS,
            )
        except (APIError, LookupError, TypeError) as e:
            logger.warning(f"Could not resolve Open Library author: {e}")
            return UNKNOWN_AUTHOR
        return _text_value(data.get("name") if data else None) or UNKNOWN_AUTHOR

    def _parse_doc(self, doc: Dict[str, Any], category: Category) -> CatalogEntry:
        """Parse an Open Library search record."""
        key = doc.get("key")
        if key:
            entry_id = key
        else:
            # No native key: the id differs between requests for the same record
            entry_id = f"ol-{doc.get('cover_edition_key') or random.random()}"

        year = doc.get("first_publish_year")
        return CatalogEntry(
            id=entry_id,
            title=doc.get("title") or "",
            author=_first(doc.get("author_name")),
            cover_url=self.cover_for(doc.get("cover_i")),
            category=category,
            year=year if isinstance(year, int) else current_year(),
            views=synthetic_views(),
            description=_text_value(_first(doc.get("first_sentence"))),
            language=_first(doc.get("language"), "en"),
            isbn=_first(doc.get("isbn")),
            publisher=_first(doc.get("publisher")),
            page_count=doc.get("number_of_pages_median") or 0,
            preview_link=self._url(key) if key else None,
        )

    def _parse_work(self, key: str, data: Dict[str, Any], author: str) -> CatalogEntry:
        """Parse an Open Library work record."""
        covers: List[Any] = data.get("covers") or []
        return CatalogEntry(
            id=f"{WORK_MARKER}{key}",
            title=_text_value(data.get("title")),
            author=author,
            cover_url=self.cover_for(covers[0] if covers else None),
            category=Category.DIGITAL_BOOK,
            year=_year_from(_text_value(data.get("created"))),
            views=synthetic_views(),
            description=_text_value(data.get("description")) or "No description available",
            language="en",
            isbn="",
            publisher="Open Library",
            page_count=0,
            preview_link=self._url(f"works/{key}"),
        )


def _year_from(value: str) -> int:
    try:
        return int(value[:4])
    except (TypeError, ValueError):
        return current_year()
