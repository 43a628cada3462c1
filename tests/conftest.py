"""Pytest configuration and fixtures."""
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Generator, List, Optional, Union
from unittest.mock import MagicMock, patch

import pytest
import requests

# Make the src layout importable without an install
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from catalog_search.models import CatalogEntry  # noqa: E402
from catalog_search.providers import ProviderResult, SearchOptions  # noqa: E402
from catalog_search.utils.api_utils import Transport  # noqa: E402
from catalog_search.utils.cache import ResponseCache  # noqa: E402


def make_entry(title: str, entry_id: Optional[str] = None, **kwargs: Any) -> CatalogEntry:
    return CatalogEntry(id=entry_id or title.lower().replace(" ", "-"), title=title, **kwargs)


def make_response(payload: Any = None, status_code: int = 200) -> MagicMock:
    """Stand-in for a ``requests.Response``."""
    response = MagicMock()
    response.status_code = status_code
    response.text = str(payload)
    response.json.return_value = payload
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(
            f"{status_code} Error", response=response
        )
    return response


class FakeProvider:
    """Provider client double that records every call."""

    def __init__(
        self,
        name: str,
        results: Union[List[ProviderResult], Callable[[str, SearchOptions], ProviderResult], None] = None,
        entries: Optional[Dict[str, CatalogEntry]] = None,
        error: Optional[Exception] = None,
    ):
        self.name = name
        self._results = results if results is not None else []
        self._entries = entries or {}
        self._error = error
        self.search_calls: List[Dict[str, Any]] = []
        self.lookups: List[str] = []

    def search(self, query: str, options: Optional[SearchOptions] = None) -> ProviderResult:
        options = options or SearchOptions()
        self.search_calls.append({"query": query, "options": options})
        if self._error:
            raise self._error
        if callable(self._results):
            return self._results(query, options)
        if not self._results:
            return ProviderResult()
        index = min(len(self.search_calls), len(self._results)) - 1
        return self._results[index]

    def get_by_id(self, entry_id: str) -> Optional[CatalogEntry]:
        self.lookups.append(entry_id)
        if self._error:
            raise self._error
        return self._entries.get(entry_id)


def titles(entries: List[CatalogEntry]) -> List[str]:
    return [entry.title for entry in entries]


@pytest.fixture
def transport() -> Transport:
    """A transport with its own empty cache."""
    return Transport(timeout=5, cache=ResponseCache(600))


@pytest.fixture
def mock_requests_get() -> Generator[MagicMock, None, None]:
    """Mock for requests.get."""
    with patch("catalog_search.utils.api_utils.requests.get") as mock_get:
        yield mock_get


@pytest.fixture
def sample_volume() -> Dict[str, Any]:
    """Google Books volume resource."""
    return {
        "kind": "books#volume",
        "id": "zyTCAlFPjgYC",
        "volumeInfo": {
            "title": "The Google Story",
            "authors": ["David A. Vise", "Mark Malseed"],
            "publisher": "Random House Digital, Inc.",
            "publishedDate": "2005-11-15",
            "description": "Here is the story behind one of the most remarkable Internet successes.",
            "industryIdentifiers": [
                {"type": "ISBN_10", "identifier": "055380457X"},
                {"type": "ISBN_13", "identifier": "9780553804577"},
            ],
            "pageCount": 207,
            "imageLinks": {
                "smallThumbnail": "http://books.google.com/books/content?id=zyTCAlFPjgYC&zoom=5",
                "thumbnail": "http://books.google.com/books/content?id=zyTCAlFPjgYC&zoom=1",
            },
            "language": "en",
            "previewLink": "http://books.google.com/books?id=zyTCAlFPjgYC",
        },
    }


@pytest.fixture
def sample_open_library_doc() -> Dict[str, Any]:
    """Open Library search record."""
    return {
        "key": "/works/OL45883W",
        "title": "Fantastic Mr Fox",
        "author_name": ["Roald Dahl"],
        "cover_i": 6498519,
        "cover_edition_key": "OL7353617M",
        "first_publish_year": 1970,
        "first_sentence": ["Down in the valley there were three farms."],
        "language": ["eng"],
        "isbn": ["9780140328721"],
        "publisher": ["Puffin"],
        "number_of_pages_median": 96,
    }


@pytest.fixture
def sample_work() -> Dict[str, Any]:
    """Open Library work record."""
    return {
        "key": "/works/OL45883W",
        "title": "Fantastic Mr Fox",
        "authors": [{"author": {"key": "/authors/OL34184A"}, "type": {"key": "/type/author_role"}}],
        "covers": [6498519],
        "description": {"type": "/type/text", "value": "The main character of Fantastic Mr Fox is a fox."},
        "created": {"type": "/type/datetime", "value": "2009-10-15T11:34:21.437031"},
    }
