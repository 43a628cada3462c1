"""Catalog data models."""
import random
from dataclasses import dataclass, asdict, field, fields
from datetime import datetime
from enum import Enum
from typing import List, Dict, Any, Optional

from .config_loader import Config

UNTITLED = "Untitled"
UNKNOWN_AUTHOR = "Unknown Author"


class Category(str, Enum):
    """Coarse content types the catalog is organized by."""
    DIGITAL_BOOK = "digital-book"
    JOURNAL = "journal"
    TEACHING_MODULE = "teaching-module"
    INTERNSHIP_REPORT = "internship-report"

    @classmethod
    def parse(cls, value: Any) -> Optional["Category"]:
        """Return the matching category, or None when the value is not one."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


def current_year() -> int:
    return datetime.now().year


def synthetic_views() -> int:
    """Popularity counter for display only; nothing persists it."""
    return random.randint(100, 1099)


# camelCase names used when entries leave this layer
_WIRE_NAMES = {
    "cover_url": "coverUrl",
    "page_count": "pageCount",
    "preview_link": "previewLink",
}


@dataclass
class CatalogEntry:
    """A catalog item in the one shape every provider is normalized into."""
    id: str
    title: str = UNTITLED
    author: str = UNKNOWN_AUTHOR
    cover_url: str = ""
    category: Category = Category.DIGITAL_BOOK
    year: int = field(default_factory=current_year)

    # Optional metadata
    description: Optional[str] = None
    language: Optional[str] = None
    isbn: Optional[str] = None
    publisher: Optional[str] = None
    page_count: Optional[int] = None
    preview_link: Optional[str] = None
    views: Optional[int] = None

    def __post_init__(self):
        if not self.title or not str(self.title).strip():
            self.title = UNTITLED
        if not self.author or not str(self.author).strip():
            self.author = UNKNOWN_AUTHOR
        if not self.cover_url:
            self.cover_url = Config.PLACEHOLDER_COVER_URL
        self.category = Category.parse(self.category) or Category.DIGITAL_BOOK
        if not isinstance(self.year, int):
            self.year = current_year()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a dictionary for JSON serialization."""
        data = asdict(self)
        data["category"] = self.category.value

        # Remove None values
        return {_WIRE_NAMES.get(k, k): v for k, v in data.items() if v is not None}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CatalogEntry":
        """Create an entry from a dictionary in either key style.

        Keys that are not entry fields are ignored.
        """
        reverse = {wire: name for name, wire in _WIRE_NAMES.items()}
        known = {f.name for f in fields(cls)}
        kwargs = {reverse.get(k, k): v for k, v in data.items()}
        kwargs = {k: v for k, v in kwargs.items() if k in known}
        return cls(**kwargs)


@dataclass
class SearchResult:
    """Result of a multi-provider search.

    ``total_items`` counts the entries actually returned after deduplication
    and truncation. It is a local, approximate figure and is not the total a
    provider reports for the query.
    """
    entries: List[CatalogEntry]
    total_items: int
    query: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "books": [entry.to_dict() for entry in self.entries],
            "totalItems": self.total_items,
            "query": self.query,
        }


@dataclass
class BrowseResult:
    """A page of category results plus the provider's reported total."""
    entries: List[CatalogEntry]
    total_items: int
    page: int = 1
    limit: int = 12
    broadened: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "books": [entry.to_dict() for entry in self.entries],
            "totalItems": self.total_items,
            "page": self.page,
            "limit": self.limit,
            "broadened": self.broadened,
        }


@dataclass(frozen=True)
class CatalogStats:
    """Display-ready corpus statistics."""
    total_books: int
    total_journals: int
    total_modules: int
    active_users: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "totalBooks": self.total_books,
            "totalJournals": self.total_journals,
            "totalModules": self.total_modules,
            "activeUsers": self.active_users,
        }
