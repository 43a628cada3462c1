"""Tests for the catalog data models."""
from datetime import datetime

from catalog_search.config_loader import Config
from catalog_search.models import (
    CatalogEntry,
    CatalogStats,
    Category,
    SearchResult,
    UNKNOWN_AUTHOR,
    UNTITLED,
    synthetic_views,
)


class TestCategory:
    def test_parse_known_values(self):
        assert Category.parse("journal") is Category.JOURNAL
        assert Category.parse(" Internship-Report ") is Category.INTERNSHIP_REPORT
        assert Category.parse(Category.TEACHING_MODULE) is Category.TEACHING_MODULE

    def test_parse_unknown_value(self):
        assert Category.parse("magazine") is None
        assert Category.parse(None) is None


class TestCatalogEntry:
    def test_required_fields_are_filled(self):
        entry = CatalogEntry(id="x", title="", author=None, cover_url="", year=None)

        assert entry.title == UNTITLED
        assert entry.author == UNKNOWN_AUTHOR
        assert entry.cover_url == Config.PLACEHOLDER_COVER_URL
        assert entry.category is Category.DIGITAL_BOOK
        assert entry.year == datetime.now().year

    def test_category_string_is_parsed(self):
        entry = CatalogEntry(id="x", title="T", category="journal")
        assert entry.category is Category.JOURNAL

    def test_to_dict_uses_wire_names_and_drops_unset(self):
        entry = CatalogEntry(
            id="abc",
            title="Book",
            author="Someone",
            cover_url="https://example.org/c.jpg",
            category=Category.TEACHING_MODULE,
            year=2020,
            page_count=120,
            preview_link="https://example.org/p",
        )

        data = entry.to_dict()

        assert data == {
            "id": "abc",
            "title": "Book",
            "author": "Someone",
            "coverUrl": "https://example.org/c.jpg",
            "category": "teaching-module",
            "year": 2020,
            "pageCount": 120,
            "previewLink": "https://example.org/p",
        }

    def test_from_dict_accepts_wire_names(self):
        entry = CatalogEntry.from_dict({
            "id": "abc",
            "title": "Book",
            "coverUrl": "https://example.org/c.jpg",
            "category": "journal",
            "year": 2001,
            "pageCount": 10,
        })

        assert entry.cover_url == "https://example.org/c.jpg"
        assert entry.category is Category.JOURNAL
        assert entry.page_count == 10

    def test_from_dict_ignores_unknown_keys(self):
        entry = CatalogEntry.from_dict({"id": "abc", "title": "Book", "totalItems": 3, "kind": "books#volume"})

        assert entry.id == "abc"
        assert entry.title == "Book"


def test_synthetic_views_range():
    for _ in range(50):
        assert 100 <= synthetic_views() <= 1099


def test_search_result_to_dict():
    result = SearchResult(entries=[CatalogEntry(id="1", title="A")], total_items=1, query="a")
    data = result.to_dict()

    assert data["totalItems"] == 1
    assert data["query"] == "a"
    assert data["books"][0]["title"] == "A"


def test_stats_to_dict():
    stats = CatalogStats(total_books=1, total_journals=2, total_modules=3, active_users=4)
    assert stats.to_dict() == {"totalBooks": 1, "totalJournals": 2, "totalModules": 3, "activeUsers": 4}
