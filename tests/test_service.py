"""Tests for the catalog service and its module-level operations."""
from unittest.mock import patch

import pytest

import catalog_search
from catalog_search.__main__ import main
from catalog_search.models import Category
from catalog_search.providers import GOOGLE_BOOKS, OPEN_LIBRARY, ProviderResult
from catalog_search.service import CatalogService, set_service
from catalog_search.trending import ENGLISH_QUERIES

from conftest import FakeProvider, make_entry


@pytest.fixture
def providers():
    google = FakeProvider(
        GOOGLE_BOOKS,
        [ProviderResult([make_entry("Shared Title", "g1"), make_entry("Google Only", "g2")], 2000)],
        entries={"g1": make_entry("Shared Title", "g1")},
    )
    openlibrary = FakeProvider(
        OPEN_LIBRARY,
        [ProviderResult([make_entry("shared title", "/works/OL1W")], 10)],
        entries={"works/OL1W": make_entry("Open Title", "works/OL1W")},
    )
    return {GOOGLE_BOOKS: google, OPEN_LIBRARY: openlibrary}


@pytest.fixture
def service(providers):
    service = CatalogService(providers=providers, active_users=lambda: 3)
    set_service(service)
    yield service
    set_service(None)


class TestCatalogService:
    def test_combined_search(self, service):
        result = catalog_search.combined_search("title", limit=10)

        assert [entry.id for entry in result.entries] == ["g1", "g2"]

    def test_browse_category_uses_google_books(self, service, providers):
        result = catalog_search.browse_category(Category.JOURNAL, page=2, limit=6)

        assert result.total_items == 2000
        assert providers[GOOGLE_BOOKS].search_calls[0]["options"].start_index == 6
        assert providers[OPEN_LIBRARY].search_calls == []

    def test_get_entry_by_id(self, service):
        assert catalog_search.get_entry_by_id("works/OL1W").title == "Open Title"
        assert catalog_search.get_entry_by_id("g1").title == "Shared Title"
        assert catalog_search.get_entry_by_id("nothing") is None

    def test_get_trending_searches_google_books_only(self, service, providers):
        result = catalog_search.get_trending("en")

        assert result.query in ENGLISH_QUERIES
        assert providers[GOOGLE_BOOKS].search_calls[0]["options"].limit == 8
        assert providers[OPEN_LIBRARY].search_calls == []

    def test_get_catalog_stats_never_raises(self, service):
        # Fake providers have no count(); every probe fails
        stats = catalog_search.get_catalog_stats()

        assert stats.active_users >= 1
        assert stats.total_books == 5668978


class TestCommandLine:
    @pytest.fixture(autouse=True)
    def cli_service(self, monkeypatch, providers, tmp_path):
        monkeypatch.setattr(
            "catalog_search.__main__.CatalogService",
            lambda: CatalogService(providers=providers),
        )
        monkeypatch.setattr("catalog_search.__main__.Config.LOG_DIR", str(tmp_path))

    def test_search_prints_json(self, capsys):
        assert main(["search", "title", "--limit", "5"]) == 0

        out = capsys.readouterr().out
        assert '"totalItems": 2' in out

    def test_get_missing_entry_exits_nonzero(self, capsys):
        assert main(["get", "nothing"]) == 1
        assert "Not found" in capsys.readouterr().err

    def test_trending_prints_json(self, capsys):
        with patch("catalog_search.trending.random.choice", return_value="technology"):
            assert main(["trending", "--language", "en"]) == 0

        assert '"query": "technology"' in capsys.readouterr().out
