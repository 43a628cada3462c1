"""Tests for the catalog statistics aggregator."""
from unittest.mock import MagicMock, patch

import threading

import requests

from catalog_search.models import CatalogStats
from catalog_search.providers import GoogleBooksClient
from catalog_search.stats import FALLBACK_STATS, PROBES, StatsAggregator
from catalog_search.utils.api_utils import ProviderUnavailable

from conftest import make_response


def counting_provider(counts) -> MagicMock:
    provider = MagicMock(spec=GoogleBooksClient)

    def count(query):
        value = counts[query]
        if isinstance(value, Exception):
            raise value
        return value

    provider.count.side_effect = count
    return provider


class TestCatalogStats:
    def test_counts_plus_baselines(self):
        provider = counting_provider({
            "teknik informatika": 1200,
            "jurnal ilmiah": 300,
            "modul pembelajaran": 45,
        })

        stats = StatsAggregator(provider, active_users=lambda: 7).get_catalog_stats()

        assert stats == CatalogStats(
            total_books=5001200,
            total_journals=100300,
            total_modules=2045,
            active_users=7,
        )
        assert provider.count.call_count == len(PROBES)

    def test_zero_counts_use_default_estimates(self):
        provider = counting_provider({
            "teknik informatika": 0,
            "jurnal ilmiah": 0,
            "modul pembelajaran": 0,
        })

        stats = StatsAggregator(provider).get_catalog_stats()

        assert stats.total_books == 5010000
        assert stats.total_journals == 105000
        assert stats.total_modules == 4000

    def test_single_failed_probe_is_isolated(self):
        provider = counting_provider({
            "teknik informatika": 1,
            "jurnal ilmiah": ProviderUnavailable("down"),
            "modul pembelajaran": 2,
        })

        stats = StatsAggregator(provider).get_catalog_stats()

        assert stats.total_books == 5000001
        assert stats.total_journals == 105000
        assert stats.total_modules == 2002

    def test_total_outage_returns_static_fallback(self, transport, mock_requests_get):
        mock_requests_get.side_effect = requests.exceptions.ConnectionError("network unreachable")
        provider = GoogleBooksClient(transport=transport, api_key="")

        stats = StatsAggregator(provider, active_users=lambda: 12).get_catalog_stats()

        assert stats == FALLBACK_STATS
        assert stats.to_dict() == {
            "totalBooks": 5668978,
            "totalJournals": 145157,
            "totalModules": 4509,
            "activeUsers": 1,
        }
        assert stats.active_users >= 1

    def test_unexpected_error_returns_static_fallback(self):
        provider = counting_provider({})
        aggregator = StatsAggregator(provider)

        with patch.object(aggregator, "_probe_all", side_effect=RuntimeError("executor shut down")):
            assert aggregator.get_catalog_stats() == FALLBACK_STATS


class TestActiveUsers:
    def _stats(self, active_users):
        provider = counting_provider({
            "teknik informatika": 1,
            "jurnal ilmiah": 1,
            "modul pembelajaran": 1,
        })
        return StatsAggregator(provider, active_users=active_users).get_catalog_stats()

    def test_collaborator_error_falls_back_to_one(self):
        def broken():
            raise ConnectionError("session store down")

        assert self._stats(broken).active_users == 1

    def test_zero_falls_back_to_one(self):
        assert self._stats(lambda: 0).active_users == 1

    def test_no_collaborator_means_one(self):
        assert self._stats(None).active_users == 1

    def test_non_numeric_count_falls_back_to_one(self):
        assert self._stats(lambda: "many").active_users == 1


def test_probes_request_a_single_item(transport, mock_requests_get):
    mock_requests_get.return_value = make_response({"totalItems": 10})
    provider = GoogleBooksClient(transport=transport, api_key="")

    StatsAggregator(provider).get_catalog_stats()

    queries = sorted(call.kwargs["params"]["q"] for call in mock_requests_get.call_args_list)
    assert queries == sorted(probe.query for probe in PROBES.values())
    assert all(call.kwargs["params"]["maxResults"] == 1 for call in mock_requests_get.call_args_list)


class TestConcurrency:
    def test_count_queries_run_at_the_same_time(self):
        # Every count blocks until all of them have started
        barrier = threading.Barrier(len(PROBES), timeout=2)
        counts = {"teknik informatika": 1, "jurnal ilmiah": 2, "modul pembelajaran": 3}
        provider = MagicMock(spec=GoogleBooksClient)

        def count(query):
            barrier.wait()
            return counts[query]

        provider.count.side_effect = count

        stats = StatsAggregator(provider).get_catalog_stats()

        assert (stats.total_books, stats.total_journals, stats.total_modules) == (5000001, 100002, 2003)
