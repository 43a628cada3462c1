"""Free-text search fanned out over the providers."""
import logging
import math
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from .models import CatalogEntry, SearchResult
from .providers import GOOGLE_BOOKS, OPEN_LIBRARY, ProviderClient, ProviderResult, SearchOptions

logger = logging.getLogger(__name__)

SOURCE_ALL = "all"
# Concatenation order when every provider is searched
PROVIDER_ORDER = (GOOGLE_BOOKS, OPEN_LIBRARY)
SOURCES = (SOURCE_ALL,) + PROVIDER_ORDER

DEFAULT_LIMIT = 20


def dedupe_by_title(entries: Iterable[CatalogEntry]) -> List[CatalogEntry]:
    """Keep the first entry of every case-insensitive title."""
    seen = set()
    unique = []
    for entry in entries:
        key = entry.title.lower()
        if key in seen:
            continue
        seen.add(key)
        unique.append(entry)
    return unique


def fan_out(calls: Mapping[str, Callable[[], ProviderResult]]) -> Dict[str, ProviderResult]:
    """Run provider calls concurrently and wait for all of them.

    A call that raises anyway contributes an empty result; the others are kept.
    """
    if len(calls) == 1:
        ((name, call),) = calls.items()
        return {name: _settle(name, call)}

    results: Dict[str, ProviderResult] = {}
    with ThreadPoolExecutor(max_workers=len(calls)) as ex:
        future_map = {ex.submit(call): name for name, call in calls.items()}
        for fut, name in future_map.items():
            try:
                results[name] = _or_empty(fut.result())
            except Exception as e:
                logger.error(f"{name} search failed: {e}")
                results[name] = ProviderResult()
    return results


def _or_empty(result: Optional[ProviderResult]) -> ProviderResult:
    return ProviderResult() if result is None else result


def _settle(name: str, call: Callable[[], ProviderResult]) -> ProviderResult:
    try:
        return _or_empty(call())
    except Exception as e:
        logger.error(f"{name} search failed: {e}")
        return ProviderResult()


class MultiProviderSearchEngine:
    """Combined search across Google Books and Open Library."""

    def __init__(self, providers: Mapping[str, ProviderClient]):
        self.providers = providers

    def selected(self, source: str = SOURCE_ALL) -> Sequence[str]:
        """Provider names for ``source``, in concatenation order."""
        if source == SOURCE_ALL:
            return [name for name in PROVIDER_ORDER if name in self.providers]
        if source not in SOURCES:
            raise ValueError(f"Unknown source {source!r}; expected one of {', '.join(SOURCES)}")
        return [source] if source in self.providers else []

    def search(
        self,
        query: str,
        limit: int = DEFAULT_LIMIT,
        language: Optional[str] = None,
        source: str = SOURCE_ALL,
    ) -> SearchResult:
        """
        Search the selected providers and merge their results.

        ``query`` must be non-empty; guarding against empty input is the
        caller's job. The returned ``total_items`` is the number of entries in
        this result, not a provider total.

        Args:
            query: Free-text query
            limit: Maximum number of entries to return
            language: Language restriction, honoured by Google Books only
            source: ``"all"``, ``"google"`` or ``"openlibrary"``
        """
        names = self.selected(source)
        if not names:
            return SearchResult(entries=[], total_items=0, query=query)

        per_provider = math.ceil(limit / 2) if len(names) > 1 else limit
        options = SearchOptions(limit=per_provider, language=language)

        logger.info(f"Searching {', '.join(names)} for {query!r} (limit={limit})")
        results = fan_out({
            name: (lambda provider=self.providers[name]: provider.search(query, options))
            for name in names
        })

        merged = [entry for name in names for entry in results[name].entries]
        entries = dedupe_by_title(merged)[:limit]
        return SearchResult(entries=entries, total_items=len(entries), query=query)
