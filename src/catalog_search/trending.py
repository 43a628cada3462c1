"""Landing-page selection of currently interesting titles."""
import logging
import random
from typing import Optional, Tuple

from .models import SearchResult
from .providers import ProviderClient, ProviderResult, SearchOptions

logger = logging.getLogger(__name__)

TRENDING_LIMIT = 8
DEFAULT_LANGUAGE = "id"

# Indonesian topics for "id", English ones for any other language
INDONESIAN_QUERIES: Tuple[str, ...] = (
    "teknik sipil indonesia",
    "arsitektur desain",
    "elektronika digital",
    "multimedia interaktif",
)
ENGLISH_QUERIES: Tuple[str, ...] = ("engineering", "architecture", "electronics", "technology")


def queries_for(language: Optional[str]) -> Tuple[str, ...]:
    return INDONESIAN_QUERIES if language == DEFAULT_LANGUAGE else ENGLISH_QUERIES


class TrendingFeed:
    """Pick one topic at random and show a short Google Books page for it."""

    def __init__(self, provider: ProviderClient):
        self.provider = provider

    def get_trending(self, language: Optional[str] = DEFAULT_LANGUAGE) -> SearchResult:
        query = random.choice(queries_for(language))
        options = SearchOptions(limit=TRENDING_LIMIT, language=language)

        try:
            result = self.provider.search(query, options)
        except Exception as e:
            logger.error(f"Trending search for {query!r} failed: {e}")
            result = ProviderResult()
        if result is None:
            result = ProviderResult()

        entries = result.entries[:TRENDING_LIMIT]
        return SearchResult(entries=entries, total_items=len(entries), query=query)
