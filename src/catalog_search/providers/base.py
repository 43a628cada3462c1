"""Capability contract shared by the provider clients."""
from dataclasses import dataclass, field
from typing import List, Optional, Protocol

from ..models import CatalogEntry, Category

SORT_RELEVANCE = "relevance"
SORT_NEWEST = "newest"
SORT_ORDERS = (SORT_RELEVANCE, SORT_NEWEST)


@dataclass
class SearchOptions:
    """Options a provider search understands; providers ignore what they cannot use."""
    limit: int = 20
    start_index: int = 0
    order_by: str = SORT_RELEVANCE
    language: Optional[str] = None
    category: Category = Category.DIGITAL_BOOK


@dataclass
class ProviderResult:
    """Entries from one provider plus the total that provider reports."""
    entries: List[CatalogEntry] = field(default_factory=list)
    total_items: int = 0


class ProviderClient(Protocol):
    """What every provider client offers.

    Implementations never raise: failures become an empty
    :class:`ProviderResult` from ``search`` and ``None`` from ``get_by_id``.
    """
    name: str

    def search(self, query: str, options: Optional[SearchOptions] = None) -> ProviderResult:
        ...

    def get_by_id(self, entry_id: str) -> Optional[CatalogEntry]:
        ...
