"""Provider clients and the strategy table that selects them by name."""
from typing import Dict, Optional

from ..utils.api_utils import Transport
from .base import (
    ProviderClient,
    ProviderResult,
    SearchOptions,
    SORT_NEWEST,
    SORT_ORDERS,
    SORT_RELEVANCE,
)
from .google_books import GoogleBooksClient
from .open_library import OpenLibraryClient, looks_like_work_id

OPEN_LIBRARY = OpenLibraryClient.name
GOOGLE_BOOKS = GoogleBooksClient.name

PROVIDER_FACTORIES = {
    OPEN_LIBRARY: OpenLibraryClient,
    GOOGLE_BOOKS: GoogleBooksClient,
}


def build_providers(transport: Optional[Transport] = None) -> Dict[str, ProviderClient]:
    """Create one client per provider, all sharing a transport and its cache."""
    transport = transport or Transport()
    return {name: factory(transport=transport) for name, factory in PROVIDER_FACTORIES.items()}


__all__ = [
    'ProviderClient',
    'ProviderResult',
    'SearchOptions',
    'SORT_NEWEST',
    'SORT_ORDERS',
    'SORT_RELEVANCE',
    'GoogleBooksClient',
    'OpenLibraryClient',
    'OPEN_LIBRARY',
    'GOOGLE_BOOKS',
    'PROVIDER_FACTORIES',
    'build_providers',
    'looks_like_work_id',
]
