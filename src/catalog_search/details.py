"""Single-entry lookup, dispatched to the provider that owns the id."""
import logging
from typing import Mapping, Optional

from .models import CatalogEntry
from .providers import GOOGLE_BOOKS, OPEN_LIBRARY, ProviderClient, looks_like_work_id

logger = logging.getLogger(__name__)


def owning_provider(entry_id: str) -> str:
    """Name of the provider an id belongs to.

    Open Library work references contain ``works/`` or start with ``OL``;
    everything else is treated as a Google Books volume id. The two formats
    are disjoint in practice, not by any guarantee.
    """
    return OPEN_LIBRARY if looks_like_work_id(entry_id) else GOOGLE_BOOKS


class DetailResolver:
    """Resolve an opaque id to one catalog entry."""

    def __init__(self, providers: Mapping[str, ProviderClient]):
        self.providers = providers

    def get_by_id(self, entry_id: str) -> Optional[CatalogEntry]:
        """Return the entry, or None when its provider cannot resolve it."""
        if not entry_id or not entry_id.strip():
            return None

        name = owning_provider(entry_id)
        provider = self.providers.get(name)
        if provider is None:
            logger.warning(f"No {name} client configured for {entry_id!r}")
            return None

        try:
            entry = provider.get_by_id(entry_id)
        except Exception as e:
            logger.error(f"{name} lookup for {entry_id!r} failed: {e}")
            return None

        if entry is None:
            logger.info(f"{entry_id!r} not found in {name}")
        return entry
