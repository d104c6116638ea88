"""
Search-as-you-type suggestions.

Matches the raw query (escaped, case-insensitive) against each category's
suggestion fields and returns lightweight product cards. Metal variant
products yield one suggestion per metal option.
"""

import re
import threading
from typing import List, Optional, Sequence

from catalog.store import CatalogStore, get_catalog_store
from config.settings import get_settings
from core.logging import get_logger
from search.adapters import CategoryAdapter, build_default_adapters
from search.models import Suggestion

logger = get_logger(__name__)

MIN_QUERY_LENGTH = 2


class SuggestionService:
    """Autocomplete over all product collections."""

    def __init__(
        self,
        store: Optional[CatalogStore] = None,
        adapters: Optional[Sequence[CategoryAdapter]] = None,
        fallback_image: Optional[str] = None,
    ):
        self._store = store
        self._adapters = list(adapters) if adapters is not None else None
        self._fallback_image = fallback_image

    @property
    def store(self) -> CatalogStore:
        if self._store is None:
            self._store = get_catalog_store()
        return self._store

    @property
    def adapters(self) -> List[CategoryAdapter]:
        if self._adapters is None:
            self._adapters = build_default_adapters()
        return self._adapters

    @property
    def fallback_image(self) -> str:
        if self._fallback_image is None:
            self._fallback_image = get_settings().suggestion_fallback_image
        return self._fallback_image

    def suggest(self, query: str, limit: int = 10) -> List[Suggestion]:
        """
        Get suggestions for a partial query.

        Args:
            query: Partial search text. Fewer than 2 characters (after
                trimming) returns no suggestions.
            limit: Max records read per category and max suggestions returned.

        Returns:
            Suggestions whose name contains the query first, then the rest,
            truncated to limit.
        """
        needle = query.strip()
        if len(needle) < MIN_QUERY_LENGTH:
            return []

        pattern = re.compile(re.escape(needle), re.IGNORECASE)
        suggestions: List[Suggestion] = []

        for adapter in self.adapters:
            try:
                records = self.store.find(adapter.suggestion_query(pattern), limit=limit)
                for record in records:
                    suggestions.extend(adapter.suggest(record, self.fallback_image))
            except Exception as e:
                logger.warning(
                    "Suggestion lookup failed",
                    category=adapter.key,
                    error=str(e),
                )

        lowered = needle.lower()
        suggestions.sort(key=lambda s: lowered not in s.name.lower())

        logger.debug("Suggestions built", query=needle, candidates=len(suggestions))
        return suggestions[:limit]


# =============================================================================
# Singleton
# =============================================================================

_service: Optional[SuggestionService] = None
_service_lock = threading.Lock()


def get_suggestion_service() -> SuggestionService:
    """Get or create the SuggestionService singleton (thread-safe)."""
    global _service
    if _service is None:
        with _service_lock:
            if _service is None:
                _service = SuggestionService()
    return _service
