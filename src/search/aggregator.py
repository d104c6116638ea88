"""
Catalog search service.

Fans one search out over every included product collection, merges the
expanded rows, then sorts, derives facets and paginates:

    filters -> terms/pattern -> per-category query -> store.find
            -> adapter.expand -> merge -> sort -> facets -> page

A failure in one category is logged and that category contributes no rows.
"""

import threading
import time
from typing import List, Optional, Sequence

from catalog.store import CatalogStore, get_catalog_store
from config.settings import get_settings
from core.logging import get_logger
from search.adapters import CategoryAdapter, build_default_adapters
from search.cache import SearchCache
from search.facets import derive_facets
from search.models import SearchFilters, SearchResponse, SearchResultRow
from search.scoring import sort_rows
from search.synonyms import build_term_pattern, expand_terms

logger = get_logger(__name__)


class CatalogSearchService:
    """Search across all product collections."""

    def __init__(
        self,
        store: Optional[CatalogStore] = None,
        adapters: Optional[Sequence[CategoryAdapter]] = None,
        cache: Optional[SearchCache] = None,
    ):
        self._store = store
        self._adapters = list(adapters) if adapters is not None else None
        self._cache = cache

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
    def cache(self) -> SearchCache:
        if self._cache is None:
            self._cache = SearchCache(ttl_seconds=get_settings().search_cache_ttl_seconds)
        return self._cache

    # =========================================================================
    # Main Search
    # =========================================================================

    def search(self, filters: SearchFilters) -> SearchResponse:
        """
        Run a catalog search.

        Args:
            filters: Parsed filter state (facets, price, text, sort, page)

        Returns:
            SearchResponse with the requested page, the total row count and
            the facet options of the whole result set.
        """
        cache_key = filters.cache_key()
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug("Search cache hit", key=cache_key)
            return cached

        t_start = time.time()

        terms = expand_terms(filters.q)
        pattern = build_term_pattern(terms)

        rows: List[SearchResultRow] = []
        per_category = {}
        failed = []

        for adapter in self.adapters:
            if not adapter.includes(filters.categories):
                continue
            try:
                category_rows = self._search_category(adapter, filters, pattern)
            except Exception as e:
                logger.warning(
                    "Category search failed",
                    category=adapter.key,
                    collection=adapter.collection,
                    error=str(e),
                )
                failed.append(adapter.key)
                continue
            per_category[adapter.key] = len(category_rows)
            rows.extend(category_rows)

        ordered = sort_rows(rows, filters.sort_by, filters.q)
        facets = derive_facets(ordered)

        total_count = len(ordered)
        skip = filters.skip
        page_rows = ordered[skip: skip + filters.limit]

        response = SearchResponse(
            products=page_rows,
            total_count=total_count,
            has_more=skip + filters.limit < total_count,
            filters=facets,
        )

        logger.info(
            "Search completed",
            query=filters.q,
            terms=terms,
            categories=per_category,
            failed_categories=failed,
            total=total_count,
            page=filters.page,
            returned=len(page_rows),
            time_ms=int((time.time() - t_start) * 1000),
        )

        self.cache.set(cache_key, response)
        return response

    def _search_category(
        self,
        adapter: CategoryAdapter,
        filters: SearchFilters,
        pattern,
    ) -> List[SearchResultRow]:
        query = adapter.build_query(filters, pattern)
        records = self.store.find(query)
        rows: List[SearchResultRow] = []
        for record in records:
            rows.extend(adapter.expand(record, filters))
        return rows


# =============================================================================
# Singleton
# =============================================================================

_service: Optional[CatalogSearchService] = None
_service_lock = threading.Lock()


def get_catalog_search_service() -> CatalogSearchService:
    """Get or create the CatalogSearchService singleton (thread-safe)."""
    global _service
    if _service is None:
        with _service_lock:
            if _service is None:
                _service = CatalogSearchService()
    return _service
