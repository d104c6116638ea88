"""
Catalog search across the jewellery collections.

Provides:
- CatalogSearchService: Faceted multi-collection search with relevance sort
- SuggestionService: Search-as-you-type product suggestions
- CategoryAdapter: Per-collection query building and variant expansion
- SearchFilters: Filter state parsed from (and serialised to) query params
"""

from search.adapters import CategoryAdapter, build_default_adapters
from search.aggregator import CatalogSearchService, get_catalog_search_service
from search.models import SearchFilters, SearchResponse, Suggestion
from search.suggestions import SuggestionService, get_suggestion_service

__all__ = [
    "CategoryAdapter",
    "build_default_adapters",
    "CatalogSearchService",
    "get_catalog_search_service",
    "SearchFilters",
    "SearchResponse",
    "Suggestion",
    "SuggestionService",
    "get_suggestion_service",
]
