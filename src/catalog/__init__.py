"""
Catalog Module: read access to the product collections.

Provides:
- CatalogQuery: store-independent description of one collection read
- CatalogStore: Supabase-backed and in-memory implementations
"""

from catalog.query import CatalogQuery, FieldFilter, PriceRange, TextClause
from catalog.store import (
    CatalogStore,
    CatalogStoreError,
    InMemoryCatalogStore,
    SupabaseCatalogStore,
    get_catalog_store,
)

__all__ = [
    "CatalogQuery",
    "FieldFilter",
    "PriceRange",
    "TextClause",
    "CatalogStore",
    "CatalogStoreError",
    "InMemoryCatalogStore",
    "SupabaseCatalogStore",
    "get_catalog_store",
]
