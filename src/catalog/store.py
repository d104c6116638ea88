"""
Document store access for the product collections.

Two implementations share the CatalogStore interface:

- SupabaseCatalogStore: pushes the availability flag, facet and price
  clauses down as PostgREST filters and applies the text clause to the
  returned rows (regex over array and nested fields is not expressible
  as a PostgREST filter).
- InMemoryCatalogStore: evaluates CatalogQuery.matches over seeded
  documents. Used for local runs from a JSON fixture and in tests.
"""

import copy
import json
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from catalog.query import CatalogQuery
from config.settings import get_settings
from core.logging import get_logger

logger = get_logger(__name__)


class CatalogStoreError(Exception):
    """Raised when a collection cannot be read."""
    pass


class CatalogStore(ABC):
    """Read-only access to product collections."""

    @abstractmethod
    def find(self, query: CatalogQuery, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Return the records of query.collection matching the query."""

    @abstractmethod
    def ping(self, collection: str) -> bool:
        """Return True if the collection can be read."""


# =============================================================================
# Supabase
# =============================================================================

class SupabaseCatalogStore(CatalogStore):
    """CatalogStore backed by Supabase (PostgREST) tables."""

    def __init__(self, client=None):
        self._client = client

    @property
    def client(self):
        if self._client is None:
            from config.database import get_supabase_client
            self._client = get_supabase_client()
        return self._client

    def find(self, query: CatalogQuery, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        try:
            builder = (
                self.client.table(query.collection)
                .select("*")
                .eq(query.flag_field, True)
            )
            for f in query.filters:
                values = list(f.values)
                if f.is_array:
                    builder = builder.ov(f.field, values)
                else:
                    builder = builder.in_(f.field, values)
            if query.price is not None:
                builder = (
                    builder.gte(query.price.field, query.price.minimum)
                    .lte(query.price.field, query.price.maximum)
                )
            # With a text clause the limit must wait for the local filter
            if limit is not None and query.text is None:
                builder = builder.limit(limit)
            result = builder.execute()
        except Exception as e:
            raise CatalogStoreError(f"Query on {query.collection} failed: {e}") from e

        rows = result.data or []
        if query.text is not None:
            rows = [row for row in rows if query.text.matches(row)]
        if limit is not None:
            rows = rows[:limit]

        logger.debug(
            "Collection queried",
            collection=query.collection,
            filter=query.to_filter(),
            rows=len(rows),
        )
        return rows

    def ping(self, collection: str) -> bool:
        try:
            self.client.table(collection).select("id").limit(1).execute()
        except Exception as e:
            logger.warning("Catalog ping failed", collection=collection, error=str(e))
            return False
        return True


# =============================================================================
# In-memory
# =============================================================================

class InMemoryCatalogStore(CatalogStore):
    """CatalogStore holding documents in process memory."""

    def __init__(self, collections: Optional[Dict[str, Iterable[Dict[str, Any]]]] = None):
        self._collections: Dict[str, List[Dict[str, Any]]] = {}
        for name, records in (collections or {}).items():
            self.add(name, *records)

    @classmethod
    def from_json_file(cls, path: Path) -> "InMemoryCatalogStore":
        """
        Load a fixture of the form {"<collection>": [record, ...], ...}.
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, ValueError) as e:
            raise CatalogStoreError(f"Could not load catalog fixture {path}: {e}") from e
        if not isinstance(payload, dict):
            raise CatalogStoreError(f"Catalog fixture {path} must be a JSON object")
        store = cls(payload)
        logger.info(
            "Loaded catalog fixture",
            path=str(path),
            collections={name: len(rows) for name, rows in store._collections.items()},
        )
        return store

    def add(self, collection: str, *records: Dict[str, Any]) -> None:
        self._collections.setdefault(collection, []).extend(records)

    def find(self, query: CatalogQuery, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        rows = [
            copy.deepcopy(record)
            for record in self._collections.get(query.collection, [])
            if query.matches(record)
        ]
        if limit is not None:
            rows = rows[:limit]
        return rows

    def ping(self, collection: str) -> bool:
        return True


# =============================================================================
# Singleton
# =============================================================================

_store: Optional[CatalogStore] = None
_store_lock = threading.Lock()


def create_catalog_store() -> CatalogStore:
    """Build the store selected by CATALOG_BACKEND."""
    settings = get_settings()
    if settings.catalog_backend == "memory":
        if settings.catalog_fixture_path:
            return InMemoryCatalogStore.from_json_file(settings.catalog_fixture_path)
        logger.warning("Memory catalog backend selected without a fixture; catalog is empty")
        return InMemoryCatalogStore()
    return SupabaseCatalogStore()


def get_catalog_store() -> CatalogStore:
    """Get or create the CatalogStore singleton (thread-safe)."""
    global _store
    if _store is None:
        with _store_lock:
            if _store is None:
                _store = create_catalog_store()
    return _store
