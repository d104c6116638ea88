"""
Pytest configuration and shared fixtures for the catalog search tests.
"""
import os
import sys
from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock, patch

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(__file__)), "src"))

# Load environment variables
from dotenv import load_dotenv
load_dotenv(os.path.join(os.path.dirname(os.path.dirname(__file__)), ".env"))


# ============================================================================
# Fixtures: Record Factories
# ============================================================================

@pytest.fixture
def make_setting():
    """Factory for metal-variant ring records (settings, wedding, engagement)."""
    def _make(
        id: str = "set-001",
        title: str = "Classic Solitaire Setting",
        options: Optional[List[tuple]] = None,
        style: Optional[List[str]] = None,
        **overrides: Any,
    ) -> Dict[str, Any]:
        if options is None:
            options = [("14K", "Yellow Gold", 600), ("14K", "White Gold", 650)]
        record = {
            "id": id,
            "title": title,
            "slug": title.lower().replace(" ", "-"),
            "description": f"{title} in solid gold",
            "category": "Settings",
            "style": style if style is not None else ["Solitaire"],
            "type": ["Ring"],
            "base_price": options[0][2] if options else 0,
            "metal_options": [
                {"karat": karat, "color": color, "price": price, "is_default": i == 0}
                for i, (karat, color, price) in enumerate(options)
            ],
            "metal_color_images": {},
            "media": {"images": [{"url": f"https://cdn.test/{id}.jpg", "public_id": id}]},
            "is_active": True,
        }
        record.update(overrides)
        return record
    return _make


@pytest.fixture
def make_diamond():
    """Factory for loose diamond records."""
    def _make(id: str = "dia-001", **overrides: Any) -> Dict[str, Any]:
        record = {
            "id": id,
            "slug": id,
            "type": "natural",
            "carat": 1.0,
            "shape": "Round",
            "color": "G",
            "clarity": "VS1",
            "price": 5000,
            "images": [{"url": f"https://cdn.test/{id}.jpg", "public_id": id}],
            "is_available": True,
        }
        record.update(overrides)
        return record
    return _make


@pytest.fixture
def make_gemstone():
    """Factory for loose gemstone records."""
    def _make(id: str = "gem-001", **overrides: Any) -> Dict[str, Any]:
        record = {
            "id": id,
            "slug": id,
            "type": "Ruby",
            "source": "Burma",
            "carat": 2.0,
            "shape": "Cushion",
            "color": "Red",
            "clarity": "Eye Clean",
            "price": 3000,
            "images": [],
            "is_available": True,
        }
        record.update(overrides)
        return record
    return _make


@pytest.fixture
def make_jewelry():
    """Factory for fine jewellery records (bracelets, earrings, ...)."""
    def _make(id: str = "brc-001", name: Optional[str] = "Tennis Bracelet", **overrides: Any) -> Dict[str, Any]:
        record = {
            "id": id,
            "name": name,
            "slug": (name or id).lower().replace(" ", "-"),
            "description": f"{name or 'Piece'} with round diamonds",
            "type": "Tennis",
            "metal": "White Gold",
            "style": "Classic",
            "gemstones": [{"type": "Diamond", "carat": 1.0}],
            "price": 1500,
            "images": [],
            "is_available": True,
        }
        record.update(overrides)
        return record
    return _make


@pytest.fixture
def three_settings(make_setting) -> List[Dict[str, Any]]:
    """Three settings; only one (14K Yellow Gold, $600) survives the combined filter."""
    return [
        make_setting(
            id="set-001",
            title="Classic Ring Setting",
            options=[
                ("14K", "Yellow Gold", 600),
                ("18K", "Yellow Gold", 2500),
                ("14K", "White Gold", 650),
            ],
        ),
        make_setting(
            id="set-002",
            title="Halo Ring",
            options=[("14K", "Yellow Gold", 450), ("14K", "Rose Gold", 800)],
            style=["Halo"],
        ),
        make_setting(
            id="set-003",
            title="Vintage Ring",
            options=[("14K", "Yellow Gold", 700)],
            is_active=False,
        ),
    ]


# ============================================================================
# Fixtures: Settings, Store and Services
# ============================================================================

@pytest.fixture
def test_settings():
    """Settings with test defaults (memory backend)."""
    from config.settings import get_settings_for_testing
    return get_settings_for_testing()


@pytest.fixture
def adapters(test_settings):
    """Default category adapters bound to the test collection names."""
    from search.adapters import build_default_adapters
    return build_default_adapters(test_settings)


@pytest.fixture
def catalog_store(make_diamond, make_gemstone, make_jewelry, three_settings):
    """In-memory store seeded with a small catalog across several collections."""
    from catalog.store import InMemoryCatalogStore
    return InMemoryCatalogStore({
        "settings": three_settings,
        "diamonds": [
            make_diamond("dia-001"),
            make_diamond("dia-002", shape="Oval", color="F", clarity="VVS2", carat=1.5, price=2100),
        ],
        "gemstones": [make_gemstone("gem-001")],
        "bracelets": [make_jewelry("brc-001")],
        "necklaces": [
            make_jewelry(
                "nck-001",
                name="Sapphire Pendant",
                type="Pendant",
                metal="Platinum",
                style="Vintage",
                gemstones=[{"type": "Sapphire", "carat": 1.2}],
                price=1850,
            ),
        ],
    })


class FailingCatalogStore:
    """Wraps a store and fails every read of the given collections."""

    def __init__(self, inner, failing_collections):
        self.inner = inner
        self.failing_collections = set(failing_collections)

    def find(self, query, limit=None):
        from catalog.store import CatalogStoreError
        if query.collection in self.failing_collections:
            raise CatalogStoreError(f"{query.collection} is unavailable")
        return self.inner.find(query, limit)

    def ping(self, collection):
        return collection not in self.failing_collections


@pytest.fixture
def failing_store(catalog_store):
    """Store whose diamonds collection always fails."""
    return FailingCatalogStore(catalog_store, ["diamonds"])


@pytest.fixture
def search_service(catalog_store, adapters):
    """CatalogSearchService over the in-memory store, cache disabled."""
    from search.aggregator import CatalogSearchService
    from search.cache import SearchCache
    return CatalogSearchService(store=catalog_store, adapters=adapters, cache=SearchCache(0))


@pytest.fixture
def suggestion_service(catalog_store, adapters):
    from search.suggestions import SuggestionService
    return SuggestionService(
        store=catalog_store,
        adapters=adapters,
        fallback_image="/images/engagement-section.png",
    )


# ============================================================================
# Fixtures: Mock Services
# ============================================================================

@pytest.fixture
def mock_supabase_client():
    """Mock Supabase client whose query builder chains back to itself."""
    mock_client = MagicMock()
    builder = MagicMock()
    for method in ("select", "eq", "in_", "ov", "gte", "lte", "limit"):
        getattr(builder, method).return_value = builder
    builder.execute.return_value.data = []
    mock_client.table.return_value = builder
    mock_client.builder = builder
    return mock_client


@pytest.fixture
def mock_supabase(mock_supabase_client):
    """Patch Supabase client creation."""
    with patch("config.database.create_client", return_value=mock_supabase_client):
        yield mock_supabase_client


# ============================================================================
# Fixtures: FastAPI Test Client
# ============================================================================

@pytest.fixture
def app(search_service, suggestion_service, catalog_store):
    """FastAPI application wired to the in-memory catalog."""
    from api.app import create_app
    from catalog.store import get_catalog_store
    from search.aggregator import get_catalog_search_service
    from search.suggestions import get_suggestion_service

    application = create_app()
    application.dependency_overrides[get_catalog_search_service] = lambda: search_service
    application.dependency_overrides[get_suggestion_service] = lambda: suggestion_service
    application.dependency_overrides[get_catalog_store] = lambda: catalog_store
    return application


@pytest.fixture
def client(app):
    """Synchronous HTTP client for testing FastAPI endpoints."""
    from fastapi.testclient import TestClient
    with TestClient(app) as test_client:
        yield test_client


# ============================================================================
# Markers auto-use
# ============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "supabase: marks tests that require Supabase")


# ============================================================================
# Skip conditions
# ============================================================================

def pytest_collection_modifyitems(config, items):
    """Auto-skip Supabase tests if no credentials are configured."""
    skip_supabase = pytest.mark.skip(reason="Supabase tests require credentials")

    supabase_url = os.getenv("SUPABASE_URL")

    for item in items:
        if "supabase" in item.keywords and not supabase_url:
            item.add_marker(skip_supabase)
