"""
Tests for search-as-you-type suggestions.
"""

from unittest.mock import MagicMock

import pytest

from catalog.store import InMemoryCatalogStore
from search.suggestions import SuggestionService

FALLBACK = "/images/engagement-section.png"


@pytest.fixture
def service_for(adapters):
    def _make(store):
        return SuggestionService(store=store, adapters=adapters, fallback_image=FALLBACK)
    return _make


class TestSuggest:

    @pytest.mark.parametrize("query", ["", "r", "  h  "])
    def test_short_query_returns_nothing(self, suggestion_service, query):
        assert suggestion_service.suggest(query) == []

    def test_variant_suggestion_per_option(self, service_for, make_setting):
        store = InMemoryCatalogStore({"settings": [make_setting(
            id="set-1",
            title="Halo Setting",
            options=[("14K", "Yellow Gold", 600), ("18K", "White Gold", 900)],
            metal_color_images={"White Gold": [{"url": "https://cdn.test/wg.jpg"}]},
        )]})

        suggestions = service_for(store).suggest("halo")

        assert [s.id for s in suggestions] == ["set-1-14K-Yellow Gold-0", "set-1-18K-White Gold-1"]
        assert [s.name for s in suggestions] == [
            "Halo Setting - 14K Yellow Gold",
            "Halo Setting - 18K White Gold",
        ]
        assert [s.price for s in suggestions] == [600, 900]
        assert suggestions[0].image_url == "https://cdn.test/set-1.jpg"
        assert suggestions[1].image_url == "https://cdn.test/wg.jpg"
        assert suggestions[0].metal.karat == "14K"
        assert suggestions[0].product_type == "Setting"

    def test_option_images_before_media(self, service_for, make_setting):
        options = [{"karat": "14K", "color": "Rose Gold", "price": 700,
                    "images": [{"url": "https://cdn.test/opt-rose.jpg"}]}]
        store = InMemoryCatalogStore({"settings": [
            make_setting(id="s1", title="Petal Setting", metal_options=options),
        ]})

        suggestion = service_for(store).suggest("petal")[0]

        assert suggestion.image_url == "https://cdn.test/opt-rose.jpg"
        assert suggestion.product_type == "Setting"

    def test_colour_images_before_option_images(self, service_for, make_setting):
        options = [{"karat": "14K", "color": "Rose Gold", "price": 700,
                    "images": [{"url": "https://cdn.test/opt-rose.jpg"}]}]
        store = InMemoryCatalogStore({"settings": [make_setting(
            id="s1",
            title="Petal Setting",
            metal_options=options,
            metal_color_images={"Rose Gold": [{"url": "https://cdn.test/rose.jpg"}]},
        )]})

        assert service_for(store).suggest("petal")[0].image_url == "https://cdn.test/rose.jpg"

    @pytest.mark.parametrize("collection,label", [
        ("settings", "Setting"),
        ("wedding_rings", "Wedding Ring"),
        ("engagement_rings", "Engagement Ring"),
    ])
    def test_ring_product_type_labels(self, service_for, make_setting, collection, label):
        store = InMemoryCatalogStore({collection: [make_setting(title="Petal Band")]})

        suggestions = service_for(store).suggest("petal")

        assert {s.product_type for s in suggestions} == {label}

    def test_jewellery_product_type_labels(self, service_for, make_jewelry):
        store = InMemoryCatalogStore({
            "mens_jewelry": [make_jewelry("m-1", name="Onyx Signet")],
            "earrings": [make_jewelry("e-1", name="Onyx Studs")],
        })

        labels = {s.id: s.product_type for s in service_for(store).suggest("onyx")}

        assert labels == {"m-1": "Mens Jewelry", "e-1": "Earring"}

    def test_stone_names(self, service_for, make_diamond, make_gemstone):
        store = InMemoryCatalogStore({
            "diamonds": [make_diamond(carat=1.0, shape="Round", color="G", clarity="VS1")],
            "gemstones": [make_gemstone(carat=2.0, type="Ruby", color="Red", shape="Round")],
        })

        names = [s.name for s in service_for(store).suggest("round")]

        assert "1ct Round G VS1 Diamond" in names
        assert "2ct Ruby Red Round" in names

    def test_fallback_image(self, service_for, make_gemstone):
        store = InMemoryCatalogStore({"gemstones": [make_gemstone(images=[])]})

        suggestion = service_for(store).suggest("ruby")[0]

        assert suggestion.image_url == FALLBACK
        assert suggestion.metal is None

    def test_name_matches_listed_first(self, service_for, make_jewelry):
        store = InMemoryCatalogStore({"bracelets": [
            make_jewelry("b-1", name="Classic Tennis Bracelet", metal="Gold", type="Tennis"),
            make_jewelry("b-2", name="Cuff", metal="Gold", type="Tennis", style="Minimal"),
            make_jewelry("b-3", name="Minimal Bangle", metal="Gold", type="Bangle", style="Minimal"),
        ]})

        suggestions = service_for(store).suggest("minimal")

        assert [s.id for s in suggestions] == ["b-3", "b-2"]

    def test_limit_applies_to_result(self, service_for, make_jewelry):
        store = InMemoryCatalogStore({
            "bracelets": [make_jewelry(f"b-{i}", name=f"Gold Bracelet {i}") for i in range(5)],
            "necklaces": [make_jewelry(f"n-{i}", name=f"Gold Necklace {i}") for i in range(5)],
        })

        assert len(service_for(store).suggest("gold", limit=3)) == 3

    def test_price_falls_back_through_fields(self, service_for, make_jewelry):
        store = InMemoryCatalogStore({"earrings": [
            make_jewelry("e-1", name="Drop Earrings", price=None, base_price=None, sale_price=320),
        ]})

        assert service_for(store).suggest("drop")[0].price == 320

    def test_failing_category_skipped(self, service_for, failing_store):
        suggestions = service_for(failing_store).suggest("sapphire")

        assert [s.id for s in suggestions] == ["nck-001"]
        assert suggestions[0].product_type == "Necklace"

    def test_store_error_everywhere_returns_empty(self, service_for):
        store = MagicMock()
        store.find.side_effect = RuntimeError("down")

        assert service_for(store).suggest("halo") == []
