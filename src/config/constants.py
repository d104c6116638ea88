"""
Application constants and search configuration.

These are values that don't change based on environment but may need
to be tuned or referenced across the codebase.
"""

from dataclasses import dataclass, field
from typing import Dict, Tuple


# =============================================================================
# Request Defaults
# =============================================================================

# Upper price bound used when the client sends none. A max price below this
# value counts as an explicit bound.
MAX_PRICE_SENTINEL: float = 999999.0

DEFAULT_PAGE: int = 1
DEFAULT_LIMIT: int = 20


class SortKey:
    """Accepted values of the sortBy query parameter."""
    RELEVANCE = "relevance"
    PRICE_LOW = "price-low"
    PRICE_HIGH = "price-high"
    NEWEST = "newest"


# =============================================================================
# Synonym Table
# =============================================================================

# Kept exactly as merchandised. Not symmetric: "choker" reaches "necklace"
# but e.g. "pendant" reaches nothing.
SYNONYM_MAP: Dict[str, Tuple[str, ...]] = {
    "ring": ("band", "solitaire", "halo", "setting"),
    "rings": ("band", "solitaire", "halo", "setting"),
    "wedding": ("bridal", "nuptial"),
    "engagement": ("proposal", "bridal"),
    "diamond": ("brilliant", "ice"),
    "necklace": ("pendant", "choker", "chain", "lariat", "collar"),
    "choker": ("collar", "necklace"),
    "earring": ("stud", "hoop", "dangle"),
    "bracelet": ("bangle", "cuff"),
}


# =============================================================================
# Relevance Ladder
# =============================================================================

@dataclass(frozen=True)
class RelevanceWeights:
    """Points awarded by the relevance scorer. Bonuses stack."""

    EXACT_TITLE: int = 100
    TITLE_PREFIX: int = 50
    TITLE_CONTAINS: int = 25
    CATEGORY_CONTAINS: int = 10
    TYPE_CONTAINS: int = 10
    DESCRIPTION_CONTAINS: int = 5


DEFAULT_RELEVANCE_WEIGHTS = RelevanceWeights()


# =============================================================================
# Category Definitions
# =============================================================================

@dataclass(frozen=True)
class CategoryDefinition:
    """Static description of one product collection."""

    key: str
    label: str
    product_type: str
    # productType shown on autocomplete suggestions
    suggestion_label: str
    flag_field: str
    # Category filter values that include this collection
    inclusion_labels: Tuple[str, ...]
    # Exact queries that return the whole collection without a text clause
    aliases: Tuple[str, ...]
    text_fields: Tuple[str, ...]
    suggestion_fields: Tuple[str, ...]
    array_fields: Tuple[str, ...] = field(default_factory=tuple)


_RING_FIELDS = ("title", "description", "style", "type")
_RING_SUGGESTION_FIELDS = ("title", "category", "style", "type")
_JEWELRY_FIELDS = ("name", "type", "metal", "style", "description", "gemstones.type")
_JEWELRY_SUGGESTION_FIELDS = ("name", "type", "metal", "style")

SETTINGS = CategoryDefinition(
    key="settings",
    label="Settings",
    product_type="setting",
    suggestion_label="Setting",
    flag_field="is_active",
    inclusion_labels=("Settings", "Rings"),
    aliases=("setting", "settings"),
    text_fields=_RING_FIELDS,
    suggestion_fields=_RING_SUGGESTION_FIELDS,
    array_fields=("style", "type"),
)

WEDDING = CategoryDefinition(
    key="wedding",
    label="Wedding",
    product_type="wedding",
    suggestion_label="Wedding Ring",
    flag_field="is_active",
    inclusion_labels=("Wedding", "Rings"),
    aliases=(
        "ring", "rings", "wedding ring", "wedding rings",
        "wedding band", "wedding bands",
    ),
    text_fields=_RING_FIELDS + ("subcategory",),
    suggestion_fields=_RING_SUGGESTION_FIELDS + ("subcategory",),
    array_fields=("style", "type"),
)

ENGAGEMENT = CategoryDefinition(
    key="engagement",
    label="Engagement",
    product_type="engagement",
    suggestion_label="Engagement Ring",
    flag_field="is_active",
    inclusion_labels=("Engagement", "Rings"),
    aliases=("ring", "rings", "engagement ring", "engagement rings"),
    text_fields=_RING_FIELDS,
    suggestion_fields=_RING_SUGGESTION_FIELDS,
    array_fields=("style", "type"),
)

DIAMOND = CategoryDefinition(
    key="diamond",
    label="Diamond",
    product_type="diamond",
    suggestion_label="Diamond",
    flag_field="is_available",
    inclusion_labels=("Diamond", "Diamonds"),
    aliases=("diamond", "diamonds"),
    text_fields=("shape", "color", "clarity", "type"),
    suggestion_fields=("type", "shape", "color", "clarity"),
)

GEMSTONE = CategoryDefinition(
    key="gemstone",
    label="Gemstone",
    product_type="gemstone",
    suggestion_label="Gemstone",
    flag_field="is_available",
    inclusion_labels=("Gemstone", "Gemstones"),
    aliases=("gemstone", "gemstones"),
    text_fields=("type", "shape", "color", "clarity"),
    suggestion_fields=("type", "shape", "color", "source"),
)

BRACELET = CategoryDefinition(
    key="bracelet",
    label="Bracelet",
    product_type="bracelet",
    suggestion_label="Bracelet",
    flag_field="is_available",
    inclusion_labels=("Bracelet", "Fine Jewellery"),
    aliases=("bracelet", "bracelets"),
    text_fields=_JEWELRY_FIELDS,
    suggestion_fields=_JEWELRY_SUGGESTION_FIELDS,
)

EARRING = CategoryDefinition(
    key="earring",
    label="Earring",
    product_type="earring",
    suggestion_label="Earring",
    flag_field="is_available",
    inclusion_labels=("Earring", "Fine Jewellery"),
    aliases=("earring", "earrings"),
    text_fields=_JEWELRY_FIELDS,
    suggestion_fields=_JEWELRY_SUGGESTION_FIELDS,
)

NECKLACE = CategoryDefinition(
    key="necklace",
    label="Necklace",
    product_type="necklace",
    suggestion_label="Necklace",
    flag_field="is_available",
    inclusion_labels=("Necklace", "Fine Jewellery"),
    aliases=("necklace", "necklaces"),
    text_fields=_JEWELRY_FIELDS,
    suggestion_fields=_JEWELRY_SUGGESTION_FIELDS,
)

MENS_JEWELRY = CategoryDefinition(
    key="mens-jewelry",
    label="Men's Jewelry",
    product_type="mens-jewelry",
    suggestion_label="Mens Jewelry",
    flag_field="is_available",
    inclusion_labels=("Men's Jewelry", "Fine Jewellery"),
    aliases=("men's jewelry", "mens jewelry", "men's", "mens"),
    text_fields=_JEWELRY_FIELDS,
    suggestion_fields=_JEWELRY_SUGGESTION_FIELDS,
)

# Search order. "newest" sorting keeps this order.
CATEGORY_DEFINITIONS: Tuple[CategoryDefinition, ...] = (
    SETTINGS,
    WEDDING,
    ENGAGEMENT,
    DIAMOND,
    GEMSTONE,
    BRACELET,
    EARRING,
    NECKLACE,
    MENS_JEWELRY,
)
