"""
Category adapters.

One adapter per product collection. Each adapter knows how to:

- build the CatalogQuery for a search (build_query)
- turn one stored record into zero or more result rows (expand)
- build the query and suggestions for search-as-you-type (suggestion_query,
  suggest)

The aggregator iterates the registered adapters instead of branching per
category. Three families cover the nine collections:

- MetalVariantAdapter: settings, wedding rings, engagement rings. One row
  per metal option; price filtered after expansion.
- DiamondAdapter / GemstoneAdapter: loose stones with synthesized titles.
- JewelryAdapter: bracelets, earrings, necklaces, men's jewelry.
"""

import re
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional, Sequence

from catalog.query import CatalogQuery, FieldFilter, PriceRange, TextClause
from config.constants import (
    BRACELET,
    CATEGORY_DEFINITIONS,
    DIAMOND,
    EARRING,
    ENGAGEMENT,
    GEMSTONE,
    MENS_JEWELRY,
    NECKLACE,
    SETTINGS,
    WEDDING,
    CategoryDefinition,
)
from config.settings import Settings, get_settings
from core.logging import get_logger
from core.utils import first_image_url, format_number
from search.models import (
    GemstoneView,
    MetalOptionView,
    SearchFilters,
    SearchResultRow,
    Suggestion,
    SuggestionMetal,
)

logger = get_logger(__name__)

Record = Mapping[str, Any]


def record_id(record: Record) -> str:
    return str(record.get("id") or record.get("_id") or "")


def resolve_price(record: Record) -> float:
    """Sale price when present and lower than the list price, else list price."""
    price = _as_float(record.get("price"))
    sale_price = _as_float(record.get("sale_price"))
    if sale_price > 0 and (price <= 0 or sale_price < price):
        return sale_price
    return price


def _as_float(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    return float(value)


def _optional_float(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


class CategoryAdapter(ABC):
    """Query building and record expansion for one product collection."""

    def __init__(self, definition: CategoryDefinition, collection: Optional[str] = None):
        self.definition = definition
        self.collection = collection or definition.key

    @property
    def key(self) -> str:
        return self.definition.key

    @property
    def label(self) -> str:
        return self.definition.label

    @property
    def product_type(self) -> str:
        return self.definition.product_type

    @property
    def suggestion_label(self) -> str:
        return self.definition.suggestion_label

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.key!r}, collection={self.collection!r})"

    # =========================================================================
    # Query building
    # =========================================================================

    def includes(self, categories: Sequence[str]) -> bool:
        """True when no category filter is set or it names this collection."""
        if not categories:
            return True
        return any(label in categories for label in self.definition.inclusion_labels)

    def is_alias(self, query: str) -> bool:
        """True when the query names the whole collection ("diamonds")."""
        return query.strip().lower() in self.definition.aliases

    def build_query(
        self,
        filters: SearchFilters,
        pattern: Optional["re.Pattern[str]"],
    ) -> CatalogQuery:
        text = None
        if pattern is not None and not self.is_alias(filters.q):
            text = TextClause(fields=self.definition.text_fields, pattern=pattern)

        return CatalogQuery(
            collection=self.collection,
            flag_field=self.definition.flag_field,
            text=text,
            filters=tuple(self.facet_filters(filters)),
            price=self.price_range(filters),
        )

    def facet_filters(self, filters: SearchFilters) -> List[FieldFilter]:
        return []

    def price_range(self, filters: SearchFilters) -> Optional[PriceRange]:
        if filters.has_price_bounds:
            return PriceRange(minimum=filters.min_price, maximum=filters.max_price)
        return None

    def _field_filter(self, field_name: str, values: Sequence[str]) -> Optional[FieldFilter]:
        if not values:
            return None
        return FieldFilter(
            field=field_name,
            values=tuple(values),
            is_array=field_name in self.definition.array_fields,
        )

    # =========================================================================
    # Expansion
    # =========================================================================

    def is_available(self, record: Record) -> bool:
        return bool(record.get(self.definition.flag_field))

    @abstractmethod
    def expand(self, record: Record, filters: SearchFilters) -> List[SearchResultRow]:
        """Turn one stored record into result rows."""

    # =========================================================================
    # Suggestions
    # =========================================================================

    def suggestion_query(self, pattern: "re.Pattern[str]") -> CatalogQuery:
        return CatalogQuery(
            collection=self.collection,
            flag_field=self.definition.flag_field,
            text=TextClause(fields=self.definition.suggestion_fields, pattern=pattern),
        )

    @abstractmethod
    def suggest(self, record: Record, fallback_image: str) -> List[Suggestion]:
        """Turn one stored record into autocomplete suggestions."""

    def _single_suggestion(self, record: Record, name: str, fallback_image: str) -> Suggestion:
        return Suggestion(
            id=record_id(record),
            slug=record.get("slug"),
            product_type=self.suggestion_label,
            name=name,
            image_url=_suggestion_image(record, None, fallback_image),
            price=_suggestion_price(record, None),
        )


# =============================================================================
# Metal variant products (settings, wedding rings, engagement rings)
# =============================================================================

class MetalVariantAdapter(CategoryAdapter):
    """Products sold in several metals; one row per (karat, color)."""

    def facet_filters(self, filters: SearchFilters) -> List[FieldFilter]:
        style = self._field_filter("style", filters.styles)
        return [style] if style else []

    def price_range(self, filters: SearchFilters) -> Optional[PriceRange]:
        # Price depends on the metal, checked per option in expand()
        return None

    def expand(self, record: Record, filters: SearchFilters) -> List[SearchResultRow]:
        if filters.availability and not self.is_available(record):
            return []

        product_id = record_id(record)
        rows: List[SearchResultRow] = []
        seen = set()

        for option in record.get("metal_options") or []:
            karat = str(option.get("karat") or "")
            color = str(option.get("color") or "")
            price = _as_float(option.get("price"))

            if filters.metals and color not in filters.metals:
                continue
            if price < filters.min_price or price > filters.max_price:
                continue
            if (karat, color) in seen:
                logger.debug(
                    "Duplicate metal option skipped",
                    category=self.key,
                    product_id=product_id,
                    karat=karat,
                    color=color,
                )
                continue
            seen.add((karat, color))

            rows.append(SearchResultRow(
                id=f"{product_id}-{karat}-{color}",
                title=record.get("title") or "",
                slug=record.get("slug"),
                price=price,
                sale_price=_optional_float(record.get("sale_price")),
                image=variant_image(record, color),
                category=record.get("category") or self.label,
                product_type=self.product_type,
                description=record.get("description"),
                is_available=self.is_available(record),
                metal_option=MetalOptionView(karat=karat, color=color, price=price),
                style=list(record.get("style") or []),
            ))

        return rows

    def suggest(self, record: Record, fallback_image: str) -> List[Suggestion]:
        options = record.get("metal_options") or []
        name = record.get("title") or record.get("name") or ""
        if not options:
            return [self._single_suggestion(record, name, fallback_image)]

        product_id = record_id(record)
        suggestions = []
        for index, option in enumerate(options):
            karat = str(option.get("karat") or "")
            color = str(option.get("color") or "")
            suggestions.append(Suggestion(
                id=f"{product_id}-{karat}-{color}-{index}",
                slug=record.get("slug") or "",
                product_type=self.suggestion_label,
                name=f"{name} - {karat} {color}",
                image_url=_suggestion_image(record, option, fallback_image),
                price=_suggestion_price(record, option),
                metal=SuggestionMetal(karat=karat, color=color),
            ))
        return suggestions


def variant_image(record: Record, color: str) -> str:
    """
    Image for one metal colour: the colour's own images first, then the
    product's generic media, else "".
    """
    color_images = (record.get("metal_color_images") or {}).get(color)
    url = first_image_url(color_images)
    if url:
        return url
    return first_image_url((record.get("media") or {}).get("images"))


def _suggestion_image(record: Record, option: Optional[Record], fallback_image: str) -> str:
    """
    Colour images, then the metal option's own images, then generic media,
    then the stone's images, then the fallback.
    """
    if option is not None:
        color = str(option.get("color") or "")
        url = (
            first_image_url((record.get("metal_color_images") or {}).get(color))
            or first_image_url(option.get("images"))
        )
        if url:
            return url
    return (
        first_image_url((record.get("media") or {}).get("images"))
        or first_image_url(record.get("images"))
        or fallback_image
    )


def _suggestion_price(record: Record, option: Optional[Record]) -> float:
    if option is not None and _as_float(option.get("price")):
        return _as_float(option.get("price"))
    for field_name in ("price", "base_price", "sale_price"):
        value = _as_float(record.get(field_name))
        if value:
            return value
    return 0.0


# =============================================================================
# Loose stones
# =============================================================================

class DiamondAdapter(CategoryAdapter):

    def facet_filters(self, filters: SearchFilters) -> List[FieldFilter]:
        shape = self._field_filter("shape", filters.shapes)
        return [shape] if shape else []

    def expand(self, record: Record, filters: SearchFilters) -> List[SearchResultRow]:
        if filters.availability and not self.is_available(record):
            return []

        carat = format_number(record.get("carat"))
        shape, color, clarity = record.get("shape"), record.get("color"), record.get("clarity")
        return [SearchResultRow(
            id=record_id(record),
            title=f"{shape} {carat}ct {color} {clarity} Diamond",
            slug=record.get("slug"),
            price=resolve_price(record),
            sale_price=_optional_float(record.get("sale_price")),
            image=first_image_url(record.get("images")),
            category=self.label,
            product_type=self.product_type,
            description=f"{carat} carat {shape} {color} {clarity} diamond",
            is_available=self.is_available(record),
            carat=_optional_float(record.get("carat")),
            shape=shape,
            color=color,
            clarity=clarity,
            type=record.get("type"),
        )]

    def suggest(self, record: Record, fallback_image: str) -> List[Suggestion]:
        name = (
            f"{format_number(record.get('carat'))}ct {record.get('shape')} "
            f"{record.get('color')} {record.get('clarity')} Diamond"
        )
        return [self._single_suggestion(record, name, fallback_image)]


class GemstoneAdapter(CategoryAdapter):

    def facet_filters(self, filters: SearchFilters) -> List[FieldFilter]:
        clauses = [
            self._field_filter("type", filters.gemstone_types),
            self._field_filter("shape", filters.shapes),
        ]
        return [clause for clause in clauses if clause]

    def expand(self, record: Record, filters: SearchFilters) -> List[SearchResultRow]:
        if filters.availability and not self.is_available(record):
            return []

        carat = format_number(record.get("carat"))
        color, stone_type = record.get("color"), record.get("type")
        return [SearchResultRow(
            id=record_id(record),
            title=f"{carat}ct {color} {stone_type}",
            slug=record.get("slug"),
            price=resolve_price(record),
            sale_price=_optional_float(record.get("sale_price")),
            image=first_image_url(record.get("images")),
            category=self.label,
            product_type=self.product_type,
            description=f"{carat} carat {color} {stone_type}",
            is_available=self.is_available(record),
            carat=_optional_float(record.get("carat")),
            shape=record.get("shape"),
            color=color,
            clarity=record.get("clarity"),
            type=stone_type,
        )]

    def suggest(self, record: Record, fallback_image: str) -> List[Suggestion]:
        name = (
            f"{format_number(record.get('carat'))}ct {record.get('type')} "
            f"{record.get('color')} {record.get('shape')}"
        )
        return [self._single_suggestion(record, name, fallback_image)]


# =============================================================================
# Fine jewellery (bracelets, earrings, necklaces, men's jewelry)
# =============================================================================

class JewelryAdapter(CategoryAdapter):

    def facet_filters(self, filters: SearchFilters) -> List[FieldFilter]:
        metal = self._field_filter("metal", filters.metals)
        return [metal] if metal else []

    def expand(self, record: Record, filters: SearchFilters) -> List[SearchResultRow]:
        if filters.availability and not self.is_available(record):
            return []

        style = record.get("style")
        if isinstance(style, str):
            style = [style] if style else None
        stones = [
            GemstoneView(type=stone["type"], carat=_optional_float(stone.get("carat")))
            for stone in record.get("gemstones") or []
            if isinstance(stone, Mapping) and stone.get("type")
        ]

        return [SearchResultRow(
            id=record_id(record),
            title=record.get("name") or self.label,
            slug=record.get("slug"),
            price=resolve_price(record),
            sale_price=_optional_float(record.get("sale_price")),
            image=first_image_url(record.get("images")),
            category=self.label,
            product_type=self.product_type,
            description=record.get("description"),
            is_available=self.is_available(record),
            style=style or None,
            type=record.get("type"),
            metal=record.get("metal"),
            gemstones=stones if isinstance(record.get("gemstones"), list) else None,
        )]

    def suggest(self, record: Record, fallback_image: str) -> List[Suggestion]:
        name = record.get("name") or record.get("title") or ""
        return [self._single_suggestion(record, name, fallback_image)]


# =============================================================================
# Registry
# =============================================================================

_ADAPTER_CLASSES: Dict[str, type] = {
    SETTINGS.key: MetalVariantAdapter,
    WEDDING.key: MetalVariantAdapter,
    ENGAGEMENT.key: MetalVariantAdapter,
    DIAMOND.key: DiamondAdapter,
    GEMSTONE.key: GemstoneAdapter,
    BRACELET.key: JewelryAdapter,
    EARRING.key: JewelryAdapter,
    NECKLACE.key: JewelryAdapter,
    MENS_JEWELRY.key: JewelryAdapter,
}


def build_default_adapters(settings: Optional[Settings] = None) -> List[CategoryAdapter]:
    """One adapter per category, in search order, bound to configured collections."""
    settings = settings or get_settings()
    return [
        _ADAPTER_CLASSES[definition.key](definition, settings.collection_for(definition.key))
        for definition in CATEGORY_DEFINITIONS
    ]
