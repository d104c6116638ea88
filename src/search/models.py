"""
Pydantic models for the search API.

Wire format is camelCase (totalCount, hasMore, productType, ...); Python
attributes stay snake_case.
"""

from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from config.constants import DEFAULT_LIMIT, DEFAULT_PAGE, MAX_PRICE_SENTINEL, SortKey
from core.utils import parse_float, parse_int, split_csv


class CamelModel(BaseModel):
    """Base model serialised with camelCase aliases."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# Filter State
# ============================================================================

# attribute -> query parameter for the comma-separated facet lists
_LIST_PARAMS = {
    "categories": "category",
    "metals": "metal",
    "styles": "style",
    "shapes": "shape",
    "gemstone_types": "gemstoneType",
}


class SearchFilters(BaseModel):
    """
    Selected facets, price bounds, availability toggle, free text and sort.

    Round-trips through the URL query string so a filtered search can be
    shared or bookmarked.
    """
    q: str = ""
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    sort_by: str = SortKey.RELEVANCE

    categories: List[str] = Field(default_factory=list)
    metals: List[str] = Field(default_factory=list)
    styles: List[str] = Field(default_factory=list)
    shapes: List[str] = Field(default_factory=list)
    gemstone_types: List[str] = Field(default_factory=list)

    min_price: float = 0.0
    max_price: float = MAX_PRICE_SENTINEL
    availability: bool = False

    @classmethod
    def from_query_params(
        cls,
        params: Mapping[str, Any],
        default_limit: int = DEFAULT_LIMIT,
        max_limit: Optional[int] = None,
    ) -> "SearchFilters":
        """
        Parse search query parameters.

        Unparsable numbers fall back to their defaults, page is at least 1,
        a non-positive limit becomes default_limit and limit is capped at
        max_limit when given. availability is on only for the literal "true".
        """
        page = parse_int(params.get("page"), DEFAULT_PAGE)
        if page < 1:
            page = DEFAULT_PAGE

        limit = parse_int(params.get("limit"), default_limit)
        if limit < 1:
            limit = default_limit
        if max_limit is not None:
            limit = min(limit, max_limit)

        lists = {attr: split_csv(params.get(param)) for attr, param in _LIST_PARAMS.items()}

        return cls(
            q=params.get("q") or "",
            page=page,
            limit=limit,
            sort_by=params.get("sortBy") or SortKey.RELEVANCE,
            min_price=parse_float(params.get("minPrice"), 0.0),
            max_price=parse_float(params.get("maxPrice"), MAX_PRICE_SENTINEL),
            availability=params.get("availability") == "true",
            **lists,
        )

    def to_query_params(self) -> Dict[str, str]:
        """Serialise to query parameters, omitting defaults."""
        params: Dict[str, str] = {}
        if self.q:
            params["q"] = self.q
        if self.page != DEFAULT_PAGE:
            params["page"] = str(self.page)
        if self.limit != DEFAULT_LIMIT:
            params["limit"] = str(self.limit)
        if self.sort_by != SortKey.RELEVANCE:
            params["sortBy"] = self.sort_by
        for attr, param in _LIST_PARAMS.items():
            values = getattr(self, attr)
            if values:
                params[param] = ",".join(values)
        if self.min_price > 0:
            params["minPrice"] = _format_price(self.min_price)
        if self.max_price < MAX_PRICE_SENTINEL:
            params["maxPrice"] = _format_price(self.max_price)
        if self.availability:
            params["availability"] = "true"
        return params

    def to_query_string(self) -> str:
        return urlencode(self.to_query_params())

    def cache_key(self) -> str:
        """Canonical key of the full filter state (list order ignored)."""
        params = self.to_query_params()
        for param in _LIST_PARAMS.values():
            if param in params:
                params[param] = ",".join(sorted(params[param].split(",")))
        params["page"] = str(self.page)
        params["limit"] = str(self.limit)
        return urlencode(sorted(params.items()))

    def cleared(self) -> "SearchFilters":
        """Drop every facet, price bound and the availability toggle."""
        return self.model_copy(update={
            "page": DEFAULT_PAGE,
            "categories": [],
            "metals": [],
            "styles": [],
            "shapes": [],
            "gemstone_types": [],
            "min_price": 0.0,
            "max_price": MAX_PRICE_SENTINEL,
            "availability": False,
        })

    @property
    def has_price_bounds(self) -> bool:
        return self.min_price > 0 or self.max_price < MAX_PRICE_SENTINEL

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


def _format_price(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


# ============================================================================
# Result Rows
# ============================================================================

class MetalOptionView(CamelModel):
    """The metal option a variant row was expanded from."""
    karat: str
    color: str
    price: float


class GemstoneView(CamelModel):
    type: str
    carat: Optional[float] = None


class SearchResultRow(CamelModel):
    """A flattened, display-ready product (or product variant)."""
    id: str
    title: str
    slug: Optional[str] = None
    price: float = 0
    sale_price: Optional[float] = None
    image: str = ""
    category: str
    product_type: str
    description: Optional[str] = None
    is_available: bool = True

    # Variant products
    metal_option: Optional[MetalOptionView] = None
    style: Optional[List[str]] = None

    # Stones
    carat: Optional[float] = None
    shape: Optional[str] = None
    color: Optional[str] = None
    clarity: Optional[str] = None
    type: Optional[str] = None

    # Fine jewellery
    metal: Optional[str] = None
    gemstones: Optional[List[GemstoneView]] = None


class PriceBounds(CamelModel):
    min: int = 0
    max: int = 0


class FacetOptions(CamelModel):
    """Distinct facet values observed over the whole (unpaginated) result set."""
    categories: List[str] = Field(default_factory=list)
    metals: List[str] = Field(default_factory=list)
    styles: List[str] = Field(default_factory=list)
    shapes: List[str] = Field(default_factory=list)
    gemstone_types: List[str] = Field(default_factory=list)
    price_range: PriceBounds = Field(default_factory=PriceBounds)


class SearchResponse(CamelModel):
    """Response from catalog search."""
    products: List[SearchResultRow]
    total_count: int
    has_more: bool
    filters: FacetOptions


# ============================================================================
# Suggestions
# ============================================================================

class SuggestionMetal(CamelModel):
    karat: str
    color: str


class Suggestion(CamelModel):
    """A search-as-you-type product suggestion."""
    id: str
    slug: Optional[str] = None
    product_type: str
    name: str
    image_url: str
    price: float = 0
    metal: Optional[SuggestionMetal] = None


class ErrorResponse(BaseModel):
    error: str
