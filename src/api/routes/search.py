"""
Search API Routes.

Provides the catalog search endpoint and search-as-you-type suggestions.

NOTE: Routes use `def` (not `async def`) because the catalog store client is
synchronous. FastAPI runs sync route handlers in a thread pool.
"""

from typing import List, Optional, Union

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from config.settings import get_settings
from core.logging import get_logger
from search.aggregator import CatalogSearchService, get_catalog_search_service
from search.models import ErrorResponse, SearchFilters, SearchResponse, Suggestion
from search.suggestions import SuggestionService, get_suggestion_service

logger = get_logger(__name__)

router = APIRouter(prefix="/api/search", tags=["Search"])


def _internal_error() -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error="Internal server error").model_dump(),
    )


# =============================================================================
# Catalog Search
# =============================================================================

@router.get(
    "",
    response_model=SearchResponse,
    response_model_exclude_none=True,
    responses={500: {"model": ErrorResponse}},
    summary="Faceted catalog search",
)
def search_catalog(
    q: Optional[str] = Query(None, description="Free-text query"),
    category: Optional[str] = Query(None, description="Comma-separated categories"),
    metal: Optional[str] = Query(None, description="Comma-separated metal colours"),
    style: Optional[str] = Query(None, description="Comma-separated styles"),
    shape: Optional[str] = Query(None, description="Comma-separated shapes"),
    gemstone_type: Optional[str] = Query(
        None, alias="gemstoneType", description="Comma-separated gemstone types"
    ),
    min_price: Optional[str] = Query(None, alias="minPrice", description="Lower price bound"),
    max_price: Optional[str] = Query(None, alias="maxPrice", description="Upper price bound"),
    availability: Optional[str] = Query(None, description="'true' for available items only"),
    sort_by: Optional[str] = Query(
        None, alias="sortBy", description="relevance, price-low, price-high or newest"
    ),
    page: Optional[str] = Query(None, description="1-based page number"),
    limit: Optional[str] = Query(None, description="Page size"),
    service: CatalogSearchService = Depends(get_catalog_search_service),
) -> Union[SearchResponse, JSONResponse]:
    """
    Search every product collection.

    - **Synonym aware** ("ring" also matches solitaire, halo, band, ...)
    - **Variant expansion**: rings yield one result per metal option
    - **Facets** computed over the whole result set, before pagination

    Numeric parameters that cannot be parsed fall back to their defaults.
    """
    params = {
        "q": q,
        "category": category,
        "metal": metal,
        "style": style,
        "shape": shape,
        "gemstoneType": gemstone_type,
        "minPrice": min_price,
        "maxPrice": max_price,
        "availability": availability,
        "sortBy": sort_by,
        "page": page,
        "limit": limit,
    }
    settings = get_settings()

    try:
        filters = SearchFilters.from_query_params(
            params,
            default_limit=settings.search_default_limit,
            max_limit=settings.search_max_limit,
        )
        return service.search(filters)
    except Exception:
        logger.exception("Search request failed", query=q)
        return _internal_error()


# =============================================================================
# Suggestions
# =============================================================================

@router.get(
    "/suggestions",
    response_model=List[Suggestion],
    response_model_exclude_none=True,
    responses={500: {"model": ErrorResponse}},
    summary="Search-as-you-type suggestions",
)
def search_suggestions(
    q: str = Query("", max_length=200, description="Partial search text"),
    limit: Optional[int] = Query(None, ge=1, le=50, description="Max suggestions"),
    service: SuggestionService = Depends(get_suggestion_service),
) -> Union[List[Suggestion], JSONResponse]:
    """
    Product suggestions for a partial query (at least 2 characters).

    Suggestions whose name contains the query are listed first.
    """
    try:
        return service.suggest(q, limit=limit or get_settings().suggestion_limit)
    except Exception:
        logger.exception("Suggestion request failed", query=q)
        return _internal_error()
