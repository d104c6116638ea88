"""
Health check endpoints.

Provides endpoints for monitoring application health and status.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from catalog.store import CatalogStore, get_catalog_store
from config.constants import CATEGORY_DEFINITIONS
from config.database import get_supabase_client_optional
from config.settings import get_settings


router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check() -> Dict[str, Any]:
    """
    Basic health check endpoint.

    Returns:
        Health status with basic info
    """
    return {
        "status": "healthy",
        "service": "catalog-search-api",
    }


@router.get("/health/detailed")
def detailed_health_check(
    store: CatalogStore = Depends(get_catalog_store),
) -> Dict[str, Any]:
    """
    Detailed health check with catalog store status.

    Pings every configured collection.
    """
    settings = get_settings()

    collections = {}
    for definition in CATEGORY_DEFINITIONS:
        name = settings.collection_for(definition.key)
        collections[name] = "ok" if store.ping(name) else "error"

    healthy = all(status == "ok" for status in collections.values())
    return {
        "status": "healthy" if healthy else "degraded",
        "service": "catalog-search-api",
        "environment": settings.environment,
        "checks": {
            "config": "ok",
            "catalog": {
                "backend": settings.catalog_backend,
                "collections": collections,
            },
        },
    }


@router.get("/ready")
def readiness_check() -> Dict[str, str]:
    """
    Ready when the configured catalog backend is usable (Supabase
    credentials present for the supabase backend).
    """
    settings = get_settings()
    if settings.catalog_backend == "supabase" and get_supabase_client_optional() is None:
        return {"status": "not_ready", "reason": "database_not_configured"}

    return {"status": "ready"}


@router.get("/live")
def liveness_check() -> Dict[str, str]:
    """
    Always "alive" while the process is serving requests.
    """
    return {"status": "alive"}
