"""
Centralized settings management using pydantic-settings.

All environment variables and configuration values are defined here.
Use get_settings() to access the singleton settings instance.
"""

from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Optional environment variables:
        - SUPABASE_URL: Supabase project URL (required for the supabase backend)
        - SUPABASE_SERVICE_KEY: Supabase service role key
        - CATALOG_BACKEND: "supabase" (default) or "memory"
        - CATALOG_FIXTURE_PATH: JSON seed file for the memory backend
        - PORT: Server port (default: 8080)
        - ENVIRONMENT: Environment name (development, staging, production)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Environment
    # ==========================================================================
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def is_development(self) -> bool:
        return self.environment.lower() in ("development", "dev", "local")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() in ("production", "prod")

    # ==========================================================================
    # Server Configuration
    # ==========================================================================
    port: int = Field(default=8080, description="Server port")

    # CORS Configuration
    cors_origins: List[str] = Field(
        default=[
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ],
        description="Allowed CORS origins"
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    # ==========================================================================
    # Catalog Store
    # ==========================================================================
    catalog_backend: str = Field(
        default="supabase",
        description="Document store backend: 'supabase' or 'memory'"
    )
    catalog_fixture_path: Optional[Path] = Field(
        default=None,
        description="JSON file used to seed the in-memory catalog store"
    )

    @field_validator("catalog_backend", mode="before")
    @classmethod
    def parse_catalog_backend(cls, v):
        if isinstance(v, str):
            v = v.strip().lower()
            if v not in ("supabase", "memory"):
                raise ValueError(f"Unknown catalog backend: {v}")
        return v

    # Collection (table) name per category key
    catalog_collections: Dict[str, str] = Field(
        default={
            "settings": "settings",
            "wedding": "wedding_rings",
            "engagement": "engagement_rings",
            "diamond": "diamonds",
            "gemstone": "gemstones",
            "bracelet": "bracelets",
            "earring": "earrings",
            "necklace": "necklaces",
            "mens-jewelry": "mens_jewelry",
        },
        description="Collection name for each product category"
    )

    def collection_for(self, category_key: str) -> str:
        return self.catalog_collections.get(category_key, category_key)

    # ==========================================================================
    # Supabase Configuration
    # ==========================================================================
    supabase_url: Optional[str] = Field(default=None, description="Supabase project URL")
    supabase_service_key: Optional[str] = Field(default=None, description="Supabase service role key")

    # ==========================================================================
    # Search Configuration
    # ==========================================================================
    search_default_limit: int = Field(default=20, description="Default page size")
    search_max_limit: Optional[int] = Field(
        default=None,
        description="Largest page size accepted (unset: any positive limit is honoured)"
    )
    search_cache_ttl_seconds: int = Field(
        default=0,
        description="TTL of the search result cache in seconds (0 disables caching)"
    )
    suggestion_limit: int = Field(default=10, description="Max suggestions returned")
    suggestion_fallback_image: str = Field(
        default="/images/engagement-section.png",
        description="Image used for suggestions without any product image"
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Uses lru_cache to ensure only one instance is created.
    Settings are loaded from environment variables and .env file.

    Returns:
        Settings: The application settings instance
    """
    # .env in the project root, when present
    env_file = Path(__file__).parent.parent.parent / ".env"
    return Settings(_env_file=env_file if env_file.exists() else None)


def get_settings_for_testing(**overrides) -> Settings:
    """
    Create a settings instance for testing with optional overrides.

    This bypasses the cache to allow different settings in tests.

    Args:
        **overrides: Setting values to override

    Returns:
        Settings: A new settings instance with overrides applied
    """
    test_defaults = {
        "supabase_url": "https://test.supabase.co",
        "supabase_service_key": "test-key",
        "catalog_backend": "memory",
        "environment": "testing",
        "debug": True,
    }
    test_defaults.update(overrides)

    return Settings(**test_defaults)
