"""
Configuration module for the catalog search service.

This module provides centralized configuration management using pydantic-settings.
All environment variables and configuration values should be accessed through this module.

Usage:
    from config import get_settings

    settings = get_settings()
    backend = settings.catalog_backend
    is_dev = settings.is_development
"""

from config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
