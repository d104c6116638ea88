"""
API module for FastAPI routes.

Each route module defines a FastAPI APIRouter that is mounted on the
main application.
"""

from api.routes import health, search

__all__ = ["health", "search"]
