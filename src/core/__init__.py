"""
Core module for cross-cutting concerns.

This module provides:
- Structured logging configuration
- Request tracing middleware
- Common utilities
"""

from core.logging import configure_logging, get_logger
from core.utils import (
    first_image_url,
    format_number,
    get_path,
    parse_float,
    parse_int,
    split_csv,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "first_image_url",
    "format_number",
    "get_path",
    "parse_float",
    "parse_int",
    "split_csv",
]
