"""
Core Utility Functions.

Small parsing and record-access helpers shared by the catalog and search
packages.
"""

import math
from typing import Any, Iterable, List, Mapping, Optional


def split_csv(value: Optional[str]) -> List[str]:
    """
    Split a comma-separated query value, dropping empty entries.

    Examples:
        >>> split_csv("Yellow Gold,,White Gold")
        ['Yellow Gold', 'White Gold']
        >>> split_csv(None)
        []
    """
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def parse_float(value: Any, default: float) -> float:
    """Parse a float, returning default for missing or unparsable input."""
    if value is None or value == "":
        return default
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(result):
        return default
    return result


def parse_int(value: Any, default: int) -> int:
    """Parse an int, returning default for missing or unparsable input."""
    if value is None or value == "":
        return default
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return default


def get_path(record: Any, path: str) -> List[Any]:
    """
    Collect every value found at a dotted path.

    Lists are traversed transparently, so "gemstones.type" over
    {"gemstones": [{"type": "Ruby"}, {"type": "Onyx"}]} yields
    ["Ruby", "Onyx"]. Missing keys yield an empty list.
    """
    current: List[Any] = [record]
    for key in path.split("."):
        found: List[Any] = []
        for item in current:
            if isinstance(item, list):
                candidates: Iterable[Any] = item
            else:
                candidates = (item,)
            for candidate in candidates:
                if isinstance(candidate, Mapping) and key in candidate:
                    found.append(candidate[key])
        current = found
    flat: List[Any] = []
    for value in current:
        if isinstance(value, list):
            flat.extend(value)
        elif value is not None:
            flat.append(value)
    return flat


def first_image_url(images: Any) -> str:
    """
    Return the url of the first image in a list of {url, public_id} dicts.

    Plain string entries are accepted too. Returns "" when there is none.
    """
    if not images or not isinstance(images, list):
        return ""
    first = images[0]
    if isinstance(first, str):
        return first
    if isinstance(first, Mapping):
        return first.get("url") or ""
    return ""


def format_number(value: Any) -> str:
    """
    Render a number the way it is printed in product titles.

    Integral floats drop the trailing ".0" (1.0 -> "1"), other values
    are rendered with str(). None renders as "".
    """
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
