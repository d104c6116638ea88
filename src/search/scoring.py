"""
Relevance scoring and result ordering.

The relevance ladder is additive: a row titled exactly like the query also
collects the prefix and contains bonuses.

    exact title        +100
    title prefix        +50
    title contains      +25
    category contains   +10
    type contains       +10
    description         +5
"""

from typing import List, Sequence

from config.constants import DEFAULT_RELEVANCE_WEIGHTS, RelevanceWeights, SortKey
from search.models import SearchResultRow


def relevance_score(
    row: SearchResultRow,
    query: str,
    weights: RelevanceWeights = DEFAULT_RELEVANCE_WEIGHTS,
) -> int:
    """Score one row against the (trimmed, case-insensitive) query."""
    needle = query.strip().lower()
    if not needle:
        return 0

    score = 0
    title = (row.title or "").lower()

    if title == needle:
        score += weights.EXACT_TITLE
    if title.startswith(needle):
        score += weights.TITLE_PREFIX
    if needle in title:
        score += weights.TITLE_CONTAINS

    if row.category and needle in row.category.lower():
        score += weights.CATEGORY_CONTAINS
    if row.type and needle in row.type.lower():
        score += weights.TYPE_CONTAINS
    if row.description and needle in row.description.lower():
        score += weights.DESCRIPTION_CONTAINS

    return score


def sort_rows(
    rows: Sequence[SearchResultRow],
    sort_by: str,
    query: str,
) -> List[SearchResultRow]:
    """
    Order rows for display. Always returns a new list.

    price-low / price-high sort on the resolved price, newest keeps store
    order, anything else is relevance. Relevance with an empty query keeps
    store order. All sorts are stable, so ties keep store order.
    """
    if sort_by == SortKey.PRICE_LOW:
        return sorted(rows, key=lambda row: row.price)
    if sort_by == SortKey.PRICE_HIGH:
        return sorted(rows, key=lambda row: row.price, reverse=True)
    if sort_by == SortKey.NEWEST or not query.strip():
        return list(rows)

    return sorted(rows, key=lambda row: relevance_score(row, query), reverse=True)
