"""
Query term expansion.

Widens a free-text query with merchandising synonyms so that, for example,
"ring" also finds solitaires and halos. The result feeds a single
case-insensitive alternation regex used by every category's text clause.
"""

import re
from typing import Dict, List, Mapping, Optional, Sequence

from config.constants import SYNONYM_MAP


def expand_terms(
    query: str,
    synonyms: Mapping[str, Sequence[str]] = SYNONYM_MAP,
) -> List[str]:
    """
    Split a query into lowercase tokens and add their synonyms.

    Query tokens come first, then synonyms in table order. Duplicates
    are dropped. An empty or whitespace-only query yields [].

    Examples:
        >>> expand_terms("Choker")
        ['choker', 'collar', 'necklace']
        >>> expand_terms("  ")
        []
    """
    tokens = [token for token in query.lower().split() if token]
    expanded: Dict[str, None] = dict.fromkeys(tokens)
    for token in tokens:
        for synonym in synonyms.get(token, ()):
            expanded.setdefault(synonym, None)
    return list(expanded)


def build_term_pattern(terms: Sequence[str]) -> Optional["re.Pattern[str]"]:
    """
    Compile terms into one case-insensitive alternation.

    Terms are regex-escaped. Returns None for no terms, which callers
    treat as "no text filter".
    """
    if not terms:
        return None
    return re.compile("|".join(re.escape(term) for term in terms), re.IGNORECASE)
