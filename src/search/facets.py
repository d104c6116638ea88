"""
Facet derivation.

Facet options describe the full merged result set (before pagination), so
the filter sidebar shows every value the current query can reach.
"""

import math
from typing import Iterable, Set

from search.models import FacetOptions, PriceBounds, SearchResultRow


def derive_facets(rows: Iterable[SearchResultRow]) -> FacetOptions:
    """
    Collect distinct categories, metal colours, styles, shapes and gemstone
    types (each sorted ascending) plus the observed price range.

    Metal colours come from variant rows' metal option and from fine
    jewellery's metal. Gemstone types come from gemstone rows, from the
    stones set in fine jewellery, and from the type of any row that carries
    a gemstones list (so a "Tennis" bracelet contributes "Tennis"). An
    empty result set yields a {0, 0} price range.
    """
    categories: Set[str] = set()
    metals: Set[str] = set()
    styles: Set[str] = set()
    shapes: Set[str] = set()
    gemstone_types: Set[str] = set()
    min_price = math.inf
    max_price = 0.0

    for row in rows:
        categories.add(row.category)

        if row.metal_option is not None and row.metal_option.color:
            metals.add(row.metal_option.color)
        if row.metal:
            metals.add(row.metal)

        for style in row.style or ():
            if style:
                styles.add(style)

        if row.shape:
            shapes.add(row.shape)

        if row.type and (row.product_type == "gemstone" or row.gemstones is not None):
            gemstone_types.add(row.type)
        for stone in row.gemstones or ():
            if stone.type:
                gemstone_types.add(stone.type)

        min_price = min(min_price, row.price)
        max_price = max(max_price, row.price)

    return FacetOptions(
        categories=sorted(categories),
        metals=sorted(metals),
        styles=sorted(styles),
        shapes=sorted(shapes),
        gemstone_types=sorted(gemstone_types),
        price_range=PriceBounds(
            min=0 if min_price == math.inf else math.floor(min_price),
            max=math.ceil(max_price),
        ),
    )
