"""
Catalog query object.

A CatalogQuery is the store-independent description of one read against a
product collection: the availability flag, an optional OR text clause, facet
"value in set" clauses and an optional price range. Builders never touch the
store; stores either push the clauses down or evaluate them with matches().
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from core.utils import get_path


@dataclass(frozen=True)
class TextClause:
    """Case-insensitive regex applied across several fields (OR)."""
    fields: Tuple[str, ...]
    pattern: "re.Pattern[str]"

    def matches(self, record: Mapping[str, Any]) -> bool:
        for field_name in self.fields:
            for value in get_path(record, field_name):
                if isinstance(value, str) and self.pattern.search(value):
                    return True
        return False


@dataclass(frozen=True)
class FieldFilter:
    """Field value must be one of `values` (any element, for array fields)."""
    field: str
    values: Tuple[Any, ...]
    is_array: bool = False

    def matches(self, record: Mapping[str, Any]) -> bool:
        return any(value in self.values for value in get_path(record, self.field))


@dataclass(frozen=True)
class PriceRange:
    """Inclusive price bounds."""
    minimum: float
    maximum: float
    field: str = "price"

    def matches(self, record: Mapping[str, Any]) -> bool:
        price = record.get(self.field)
        if isinstance(price, bool) or not isinstance(price, (int, float)):
            return False
        return self.minimum <= price <= self.maximum


@dataclass(frozen=True)
class CatalogQuery:
    """One read against a single collection."""
    collection: str
    flag_field: str
    text: Optional[TextClause] = None
    filters: Tuple[FieldFilter, ...] = field(default_factory=tuple)
    price: Optional[PriceRange] = None

    def matches(self, record: Mapping[str, Any]) -> bool:
        if record.get(self.flag_field) is not True:
            return False
        if self.text is not None and not self.text.matches(record):
            return False
        if not all(f.matches(record) for f in self.filters):
            return False
        if self.price is not None and not self.price.matches(record):
            return False
        return True

    def to_filter(self) -> Dict[str, Any]:
        """
        Render the query as a document-store filter object.

        Example:
            {"is_active": True,
             "$or": [{"title": {"$regex": "ring|band", "$options": "i"}}, ...],
             "style": {"$in": ["Solitaire"]}}
        """
        result: Dict[str, Any] = {self.flag_field: True}
        if self.text is not None:
            regex = {"$regex": self.text.pattern.pattern, "$options": "i"}
            result["$or"] = [{name: dict(regex)} for name in self.text.fields]
        for f in self.filters:
            result[f.field] = {"$in": list(f.values)}
        if self.price is not None:
            result[self.price.field] = {"$gte": self.price.minimum, "$lte": self.price.maximum}
        return result

    def text_fields(self) -> List[str]:
        return list(self.text.fields) if self.text is not None else []
