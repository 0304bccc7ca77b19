# hospital/services/v1/list_filters.py
"""
Search and category filtering over an already-fetched list.

    filtered = [r for r in records if matches_search(r) and matches_category(r)]
"""

from enum import Enum
from typing import Any, Iterable, Optional, Sequence, TypeVar

T = TypeVar("T")

ALL = "all"


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def matches_search(record: Any, search: Optional[str], fields: Sequence[str]) -> bool:
    """Case-insensitive substring match against any of `fields`. Blank search matches."""
    if not search:
        return True
    needle = search.lower()
    return any(needle in _text(getattr(record, field, None)).lower() for field in fields)


def matches_category(record: Any, field: str, category: Optional[str]) -> bool:
    """Exact match on one field; blank or 'all' matches everything."""
    if not category or category == ALL:
        return True
    return _text(getattr(record, field, None)) == category


def filter_records(
    records: Iterable[T],
    *,
    search: Optional[str] = None,
    search_fields: Sequence[str] = (),
    category_field: Optional[str] = None,
    category: Optional[str] = None,
) -> list[T]:
    search = (search or "").strip()
    return [
        record
        for record in records
        if matches_search(record, search, search_fields)
        and (category_field is None or matches_category(record, category_field, category))
    ]


def distinct_values(records: Iterable[Any], field: str) -> list[str]:
    """Distinct non-empty values of `field`, in first-seen order."""
    seen: dict[str, None] = {}
    for record in records:
        value = _text(getattr(record, field, None))
        if value:
            seen.setdefault(value, None)
    return list(seen)


__all__ = [
    "ALL",
    "matches_search",
    "matches_category",
    "filter_records",
    "distinct_values",
]
