"""Static catalog data wrapped into typed values."""

from __future__ import annotations

from storefront.constant import (
    ALL_CATEGORY,
    CATEGORY_LABELS,
    FILTER_TITLES,
    ORDER_TYPE_LABELS,
    PAYMENT_METHOD_LABELS,
    SORT_OPTIONS as _SORT_OPTIONS_RAW,
)
from storefront.models import SortOption

CATEGORIES: list[str] = list(CATEGORY_LABELS)

SORT_OPTIONS: list[SortOption] = [SortOption(id=raw["id"], label=raw["label"]) for raw in _SORT_OPTIONS_RAW]

ORDER_TYPES: list[str] = list(ORDER_TYPE_LABELS)
PAYMENT_METHODS: list[str] = list(PAYMENT_METHOD_LABELS)


def is_known_category(category: str) -> bool:
    return category in CATEGORY_LABELS


def category_label(category: str) -> str:
    """Get the navigation label for a category."""
    return CATEGORY_LABELS.get(category, category)


def filter_title(dimension: str) -> str:
    """Get the display name for a filter dimension, falling back to the raw key."""
    return FILTER_TITLES.get(dimension, dimension)


def sort_label(sort_id: str) -> str:
    for option in SORT_OPTIONS:
        if option.id == sort_id:
            return option.label
    return "Default"


def next_sort_id(current: str) -> str:
    """Cycle through the sort catalog, ending on the unsorted state."""
    ids = [option.id for option in SORT_OPTIONS]
    if current not in ids:
        return ids[0] if ids else ""
    idx = ids.index(current)
    if idx + 1 >= len(ids):
        return ""
    return ids[idx + 1]


def adjacent_category(current: str, delta: int) -> str:
    """Return the category `delta` steps away in navigation order, wrapping around."""
    if current not in CATEGORIES:
        return ALL_CATEGORY
    return CATEGORIES[(CATEGORIES.index(current) + delta) % len(CATEGORIES)]
