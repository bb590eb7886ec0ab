"""Editable static catalog configuration."""

from __future__ import annotations

ALL_CATEGORY = "all"

CATEGORY_LABELS: dict[str, str] = {
    "all": "All",
    "cake": "Cakes",
    "bread": "Bread",
    "cookie": "Cookies",
    "drink": "Drinks",
}

SORT_OPTIONS: list[dict[str, str]] = [
    {"id": "price-asc", "label": "Price: low to high"},
    {"id": "price-desc", "label": "Price: high to low"},
    {"id": "newest", "label": "Newest"},
    {"id": "best-selling", "label": "Best selling"},
]

FILTER_TITLES: dict[str, str] = {
    "occasion": "Occasion",
    "flavor": "Flavor",
    "ingredient": "Main ingredient",
    "size": "Size",
    "type": "Type",
}

ORDER_TYPE_LABELS: dict[str, str] = {
    "dine-in": "Dine in",
    "takeaway": "Takeaway",
}

PAYMENT_METHOD_LABELS: dict[str, str] = {
    "cash": "Cash",
    "card": "Card",
    "momo": "MoMo",
    "zalopay": "ZaloPay",
}
