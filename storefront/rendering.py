"""Rendering helpers for the storefront panes."""

from __future__ import annotations

from rich.text import Text

from storefront.data import CATEGORIES, SORT_OPTIONS, category_label, filter_title
from storefront.models import CartLineItem, ProductQuery

ACTIVE_BADGE_STYLE = "bold #ffffff on #b23a48"
INACTIVE_BADGE_STYLE = "#dddddd"


def format_price(amount: int) -> str:
    return f"{amount:,}"


def filter_rows(filter_options: dict[str, list[str]]) -> list[tuple[str, str]]:
    """Flatten filter options into (dimension, option) rows in display order."""
    return [(dimension, option) for dimension, options in filter_options.items() for option in options]


def format_category_nav(active_category: str) -> Text:
    """Render the category navigation bar with the active category highlighted."""
    text = Text()
    for idx, category in enumerate(CATEGORIES):
        if idx > 0:
            text.append("  ")
        style = ACTIVE_BADGE_STYLE if category == active_category else INACTIVE_BADGE_STYLE
        text.append(f" {category_label(category)} ", style=style)
    return text


def format_filter_panel(
    filter_options: dict[str, list[str]],
    selected_filters: dict[str, list[str]],
    cursor_index: int | None,
) -> Text:
    """Render filter checkboxes grouped under their dimension titles."""
    text = Text()
    if not filter_options:
        text.append("No filters for this category", style="dim")
        return text

    selected_count = sum(len(values) for values in selected_filters.values())
    text.append("Product filters", style="bold")
    if selected_count > 0:
        text.append(f"  x: clear ({selected_count})", style="dim")

    row_index = 0
    for dimension, options in filter_options.items():
        text.append(f"\n\n{filter_title(dimension)}", style="bold underline")
        for option in options:
            pointer = "➤ " if row_index == cursor_index else "  "
            checked = option in selected_filters.get(dimension, [])
            text.append(f"\n{pointer}{'[x]' if checked else '[ ]'} {option}", style="bold" if checked else "")
            row_index += 1
    return text


def format_sort_line(sort_by: str) -> Text:
    text = Text("Sort by: ", style="bold")
    for idx, option in enumerate(SORT_OPTIONS):
        if idx > 0:
            text.append(" | ")
        text.append(option.label, style=ACTIVE_BADGE_STYLE if option.id == sort_by else "")
    return text


def format_query(query: ProductQuery) -> Text:
    """Describe the query the product listing will receive."""
    text = Text()
    text.append("Category: ", style="bold")
    text.append(category_label(query.category))
    if query.search_query:
        text.append("\nSearch: ", style="bold")
        text.append(query.search_query)
    if query.sort_by:
        text.append("\nSort: ", style="bold")
        text.append(query.sort_by)
    for dimension, values in query.filters.items():
        text.append(f"\n{filter_title(dimension)}: ", style="bold")
        text.append(", ".join(values))
    return text


def format_cart_lines(items: list[CartLineItem], cursor_index: int | None = None) -> Text:
    text = Text()
    if not items:
        text.append("(cart is empty)", style="dim")
        return text

    for idx, item in enumerate(items):
        if idx > 0:
            text.append("\n")
        pointer = "➤ " if idx == cursor_index else "  "
        text.append(f"{pointer}{item.quantity} x {item.name}")
        text.append(f"  {format_price(item.line_total)}", style="bold")

    total = sum(item.line_total for item in items)
    text.append(f"\n\nTotal: {format_price(total)}", style="bold")
    return text
