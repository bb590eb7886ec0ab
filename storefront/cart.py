"""In-memory cart store."""

from __future__ import annotations

from dataclasses import replace

from storefront.models import CartLineItem


class CartStore:
    """Holds the current cart lines keyed by product id, in insertion order."""

    def __init__(self) -> None:
        self._items: dict[str, CartLineItem] = {}

    def add_item(self, product_id: str, name: str, unit_price: int, quantity: int = 1) -> None:
        """Add a product, or bump its quantity if already present."""
        if quantity <= 0:
            raise ValueError("quantity must be positive")
        if unit_price < 0:
            raise ValueError("unit_price must not be negative")

        existing = self._items.get(product_id)
        if existing is not None:
            existing.quantity += quantity
            return
        self._items[product_id] = CartLineItem(product_id=product_id, name=name, unit_price=unit_price, quantity=quantity)

    def set_quantity(self, product_id: str, quantity: int) -> None:
        """Set an exact quantity; zero removes the line."""
        if quantity < 0:
            raise ValueError("quantity must not be negative")
        if product_id not in self._items:
            raise KeyError(product_id)
        if quantity == 0:
            del self._items[product_id]
            return
        self._items[product_id].quantity = quantity

    def remove_item(self, product_id: str) -> None:
        self._items.pop(product_id, None)

    def get_items(self) -> list[CartLineItem]:
        """Return copies of the cart lines so callers cannot mutate the store."""
        return [replace(item) for item in self._items.values()]

    def get_total_price(self) -> int:
        return sum(item.line_total for item in self._items.values())

    def get_item_count(self) -> int:
        return sum(item.quantity for item in self._items.values())

    @property
    def is_empty(self) -> bool:
        return not self._items

    def clear_cart(self) -> None:
        self._items.clear()
