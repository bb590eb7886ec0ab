"""Domain models for the storefront."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class SortOption:
    """One entry of the fixed sort catalog."""

    id: str
    label: str


@dataclass
class CartLineItem:
    """A product in the cart with its quantity."""

    product_id: str
    name: str
    unit_price: int
    quantity: int = 1

    @property
    def line_total(self) -> int:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class Address:
    """Delivery contact details entered at checkout."""

    full_name: str
    phone: str
    street: str
    city: str


@dataclass(frozen=True)
class PaymentDetails:
    """Checkout choices supplied by the payment form."""

    order_type: str
    payment_method: str
    address: Address | None = None
    table_number: str | None = None


@dataclass(frozen=True)
class OrderSubmission:
    """Order request built at submission time and sent to the backend."""

    customer_name: str
    items: list[tuple[str, int]]
    total_price: int
    status: str = "pending"

    def to_payload(self) -> dict[str, Any]:
        return {
            "customer_name": self.customer_name,
            "items": [{"product_id": product_id, "quantity": quantity} for product_id, quantity in self.items],
            "total_price": self.total_price,
            "status": self.status,
        }


@dataclass(frozen=True)
class ProductQuery:
    """Query parameters handed to the product listing surface."""

    category: str
    filters: dict[str, list[str]] = field(default_factory=dict)
    sort_by: str = ""
    search_query: str = ""
