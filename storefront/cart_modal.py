"""Cart modal screen."""

from __future__ import annotations

from typing import Callable

from textual.app import ComposeResult
from textual.containers import Container
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Static

from storefront.cart import CartStore
from storefront.checkout import CheckoutOrchestrator
from storefront.rendering import format_cart_lines


class CartModal(ModalScreen[None]):
    """Centered modal listing cart lines with quantity controls."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("q", "close", "Close"),
        ("j", "move_cursor(1)", "Next"),
        ("k", "move_cursor(-1)", "Previous"),
        ("up", "move_cursor(-1)", "Previous"),
        ("down", "move_cursor(1)", "Next"),
        ("plus", "change_quantity(1)", "More"),
        ("minus", "change_quantity(-1)", "Less"),
        ("p", "checkout", "Checkout"),
    ]

    CSS = """
    CartModal {
        align: center middle;
        background: $background 60%;
    }

    #cart-dialog {
        width: 64;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #cart-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #cart-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    cursor_index = reactive(0)

    def __init__(
        self,
        cart: CartStore,
        checkout: CheckoutOrchestrator,
        on_close: Callable[[], None],
        on_change: Callable[[], None],
    ) -> None:
        super().__init__()
        self.cart = cart
        self.checkout = checkout
        self.on_close = on_close
        self.on_change = on_change

    def compose(self) -> ComposeResult:
        with Container(id="cart-dialog"):
            yield Static("Cart", id="cart-title")
            yield Static(id="cart-body")
            yield Static("J/K/↑/↓ move, +/- quantity, P checkout, Esc/q close", id="cart-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def action_close(self) -> None:
        self.on_close()

    def action_move_cursor(self, delta: int) -> None:
        items = self.cart.get_items()
        if not items:
            return
        self.cursor_index = (self.cursor_index + delta) % len(items)
        self._refresh_content()

    def action_change_quantity(self, delta: int) -> None:
        items = self.cart.get_items()
        if not items:
            return
        item = items[min(self.cursor_index, len(items) - 1)]
        self.cart.set_quantity(item.product_id, max(0, item.quantity + delta))
        self.on_change()
        self._refresh_content()

    def action_checkout(self) -> None:
        if self.cart.is_empty:
            self.checkout.notifier.show("Your cart is empty", type="warning")
            return
        self.checkout.start_payment_flow()

    def _refresh_content(self) -> None:
        items = self.cart.get_items()
        if self.cursor_index >= len(items):
            self.cursor_index = max(0, len(items) - 1)
        self.query_one("#cart-body", Static).update(format_cart_lines(items, self.cursor_index if items else None))
