"""Payment form modal screen."""

from __future__ import annotations

import logging
from typing import Callable

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

from storefront.checkout import CheckoutOrchestrator
from storefront.constant import ORDER_TYPE_LABELS, PAYMENT_METHOD_LABELS
from storefront.data import ORDER_TYPES, PAYMENT_METHODS
from storefront.models import Address, PaymentDetails
from storefront.rendering import format_price

logger = logging.getLogger(__name__)

_CHOICE_FIELDS = ("order_type", "payment_method")
_TEXT_FIELDS = ("table_number", "full_name", "phone", "street", "city")
_SUBMIT_ROW = "submit"

_FIELD_LABELS: dict[str, str] = {
    "order_type": "Order type",
    "payment_method": "Payment",
    "table_number": "Table no.",
    "full_name": "Full name",
    "phone": "Phone",
    "street": "Street",
    "city": "City",
}


class PaymentModal(ModalScreen[None]):
    """Collect order type, payment method and contact details, then place the order."""

    CSS = """
    PaymentModal {
        align: center middle;
        background: $background 60%;
    }

    #payment-dialog {
        width: 64;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #payment-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #payment-body {
        color: white;
        margin-bottom: 1;
    }

    #payment-error {
        color: #ffb3b3;
        margin-bottom: 1;
    }

    #payment-help {
        color: #dddddd;
    }
    """

    def __init__(self, checkout: CheckoutOrchestrator, on_close: Callable[[], None]) -> None:
        super().__init__()
        self.checkout = checkout
        self.on_close = on_close
        self.order_type = ORDER_TYPES[0]
        self.payment_method = PAYMENT_METHODS[0]
        self.values: dict[str, str] = {name: "" for name in _TEXT_FIELDS}
        self.cursor_index = 0
        self.error = ""
        self.submitting = False

    def compose(self) -> ComposeResult:
        with Container(id="payment-dialog"):
            yield Static("Payment", id="payment-title")
            yield Static(id="payment-body")
            yield Static(id="payment-error")
            yield Static("↑/↓ move, Enter/Space change or submit, type to fill, Esc cancel", id="payment-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if event.key == "escape":
            if not self.submitting:
                self.on_close()
            event.stop()
            return

        if self.submitting:
            event.stop()
            return

        if event.key in {"up", "down"}:
            rows = self._rows()
            delta = 1 if event.key == "down" else -1
            self.cursor_index = (self.cursor_index + delta) % len(rows)
            self._refresh_content()
            event.stop()
            return

        row = self._rows()[self.cursor_index]

        if event.key in {"enter", "space"} and (row in _CHOICE_FIELDS or row == _SUBMIT_ROW):
            self._activate(row)
            event.stop()
            return

        if row not in _TEXT_FIELDS:
            return

        if event.key == "backspace":
            self.values[row] = self.values[row][:-1]
            self._refresh_content()
            event.stop()
            return

        if event.is_printable and event.character:
            if row == "table_number" and not event.character.isdigit():
                event.stop()
                return
            self.values[row] += event.character
            self._refresh_content()
            event.stop()

    def _rows(self) -> list[str]:
        rows = list(_CHOICE_FIELDS)
        if self.order_type == "dine-in":
            rows.append("table_number")
        rows.extend(name for name in _TEXT_FIELDS if name != "table_number")
        rows.append(_SUBMIT_ROW)
        return rows

    def _activate(self, row: str) -> None:
        if row == "order_type":
            self.order_type = _cycle(ORDER_TYPES, self.order_type)
            rows = self._rows()
            self.cursor_index = min(self.cursor_index, len(rows) - 1)
        elif row == "payment_method":
            self.payment_method = _cycle(PAYMENT_METHODS, self.payment_method)
        else:
            self.submitting = True
            self.error = ""
            self.app.run_worker(self._submit(self.payment_details()), group="checkout")
        self._refresh_content()

    def payment_details(self) -> PaymentDetails:
        """Build the checkout details from the current form values."""
        address = None
        address_values = [self.values[name].strip() for name in ("full_name", "phone", "street", "city")]
        if any(address_values):
            address = Address(*address_values)

        table_number = None
        if self.order_type == "dine-in" and self.values["table_number"].strip():
            table_number = self.values["table_number"].strip()

        return PaymentDetails(
            order_type=self.order_type,
            payment_method=self.payment_method,
            address=address,
            table_number=table_number,
        )

    async def _submit(self, details: PaymentDetails) -> None:
        try:
            await self.checkout.submit_order(details)
        except Exception as exc:
            # Keep the form open so the user can retry.
            logger.info(f"payment form kept open after failure: {exc!r}")
            self.submitting = False
            self.error = "Could not place the order. Check details and retry."
            if self.is_mounted:
                self._refresh_content()

    def _refresh_content(self) -> None:
        rows = self._rows()
        if self.cursor_index >= len(rows):
            self.cursor_index = len(rows) - 1

        content = Text(style="white")
        content.append(f"Total: {format_price(self.checkout.cart.get_total_price())}\n\n", style="bold")
        for idx, row in enumerate(rows):
            if idx > 0:
                content.append("\n")
            pointer = "➤ " if idx == self.cursor_index else "  "
            if row == _SUBMIT_ROW:
                label = "[ Placing order... ]" if self.submitting else "[ Place order ]"
                content.append(f"\n{pointer}{label}", style="bold white")
                continue
            content.append(f"{pointer}{_FIELD_LABELS[row]}: ", style="bold white")
            if row == "order_type":
                content.append(f"< {ORDER_TYPE_LABELS[self.order_type]} >")
            elif row == "payment_method":
                content.append(f"< {PAYMENT_METHOD_LABELS[self.payment_method]} >")
            else:
                cursor = "|" if idx == self.cursor_index else ""
                content.append(f"{self.values[row]}{cursor}")

        self.query_one("#payment-body", Static).update(content)
        self.query_one("#payment-error", Static).update(self.error or "")


def _cycle(values: list[str], current: str) -> str:
    if current not in values:
        return values[0]
    return values[(values.index(current) + 1) % len(values)]
