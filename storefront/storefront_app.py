"""Main Textual app class."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Header, Static

from storefront.api import FilterOptionsProvider, OrderClient, build_client
from storefront.cart import CartStore
from storefront.cart_modal import CartModal
from storefront.checkout import CheckoutOrchestrator
from storefront.data import CATEGORIES, adjacent_category, next_sort_id
from storefront.events import OrderCreatedEvent, OrderEvents
from storefront.notifications import Notifier
from storefront.overlays import OverlayController
from storefront.payment_modal import PaymentModal
from storefront.rendering import (
    filter_rows,
    format_category_nav,
    format_filter_panel,
    format_price,
    format_query,
    format_sort_line,
)
from storefront.view_state import ViewStateCoordinator

logger = logging.getLogger(__name__)


class StorefrontApp(App):
    """A Textual storefront: browse categories, filter, sort, search and check out."""

    TITLE = "Storefront"
    SUB_TITLE = "Order online"

    CSS = """
    Screen {
        layout: vertical;
    }

    #category-nav {
        height: 3;
        border: round $primary;
        padding: 0 1;
    }

    #main-layout {
        height: 1fr;
    }

    #filter-pane {
        width: 2fr;
        border: round $secondary;
        padding: 1;
    }

    #content-pane {
        width: 3fr;
        border: round $primary;
        padding: 1;
    }

    #filter-panel {
        height: 1fr;
    }

    #sort-line {
        margin-top: 1;
    }

    #search-bar {
        border: heavy $secondary;
        padding: 0 1;
        margin-bottom: 1;
        height: 3;
    }

    #query {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #cart-summary {
        margin-top: 1;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    input_state = reactive("normal")
    filter_cursor = reactive(0)

    BINDINGS = [
        ("left", "change_category(-1)", "Previous category"),
        ("right", "change_category(1)", "Next category"),
        ("up", "move_filter_cursor(-1)", "Previous filter"),
        ("down", "move_filter_cursor(1)", "Next filter"),
        ("enter", "toggle_current_filter", "Toggle filter"),
        ("backspace", "backspace_query", "Delete search char"),
        ("escape", "cancel_search", "Exit search"),
        ("ctrl+c", "cancel_search", "Exit search"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, cart: CartStore | None = None, client: httpx.AsyncClient | None = None) -> None:
        super().__init__()
        self.client = client or build_client()
        self.cart = cart or CartStore()
        self.notifier = Notifier(self)
        self.overlays = OverlayController(
            self,
            forms={"cart": self._build_cart_modal, "payment": self._build_payment_modal},
        )
        self.order_events = OrderEvents()
        self.checkout = CheckoutOrchestrator(
            cart=self.cart,
            orders=OrderClient(self.client),
            notifier=self.notifier,
            overlays=self.overlays,
            events=self.order_events,
        )
        self.coordinator = ViewStateCoordinator(
            FilterOptionsProvider(self.client),
            self.overlays,
            spawn=self._spawn_refresh,
            on_change=self._refresh_all,
        )
        self.order_events.subscribe(self._on_order_created)
        self.last_order_id: Any = None

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(id="category-nav")
        with Horizontal(id="main-layout"):
            with Vertical(id="filter-pane"):
                yield Static(id="filter-panel")
                yield Static(id="sort-line")
            with Vertical(id="content-pane"):
                yield Static(id="search-bar")
                yield Static("Products", classes="pane-title")
                yield Static(id="query")
                yield Static(id="cart-summary")

    def on_mount(self) -> None:
        # Views exist now; overlays may be opened from here on.
        self.coordinator.initialize()
        self._refresh_all()

    async def on_unmount(self) -> None:
        await self.client.aclose()

    def on_key(self, event: Key) -> None:
        if isinstance(self.screen, ModalScreen):
            return

        if self.input_state == "search":
            if event.key == "space":
                self.coordinator.set_search(self.coordinator.search_query + " ")
                event.stop()
                return
            if event.is_printable and event.character and len(event.character) == 1:
                self.coordinator.set_search(self.coordinator.search_query + event.character)
                event.stop()
            return

        if event.key == "space":
            self.action_toggle_current_filter()
            event.stop()
            return

        if not event.is_printable or not event.character or len(event.character) != 1:
            return

        key = event.character.lower()
        if key == "/":
            self.input_state = "search"
            self._refresh_search_bar()
            event.stop()
            return

        if key.isdigit() and int(key) < len(CATEGORIES):
            self.coordinator.set_category(CATEGORIES[int(key)])
            event.stop()
            return

        if key == "j":
            self.action_move_filter_cursor(1)
        elif key == "k":
            self.action_move_filter_cursor(-1)
        elif key == "s":
            self.coordinator.set_sort(next_sort_id(self.coordinator.sort_by))
        elif key == "x":
            self.coordinator.clear_all()
        elif key == "c":
            self.overlays.show_form("cart")
        elif key == "p":
            self._start_checkout()
        else:
            return
        event.stop()

    def action_change_category(self, delta: int) -> None:
        if isinstance(self.screen, ModalScreen) or self.input_state != "normal":
            return
        self.filter_cursor = 0
        self.coordinator.set_category(adjacent_category(self.coordinator.active_category, delta))

    def action_move_filter_cursor(self, delta: int) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        rows = filter_rows(self.coordinator.filter_options)
        if not rows:
            self.filter_cursor = 0
            return
        self.filter_cursor = (self.filter_cursor + delta) % len(rows)
        self._refresh_filters()

    def action_toggle_current_filter(self) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        if self.input_state == "search":
            self.action_cancel_search()
            return

        rows = filter_rows(self.coordinator.filter_options)
        if not rows:
            return
        dimension, value = rows[min(self.filter_cursor, len(rows) - 1)]
        self.coordinator.toggle_filter(dimension, value)

    def action_backspace_query(self) -> None:
        if self.input_state != "search" or not self.coordinator.search_query:
            return
        self.coordinator.set_search(self.coordinator.search_query[:-1])

    def action_cancel_search(self) -> None:
        if self.input_state == "normal":
            return
        self.input_state = "normal"
        self._refresh_search_bar()

    def _start_checkout(self) -> None:
        if self.cart.is_empty:
            self.notifier.show("Your cart is empty", type="warning")
            return
        self.checkout.start_payment_flow()

    def _spawn_refresh(self, coro: Any) -> None:
        self.run_worker(coro, group="filter-options")

    def _build_cart_modal(self) -> ModalScreen:
        return CartModal(
            self.cart,
            self.checkout,
            on_close=self.overlays.hide_all_overlays,
            on_change=self._refresh_cart_summary,
        )

    def _build_payment_modal(self) -> ModalScreen:
        return PaymentModal(self.checkout, on_close=self.overlays.hide_all_overlays)

    def _on_order_created(self, event: OrderCreatedEvent) -> None:
        self.last_order_id = event.order_id
        self._refresh_cart_summary()

    def _refresh_all(self) -> None:
        try:
            self.query_one("#category-nav", Static).update(format_category_nav(self.coordinator.active_category))
        except NoMatches:
            return
        self._refresh_filters()
        self._refresh_search_bar()
        self.query_one("#query", Static).update(format_query(self.coordinator.query()))
        self._refresh_cart_summary()

    def _refresh_filters(self) -> None:
        try:
            pane = self.query_one("#filter-pane", Vertical)
        except NoMatches:
            return
        pane.display = self.coordinator.filters_visible

        rows = filter_rows(self.coordinator.filter_options)
        if self.filter_cursor >= len(rows):
            self.filter_cursor = 0
        self.query_one("#filter-panel", Static).update(
            format_filter_panel(
                self.coordinator.filter_options,
                self.coordinator.selected_filters,
                self.filter_cursor if rows else None,
            )
        )
        self.query_one("#sort-line", Static).update(format_sort_line(self.coordinator.sort_by))

    def _refresh_search_bar(self) -> None:
        try:
            bar = self.query_one("#search-bar", Static)
        except NoMatches:
            return
        if self.input_state == "normal":
            bar.update(
                "←/→ category, J/K + Space filter, S sort, / search, X clear, C cart, P pay"
                + (f"\nSearch: {self.coordinator.search_query}" if self.coordinator.search_query else "")
            )
            return
        bar.update(f"Search: {self.coordinator.search_query}|")

    def _refresh_cart_summary(self) -> None:
        try:
            summary = self.query_one("#cart-summary", Static)
        except NoMatches:
            return
        text = f"Cart: {self.cart.get_item_count()} item(s), {format_price(self.cart.get_total_price())}"
        if self.last_order_id is not None:
            text += f"\nLast order: #{self.last_order_id}"
        summary.update(text)
