"""End-to-end tests for the Textual storefront using the test pilot."""
from __future__ import annotations

import httpx
import pytest
from textual.screen import ModalScreen

from storefront.cart import CartStore
from storefront.cart_modal import CartModal
from storefront.payment_modal import PaymentModal
from storefront.storefront_app import StorefrontApp

from tests.dummies import mock_client

CAKE_OPTIONS = {"occasion": ["birthday", "wedding"], "size": ["small", "large"]}


def backend(order_status: int = 201, order_body: dict | None = None):
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.url.path == "/filter-options":
            if request.url.params["category"] == "cake":
                return httpx.Response(200, json=CAKE_OPTIONS)
            return httpx.Response(404)
        if request.url.path == "/orders":
            return httpx.Response(order_status, json=order_body if order_body is not None else {"order_id": 42})
        return httpx.Response(404)

    return handler, requests


def seeded_cart() -> CartStore:
    cart = CartStore()
    cart.add_item("p1", "Birthday cake", 50000, quantity=2)
    return cart


@pytest.mark.asyncio
async def test_category_switch_loads_filters_and_toggles():
    handler, requests = backend()
    app = StorefrontApp(cart=seeded_cart(), client=mock_client(handler))

    async with app.run_test() as pilot:
        assert app.overlays.initialized is True
        assert app.coordinator.active_category == "all"

        await pilot.press("1")
        await app.workers.wait_for_complete()
        await pilot.pause()

        assert app.coordinator.active_category == "cake"
        assert app.coordinator.filter_options == CAKE_OPTIONS

        await pilot.press("space")
        assert app.coordinator.selected_filters == {"occasion": ["birthday"]}

        await pilot.press("x")
        assert app.coordinator.selected_filters == {}

    assert [request.url.params["category"] for request in requests] == ["cake"]


@pytest.mark.asyncio
async def test_search_mode_collects_typed_text():
    handler, _ = backend()
    app = StorefrontApp(client=mock_client(handler))

    async with app.run_test() as pilot:
        await pilot.press("slash", "c", "h", "o", "c", "o")
        assert app.input_state == "search"
        assert app.coordinator.search_query == "choco"

        await pilot.press("backspace")
        assert app.coordinator.search_query == "choc"


@pytest.mark.asyncio
async def test_cart_overlay_opens_and_closes():
    handler, _ = backend()
    app = StorefrontApp(cart=seeded_cart(), client=mock_client(handler))

    async with app.run_test() as pilot:
        await pilot.press("c")
        await pilot.pause()
        assert isinstance(app.screen, CartModal)
        assert app.overlays.visible == "cart"

        await pilot.press("q")
        await pilot.pause()
        assert not isinstance(app.screen, ModalScreen)
        assert app.overlays.visible is None


@pytest.mark.asyncio
async def test_payment_submit_clears_cart_and_closes_overlays():
    handler, requests = backend()
    app = StorefrontApp(cart=seeded_cart(), client=mock_client(handler))

    async with app.run_test() as pilot:
        await pilot.press("p")
        await pilot.pause()
        modal = app.screen
        assert isinstance(modal, PaymentModal)

        modal.cursor_index = len(modal._rows()) - 1
        await pilot.press("space")
        await app.workers.wait_for_complete()
        await pilot.pause()

        assert app.cart.is_empty
        assert app.last_order_id == 42
        assert app.overlays.visible is None
        assert not isinstance(app.screen, ModalScreen)
        assert "42" in app.notifier.last.message

    assert [request.url.path for request in requests] == ["/orders"]


@pytest.mark.asyncio
async def test_payment_failure_keeps_form_open_and_cart():
    handler, _ = backend(order_status=200, order_body={})
    app = StorefrontApp(cart=seeded_cart(), client=mock_client(handler))

    async with app.run_test() as pilot:
        await pilot.press("p")
        await pilot.pause()
        modal = app.screen
        modal.cursor_index = len(modal._rows()) - 1
        await pilot.press("space")
        await app.workers.wait_for_complete()
        await pilot.pause()

        assert app.screen is modal
        assert modal.submitting is False
        assert modal.error
        assert app.cart.get_item_count() == 2
        assert app.notifier.last.type == "error"
        assert app.last_order_id is None


@pytest.mark.asyncio
async def test_payment_with_empty_cart_is_blocked():
    handler, requests = backend()
    app = StorefrontApp(client=mock_client(handler))

    async with app.run_test() as pilot:
        await pilot.press("p")
        await pilot.pause()

        assert not isinstance(app.screen, ModalScreen)
        assert app.notifier.last.type == "warning"
    assert requests == []


@pytest.mark.asyncio
async def test_undecodable_order_response_keeps_app_running():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, headers={"content-encoding": "gzip"}, content=b"not gzip")

    app = StorefrontApp(cart=seeded_cart(), client=mock_client(handler))

    async with app.run_test() as pilot:
        await pilot.press("p")
        await pilot.pause()
        modal = app.screen
        modal.cursor_index = len(modal._rows()) - 1
        await pilot.press("space")
        await app.workers.wait_for_complete()
        await pilot.pause()

        assert app.is_running
        assert app.screen is modal
        assert modal.error
        assert app.cart.get_item_count() == 2
        assert app.notifier.last.type == "error"
