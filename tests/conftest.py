"""Shared fixtures for storefront tests."""
from __future__ import annotations

import pytest

from storefront.cart import CartStore
from storefront.checkout import CheckoutOrchestrator
from storefront.events import OrderEvents
from storefront.notifications import Notifier
from storefront.overlays import OverlayController

from tests.dummies import CollectingSpawn, DummyOrders


@pytest.fixture
def spawn():
    collector = CollectingSpawn()
    yield collector
    collector.close()


@pytest.fixture
def overlays() -> OverlayController:
    controller = OverlayController(forms={"cart": object, "payment": object})
    controller.initialize()
    return controller


@pytest.fixture
def cart() -> CartStore:
    store = CartStore()
    store.add_item("p1", "Birthday cake", 50000, quantity=2)
    return store


@pytest.fixture
def checkout_parts(cart, overlays):
    notifier = Notifier()
    events = OrderEvents()
    received: list = []
    events.subscribe(received.append)
    orders = DummyOrders()
    checkout = CheckoutOrchestrator(cart=cart, orders=orders, notifier=notifier, overlays=overlays, events=events)
    return checkout, orders, notifier, received
