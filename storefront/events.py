"""Order-created notifications for interested listeners."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from storefront.models import PaymentDetails

logger = logging.getLogger(__name__)

ORDER_CREATED = "order:created"


@dataclass(frozen=True)
class OrderCreatedEvent:
    """Published once an order has been accepted by the backend."""

    order_id: Any
    details: PaymentDetails
    name: str = ORDER_CREATED


OrderListener = Callable[[OrderCreatedEvent], None]


class OrderEvents:
    """Synchronous observer registry; listeners get no return channel."""

    def __init__(self) -> None:
        self._listeners: list[OrderListener] = []

    def subscribe(self, listener: OrderListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: OrderListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def publish(self, event: OrderCreatedEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception(f"{event.name} listener {listener!r} failed for order_id={event.order_id}")
