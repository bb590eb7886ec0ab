"""Order submission flow."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from storefront.api import OrderClient
from storefront.cart import CartStore
from storefront.config import DEFAULT_CUSTOMER_NAME, ORDER_SUCCESS_NOTIFICATION_MS
from storefront.errors import SubmissionInProgressError
from storefront.events import OrderCreatedEvent, OrderEvents
from storefront.models import OrderSubmission, PaymentDetails
from storefront.notifications import Notifier
from storefront.overlays import OverlayController

logger = logging.getLogger(__name__)

ORDER_FAILED_MESSAGE = "Could not create order, please retry"
GENERIC_ERROR_MESSAGE = "Something went wrong, please retry"
SUBMISSION_IN_PROGRESS_MESSAGE = "Your order is already being placed"


class CheckoutState(str, Enum):
    IDLE = "idle"
    CREATING = "creating"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


def build_order_submission(cart: CartStore, details: PaymentDetails) -> OrderSubmission:
    """Snapshot the cart into the order request sent to the backend."""
    customer_name = details.address.full_name if details.address and details.address.full_name else DEFAULT_CUSTOMER_NAME
    return OrderSubmission(
        customer_name=customer_name,
        items=[(item.product_id, item.quantity) for item in cart.get_items()],
        total_price=cart.get_total_price(),
    )


class CheckoutOrchestrator:
    """Submits the cart as an order and drives cart, notifications and overlays from the outcome."""

    def __init__(
        self,
        cart: CartStore,
        orders: OrderClient,
        notifier: Notifier,
        overlays: OverlayController,
        events: OrderEvents,
    ) -> None:
        self.cart = cart
        self.orders = orders
        self.notifier = notifier
        self.overlays = overlays
        self.events = events
        self.state = CheckoutState.IDLE
        self._in_flight = False

    async def submit_order(self, details: PaymentDetails) -> Any:
        """Create the order and return its id.

        The cart is cleared only once the backend has returned an order id.
        Failures are reported to the user and re-raised to the caller.
        """
        if self._in_flight:
            logger.warning("submit_order called while a submission is in flight")
            self.notifier.show(SUBMISSION_IN_PROGRESS_MESSAGE, type="warning")
            raise SubmissionInProgressError("An order submission is already in progress")

        self._in_flight = True
        self.state = CheckoutState.CREATING
        try:
            submission = build_order_submission(self.cart, details)
            logger.info(
                f"creating order items={len(submission.items)} total={submission.total_price} "
                f"order_type={details.order_type} payment={details.payment_method}"
            )
            try:
                order_id = await self.orders.create_order(submission)
            except Exception as exc:
                self.state = CheckoutState.FAILED
                logger.error(f"Submit order error: {exc!r}")
                self.notifier.show(ORDER_FAILED_MESSAGE, type="error")
                raise

            self.state = CheckoutState.SUCCEEDED
            self.cart.clear_cart()
            self.notifier.show(
                f"Order placed! Order number: #{order_id}",
                type="success",
                duration=ORDER_SUCCESS_NOTIFICATION_MS,
            )
            self.overlays.hide_all_overlays()
            self.events.publish(OrderCreatedEvent(order_id=order_id, details=details))
            logger.info(f"order created order_id={order_id}")
            return order_id
        finally:
            self._in_flight = False

    def start_payment_flow(self) -> None:
        """Open the payment form; failures are reported, never raised."""
        try:
            self.overlays.show_form("payment")
        except Exception:
            logger.exception("Payment flow error")
            self.notifier.show(GENERIC_ERROR_MESSAGE, type="error")
