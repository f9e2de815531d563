"""
observers.py — Side-Effect Handlers Notified After Each Applied Event

Observers are invoked synchronously, in registration order, after every
successful state transition. Both built-in observers write to the log.
"""

from typing import Protocol

from .logging_config import get_logger
from .models import Event, Order, OrderCancelled, OrderStatus

log = get_logger(__name__)


class Observer(Protocol):
    def notify(self, order: Order, event: Event) -> None:
        ...


class LoggerObserver:
    """Logs every processed event together with the resulting order status."""

    def notify(self, order: Order, event: Event) -> None:
        log.info(
            f"[Logger] Event processed: {event.eventType} for Order {order.orderId} "
            f"| Current Status: {order.status.value}"
        )


class AlertObserver:
    """
    Emits an alert when an order is cancelled or has been shipped.

    Triggers:
        - the event is an `OrderCancelled` event, or
        - the order's current status is SHIPPED.
    """

    def notify(self, order: Order, event: Event) -> None:
        if isinstance(event, OrderCancelled) or order.status == OrderStatus.SHIPPED:
            log.warning(
                f"[ALERT] Sending alert for Order {order.orderId}: "
                f"Status changed to {order.status.value}"
            )
