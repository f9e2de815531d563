"""
processor.py — Event Dispatcher for the Order Lifecycle

This module applies lifecycle events to the order registry and notifies observers.

Dispatch Overview:
    OrderCreated       → new order with status PENDING (replaces an existing order with the same id)
    PaymentReceived    → PAID if amountPaid >= totalAmount, otherwise PARTIALLY_PAID
    ShippingScheduled  → SHIPPED
    OrderCancelled     → CANCELLED

Events other than OrderCreated that reference an unknown order are dropped:
the registry is left unchanged and no observer runs. Transitions are not guarded,
so e.g. a shipped order can still be cancelled. Every applied event is appended to
the order's history, and the observers are notified with a snapshot of the order.
"""

from typing import Iterable, Optional

from .logging_config import get_logger
from .models import (
    Event,
    Order,
    OrderCancelled,
    OrderCreated,
    OrderStatus,
    PaymentReceived,
    ShippingScheduled,
)
from .observers import Observer
from .registry import OrderRegistry

log = get_logger(__name__)


class EventProcessor:
    """
    Routes each event, by its type, to the matching state transition.

    Args:
        observers (Iterable[Observer]): Observers to notify after each applied event.
            The list is fixed at construction.
        registry (OrderRegistry | None): Registry to update. A new, empty one is used if omitted.
    """

    def __init__(self, observers: Iterable[Observer] = (), registry: Optional[OrderRegistry] = None):
        self.observers = tuple(observers)
        self.orders = registry if registry is not None else OrderRegistry()
        self._handlers = {
            OrderCreated: self._handle_order_created,
            PaymentReceived: self._handle_payment_received,
            ShippingScheduled: self._handle_shipping_scheduled,
            OrderCancelled: self._handle_order_cancelled,
        }

    def process_event(self, event: Event) -> Optional[Order]:
        """
        Applies one event.

        Returns:
            Order | None: The updated order, or None if the event referenced an unknown order.

        Raises:
            TypeError: If the event is not one of the four lifecycle events.
        """
        handler = self._handlers.get(type(event))
        if handler is None:
            raise TypeError(f"Unsupported event: {type(event).__name__}")
        return handler(event)

    # --- transitions ---

    def _handle_order_created(self, event: OrderCreated) -> Order:
        order = Order(
            orderId=event.orderId,
            customerId=event.customerId,
            items=list(event.items),
            totalAmount=event.totalAmount,
        )
        if event.orderId in self.orders:
            log.debug(f"[Order: {event.orderId}] Replacing existing order.")
        self.orders.put(order)
        return self._commit(order, event)

    def _handle_payment_received(self, event: PaymentReceived) -> Optional[Order]:
        order = self._lookup(event)
        if order is None:
            return None
        if event.amountPaid >= order.totalAmount:
            order.status = OrderStatus.PAID
        else:
            order.status = OrderStatus.PARTIALLY_PAID
        return self._commit(order, event)

    def _handle_shipping_scheduled(self, event: ShippingScheduled) -> Optional[Order]:
        order = self._lookup(event)
        if order is None:
            return None
        order.status = OrderStatus.SHIPPED
        return self._commit(order, event)

    def _handle_order_cancelled(self, event: OrderCancelled) -> Optional[Order]:
        order = self._lookup(event)
        if order is None:
            return None
        order.status = OrderStatus.CANCELLED
        return self._commit(order, event)

    # --- helpers ---

    def _lookup(self, event: Event) -> Optional[Order]:
        order = self.orders.get(event.orderId)
        if order is None:
            log.debug(f"[Order: {event.orderId}] Unknown order, {event.eventType} dropped.")
        return order

    def _commit(self, order: Order, event: Event) -> Order:
        order.history.append(event)
        self._notify_observers(order, event)
        return order

    def _notify_observers(self, order: Order, event: Event):
        for observer in self.observers:
            snapshot = order.model_copy(deep=True)
            try:
                observer.notify(snapshot, event)
            except Exception:
                log.exception(
                    f"[Order: {order.orderId}] Observer {type(observer).__name__} failed "
                    f"on {event.eventType}."
                )
