"""
registry.py — In-Memory Order Registry

Maps order identifiers to their current `Order` state for the lifetime of the process.
There is no persistence and no deletion: once stored, an order stays until exit.
"""

from typing import Dict, Iterator, List, Optional

from .models import Order


class OrderRegistry:
    """Lookup table of orders keyed by `orderId`."""

    def __init__(self):
        self._orders: Dict[str, Order] = {}

    def put(self, order: Order):
        """Stores an order. An existing order with the same id is replaced (last write wins)."""
        self._orders[order.orderId] = order

    def get(self, order_id: str) -> Optional[Order]:
        return self._orders.get(order_id)

    def list_orders(self) -> List[Order]:
        """All orders, in the order they were first created."""
        return list(self._orders.values())

    def __contains__(self, order_id: str) -> bool:
        return order_id in self._orders

    def __len__(self) -> int:
        return len(self._orders)

    def __iter__(self) -> Iterator[Order]:
        return iter(self._orders.values())
