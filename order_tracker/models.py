"""
models.py — Data Models for the Order Lifecycle Tracker

This module defines the order entities and the lifecycle events that drive them.
It uses Pydantic models to ensure type safety and automatic validation of parsed records.

Models:
    - Item: A single line item of an order.
    - OrderStatus: The lifecycle status of an order.
    - Order: The tracked state of one order, including its event history.
    - OrderCreated / PaymentReceived / ShippingScheduled / OrderCancelled:
      The four lifecycle events, combined into the `Event` tagged union.
"""

from decimal import Decimal
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Item(BaseModel):
    """
    Represents a single product item in an order.

    Attributes:
        itemId (str): The unique product identifier.
        qty (int): The ordered quantity. Must not be negative.
    """
    model_config = ConfigDict(frozen=True)

    itemId: str
    qty: int = Field(..., ge=0)


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    PARTIALLY_PAID = "PARTIALLY_PAID"
    SHIPPED = "SHIPPED"
    CANCELLED = "CANCELLED"


class BaseEvent(BaseModel):
    """
    Metadata shared by every lifecycle event.

    Attributes:
        eventId (str | None): Identifier of the event record.
        timestamp (str | None): Timestamp of the event, kept as given in the record.
        orderId (str): The order the event refers to.
    """
    model_config = ConfigDict(frozen=True)

    eventId: Optional[str] = None
    timestamp: Optional[str] = None
    orderId: str


class OrderCreated(BaseEvent):
    """An order was placed. Only this event creates an order."""
    eventType: Literal["OrderCreated"] = "OrderCreated"
    customerId: Optional[str] = None
    items: List[Item] = Field(default_factory=list)
    totalAmount: Decimal = Field(..., ge=0)


class PaymentReceived(BaseEvent):
    """A (possibly partial) payment arrived for an order."""
    eventType: Literal["PaymentReceived"] = "PaymentReceived"
    amountPaid: Decimal


class ShippingScheduled(BaseEvent):
    """Shipping was scheduled. The date is stored as given and never validated."""
    eventType: Literal["ShippingScheduled"] = "ShippingScheduled"
    shippingDate: Optional[str] = None


class OrderCancelled(BaseEvent):
    eventType: Literal["OrderCancelled"] = "OrderCancelled"
    reason: Optional[str] = None


Event = Annotated[
    Union[OrderCreated, PaymentReceived, ShippingScheduled, OrderCancelled],
    Field(discriminator="eventType"),
]

# eventType tag -> event model
EVENT_MODELS = {
    "OrderCreated": OrderCreated,
    "PaymentReceived": PaymentReceived,
    "ShippingScheduled": ShippingScheduled,
    "OrderCancelled": OrderCancelled,
}


class Order(BaseModel):
    """
    Represents the tracked state of one order.

    An order is created by an `OrderCreated` event and lives for the rest of the run.
    Later events overwrite `status`; `history` is append-only.

    Attributes:
        orderId (str): Unique identifier of the order (registry key).
        customerId (str | None): The customer who placed the order.
        items (List[Item]): Items included in the order.
        totalAmount (Decimal): Total order value.
        status (OrderStatus): Current lifecycle status.
        history (List[Event]): Every event applied to this order, in application order.
    """
    orderId: str
    customerId: Optional[str] = None
    items: List[Item] = Field(default_factory=list)
    totalAmount: Decimal = Field(..., ge=0)
    status: OrderStatus = OrderStatus.PENDING
    history: List[Event] = Field(default_factory=list)

    def describe(self) -> str:
        """Returns a one-line summary of the order."""
        return (
            f"Order{{orderId='{self.orderId}', customerId='{self.customerId}', "
            f"status='{self.status.value}', totalAmount={self.totalAmount}}}"
        )
