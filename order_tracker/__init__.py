"""In-memory order lifecycle tracker driven by an events file."""

from .driver import RunSummary, iter_events, load_events, process_file
from .errors import InputFileError, RecordParseError
from .models import (
    Event,
    Item,
    Order,
    OrderCancelled,
    OrderCreated,
    OrderStatus,
    PaymentReceived,
    ShippingScheduled,
)
from .observers import AlertObserver, LoggerObserver, Observer
from .parser import parse_record
from .processor import EventProcessor
from .registry import OrderRegistry

__version__ = "0.1.0"
