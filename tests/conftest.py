import pytest

from order_tracker.processor import EventProcessor

SCENARIO = [
    '{"eventType":"OrderCreated","eventId":"e1","orderId":"o1","customerId":"c1","totalAmount":100,"itemId":"sku1","qty":2}',
    '{"eventType":"PaymentReceived","eventId":"e2","orderId":"o1","amountPaid":100}',
    '{"eventType":"ShippingScheduled","eventId":"e3","orderId":"o1","shippingDate":"2024-01-01"}',
    '{"eventType":"OrderCancelled","eventId":"e4","orderId":"o1","reason":"test"}',
]


class RecordingObserver:
    """Remembers every notification it receives."""

    def __init__(self):
        self.calls = []

    def notify(self, order, event):
        self.calls.append((order, event))


@pytest.fixture
def recorder():
    return RecordingObserver()


@pytest.fixture
def processor(recorder):
    return EventProcessor(observers=[recorder])


@pytest.fixture
def events_file(tmp_path):
    def _write(lines, name="events.txt"):
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path
    return _write
