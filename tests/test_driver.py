import logging

import pytest

from order_tracker.driver import iter_events, load_events, process_file
from order_tracker.errors import InputFileError, RecordParseError
from order_tracker.models import OrderCreated, OrderStatus, PaymentReceived

from conftest import SCENARIO

MALFORMED = '{"eventType":"PaymentReceived","orderId":"o1","amountPaid":"lots"}'


def test_process_file_applies_events_in_file_order(events_file, processor, recorder):
    summary = process_file(events_file(SCENARIO), processor)

    order = processor.orders.get("o1")
    assert order.status == OrderStatus.CANCELLED
    assert [e.eventId for e in order.history] == ["e1", "e2", "e3", "e4"]
    assert [event.eventId for _, event in recorder.calls] == ["e1", "e2", "e3", "e4"]
    assert summary.lines == 4
    assert summary.applied == 4


def test_process_file_counts_outcomes(events_file, processor):
    lines = [
        SCENARIO[0],
        "",
        '{"eventType":"OrderRefunded","orderId":"o1"}',
        '{"eventType":"PaymentReceived","orderId":"o99","amountPaid":1}',
        MALFORMED,
        SCENARIO[1],
    ]
    summary = process_file(events_file(lines), processor)

    assert summary.lines == 6
    assert summary.parsed == 3
    assert summary.applied == 2
    assert summary.dropped == 1
    assert summary.skipped == 1
    assert summary.malformed == 1
    assert processor.orders.get("o1").status == OrderStatus.PAID


def test_malformed_line_is_skipped_with_line_number(events_file, processor, caplog):
    with caplog.at_level(logging.WARNING):
        process_file(events_file([SCENARIO[0], MALFORMED]), processor)
    assert "[Line 2] Malformed record skipped" in caplog.text
    assert processor.orders.get("o1").status == OrderStatus.PENDING


def test_malformed_line_aborts_when_requested(events_file, processor):
    with pytest.raises(RecordParseError):
        process_file(events_file([SCENARIO[0], MALFORMED, SCENARIO[1]]), processor, on_malformed="abort")
    # the line before the bad record was already applied
    assert len(processor.orders.get("o1").history) == 1


def test_unknown_policy_is_rejected(events_file, processor):
    with pytest.raises(ValueError):
        process_file(events_file(SCENARIO), processor, on_malformed="ignore")


def test_missing_file_fails_before_processing(tmp_path, processor, recorder):
    with pytest.raises(InputFileError):
        process_file(tmp_path / "missing.txt", processor)
    assert len(processor.orders) == 0
    assert recorder.calls == []


def test_iter_events_fails_on_missing_file_when_iterated(tmp_path):
    events = iter_events(tmp_path / "missing.txt")
    with pytest.raises(InputFileError):
        next(events)


def test_iter_events_rejects_unknown_policy(events_file):
    with pytest.raises(ValueError):
        iter_events(events_file(SCENARIO), on_malformed="ignore")


def test_load_events_returns_parsed_events(events_file):
    events = load_events(events_file([SCENARIO[0], MALFORMED, SCENARIO[1]]))
    assert [type(e) for e in events] == [OrderCreated, PaymentReceived]


def test_iter_events_abort_policy(events_file):
    events = iter_events(events_file([SCENARIO[0], MALFORMED]), on_malformed="abort")
    assert isinstance(next(events), OrderCreated)
    with pytest.raises(RecordParseError):
        next(events)


def write_bytes(tmp_path, lines):
    path = tmp_path / "events.txt"
    path.write_bytes(b"\n".join(lines) + b"\n")
    return path


def test_invalid_utf8_record_is_skipped(tmp_path, processor, caplog):
    bad = b'{"eventType":"OrderCancelled","orderId":"o1","reason":"\xff"}'
    path = write_bytes(tmp_path, [SCENARIO[0].encode(), bad, SCENARIO[1].encode()])

    with caplog.at_level(logging.WARNING):
        summary = process_file(path, processor)

    assert "[Line 2] Malformed record skipped: Invalid UTF-8" in caplog.text
    assert summary.malformed == 1
    assert summary.applied == 2
    assert processor.orders.get("o1").status == OrderStatus.PAID


def test_invalid_utf8_record_aborts_when_requested(tmp_path, processor):
    bad = b'{"eventType":"OrderCancelled","orderId":"o1","reason":"\xff"}'
    path = write_bytes(tmp_path, [SCENARIO[0].encode(), bad])

    with pytest.raises(RecordParseError):
        process_file(path, processor, on_malformed="abort")


def test_byte_order_mark_is_ignored(tmp_path, processor):
    lines = [line.encode() for line in SCENARIO]
    lines[0] = b"\xef\xbb\xbf" + lines[0]
    summary = process_file(write_bytes(tmp_path, lines), processor)

    assert summary.applied == 4
    assert summary.malformed == 0
    assert processor.orders.get("o1").status == OrderStatus.CANCELLED


def test_load_events_handles_crlf_line_endings(tmp_path):
    path = tmp_path / "events.txt"
    path.write_bytes(("\r\n".join(SCENARIO) + "\r\n").encode())
    assert [e.eventId for e in load_events(path)] == ["e1", "e2", "e3", "e4"]
