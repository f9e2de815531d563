"""
parser.py — Record Parser for Event Files

This module turns one line of the events file into one typed event.

A record is a single-line, brace-delimited blob of `"key": value` pairs, e.g.:

    {"eventType":"PaymentReceived","eventId":"e2","orderId":"o1","amountPaid":100}

Scanning is done by `RecordScanner`, a small state machine that walks the line once
and collects every key it meets (including keys of nested objects and arrays) into a
flat mapping. Only the first occurrence of a key is kept. Quoted values are read up
to the next quote (no escape sequences), bare values up to the next `,`, `}` or `]`.

Any structural problem is reported as a `RecordParseError` with the failing column.
"""

from typing import Dict, Optional

from pydantic import ValidationError

from .errors import RecordParseError
from .logging_config import get_logger
from .models import EVENT_MODELS, Event

log = get_logger(__name__)

BARE_VALUE_DELIMITERS = ",}]"
WHITESPACE = " \t\r\n"

# returned for nested objects and arrays, whose keys are collected directly
_CONTAINER = object()


class RecordScanner:
    """
    Single-pass tokenizer for one record line.

    States:
        object:  expects a key or `}`
        key:     quoted string, followed by `:`
        value:   quoted string | bare token | nested object | nested array
        after:   expects `,` or the closing bracket of the current container
    """

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.fields: Dict[str, Optional[str]] = {}

    def scan(self) -> Dict[str, Optional[str]]:
        """
        Scans the whole line and returns the collected key/value mapping.

        Raises:
            RecordParseError: If the line is not a well-formed single-line record.
        """
        self._skip_whitespace()
        self._expect("{")
        self._scan_object()
        self._skip_whitespace()
        if self.pos != len(self.text):
            raise RecordParseError("Unexpected characters after end of record", self.pos)
        return self.fields

    # --- containers ---

    def _scan_object(self):
        # opening "{" already consumed
        self._skip_whitespace()
        if self._peek() == "}":
            self.pos += 1
            return
        while True:
            self._skip_whitespace()
            key = self._read_quoted()
            self._skip_whitespace()
            self._expect(":")
            self._skip_whitespace()
            value = self._scan_value()
            if value is not _CONTAINER:
                self.fields.setdefault(key, value)
            if self._end_of_member("}"):
                return

    def _scan_array(self):
        # opening "[" already consumed
        self._skip_whitespace()
        if self._peek() == "]":
            self.pos += 1
            return
        while True:
            self._skip_whitespace()
            self._scan_value()
            if self._end_of_member("]"):
                return

    def _end_of_member(self, closing: str) -> bool:
        self._skip_whitespace()
        char = self._peek()
        if char == ",":
            self.pos += 1
            return False
        if char == closing:
            self.pos += 1
            return True
        raise RecordParseError(f"Expected ',' or '{closing}'", self.pos)

    # --- values ---

    def _scan_value(self):
        char = self._peek()
        if char == "{":
            self.pos += 1
            self._scan_object()
            return _CONTAINER
        if char == "[":
            self.pos += 1
            self._scan_array()
            return _CONTAINER
        if char == '"':
            return self._read_quoted()
        return self._read_bare()

    def _read_quoted(self) -> str:
        self._expect('"')
        end = self.text.find('"', self.pos)
        if end == -1:
            raise RecordParseError("Unterminated string", self.pos - 1)
        value = self.text[self.pos:end]
        self.pos = end + 1
        return value

    def _read_bare(self) -> Optional[str]:
        start = self.pos
        while self.pos < len(self.text) and self.text[self.pos] not in BARE_VALUE_DELIMITERS:
            self.pos += 1
        value = self.text[start:self.pos].strip()
        if not value:
            raise RecordParseError("Missing value", start)
        if value == "null":
            return None
        return value

    # --- helpers ---

    def _peek(self) -> Optional[str]:
        if self.pos < len(self.text):
            return self.text[self.pos]
        return None

    def _expect(self, char: str):
        if self._peek() != char:
            raise RecordParseError(f"Expected '{char}'", self.pos)
        self.pos += 1

    def _skip_whitespace(self):
        while self.pos < len(self.text) and self.text[self.pos] in WHITESPACE:
            self.pos += 1


def extract_fields(line: str) -> Dict[str, Optional[str]]:
    """Returns every key/value pair of a record line as raw strings."""
    return RecordScanner(line).scan()


def get_value(line: str, key: str) -> Optional[str]:
    """
    Looks up a single key in a record line.

    Returns:
        str | None: The raw value, or None if the key is absent or null.

    Raises:
        RecordParseError: If the line is malformed.
    """
    return extract_fields(line).get(key)


def _build_payload(event_type: str, fields: Dict[str, Optional[str]]) -> dict:
    payload = {
        key: value
        for key, value in fields.items()
        if value is not None and key in EVENT_MODELS[event_type].model_fields
    }
    if event_type == "OrderCreated":
        # the record format carries at most one item per order
        item_id = fields.get("itemId")
        qty = fields.get("qty")
        payload["items"] = []
        if item_id is not None and qty is not None:
            payload["items"].append({"itemId": item_id, "qty": qty})
    return payload


def parse_record(line: str) -> Optional[Event]:
    """
    Parses one line of the events file into an event.

    Args:
        line (str): One record, without or with its trailing newline.

    Returns:
        Event | None: The parsed event, or None for blank lines and records
        whose event type is missing or not supported (a warning is logged).

    Raises:
        RecordParseError: If the line is malformed or a field has an invalid value
            (e.g. a non-numeric `totalAmount`).
    """
    if not line.strip():
        return None

    fields = extract_fields(line)
    event_type = fields.get("eventType")
    if event_type is None:
        log.warning("Record without eventType skipped.")
        return None

    model = EVENT_MODELS.get(event_type)
    if model is None:
        log.warning(f"Unsupported event type: {event_type}")
        return None

    try:
        return model.model_validate(_build_payload(event_type, fields))
    except ValidationError as e:
        errors = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise RecordParseError(f"Invalid {event_type} record: {errors}") from e
