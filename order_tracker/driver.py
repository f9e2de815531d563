"""
driver.py — Event File Processing

This module streams the events file through the parser and into the processor.

Workflow Overview:
1. Open the events file (a missing or unreadable file aborts before anything is processed)
2. Decode and parse each line into zero or one event
3. Hand each event to the processor immediately, in file order
4. Handle malformed records (bad syntax, bad values, invalid UTF-8) according to the configured policy
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from .errors import InputFileError, RecordParseError
from .logging_config import get_logger
from .models import Event
from .parser import parse_record
from .processor import EventProcessor

log = get_logger(__name__)

SKIP = "skip"
ABORT = "abort"

UTF8_BOM = b"\xef\xbb\xbf"


@dataclass
class RunSummary:
    """Counters for one pass over an events file."""
    lines: int = 0
    parsed: int = 0
    applied: int = 0
    dropped: int = 0
    skipped: int = 0
    malformed: int = 0


def _check_policy(on_malformed: str):
    if on_malformed not in (SKIP, ABORT):
        raise ValueError(f"Unknown malformed-record policy: {on_malformed}")


def _open_events_file(path):
    # binary, so that an undecodable line is one malformed record rather than a failed read
    try:
        return open(path, "rb")
    except OSError as e:
        raise InputFileError(f"Cannot open events file {path}: {e}") from e


def _decode_line(raw: bytes, line_no: int) -> str:
    if line_no == 1 and raw.startswith(UTF8_BOM):
        raw = raw[len(UTF8_BOM):]
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise RecordParseError(f"Invalid UTF-8 at byte {e.start}") from e


def _read_records(handle, on_malformed: str) -> Iterator[Tuple[str, Optional[Event], bool]]:
    """
    Yields (line, event, malformed) for every line of an open events file.

    Raises:
        RecordParseError: If a record is malformed and `on_malformed` is "abort".
    """
    for line_no, raw in enumerate(handle, start=1):
        try:
            line = _decode_line(raw, line_no)
            event = parse_record(line)
        except RecordParseError as e:
            if on_malformed == ABORT:
                log.error(f"[Line {line_no}] Malformed record, aborting run: {e}")
                raise
            log.warning(f"[Line {line_no}] Malformed record skipped: {e}")
            yield "", None, True
            continue
        yield line, event, False


def _iter_events(path, on_malformed: str) -> Iterator[Event]:
    with _open_events_file(path) as handle:
        for _, event, _ in _read_records(handle, on_malformed):
            if event is not None:
                yield event


def iter_events(path, on_malformed: str = SKIP) -> Iterator[Event]:
    """
    Yields the events of a file lazily, in file order.

    The file is opened when iteration starts and closed when it ends.

    Args:
        path: Path of the events file.
        on_malformed (str): "skip" to log and pass over malformed records, "abort" to raise.

    Raises:
        ValueError: Immediately, if `on_malformed` is not a known policy.
        InputFileError: On first iteration, if the file cannot be opened.
        RecordParseError: If a record is malformed and `on_malformed` is "abort".
    """
    _check_policy(on_malformed)
    return _iter_events(path, on_malformed)


def load_events(path, on_malformed: str = SKIP) -> List[Event]:
    """Reads the whole file and returns its events as a list."""
    return list(iter_events(path, on_malformed))


def process_file(path, processor: EventProcessor, on_malformed: str = SKIP) -> RunSummary:
    """
    Processes an events file from top to bottom.

    Each record is parsed and dispatched before the next line is read.

    Args:
        path: Path of the events file.
        processor (EventProcessor): Processor receiving the events.
        on_malformed (str): Policy for malformed records ("skip" or "abort").

    Returns:
        RunSummary: Counters describing the run.

    Raises:
        InputFileError: If the file cannot be opened. Nothing has been processed.
        RecordParseError: If a record is malformed and the policy is "abort".
    """
    _check_policy(on_malformed)

    summary = RunSummary()
    with _open_events_file(path) as handle:
        log.info(f"Processing events from {path}.")
        for line, event, malformed in _read_records(handle, on_malformed):
            summary.lines += 1
            if malformed:
                summary.malformed += 1
                continue

            if event is None:
                if line.strip():
                    summary.skipped += 1
                continue

            summary.parsed += 1
            if processor.process_event(event) is None:
                summary.dropped += 1
            else:
                summary.applied += 1

    log.info(
        f"Finished {path}: {summary.lines} lines, {summary.applied} applied, "
        f"{summary.dropped} dropped, {summary.skipped} skipped, {summary.malformed} malformed."
    )
    return summary
