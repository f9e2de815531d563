"""
errors.py — Exceptions raised by the order tracker.
"""

from typing import Optional


class RecordParseError(ValueError):
    """
    Raised when a single input record cannot be turned into an event.

    Attributes:
        column (int | None): Zero-based position in the line where scanning failed,
            or None when the record was structurally fine but its values were invalid.
    """
    def __init__(self, message: str, column: Optional[int] = None):
        if column is not None:
            message = f"{message} (column {column})"
        super().__init__(message)
        self.column = column


class InputFileError(OSError):
    """Raised when the events file cannot be opened. Nothing has been processed at that point."""
