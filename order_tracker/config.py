"""
config.py — Runtime Settings

The tracker reads no command-line flags and no environment variables;
all settings are fixed defaults that callers may override in code.
"""

from typing import Literal, Optional

from pydantic import BaseModel


class TrackerConfig(BaseModel):
    """
    Attributes:
        events_file (str): Path of the events file processed by `main()`.
        log_level (str): Root log level.
        log_file (str | None): Optional file receiving a copy of the log.
        on_malformed (str): "skip" logs and continues past a malformed record,
            "abort" stops the run with the parse error.
    """
    events_file: str = "events.txt"
    log_level: str = "INFO"
    log_file: Optional[str] = None
    on_malformed: Literal["skip", "abort"] = "skip"
