"""
main.py — Entry Point for the Order Lifecycle Tracker

Processes the default events file once and exits.

Responsibilities:
    • Configure logging
    • Build the processor with the Logger and Alert observers
    • Stream the events file through it
    • Report a missing or unreadable file as a startup failure (exit status 1)
"""

import sys
from typing import Optional

from .config import TrackerConfig
from .driver import process_file
from .errors import InputFileError
from .logging_config import get_logger, setup_logging
from .observers import AlertObserver, LoggerObserver
from .processor import EventProcessor

log = get_logger(__name__)


def build_processor() -> EventProcessor:
    """Returns a processor with the built-in observers, in notification order."""
    return EventProcessor(observers=[LoggerObserver(), AlertObserver()])


def main(config: Optional[TrackerConfig] = None) -> int:
    """
    Runs the tracker over `config.events_file`.

    Args:
        config (TrackerConfig | None): Settings to use; the defaults if omitted.

    Returns:
        int: 0 when the file was processed, 1 when it could not be opened.
    """
    config = config or TrackerConfig()
    setup_logging(config.log_level, config.log_file)
    log.info("Order tracker starting...")

    processor = build_processor()
    try:
        process_file(config.events_file, processor, on_malformed=config.on_malformed)
    except InputFileError as e:
        log.critical(f"Startup failed: {e}")
        return 1

    for order in processor.orders.list_orders():
        log.info(order.describe())
    return 0


if __name__ == "__main__":
    sys.exit(main())
