"""Logging setup for Keypadcalc.

Every module logs under the "keypadcalc" namespace. Engine transitions carry
the display state as record extras, which the formatter renders after the
message so a DEBUG log reads as a trace of the display.
"""

import logging
import sys
from datetime import datetime
from typing import Optional

ROOT_LOGGER_NAME = "keypadcalc"

# Record attributes attached by the engine via ``extra=``
DISPLAY_FIELDS = ("buffer", "result_shown")


class StructuredFormatter(logging.Formatter):
    """Render ``timestamp [LEVEL] logger: message`` plus any display fields."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).isoformat(timespec="milliseconds")
        message = f"{timestamp} [{record.levelname}] {record.name}: {record.getMessage()}"
        fields = [
            f"{name}={getattr(record, name)!r}"
            for name in DISPLAY_FIELDS
            if hasattr(record, name)
        ]
        if fields:
            message = f"{message} ({' '.join(fields)})"
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


def setup_logging(
    level: str = "WARNING", log_file: Optional[str] = None
) -> logging.Logger:
    """Attach stderr (and optionally file) handlers to the keypadcalc logger.

    Calling it again replaces the previous handlers, so the CLI can be
    entered repeatedly in one process.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    logger.handlers.clear()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    for handler in handlers:
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return the ``keypadcalc.<name>`` logger."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
