"""Logging setup for dashboard command-line execution."""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any


class JsonConsoleFormatter(logging.Formatter):
    """Simple JSON formatter for structured console logs."""

    def format(self, record: logging.LogRecord) -> str:
        event: dict[str, Any] = {
            "ts": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            event["exception"] = self.formatException(record.exc_info)
        return json.dumps(event, default=str)


def setup_logger(name: str = "serial_dashboard", level: int | str = logging.INFO) -> logging.Logger:
    """Create and configure a process-wide logger.

    Output goes to stderr so it never interleaves with dashboard frames on stdout.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonConsoleFormatter())
    logger.addHandler(handler)
    return logger
