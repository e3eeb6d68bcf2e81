"""Logging setup for the fedconf command line."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

# Record attributes that are copied into JSON output when present
_EXTRA_FIELDS = ("document", "kind", "path", "violations")


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging (one object per line)."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in _EXTRA_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                log_data[name] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "WARNING", json_format: bool = False) -> None:
    """Configure the ``fedconf`` logger hierarchy.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR)
        json_format: Emit JSON lines instead of plain text
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JSONFormatter() if json_format else logging.Formatter(TEXT_FORMAT))

    logger = logging.getLogger("fedconf")
    # Avoid duplicating handlers when called more than once
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
