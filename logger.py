import logging
import json
from datetime import datetime, timezone
import sys

import config

# Extra attributes copied into the JSON line when a caller passes them
EXTRA_FIELDS = (
    "event",
    "game_name",
    "game_number",
    "method",
    "pool_size",
    "tier_count",
    "game_count",
    "skipped",
    "duration_ms",
    "url",
    "error",
)


class JSONFormatter(logging.Formatter):
    """
    Structured JSON formatter for machine-readable logs.
    One object per line, extras flattened alongside the message.
    """
    def format(self, record):
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "module": record.module,
            "message": record.getMessage(),
        }

        for field in EXTRA_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        return json.dumps(log_data, default=str)


def setup_logger(name):
    """
    Create a logger with JSON formatting.
    Usage: logger = setup_logger(__name__)
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, config.LOG_LEVEL, logging.INFO))

    # Avoid duplicate handlers
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(JSONFormatter())
        logger.addHandler(handler)

    return logger
