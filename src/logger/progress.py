"""
Structured progress records for batch ingestion runs.

Each record is a single JSON object per line on the ``progress`` logger so an
operator (or a log collector) can audit which feed was processed, whether its
podcast already existed, how many episodes were written and where the
thumbnail was uploaded.

Usage:
    from src.logger import setup_progress_logging, log_progress

    setup_progress_logging()
    log_progress("feed_started", feed_url="https://example.com/rss")
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Optional, TextIO

PROGRESS_LOGGER_NAME = "progress"


def setup_progress_logging(stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Attach a bare-message stream handler to the progress logger.

    Args:
        stream: Output stream (default: sys.stdout)

    Returns:
        The progress logger
    """
    logger = logging.getLogger(PROGRESS_LOGGER_NAME)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    return logger


def format_progress(event: str, **fields: Any) -> str:
    """Serialize one progress record. Non-JSON values are rendered with str()."""
    record = {"ts": datetime.now(timezone.utc).isoformat(), "event": event}
    record.update(fields)
    return json.dumps(record, default=str, ensure_ascii=False)


def log_progress(event: str, **fields: Any) -> None:
    """Emit one progress record on the progress logger."""
    logging.getLogger(PROGRESS_LOGGER_NAME).info(format_progress(event, **fields))
