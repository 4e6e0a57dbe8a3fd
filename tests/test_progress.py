import io
import json
import logging
from datetime import datetime

from src.logger import format_progress, log_progress, setup_progress_logging


def test_format_progress_is_one_json_object():
    line = format_progress(
        "episodes_written", podcast_id="abc", count=3, published=datetime(2024, 1, 1)
    )

    record = json.loads(line)
    assert "\n" not in line
    assert record["event"] == "episodes_written"
    assert record["podcast_id"] == "abc"
    assert record["count"] == 3
    assert record["published"] == "2024-01-01 00:00:00"
    assert "ts" in record


def test_log_progress_writes_lines():
    logger = logging.getLogger("progress")
    saved = (logger.handlers[:], logger.propagate)
    logger.handlers.clear()
    stream = io.StringIO()
    try:
        setup_progress_logging(stream)
        log_progress("feed_started", feed_url="https://x.test/feed")
        log_progress("run_completed", processed=1)
    finally:
        logger.handlers[:], logger.propagate = saved

    lines = stream.getvalue().splitlines()
    assert [json.loads(line)["event"] for line in lines] == ["feed_started", "run_completed"]
    assert json.loads(lines[0])["feed_url"] == "https://x.test/feed"
