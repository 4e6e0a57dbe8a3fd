"""
Ingestion package for the podcast feed pipeline.

Pulls podcast RSS/Atom feeds, normalizes them and upserts podcasts and
episodes into Firestore, with a PNG thumbnail per podcast in Cloud Storage.

Modules:
    config: config.yaml / .env loading
    feeds: Built-in feed list
    upsert: Existence check, podcast creation and episode batch writes
    sync_podcasts: delete / rebuild / new / single-URL commands

Usage:
    uv run -m src.ingestion new
    uv run -m src.ingestion rebuild --workers 4
    uv run -m src.ingestion https://feeds.example.com/podcast.xml
    uv run -m src.ingestion                # prompts for a command or URL
"""

from .config import IngestConfig, load_config
from .upsert import (
    podcast_exists,
    create_podcast,
    write_episodes,
    upsert_feed_result,
    thumbnail_key,
)
from .sync_podcasts import (
    ingest_feed,
    run_ingestion,
    erase_podcasts,
    run_command,
)

__all__ = [
    "IngestConfig",
    "load_config",
    "podcast_exists",
    "create_podcast",
    "write_episodes",
    "upsert_feed_result",
    "thumbnail_key",
    "ingest_feed",
    "run_ingestion",
    "erase_podcasts",
    "run_command",
]
