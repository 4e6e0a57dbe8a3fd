"""
Feed to Firestore sync.

Commands:
    delete   Erase the podcasts collection (episodes included) and stop
    rebuild  Erase, then ingest every configured feed
    new      Ingest configured feeds whose podcast is not stored yet
    <url>    Ingest a single feed URL

One failing feed never stops the run: the failure is logged, reported as a
``feed_failed`` progress record and counted in the returned statistics.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Optional

from google.api_core import exceptions as gcp_exceptions
from google.cloud import firestore

from src.db import delete_collection, podcasts_collection
from src.feeds import fetch_feed, hash_id, normalize_feed
from src.logger import log_function, log_progress
from src.storage import BaseStorage
from src.utils.errors import IngestError
from .config import IngestConfig
from .upsert import podcast_exists, upsert_feed_result

logger = logging.getLogger("sync_podcasts")

# Errors that fail one feed; anything else is a bug and aborts the run
FEED_ERRORS = (
    IngestError,
    gcp_exceptions.GoogleAPICallError,
    gcp_exceptions.RetryError,
)


@log_function(logger_name="sync_podcasts", log_args=True, log_execution_time=True)
def ingest_feed(
    client: firestore.Client,
    storage: BaseStorage,
    feed_url: str,
    config: IngestConfig,
) -> dict[str, Any]:
    """
    Fetch, normalize and upsert one feed.

    Args:
        client: Firestore client
        storage: Thumbnail object store
        feed_url: Feed URL
        config: Run configuration

    Returns:
        Upsert statistics (see upsert_feed_result) plus ``rejected`` and
        ``item_failures`` counts

    Raises:
        FeedError: If the feed cannot be fetched, parsed or identified
        ThumbnailError, StorageError, UpsertError: If persisting fails
    """
    log_progress("feed_started", feed_url=feed_url)

    raw_feed = fetch_feed(
        feed_url, timeout=config.request_timeout, retry_config=config.retry_config
    )
    result = normalize_feed(raw_feed, feed_url)

    log_progress(
        "feed_normalized",
        feed_url=feed_url,
        podcast_id=result.podcast.id,
        title=result.podcast.title,
        episodes=len(result.episodes),
        rejected=result.rejected,
        failures=len(result.failures),
    )
    for failure in result.failures:
        log_progress(
            "item_failed",
            feed_url=feed_url,
            guid=failure.guid,
            title=failure.title,
            reason=failure.reason,
        )

    stats = upsert_feed_result(
        client,
        storage,
        result,
        thumbnail_size=config.thumbnail_size,
        batch_size=config.batch_size,
        timeout=config.request_timeout,
        retry_config=config.retry_config,
    )
    stats["rejected"] = result.rejected
    stats["item_failures"] = len(result.failures)
    return stats


def _process_feed(
    client: firestore.Client,
    storage: BaseStorage,
    feed_url: str,
    config: IngestConfig,
    skip_existing: bool,
) -> str:
    """Process one feed and return its outcome: "succeeded", "skipped" or "failed"."""
    try:
        if skip_existing:
            logger.info(f"Checking for {feed_url}")
            if podcast_exists(
                client,
                hash_id(feed_url),
                timeout=config.request_timeout,
                retry_config=config.retry_config,
            ):
                logger.info(f"Skipping {feed_url}")
                log_progress("feed_skipped", feed_url=feed_url, reason="exists")
                return "skipped"

        ingest_feed(client, storage, feed_url, config)
        return "succeeded"

    except FEED_ERRORS as e:
        logger.error(f"Feed {feed_url} failed: {type(e).__name__}: {e}")
        log_progress(
            "feed_failed", feed_url=feed_url, error=type(e).__name__, message=str(e)
        )
        return "failed"


@log_function(logger_name="sync_podcasts", log_execution_time=True)
def run_ingestion(
    client: firestore.Client,
    storage: BaseStorage,
    feed_urls: list[str],
    config: IngestConfig,
    skip_existing: bool = False,
) -> dict[str, int]:
    """
    Ingest a list of feeds.

    Feeds run one after the other unless ``config.workers`` > 1, in which
    case independent feeds are spread over a thread pool.

    Args:
        client: Firestore client
        storage: Thumbnail object store
        feed_urls: Feeds to ingest
        config: Run configuration
        skip_existing: Skip feeds whose podcast (hash of the feed URL) is stored

    Returns:
        Dictionary with statistics:
        - processed: Number of feeds handled
        - succeeded: Feeds ingested
        - skipped: Feeds skipped because their podcast exists
        - failed: Feeds that failed
    """

    def _run(feed_url: str) -> str:
        return _process_feed(client, storage, feed_url, config, skip_existing)

    if config.workers > 1 and len(feed_urls) > 1:
        with ThreadPoolExecutor(max_workers=config.workers) as executor:
            outcomes = list(executor.map(_run, feed_urls))
    else:
        outcomes = [_run(feed_url) for feed_url in feed_urls]

    stats = {
        "processed": len(outcomes),
        "succeeded": outcomes.count("succeeded"),
        "skipped": outcomes.count("skipped"),
        "failed": outcomes.count("failed"),
    }
    log_progress("run_completed", **stats)
    return stats


def erase_podcasts(client: firestore.Client, config: IngestConfig) -> int:
    """Delete every podcast document and its episodes. Returns podcasts deleted."""
    deleted = delete_collection(
        client,
        podcasts_collection(client),
        batch_size=config.batch_size,
        recursive=True,
        timeout=config.request_timeout,
        retry_config=config.retry_config,
    )
    log_progress("collection_erased", collection="podcasts", deleted=deleted)
    return deleted


def run_command(
    command: str,
    client: firestore.Client,
    storage: Optional[BaseStorage],
    config: IngestConfig,
) -> dict[str, int]:
    """
    Execute one CLI command.

    Args:
        command: "delete", "rebuild", "new" or a feed URL
        client: Firestore client
        storage: Thumbnail object store (unused by "delete")
        config: Run configuration

    Returns:
        Run statistics; ``delete`` reports ``{"deleted": n}``
    """
    command = command.strip()

    if command == "delete":
        return {"deleted": erase_podcasts(client, config)}

    if command == "rebuild":
        erase_podcasts(client, config)
        return run_ingestion(client, storage, config.feeds, config)

    if command == "new":
        return run_ingestion(client, storage, config.feeds, config, skip_existing=True)

    return run_ingestion(client, storage, [command], config)
