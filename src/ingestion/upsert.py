"""
Upsert of a normalized feed into Firestore and the thumbnail bucket.

For each FeedResult:
    1. CheckExists:     look up podcasts/{podcast.id}
    2. CreateIfAbsent:  new podcasts get a thumbnail (uploaded public-read) and
                        their podcast document
    3. WriteEpisodes:   episodes are always (re)written under the podcast, in
                        batches of at most 500 documents

Document IDs are content hashes (feed link, episode GUID), so running the
upsert twice for the same feed overwrites instead of duplicating.
"""

import logging
from typing import Any, Optional

from google.api_core import exceptions as gcp_exceptions
from google.cloud import firestore

from src.db import (
    MAX_BATCH_SIZE,
    commit_in_batches,
    document_exists,
    episodes_collection,
    podcasts_collection,
)
from src.feeds.models import Episode, FeedResult, Image, Podcast
from src.logger import log_function, log_progress
from src.storage import BaseStorage
from src.thumbnails import generate_thumbnail
from src.utils.errors import UpsertError
from src.utils.retry import FIRESTORE_TRANSIENT_ERRORS, RetryConfig, with_retry

logger = logging.getLogger("sync_podcasts")


def thumbnail_key(podcast_id: str) -> str:
    """Object key of a podcast thumbnail."""
    return f"{podcast_id}.png"


def podcast_exists(
    client: firestore.Client,
    podcast_id: str,
    timeout: Optional[float] = None,
    retry_config: Optional[RetryConfig] = None,
) -> bool:
    """Return True if ``podcasts/{podcast_id}`` exists."""
    doc_ref = podcasts_collection(client).document(podcast_id)
    return document_exists(doc_ref, timeout=timeout, retry_config=retry_config)


@log_function(logger_name="sync_podcasts", log_execution_time=True)
def create_podcast(
    client: firestore.Client,
    storage: BaseStorage,
    podcast: Podcast,
    thumbnail_size: int,
    timeout: float = 30,
    retry_config: Optional[RetryConfig] = None,
) -> str:
    """
    Create the thumbnail and the document of a new podcast.

    The thumbnail fields of ``podcast`` are filled in before the document is
    written. A failure after the upload leaves an orphan thumbnail object,
    which the next run overwrites.

    Args:
        client: Firestore client
        storage: Thumbnail object store
        podcast: Podcast to create
        thumbnail_size: Maximum thumbnail edge in pixels
        timeout: Network timeout in seconds
        retry_config: Retry policy for transient failures

    Returns:
        str: Public URL of the thumbnail

    Raises:
        ThumbnailError: If the thumbnail cannot be generated
        StorageError: If the upload fails
        UpsertError: If the podcast document cannot be written
    """
    thumbnail = generate_thumbnail(
        podcast.image_original.url,
        thumbnail_size,
        timeout=timeout,
        retry_config=retry_config,
    )

    logger.info("Writing thumbnail to Cloud Storage.")
    thumbnail_url = storage.save_file(
        thumbnail_key(podcast.id), thumbnail.data, thumbnail.content_type
    )

    podcast.image_thumbnail = Image(
        title=podcast.image_original.title,
        url=thumbnail_url,
        data=thumbnail.data,
    )
    log_progress("thumbnail_uploaded", podcast_id=podcast.id, url=thumbnail_url)

    @with_retry(retry_config, FIRESTORE_TRANSIENT_ERRORS)
    def _set() -> None:
        podcasts_collection(client).document(podcast.id).set(
            podcast.to_document(), timeout=timeout
        )

    try:
        _set()
    except gcp_exceptions.GoogleAPICallError as e:
        raise UpsertError(f"Couldn't create podcast document {podcast.id}: {e}") from e

    logger.info(f"Created new Podcast: {podcast.title} by {podcast.author.name}")
    return thumbnail_url


@log_function(logger_name="sync_podcasts", log_execution_time=True)
def write_episodes(
    client: firestore.Client,
    podcast_id: str,
    episodes: list[Episode],
    batch_size: int = MAX_BATCH_SIZE,
    timeout: Optional[float] = None,
    retry_config: Optional[RetryConfig] = None,
) -> int:
    """
    Write episode documents under their podcast.

    Feeds with more episodes than one batch allows are split over several
    commits; nothing is dropped.

    Returns:
        int: Number of batch commits

    Raises:
        UpsertError: If a commit fails
    """
    if not episodes:
        return 0

    collection = episodes_collection(client, podcast_id)
    writes = [(collection.document(ep.id), ep.to_document()) for ep in episodes]

    if len(writes) > batch_size:
        logger.warning(
            f"{len(writes)} episodes exceed one batch of {batch_size}; "
            f"splitting into {-(-len(writes) // batch_size)} commits"
        )

    logger.info(f"Batch writing {len(writes)} episodes to Firestore...")
    try:
        return commit_in_batches(
            client,
            writes,
            batch_size=batch_size,
            timeout=timeout,
            retry_config=retry_config,
        )
    except gcp_exceptions.GoogleAPICallError as e:
        raise UpsertError(f"Couldn't write episodes of {podcast_id}: {e}") from e


@log_function(logger_name="sync_podcasts", log_execution_time=True)
def upsert_feed_result(
    client: firestore.Client,
    storage: BaseStorage,
    result: FeedResult,
    thumbnail_size: int,
    batch_size: int = MAX_BATCH_SIZE,
    timeout: float = 30,
    retry_config: Optional[RetryConfig] = None,
) -> dict[str, Any]:
    """
    Insert a podcast if absent, then (re)write its episodes.

    Args:
        client: Firestore client
        storage: Thumbnail object store
        result: Normalized feed
        thumbnail_size: Maximum thumbnail edge in pixels
        batch_size: Episodes per Firestore commit
        timeout: Network timeout in seconds
        retry_config: Retry policy for transient failures

    Returns:
        Dictionary with keys:
        - podcast_id (str): ID of the podcast
        - created (bool): Whether the podcast document was created by this call
        - thumbnail_url (str | None): Thumbnail URL when created
        - episodes_written (int): Number of episode documents written
        - batches (int): Number of episode commits
    """
    podcast = result.podcast

    exists = podcast_exists(client, podcast.id, timeout=timeout, retry_config=retry_config)
    logger.info(f"Podcast {podcast.title} exists? {exists}")
    log_progress(
        "podcast_exists", podcast_id=podcast.id, title=podcast.title, exists=exists
    )

    thumbnail_url = None
    if not exists:
        thumbnail_url = create_podcast(
            client,
            storage,
            podcast,
            thumbnail_size,
            timeout=timeout,
            retry_config=retry_config,
        )

    batches = write_episodes(
        client,
        podcast.id,
        result.episodes,
        batch_size=batch_size,
        timeout=timeout,
        retry_config=retry_config,
    )
    log_progress(
        "episodes_written",
        podcast_id=podcast.id,
        count=len(result.episodes),
        batches=batches,
    )

    return {
        "podcast_id": podcast.id,
        "created": not exists,
        "thumbnail_url": thumbnail_url,
        "episodes_written": len(result.episodes),
        "batches": batches,
    }
