"""
Firestore document store for the ingestion pipeline.

Layout:
    podcasts/{podcast_id}                       Podcast document
    podcasts/{podcast_id}/episodes/{episode_id} Episode documents

Provides:
- A context-managed client built from the service account file
- Existence checks (a missing document is a normal negative result)
- Batched writes split into commits of at most 500 operations
- Paged bulk deletion of a collection

Usage:
    from src.db import get_firestore_client, delete_collection, podcasts_collection

    with get_firestore_client("service-account.json") as client:
        delete_collection(client, podcasts_collection(client), batch_size=500)
"""

import logging
from contextlib import contextmanager
from typing import Any, Generator, Iterable, Optional

from google.api_core import exceptions as gcp_exceptions
from google.cloud import firestore

from src.logger import log_function
from src.utils.retry import FIRESTORE_TRANSIENT_ERRORS, RetryConfig, with_retry

PODCASTS_COLLECTION = "podcasts"
EPISODES_COLLECTION = "episodes"

# Firestore rejects write batches with more than 500 operations
MAX_BATCH_SIZE = 500

logger = logging.getLogger("database")


@contextmanager
def get_firestore_client(
    service_account_path: Optional[str] = None,
) -> Generator[firestore.Client, None, None]:
    """
    Context manager for Firestore client connections.

    Args:
        service_account_path: Service account JSON file. When None the client
            falls back to Application Default Credentials.

    Yields:
        firestore.Client: An active Firestore client
    """
    client = None
    try:
        if service_account_path:
            logger.debug(f"Connecting to Firestore with {service_account_path}")
            client = firestore.Client.from_service_account_json(service_account_path)
        else:
            client = firestore.Client()
        yield client

    except Exception as e:
        logger.error(f"Firestore client error: {e}")
        raise

    finally:
        if client is not None:
            client.close()
            logger.debug("Firestore client connection closed")


def podcasts_collection(client: firestore.Client):
    return client.collection(PODCASTS_COLLECTION)


def episodes_collection(client: firestore.Client, podcast_id: str):
    return (
        client.collection(PODCASTS_COLLECTION)
        .document(podcast_id)
        .collection(EPISODES_COLLECTION)
    )


def document_exists(
    doc_ref,
    timeout: Optional[float] = None,
    retry_config: Optional[RetryConfig] = None,
) -> bool:
    """
    Check whether a document exists.

    Args:
        doc_ref: Firestore DocumentReference
        timeout: RPC timeout in seconds
        retry_config: Retry policy for transient Firestore errors

    Returns:
        bool: True if the document exists. A NotFound answer is False, any
        other error propagates.
    """

    @with_retry(retry_config, FIRESTORE_TRANSIENT_ERRORS)
    def _get():
        return doc_ref.get(timeout=timeout)

    try:
        snapshot = _get()
    except gcp_exceptions.NotFound:
        return False
    return bool(snapshot.exists)


def _chunks(items: list, size: int) -> Iterable[list]:
    for start in range(0, len(items), size):
        yield items[start : start + size]


@log_function(logger_name="database", log_execution_time=True)
def commit_in_batches(
    client: firestore.Client,
    writes: list[tuple[Any, dict[str, Any]]],
    batch_size: int = MAX_BATCH_SIZE,
    timeout: Optional[float] = None,
    retry_config: Optional[RetryConfig] = None,
) -> int:
    """
    Write documents with as many batch commits as needed.

    Args:
        client: Firestore client
        writes: (DocumentReference, document) pairs, written with ``set``
        batch_size: Operations per commit, capped at 500
        timeout: RPC timeout in seconds
        retry_config: Retry policy for transient Firestore errors

    Returns:
        int: Number of commits performed
    """
    batch_size = max(1, min(batch_size, MAX_BATCH_SIZE))

    @with_retry(retry_config, FIRESTORE_TRANSIENT_ERRORS)
    def _commit(chunk: list[tuple[Any, dict[str, Any]]]) -> None:
        # A fresh batch per attempt; a failed commit is never replayed
        batch = client.batch()
        for ref, document in chunk:
            batch.set(ref, document)
        batch.commit(timeout=timeout)

    commits = 0
    for chunk in _chunks(writes, batch_size):
        _commit(chunk)
        commits += 1
        logger.info(f"Committed batch {commits} ({len(chunk)} documents)")
    return commits


@log_function(logger_name="database", log_args=True, log_execution_time=True)
def delete_collection(
    client: firestore.Client,
    collection_ref,
    batch_size: int = MAX_BATCH_SIZE,
    recursive: bool = False,
    timeout: Optional[float] = None,
    retry_config: Optional[RetryConfig] = None,
) -> int:
    """
    Delete every document of a collection, one page per batch commit.

    Pages of up to ``batch_size`` documents are fetched and deleted until a
    page comes back empty. Not transactional across pages: an interrupted run
    leaves the collection partially erased.

    Args:
        client: Firestore client
        collection_ref: Collection to erase
        batch_size: Page size (and deletes per commit), capped at 500
        recursive: Also erase the sub-collections of every document first
            (Firestore keeps sub-collections of deleted documents otherwise)
        timeout: RPC timeout in seconds
        retry_config: Retry policy for transient Firestore errors

    Returns:
        int: Number of documents deleted from ``collection_ref``
    """
    batch_size = max(1, min(batch_size, MAX_BATCH_SIZE))

    @with_retry(retry_config, FIRESTORE_TRANSIENT_ERRORS)
    def _fetch_page() -> list:
        return list(collection_ref.limit(batch_size).stream(timeout=timeout))

    @with_retry(retry_config, FIRESTORE_TRANSIENT_ERRORS)
    def _delete(docs: list) -> None:
        batch = client.batch()
        for doc in docs:
            batch.delete(doc.reference)
        batch.commit(timeout=timeout)

    deleted = 0
    while True:
        docs = _fetch_page()
        if not docs:
            return deleted

        if recursive:
            for doc in docs:
                for sub_collection in doc.reference.collections():
                    delete_collection(
                        client,
                        sub_collection,
                        batch_size=batch_size,
                        recursive=True,
                        timeout=timeout,
                        retry_config=retry_config,
                    )

        _delete(docs)
        deleted += len(docs)
        logger.info(f"Deleted {len(docs)} documents ({deleted} so far)")
