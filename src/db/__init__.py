"""
Database package for the podcast ingestion pipeline.

Firestore holds the ``podcasts`` collection, each podcast document carrying an
``episodes`` sub-collection.

Structure:
- firestore_client.py: client context manager, existence checks, batched
  writes and bulk collection deletion
- __init__.py: Package initialization and exports
"""

from .firestore_client import (
    get_firestore_client,
    podcasts_collection,
    episodes_collection,
    document_exists,
    commit_in_batches,
    delete_collection,
    PODCASTS_COLLECTION,
    EPISODES_COLLECTION,
    MAX_BATCH_SIZE,
)

__all__ = [
    "get_firestore_client",
    "podcasts_collection",
    "episodes_collection",
    "document_exists",
    "commit_in_batches",
    "delete_collection",
    "PODCASTS_COLLECTION",
    "EPISODES_COLLECTION",
    "MAX_BATCH_SIZE",
]
