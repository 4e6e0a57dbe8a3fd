"""Shared error types and retry helpers."""

from .errors import (
    IngestError,
    ConfigError,
    FeedError,
    FeedFetchError,
    FeedParseError,
    InvalidFeedURLError,
    ItemError,
    EnclosureLengthError,
    InvalidItemError,
    ThumbnailError,
    StorageError,
    UpsertError,
)
from .retry import (
    RetryConfig,
    DEFAULT_RETRY_CONFIG,
    TEST_RETRY_CONFIG,
    HTTP_TRANSIENT_ERRORS,
    FIRESTORE_TRANSIENT_ERRORS,
    STORAGE_TRANSIENT_ERRORS,
    TransientHTTPError,
    raise_for_transient_status,
    with_retry,
)

__all__ = [
    "IngestError",
    "ConfigError",
    "FeedError",
    "FeedFetchError",
    "FeedParseError",
    "InvalidFeedURLError",
    "ItemError",
    "EnclosureLengthError",
    "InvalidItemError",
    "ThumbnailError",
    "StorageError",
    "UpsertError",
    "RetryConfig",
    "DEFAULT_RETRY_CONFIG",
    "TEST_RETRY_CONFIG",
    "HTTP_TRANSIENT_ERRORS",
    "FIRESTORE_TRANSIENT_ERRORS",
    "STORAGE_TRANSIENT_ERRORS",
    "TransientHTTPError",
    "raise_for_transient_status",
    "with_retry",
]
