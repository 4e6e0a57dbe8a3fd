"""Custom exceptions for the podcast feed ingestion pipeline."""


class IngestError(Exception):
    """Base exception for all ingestion errors."""

    pass


class ConfigError(IngestError):
    """Missing or invalid configuration."""

    pass


class FeedError(IngestError):
    """Feed-level failure: the whole feed is skipped."""

    pass


class FeedFetchError(FeedError):
    """The feed document could not be downloaded."""

    pass


class FeedParseError(FeedError):
    """The downloaded document is not a usable RSS/Atom feed."""

    pass


class InvalidFeedURLError(FeedError):
    """Link, image URL or feed link of a feed is not an absolute URL."""

    def __init__(self, field: str, value: str):
        self.field = field
        self.value = value
        super().__init__(f"{field} is not a valid absolute URL: {value!r}")


class ItemError(IngestError):
    """Item-level failure: only that feed item is skipped."""

    pass


class EnclosureLengthError(ItemError):
    """An enclosure carries a length that is not a non-negative integer."""

    def __init__(self, url: str, length: str):
        self.url = url
        self.length = length
        super().__init__(f"Invalid enclosure length {length!r} for {url}")


class InvalidItemError(ItemError):
    """A feed item carries a malformed field (e.g. its image URL)."""

    pass


class ThumbnailError(IngestError):
    """Fetching, decoding or encoding a podcast thumbnail failed."""

    pass


class StorageError(IngestError):
    """Object storage upload failed."""

    pass


class UpsertError(IngestError):
    """Writing podcast or episode documents failed."""

    pass
