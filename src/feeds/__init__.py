"""
Feed package: fetching, parsing and normalizing podcast RSS/Atom feeds.

Modules:
    parser: Download a feed and map feedparser output onto RawFeed
    normalizer: RawFeed -> FeedResult (Podcast + Episodes)
    enclosures: Playable-audio filter for episode enclosures
    hashing: Stable document IDs
    models: Raw and domain data models
"""

from .hashing import hash_id
from .models import (
    Author,
    Enclosure,
    Episode,
    FeedResult,
    ITunesEpisodeExt,
    Image,
    ItemFailure,
    Podcast,
    RawEnclosure,
    RawFeed,
    RawImage,
    RawItem,
    RawPerson,
)
from .enclosures import filter_enclosures, is_playable, parse_length
from .normalizer import (
    build_episode,
    build_podcast,
    is_absolute_url,
    normalize_feed,
    resolve_feed_author,
)
from .parser import fetch_feed, parse_feed_document

__all__ = [
    "hash_id",
    "Author",
    "Enclosure",
    "Episode",
    "FeedResult",
    "ITunesEpisodeExt",
    "Image",
    "ItemFailure",
    "Podcast",
    "RawEnclosure",
    "RawFeed",
    "RawImage",
    "RawItem",
    "RawPerson",
    "filter_enclosures",
    "is_playable",
    "parse_length",
    "build_episode",
    "build_podcast",
    "is_absolute_url",
    "normalize_feed",
    "resolve_feed_author",
    "fetch_feed",
    "parse_feed_document",
]
