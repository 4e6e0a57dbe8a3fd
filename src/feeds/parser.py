"""
RSS/Atom feed fetching and parsing.

Downloads a feed with requests and hands the bytes to feedparser, then maps
feedparser's dictionaries onto the RawFeed/RawItem structure consumed by the
normalizer. No validation happens here.
"""

import calendar
import logging
from datetime import datetime, timezone
from typing import Any, Optional

import feedparser
import requests

from src.logger import log_function
from src.utils.errors import FeedFetchError, FeedParseError
from src.utils.retry import (
    HTTP_TRANSIENT_ERRORS,
    RetryConfig,
    raise_for_transient_status,
    with_retry,
)
from .models import RawEnclosure, RawFeed, RawImage, RawItem, RawPerson

logger = logging.getLogger("feeds")

USER_AGENT = "podcast-feed-ingest/1.0 (RSS reader)"


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _person(detail: Optional[dict], fallback_name: Any = None) -> Optional[RawPerson]:
    """Build a RawPerson from a feedparser *_detail dict."""
    if detail:
        return RawPerson(name=_text(detail.get("name")), email=_text(detail.get("email")))
    if _text(fallback_name):
        return RawPerson(name=_text(fallback_name))
    return None


def _image(data: Any) -> Optional[RawImage]:
    if not data:
        return None
    url = _text(data.get("href")) or _text(data.get("url"))
    return RawImage(url=url, title=_text(data.get("title")))


def _explicit(value: Any) -> str:
    # feedparser turns itunes:explicit into a bool (or None when absent)
    if value is True:
        return "yes"
    if value is False:
        return "no"
    return _text(value)


def _published(entry: Any) -> Optional[datetime]:
    parsed = entry.get("published_parsed") or entry.get("updated_parsed")
    if not parsed:
        return None
    return datetime.fromtimestamp(calendar.timegm(parsed), tz=timezone.utc)


def _self_link(feed: Any) -> str:
    for link in feed.get("links", []):
        if link.get("rel") == "self" and link.get("href"):
            return _text(link["href"])
    return ""


def _categories(tags: list) -> list[str]:
    return [_text(tag.get("term")) for tag in tags if _text(tag.get("term"))]


def _parse_item(entry: Any) -> RawItem:
    enclosures = [
        RawEnclosure(
            url=_text(enclosure.get("href")),
            type=_text(enclosure.get("type")),
            length=str(enclosure.get("length") or ""),
        )
        for enclosure in entry.get("enclosures", [])
    ]

    guid = _text(entry.get("id")) or _text(entry.get("link"))
    if not guid and enclosures:
        guid = enclosures[0].url

    summary = _text(entry.get("summary"))
    return RawItem(
        guid=guid,
        title=_text(entry.get("title")),
        description=summary,
        published=_published(entry),
        author=_person(entry.get("author_detail"), entry.get("author")),
        image=_image(entry.get("image")),
        enclosures=enclosures,
        itunes_summary=_text(entry.get("itunes_summary")) or summary,
        itunes_explicit=_explicit(entry.get("itunes_explicit")),
        itunes_duration=_text(entry.get("itunes_duration")),
        itunes_keywords=_text(entry.get("itunes_keywords")),
    )


def parse_feed_document(content: bytes) -> RawFeed:
    """
    Parse the bytes of an RSS/Atom document.

    Args:
        content: Raw feed document

    Returns:
        RawFeed: Generic feed structure

    Raises:
        FeedParseError: If the document holds neither channel data nor items
    """
    parsed = feedparser.parse(content)
    channel = parsed.get("feed", {})
    entries = parsed.get("entries", [])

    if not channel and not entries:
        reason = parsed.get("bozo_exception", "no channel or items found")
        raise FeedParseError(f"Not a feed document: {reason}")

    return RawFeed(
        title=_text(channel.get("title")),
        description=_text(channel.get("subtitle")) or _text(channel.get("summary")),
        link=_text(channel.get("link")),
        feed_link=_self_link(channel),
        language=_text(channel.get("language")),
        copyright=_text(channel.get("rights")),
        author=_person(channel.get("author_detail"), channel.get("author")),
        itunes_owner=_person(channel.get("publisher_detail")),
        itunes_explicit=_explicit(channel.get("itunes_explicit")),
        image=_image(channel.get("image")),
        categories=_categories(channel.get("tags", [])),
        items=[_parse_item(entry) for entry in entries],
    )


@log_function(logger_name="feeds", log_args=True)
def fetch_feed(
    feed_url: str,
    timeout: float = 30,
    retry_config: Optional[RetryConfig] = None,
) -> RawFeed:
    """
    Download and parse a feed.

    Args:
        feed_url: Feed URL
        timeout: HTTP timeout in seconds
        retry_config: Retry policy for transient HTTP failures

    Returns:
        RawFeed: Generic feed structure

    Raises:
        FeedFetchError: If the feed cannot be downloaded
        FeedParseError: If the document is not a feed
    """

    @with_retry(retry_config, HTTP_TRANSIENT_ERRORS)
    def _download() -> bytes:
        response = requests.get(
            feed_url, timeout=timeout, headers={"User-Agent": USER_AGENT}
        )
        raise_for_transient_status(response)
        return response.content

    logger.info(f"Fetching feed from {feed_url}...")
    try:
        content = _download()
    except requests.RequestException as e:
        raise FeedFetchError(f"Error fetching feed {feed_url}: {e}") from e

    return parse_feed_document(content)
