"""
Feed normalization.

Turns a RawFeed (generic parser output) into a FeedResult: one Podcast plus the
playable Episodes of the feed. Feed-level problems (missing or malformed link,
image or feed link) make the whole feed unusable and raise. Item-level problems
are collected on the FeedResult so one broken item does not cost the rest of
the feed.
"""

import logging
from typing import Optional
from urllib.parse import urlparse

from src.utils.errors import InvalidFeedURLError, InvalidItemError, ItemError
from .enclosures import filter_enclosures
from .hashing import hash_id
from .models import (
    Author,
    Episode,
    FeedResult,
    ITunesEpisodeExt,
    Image,
    ItemFailure,
    Podcast,
    RawFeed,
    RawImage,
    RawItem,
    RawPerson,
)

logger = logging.getLogger("feeds")


def is_absolute_url(value: Optional[str]) -> bool:
    """Return True for a syntactically valid absolute URL (scheme and host)."""
    if not value:
        return False
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.netloc)


def resolve_feed_author(feed: RawFeed) -> Author:
    """
    Resolve the podcast author.

    Falls back to the iTunes owner when the feed has no author, and backfills
    a blank author email from the owner.
    """
    owner = feed.itunes_owner or RawPerson()
    if feed.author is None:
        return Author(name=owner.name or "", email=owner.email or "")

    email = feed.author.email or ""
    if not email:
        email = owner.email or ""
    return Author(name=feed.author.name or "", email=email)


def build_podcast(feed: RawFeed, fetch_url: str) -> Podcast:
    """
    Build the Podcast of a feed.

    Args:
        feed: Parsed feed
        fetch_url: URL the feed was downloaded from, used when the feed does
            not advertise its own feed link

    Returns:
        Podcast: Podcast with an empty thumbnail

    Raises:
        InvalidFeedURLError: If link, image URL or feed link is not an absolute URL
    """
    feed_link = feed.feed_link or fetch_url
    image = feed.image or RawImage()

    for name, value in (
        ("Link", feed.link),
        ("Image.URL", image.url),
        ("FeedLink", feed_link),
    ):
        if not is_absolute_url(value):
            raise InvalidFeedURLError(name, value)

    categories = list(dict.fromkeys(c for c in feed.categories if c))

    return Podcast(
        id=hash_id(feed_link),
        title=feed.title,
        author=resolve_feed_author(feed),
        description=feed.description,
        link=feed.link,
        feed_link=feed_link,
        image_original=Image(title=image.title, url=image.url),
        language=feed.language,
        explicit=feed.itunes_explicit,
        categories=categories,
        copyright=feed.copyright,
    )


def build_episode(item: RawItem, podcast: Podcast) -> Optional[Episode]:
    """
    Build an Episode from a feed item.

    The item author falls back to the podcast author when missing or without
    email; the item image falls back to the podcast artwork when missing.

    Args:
        item: Feed item
        podcast: Podcast the item belongs to

    Returns:
        Episode | None: The episode, or None when the item has no playable audio

    Raises:
        EnclosureLengthError: If an enclosure length is malformed
        InvalidItemError: If the item image URL is malformed
    """
    if item.author is None or not item.author.email:
        author = Author(name=podcast.author.name, email=podcast.author.email)
    else:
        author = Author(name=item.author.name or "", email=item.author.email)

    if item.image is None or not item.image.url:
        image = Image(title=podcast.image_original.title, url=podcast.image_original.url)
    elif not is_absolute_url(item.image.url):
        raise InvalidItemError(f"Invalid item image URL: {item.image.url!r}")
    else:
        image = Image(title=item.image.title or "", url=item.image.url)

    enclosures = filter_enclosures(item.enclosures)
    if enclosures is None:
        return None

    return Episode(
        podcast_id=podcast.id,
        id=hash_id(item.guid),
        guid=item.guid,
        title=item.title,
        published=item.published,
        author=author,
        description=item.description,
        image=image,
        enclosures=tuple(enclosures),
        itunes_ext=ITunesEpisodeExt(
            summary=item.itunes_summary,
            explicit=item.itunes_explicit,
            duration=item.itunes_duration,
            keywords=item.itunes_keywords,
        ),
    )


def normalize_feed(feed: RawFeed, fetch_url: str) -> FeedResult:
    """
    Normalize a parsed feed into a FeedResult.

    Args:
        feed: Parsed feed
        fetch_url: URL the feed was downloaded from

    Returns:
        FeedResult: Podcast, playable episodes, rejected count and item failures

    Raises:
        InvalidFeedURLError: If the feed cannot identify its podcast
    """
    result = FeedResult(podcast=build_podcast(feed, fetch_url))

    for item in feed.items:
        try:
            episode = build_episode(item, result.podcast)
        except ItemError as e:
            logger.warning(f"Skipping item {item.guid or item.title!r}: {e}")
            result.failures.append(
                ItemFailure(guid=item.guid, title=item.title, reason=str(e))
            )
            continue

        if episode is None:
            result.rejected += 1
            continue
        result.episodes.append(episode)

    logger.info(
        f"Normalized {result.podcast.title!r}: {len(result.episodes)} episodes, "
        f"{result.rejected} rejected, {len(result.failures)} failed"
    )
    return result
