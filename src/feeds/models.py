"""
Data models for podcast feeds.

Two families of models live here:

Raw models (RawFeed, RawItem, RawEnclosure, RawPerson, RawImage):
    The generic structure produced by the feed parser. Every field is a plain
    string (or None when the feed does not carry it), nothing is validated.

Domain models (Podcast, Episode, Enclosure, Author, Image, ITunesEpisodeExt):
    The normalized schema persisted to Firestore. ``to_document()`` returns
    the map written to the store; field names match the existing
    ``podcasts`` / ``episodes`` collections.

FeedResult bundles one Podcast with its Episodes for the upsert stage.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional


@dataclass
class RawPerson:
    name: str = ""
    email: str = ""


@dataclass
class RawImage:
    url: str = ""
    title: str = ""


@dataclass
class RawEnclosure:
    url: str = ""
    type: str = ""
    length: str = ""


@dataclass
class RawItem:
    """A feed item as produced by the parser."""

    guid: str = ""
    title: str = ""
    description: str = ""
    published: Optional[datetime] = None
    author: Optional[RawPerson] = None
    image: Optional[RawImage] = None
    enclosures: list[RawEnclosure] = field(default_factory=list)
    itunes_summary: str = ""
    itunes_explicit: str = ""
    itunes_duration: str = ""
    itunes_keywords: str = ""


@dataclass
class RawFeed:
    """A parsed feed (channel level) with its items."""

    title: str = ""
    description: str = ""
    link: str = ""
    feed_link: str = ""
    language: str = ""
    copyright: str = ""
    author: Optional[RawPerson] = None
    itunes_owner: Optional[RawPerson] = None
    itunes_explicit: str = ""
    image: Optional[RawImage] = None
    categories: list[str] = field(default_factory=list)
    items: list[RawItem] = field(default_factory=list)


@dataclass
class Author:
    name: str = ""
    email: str = ""

    def to_document(self) -> dict[str, Any]:
        return {"Name": self.name, "Email": self.email}


@dataclass
class Image:
    """
    Artwork reference.

    ``data`` is only set on a podcast thumbnail (the encoded PNG) and is left
    out of the stored document when empty.
    """

    title: str = ""
    url: str = ""
    data: bytes = b""

    def to_document(self) -> dict[str, Any]:
        document: dict[str, Any] = {"Title": self.title, "URL": self.url}
        if self.data:
            document["Data"] = self.data
        return document


@dataclass(frozen=True)
class Enclosure:
    """Media attachment of an episode. ``length`` is 0 when the feed omits it."""

    url: str
    type: str
    length: int

    def to_document(self) -> dict[str, Any]:
        return {"URL": self.url, "Type": self.type, "Length": self.length}


@dataclass(frozen=True)
class ITunesEpisodeExt:
    summary: str = ""
    explicit: str = ""
    duration: str = ""
    keywords: str = ""

    def to_document(self) -> dict[str, Any]:
        return {
            "Summary": self.summary,
            "Explicit": self.explicit,
            "Duration": self.duration,
            "Keywords": self.keywords,
        }


@dataclass
class Podcast:
    """
    A podcast (one per feed).

    Attributes:
        id: MD5 of feed_link, the dedup key of the ``podcasts`` collection
        feed_link: URL the feed is published at
        link: Website of the show
        image_original: Artwork as referenced by the feed
        image_thumbnail: Resized artwork, filled in by the upsert stage
        categories: Distinct category names in feed order
    """

    id: str
    title: str
    author: Author
    description: str
    link: str
    feed_link: str
    image_original: Image
    image_thumbnail: Image = field(default_factory=Image)
    language: str = ""
    explicit: str = ""
    categories: list[str] = field(default_factory=list)
    copyright: str = ""

    def to_document(self) -> dict[str, Any]:
        return {
            "Title": self.title,
            "Author": self.author.to_document(),
            "Description": self.description,
            "Link": self.link,
            "FeedLink": self.feed_link,
            "ID": self.id,
            "ImageOriginal": self.image_original.to_document(),
            "ImageThumbnail": self.image_thumbnail.to_document(),
            "Language": self.language,
            "Explicit": self.explicit,
            "Categories": list(self.categories),
            "Copyright": self.copyright,
        }


@dataclass(frozen=True)
class Episode:
    """
    A playable episode of a podcast.

    Attributes:
        podcast_id: ID of the parent Podcast
        id: MD5 of guid, the document ID under ``podcasts/{podcast_id}/episodes``
        enclosures: Validated enclosures; the first one is an mp3/m4a over http(s)
    """

    podcast_id: str
    id: str
    guid: str
    title: str
    published: Optional[datetime]
    author: Author
    description: str
    image: Image
    enclosures: tuple[Enclosure, ...]
    itunes_ext: ITunesEpisodeExt

    def to_document(self) -> dict[str, Any]:
        return {
            "PodcastID": self.podcast_id,
            "ID": self.id,
            "Title": self.title,
            "Published": self.published,
            "Author": self.author.to_document(),
            "Description": self.description,
            "Image": self.image.to_document(),
            "Enclosures": [enclosure.to_document() for enclosure in self.enclosures],
            "GUID": self.guid,
            "ITunesEpisodeExt": self.itunes_ext.to_document(),
        }


@dataclass(frozen=True)
class ItemFailure:
    """A feed item that could not be turned into an Episode."""

    guid: str
    title: str
    reason: str


@dataclass
class FeedResult:
    """
    Outcome of normalizing one feed.

    Attributes:
        podcast: The normalized podcast
        episodes: Playable episodes, in feed order
        rejected: Number of items dropped because they carry no playable audio
        failures: Items that failed to normalize (malformed fields)
    """

    podcast: Podcast
    episodes: list[Episode] = field(default_factory=list)
    rejected: int = 0
    failures: list[ItemFailure] = field(default_factory=list)
