"""
Media enclosure filter.

Decides whether a feed item is a playable audio episode. Feeds often list
video, transcript or chapter attachments next to the audio file; the first
enclosure is treated as the primary media and must be an http(s) URL to an
``.mp3`` or ``.m4a`` file.
"""

import re
from typing import Optional
from urllib.parse import urlparse

from src.utils.errors import EnclosureLengthError
from .models import Enclosure, RawEnclosure

SUPPORTED_AUDIO_EXTENSIONS = (".mp3", ".m4a")

_LENGTH_PATTERN = re.compile(r"^[0-9]+$")

# Firestore integers are signed 64-bit
MAX_LENGTH = 2**63 - 1


def parse_length(raw: RawEnclosure) -> int:
    """
    Parse the byte length of an enclosure.

    Args:
        raw: Enclosure as found in the feed

    Returns:
        int: Length in bytes, 0 when the feed leaves it empty

    Raises:
        EnclosureLengthError: If the length is not a non-negative 64-bit integer
    """
    length = (raw.length or "").strip()
    if not length:
        return 0
    if not _LENGTH_PATTERN.match(length) or int(length) > MAX_LENGTH:
        raise EnclosureLengthError(raw.url, raw.length)
    return int(length)


def is_playable(enclosure: Enclosure) -> bool:
    """Return True if the enclosure points at a supported audio file over http(s)."""
    if not enclosure.url.startswith("http"):
        return False
    try:
        path = urlparse(enclosure.url).path
    except ValueError:
        return False
    return path.endswith(SUPPORTED_AUDIO_EXTENSIONS)


def filter_enclosures(raw_enclosures: list[RawEnclosure]) -> Optional[list[Enclosure]]:
    """
    Validate the enclosures of a feed item.

    Every enclosure must carry a parseable length. Only the first enclosure
    decides playability; when it is playable the whole list is kept.

    Args:
        raw_enclosures: Enclosures of the item, in feed order

    Returns:
        list[Enclosure] | None: The validated enclosures, or None when the item
        is not a playable episode

    Raises:
        EnclosureLengthError: If any enclosure has a malformed length
    """
    enclosures = [
        Enclosure(url=raw.url or "", type=raw.type or "", length=parse_length(raw))
        for raw in raw_enclosures
    ]

    if not enclosures or not is_playable(enclosures[0]):
        return None

    return enclosures
