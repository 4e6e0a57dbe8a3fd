"""
Podcast thumbnail generation.

Fetches a podcast's artwork, shrinks it so neither edge exceeds the target size
(aspect ratio kept, never upscaled) with nearest-neighbour resampling, and
re-encodes it as PNG. Thumbnails are small and decorative, so speed wins over
resampling quality.
"""

import io
import logging
from dataclasses import dataclass
from typing import Optional

import requests
from PIL import Image, UnidentifiedImageError

from src.logger import log_function
from src.utils.errors import ThumbnailError
from src.utils.retry import (
    HTTP_TRANSIENT_ERRORS,
    RetryConfig,
    raise_for_transient_status,
    with_retry,
)

logger = logging.getLogger("thumbnails")

THUMBNAIL_FORMAT = "PNG"
THUMBNAIL_CONTENT_TYPE = "image/png"

# Modes the PNG encoder accepts as-is; anything else (CMYK, YCbCr...) goes to RGB(A)
_PNG_MODES = {"1", "L", "LA", "I", "I;16", "P", "RGB", "RGBA"}


@dataclass(frozen=True)
class Thumbnail:
    """
    An encoded thumbnail.

    Attributes:
        data: PNG bytes
        width: Width in pixels
        height: Height in pixels
        source_format: Format detected on the source image (e.g. "JPEG")
    """

    data: bytes
    width: int
    height: int
    source_format: str

    content_type: str = THUMBNAIL_CONTENT_TYPE


def make_thumbnail(image_bytes: bytes, edge: int) -> Thumbnail:
    """
    Resize encoded image bytes into a PNG thumbnail.

    Args:
        image_bytes: Source image (any format Pillow detects: PNG, JPEG, GIF...)
        edge: Maximum width and height in pixels

    Returns:
        Thumbnail: The PNG thumbnail

    Raises:
        ThumbnailError: If the image cannot be decoded or encoded
    """
    if edge <= 0:
        raise ThumbnailError(f"Thumbnail edge must be positive, got {edge}")

    try:
        with Image.open(io.BytesIO(image_bytes)) as source:
            source_format = source.format or ""
            source.load()
            image = source.copy()
    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        ValueError,
    ) as e:
        raise ThumbnailError(f"Could not decode image: {e}") from e

    buffer = io.BytesIO()
    try:
        image.thumbnail((edge, edge), Image.Resampling.NEAREST)
        if image.mode not in _PNG_MODES:
            image = image.convert("RGBA" if "A" in image.getbands() else "RGB")
        image.save(buffer, format=THUMBNAIL_FORMAT)
    except (OSError, ValueError) as e:
        raise ThumbnailError(f"Could not encode thumbnail as PNG: {e}") from e

    return Thumbnail(
        data=buffer.getvalue(),
        width=image.width,
        height=image.height,
        source_format=source_format,
    )


def fetch_image(
    url: str, timeout: float = 30, retry_config: Optional[RetryConfig] = None
) -> bytes:
    """
    Download raw image bytes.

    Raises:
        ThumbnailError: If the image cannot be downloaded
    """

    @with_retry(retry_config, HTTP_TRANSIENT_ERRORS)
    def _download() -> bytes:
        response = requests.get(url, timeout=timeout)
        raise_for_transient_status(response)
        return response.content

    try:
        return _download()
    except requests.RequestException as e:
        raise ThumbnailError(f"Could not fetch image {url}: {e}") from e


@log_function(logger_name="thumbnails", log_args=True)
def generate_thumbnail(
    source_url: str,
    edge: int,
    timeout: float = 30,
    retry_config: Optional[RetryConfig] = None,
) -> Thumbnail:
    """
    Fetch a podcast's artwork and produce its PNG thumbnail.

    Args:
        source_url: URL of the original artwork
        edge: Maximum width and height in pixels
        timeout: HTTP timeout in seconds
        retry_config: Retry policy for transient HTTP failures

    Returns:
        Thumbnail: The PNG thumbnail

    Raises:
        ThumbnailError: On any fetch, decode or encode failure
    """
    logger.info(f"Creating podcast thumbnail image from {source_url}")
    thumbnail = make_thumbnail(fetch_image(source_url, timeout, retry_config), edge)
    logger.info(
        f"Thumbnail {thumbnail.width}x{thumbnail.height} from {thumbnail.source_format} source"
    )
    return thumbnail
