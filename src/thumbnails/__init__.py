"""Thumbnail generation for podcast artwork."""

from .generator import (
    Thumbnail,
    make_thumbnail,
    fetch_image,
    generate_thumbnail,
    THUMBNAIL_CONTENT_TYPE,
)

__all__ = [
    "Thumbnail",
    "make_thumbnail",
    "fetch_image",
    "generate_thumbnail",
    "THUMBNAIL_CONTENT_TYPE",
]
