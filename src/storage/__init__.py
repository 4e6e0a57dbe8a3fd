"""
Storage module for podcast thumbnails.

Provides the abstract object store interface and its Google Cloud Storage and
local filesystem implementations.
"""

from .base import BaseStorage
from .cloud import CloudStorage, DEFAULT_ENDPOINT
from .local import LocalStorage

__all__ = [
    "BaseStorage",
    "CloudStorage",
    "LocalStorage",
    "DEFAULT_ENDPOINT",
]
