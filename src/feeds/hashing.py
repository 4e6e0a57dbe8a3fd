"""Hashing utilities."""

import hashlib


def hash_id(value: str) -> str:
    """Generate a stable document ID (hex MD5) from a feed link or episode GUID."""
    return hashlib.md5(value.encode("utf-8")).hexdigest()
