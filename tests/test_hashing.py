"""Tests for document ID hashing."""

import hashlib

from src.feeds import hash_id
from src.ingestion.feeds import DEFAULT_FEEDS


def test_hash_is_md5_hex():
    assert hash_id("https://x.test/feed") == hashlib.md5(b"https://x.test/feed").hexdigest()
    assert len(hash_id("anything")) == 32


def test_hash_is_deterministic():
    assert hash_id("ep-1") == hash_id("ep-1")


def test_no_collisions_across_feed_list():
    ids = {hash_id(url) for url in DEFAULT_FEEDS}
    assert len(ids) == len(set(DEFAULT_FEEDS))
