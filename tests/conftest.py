"""Shared fixtures for the ingestion tests."""

import io
from unittest.mock import Mock

import pytest
import requests
from PIL import Image

from src.ingestion.config import IngestConfig
from tests.fakes import FakeFirestoreClient, FakeStorage

SAMPLE_FEED = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"
     xmlns:itunes="http://www.itunes.com/dtds/podcast-1.0.dtd"
     xmlns:atom="http://www.w3.org/2005/Atom">
  <channel>
    <title>Example Show</title>
    <link>https://x.test/show</link>
    <atom:link href="https://x.test/feed" rel="self" type="application/rss+xml"/>
    <description>A show about examples</description>
    <language>en-us</language>
    <copyright>2024 Example Media</copyright>
    <itunes:author>Example Media</itunes:author>
    <itunes:owner>
      <itunes:name>Jane Host</itunes:name>
      <itunes:email>jane@x.test</itunes:email>
    </itunes:owner>
    <image>
      <url>https://x.test/art.png</url>
      <title>Example Show</title>
      <link>https://x.test/show</link>
    </image>
    <category>Science</category>
    <item>
      <title>Episode 1</title>
      <guid isPermaLink="false">ep-1</guid>
      <pubDate>Mon, 01 Jan 2024 10:00:00 GMT</pubDate>
      <description>First episode</description>
      <enclosure url="https://cdn.test/ep1.mp3" length="1234000" type="audio/mpeg"/>
      <itunes:duration>00:42:00</itunes:duration>
    </item>
    <item>
      <title>Trailer video</title>
      <guid isPermaLink="false">ep-video</guid>
      <enclosure url="https://cdn.test/trailer.mp4" length="99" type="video/mp4"/>
    </item>
  </channel>
</rss>
"""


def make_image_bytes(width: int, height: int, fmt: str = "PNG", mode: str = "RGB") -> bytes:
    """Encode a solid-colour image of the given size."""
    buffer = io.BytesIO()
    Image.new(mode, (width, height), color=0).save(buffer, format=fmt)
    return buffer.getvalue()


def http_response(content: bytes, status: int = 200, url: str = "https://x.test") -> Mock:
    """Mock requests.Response carrying ``content``."""
    response = Mock(spec=requests.Response)
    response.status_code = status
    response.content = content
    response.url = url
    if status >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(
            f"HTTP {status}", response=response
        )
    else:
        response.raise_for_status.return_value = None
    return response


@pytest.fixture
def firestore_client() -> FakeFirestoreClient:
    return FakeFirestoreClient()


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage("thumbs")


@pytest.fixture
def config() -> IngestConfig:
    """Config with instant retries."""
    return IngestConfig(
        thumbnail_size=200,
        thumbnail_bucket="thumbs",
        request_timeout=5,
        max_retries=3,
        retry_min_wait=0,
        retry_max_wait=0,
        feeds=["https://x.test/feed"],
    )


@pytest.fixture
def sample_feed() -> bytes:
    return SAMPLE_FEED
