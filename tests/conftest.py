"""Shared test fixtures for linkrss tests."""

from datetime import datetime, timezone

import httpx
import pytest

from linkrss.channel import Channel
from linkrss.extractor import TitleExtractor, scan_title
from linkrss.fetch import Fetcher


FIXED_NOW = datetime(2026, 2, 13, 10, 0, 0, tzinfo=timezone.utc)

HELLO_URL = "http://a.example"
WORLD_URL = "http://b.example/world"
NO_TITLE_URL = "http://c.example/plain"
DOWN_URL = "http://down.example"

HELLO_HTML = """<!DOCTYPE html>
<html><head><title>Hello</title></head>
<body><p>First page</p></body>
</html>"""

WORLD_HTML = """<html lang="en">
  <head>
    <meta charset="utf-8">
    <title>World</title>
  </head>
  <body>Second page</body>
</html>"""

NO_TITLE_HTML = """<html>
  <body>No head here</body>
</html>"""

EMPTY_CHANNEL_YAML = """title: News
description: Pages worth reading
link: https://example.com/news
items: []
"""


class FakeWeb:
    """Serves canned pages through an httpx mock transport."""

    def __init__(self, pages: dict[str, str]):
        self.pages = dict(pages)
        self.requests: list[str] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requests.append(url)
        for known, body in self.pages.items():
            if httpx.URL(known) == request.url:
                return httpx.Response(200, text=body)
        raise httpx.ConnectError("connection refused", request=request)

    def fetcher(self) -> Fetcher:
        return Fetcher(httpx.Client(transport=httpx.MockTransport(self.handler)))


@pytest.fixture
def fake_web():
    """Canned pages for the sample URLs; anything else fails to connect."""
    return FakeWeb(
        {
            HELLO_URL: HELLO_HTML,
            WORLD_URL: WORLD_HTML,
            NO_TITLE_URL: NO_TITLE_HTML,
        }
    )


@pytest.fixture
def extractor(fake_web):
    """Title extractor wired to the fake web with a frozen clock."""
    return TitleExtractor(fake_web.fetcher(), scan_title, clock=lambda: FIXED_NOW)


@pytest.fixture
def channel_path(tmp_path):
    """Path of an empty channel file named news.yaml."""
    path = tmp_path / "news.yaml"
    path.write_text(EMPTY_CHANNEL_YAML, encoding="utf-8")
    return path


@pytest.fixture
def channel(channel_path, extractor):
    """The empty 'news' channel loaded from disk."""
    return Channel.load(str(channel_path), extractor)


@pytest.fixture
def fixed_now():
    """The instant the test extractor stamps on every item."""
    return FIXED_NOW


@pytest.fixture
def hello_url():
    """Page titled 'Hello'."""
    return HELLO_URL


@pytest.fixture
def world_url():
    """Page titled 'World'."""
    return WORLD_URL


@pytest.fixture
def no_title_url():
    """Page without a head section."""
    return NO_TITLE_URL


@pytest.fixture
def down_url():
    """URL whose host refuses connections."""
    return DOWN_URL


@pytest.fixture
def empty_channel_yaml():
    """Contents of a freshly created channel file."""
    return EMPTY_CHANNEL_YAML
