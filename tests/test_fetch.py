"""Tests for the outbound fetcher."""

import httpx
import pytest

from linkrss.errors import FetchError
from linkrss.fetch import Fetcher, build_fetcher


def test_returns_body_bytes():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, content=b"<html>"))
    fetcher = Fetcher(httpx.Client(transport=transport))

    assert fetcher.fetch("http://x.example") == b"<html>"


def test_transport_error_becomes_fetch_error():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    fetcher = Fetcher(httpx.Client(transport=httpx.MockTransport(handler)))

    with pytest.raises(FetchError, match="http://x.example"):
        fetcher.fetch("http://x.example")


def test_unsupported_scheme_becomes_fetch_error():
    fetcher = build_fetcher()
    try:
        with pytest.raises(FetchError):
            fetcher.fetch("ftp://x.example/file")
        with pytest.raises(FetchError):
            fetcher.fetch("")
    finally:
        fetcher.close()


def test_server_error_status_is_not_a_failure():
    transport = httpx.MockTransport(lambda request: httpx.Response(500, text="oops"))
    fetcher = Fetcher(httpx.Client(transport=transport))

    assert fetcher.fetch("http://x.example") == b"oops"
