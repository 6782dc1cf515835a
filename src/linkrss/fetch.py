"""Outbound HTTP fetching, optionally tunneled through a SOCKS5 proxy."""

import logging

import httpx

from linkrss.errors import FetchError

logger = logging.getLogger(__name__)

TOR_PROXY_URL = "socks5://127.0.0.1:9050"


class Fetcher:
    """Retrieves raw page bodies.

    Built once at startup and shared by every channel. Non-success status
    codes are not treated as failures: the body is returned as-is.
    """

    def __init__(self, client: httpx.Client):
        self._client = client

    def fetch(self, url: str) -> bytes:
        """Fetch a URL and return the response body.

        Raises:
            FetchError: If the request cannot be sent or the body cannot be read.
        """
        try:
            response = self._client.get(url)
        except httpx.InvalidURL as e:
            raise FetchError(f"Invalid URL: {e}") from e
        except httpx.HTTPError as e:
            raise FetchError(f"Could not fetch {url}: {e}") from e

        if response.is_error:
            logger.warning("Fetch of %s returned HTTP %d", url, response.status_code)
        return response.content

    def close(self) -> None:
        self._client.close()


def build_fetcher(
    proxy_url: str | None = None,
    timeout: float | None = None,
) -> Fetcher:
    """Create the process-wide fetcher.

    Args:
        proxy_url: SOCKS5 (or HTTP) proxy to route requests through.
        timeout: Request timeout in seconds. None disables timeouts entirely,
            so a hanging server blocks the channel it is being added to.
    """
    client = httpx.Client(
        proxy=proxy_url,
        timeout=httpx.Timeout(timeout),
        follow_redirects=True,
    )
    if proxy_url:
        logger.info("Routing fetches through proxy %s", proxy_url)
    return Fetcher(client)
