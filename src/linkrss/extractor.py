"""Turns a URL into an item by extracting the HTML document title."""

from datetime import datetime
from html import unescape
from typing import Callable

from linkrss.errors import ParseError
from linkrss.fetch import Fetcher
from linkrss.models import PLACEHOLDER_DESCRIPTION, Item

HTML_OPEN = "<html"
HEAD_OPEN = "<head"
TITLE_OPEN = "<title>"
TITLE_CLOSE = "</title>"

PUB_DATE_FORMAT = "%d %b %y %H:%M %z"


def format_pub_date(dt: datetime) -> str:
    """Format a timezone-aware datetime like '02 Jan 06 15:04 -0700'."""
    return dt.strftime(PUB_DATE_FORMAT)


def scan_title(text: str) -> str | None:
    """Return the raw text of the page title, or None if there is none.

    Same result as the greedy pattern
    ``<html(?s:.)*<head(?s:.)*<title>(.*)</title>`` but in linear time:

    - only the first ``<html`` and the first ``<head`` after it count;
    - the title is the LAST ``<title>`` after that ``<head`` whose line
      still contains a ``</title>``, so a later ``<title>`` (an inline SVG
      icon, a second head section) wins over the real one;
    - the text runs to the last ``</title>`` on that same line.

    Tags are matched case-sensitively; ``<HTML>`` pages have no title.
    """
    html = text.find(HTML_OPEN)
    if html == -1:
        return None
    head = text.find(HEAD_OPEN, html + len(HTML_OPEN))
    if head == -1:
        return None
    lower = head + len(HEAD_OPEN)

    # Walk <title> tags backwards. Each step only scans text the previous
    # step did not, plus a tag-length overlap.
    end = len(text)
    line_end = -1
    searched_from = -1
    while True:
        start = text.rfind(TITLE_OPEN, lower, end)
        if start == -1:
            return None
        content = start + len(TITLE_OPEN)

        if line_end == -1:
            line_end = text.find("\n", content)
            if line_end == -1:
                line_end = len(text)
        else:
            newline = text.find("\n", content, searched_from)
            if newline != -1:
                line_end = newline

        limit = line_end
        if searched_from != -1:
            # Closing tags starting at or after searched_from were ruled out.
            limit = min(line_end, searched_from + len(TITLE_CLOSE) - 1)
        close = text.rfind(TITLE_CLOSE, content, limit)
        if close != -1:
            return text[content:close]

        searched_from = content
        end = start + len(TITLE_OPEN) - 1


def _local_now() -> datetime:
    return datetime.now().astimezone()


class TitleExtractor:
    """Builds items from page titles.

    The fetcher and title scanner are supplied by the caller so that a
    single instance of each is shared across all channels.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        scanner: Callable[[str], str | None] = scan_title,
        clock: Callable[[], datetime] = _local_now,
    ):
        self.fetcher = fetcher
        self.scanner = scanner
        self.clock = clock

    def extract(self, url: str) -> Item:
        """Fetch a page and build an item from its title.

        Args:
            url: The page URL. Becomes the item link.

        Returns:
            Item stamped with the current time.

        Raises:
            FetchError: If the page cannot be fetched.
            ParseError: If the page has no recognizable title.
        """
        body = self.fetcher.fetch(url)
        title = self.find_title(body.decode("utf-8", errors="replace"))

        date = self.clock()
        return Item(
            title=title,
            link=url,
            description=PLACEHOLDER_DESCRIPTION,
            date=format_pub_date(date),
            date_unix=int(date.timestamp()),
        )

    def find_title(self, text: str) -> str:
        """Return the unescaped page title as picked by the scanner."""
        raw = self.scanner(text)
        if raw is None:
            raise ParseError("No html title found")
        return unescape(raw)
