"""The channel aggregate: items, dedup index, cached feed and lock."""

import logging
import threading

from linkrss.errors import DuplicateError, PersistenceError
from linkrss.extractor import TitleExtractor
from linkrss.models import ChannelDocument, Item
from linkrss.render import render_channel
from linkrss.store import ChannelStore, channel_name

logger = logging.getLogger(__name__)


class Channel:
    """A named, file-backed feed that grows one URL at a time.

    Every public operation, reads included, holds the channel's lock for
    its whole duration. Adding by URL therefore keeps the lock across the
    network fetch, and a slow page blocks this channel (and only this one)
    until the fetch returns.
    """

    def __init__(
        self,
        name: str,
        document: ChannelDocument,
        store: ChannelStore,
        extractor: TitleExtractor,
    ):
        self.name = name
        self._document = document
        self._store = store
        self._extractor = extractor
        self._links = {item.link for item in document.items}
        self._xml = render_channel(document)
        self._lock = threading.Lock()

    @classmethod
    def load(cls, path: str, extractor: TitleExtractor) -> "Channel":
        """Load a channel from its YAML file.

        Raises:
            ConfigError: If the file is unreadable or malformed.
        """
        store = ChannelStore(path)
        document = store.load()
        return cls(channel_name(path), document, store, extractor)

    @property
    def title(self) -> str:
        return self._document.title

    @property
    def description(self) -> str:
        return self._document.description

    @property
    def link(self) -> str:
        return self._document.link

    @property
    def path(self) -> str:
        return self._store.path

    def items(self) -> list[Item]:
        """Return a copy of the items, oldest first."""
        with self._lock:
            return list(self._document.items)

    def item_count(self) -> int:
        with self._lock:
            return len(self._document.items)

    def knows(self, url: str) -> bool:
        """Check the dedup index for a URL."""
        with self._lock:
            return url in self._links

    def serialized_document(self) -> str:
        """Return the cached RSS document without re-rendering it."""
        with self._lock:
            return self._xml

    def add_item(self, item: Item) -> None:
        """Append an item and persist it.

        Raises:
            PersistenceError: If the file cannot be written. The item stays
                in the in-memory list, but the cached feed and the dedup
                index are left as they were.
        """
        with self._lock:
            self._add_item(item)

    def add_item_by_url(self, url: str) -> Item:
        """Fetch a page, extract its title and add it to the channel.

        Returns:
            The newly added item.

        Raises:
            DuplicateError: If the URL is already in the channel.
            FetchError: If the page cannot be fetched.
            ParseError: If the page has no title.
            PersistenceError: If the channel file cannot be written.
        """
        with self._lock:
            if url in self._links:
                raise DuplicateError("URL already exists in the channel")
            item = self._extractor.extract(url)
            self._add_item(item)
            return item

    def store(self) -> None:
        """Rewrite the backing file from the in-memory state."""
        with self._lock:
            self._store.rewrite(self._document)

    def _add_item(self, item: Item) -> None:
        items = self._document.items
        items.append(item)
        try:
            if len(items) == 1:
                self._store.rewrite(self._document)
            else:
                self._store.append_one(item)
        except PersistenceError:
            logger.error(
                "Channel '%s': failed to persist %s, cache not updated",
                self.name,
                item.link,
            )
            raise

        self._xml = render_channel(self._document)
        self._links.add(item.link)
        logger.info("Channel '%s': added '%s' (%s)", self.name, item.title, item.link)
