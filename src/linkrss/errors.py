"""Exceptions raised by channel operations."""


class LinkRssError(Exception):
    """Base class for errors reported back to the user."""


class FetchError(LinkRssError):
    """Raised when a URL cannot be fetched."""


class ParseError(LinkRssError):
    """Raised when fetched content has no recognizable title."""


class DuplicateError(LinkRssError):
    """Raised when a URL is already present in a channel."""


class PersistenceError(LinkRssError):
    """Raised when a channel file cannot be written."""


class ConfigError(LinkRssError):
    """Raised when a channel file cannot be read or does not match the schema."""
