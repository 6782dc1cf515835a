"""Data models for linkrss."""

from dataclasses import dataclass, field

from linkrss.errors import ConfigError

PLACEHOLDER_DESCRIPTION = "None"


@dataclass(frozen=True)
class Item:
    """A single page added to a channel."""

    title: str
    link: str
    description: str = PLACEHOLDER_DESCRIPTION
    date: str = ""
    date_unix: int = 0

    def to_dict(self) -> dict:
        """Return the item as a mapping in persisted field order."""
        return {
            "title": self.title,
            "link": self.link,
            "description": self.description,
            "date": self.date,
            "date_unix": self.date_unix,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Item":
        """Build an item from a persisted mapping.

        Raises:
            ConfigError: If the mapping does not match the item schema.
        """
        if not isinstance(data, dict):
            raise ConfigError(f"Item must be a mapping, got {type(data).__name__}")
        date_unix = data.get("date_unix", 0)
        if isinstance(date_unix, bool) or not isinstance(date_unix, int):
            raise ConfigError(f"Item date_unix must be an integer, got {date_unix!r}")
        return cls(
            title=_text(data, "title"),
            link=_text(data, "link"),
            description=_text(data, "description"),
            date=_text(data, "date"),
            date_unix=date_unix,
        )


@dataclass
class ChannelDocument:
    """Persisted state of a channel: feed metadata plus its items, oldest first."""

    title: str = ""
    description: str = ""
    link: str = ""
    items: list[Item] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "description": self.description,
            "link": self.link,
            "items": [item.to_dict() for item in self.items],
        }

    @classmethod
    def from_dict(cls, data) -> "ChannelDocument":
        """Build a document from the parsed YAML structure.

        Missing fields fall back to empty values; wrong types are rejected.
        """
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"Channel file must be a mapping, got {type(data).__name__}")

        raw_items = data.get("items") or []
        if not isinstance(raw_items, list):
            raise ConfigError("Channel items must be a list")

        return cls(
            title=_text(data, "title"),
            description=_text(data, "description"),
            link=_text(data, "link"),
            items=[Item.from_dict(entry) for entry in raw_items],
        )


def _text(data: dict, key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        raise ConfigError(f"Field '{key}' must be a scalar")
    return str(value)
