"""YAML persistence for channel files.

Two serializers share one dumper configuration: ``dump_document`` writes a
whole channel, ``dump_item`` writes a one-element ``items`` list. Because
block sequences under a top-level key are emitted without extra indentation,
appending ``dump_item(x)`` to ``dump_document(doc)`` yields exactly
``dump_document(doc + [x])`` as long as ``doc`` already has items.
"""

import logging
import os

import yaml

from linkrss.errors import ConfigError, PersistenceError
from linkrss.models import ChannelDocument, Item

logger = logging.getLogger(__name__)

CHANNEL_EXTENSIONS = (".yaml", ".yml")

# Characters the YAML loader treats as line breaks. Plain or single-quoted
# scalars would fold them into spaces, so such strings are double-quoted and
# the emitter escapes them.
_LINE_BREAKS = ("\x85", "\u2028", "\u2029")


class _ChannelDumper(yaml.SafeDumper):
    """Safe dumper that keeps Unicode line separators intact."""


def _represent_str(dumper: yaml.SafeDumper, value: str) -> yaml.ScalarNode:
    style = '"' if any(ch in value for ch in _LINE_BREAKS) else None
    return dumper.represent_scalar("tag:yaml.org,2002:str", value, style=style)


_ChannelDumper.add_representer(str, _represent_str)

_DUMP_OPTIONS = {
    "Dumper": _ChannelDumper,
    "sort_keys": False,
    "default_flow_style": False,
    "allow_unicode": True,
    "width": float("inf"),
}


def dump_document(document: ChannelDocument) -> str:
    """Serialize a full channel document."""
    return yaml.dump(document.to_dict(), **_DUMP_OPTIONS)


def dump_item(item: Item) -> str:
    """Serialize a single item as a list fragment that continues ``items``."""
    return yaml.dump([item.to_dict()], **_DUMP_OPTIONS)


def channel_name(path: str) -> str:
    """Derive a channel identifier from its file name: 'news.yaml' -> 'news'."""
    return os.path.basename(path).split(".")[0]


class ChannelStore:
    """Reads and writes one channel file."""

    def __init__(self, path: str):
        self.path = path

    def load(self) -> ChannelDocument:
        """Read and parse the channel file.

        Raises:
            ConfigError: If the file is unreadable or does not match the schema.
        """
        try:
            with open(self.path, "r", encoding="utf-8") as handle:
                data = yaml.safe_load(handle)
        except OSError as e:
            raise ConfigError(f"Cannot read {self.path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Cannot parse {self.path}: {e}") from e

        try:
            return ChannelDocument.from_dict(data)
        except ConfigError as e:
            raise ConfigError(f"{self.path}: {e}") from e

    def rewrite(self, document: ChannelDocument) -> None:
        """Overwrite the file with the full document.

        Raises:
            PersistenceError: If the file cannot be written.
        """
        try:
            payload = dump_document(document)
            with open(self.path, "w", encoding="utf-8") as handle:
                handle.write(payload)
        except (OSError, yaml.YAMLError) as e:
            raise PersistenceError(f"Cannot write {self.path}: {e}") from e
        logger.debug("Rewrote %s with %d items", self.path, len(document.items))

    def append_one(self, item: Item) -> None:
        """Append a single item to the end of the file without rewriting it.

        The file must already end inside a non-empty ``items`` list, which
        ``rewrite`` guarantees once the first item has been stored.

        Raises:
            PersistenceError: If the file is missing or cannot be written.
        """
        try:
            payload = dump_item(item)
            with open(self.path, "r+", encoding="utf-8") as handle:
                handle.seek(0, os.SEEK_END)
                handle.write(payload)
        except (OSError, yaml.YAMLError) as e:
            raise PersistenceError(f"Cannot append to {self.path}: {e}") from e
