"""Startup scan of the data directory."""

import logging
import os

from linkrss.channel import Channel
from linkrss.errors import ConfigError
from linkrss.extractor import TitleExtractor
from linkrss.store import CHANNEL_EXTENSIONS, channel_name

logger = logging.getLogger(__name__)


def load_channels(data_dir: str, extractor: TitleExtractor) -> dict[str, Channel]:
    """Load one channel per YAML file in ``data_dir``.

    All-or-nothing: the first file that fails to load aborts the scan.

    Raises:
        ConfigError: If the directory cannot be listed, a file is malformed,
            or two files map to the same channel name.
    """
    try:
        entries = sorted(os.scandir(data_dir), key=lambda entry: entry.name)
    except OSError as e:
        raise ConfigError(f"Cannot read data directory {data_dir}: {e}") from e

    channels: dict[str, Channel] = {}
    for entry in entries:
        ext = os.path.splitext(entry.name)[1]
        if ext not in CHANNEL_EXTENSIONS or entry.is_dir():
            continue

        name = channel_name(entry.name)
        if name in channels:
            raise ConfigError(
                f"{entry.name}: channel '{name}' already loaded from {channels[name].path}"
            )
        channels[name] = Channel.load(entry.path, extractor)
        logger.info("Loaded config file %s with name: %s", entry.name, name)

    return channels
