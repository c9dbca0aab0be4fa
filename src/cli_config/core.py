"""First-run initialization of an application's config file."""

from __future__ import annotations

import logging
import pathlib

from cli_config.errors import CustomError
from cli_config.fs import File
from cli_config.paths import resolver_for_platform

logger = logging.getLogger(__name__)


def init(
    config: File | type[File],
    prefix: str,
    filename: str,
    *,
    platform: str | None = None,
) -> pathlib.Path:
    """Return the path of the config file, creating it with *config* if missing.

    An existing file is returned as-is and never rewritten, however stale or
    malformed it is. Otherwise *config* is written once to a new path.

    Args:
        config: The default value, or a File subclass whose ``default()`` is used.
        prefix: Application name; the folder that holds the config file.
        filename: Name of the config file, e.g. ``config.json``.
        platform: Override for platform detection (defaults to ``sys.platform``).

    Raises:
        ValueError: If *prefix* or *filename* is empty or not a plain name.
        CustomError: If no location for a new file could be determined.
        FileSystemError: If directories or the file cannot be written.
        ConfigError: Any serialization error raised by ``config.write``.
    """
    resolver = resolver_for_platform(platform)
    existing = resolver.locate(prefix, filename)
    if existing is not None:
        return existing

    path = resolver.new_path(prefix, filename)
    if path is None:
        raise CustomError("Could not create file")

    if isinstance(config, type):
        config = config.default()
    config.write(path)
    logger.debug("Wrote default config to %s", path)
    return path
