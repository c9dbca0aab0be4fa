"""Config file path resolution across platforms.

Unix-like systems search, in order:

1. ``$XDG_CONFIG_HOME/{prefix}/{filename}`` (then each ``$XDG_CONFIG_DIRS`` entry)
2. ``$XDG_CONFIG_HOME/{prefix}.json`` (then each ``$XDG_CONFIG_DIRS`` entry)
3. ``$HOME/.config/{prefix}/{filename}``
4. ``$HOME/.{prefix}.json``

Windows only looks at ``%APPDATA%\\{prefix}\\{filename}``.
"""

from __future__ import annotations

import logging
import os
import pathlib
import stat
import sys

import regex

from cli_config.errors import FileSystemError

logger = logging.getLogger(__name__)

DEFAULT_XDG_CONFIG_DIRS = "/etc/xdg"

_INVALID_NAME = regex.compile(r"[/\\\p{Cc}]")


def _validate_name(kind: str, value: str) -> None:
    """Reject names that would produce an ambiguous or escaping path.

    Raises:
        ValueError: If the name is empty, a traversal segment, or contains
            separators or control characters.
    """
    if not value or not value.strip():
        raise ValueError(f"Invalid {kind}: cannot be empty")
    if value in (".", ".."):
        raise ValueError(f"Invalid {kind}: path traversal not allowed")
    if _INVALID_NAME.search(value):
        raise ValueError(
            f"Invalid {kind}: contains path separators or control characters"
        )


def is_config_file(path: pathlib.Path) -> bool:
    """Return True if *path* is an existing regular file.

    Missing paths and paths under a non-directory count as absent.

    Raises:
        FileSystemError: On any other OSError, e.g. a name that is too long.
    """
    try:
        return stat.S_ISREG(path.stat().st_mode)
    except (FileNotFoundError, NotADirectoryError):
        return False
    except OSError as exc:
        raise FileSystemError(exc, path) from exc


def _dedupe(paths: list[pathlib.Path]) -> list[pathlib.Path]:
    seen: set[pathlib.Path] = set()
    unique: list[pathlib.Path] = []
    for path in paths:
        if path in seen:
            continue
        seen.add(path)
        unique.append(path)
    return unique


class PathResolver:
    """Strategy for finding or placing a config file on one platform family."""

    def candidates(self, prefix: str, filename: str) -> list[pathlib.Path]:
        """Return the paths searched for the config file, in priority order."""
        _validate_name("prefix", prefix)
        _validate_name("filename", filename)
        return self._candidates(prefix, filename)

    def _candidates(self, prefix: str, filename: str) -> list[pathlib.Path]:
        raise NotImplementedError

    def locate(self, prefix: str, filename: str) -> pathlib.Path | None:
        """Return the first existing candidate, or None."""
        for path in self.candidates(prefix, filename):
            if is_config_file(path):
                logger.debug("Found config file: %s", path)
                return path
        logger.debug("No config file found for %s/%s", prefix, filename)
        return None

    def new_path(self, prefix: str, filename: str) -> pathlib.Path | None:
        raise NotImplementedError


class XdgResolver(PathResolver):
    """XDG base directory lookup with home-directory fallbacks."""

    @staticmethod
    def config_home() -> pathlib.Path:
        """``$XDG_CONFIG_HOME`` when set to an absolute path, else ``~/.config``."""
        value = os.environ.get("XDG_CONFIG_HOME")
        if value and os.path.isabs(value):
            return pathlib.Path(value)
        return pathlib.Path.home() / ".config"

    @staticmethod
    def config_dirs() -> list[pathlib.Path]:
        value = os.environ.get("XDG_CONFIG_DIRS") or DEFAULT_XDG_CONFIG_DIRS
        return [pathlib.Path(p) for p in value.split(":") if p and os.path.isabs(p)]

    def _search_roots(self) -> list[pathlib.Path]:
        return [self.config_home(), *self.config_dirs()]

    def _candidates(self, prefix: str, filename: str) -> list[pathlib.Path]:
        roots = self._search_roots()
        home = pathlib.Path.home()
        paths = [root / prefix / filename for root in roots]
        paths.extend(root / f"{prefix}.json" for root in roots)
        paths.append(home / ".config" / prefix / filename)
        paths.append(home / f".{prefix}.json")
        return _dedupe(paths)

    def new_path(self, prefix: str, filename: str) -> pathlib.Path | None:
        """Place ``filename`` under ``$XDG_CONFIG_HOME/{prefix}``, creating directories.

        Raises:
            FileSystemError: If the parent directories cannot be created.
        """
        _validate_name("prefix", prefix)
        _validate_name("filename", filename)
        path = self.config_home() / prefix / filename
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FileSystemError(exc, path.parent) from exc
        logger.debug("Placed new config path: %s", path)
        return path


class WindowsResolver(PathResolver):
    """Single-candidate lookup under the roaming application data directory."""

    @staticmethod
    def config_dir() -> pathlib.Path:
        base = os.environ.get("APPDATA") or str(pathlib.Path.home())
        return pathlib.Path(base)

    def _candidates(self, prefix: str, filename: str) -> list[pathlib.Path]:
        return [self.config_dir() / prefix / filename]

    def new_path(self, prefix: str, filename: str) -> pathlib.Path | None:
        # Only an already existing file is ever returned here.
        return self.locate(prefix, filename)


def resolver_for_platform(platform: str | None = None) -> PathResolver:
    """Pick the resolver strategy for *platform* (defaults to ``sys.platform``)."""
    platform = platform or sys.platform
    if platform.startswith("win"):
        return WindowsResolver()
    return XdgResolver()


def locate_config(
    prefix: str, filename: str, *, platform: str | None = None
) -> pathlib.Path | None:
    """Return the path of the first existing config file, or None."""
    return resolver_for_platform(platform).locate(prefix, filename)


def new_config_path(
    prefix: str, filename: str, *, platform: str | None = None
) -> pathlib.Path | None:
    """Return a path where a new config file can be written, or None."""
    return resolver_for_platform(platform).new_path(prefix, filename)
