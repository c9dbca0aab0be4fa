"""Exceptions raised while resolving, loading or writing config files.

Every error derives from :class:`ConfigError` so callers can catch the whole
family at once. Errors that wrap a library exception keep it as ``__cause__``.
"""

from __future__ import annotations


class ConfigError(Exception):
    """Base class for all config-file errors."""


class ConfigFileNotFound(ConfigError):
    def __init__(self, message: str = "cannot find file") -> None:
        super().__init__(message)


class InvalidConfig(ConfigError):
    """Loaded content does not have the expected structure."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"invalid config: {reason}")
        self.reason = reason


class JSONError(ConfigError):
    def __init__(self, detail: object) -> None:
        super().__init__(f"invalid json: {detail}")


class YAMLError(ConfigError):
    def __init__(self, detail: object) -> None:
        super().__init__(f"invalid yaml: {detail}")


class TOMLError(ConfigError):
    def __init__(self, detail: object) -> None:
        super().__init__(f"invalid toml: {detail}")


class TomlWriteError(ConfigError):
    def __init__(self, detail: object) -> None:
        super().__init__(f"cannot serialize: {detail}")


class FileSystemError(ConfigError):
    """An I/O failure while checking, creating or writing a path."""

    def __init__(self, detail: object, path: object = None) -> None:
        message = f"filesystem error: {detail}"
        if path is not None:
            message = f"filesystem error at {path}: {detail}"
        super().__init__(message)
        self.path = path


class ThemeNotFound(ConfigError):
    def __init__(self) -> None:
        super().__init__("the theme you are looking for does not exist")


class CustomError(ConfigError):
    """Free-form error message supplied by the caller or the resolver."""


class GenericError(ConfigError):
    """Wraps an arbitrary underlying exception."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"something went wrong: {cause}")
        self.cause = cause
