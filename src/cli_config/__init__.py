"""Locate, create and (de)serialize a CLI application's config file."""

from cli_config.core import init
from cli_config.errors import (
    ConfigError,
    ConfigFileNotFound,
    CustomError,
    FileSystemError,
    GenericError,
    InvalidConfig,
    JSONError,
    ThemeNotFound,
    TOMLError,
    TomlWriteError,
    YAMLError,
)
from cli_config.fs import File, JSONFile, TOMLFile, YAMLFile
from cli_config.paths import locate_config, new_config_path, resolver_for_platform

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "ConfigFileNotFound",
    "CustomError",
    "File",
    "FileSystemError",
    "GenericError",
    "InvalidConfig",
    "JSONError",
    "JSONFile",
    "TOMLError",
    "TOMLFile",
    "ThemeNotFound",
    "TomlWriteError",
    "YAMLError",
    "YAMLFile",
    "init",
    "locate_config",
    "new_config_path",
    "resolver_for_platform",
]
