"""File load/write contract and its JSON, YAML and TOML adapters.

A config type picks exactly one format by inheriting one of the mixins::

    @dataclasses.dataclass
    class MyConfig(JSONFile):
        is_first_run: bool = True

    MyConfig().write(path)
    loaded = MyConfig.load(path)

``write`` always replaces the whole file; ``load`` reads the whole file.
"""

from __future__ import annotations

import dataclasses
import json
import pathlib
import tomllib
import types
import typing
from typing import Any, TypeVar

import tomli_w
import yaml

from cli_config.errors import (
    FileSystemError,
    InvalidConfig,
    JSONError,
    TOMLError,
    TomlWriteError,
    YAMLError,
)

T = TypeVar("T", bound="File")

FORMAT_SUFFIXES = {
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".toml": "toml",
}


def format_for_path(path: pathlib.Path) -> str | None:
    """Infer the serialization format from a file suffix."""
    return FORMAT_SUFFIXES.get(pathlib.Path(path).suffix.lower())


def _read_bytes(path: pathlib.Path) -> bytes:
    try:
        return pathlib.Path(path).read_bytes()
    except OSError as exc:
        raise FileSystemError(exc, path) from exc


def _write_text(path: pathlib.Path, text: str) -> None:
    try:
        pathlib.Path(path).write_text(text, encoding="utf-8")
    except OSError as exc:
        raise FileSystemError(exc, path) from exc


def _strip_none(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _strip_none(v) for k, v in value.items() if v is not None}
    if isinstance(value, (list, tuple)):
        if any(v is None for v in value):
            raise TomlWriteError("arrays cannot contain null values")
        items = [_strip_none(v) for v in value]
        return tuple(items) if isinstance(value, tuple) else items
    return value


def _dataclass_hint(hint: Any) -> type | None:
    """Return the dataclass named by a field hint, including ``X | None``."""
    if isinstance(hint, type) and dataclasses.is_dataclass(hint):
        return hint
    if typing.get_origin(hint) in (typing.Union, types.UnionType):
        found = [
            arg for arg in typing.get_args(hint)
            if isinstance(arg, type) and dataclasses.is_dataclass(arg)
        ]
        if len(found) == 1:
            return found[0]
    return None


def _dataclass_kwargs(cls: type, data: dict[str, Any]) -> dict[str, Any]:
    """Keep known init fields and rebuild nested dataclass sections."""
    hints = typing.get_type_hints(cls)
    kwargs: dict[str, Any] = {}
    for field in dataclasses.fields(cls):
        if not field.init or field.name not in data:
            continue
        value = data[field.name]
        nested = _dataclass_hint(hints.get(field.name))
        if nested is not None and isinstance(value, dict):
            value = _build_dataclass(nested, value)
        kwargs[field.name] = value
    return kwargs


def _build_dataclass(cls: type, data: dict[str, Any]) -> Any:
    if issubclass(cls, File):
        return cls.from_dict(data)
    try:
        return cls(**_dataclass_kwargs(cls, data))
    except TypeError as exc:
        raise InvalidConfig(str(exc)) from exc


class File:
    """Generic load/write contract for a config value."""

    file_format: str | None = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        formats = {
            base.file_format
            for base in cls.__mro__
            if base is not File and "file_format" in vars(base) and base.file_format
        }
        if len(formats) > 1:
            raise TypeError(
                f"{cls.__name__} mixes config formats: {', '.join(sorted(formats))}"
            )

    @classmethod
    def default(cls: type[T]) -> T:
        return cls()

    def to_dict(self) -> dict[str, Any]:
        if dataclasses.is_dataclass(self):
            return dataclasses.asdict(self)
        return {k: v for k, v in vars(self).items() if not k.startswith("_")}

    @classmethod
    def from_dict(cls: type[T], data: dict[str, Any]) -> T:
        """Build an instance from a mapping.

        Unknown keys are ignored for dataclasses and nested dataclass
        sections are rebuilt. Missing required fields raise InvalidConfig.
        """
        if dataclasses.is_dataclass(cls):
            data = _dataclass_kwargs(cls, data)
        try:
            return cls(**data)
        except TypeError as exc:
            raise InvalidConfig(str(exc)) from exc

    @classmethod
    def _from_document(cls: type[T], document: Any) -> T:
        if not isinstance(document, dict):
            raise InvalidConfig(
                f"expected a mapping at the top level, got {type(document).__name__}"
            )
        return cls.from_dict(document)

    @classmethod
    def load(cls: type[T], path: pathlib.Path) -> T:
        raise NotImplementedError

    def write(self, path: pathlib.Path) -> None:
        raise NotImplementedError


class JSONFile(File):
    file_format = "json"

    @classmethod
    def load(cls: type[T], path: pathlib.Path) -> T:
        try:
            document = json.loads(_read_bytes(path))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise JSONError(exc) from exc
        return cls._from_document(document)

    def write(self, path: pathlib.Path) -> None:
        try:
            text = json.dumps(self.to_dict(), indent=2) + "\n"
        except (TypeError, ValueError) as exc:
            raise JSONError(exc) from exc
        _write_text(path, text)


class YAMLFile(File):
    file_format = "yaml"

    @classmethod
    def load(cls: type[T], path: pathlib.Path) -> T:
        try:
            document = yaml.safe_load(_read_bytes(path))
        except yaml.YAMLError as exc:
            raise YAMLError(exc) from exc
        return cls._from_document(document)

    def write(self, path: pathlib.Path) -> None:
        try:
            text = yaml.safe_dump(
                self.to_dict(), sort_keys=False, allow_unicode=True, default_flow_style=False
            )
        except yaml.YAMLError as exc:
            raise YAMLError(exc) from exc
        _write_text(path, text)


class TOMLFile(File):
    file_format = "toml"

    @classmethod
    def load(cls: type[T], path: pathlib.Path) -> T:
        raw = _read_bytes(path)
        try:
            document = tomllib.loads(raw.decode("utf-8"))
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
            raise TOMLError(exc) from exc
        return cls._from_document(document)

    def write(self, path: pathlib.Path) -> None:
        # TOML has no null: None table values are omitted, None array items rejected.
        try:
            text = tomli_w.dumps(_strip_none(self.to_dict()))
        except (TypeError, ValueError) as exc:
            raise TomlWriteError(exc) from exc
        _write_text(path, text)
