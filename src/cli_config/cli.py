"""CLI entrypoint for cli-config."""

from __future__ import annotations

import argparse
import json
import logging
import pathlib
import sys
from typing import Any

from cli_config.core import init
from cli_config.errors import ConfigError
from cli_config.fs import File, JSONFile, TOMLFile, YAMLFile, format_for_path
from cli_config.paths import is_config_file, resolver_for_platform

logger = logging.getLogger(__name__)


class RawConfig(File):
    """Schema-less config value backed by a plain dict."""

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self.data = dict(data or {})

    def to_dict(self) -> dict[str, Any]:
        return self.data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RawConfig:
        return cls(data)


class RawJSON(RawConfig, JSONFile):
    pass


class RawYAML(RawConfig, YAMLFile):
    pass


class RawTOML(RawConfig, TOMLFile):
    pass


RAW_TYPES: dict[str, type[RawConfig]] = {
    "json": RawJSON,
    "yaml": RawYAML,
    "toml": RawTOML,
}


def parse_assignment(text: str) -> tuple[list[str], Any]:
    """Split ``a.b=value`` into key path and value.

    Values are parsed as JSON when possible, otherwise kept as strings.
    """
    key, sep, raw = text.partition("=")
    keys = [part.strip() for part in key.split(".")]
    if not sep or not all(keys):
        raise ValueError(f"Invalid assignment (expected KEY=VALUE): {text!r}")
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        value = raw
    return keys, value


def build_defaults(assignments: list[str]) -> dict[str, Any]:
    data: dict[str, Any] = {}
    for text in assignments:
        keys, value = parse_assignment(text)
        node = data
        for key in keys[:-1]:
            child = node.setdefault(key, {})
            if not isinstance(child, dict):
                raise ValueError(f"Key {key!r} is already set to a scalar value")
            node = child
        if isinstance(node.get(keys[-1]), dict):
            raise ValueError(f"Key {keys[-1]!r} is already set to a table")
        node[keys[-1]] = value
    return data


def _resolve_format(explicit: str | None, path: pathlib.Path | str) -> str:
    fmt = explicit or format_for_path(pathlib.Path(path))
    if fmt is None:
        raise ValueError(
            f"Cannot infer config format from {pathlib.Path(path).name!r}; pass --format."
        )
    return fmt


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="cli-config",
        description="Locate and initialize per-user CLI config files.",
    )
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level (default: WARNING).",
    )
    parser.add_argument(
        "--platform", default=None,
        help="Resolve paths as on this platform (e.g. linux, win32). Default: current.",
    )
    subparsers = parser.add_subparsers(dest="command")

    def _add_target(sub: argparse.ArgumentParser) -> None:
        sub.add_argument("prefix", help="Application name (config folder).")
        sub.add_argument("filename", help="Config file name, e.g. config.json.")

    # locate
    locate_parser = subparsers.add_parser("locate", help="Print the path of the existing config file.")
    _add_target(locate_parser)

    # candidates
    candidates_parser = subparsers.add_parser("candidates", help="List the search order.")
    _add_target(candidates_parser)

    # init
    init_parser = subparsers.add_parser("init", help="Create the config file if missing.")
    _add_target(init_parser)
    init_parser.add_argument("--format", choices=sorted(RAW_TYPES), help="Serialization format (default: from suffix).")
    init_parser.add_argument(
        "--set", dest="assignments", action="append", default=[], metavar="KEY=VALUE",
        help="Default value to write; repeatable, dotted keys nest.",
    )

    # show
    show_parser = subparsers.add_parser("show", help="Print the config file contents as JSON.")
    _add_target(show_parser)
    show_parser.add_argument("--format", choices=sorted(RAW_TYPES), help="Serialization format (default: from suffix).")

    args = parser.parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s: %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.command is None:
        parser.print_help(sys.stderr)
        sys.exit(2)

    commands = {
        "locate": _cmd_locate,
        "candidates": _cmd_candidates,
        "init": _cmd_init,
        "show": _cmd_show,
    }
    try:
        commands[args.command](args)
    except (ConfigError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


def _cmd_locate(args: argparse.Namespace) -> None:
    path = resolver_for_platform(args.platform).locate(args.prefix, args.filename)
    if path is None:
        print("No config file found.", file=sys.stderr)
        sys.exit(1)
    print(path)


def _cmd_candidates(args: argparse.Namespace) -> None:
    resolver = resolver_for_platform(args.platform)
    for index, path in enumerate(resolver.candidates(args.prefix, args.filename), start=1):
        mark = "*" if is_config_file(path) else " "
        print(f"{mark} {index}. {path}")


def _cmd_init(args: argparse.Namespace) -> None:
    raw_type = RAW_TYPES[_resolve_format(args.format, args.filename)]
    config = raw_type(build_defaults(args.assignments))
    path = init(config, args.prefix, args.filename, platform=args.platform)
    print(path)


def _cmd_show(args: argparse.Namespace) -> None:
    path = resolver_for_platform(args.platform).locate(args.prefix, args.filename)
    if path is None:
        print("No config file found.", file=sys.stderr)
        sys.exit(1)
    raw_type = RAW_TYPES[_resolve_format(args.format, path)]
    config = raw_type.load(path)
    print(json.dumps(config.to_dict(), indent=2, default=str))
