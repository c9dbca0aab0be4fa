"""Tests for first-run config initialization."""

import dataclasses
import json

import pytest

import cli_config
from cli_config.errors import CustomError, FileSystemError, JSONError
from cli_config.fs import JSONFile, YAMLFile
from cli_config.paths import locate_config
from tests.conftest import touch


@dataclasses.dataclass
class HawkConfig(JSONFile):
    is_first_run: bool = True


@dataclasses.dataclass
class CountingConfig(JSONFile):
    is_first_run: bool = True
    writes = 0

    def write(self, path):
        type(self).writes += 1
        super().write(path)


@dataclasses.dataclass
class YamlConfig(YAMLFile):
    theme: str = "dark"


@pytest.fixture(autouse=True)
def _reset_counter():
    CountingConfig.writes = 0


class TestInit:
    def test_creates_default_config(self, config_env):
        path = cli_config.init(HawkConfig(), "hawk", "config.json", platform="linux")
        assert path == config_env.xdg / "hawk" / "config.json"
        assert json.loads(path.read_text(encoding="utf-8")) == {"is_first_run": True}
        assert HawkConfig.load(path) == HawkConfig(is_first_run=True)

    def test_created_file_is_found_afterwards(self, config_env):
        path = cli_config.init(HawkConfig(), "hawk", "config.json", platform="linux")
        assert locate_config("hawk", "config.json", platform="linux") == path

    def test_existing_file_is_trusted_as_is(self, config_env):
        existing = touch(config_env.home / ".hawk.json", "not even json")
        path = cli_config.init(CountingConfig(), "hawk", "config.json", platform="linux")
        assert path == existing
        assert existing.read_text(encoding="utf-8") == "not even json"
        assert CountingConfig.writes == 0
        assert not (config_env.xdg / "hawk").exists()

    def test_idempotent(self, config_env):
        first = cli_config.init(CountingConfig(), "hawk", "config.json", platform="linux")
        second = cli_config.init(
            CountingConfig(is_first_run=False), "hawk", "config.json", platform="linux"
        )
        assert first == second
        assert CountingConfig.writes == 1
        assert CountingConfig.load(first).is_first_run is True

    def test_accepts_config_class(self, config_env):
        path = cli_config.init(YamlConfig, "hawk", "config.yaml", platform="linux")
        assert path.read_text(encoding="utf-8") == "theme: dark\n"

    def test_serialization_error_propagates(self, config_env):
        with pytest.raises(JSONError):
            cli_config.init(HawkConfig(is_first_run=object()), "hawk", "config.json", platform="linux")
        assert not (config_env.xdg / "hawk" / "config.json").exists()

    def test_directory_creation_error_propagates(self, config_env, monkeypatch):
        blocker = touch(config_env.root / "blocker", "")
        monkeypatch.setenv("XDG_CONFIG_HOME", str(blocker))
        with pytest.raises(FileSystemError):
            cli_config.init(HawkConfig(), "hawk", "config.json", platform="linux")

    def test_empty_prefix_rejected(self, config_env):
        with pytest.raises(ValueError):
            cli_config.init(HawkConfig(), "", "config.json", platform="linux")
        assert list(config_env.xdg.iterdir()) == []

    def test_empty_filename_rejected(self, config_env):
        with pytest.raises(ValueError):
            cli_config.init(HawkConfig(), "hawk", "", platform="linux")


class TestInitWindows:
    def test_returns_existing_file(self, config_env):
        existing = touch(config_env.appdata / "hawk" / "config.json")
        path = cli_config.init(CountingConfig(), "hawk", "config.json", platform="win32")
        assert path == existing
        assert CountingConfig.writes == 0

    def test_cannot_create_new_file(self, config_env):
        with pytest.raises(CustomError, match="Could not create file"):
            cli_config.init(CountingConfig(), "hawk", "config.json", platform="win32")
        assert CountingConfig.writes == 0
        assert not (config_env.appdata / "hawk").exists()


def test_existence_check_error_propagates(config_env):
    (config_env.xdg / "hawk").mkdir()
    with pytest.raises(FileSystemError):
        cli_config.init(HawkConfig(), "hawk", "x" * 300 + ".json", platform="linux")
