"""Shared test fixtures for the cli-config test suite."""

from __future__ import annotations

import pathlib
import shutil
import tempfile
import types

import pytest


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    d = tempfile.mkdtemp(prefix="cli_config_test_")
    yield pathlib.Path(d)
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def config_env(tmp_dir, monkeypatch):
    """Point HOME, the XDG variables and APPDATA at isolated temp directories."""
    home = tmp_dir / "home"
    xdg = tmp_dir / "xdg"
    etc = tmp_dir / "etc-xdg"
    appdata = tmp_dir / "appdata"
    for d in (home, xdg, etc, appdata):
        d.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg))
    monkeypatch.setenv("XDG_CONFIG_DIRS", str(etc))
    monkeypatch.setenv("APPDATA", str(appdata))
    return types.SimpleNamespace(root=tmp_dir, home=home, xdg=xdg, etc=etc, appdata=appdata)


def touch(path: pathlib.Path, content: str = "{}") -> pathlib.Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path
