"""Keep config and log files out of the real home directory."""

from __future__ import annotations

import pytest

from livedoc import config, logging_setup


@pytest.fixture(autouse=True)
def isolated_home(monkeypatch, tmp_path_factory):
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setattr(config, "CONFIG_DIR", home / "livedoc")
    monkeypatch.setattr(config, "CONFIG_PATH", home / "livedoc" / "config.json")
    monkeypatch.setattr(logging_setup, "LOG_DIR", home / "livedoc")
    monkeypatch.setattr(logging_setup, "LOG_FILE", home / "livedoc" / "livedoc.log")
    return home
