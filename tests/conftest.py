"""Root conftest — shared test configuration."""

import os

import pytest


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep tests away from real user config, .env files and word lists."""
    for key in list(os.environ):
        if key.startswith("ACCTSMITH_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.setenv("APPDATA", str(tmp_path / "appdata"))
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    return workdir


@pytest.fixture
def word_list(isolated_env):
    path = isolated_env / "wordlist.txt"
    path.write_text("alpha\nbravo\ncharlie\n", encoding="utf-8")
    return path
