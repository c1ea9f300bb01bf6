"""Shared fixtures: a hermetic git environment for subprocess-based tests."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def git_env(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> None:
    """Isolate git from the user's configuration and locale."""
    home = tmp_path_factory.mktemp("home")
    global_config = Path(home) / ".gitconfig"
    global_config.write_text("", encoding="utf-8")

    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(global_config))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("LC_ALL", "C")
    monkeypatch.setenv("LANGUAGE", "C")
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Storage Test")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@gitstorage.dev")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Storage Test")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@gitstorage.dev")
    monkeypatch.setenv("GIT_CONFIG_COUNT", "2")
    monkeypatch.setenv("GIT_CONFIG_KEY_0", "commit.gpgsign")
    monkeypatch.setenv("GIT_CONFIG_VALUE_0", "false")
    monkeypatch.setenv("GIT_CONFIG_KEY_1", "pull.rebase")
    monkeypatch.setenv("GIT_CONFIG_VALUE_1", "false")
