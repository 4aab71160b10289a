"""Shared fixtures for signpost tests."""

import pytest

from signpost.state import NavigationState


@pytest.fixture
def navigation():
    """A fresh navigation state."""
    return NavigationState()


@pytest.fixture
def changes(navigation):
    """Field names the navigation state reports, in order."""
    seen: list[str] = []
    navigation.subscribe(seen.append)
    return seen


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    """Point the config helpers at a temp directory."""
    directory = tmp_path / ".config" / "signpost"
    monkeypatch.setattr("signpost.config.get_config_dir", lambda: directory)
    monkeypatch.setattr("signpost.config.get_config_path", lambda: directory / "config.toml")
    return directory
