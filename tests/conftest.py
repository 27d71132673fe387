"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest
from plugpin.core.settings import Settings


@pytest.fixture(autouse=True)
def isolated_xdg(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG config/cache dirs at a temporary directory.

    Also forces the non-Windows search path so results do not depend on
    the platform running the tests.
    """
    base = tmp_path / "xdg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(base / "config"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(base / "cache"))
    monkeypatch.setattr("plugpin.core.paths._is_windows", lambda: False)
    return base


@pytest.fixture
def settings() -> Settings:
    """Settings for a short package name, matching the sample configs."""
    return Settings(package_name="pkg")


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """An empty project directory."""
    path = tmp_path / "project"
    path.mkdir()
    return path


@pytest.fixture
def sample_jsonc() -> str:
    """A realistic host config with comments and trailing commas."""
    return """{
  // OpenCode plugin configuration
  "plugin": [
    "pkg@1.0.0",
  ],

  /* Provider settings
     with model definitions */
  "provider": {
    "google": {
      "name": "Google",
      "models": ["claude-opus-4-5", "gemini-3-flash"],
    }
  },

  // Server configuration for tmux integration
  "server": {
    "port": 4096, // default port
  }
}
"""


@pytest.fixture
def settings_file(tmp_path: Path) -> Path:
    """A settings file managing the short ``pkg`` package name."""
    path = tmp_path / "settings.toml"
    path.write_text('package_name = "pkg"\n')
    return path
