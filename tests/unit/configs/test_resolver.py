"""Unit tests for plugin entry resolution.

Covers config precedence, entry parsing, local development copies and
install state detection.
"""

import json
from pathlib import Path

from plugpin.configs.resolver import (
    detect_current_config,
    find_manifest_up,
    find_plugin_entry,
    first_match,
    get_cached_version,
    get_local_dev_path,
    get_local_dev_version,
    parse_plugin_entry,
)
from plugpin.core.paths import (
    get_host_config_json,
    get_host_config_jsonc,
    get_installed_package_json,
    get_lite_config_path,
)
from plugpin.core.settings import Settings


def _write(path: Path, content: str | dict) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content if isinstance(content, str) else json.dumps(content))
    return path


class TestFirstMatch:
    """Tests for first_match."""

    def test_returns_first_non_none(self) -> None:
        """Lookup stops at the first hit."""
        seen: list[int] = []

        def lookup(value: int) -> str | None:
            seen.append(value)
            return f"hit-{value}" if value >= 2 else None

        assert first_match([1, 2, 3], lookup) == "hit-2"
        assert seen == [1, 2]

    def test_no_match(self) -> None:
        """None when every lookup misses."""
        assert first_match([1, 2], lambda _: None) is None


class TestParsePluginEntry:
    """Tests for parse_plugin_entry."""

    def test_bare_name_is_unpinned(self, tmp_path: Path) -> None:
        """A bare package name follows the registry."""
        entry = parse_plugin_entry("pkg", "pkg", tmp_path)

        assert entry is not None
        assert entry.is_pinned is False
        assert entry.pinned_version is None

    def test_versioned_entry_is_pinned(self, tmp_path: Path) -> None:
        """name@version is pinned to that version."""
        entry = parse_plugin_entry("pkg@1.2.3-beta.1", "pkg", tmp_path)

        assert entry is not None
        assert entry.is_pinned is True
        assert entry.pinned_version == "1.2.3-beta.1"
        assert entry.config_path == tmp_path

    def test_latest_tag_is_unpinned(self, tmp_path: Path) -> None:
        """name@latest is equivalent to the bare name."""
        entry = parse_plugin_entry("pkg@latest", "pkg", tmp_path)

        assert entry is not None
        assert entry.is_pinned is False
        assert entry.pinned_version is None

    def test_other_packages_ignored(self, tmp_path: Path) -> None:
        """Entries for other packages, or name prefixes, do not match."""
        assert parse_plugin_entry("other@1.0.0", "pkg", tmp_path) is None
        assert parse_plugin_entry("pkg-extra@1.0.0", "pkg", tmp_path) is None


class TestFindPluginEntry:
    """Tests for find_plugin_entry."""

    def test_project_config_wins(self, project_dir: Path, settings: Settings) -> None:
        """The project-local config takes precedence over the global one."""
        local = _write(project_dir / ".opencode" / "opencode.json", {"plugin": ["pkg@1.0.0"]})
        _write(get_host_config_json(settings), {"plugin": ["pkg@2.0.0"]})

        entry = find_plugin_entry(project_dir, settings)

        assert entry is not None
        assert entry.pinned_version == "1.0.0"
        assert entry.config_path == local

    def test_json_before_jsonc(self, project_dir: Path, settings: Settings) -> None:
        """Within a directory, .json is checked before .jsonc."""
        _write(project_dir / ".opencode" / "opencode.jsonc", {"plugin": ["pkg@2.0.0"]})
        _write(project_dir / ".opencode" / "opencode.json", {"plugin": ["pkg@1.0.0"]})

        entry = find_plugin_entry(project_dir, settings)

        assert entry is not None
        assert entry.pinned_version == "1.0.0"

    def test_falls_back_to_global_jsonc(
        self, project_dir: Path, settings: Settings, sample_jsonc: str
    ) -> None:
        """A commented global .jsonc config is found."""
        path = _write(get_host_config_jsonc(settings), sample_jsonc)

        entry = find_plugin_entry(project_dir, settings)

        assert entry is not None
        assert entry.entry == "pkg@1.0.0"
        assert entry.config_path == path

    def test_malformed_file_skipped(self, project_dir: Path, settings: Settings) -> None:
        """A broken project config does not hide the global one."""
        _write(project_dir / ".opencode" / "opencode.json", '{"plugin": [')
        _write(get_host_config_json(settings), {"plugin": ["pkg"]})

        entry = find_plugin_entry(project_dir, settings)

        assert entry is not None
        assert entry.entry == "pkg"
        assert entry.is_pinned is False

    def test_config_without_entry_skipped(self, project_dir: Path, settings: Settings) -> None:
        """A config that does not list the package is passed over."""
        _write(project_dir / ".opencode" / "opencode.json", {"plugin": ["other"]})
        _write(get_host_config_json(settings), {"plugin": ["other", "pkg@3.0.0"]})

        entry = find_plugin_entry(project_dir, settings)

        assert entry is not None
        assert entry.pinned_version == "3.0.0"

    def test_not_found(self, project_dir: Path, settings: Settings) -> None:
        """None when no config lists the package."""
        assert find_plugin_entry(project_dir, settings) is None


class TestLocalDev:
    """Tests for local development copy detection."""

    def test_local_dev_version(
        self, tmp_path: Path, project_dir: Path, settings: Settings
    ) -> None:
        """The version is read from the nearest matching package.json."""
        checkout = tmp_path / "dev" / "pkg"
        _write(checkout / "package.json", {"name": "pkg", "version": "9.9.9"})
        entry_file = _write(checkout / "dist" / "index.js", "")
        _write(project_dir / ".opencode" / "opencode.json", {"plugin": [entry_file.as_uri()]})

        assert get_local_dev_path(project_dir, settings) == entry_file
        assert get_local_dev_version(project_dir, settings) == "9.9.9"

    def test_file_url_without_name_ignored(
        self, tmp_path: Path, project_dir: Path, settings: Settings
    ) -> None:
        """file:// entries must mention the package name."""
        other = _write(tmp_path / "dev" / "other" / "index.js", "")
        _write(project_dir / ".opencode" / "opencode.json", {"plugin": [other.as_uri()]})

        assert get_local_dev_path(project_dir, settings) is None

    def test_no_local_dev(self, project_dir: Path, settings: Settings) -> None:
        """Registry entries are not local copies."""
        _write(project_dir / ".opencode" / "opencode.json", {"plugin": ["pkg@1.0.0"]})

        assert get_local_dev_version(project_dir, settings) is None


class TestFindManifestUp:
    """Tests for find_manifest_up."""

    def test_skips_manifests_of_other_packages(self, tmp_path: Path) -> None:
        """Only a manifest naming the package matches."""
        root = _write(tmp_path / "pkg" / "package.json", {"name": "pkg", "version": "1.0.0"})
        _write(tmp_path / "pkg" / "sub" / "package.json", {"name": "nested"})
        start = tmp_path / "pkg" / "sub" / "lib"
        start.mkdir()

        assert find_manifest_up(start, "pkg") == root

    def test_missing_start(self, tmp_path: Path) -> None:
        """A start path that does not exist yields None."""
        assert find_manifest_up(tmp_path / "missing", "pkg") is None

    def test_depth_limit(self, tmp_path: Path) -> None:
        """The walk stops after max_depth directories."""
        _write(tmp_path / "package.json", {"name": "pkg"})
        start = tmp_path / "a" / "b" / "c"
        start.mkdir(parents=True)

        assert find_manifest_up(start, "pkg", max_depth=3) is None
        assert find_manifest_up(start, "pkg", max_depth=4) == tmp_path / "package.json"


class TestCachedVersion:
    """Tests for get_cached_version."""

    def test_reads_installed_manifest(self, settings: Settings) -> None:
        """The host cache manifest provides the installed version."""
        _write(get_installed_package_json(settings), {"name": "pkg", "version": "1.4.0"})

        assert get_cached_version(settings) == "1.4.0"

    def test_not_installed(self, settings: Settings) -> None:
        """None when the host has not fetched the package."""
        assert get_cached_version(settings) is None


class TestDetectCurrentConfig:
    """Tests for detect_current_config."""

    def test_no_config(self, settings: Settings) -> None:
        """Everything is False without a host config."""
        detected = detect_current_config(settings)

        assert detected.is_installed is False
        assert detected.has_antigravity is False
        assert detected.has_tmux is False

    def test_detects_integrations(self, settings: Settings) -> None:
        """Plugin list and lite config drive the flags."""
        _write(
            get_host_config_json(settings),
            {"plugin": ["pkg@1.0.0", "opencode-antigravity-auth@1.2.0"]},
        )
        _write(
            get_lite_config_path(settings),
            {
                "agents": {
                    "orchestrator": {"model": "google/claude-opus-4-5-thinking"},
                    "oracle": {"model": "openai/gpt-5.2-codex"},
                },
                "tmux": {"enabled": True},
            },
        )

        detected = detect_current_config(settings)

        assert detected.is_installed is True
        assert detected.has_antigravity is True
        assert detected.has_openai is True
        assert detected.has_cerebras is False
        assert detected.has_tmux is True

    def test_reads_jsonc_host_config(self, settings: Settings, sample_jsonc: str) -> None:
        """A .jsonc host config is used when no .json exists."""
        _write(get_host_config_jsonc(settings), sample_jsonc)

        assert detect_current_config(settings).is_installed is True
