"""Unit tests for theme module.

Tests for theme loading, validation, and Rich theme generation.
"""

from pathlib import Path
from unittest.mock import patch

import pytest
from plugpin.core.theme import ThemeColors, get_rich_theme, load_theme
from rich.theme import Theme


class TestThemeColors:
    """Tests for ThemeColors Pydantic model."""

    def test_default_values(self) -> None:
        """ThemeColors has sensible defaults."""
        colors = ThemeColors()
        assert colors.text == "#ffffff"
        assert colors.success == "#03b971"
        assert colors.pinned == "#faf870"

    def test_short_hex_accepted(self) -> None:
        """#RGB colors are accepted."""
        assert ThemeColors(muted="#abc").muted == "#abc"

    @pytest.mark.parametrize(
        ("value", "message"),
        [
            ("ffffff", "must start with '#'"),
            ("#ff", "must be #RGB or #RRGGBB"),
            ("#gggggg", "invalid hex color"),
        ],
    )
    def test_invalid_colors(self, value: str, message: str) -> None:
        """Malformed colors are rejected."""
        with pytest.raises(ValueError, match=message):
            ThemeColors(text=value)


class TestLoadTheme:
    """Tests for load_theme function."""

    def test_missing_file_uses_defaults(self, tmp_path: Path) -> None:
        """No user theme means default colors."""
        assert load_theme(tmp_path / "missing.toml") == ThemeColors()

    def test_user_overrides(self, tmp_path: Path) -> None:
        """User colors override only the given keys."""
        user_theme = tmp_path / "theme.toml"
        user_theme.write_text('[colors]\npinned = "#ff0000"\n')

        with patch("plugpin.core.theme.get_user_theme_path", return_value=user_theme):
            colors = load_theme()

        assert colors.pinned == "#ff0000"
        assert colors.text == "#ffffff"

    @pytest.mark.parametrize(
        "content",
        ["invalid toml [[[", 'colors = "red"\n', '[colors]\ntext = "red"\n'],
    )
    def test_invalid_user_theme_falls_back(self, tmp_path: Path, content: str) -> None:
        """Broken themes fall back to defaults."""
        user_theme = tmp_path / "theme.toml"
        user_theme.write_text(content)

        assert load_theme(user_theme) == ThemeColors()


class TestGetRichTheme:
    """Tests for get_rich_theme function."""

    def test_returns_rich_theme(self) -> None:
        """Returns a Rich Theme with the named styles."""
        theme = get_rich_theme(ThemeColors())

        assert isinstance(theme, Theme)
        for name in ("success", "warning", "error", "info", "pinned", "unpinned", "bold_header"):
            assert name in theme.styles
