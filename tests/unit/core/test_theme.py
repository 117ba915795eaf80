"""Unit tests for theme module.

Tests for theme loading, validation, and Rich theme generation.
"""

# pyright: reportPrivateUsage=false

from pathlib import Path

import findctl.core.theme as theme_module
import pytest
from findctl.core.theme import (
    ThemeColors,
    _load_toml_colors,
    get_rich_theme,
    get_theme,
    load_theme,
)
from rich.theme import Theme


class TestThemeColors:
    """Tests for ThemeColors Pydantic model."""

    def test_default_values(self) -> None:
        """ThemeColors has sensible defaults."""
        colors = ThemeColors()
        assert colors.text == "#ffffff"
        assert colors.entry_directory == "#0e8ac8"
        assert colors.entry_missing == "#f53263"

    def test_valid_hex_colors(self) -> None:
        """ThemeColors accepts #RGB and #RRGGBB codes."""
        colors = ThemeColors(text="#AABBCC", muted="#abc")
        assert colors.text == "#AABBCC"
        assert colors.muted == "#abc"

    def test_invalid_hex_no_hash(self) -> None:
        with pytest.raises(ValueError, match="must start with '#'"):
            ThemeColors(text="ffffff")

    def test_invalid_hex_wrong_length(self) -> None:
        with pytest.raises(ValueError, match="must be #RGB or #RRGGBB"):
            ThemeColors(text="#ff")

    def test_invalid_hex_chars(self) -> None:
        with pytest.raises(ValueError, match="invalid hex color"):
            ThemeColors(text="#gggggg")

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ValueError):
            ThemeColors(sparkle="#ffffff")  # type: ignore[call-arg]


class TestLoadTheme:
    """Tests for load_theme and its TOML helper."""

    def test_missing_file_uses_defaults(self, tmp_path: Path) -> None:
        assert load_theme(tmp_path / "none.toml") == ThemeColors()

    def test_user_override(self, tmp_path: Path) -> None:
        """Colors from the user file override the defaults."""
        path = tmp_path / "theme.toml"
        path.write_text('[colors]\nentry_directory = "#123456"\n')

        colors = load_theme(path)

        assert colors.entry_directory == "#123456"
        assert colors.text == "#ffffff"

    def test_invalid_override_falls_back(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """An invalid color falls back to the defaults with a warning."""
        path = tmp_path / "theme.toml"
        path.write_text('[colors]\ntext = "red"\n')

        assert load_theme(path) == ThemeColors()
        assert "Invalid theme configuration" in capsys.readouterr().err

    def test_bad_toml_returns_none(self, tmp_path: Path) -> None:
        path = tmp_path / "theme.toml"
        path.write_text("[colors\n")
        assert _load_toml_colors(path) is None

    def test_non_table_colors_returns_none(self, tmp_path: Path) -> None:
        path = tmp_path / "theme.toml"
        path.write_text('colors = "nope"\n')
        assert _load_toml_colors(path) is None

    def test_non_string_values_are_dropped(self, tmp_path: Path) -> None:
        path = tmp_path / "theme.toml"
        path.write_text('[colors]\ntext = "#000000"\nmuted = 3\n')
        assert _load_toml_colors(path) == {"text": "#000000"}


class TestRichTheme:
    """Tests for Rich theme generation."""

    def test_entry_styles_present(self) -> None:
        theme = get_rich_theme(ThemeColors())
        for name in ("entry.file", "entry.directory", "entry.missing", "entry.available"):
            assert name in theme.styles

    def test_missing_entries_are_struck_through(self) -> None:
        theme = get_rich_theme(ThemeColors())
        assert theme.styles["entry.missing"].strike is True

    def test_get_theme_is_cached(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(theme_module, "_cached_theme", None)
        first = get_theme()
        assert isinstance(first, Theme)
        assert get_theme() is first
