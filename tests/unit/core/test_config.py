"""Unit tests for user configuration."""

import tomllib
from pathlib import Path
from unittest.mock import patch

import pytest
from findctl.core.config import (
    ConfigError,
    ConfigParseError,
    FindctlConfig,
    clamp_depth,
    load_config,
    save_config,
)
from findctl.core.paths import get_config_path, get_sessions_dir


class TestFindctlConfig:
    """Tests for the FindctlConfig model."""

    def test_defaults(self) -> None:
        config = FindctlConfig()
        assert config.default_depth == 3
        assert config.sessions_dir is None
        assert config.file_progress_interval == 100
        assert config.directory_progress_interval == 50

    @pytest.mark.parametrize("depth", [0, 11, -1])
    def test_depth_out_of_range(self, depth: int) -> None:
        with pytest.raises(ValueError):
            FindctlConfig(default_depth=depth)

    def test_interval_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            FindctlConfig(file_progress_interval=0)

    def test_unknown_key_rejected(self) -> None:
        with pytest.raises(ValueError):
            FindctlConfig(colour="blue")  # type: ignore[call-arg]

    def test_effective_sessions_dir_default(self) -> None:
        assert FindctlConfig().effective_sessions_dir == get_sessions_dir()

    def test_effective_sessions_dir_override(self, tmp_path: Path) -> None:
        config = FindctlConfig(sessions_dir=tmp_path / "saved")
        assert config.effective_sessions_dir == tmp_path / "saved"


class TestLoadConfig:
    """Tests for load_config()."""

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        assert load_config(tmp_path / "missing.toml") == FindctlConfig()

    def test_reads_values(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text('default_depth = 7\nsessions_dir = "/tmp/saved"\n')

        config = load_config(path)

        assert config.default_depth == 7
        assert config.sessions_dir == Path("/tmp/saved")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("default_depth = \n")
        with pytest.raises(ConfigParseError, match="Invalid TOML"):
            load_config(path)

    def test_invalid_value(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("default_depth = 42\n")
        with pytest.raises(ConfigError, match="Invalid config content"):
            load_config(path)

    def test_default_path(self) -> None:
        """Without a path the XDG config file is used."""
        get_config_path().parent.mkdir(parents=True)
        get_config_path().write_text("default_depth = 5\n")
        assert load_config().default_depth == 5


class TestSaveConfig:
    """Tests for save_config()."""

    def test_round_trip(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "config.toml"
        config = FindctlConfig(default_depth=8, sessions_dir=tmp_path / "saved")

        assert save_config(config, path) == path
        assert load_config(path) == config

    def test_none_values_omitted(self, tmp_path: Path) -> None:
        """TOML has no null, so an unset sessions_dir is not written."""
        path = tmp_path / "config.toml"
        save_config(FindctlConfig(), path)

        with open(path, "rb") as f:
            data = tomllib.load(f)

        assert "sessions_dir" not in data
        assert data["default_depth"] == 3

    def test_write_failure(self, tmp_path: Path) -> None:
        """OS errors while writing become ConfigError and leave no temp file."""
        path = tmp_path / "cfg" / "config.toml"
        with (
            patch("findctl.core.config.os.replace", side_effect=OSError("read-only")),
            pytest.raises(ConfigError, match="Failed to write config"),
        ):
            save_config(FindctlConfig(), path)

        assert list(path.parent.iterdir()) == []


class TestClampDepth:
    """Tests for clamp_depth()."""

    @pytest.mark.parametrize(
        ("depth", "expected"), [(-3, 1), (0, 1), (1, 1), (5, 5), (10, 10), (999, 10)]
    )
    def test_clamp(self, depth: int, expected: int) -> None:
        assert clamp_depth(depth) == expected
