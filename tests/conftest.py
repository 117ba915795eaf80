"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_xdg_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG config and state directories into the test's tmp_path."""
    base = tmp_path / "xdg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(base / "config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(base / "state"))
    return base


@pytest.fixture
def search_tree(tmp_path: Path) -> Path:
    """Three-level tree used by the breadth-first scenarios.

    Layout:
        root/a.txt
        root/sub/b.txt
        root/sub/sub2/c.txt
    """
    root = tmp_path / "root"
    (root / "sub" / "sub2").mkdir(parents=True)
    (root / "a.txt").write_text("a")
    (root / "sub" / "b.txt").write_text("bb")
    (root / "sub" / "sub2" / "c.txt").write_text("ccc")
    return root
