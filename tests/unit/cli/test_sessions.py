"""Unit tests for the sessions CLI commands."""

import json
from datetime import datetime
from pathlib import Path

import pytest
from findctl.cli.main import app
from findctl.search.engine import SearchEngine
from findctl.sessions.models import SearchSession
from findctl.sessions.store import SessionStore
from typer.testing import CliRunner

runner = CliRunner()

SAVED_AT = datetime(2026, 1, 19, 14, 30, 0)


@pytest.fixture
def saved_key(search_tree: Path) -> str:
    """Save a session of the three-level tree and return its key."""
    results = SearchEngine().traverse(search_tree, "*", max_depth=3)
    session = SearchSession.build("tree", str(search_tree), results, duration_seconds=0.5)
    return SessionStore().save(session, now=SAVED_AT)


class TestSessionsList:
    """Tests for findctl sessions list."""

    def test_empty(self) -> None:
        result = runner.invoke(app, ["sessions", "list"])
        assert result.exit_code == 0
        assert "No saved sessions found." in result.output

    def test_json(self, saved_key: str) -> None:
        result = runner.invoke(app, ["sessions", "list", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == [
            {"key": "tree_20260119_143000.json", "name": "tree (2026-01-19 14:30)"}
        ]

    def test_table(self, saved_key: str) -> None:
        result = runner.invoke(app, ["sessions", "list"])
        assert result.exit_code == 0
        assert "tree (2026-01-19 14:30)" in result.stdout


class TestSessionsShow:
    """Tests for findctl sessions show."""

    def test_json(self, saved_key: str) -> None:
        result = runner.invoke(app, ["sessions", "show", saved_key, "--format", "json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["searchTerm"] == "tree"
        assert data["fileCount"] == 3
        assert data["directoryCount"] == 2
        assert data["missingCount"] == 0
        assert len(data["results"]) == 5

    def test_missing_entries_reported(self, saved_key: str, search_tree: Path) -> None:
        """Deleted files are flagged while stored counts stay unchanged."""
        (search_tree / "a.txt").unlink()

        result = runner.invoke(
            app, ["sessions", "show", saved_key, "--format", "json", "--missing"]
        )

        data = json.loads(result.stdout)
        assert data["missingCount"] == 1
        assert data["fileCount"] == 3
        assert [item["name"] for item in data["results"]] == ["a.txt"]
        assert data["results"][0]["status"] == "Missing"

    def test_table(self, saved_key: str, search_tree: Path) -> None:
        (search_tree / "a.txt").unlink()

        result = runner.invoke(app, ["sessions", "show", saved_key])

        assert result.exit_code == 0
        assert "Search term:" in result.stdout
        assert "1 item(s) no longer exist on disk" in result.output
        assert result.output.count("no longer exist") == 1
        assert "items missing" not in result.output

    def test_unknown_key(self) -> None:
        result = runner.invoke(app, ["sessions", "show", "nope_20260119_143000.json"])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_corrupt_session(self, isolated_xdg_dirs: Path) -> None:
        sessions_dir = isolated_xdg_dirs / "state" / "findctl" / "saved-searches"
        sessions_dir.mkdir(parents=True)
        (sessions_dir / "bad_20260119_143000.json").write_text("[]")

        result = runner.invoke(app, ["sessions", "show", "bad_20260119_143000.json"])

        assert result.exit_code == 1
        assert "corrupt" in result.output


class TestSessionsDelete:
    """Tests for findctl sessions delete."""

    def test_delete_with_yes(self, saved_key: str) -> None:
        result = runner.invoke(app, ["sessions", "delete", saved_key, "--yes"])
        assert result.exit_code == 0
        assert not SessionStore().exists(saved_key)

    def test_confirm_declined(self, saved_key: str) -> None:
        result = runner.invoke(app, ["sessions", "delete", saved_key], input="n\n")
        assert result.exit_code == 0
        assert "Aborted." in result.output
        assert SessionStore().exists(saved_key)

    def test_confirm_accepted(self, saved_key: str) -> None:
        result = runner.invoke(app, ["sessions", "delete", saved_key], input="y\n")
        assert result.exit_code == 0
        assert not SessionStore().exists(saved_key)

    def test_unknown_key(self) -> None:
        result = runner.invoke(app, ["sessions", "delete", "nope.json", "--yes"])
        assert result.exit_code == 1
        assert "not found" in result.output


class TestMarkupInKeys:
    """Session keys that look like Rich markup are shown literally."""

    @pytest.fixture
    def markup_key(self, search_tree: Path) -> str:
        session = SearchSession.build("[red]", str(search_tree), [])
        return SessionStore().save(session, now=SAVED_AT)

    def test_list_shows_brackets(self, markup_key: str) -> None:
        result = runner.invoke(app, ["sessions", "list"])
        assert result.exit_code == 0
        assert "[red] (2026-01-19 14:30)" in result.stdout
        assert "[red]_20260119_143000.json" in result.stdout

    def test_show_shows_brackets(self, markup_key: str) -> None:
        result = runner.invoke(app, ["sessions", "show", markup_key])
        assert result.exit_code == 0
        assert "Search term: [red]" in result.stdout

    def test_delete_shows_brackets(self, markup_key: str) -> None:
        result = runner.invoke(app, ["sessions", "delete", markup_key, "--yes"])
        assert result.exit_code == 0
        assert "Deleted session '[red] (2026-01-19 14:30)'." in result.stdout

    def test_unknown_key_shows_brackets(self) -> None:
        result = runner.invoke(app, ["sessions", "delete", "[bold]x.json", "--yes"])
        assert result.exit_code == 1
        assert "[bold]x.json" in result.output
