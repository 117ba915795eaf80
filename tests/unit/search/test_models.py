"""Tests for search result models."""

import pytest
from findctl.search.models import EntryStatus, ResultEntry, SearchProgress


def _entry(full_path: str, is_directory: bool = False) -> ResultEntry:
    name = full_path.rsplit("/", 1)[-1]
    return ResultEntry(
        name=name,
        full_path=full_path,
        is_directory=is_directory,
        parent_path=full_path.rsplit("/", 1)[0],
        size_label="<DIR>" if is_directory else "1 KB",
        last_modified="2026-01-19 14:30:00",
    )


class TestFileType:
    """Tests for the derived file_type property."""

    def test_directory_is_folder(self) -> None:
        """Directories always report "Folder", even with a dotted name."""
        assert _entry("/data/archive.d", is_directory=True).file_type == "Folder"

    def test_extension_is_lowercased(self) -> None:
        """File extensions are lowercased and keep the leading dot."""
        assert _entry("/data/Photo.JPG").file_type == ".jpg"

    def test_last_suffix_wins(self) -> None:
        """Only the final suffix counts."""
        assert _entry("/data/backup.tar.GZ").file_type == ".gz"

    def test_no_extension(self) -> None:
        """Files without a suffix report "No Extension"."""
        assert _entry("/data/Makefile").file_type == "No Extension"

    def test_dotfile_is_its_own_extension(self) -> None:
        """Dotfiles report their whole name as the extension."""
        assert _entry("/repo/.gitignore").file_type == ".gitignore"
        assert _entry("/home/user/.BASHRC").file_type == ".bashrc"

    def test_trailing_dot_has_no_extension(self) -> None:
        """A name ending in a dot has no extension."""
        assert _entry("/data/notes.").file_type == "No Extension"


class TestStatus:
    """Tests for the mutable status field."""

    def test_default_status_available(self) -> None:
        """New entries start out available."""
        entry = _entry("/data/a.txt")
        assert entry.status == EntryStatus.AVAILABLE
        assert entry.is_missing is False

    def test_status_is_mutable(self) -> None:
        """status can be updated in place."""
        entry = _entry("/data/a.txt")
        entry.status = EntryStatus.MISSING
        assert entry.is_missing is True


class TestSerialization:
    """Tests for to_dict/from_dict."""

    def test_to_dict_uses_record_field_names(self) -> None:
        """Serialized keys follow the stored session record layout."""
        data = _entry("/data/a.txt").to_dict()
        assert data == {
            "name": "a.txt",
            "fullPath": "/data/a.txt",
            "isDirectory": False,
            "parentPath": "/data",
            "sizeLabel": "1 KB",
            "lastModified": "2026-01-19 14:30:00",
            "status": "Available",
        }

    def test_from_dict_restores_entry(self) -> None:
        """from_dict reverses to_dict."""
        original = _entry("/data/sub", is_directory=True)
        original.status = EntryStatus.MISSING
        assert ResultEntry.from_dict(original.to_dict()) == original

    def test_from_dict_missing_field_raises(self) -> None:
        """A record without fullPath is rejected."""
        data = _entry("/data/a.txt").to_dict()
        del data["fullPath"]
        with pytest.raises(KeyError):
            ResultEntry.from_dict(data)

    def test_from_dict_rejects_non_bool_directory_flag(self) -> None:
        """isDirectory must be a real boolean."""
        data = _entry("/data/a.txt").to_dict()
        data["isDirectory"] = "yes"
        with pytest.raises(ValueError, match="isDirectory"):
            ResultEntry.from_dict(data)

    def test_from_dict_rejects_unknown_status(self) -> None:
        """Unknown status strings are rejected."""
        data = _entry("/data/a.txt").to_dict()
        data["status"] = "Gone"
        with pytest.raises(ValueError):
            ResultEntry.from_dict(data)


class TestSearchProgress:
    """Tests for SearchProgress defaults."""

    def test_defaults(self) -> None:
        """Only status is required."""
        event = SearchProgress(status="Searching...")
        assert event.current_path == ""
        assert event.items_found == 0
        assert event.is_error is False
