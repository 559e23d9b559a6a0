"""Tests for the local storage module."""

import os
import tempfile
from pathlib import Path

import pytest

from xbel_to_markdown.exceptions import (
    AlreadyExistsError,
    InputNotFoundError,
    StorageError,
)
from xbel_to_markdown.storage import LocalStorage


@pytest.fixture
def root():
    """Temporary storage root."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


class TestLocalStorage:
    """Tests for LocalStorage class."""

    def test_relative_and_absolute_paths(self, root: Path) -> None:
        """Relative paths resolve under the root, absolute ones pass through."""
        storage = LocalStorage(root)

        assert storage.resolve("a/b.md") == root.resolve() / "a" / "b.md"
        assert storage.resolve("/etc/hosts") == Path("/etc/hosts")

    def test_create_folder_and_exists(self, root: Path) -> None:
        """create_folder makes parents and is repeatable."""
        storage = LocalStorage(root)

        storage.create_folder("a/b")
        storage.create_folder("a/b")

        assert storage.exists("a/b")
        assert not storage.exists("a/c")

    def test_create_folder_over_file(self, root: Path) -> None:
        """A file in the way surfaces as StorageError."""
        storage = LocalStorage(root)
        (root / "taken").write_text("x")

        with pytest.raises(StorageError):
            storage.create_folder("taken/sub")

    def test_read_missing_file(self, root: Path) -> None:
        """Missing input raises InputNotFoundError."""
        storage = LocalStorage(root)
        with pytest.raises(InputNotFoundError):
            storage.read_bytes("missing.xbel")

    def test_write_new_file(self, root: Path) -> None:
        """write_new_file creates the file and refuses to overwrite it."""
        storage = LocalStorage(root)

        storage.write_new_file("out.md", "hello\n")
        assert storage.read_bytes("out.md") == b"hello\n"

        with pytest.raises(AlreadyExistsError):
            storage.write_new_file("out.md", "again\n")
        assert storage.read_bytes("out.md") == b"hello\n"

    def test_write_into_missing_folder(self, root: Path) -> None:
        """Writing into a missing folder is a StorageError."""
        storage = LocalStorage(root)
        with pytest.raises(StorageError):
            storage.write_new_file("nowhere/out.md", "x")

    def test_move(self, root: Path) -> None:
        """move relocates a file."""
        storage = LocalStorage(root)
        (root / "a.md").write_text("a")

        storage.move("a.md", "b.md")

        assert not (root / "a.md").exists()
        assert (root / "b.md").read_text() == "a"

    def test_move_refuses_existing_target(self, root: Path) -> None:
        """move never replaces an existing file."""
        storage = LocalStorage(root)
        (root / "a.md").write_text("a")
        (root / "b.md").write_text("b")

        with pytest.raises(AlreadyExistsError):
            storage.move("a.md", "b.md")
        assert (root / "b.md").read_text() == "b"

    def test_move_missing_source(self, root: Path) -> None:
        """Moving a missing file is a StorageError."""
        storage = LocalStorage(root)
        with pytest.raises(StorageError):
            storage.move("missing.md", "b.md")

    def test_list_children_missing_folder(self, root: Path) -> None:
        """A missing folder lists as empty."""
        storage = LocalStorage(root)
        assert storage.list_children("backups") == []

    def test_list_children(self, root: Path) -> None:
        """Entries come back in name order with their mtimes."""
        storage = LocalStorage(root)
        folder = root / "backups"
        folder.mkdir()
        (folder / "b.md").write_text("b")
        (folder / "a.md").write_text("a")
        os.utime(folder / "a.md", (1000, 1000))

        entries = storage.list_children("backups")

        assert [e.path.name for e in entries] == ["a.md", "b.md"]
        assert entries[0].last_modified == 1000

    def test_soft_delete_moves_to_trash(self, root: Path) -> None:
        """soft_delete moves entries into .trash, keeping name clashes apart."""
        storage = LocalStorage(root)
        (root / "old.md").write_text("first")

        first = storage.soft_delete("old.md")
        (root / "old.md").write_text("second")
        second = storage.soft_delete("old.md")

        assert not (root / "old.md").exists()
        assert first == root.resolve() / ".trash" / "old.md"
        assert second == root.resolve() / ".trash" / "old_1.md"
        assert second.read_text() == "second"

    def test_soft_delete_missing(self, root: Path) -> None:
        """Deleting a missing entry is a StorageError."""
        storage = LocalStorage(root)
        with pytest.raises(StorageError):
            storage.soft_delete("missing.md")

    def test_read_bytes_keeps_encoding(self, root: Path) -> None:
        """read_bytes hands back the file's bytes undecoded."""
        storage = LocalStorage(root)
        data = '<?xml version="1.0" encoding="ISO-8859-1"?><xbel/>'.encode("latin-1")
        (root / "latin.xbel").write_bytes(data)

        assert storage.read_bytes("latin.xbel") == data

    def test_trash_dir_default(self, root: Path) -> None:
        """The trash lives in .trash under the root by default."""
        storage = LocalStorage(root)
        assert storage.trash_dir == root.resolve() / ".trash"

    def test_soft_delete_custom_trash(self, root: Path) -> None:
        """A configured trash folder receives deleted entries."""
        storage = LocalStorage(root, trash_dir="archive/deleted")
        (root / "old.md").write_text("old")

        trashed = storage.soft_delete("old.md")

        assert trashed == root.resolve() / "archive" / "deleted" / "old.md"
        assert trashed.read_text() == "old"
        assert not (root / ".trash").exists()
