"""File storage used by the backup rotation and the build."""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

from xbel_to_markdown.exceptions import (
    AlreadyExistsError,
    InputNotFoundError,
    StorageError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BackupEntry:
    """An entry found in a folder listing."""

    path: Path
    last_modified: float


class LocalStorage:
    """Storage on the local filesystem, rooted at a base folder.

    Relative paths are resolved against ``root``; absolute paths are used
    as given. Deleted entries are moved into a trash folder (``<root>/.trash``
    unless ``trash_dir`` says otherwise) rather than removed outright. Nothing
    empties the trash; clear it by hand when it grows too large.
    """

    TRASH_DIR = ".trash"

    def __init__(self, root: str | Path = ".", trash_dir: str | Path | None = None):
        self.root = Path(root).resolve()
        self.trash_dir = (self.root / (trash_dir or self.TRASH_DIR)).resolve()

    def resolve(self, path: str | Path) -> Path:
        """Resolve a path against the storage root."""
        return self.root / path

    def exists(self, path: str | Path) -> bool:
        return self.resolve(path).exists()

    def list_children(self, folder: str | Path) -> list[BackupEntry]:
        """List entries of a folder in name order.

        Returns an empty list when the folder doesn't exist.

        Raises:
            StorageError: If the folder can't be read.
        """
        folder_path = self.resolve(folder)
        if not folder_path.is_dir():
            return []

        try:
            return [
                BackupEntry(path=child, last_modified=child.stat().st_mtime)
                for child in sorted(folder_path.iterdir())
            ]
        except OSError as e:
            raise StorageError(f"Failed to list {folder_path}: {e}") from e

    def create_folder(self, path: str | Path) -> None:
        folder_path = self.resolve(path)
        try:
            folder_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to create folder {folder_path}: {e}") from e
        logger.debug(f"Ensured folder exists: {folder_path}")

    def read_bytes(self, path: str | Path) -> bytes:
        """Read a file as raw bytes, leaving decoding to the caller.

        Raises:
            InputNotFoundError: If the file doesn't exist.
            StorageError: If the file can't be read.
        """
        file_path = self.resolve(path)
        try:
            return file_path.read_bytes()
        except FileNotFoundError as e:
            raise InputNotFoundError(f"Input file not found: {file_path}") from e
        except OSError as e:
            raise StorageError(f"Failed to read {file_path}: {e}") from e

    def write_new_file(self, path: str | Path, text: str) -> None:
        """Create a file that must not exist yet.

        Raises:
            AlreadyExistsError: If something is already at the path.
            StorageError: If the write fails.
        """
        file_path = self.resolve(path)
        try:
            with open(file_path, "x", encoding="utf-8") as f:
                f.write(text)
        except FileExistsError as e:
            raise AlreadyExistsError(f"File already exists: {file_path}") from e
        except OSError as e:
            raise StorageError(f"Failed to write {file_path}: {e}") from e

    def move(self, source: str | Path, target: str | Path) -> None:
        """Move a file, refusing to replace an existing target.

        Raises:
            AlreadyExistsError: If the target exists.
            StorageError: If the move fails.
        """
        source_path = self.resolve(source)
        target_path = self.resolve(target)
        if target_path.exists():
            raise AlreadyExistsError(f"Move target already exists: {target_path}")
        try:
            shutil.move(str(source_path), str(target_path))
        except OSError as e:
            raise StorageError(
                f"Failed to move {source_path} to {target_path}: {e}"
            ) from e

    def soft_delete(self, path: str | Path) -> Path:
        """Move an entry into the trash folder.

        Returns:
            Where the entry ended up.

        Raises:
            StorageError: If the entry can't be moved.
        """
        source_path = self.resolve(path)
        trash_dir = self.trash_dir
        self.create_folder(trash_dir)

        target_path = trash_dir / source_path.name
        counter = 1
        while target_path.exists():
            target_path = trash_dir / f"{source_path.stem}_{counter}{source_path.suffix}"
            counter += 1

        try:
            shutil.move(str(source_path), str(target_path))
        except OSError as e:
            raise StorageError(f"Failed to delete {source_path}: {e}") from e
        return target_path
