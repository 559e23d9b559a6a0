"""Rotate the previous output into timestamped backups."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from xbel_to_markdown.exceptions import StorageError
from xbel_to_markdown.storage import LocalStorage

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"


@dataclass
class RotationResult:
    """What a rotation did."""

    backup_path: Path | None = None
    deleted: list[Path] = field(default_factory=list)


class BackupRotator:
    """Archives an existing output file and prunes old backups.

    Backups are named ``<stem>-<YYYYmmddHHMMSS><suffix>`` using local time
    from ``clock``. Pruning keeps ``keep_count - 1`` entries: the count to
    delete is ``len(entries) - keep_count + 1``.
    """

    def __init__(
        self,
        storage: LocalStorage,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.storage = storage
        self.clock = clock

    def rotate(
        self, output_path: str | Path, backup_dir: str | Path, keep_count: int
    ) -> RotationResult:
        """Archive the output if it exists, then prune the backup folder.

        Raises:
            StorageError: If any folder creation, move or delete fails.
        """
        backup_path = self.archive(output_path, backup_dir)
        deleted = self.prune(backup_dir, keep_count)
        return RotationResult(backup_path=backup_path, deleted=deleted)

    def archive(self, output_path: str | Path, backup_dir: str | Path) -> Path | None:
        """Move an existing output file into the backup folder.

        Args:
            output_path: The output file to archive.
            backup_dir: Folder receiving the backup, created if missing.

        Returns:
            The backup path, or None when there was no output to archive.

        Raises:
            StorageError: If the folder is unsafe, can't be created, or the
                move fails.
        """
        output_path = Path(output_path)
        if not self.storage.exists(output_path):
            logger.debug(f"No existing output at {output_path}, nothing to back up")
            return None

        self.check_backup_dir(backup_dir)
        self.storage.create_folder(backup_dir)

        backup_path = self.backup_name(output_path, Path(backup_dir))
        self.storage.move(output_path, backup_path)
        logger.info(f"Backed up {output_path} to {backup_path}")
        return backup_path

    def backup_name(self, output_path: Path, backup_dir: Path) -> Path:
        """Choose a free backup path for the output file.

        A second backup within the same second gets a ``-1``, ``-2``, ...
        suffix after the timestamp.
        """
        timestamp = self.clock().strftime(TIMESTAMP_FORMAT)
        base = f"{output_path.stem}-{timestamp}"
        suffix = output_path.suffix

        candidate = backup_dir / f"{base}{suffix}"
        counter = 1
        while self.storage.exists(candidate):
            candidate = backup_dir / f"{base}-{counter}{suffix}"
            counter += 1
        return candidate

    def check_backup_dir(self, backup_dir: str | Path) -> None:
        """Refuse a backup folder whose pruning would reach unrelated files.

        Raises:
            StorageError: If the folder is the storage root or one of its
                parents, or holds the trash folder.
        """
        folder = self.storage.resolve(backup_dir).resolve()
        root = self.storage.root
        if folder == root or folder in root.parents:
            raise StorageError(f"Refusing to use storage root {folder} as backup folder")
        trash = self.storage.trash_dir
        if folder == trash or folder in trash.parents:
            raise StorageError(f"Backup folder {folder} contains the trash folder")

    def prune(self, backup_dir: str | Path, keep_count: int) -> list[Path]:
        """Delete the oldest backups beyond the retention count.

        Entries are ordered by modification time, oldest first; ties keep
        the storage listing order.

        Returns:
            Paths of the deleted entries.

        Raises:
            StorageError: If the folder is unsafe to prune, or listing or
                deleting fails.
        """
        self.check_backup_dir(backup_dir)
        entries = sorted(
            self.storage.list_children(backup_dir),
            key=lambda entry: entry.last_modified,
        )

        to_delete = len(entries) - keep_count + 1
        if to_delete <= 0:
            return []

        deleted: list[Path] = []
        for entry in entries[:to_delete]:
            self.storage.soft_delete(entry.path)
            logger.info(f"Deleted old backup: {entry.path.name}")
            deleted.append(entry.path)
        return deleted
