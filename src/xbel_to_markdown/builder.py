"""Run orchestration: rotate backups, read, parse, convert and write."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from xbel_to_markdown.backup import BackupRotator
from xbel_to_markdown.config import Settings
from xbel_to_markdown.converter import MarkdownConverter
from xbel_to_markdown.exceptions import ConversionError
from xbel_to_markdown.models import normalize
from xbel_to_markdown.storage import LocalStorage
from xbel_to_markdown.xbel_parser import XbelParser

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Result of a single conversion run."""

    success: bool
    output_path: Path
    backup_path: Path | None = None
    deleted_backups: list[Path] = field(default_factory=list)
    folders: int = 0
    links: int = 0
    total_time_ms: int = 0
    error: ConversionError | None = None


class BookmarkBuilder:
    """Orchestrates a conversion run.

    Runs are not reentrant. Callers that trigger runs from several places
    (manual, startup, periodic) must make sure they don't overlap.
    """

    def __init__(
        self,
        storage: LocalStorage | None = None,
        parser: XbelParser | None = None,
        converter: MarkdownConverter | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.storage = storage or LocalStorage()
        self.parser = parser or XbelParser()
        self.converter = converter or MarkdownConverter()
        self.rotator = BackupRotator(self.storage, clock=clock)

    @classmethod
    def from_settings(cls, settings: Settings) -> "BookmarkBuilder":
        """Create a builder whose storage uses the configured trash folder."""
        return cls(storage=LocalStorage(trash_dir=settings.trash_folder_path))

    def run_settings(self, settings: Settings) -> RunResult:
        """Run with the paths and retention count from settings."""
        return self.run(
            settings.input_path,
            settings.output_path,
            settings.backup_path,
            settings.keep_count,
        )

    def run(
        self,
        input_path: str | Path,
        output_path: str | Path,
        backup_dir: str | Path,
        keep_count: int,
    ) -> RunResult:
        """Regenerate the Markdown output from the XBEL input.

        The existing output is archived and old backups pruned before the
        input is read. Any failure stops the run at that step; side effects
        already committed (such as a new backup) are kept.

        Args:
            input_path: The XBEL file.
            output_path: The Markdown file to regenerate.
            backup_dir: Folder holding rotated backups.
            keep_count: Retention count for backups.

        Returns:
            RunResult; on failure ``success`` is False and ``error`` is set.
        """
        start_time = time.time()
        input_path = Path(input_path)
        output_path = Path(output_path)
        result = RunResult(success=False, output_path=output_path)

        logger.info(f"Starting conversion of {input_path.name}")

        try:
            self.storage.create_folder(output_path.parent)

            rotation = self.rotator.rotate(output_path, backup_dir, keep_count)
            result.backup_path = rotation.backup_path
            result.deleted_backups = rotation.deleted

            data = self.storage.read_bytes(input_path)
            raw = self.parser.parse(data)
            tree = normalize(raw)
            conversion = self.converter.convert(tree)

            self.storage.write_new_file(output_path, conversion.markdown)
        except ConversionError as e:
            logger.error(f"Conversion failed: {e}")
            result.error = e
            result.total_time_ms = int((time.time() - start_time) * 1000)
            return result

        result.success = True
        result.folders = conversion.folders
        result.links = conversion.links
        result.total_time_ms = int((time.time() - start_time) * 1000)

        logger.info(
            f"Conversion complete: {conversion.folders} folders, "
            f"{conversion.links} links written to {output_path}, "
            f"{result.total_time_ms}ms"
        )
        return result
