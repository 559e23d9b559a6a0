"""Settings and configuration loading for the converter."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from pathlib import Path

import yaml

from xbel_to_markdown.exceptions import ConfigError

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class LoggingSettings:
    """Logging configuration."""

    level: str = "INFO"
    file: str | None = None
    format: str = DEFAULT_LOG_FORMAT


@dataclass
class Settings:
    """Main settings container for the converter."""

    input_folder_path: str = ""
    input_file_name: str = "bookmarks.xbel"
    output_folder_path: str = ""
    output_file_name: str = "bookmarks.md"
    backup_folder_path: str = "backups"
    trash_folder_path: str = ".trash"
    keep_count: int = 5
    automatic_update: bool = False
    update_interval: int = 900
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    @property
    def input_path(self) -> Path:
        """Full path of the XBEL file."""
        return Path(self.input_folder_path) / self.input_file_name

    @property
    def output_path(self) -> Path:
        """Full path of the generated Markdown file."""
        return Path(self.output_folder_path) / self.output_file_name

    @property
    def backup_path(self) -> Path:
        """Folder receiving rotated backups."""
        return Path(self.backup_folder_path)

    @classmethod
    def load(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file.

        Args:
            path: Path to the settings YAML file.

        Returns:
            Settings instance populated from the file.

        Raises:
            FileNotFoundError: If the settings file doesn't exist.
            yaml.YAMLError: If the file contains invalid YAML.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Settings file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> "Settings":
        """Create Settings from a dictionary."""
        logging_data = data.get("logging", {})
        logging_settings = LoggingSettings(
            level=logging_data.get("level", "INFO"),
            file=logging_data.get("file"),
            format=logging_data.get("format", DEFAULT_LOG_FORMAT),
        )

        return cls(
            input_folder_path=str(data.get("input_folder_path", "")),
            input_file_name=str(data.get("input_file_name", "bookmarks.xbel")),
            output_folder_path=str(data.get("output_folder_path", "")),
            output_file_name=str(data.get("output_file_name", "bookmarks.md")),
            backup_folder_path=str(data.get("backup_folder_path", "backups")),
            trash_folder_path=str(data.get("trash_folder_path", ".trash")),
            keep_count=int(data.get("keep_count", 5)),
            automatic_update=bool(data.get("automatic_update", False)),
            update_interval=int(data.get("update_interval", 900)),
            logging=logging_settings,
        )

    @classmethod
    def default(cls) -> "Settings":
        """Create Settings with default values."""
        return cls()

    def save(self, path: str | Path) -> None:
        """Write settings to a YAML file, creating its folder if needed."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.safe_dump(asdict(self), f, sort_keys=False)

    def update(self, key: str, value: str) -> None:
        """Set a top-level field from its string form.

        The value is coerced to the type of the field's current value, so
        ``keep_count`` gets an int and ``automatic_update`` a bool.

        Raises:
            ConfigError: If the key is unknown or the value can't be coerced.
        """
        names = {f.name for f in fields(self) if f.name != "logging"}
        if key not in names:
            raise ConfigError(f"Unknown setting: {key}")

        current = getattr(self, key)
        if isinstance(current, bool):
            lowered = value.strip().lower()
            if lowered in ("true", "yes", "on", "1"):
                coerced: object = True
            elif lowered in ("false", "no", "off", "0"):
                coerced = False
            else:
                raise ConfigError(f"Expected a boolean for {key}, got {value!r}")
        elif isinstance(current, int):
            try:
                coerced = int(value, 10)
            except ValueError:
                raise ConfigError(f"Expected an integer for {key}, got {value!r}") from None
        else:
            coerced = value

        setattr(self, key, coerced)
        self.validate()

    def validate(self, config_path: str | Path | None = None) -> None:
        """Check value ranges and that pruning can't reach unrelated files.

        The backup folder is pruned of everything but its newest entries, so
        it may not be the working folder itself, nor contain the input, the
        output, the config file or the trash folder.

        Args:
            config_path: The settings file, when loaded from one.

        Raises:
            ConfigError: If a value is out of range or the backup folder is
                unsafe.
        """
        if self.keep_count < 0:
            raise ConfigError(f"keep_count must be non-negative, got {self.keep_count}")
        if self.update_interval <= 0:
            raise ConfigError(
                f"update_interval must be positive, got {self.update_interval}"
            )

        backup = Path(self.backup_folder_path).resolve()
        if backup == Path.cwd().resolve():
            raise ConfigError(
                "backup_folder_path must be a dedicated folder, not the working folder"
            )

        guarded = {
            "input file": self.input_path,
            "output file": self.output_path,
            "trash folder": Path(self.trash_folder_path),
        }
        if config_path is not None:
            guarded["config file"] = Path(config_path)

        for label, path in guarded.items():
            if is_within(path.resolve(), backup):
                raise ConfigError(
                    f"backup_folder_path {self.backup_folder_path!r} contains the {label}"
                )


def is_within(path: Path, folder: Path) -> bool:
    """True if ``path`` is ``folder`` or lies somewhere below it."""
    return path == folder or folder in path.parents
