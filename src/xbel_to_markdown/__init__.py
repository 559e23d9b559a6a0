"""XBEL Bookmarks to Markdown Converter.

A Python library and CLI tool for turning an XBEL bookmark export into a
single heading-structured Markdown file, keeping rotated backups of the
previous output.
"""

from xbel_to_markdown.config import Settings
from xbel_to_markdown.models import Folder, Link, normalize
from xbel_to_markdown.xbel_parser import XbelParser
from xbel_to_markdown.converter import ConversionResult, MarkdownConverter, render
from xbel_to_markdown.backup import BackupRotator, RotationResult
from xbel_to_markdown.builder import BookmarkBuilder, RunResult

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "Folder",
    "Link",
    "normalize",
    "XbelParser",
    "MarkdownConverter",
    "ConversionResult",
    "render",
    "BackupRotator",
    "RotationResult",
    "BookmarkBuilder",
    "RunResult",
]
