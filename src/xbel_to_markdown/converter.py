"""Render a bookmark tree as heading-structured Markdown."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from xbel_to_markdown.models import Folder, Link


@dataclass
class ConversionResult:
    """Result of converting a bookmark tree."""

    markdown: str
    folders: int = 0
    links: int = 0


class MarkdownConverter:
    """Converts a normalized bookmark tree to Markdown.

    Each non-empty folder becomes a heading whose level is its depth plus
    one, followed by one ``[title](target)`` line per bookmark and then its
    sub-folders. Heading levels are not capped at six.
    """

    def convert(self, root: Folder) -> ConversionResult:
        """Convert a whole tree, counting what was emitted.

        Args:
            root: The root folder from ``normalize``.

        Returns:
            ConversionResult with the Markdown text and node counts.
        """
        folders = 0
        links = 0
        lines: list[str] = []

        for line in self.iter_lines(root):
            if line.startswith("#"):
                folders += 1
            elif line:
                links += 1
            lines.append(line)

        return ConversionResult(
            markdown="".join(f"{line}\n" for line in lines),
            folders=folders,
            links=links,
        )

    def render(self, node: Folder, depth: int = 0) -> str:
        """Render a folder and its descendants as Markdown text."""
        return "".join(f"{line}\n" for line in self.iter_lines(node, depth))

    def iter_lines(self, node: Folder, depth: int = 0) -> Iterator[str]:
        """Lazily yield the Markdown lines for a folder, without newlines."""
        if not node.children:
            return

        if depth > 0:
            yield ""

        yield f"{'#' * (depth + 1)} {single_line(node.title)}"

        for link in node.links:
            yield self._format_link(link)

        for folder in node.folders:
            yield from self.iter_lines(folder, depth + 1)

    def _format_link(self, link: Link) -> str:
        """Format a bookmark as a Markdown link."""
        return f"[{single_line(link.display_text)}]({link.target})"


def render(node: Folder, depth: int = 0) -> str:
    """Render a bookmark tree with a default converter."""
    return MarkdownConverter().render(node, depth)


def single_line(text: str) -> str:
    """Collapse runs of whitespace, newlines included, into single spaces."""
    return " ".join(text.split())
