"""Bookmark tree model and normalization of raw parsed documents."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Union

logger = logging.getLogger(__name__)

ROOT_TITLE = "Bookmarks"


@dataclass(frozen=True)
class Link:
    """A single bookmark."""

    title: str
    target: str

    @property
    def display_text(self) -> str:
        """Title to show, falling back to the target when empty."""
        return self.title or self.target


@dataclass(frozen=True)
class Folder:
    """A bookmark folder containing links and sub-folders in source order."""

    title: str
    children: tuple[BookmarkNode, ...] = field(default_factory=tuple)

    @property
    def links(self) -> Iterator[Link]:
        """Direct link children, in order."""
        return (child for child in self.children if isinstance(child, Link))

    @property
    def folders(self) -> Iterator[Folder]:
        """Direct folder children, in order."""
        return (child for child in self.children if isinstance(child, Folder))

    def walk(self) -> Iterator[BookmarkNode]:
        """Iterate this folder and all descendants depth-first."""
        yield self
        for child in self.children:
            if isinstance(child, Folder):
                yield from child.walk()
            else:
                yield child


BookmarkNode = Union[Folder, Link]


def normalize(raw: Mapping[str, Any]) -> Folder:
    """Build a bookmark tree from a raw parsed document.

    Only the root gets the "Bookmarks" placeholder title; untitled nested
    folders keep an empty title. Nested nodes carrying neither folders nor
    bookmarks are dropped, and bookmarks without an href are skipped.

    Args:
        raw: Root mapping as produced by ``XbelParser.parse``.

    Returns:
        The root Folder.
    """
    return Folder(
        title=raw.get("title") or ROOT_TITLE,
        children=_normalize_children(raw),
    )


def _normalize_children(raw: Mapping[str, Any]) -> tuple[BookmarkNode, ...]:
    """Normalize the bookmark leaves and then the sub-folders of a raw node."""
    children: list[BookmarkNode] = []

    for leaf in _as_list(raw.get("bookmark")):
        link = _normalize_link(leaf)
        if link is not None:
            children.append(link)

    for sub in _as_list(raw.get("folder")):
        if not isinstance(sub, Mapping):
            continue
        if not sub.get("folder") and not sub.get("bookmark"):
            logger.debug(f"Dropping empty folder '{sub.get('title') or ''}'")
            continue
        children.append(
            Folder(title=sub.get("title") or "", children=_normalize_children(sub))
        )

    return tuple(children)


def _normalize_link(leaf: Any) -> Link | None:
    """Turn a raw bookmark leaf into a Link, or None when it has no target."""
    if not isinstance(leaf, Mapping):
        return None
    target = leaf.get("href")
    if not target:
        logger.debug(f"Skipping bookmark without href: {leaf.get('title')!r}")
        return None
    return Link(title=leaf.get("title") or "", target=target)


def _as_list(value: Any) -> list:
    """Treat a missing or non-list entry as empty."""
    if isinstance(value, list):
        return value
    return []
