"""Parse XBEL bookmark exports into a raw nested document."""

from __future__ import annotations

from typing import Any

from lxml import etree

from xbel_to_markdown.exceptions import ParseError


class XbelParser:
    """Parses XBEL text into plain dicts.

    Each element becomes a mapping with an optional ``title`` plus
    ``folder`` and ``bookmark`` lists holding the element's direct children
    of those kinds, in document order. Keys are only present when the
    element has at least one such child, so callers can test for
    folder-bearing or bookmark-bearing nodes with ``in``. Bookmark leaves are
    ``{"href": ..., "title": ...}`` where either value may be None.
    """

    def __init__(self) -> None:
        self._parser = etree.XMLParser(
            resolve_entities=False,
            no_network=True,
            remove_comments=True,
        )

    def parse(self, data: bytes | str) -> dict[str, Any]:
        """Parse a whole XBEL document.

        Pass raw bytes where possible so lxml honours the encoding named in
        the XML declaration. Text is encoded as UTF-8 first.

        Args:
            data: The XML document.

        Returns:
            The raw document for the root element.

        Raises:
            ParseError: If the text is not well-formed XML.
        """
        try:
            if isinstance(data, str):
                data = data.encode("utf-8")
            root = etree.fromstring(data, self._parser)
        except etree.XMLSyntaxError as e:
            raise ParseError(f"Invalid XBEL document: {e}") from e

        return self._parse_node(root)

    def _parse_node(self, elem: etree._Element) -> dict[str, Any]:
        """Convert a folder-like element (the root or a <folder>)."""
        node: dict[str, Any] = {"title": self._get_title(elem)}

        folders = [self._parse_node(child) for child in elem.iterchildren("folder")]
        if folders:
            node["folder"] = folders

        bookmarks = [
            self._parse_bookmark(child) for child in elem.iterchildren("bookmark")
        ]
        if bookmarks:
            node["bookmark"] = bookmarks

        return node

    def _parse_bookmark(self, elem: etree._Element) -> dict[str, Any]:
        """Convert a <bookmark> element."""
        href = elem.get("href")
        return {
            "href": href.strip() if href else None,
            "title": self._get_title(elem),
        }

    def _get_title(self, elem: etree._Element) -> str | None:
        """Get the text of the first direct <title> child on a single line."""
        title_elem = elem.find("title")
        if title_elem is None:
            return None
        return " ".join("".join(title_elem.itertext()).split())
