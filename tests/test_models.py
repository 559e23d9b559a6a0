"""Tests for the bookmark tree model and normalization."""

from xbel_to_markdown.models import ROOT_TITLE, Folder, Link, normalize


class TestLink:
    """Tests for Link class."""

    def test_display_text_uses_title(self) -> None:
        """Title is shown when present."""
        link = Link(title="Example", target="https://example.com")
        assert link.display_text == "Example"

    def test_display_text_falls_back_to_target(self) -> None:
        """Empty title falls back to the target."""
        link = Link(title="", target="https://example.com")
        assert link.display_text == "https://example.com"


class TestFolder:
    """Tests for Folder class."""

    def test_links_and_folders(self) -> None:
        """links and folders split children by kind, keeping order."""
        a = Link("A", "https://a")
        sub = Folder("Sub", (Link("B", "https://b"),))
        c = Link("C", "https://c")
        folder = Folder("Root", (a, sub, c))

        assert list(folder.links) == [a, c]
        assert list(folder.folders) == [sub]

    def test_walk(self) -> None:
        """walk yields nodes depth-first."""
        b = Link("B", "https://b")
        sub = Folder("Sub", (b,))
        a = Link("A", "https://a")
        root = Folder("Root", (a, sub))

        assert list(root.walk()) == [root, a, sub, b]


class TestNormalize:
    """Tests for normalize."""

    def test_root_without_title_gets_placeholder(self) -> None:
        """Untitled root is named Bookmarks."""
        tree = normalize({"bookmark": [{"href": "https://a", "title": "A"}]})
        assert tree.title == ROOT_TITLE == "Bookmarks"

    def test_root_with_title(self) -> None:
        """Root title is kept."""
        tree = normalize({"title": "Mine", "bookmark": [{"href": "https://a"}]})
        assert tree.title == "Mine"

    def test_nested_folder_without_title_is_empty(self) -> None:
        """Only the root gets the placeholder."""
        tree = normalize(
            {"folder": [{"title": None, "bookmark": [{"href": "https://a"}]}]}
        )
        (sub,) = tree.children
        assert isinstance(sub, Folder)
        assert sub.title == ""

    def test_order_preserved(self) -> None:
        """Bookmarks and folders keep source order."""
        tree = normalize(
            {
                "bookmark": [
                    {"href": "https://1", "title": "One"},
                    {"href": "https://2", "title": "Two"},
                ],
                "folder": [
                    {"title": "X", "bookmark": [{"href": "https://x"}]},
                    {"title": "Y", "bookmark": [{"href": "https://y"}]},
                ],
            }
        )

        assert [link.title for link in tree.links] == ["One", "Two"]
        assert [folder.title for folder in tree.folders] == ["X", "Y"]

    def test_empty_nested_folder_dropped(self) -> None:
        """A folder with neither folders nor bookmarks is dropped."""
        tree = normalize(
            {
                "folder": [
                    {"title": "Empty"},
                    {"title": "Full", "bookmark": [{"href": "https://a"}]},
                ]
            }
        )

        assert [folder.title for folder in tree.folders] == ["Full"]

    def test_bookmark_without_href_skipped(self) -> None:
        """Malformed leaves are skipped silently."""
        tree = normalize(
            {
                "bookmark": [
                    {"title": "Broken"},
                    {"href": "", "title": "Also broken"},
                    {"href": "https://ok", "title": "OK"},
                ]
            }
        )

        assert tree.children == (Link("OK", "https://ok"),)

    def test_bookmark_without_title(self) -> None:
        """Missing bookmark title becomes empty."""
        tree = normalize({"bookmark": [{"href": "https://a", "title": None}]})
        assert tree.children == (Link("", "https://a"),)

    def test_unexpected_shapes_ignored(self) -> None:
        """Non-list and non-mapping entries don't break normalization."""
        tree = normalize({"bookmark": "oops", "folder": [42, None]})

        assert tree == Folder(ROOT_TITLE, ())

    def test_does_not_mutate_input(self) -> None:
        """The raw document is left untouched."""
        raw = {"folder": [{"title": "A", "bookmark": [{"href": "https://a"}]}]}
        snapshot = repr(raw)

        normalize(raw)

        assert repr(raw) == snapshot
