"""Fake renderers and host container for exercising the block registry without Qt."""

from typing import Any, Iterable, List, Tuple

from mdview import BlockWidget, BlockWidgetFactory, MarkdownBlockHost, MarkdownNode, MarkdownNodeKind, RenderMarker


FAKE_MARKER_GLYPH_WIDTH = 7


class FakeRoot:
    """Stands in for a display widget."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.inset = 0

    def __repr__(self) -> str:
        return f"FakeRoot({self.name!r})"


class FakeMarkerRoot(FakeRoot):
    """Stands in for a marker wrapper widget."""

    def __init__(self, content: FakeRoot, marker: RenderMarker) -> None:
        super().__init__(f"marker:{content.name}")
        self.content = content
        self.marker = marker

    def width(self) -> int:
        return FAKE_MARKER_GLYPH_WIDTH * len(self.marker.label())


class FakeBlock(BlockWidget):
    """Renderer that records how it is driven."""

    def __init__(self, name: str, kinds: Iterable[MarkdownNodeKind]) -> None:
        self.name = name
        self.kinds = frozenset(kinds)
        self.content: str | None = None
        self.update_calls = 0
        self.content_changes = 0
        self._root = FakeRoot(name)

    def root(self) -> Any:
        return self._root

    def update(self, node: MarkdownNode) -> None:
        self.update_calls += 1
        text = node.text_content()
        if text == self.content:
            return

        self.content = text
        self.content_changes += 1

    def accepts(self, node: MarkdownNode) -> bool:
        return node.kind in self.kinds

    def duplicate(self) -> "FakeBlock":
        return FakeBlock(self.name, self.kinds)


class FakeHost(MarkdownBlockHost):
    """Container that keeps its children in a list."""

    def __init__(self) -> None:
        self.children: List[Any] = []
        self.inserted: List[Tuple[int, Any]] = []
        self.removed: List[Any] = []

    def insert_block_root(self, index: int, root: Any) -> None:
        self.children.insert(index, root)
        self.inserted.append((index, root))

    def remove_block_root(self, root: Any) -> None:
        self.children.remove(root)
        self.removed.append(root)

    def wrap_with_marker(self, root: Any, marker: RenderMarker) -> Tuple[Any, int]:
        wrapper = FakeMarkerRoot(root, marker)
        return wrapper, wrapper.width()

    def update_marker(self, root: Any, marker: RenderMarker) -> int:
        root.marker = marker
        return root.width()

    def set_block_inset(self, root: Any, inset: int) -> None:
        root.inset = inset


def fake_factories(include_table: bool = True) -> List[BlockWidgetFactory]:
    """Create fake renderer factories in the standard priority order."""
    text_kinds = [MarkdownNodeKind.PARAGRAPH, MarkdownNodeKind.HEADING]
    factories = [
        BlockWidgetFactory.from_template(text_kinds, FakeBlock("text", text_kinds)),
        BlockWidgetFactory.from_template([MarkdownNodeKind.CODE], FakeBlock("code", [MarkdownNodeKind.CODE])),
    ]
    if include_table:
        factories.append(
            BlockWidgetFactory.from_template([MarkdownNodeKind.TABLE], FakeBlock("table", [MarkdownNodeKind.TABLE]))
        )

    factories.append(BlockWidgetFactory.from_template(
        [MarkdownNodeKind.THEMATIC_BREAK], FakeBlock("break", [MarkdownNodeKind.THEMATIC_BREAK])
    ))
    return factories
