"""Block renderer for thematic breaks."""

from PySide6.QtWidgets import QFrame, QWidget

from mdview.markdown_block_widget import BlockWidget
from mdview.markdown_document_node import MarkdownNode, MarkdownNodeKind


class ThematicBreakBlock(BlockWidget):
    """Displays a thematic break as a horizontal line."""

    def __init__(self) -> None:
        self._root = QFrame()
        self._root.setObjectName("ThematicBreakBlock")
        self._root.setFrameShape(QFrame.Shape.HLine)
        self._root.setFrameShadow(QFrame.Shadow.Sunken)

    def root(self) -> QWidget:
        return self._root

    def update(self, node: MarkdownNode) -> None:
        pass

    def accepts(self, node: MarkdownNode) -> bool:
        return node.kind == MarkdownNodeKind.THEMATIC_BREAK

    def duplicate(self) -> "ThematicBreakBlock":
        return ThematicBreakBlock()
