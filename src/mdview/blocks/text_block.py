"""Block renderer for paragraphs and headings."""

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QLabel, QSizePolicy, QWidget

from mdview.markdown_block_widget import BlockWidget
from mdview.markdown_document_node import MarkdownHeadingNode, MarkdownNode, MarkdownNodeKind
from mdview.markdown_inline_markup import inline_nodes_to_markup
from mdview.markdown_view_settings import MarkdownViewSettings


TEXT_BLOCK_KINDS = (MarkdownNodeKind.PARAGRAPH, MarkdownNodeKind.HEADING)


class TextBlockLabel(QLabel):
    """Selectable, word-wrapping label that shows rich-text markup with whitespace preserved."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("TextBlockLabel")
        self.setTextFormat(Qt.TextFormat.RichText)
        self.setAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop)
        self.setWordWrap(True)
        self.setOpenExternalLinks(True)
        self.setTextInteractionFlags(
            Qt.TextInteractionFlag.TextSelectableByMouse | Qt.TextInteractionFlag.LinksAccessibleByMouse
        )
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Minimum)


class TextBlock(BlockWidget):
    """Displays a paragraph or a heading as a single label."""

    def __init__(self, settings: MarkdownViewSettings) -> None:
        """
        Initialize the text block.

        Args:
            settings: View settings, used for heading sizes
        """
        self._settings = settings
        self._label = TextBlockLabel()
        self._base_point_size = self._label.font().pointSizeF()
        if self._base_point_size <= 0:
            # Pixel-sized fonts report no point size
            self._base_point_size = 10.0

        self._markup = ""
        self._heading_level: int | None = None

    def root(self) -> QWidget:
        return self._label

    def label(self) -> QLabel:
        """Get the label used to display the text."""
        return self._label

    def markup(self) -> str:
        """Get the markup currently displayed, without the whitespace wrapper."""
        return self._markup

    def update(self, node: MarkdownNode) -> None:
        if node.kind not in TEXT_BLOCK_KINDS:
            return

        level = node.level if isinstance(node, MarkdownHeadingNode) else None
        self._set_heading_level(level)

        markup = inline_nodes_to_markup(node.children)

        # Only overwrite the label's text if it has changed
        if markup == self._markup:
            return

        self._markup = markup
        self._label.setText(f'<span style="white-space: pre-wrap;">{markup}</span>')

    def accepts(self, node: MarkdownNode) -> bool:
        return node.kind in TEXT_BLOCK_KINDS

    def duplicate(self) -> "TextBlock":
        return TextBlock(self._settings)

    def _set_heading_level(self, level: int | None) -> None:
        if level == self._heading_level:
            return

        self._heading_level = level
        font = self._label.font()
        if level is None:
            font.setPointSizeF(self._base_point_size)
            font.setBold(False)

        else:
            font.setPointSizeF(self._base_point_size * self._settings.heading_scale(level))
            font.setBold(True)

        self._label.setFont(font)
