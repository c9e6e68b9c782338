"""Block renderer for code blocks."""

import logging
from typing import Callable

from PySide6.QtCore import QRect, QSize, Qt
from PySide6.QtGui import QFontDatabase, QPainter, QPaintEvent, QResizeEvent, QTextOption
from PySide6.QtWidgets import QFrame, QLabel, QPlainTextEdit, QSizePolicy, QVBoxLayout, QWidget

from mdview.blocks.code_block_highlighter import CodeBlockHighlighter
from mdview.markdown_block_widget import BlockWidget
from mdview.markdown_document_node import MarkdownCodeNode, MarkdownNode, MarkdownNodeKind
from mdview.markdown_view_settings import MarkdownViewSettings


class CodeLineNumberArea(QWidget):
    """Widget that displays line numbers beside a code view."""

    def __init__(self, parent: QWidget, width: Callable[[], int], paint: Callable[[QPaintEvent], None]) -> None:
        super().__init__(parent)
        self._width = width
        self._paint = paint

    def sizeHint(self) -> QSize:  # pylint: disable=invalid-name
        """Get the needed width for the widget."""
        return QSize(self._width(), 0)

    def paintEvent(self, event: QPaintEvent) -> None:  # pylint: disable=invalid-name
        """Paint the line numbers."""
        self._paint(event)


class CodeTextEdit(QPlainTextEdit):
    """Read-only, non-wrapping text view for code with an optional line-number gutter."""

    def __init__(self, settings: MarkdownViewSettings, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._settings = settings

        self.setReadOnly(True)
        self.setWordWrapMode(QTextOption.WrapMode.NoWrap)
        self.setFrameStyle(QFrame.Shape.NoFrame)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAsNeeded)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAsNeeded)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
        self.setFont(QFontDatabase.systemFont(QFontDatabase.SystemFont.FixedFont))
        self.setTabStopDistance(self.fontMetrics().horizontalAdvance(' ') * settings.code_tab_width)

        self._line_number_area: CodeLineNumberArea | None = None
        if settings.code_line_numbers:
            self._line_number_area = CodeLineNumberArea(
                self, self.line_number_area_width, self._line_number_area_paint_event
            )
            self.blockCountChanged.connect(self._update_line_number_area_width)
            self.updateRequest.connect(self._update_line_number_area)
            self._update_line_number_area_width()

    def line_number_area_width(self) -> int:
        """Calculate the width needed for the line number area."""
        if self._line_number_area is None:
            return 0

        digits = len(str(max(1, self.blockCount())))
        digit_width = self.fontMetrics().horizontalAdvance('9')
        return digit_width * (digits + 2)

    def fit_height(self) -> None:
        """Size the view to its content, up to the configured maximum height."""
        line_height = self.fontMetrics().lineSpacing()
        margins = self.contentsMargins()
        height = self.blockCount() * line_height + int(self.document().documentMargin() * 2)
        height += margins.top() + margins.bottom()
        if self.horizontalScrollBar().isVisible():
            height += self.horizontalScrollBar().sizeHint().height()

        self.setFixedHeight(min(height, self._settings.code_max_height))

    def _update_line_number_area_width(self, _count: int = 0) -> None:
        self.setViewportMargins(self.line_number_area_width(), 0, 0, 0)

    def _update_line_number_area(self, rect: QRect, dy: int) -> None:
        if self._line_number_area is None:
            return

        if dy:
            self._line_number_area.scroll(0, dy)

        else:
            self._line_number_area.update(0, rect.y(), self._line_number_area.width(), rect.height())

        if rect.contains(self.viewport().rect()):
            self._update_line_number_area_width()

    def resizeEvent(self, e: QResizeEvent) -> None:  # pylint: disable=invalid-name
        """Keep the line number area alongside the viewport."""
        super().resizeEvent(e)
        if self._line_number_area is None:
            return

        cr = self.contentsRect()
        self._line_number_area.setGeometry(cr.left(), cr.top(), self.line_number_area_width(), cr.height())

    def _line_number_area_paint_event(self, event: QPaintEvent) -> None:
        assert self._line_number_area is not None
        painter = QPainter(self._line_number_area)
        painter.fillRect(event.rect(), self.palette().alternateBase())
        painter.setPen(self.palette().placeholderText().color())
        painter.setFont(self.font())

        block = self.firstVisibleBlock()
        block_number = block.blockNumber()
        offset = self.contentOffset()
        top = self.blockBoundingGeometry(block).translated(offset).top()
        bottom = top + self.blockBoundingRect(block).height()
        padding = self.fontMetrics().horizontalAdvance('9')

        while block.isValid() and top <= event.rect().bottom():
            if block.isVisible() and bottom >= event.rect().top():
                text_rect = QRect(0, int(top), self._line_number_area.width() - padding, self.fontMetrics().height())
                painter.drawText(text_rect, Qt.AlignmentFlag.AlignRight, str(block_number + 1))

            block = block.next()
            top = bottom
            bottom = top + self.blockBoundingRect(block).height()
            block_number += 1

        painter.end()


class CodeBlock(BlockWidget):
    """Displays a code block with a language header and syntax highlighting."""

    def __init__(self, settings: MarkdownViewSettings) -> None:
        """
        Initialize the code block.

        Args:
            settings: View settings, used for the code style, tab width and height limit
        """
        self._logger = logging.getLogger("CodeBlock")
        self._settings = settings

        self._container = QFrame()
        self._container.setObjectName("CodeBlock")
        self._container.setFrameStyle(QFrame.Shape.StyledPanel | QFrame.Shadow.Plain)
        self._layout = QVBoxLayout(self._container)
        self._layout.setContentsMargins(0, 0, 0, 0)
        self._layout.setSpacing(0)

        self._language_header = QLabel()
        self._language_header.setObjectName("CodeBlockLanguage")
        self._language_header.setVisible(False)
        self._layout.addWidget(self._language_header)

        self._text_edit = CodeTextEdit(settings)
        self._layout.addWidget(self._text_edit)

        self._highlighter = CodeBlockHighlighter(self._text_edit.document(), settings.code_style)
        self._text = ""

        palette = self._text_edit.palette()
        palette.setColor(self._text_edit.backgroundRole(), self._highlighter.background_color())
        self._text_edit.setPalette(palette)
        self._text_edit.fit_height()

    def root(self) -> QWidget:
        return self._container

    def text_edit(self) -> QPlainTextEdit:
        """Get the text view showing the code."""
        return self._text_edit

    def language_header(self) -> QLabel:
        return self._language_header

    def language(self) -> str | None:
        return self._highlighter.language()

    def text(self) -> str:
        return self._text

    def update(self, node: MarkdownNode) -> None:
        if not isinstance(node, MarkdownCodeNode):
            return

        language_changed = self._set_language(node.language)

        # Only overwrite the text if it has changed
        if node.content == self._text and not language_changed:
            return

        self._text = node.content

        # Tokens must be ready before the text changes, as setting it highlights every line
        self._highlighter.set_code(node.content)
        if self._text_edit.toPlainText() != node.content:
            self._text_edit.setPlainText(node.content)

        else:
            self._highlighter.rehighlight()

        self._text_edit.fit_height()

    def accepts(self, node: MarkdownNode) -> bool:
        return node.kind == MarkdownNodeKind.CODE

    def duplicate(self) -> "CodeBlock":
        return CodeBlock(self._settings)

    def _set_language(self, language: str | None) -> bool:
        if not self._highlighter.set_language(language):
            return False

        self._language_header.setText(language or "")
        self._language_header.setVisible(bool(language))
        return True
