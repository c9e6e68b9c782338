"""Widget that renders markdown text as a vertical stack of reusable blocks."""

import logging
from typing import Any, Callable, List, Tuple, cast

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QVBoxLayout, QWidget

from mdview.blocks.code_block import CodeBlock
from mdview.blocks.marker_block import MarkerBlockRoot
from mdview.blocks.table_block import TableBlock
from mdview.blocks.text_block import TEXT_BLOCK_KINDS, TextBlock
from mdview.blocks.thematic_break_block import ThematicBreakBlock
from mdview.markdown_block_flattener import RenderBuffer
from mdview.markdown_block_registry import MarkdownBlockHost, MarkdownBlockRegistry
from mdview.markdown_block_widget import BlockWidget, BlockWidgetFactory
from mdview.markdown_document_node import MarkdownNodeKind
from mdview.markdown_document_parser import MarkdownDocumentParser
from mdview.markdown_render_block import RenderMarker
from mdview.markdown_view_error import MarkdownParseError
from mdview.markdown_view_settings import MarkdownViewSettings


class MarkdownViewHost(MarkdownBlockHost):
    """Places block roots into a vertical layout."""

    def __init__(self, layout: QVBoxLayout, settings: MarkdownViewSettings) -> None:
        self._layout = layout
        self._settings = settings

    def insert_block_root(self, index: int, root: Any) -> None:
        self._layout.insertWidget(index, cast(QWidget, root))

    def remove_block_root(self, root: Any) -> None:
        widget = cast(QWidget, root)
        self._layout.removeWidget(widget)
        widget.setParent(None)  # type: ignore[call-overload]
        widget.deleteLater()

    def wrap_with_marker(self, root: Any, marker: RenderMarker) -> Tuple[Any, int]:
        wrapper = MarkerBlockRoot(cast(QWidget, root), marker, self._settings.marker_spacing, self._settings.bullet)
        return wrapper, wrapper.marker_width()

    def update_marker(self, root: Any, marker: RenderMarker) -> int:
        return cast(MarkerBlockRoot, root).set_marker(marker)

    def set_block_inset(self, root: Any, inset: int) -> None:
        widget = cast(QWidget, root)
        margins = widget.contentsMargins()
        if margins.left() != inset:
            widget.setContentsMargins(inset, margins.top(), margins.right(), margins.bottom())


class MarkdownView(QWidget):
    """
    Displays markdown text as a stack of block widgets.

    Every change of text reparses and re-flattens the whole document, but block
    widgets are reused by position wherever the kind of block there is unchanged,
    so scroll position, selections and focus survive edits.
    """

    markdown_changed = Signal(str)

    def __init__(self, parent: QWidget | None = None, settings: MarkdownViewSettings | None = None) -> None:
        """
        Initialize the markdown view.

        Args:
            parent: Optional parent widget
            settings: Optional layout and style settings
        """
        super().__init__(parent)
        self.setObjectName("MarkdownView")

        self._logger = logging.getLogger("MarkdownView")
        self._settings = settings or MarkdownViewSettings.create_default()
        self._markdown = ""

        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(0, 0, 0, 0)
        self._layout.setSpacing(self._settings.block_spacing)
        self._layout.setAlignment(Qt.AlignmentFlag.AlignTop)

        self._parser = MarkdownDocumentParser()
        self._buffer = RenderBuffer()
        self._code_block_callback: Callable[[CodeBlock], None] | None = None

        # Renderers in priority order; no widget exists until a block needs one
        settings = self._settings
        factories = [
            BlockWidgetFactory(TEXT_BLOCK_KINDS, lambda: TextBlock(settings)),
            BlockWidgetFactory([MarkdownNodeKind.CODE], lambda: CodeBlock(settings)),
            BlockWidgetFactory([MarkdownNodeKind.TABLE], TableBlock),
            BlockWidgetFactory([MarkdownNodeKind.THEMATIC_BREAK], ThematicBreakBlock),
        ]

        self._registry = MarkdownBlockRegistry(
            MarkdownViewHost(self._layout, self._settings),
            factories,
            depth_indent=self._settings.depth_indent,
            marker_spacing=self._settings.marker_spacing,
            created_callback=self._on_block_created
        )

    def settings(self) -> MarkdownViewSettings:
        return self._settings

    def markdown(self) -> str:
        """Get the markdown text currently bound to this view."""
        return self._markdown

    def set_markdown(self, text: str) -> None:
        """
        Set the markdown text, re-rendering if it changed.

        Args:
            text: The new markdown text
        """
        if text == self._markdown:
            return

        self._markdown = text
        self.markdown_changed.emit(text)
        self.render_markdown(text)

    def set_code_block_callback(self, callback: Callable[[CodeBlock], None] | None) -> None:
        """
        Set a function that is run on each new code block before it is first displayed.

        Args:
            callback: The function to run, or None to remove it
        """
        self._code_block_callback = callback

    def blocks(self) -> List[BlockWidget]:
        """Get the live block renderers in document order."""
        return [entry.block for entry in self._registry.entries()]

    def block_roots(self) -> List[QWidget]:
        """Get the widgets in the view's layout, front to back."""
        roots = []
        for i in range(self._layout.count()):
            item = self._layout.itemAt(i)
            widget = item.widget() if item is not None else None
            if widget is not None:
                roots.append(widget)

        return roots

    def block_count(self) -> int:
        return len(self._registry)

    def render_markdown(self, text: str) -> bool:
        """
        Render markdown text, reusing existing block widgets where possible.

        Args:
            text: The markdown text to render

        Returns:
            True if the text was rendered, False if it could not be parsed, in which
            case the previous content is left on display
        """
        try:
            document = self._parser.parse(text)

        except MarkdownParseError:
            self._logger.exception("Failed to parse markdown")
            return False

        self._buffer.set(document)
        result = self._registry.reconcile(self._buffer.blocks)
        self._logger.debug(
            "Rendered %d blocks: %d created, %d reused, %d evicted, %d skipped",
            len(self._buffer), result.created, result.reused, result.evicted, result.skipped
        )
        return True

    def _on_block_created(self, block: BlockWidget) -> None:
        if self._code_block_callback is not None and isinstance(block, CodeBlock):
            self._code_block_callback(block)
