"""Wrapper widget that shows a list marker beside a block's display root."""

from PySide6.QtCore import Qt
from PySide6.QtGui import QFontMetrics
from PySide6.QtWidgets import QHBoxLayout, QLabel, QWidget

from mdview.markdown_render_block import RenderMarker


class MarkerBlockRoot(QWidget):
    """A bullet or ordinal label followed by the wrapped content."""

    def __init__(self, content: QWidget, marker: RenderMarker, spacing: int = 4, bullet: str = "•") -> None:
        """
        Initialize the wrapper.

        Args:
            content: The display root of the block being wrapped
            marker: The marker to show
            spacing: Gap between the marker and the content
            bullet: Glyph used for bullet markers
        """
        super().__init__()
        self.setObjectName("MarkerBlockRoot")
        self._bullet = bullet
        self._marker_width = 0

        self._layout = QHBoxLayout(self)
        self._layout.setContentsMargins(0, 0, 0, 0)
        self._layout.setSpacing(spacing)

        self._marker_label = QLabel()
        self._marker_label.setObjectName("MarkerLabel")
        self._marker_label.setTextFormat(Qt.TextFormat.PlainText)
        self._marker_label.setAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop)
        self._layout.addWidget(self._marker_label, 0, Qt.AlignmentFlag.AlignTop)

        self._content = content
        self._layout.addWidget(content, 1)

        self.set_marker(marker)

    def content(self) -> QWidget:
        return self._content

    def marker_label(self) -> QLabel:
        return self._marker_label

    def marker_width(self) -> int:
        """Get the measured width of the marker text."""
        return self._marker_width

    def set_marker(self, marker: RenderMarker) -> int:
        """
        Show a new marker.

        The width is measured from the label's text and font, not from its laid-out
        geometry, so it is correct before the widget has ever been shown.

        Returns:
            The measured marker width
        """
        text = marker.label(self._bullet)
        if self._marker_label.text() != text:
            self._marker_label.setText(text)

        self._marker_width = QFontMetrics(self._marker_label.font()).horizontalAdvance(text)
        return self._marker_width
