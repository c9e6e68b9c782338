"""Block renderer for tables."""

import logging
from typing import List

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QFrame, QGridLayout, QLabel, QSizePolicy, QWidget

from mdview.markdown_block_widget import BlockWidget
from mdview.markdown_document_node import MarkdownNode, MarkdownNodeKind, MarkdownTableCellNode
from mdview.markdown_inline_markup import inline_nodes_to_markup


CELL_ALIGNMENTS = {
    "left": Qt.AlignmentFlag.AlignLeft,
    "center": Qt.AlignmentFlag.AlignHCenter,
    "right": Qt.AlignmentFlag.AlignRight,
}


def table_cell_markup(cell: MarkdownNode) -> str:
    """Get the markup for one table cell, with header cells in bold."""
    markup = inline_nodes_to_markup(cell.children)
    if isinstance(cell, MarkdownTableCellNode) and cell.is_header:
        return f"<b>{markup}</b>"

    return markup


class TableBlock(BlockWidget):
    """
    Displays a table as a grid of labels.

    The grid is always rectangular: every row is padded or trimmed to the column
    count of the first row, so jagged tables show empty cells rather than failing.
    """

    def __init__(self) -> None:
        self._logger = logging.getLogger("TableBlock")

        self._root = QFrame()
        self._root.setObjectName("TableBlock")
        self._root.setFrameStyle(QFrame.Shape.StyledPanel | QFrame.Shadow.Plain)
        self._layout = QGridLayout(self._root)
        self._layout.setContentsMargins(0, 0, 0, 0)
        self._layout.setHorizontalSpacing(0)
        self._layout.setVerticalSpacing(0)

        # Labels for each row, plus the markup each one currently shows
        self._rows: List[List[QLabel]] = []
        self._markup: List[List[str]] = []

    def root(self) -> QWidget:
        return self._root

    def row_count(self) -> int:
        return len(self._rows)

    def column_count(self) -> int:
        return len(self._rows[0]) if self._rows else 0

    def cell_markup(self, row: int, column: int) -> str:
        """Get the markup currently shown in a cell."""
        return self._markup[row][column]

    def update(self, node: MarkdownNode) -> None:
        if node.kind != MarkdownNodeKind.TABLE:
            return

        rows = node.children
        column_count = len(rows[0].children) if rows else 0
        if any(len(row.children) != column_count for row in rows):
            self._logger.debug("Normalizing jagged table to %d columns", column_count)

        self._ensure_shape(len(rows), column_count)

        for r, row in enumerate(rows):
            for c in range(column_count):
                cell = row.children[c] if c < len(row.children) else None
                markup = table_cell_markup(cell) if cell is not None else ""

                # Only overwrite the label's text if it has changed
                if markup != self._markup[r][c]:
                    self._markup[r][c] = markup
                    self._rows[r][c].setText(markup)

                alignment = getattr(cell, "alignment", None)
                self._rows[r][c].setAlignment(
                    CELL_ALIGNMENTS.get(alignment or "left", Qt.AlignmentFlag.AlignLeft) | Qt.AlignmentFlag.AlignTop
                )

    def accepts(self, node: MarkdownNode) -> bool:
        return node.kind == MarkdownNodeKind.TABLE

    def duplicate(self) -> "TableBlock":
        return TableBlock()

    def _create_cell_label(self) -> QLabel:
        label = QLabel()
        label.setObjectName("TableBlockCell")
        label.setTextFormat(Qt.TextFormat.RichText)
        label.setWordWrap(True)
        label.setMargin(4)
        label.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        label.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Minimum)
        return label

    def _remove_cell(self, label: QLabel) -> None:
        self._layout.removeWidget(label)
        label.setParent(None)  # type: ignore[call-overload]
        label.deleteLater()

    def _ensure_shape(self, row_count: int, column_count: int) -> None:
        """Grow or shrink the grid to exactly `row_count` x `column_count` cells."""
        while len(self._rows) > row_count:
            for label in self._rows.pop():
                self._remove_cell(label)

            self._markup.pop()

        for r, row in enumerate(self._rows):
            while len(row) > column_count:
                self._remove_cell(row.pop())
                self._markup[r].pop()

        while len(self._rows) < row_count:
            self._rows.append([])
            self._markup.append([])

        for r in range(row_count):
            while len(self._rows[r]) < column_count:
                c = len(self._rows[r])
                label = self._create_cell_label()
                self._layout.addWidget(label, r, c)
                self._rows[r].append(label)
                self._markup[r].append("")
