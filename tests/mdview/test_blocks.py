"""
Tests for the Qt block renderers.
"""
import pytest

from pygments.styles import get_style_by_name
from pygments.token import Token

from PySide6.QtGui import QColor, QTextDocument
from PySide6.QtWidgets import QLabel

from mdview import MarkdownViewSettings, RenderMarker
from mdview.blocks import CodeBlock, CodeBlockHighlighter, MarkerBlockRoot, TableBlock, TextBlock, ThematicBreakBlock
from mdview.markdown_document_node import (
    MarkdownCodeNode, MarkdownHeadingNode, MarkdownParagraphNode, MarkdownTableCellNode, MarkdownTableNode,
    MarkdownTableRowNode, MarkdownTextNode, MarkdownThematicBreakNode
)


def table(*rows, header=True):
    """Build a table node from rows of cell strings, the first row being the header."""
    node = MarkdownTableNode()
    for r, cells in enumerate(rows):
        row = node.add_child(MarkdownTableRowNode())
        for text in cells:
            cell = row.add_child(MarkdownTableCellNode(is_header=header and r == 0))
            cell.add_child(MarkdownTextNode(text))

    return node


@pytest.fixture
def settings():
    """Fixture providing default view settings."""
    return MarkdownViewSettings()


def test_text_block_shows_markup(qapp, parser, settings):
    """Test that a paragraph is shown as rich text with whitespace preserved."""
    block = TextBlock(settings)
    block.update(parser.parse("some **bold** text").children[0])

    assert block.markup() == "some <b>bold</b> text"
    assert "white-space: pre-wrap" in block.label().text()


def test_text_block_skips_unchanged_markup(qapp, parser, settings):
    """Test that updating with the same content leaves the label alone."""
    block = TextBlock(settings)
    block.update(parser.parse("same").children[0])
    block.label().setText("sentinel")

    block.update(parser.parse("same").children[0])

    assert block.label().text() == "sentinel"


def test_text_block_heading_font(qapp, settings):
    """Test that headings are bold and scaled, and paragraphs revert to the base font."""
    block = TextBlock(settings)
    base_size = block.label().font().pointSizeF()

    heading = MarkdownHeadingNode(1)
    heading.add_child(MarkdownTextNode("Title"))
    block.update(heading)

    assert block.label().font().bold()
    assert block.label().font().pointSizeF() > base_size

    paragraph = MarkdownParagraphNode()
    paragraph.add_child(MarkdownTextNode("Title"))
    block.update(paragraph)

    assert not block.label().font().bold()


def test_text_block_duplicate_is_independent(qapp, parser, settings):
    """Test that a duplicate has its own root and no content."""
    block = TextBlock(settings)
    block.update(parser.parse("content").children[0])
    copy = block.duplicate()

    assert copy.root() is not block.root()
    assert copy.markup() == ""


def test_code_block_shows_code_and_language(qapp, settings):
    """Test that code blocks show their text and a language header."""
    block = CodeBlock(settings)
    block.update(MarkdownCodeNode("x = 1\ny = 2", "python"))

    assert block.text_edit().toPlainText() == "x = 1\ny = 2"
    assert block.language() == "python"
    assert block.language_header().text() == "python"
    assert not block.language_header().isHidden()


def test_code_block_without_language_hides_header(qapp, settings):
    """Test that code with no language shows no header."""
    block = CodeBlock(settings)
    block.update(MarkdownCodeNode("plain"))

    assert block.language() is None
    assert block.language_header().isHidden()


def test_code_block_update_is_idempotent(qapp, settings):
    """Test that updating with unchanged code leaves the document untouched."""
    block = CodeBlock(settings)
    block.update(MarkdownCodeNode("print(1)", "python"))
    revision = block.text_edit().document().revision()

    block.update(MarkdownCodeNode("print(1)", "python"))

    assert block.text_edit().document().revision() == revision


def test_code_block_unknown_language(qapp, settings):
    """Test that an unknown language still displays the code."""
    block = CodeBlock(settings)
    block.update(MarkdownCodeNode("stuff", "no-such-language"))

    assert block.text() == "stuff"
    assert block.language() == "no-such-language"


def test_code_block_height_is_capped(qapp):
    """Test that long code is limited to the configured maximum height."""
    block = CodeBlock(MarkdownViewSettings(code_max_height=100))
    block.update(MarkdownCodeNode("\n".join(str(i) for i in range(200))))

    assert block.text_edit().maximumHeight() <= 100


def foreground_by_start(block):
    """Map each format range on the first line of a code block to its foreground colour."""
    layout = block.text_edit().document().firstBlock().layout()
    return {r.start: (r.length, r.format.foreground().color().name()) for r in layout.formats()}


def style_color(token_type):
    """Get the colour the default code style gives a token type."""
    return QColor(f"#{get_style_by_name('monokai').style_for_token(token_type)['color']}").name()


def test_code_highlighting_after_astral_characters(qapp, settings):
    """Test that spans after characters outside the BMP are placed in UTF-16 positions."""
    block = CodeBlock(settings)
    block.update(MarkdownCodeNode('s = "\U0001F600\U0001F600"; x = 1', "python"))

    formats = foreground_by_start(block)

    # "s = \"" is 5 units and each emoji is 2, so "=" is at 14 and "1" at 16
    assert formats[14] == (1, style_color(Token.Operator))
    assert formats[16] == (1, style_color(Token.Literal.Number.Integer))


def test_code_block_text_change_highlights_once(qapp, settings, monkeypatch):
    """Test that new code is highlighted by setting the text, without a second full pass."""
    block = CodeBlock(settings)
    block.update(MarkdownCodeNode("x = 1", "python"))
    highlighter = block.text_edit().document().findChildren(CodeBlockHighlighter)[0]
    calls = []
    monkeypatch.setattr(highlighter, "rehighlight", lambda: calls.append(True))

    block.update(MarkdownCodeNode("y = 2", "python"))
    assert calls == []
    assert foreground_by_start(block)[4] == (1, style_color(Token.Literal.Number.Integer))

    block.update(MarkdownCodeNode("y = 2", "c"))
    assert calls == [True]


def test_code_highlighter_unknown_style(qapp):
    """Test that an unknown style falls back to the default style."""
    document = QTextDocument()
    highlighter = CodeBlockHighlighter(document, "no-such-style")

    assert highlighter.background_color().isValid()
    assert highlighter.set_language("python")
    assert not highlighter.set_language("python")


def test_table_block_shape_and_markup(qapp):
    """Test that a table shows a grid of cells with bold headers."""
    block = TableBlock()
    block.update(table(["a", "b"], ["1", "2"]))

    assert (block.row_count(), block.column_count()) == (2, 2)
    assert block.cell_markup(0, 0) == "<b>a</b>"
    assert block.cell_markup(1, 1) == "2"


def test_table_block_normalizes_jagged_rows(qapp):
    """Test that short rows are padded and long rows trimmed to the header width."""
    block = TableBlock()
    block.update(table(["a", "b"], ["1"], ["x", "y", "z"]))

    assert (block.row_count(), block.column_count()) == (3, 2)
    assert block.cell_markup(1, 1) == ""
    assert block.cell_markup(2, 1) == "y"


def test_table_block_shrinks(qapp):
    """Test that removing rows and columns shrinks the grid."""
    block = TableBlock()
    block.update(table(["a", "b", "c"], ["1", "2", "3"], ["4", "5", "6"]))
    block.update(table(["a"], ["1"]))

    assert (block.row_count(), block.column_count()) == (2, 1)
    assert block.cell_markup(1, 0) == "1"


def test_table_block_empty_table(qapp):
    """Test that a table with no rows produces an empty grid."""
    block = TableBlock()
    block.update(MarkdownTableNode())

    assert (block.row_count(), block.column_count()) == (0, 0)


def test_thematic_break_block(qapp):
    """Test that thematic breaks accept only thematic break nodes."""
    block = ThematicBreakBlock()
    block.update(MarkdownThematicBreakNode())

    assert block.accepts(MarkdownThematicBreakNode())
    assert not block.accepts(MarkdownCodeNode("x"))
    assert block.duplicate().root() is not block.root()


def test_marker_block_root_labels(qapp):
    """Test that marker wrappers show ordinals and bullets and measure their width."""
    content = QLabel("item")
    wrapper = MarkerBlockRoot(content, RenderMarker.ordered(3))

    assert wrapper.marker_label().text() == "3."
    assert wrapper.content() is content
    assert wrapper.marker_width() > 0

    width = wrapper.set_marker(RenderMarker.bullet())
    assert wrapper.marker_label().text() == "•"
    assert width == wrapper.marker_width()
