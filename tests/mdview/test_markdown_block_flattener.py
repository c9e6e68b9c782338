"""
Tests for flattening a document tree into render blocks.
"""
import logging

from mdview import MarkdownBlockFlattener, MarkdownNodeKind, RenderBuffer, RenderMarker, is_block_node
from mdview.markdown_document_node import (
    MarkdownListItemNode, MarkdownListNode, MarkdownOtherNode, MarkdownParagraphNode, MarkdownRootNode,
    MarkdownTextNode
)


def paragraph(text):
    """Create a paragraph node holding a single text node."""
    node = MarkdownParagraphNode()
    node.add_child(MarkdownTextNode(text))
    return node


def summary(blocks):
    """Summarize blocks as (text, depth, marker, is_continuation) tuples."""
    return [(b.node.text_content(), b.depth, b.marker, b.is_continuation) for b in blocks]


def test_block_kinds_in_document_order(flatten):
    """Test that every block-level node is emitted once, in document order."""
    blocks = flatten("# Title\n\nText\n\n```\ncode\n```\n\n| a |\n|---|\n| b |\n\n---")

    assert [b.node.kind for b in blocks] == [
        MarkdownNodeKind.HEADING,
        MarkdownNodeKind.PARAGRAPH,
        MarkdownNodeKind.CODE,
        MarkdownNodeKind.TABLE,
        MarkdownNodeKind.THEMATIC_BREAK,
    ]
    assert all(b.depth == 0 and b.marker is None and not b.is_continuation for b in blocks)


def test_structural_nodes_never_emitted(flatten):
    """Test that lists, list items and block quotes contribute no blocks of their own."""
    blocks = flatten("- a\n- b\n\n> quote")

    assert all(is_block_node(b.node) for b in blocks)
    assert len(blocks) == 3


def test_adjacent_paragraphs_are_merged(flatten):
    """Test that two adjacent paragraphs produce one block with a blank line between them."""
    blocks = flatten("A\n\nB")

    assert len(blocks) == 1
    assert blocks[0].node.kind == MarkdownNodeKind.PARAGRAPH
    assert blocks[0].node.text_content() == "A\n\nB"


def test_three_paragraphs_are_merged(flatten):
    """Test that a run of paragraphs is merged into one block."""
    blocks = flatten("A\n\nB\n\nC")

    assert len(blocks) == 1
    assert blocks[0].node.text_content() == "A\n\nB\n\nC"


def test_single_paragraph_is_not_copied(parser):
    """Test that a lone paragraph is emitted as the original node."""
    root = parser.parse("only")
    blocks = MarkdownBlockFlattener().flatten(root)

    assert blocks[0].node is root.children[0]


def test_paragraph_merge_stops_at_other_blocks(flatten):
    """Test that a non-paragraph block flushes the pending paragraphs."""
    blocks = flatten("A\n\nB\n\n# H\n\nC")

    assert [b.node.text_content() for b in blocks] == ["A\n\nB", "H", "C"]


def test_blockquote_paragraphs_are_merged(flatten):
    """Test that paragraphs inside a block quote are merged."""
    blocks = flatten("> quote\n>\n> more")

    assert len(blocks) == 1
    assert blocks[0].node.text_content() == "quote\n\nmore"


def test_ordered_markers(flatten):
    """Test that an ordered list starting at 5 numbers its items 5, 6 and 7."""
    blocks = flatten("5. one\n\n   more\n6. two\n7. three")

    assert summary(blocks) == [
        ("one", 0, RenderMarker.ordered(5), False),
        ("more", 0, None, True),
        ("two", 0, RenderMarker.ordered(6), False),
        ("three", 0, RenderMarker.ordered(7), False),
    ]


def test_bullet_markers(flatten):
    """Test that bullet list items get bullet markers."""
    blocks = flatten("- a\n- b")

    assert [b.marker for b in blocks] == [RenderMarker.bullet(), RenderMarker.bullet()]


def test_list_item_paragraphs_are_not_merged(flatten):
    """Test that paragraphs directly inside a list item stay separate blocks."""
    blocks = flatten("- first\n\n  second")

    assert summary(blocks) == [
        ("first", 0, RenderMarker.bullet(), False),
        ("second", 0, None, True),
    ]


def test_nested_list_depth(flatten):
    """Test that a nested list item is one level deeper than its parent."""
    blocks = flatten("- outer\n  - inner\n- sibling")

    assert summary(blocks) == [
        ("outer", 0, RenderMarker.bullet(), False),
        ("inner", 1, RenderMarker.bullet(), False),
        ("sibling", 0, RenderMarker.bullet(), False),
    ]


def test_nested_ordered_lists_number_independently(flatten):
    """Test that each list keeps its own running marker index."""
    blocks = flatten("1. a\n   1. x\n   2. y\n2. b")

    assert [b.marker for b in blocks] == [
        RenderMarker.ordered(1),
        RenderMarker.ordered(1),
        RenderMarker.ordered(2),
        RenderMarker.ordered(2),
    ]
    assert [b.depth for b in blocks] == [0, 1, 1, 0]


def test_continuation_after_nested_list(flatten):
    """Test that a block after a nested list continues the outer item."""
    blocks = flatten("- outer\n\n  - inner\n\n  tail")

    assert summary(blocks) == [
        ("outer", 0, RenderMarker.bullet(), False),
        ("inner", 1, RenderMarker.bullet(), False),
        ("tail", 0, None, True),
    ]


def test_code_in_list_item_is_continuation(flatten):
    """Test that a code block after a list item's paragraph is a continuation."""
    blocks = flatten("1. step\n\n   ```\n   run\n   ```")

    assert [b.node.kind for b in blocks] == [MarkdownNodeKind.PARAGRAPH, MarkdownNodeKind.CODE]
    assert blocks[1].marker is None
    assert blocks[1].is_continuation


def test_blockquote_in_list_item_takes_marker(flatten):
    """Test that the first block anywhere inside a list item carries the marker."""
    blocks = flatten("- > quoted")

    assert summary(blocks) == [("quoted", 0, RenderMarker.bullet(), False)]


def test_paragraph_after_list_has_no_marker(flatten):
    """Test that content after a list is back at depth 0 without markers."""
    blocks = flatten("A\n\n- item\n\nB")

    assert summary(blocks) == [
        ("A", 0, None, False),
        ("item", 0, RenderMarker.bullet(), False),
        ("B", 0, None, False),
    ]


def test_empty_list_item_consumes_no_marker():
    """Test that a list item with no blocks never consumes a marker."""
    root = MarkdownRootNode()
    ordered = root.add_child(MarkdownListNode(ordered=True, start=None))
    ordered.add_child(MarkdownListItemNode())
    item = ordered.add_child(MarkdownListItemNode())
    item.add_child(paragraph("two"))

    blocks = MarkdownBlockFlattener().flatten(root)

    assert summary(blocks) == [("two", 0, RenderMarker.ordered(1), False)]


def test_unhandled_node_is_recursed_and_logged(caplog):
    """Test that unknown containers are walked through and reported at debug level."""
    root = MarkdownRootNode()
    other = root.add_child(MarkdownOtherNode("footnote_block"))
    other.add_child(paragraph("inside"))

    with caplog.at_level(logging.DEBUG, logger="MarkdownBlockFlattener"):
        blocks = MarkdownBlockFlattener().flatten(root)

    assert summary(blocks) == [("inside", 0, None, False)]
    assert "footnote_block" in caplog.text


def test_flatten_is_repeatable(parser):
    """Test that flattening the same tree twice gives the same result."""
    root = parser.parse("1. a\n2. b\n\ntext")
    flattener = MarkdownBlockFlattener()

    assert summary(flattener.flatten(root)) == summary(flattener.flatten(root))


def test_render_buffer_is_rebuilt(parser):
    """Test that setting the render buffer replaces its previous blocks."""
    buffer = RenderBuffer()
    buffer.set(parser.parse("# one\n\ntwo"))
    assert len(buffer) == 2

    buffer.set(parser.parse("three"))
    assert [b.node.text_content() for b in buffer.blocks] == ["three"]
