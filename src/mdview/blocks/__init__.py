"""Qt renderers for each kind of markdown block."""

from mdview.blocks.code_block import CodeBlock
from mdview.blocks.code_block_highlighter import CodeBlockHighlighter
from mdview.blocks.marker_block import MarkerBlockRoot
from mdview.blocks.table_block import TableBlock
from mdview.blocks.text_block import TEXT_BLOCK_KINDS, TextBlock
from mdview.blocks.thematic_break_block import ThematicBreakBlock


__all__ = [
    "CodeBlock",
    "CodeBlockHighlighter",
    "MarkerBlockRoot",
    "TEXT_BLOCK_KINDS",
    "TableBlock",
    "TextBlock",
    "ThematicBreakBlock"
]
