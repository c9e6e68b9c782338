"""
Flattening of a document tree into an ordered sequence of render blocks.

Lists, list items, block quotes and the root never produce blocks of their own.
They only shape the depth and marker information of the blocks found inside them.
"""

from dataclasses import dataclass, field
import logging
from typing import List

from mdview.markdown_document_node import (
    MarkdownListNode, MarkdownNode, MarkdownNodeKind, MarkdownParagraphNode, MarkdownTextNode
)
from mdview.markdown_render_block import RenderBlock, RenderMarker


BLOCK_NODE_KINDS = frozenset({
    MarkdownNodeKind.PARAGRAPH,
    MarkdownNodeKind.HEADING,
    MarkdownNodeKind.CODE,
    MarkdownNodeKind.TABLE,
    MarkdownNodeKind.THEMATIC_BREAK,
})

STRUCTURAL_NODE_KINDS = frozenset({
    MarkdownNodeKind.ROOT,
    MarkdownNodeKind.LIST,
    MarkdownNodeKind.LIST_ITEM,
    MarkdownNodeKind.BLOCKQUOTE,
})

PARAGRAPH_SEPARATOR = "\n\n"


def is_block_node(node: MarkdownNode) -> bool:
    """Check whether a node is rendered as one independent block."""
    return node.kind in BLOCK_NODE_KINDS


@dataclass
class RenderListScope:
    """Marker state for one open list."""
    ordered: bool
    next_marker_index: int = 1

    def next_marker(self) -> RenderMarker:
        """Consume the next marker of this list."""
        if not self.ordered:
            return RenderMarker.bullet()

        index = self.next_marker_index
        self.next_marker_index += 1
        return RenderMarker.ordered(index)


@dataclass
class RenderItemScope:
    """Tracks whether a list item has emitted its first block yet."""
    list_scope: RenderListScope
    has_emitted: bool = False


@dataclass
class RenderWalkContext:
    """Mutable state threaded through a single flattening walk."""
    list_stack: List[RenderListScope] = field(default_factory=list)
    item_stack: List[RenderItemScope] = field(default_factory=list)
    pending_paragraphs: List[MarkdownParagraphNode] = field(default_factory=list)

    def depth(self) -> int:
        # A top-level list is depth 0
        return max(0, len(self.list_stack) - 1)


class MarkdownBlockFlattener:
    """Walks a document tree and produces the ordered list of render blocks."""

    def __init__(self) -> None:
        self._logger = logging.getLogger("MarkdownBlockFlattener")
        self._blocks: List[RenderBlock] = []

    def flatten(self, root: MarkdownNode) -> List[RenderBlock]:
        """
        Flatten a document tree.

        Args:
            root: The root of the document tree

        Returns:
            The render blocks of the document in document order
        """
        self._blocks = []
        ctx = RenderWalkContext()
        self._walk(root, ctx)
        self._flush_paragraphs(ctx)

        blocks = self._blocks
        self._blocks = []
        return blocks

    def _walk(self, node: MarkdownNode, ctx: RenderWalkContext) -> None:
        if node.kind == MarkdownNodeKind.PARAGRAPH:
            ctx.pending_paragraphs.append(node)  # type: ignore[arg-type]
            return

        self._flush_paragraphs(ctx)

        if node.kind == MarkdownNodeKind.LIST:
            self._walk_list(node, ctx)
            return

        if node.kind == MarkdownNodeKind.LIST_ITEM and ctx.list_stack:
            self._walk_list_item(node, ctx)
            return

        if is_block_node(node):
            self._emit(node, ctx)
            return

        if node.kind not in STRUCTURAL_NODE_KINDS:
            self._logger.debug("unhandled node: %r", node)

        for child in node.children:
            self._walk(child, ctx)

    def _walk_list(self, node: MarkdownNode, ctx: RenderWalkContext) -> None:
        ordered = isinstance(node, MarkdownListNode) and node.ordered
        start = node.start if isinstance(node, MarkdownListNode) and node.start is not None else 1
        ctx.list_stack.append(RenderListScope(ordered, start))

        for child in node.children:
            self._walk(child, ctx)

        # Anything still pending belongs inside this list so must be emitted at its depth
        self._flush_paragraphs(ctx)
        ctx.list_stack.pop()

    def _walk_list_item(self, node: MarkdownNode, ctx: RenderWalkContext) -> None:
        ctx.item_stack.append(RenderItemScope(ctx.list_stack[-1]))

        for child in node.children:
            if is_block_node(child):
                # Blocks that sit directly in a list item are never merged
                self._emit(child, ctx)
                continue

            self._walk(child, ctx)

        self._flush_paragraphs(ctx)
        ctx.item_stack.pop()

    def _flush_paragraphs(self, ctx: RenderWalkContext) -> None:
        """Emit any pending paragraphs as a single merged paragraph."""
        if not ctx.pending_paragraphs:
            return

        paragraphs = ctx.pending_paragraphs
        ctx.pending_paragraphs = []

        if len(paragraphs) == 1:
            self._emit(paragraphs[0], ctx)
            return

        merged = MarkdownParagraphNode()
        for i, paragraph in enumerate(paragraphs):
            if i > 0:
                merged.add_child(MarkdownTextNode(PARAGRAPH_SEPARATOR))

            for child in paragraph.children:
                merged.add_child(child)

        self._emit(merged, ctx)

    def _emit(self, node: MarkdownNode, ctx: RenderWalkContext) -> None:
        """Append a block, attaching list marker information from the innermost list item."""
        self._flush_paragraphs(ctx)

        marker: RenderMarker | None = None
        is_continuation = False
        if ctx.item_stack:
            item = ctx.item_stack[-1]
            if item.has_emitted:
                is_continuation = True

            else:
                item.has_emitted = True
                marker = item.list_scope.next_marker()

        self._blocks.append(RenderBlock(
            node=node,
            depth=ctx.depth(),
            marker=marker,
            is_continuation=is_continuation
        ))


class RenderBuffer:
    """Holds the flattened blocks for the current document."""

    def __init__(self) -> None:
        self.blocks: List[RenderBlock] = []
        self._flattener = MarkdownBlockFlattener()

    def set(self, root: MarkdownNode) -> None:
        """Rebuild the buffer from a freshly parsed document tree."""
        self.blocks = self._flattener.flatten(root)

    def __len__(self) -> int:
        return len(self.blocks)
