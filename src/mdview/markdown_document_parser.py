"""
Parser that turns markdown text into a document tree.

Parsing is delegated to markdown-it-py configured for GitHub-flavoured markdown
(CommonMark plus tables and strikethrough).  Its syntax tree is converted into
`MarkdownNode` objects so the rest of the package never depends on the parser.
"""

import logging
from typing import Callable, Dict

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from mdview.markdown_document_node import (
    MarkdownBlockquoteNode, MarkdownBreakNode, MarkdownCodeNode, MarkdownDeleteNode,
    MarkdownEmphasisNode, MarkdownHeadingNode, MarkdownHtmlNode, MarkdownImageNode,
    MarkdownInlineCodeNode, MarkdownLinkNode, MarkdownListItemNode, MarkdownListNode,
    MarkdownNode, MarkdownOtherNode, MarkdownParagraphNode, MarkdownRootNode,
    MarkdownStrongNode, MarkdownTableCellNode, MarkdownTableNode, MarkdownTableRowNode,
    MarkdownTextNode, MarkdownThematicBreakNode
)
from mdview.markdown_view_error import MarkdownParseError


class MarkdownDocumentParser:
    """Parses markdown text into a `MarkdownRootNode` tree."""

    def __init__(self) -> None:
        """Initialize the parser with GFM-equivalent options."""
        self._logger = logging.getLogger("MarkdownDocumentParser")
        self._md = MarkdownIt("commonmark", {"html": True}).enable(["table", "strikethrough"])

        self._handlers: Dict[str, Callable[[SyntaxTreeNode], MarkdownNode | None]] = {
            "paragraph": self._convert_paragraph,
            "heading": self._convert_heading,
            "blockquote": self._convert_blockquote,
            "bullet_list": self._convert_list,
            "ordered_list": self._convert_list,
            "list_item": self._convert_list_item,
            "fence": self._convert_code,
            "code_block": self._convert_code,
            "table": self._convert_table,
            "hr": self._convert_thematic_break,
            "html_block": self._convert_html,
            "html_inline": self._convert_html,
            "text": self._convert_text,
            "softbreak": self._convert_softbreak,
            "hardbreak": self._convert_hardbreak,
            "em": self._convert_emphasis,
            "strong": self._convert_strong,
            "s": self._convert_delete,
            "link": self._convert_link,
            "code_inline": self._convert_inline_code,
            "image": self._convert_image,
        }

    def parse(self, text: str) -> MarkdownRootNode:
        """
        Parse markdown text into a document tree.

        Args:
            text: The markdown text to parse

        Returns:
            The root node of the document tree

        Raises:
            MarkdownParseError: If the text cannot be parsed
        """
        try:
            tokens = self._md.parse(text)
            tree = SyntaxTreeNode(tokens)

        except Exception as e:
            raise MarkdownParseError(f"Failed to parse markdown: {e}", {"length": len(text)}) from e

        root = MarkdownRootNode()
        self._convert_children(tree, root)
        return root

    def _convert_children(self, source: SyntaxTreeNode, target: MarkdownNode) -> None:
        """Convert each child of a markdown-it node and attach it to `target`."""
        for child in source.children:
            # Inline containers are unwrapped into whatever block holds them
            if child.type == "inline":
                self._convert_children(child, target)
                continue

            node = self._convert_node(child)
            if node is not None:
                target.add_child(node)

    def _convert_node(self, source: SyntaxTreeNode) -> MarkdownNode | None:
        handler = self._handlers.get(source.type)
        if handler is None:
            node: MarkdownNode = MarkdownOtherNode(source.type)
            self._convert_children(source, node)
            return node

        return handler(source)

    def _convert_paragraph(self, source: SyntaxTreeNode) -> MarkdownNode:
        node = MarkdownParagraphNode()
        self._convert_children(source, node)
        return node

    def _convert_heading(self, source: SyntaxTreeNode) -> MarkdownNode:
        # The tag is "h1" through "h6"
        node = MarkdownHeadingNode(int(source.tag[1:]))
        self._convert_children(source, node)
        return node

    def _convert_blockquote(self, source: SyntaxTreeNode) -> MarkdownNode:
        node = MarkdownBlockquoteNode()
        self._convert_children(source, node)
        return node

    def _convert_list(self, source: SyntaxTreeNode) -> MarkdownNode:
        ordered = source.type == "ordered_list"
        start = source.attrs.get("start") if ordered else None
        node = MarkdownListNode(ordered, int(start) if start is not None else None)
        self._convert_children(source, node)
        return node

    def _convert_list_item(self, source: SyntaxTreeNode) -> MarkdownNode:
        node = MarkdownListItemNode()
        self._convert_children(source, node)
        return node

    def _convert_code(self, source: SyntaxTreeNode) -> MarkdownNode:
        """Convert a fenced or indented code block, keeping only the first word of the info string."""
        info = source.info.strip() if source.type == "fence" else ""
        language = info.split(maxsplit=1)[0] if info else None

        content = source.content
        if content.endswith("\n"):
            content = content[:-1]

        return MarkdownCodeNode(content, language)

    def _convert_table(self, source: SyntaxTreeNode) -> MarkdownNode:
        """Convert a table, collapsing its head and body sections into one list of rows."""
        table = MarkdownTableNode()
        for section in source.children:
            for row_source in section.children:
                row = MarkdownTableRowNode()
                for cell_source in row_source.children:
                    cell = MarkdownTableCellNode(
                        is_header=cell_source.type == "th",
                        alignment=self._cell_alignment(cell_source)
                    )
                    self._convert_children(cell_source, cell)
                    row.add_child(cell)

                table.add_child(row)

        return table

    def _cell_alignment(self, source: SyntaxTreeNode) -> str | None:
        style = str(source.attrs.get("style", ""))
        if not style.startswith("text-align:"):
            return None

        return style[len("text-align:"):].strip()

    def _convert_thematic_break(self, _source: SyntaxTreeNode) -> MarkdownNode:
        return MarkdownThematicBreakNode()

    def _convert_html(self, source: SyntaxTreeNode) -> MarkdownNode:
        return MarkdownHtmlNode(source.content)

    def _convert_text(self, source: SyntaxTreeNode) -> MarkdownNode:
        return MarkdownTextNode(source.content)

    def _convert_softbreak(self, _source: SyntaxTreeNode) -> MarkdownNode:
        return MarkdownTextNode("\n")

    def _convert_hardbreak(self, _source: SyntaxTreeNode) -> MarkdownNode:
        return MarkdownBreakNode()

    def _convert_emphasis(self, source: SyntaxTreeNode) -> MarkdownNode:
        node = MarkdownEmphasisNode()
        self._convert_children(source, node)
        return node

    def _convert_strong(self, source: SyntaxTreeNode) -> MarkdownNode:
        node = MarkdownStrongNode()
        self._convert_children(source, node)
        return node

    def _convert_delete(self, source: SyntaxTreeNode) -> MarkdownNode:
        node = MarkdownDeleteNode()
        self._convert_children(source, node)
        return node

    def _convert_link(self, source: SyntaxTreeNode) -> MarkdownNode:
        title = source.attrs.get("title")
        node = MarkdownLinkNode(str(source.attrs.get("href", "")), str(title) if title is not None else None)
        self._convert_children(source, node)
        return node

    def _convert_inline_code(self, source: SyntaxTreeNode) -> MarkdownNode:
        return MarkdownInlineCodeNode(source.content)

    def _convert_image(self, source: SyntaxTreeNode) -> MarkdownNode:
        title = source.attrs.get("title")
        return MarkdownImageNode(
            str(source.attrs.get("src", "")),
            source.content,
            str(title) if title is not None else None
        )
