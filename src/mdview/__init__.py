"""Incrementally updated rendering of markdown documents as block widgets."""

from mdview.markdown_block_flattener import MarkdownBlockFlattener, RenderBuffer, is_block_node
from mdview.markdown_block_registry import (
    MarkdownBlock,
    MarkdownBlockHost,
    MarkdownBlockRegistry,
    ReconcileResult
)
from mdview.markdown_block_widget import BlockWidget, BlockWidgetFactory
from mdview.markdown_document_node import MarkdownNode, MarkdownNodeKind
from mdview.markdown_document_parser import MarkdownDocumentParser
from mdview.markdown_inline_markup import inline_node_to_markup, inline_nodes_to_markup
from mdview.markdown_render_block import RenderBlock, RenderMarker
from mdview.markdown_view_error import MarkdownParseError, MarkdownViewError, NoMatchingRendererError
from mdview.markdown_view_settings import MarkdownViewSettings


__all__ = [
    "BlockWidget",
    "BlockWidgetFactory",
    "MarkdownBlock",
    "MarkdownBlockFlattener",
    "MarkdownBlockHost",
    "MarkdownBlockRegistry",
    "MarkdownDocumentParser",
    "MarkdownNode",
    "MarkdownNodeKind",
    "MarkdownParseError",
    "MarkdownViewError",
    "MarkdownViewSettings",
    "NoMatchingRendererError",
    "ReconcileResult",
    "RenderBlock",
    "RenderBuffer",
    "RenderMarker",
    "inline_node_to_markup",
    "inline_nodes_to_markup",
    "is_block_node"
]
