"""Conversion of inline document nodes into Qt rich-text markup."""

import html
from typing import Iterable

from mdview.markdown_document_node import MarkdownNode, MarkdownNodeKind


def escape_markup(text: str) -> str:
    """Escape characters that have a meaning in rich-text markup."""
    return html.escape(text, quote=True)


def html_tag_name(raw: str) -> str | None:
    """
    Extract the tag name from a raw HTML fragment.

    Args:
        raw: The raw HTML, e.g. "<br/>" or "</span>"

    Returns:
        The tag name without any slashes, or None if `raw` does not start with a tag
    """
    raw = raw.lstrip()
    if not raw.startswith("<"):
        return None

    end = raw.find(">")
    if end == -1:
        return None

    parts = raw[1:end].split()
    if not parts:
        return None

    return parts[0].strip("/") or None


def inline_nodes_to_markup(nodes: Iterable[MarkdownNode]) -> str:
    """Convert a sequence of inline nodes into one markup string."""
    return "".join(inline_node_to_markup(node) for node in nodes)


def inline_node_to_markup(node: MarkdownNode) -> str:
    """
    Convert an inline node and its descendants into rich-text markup.

    Line breaks are emitted as literal newlines, so the markup must be displayed
    with whitespace preserved.

    Args:
        node: The inline node to convert

    Returns:
        The escaped markup string
    """
    kind = node.kind
    if kind == MarkdownNodeKind.TEXT:
        return escape_markup(node.text_content())

    if kind == MarkdownNodeKind.BREAK:
        return "\n"

    if kind == MarkdownNodeKind.EMPHASIS:
        return f"<i>{inline_nodes_to_markup(node.children)}</i>"

    if kind == MarkdownNodeKind.STRONG:
        return f"<b>{inline_nodes_to_markup(node.children)}</b>"

    if kind == MarkdownNodeKind.DELETE:
        return f"<s>{inline_nodes_to_markup(node.children)}</s>"

    if kind == MarkdownNodeKind.LINK:
        url = escape_markup(getattr(node, "url", ""))
        return f'<a href="{url}">{inline_nodes_to_markup(node.children)}</a>'

    if kind == MarkdownNodeKind.INLINE_CODE:
        return f"<code>{escape_markup(node.text_content())}</code>"

    if kind == MarkdownNodeKind.IMAGE:
        return escape_markup(node.text_content())

    if kind == MarkdownNodeKind.HTML:
        content = getattr(node, "content", "")
        tag = html_tag_name(content)
        if tag is not None and tag.lower() == "br":
            return "\n"

        return escape_markup(content)

    return ""
