"""
Document tree produced by parsing markdown text.

Each node class is tagged with a `MarkdownNodeKind` so consumers can dispatch on the
kind without caring about concrete classes.  Nodes have no identity that survives a
reparse: two trees describing the same text are made of unrelated objects.
"""

from enum import Enum, auto
from typing import ClassVar, List


class MarkdownNodeKind(Enum):
    """Kinds of node that can appear in a document tree."""
    ROOT = auto()
    PARAGRAPH = auto()
    HEADING = auto()
    BLOCKQUOTE = auto()
    LIST = auto()
    LIST_ITEM = auto()
    CODE = auto()
    TABLE = auto()
    TABLE_ROW = auto()
    TABLE_CELL = auto()
    THEMATIC_BREAK = auto()
    TEXT = auto()
    EMPHASIS = auto()
    STRONG = auto()
    DELETE = auto()
    LINK = auto()
    INLINE_CODE = auto()
    BREAK = auto()
    HTML = auto()
    IMAGE = auto()
    OTHER = auto()


class MarkdownNode:
    """Base class for all document tree nodes."""

    kind: ClassVar[MarkdownNodeKind] = MarkdownNodeKind.OTHER

    def __init__(self) -> None:
        """Initialize a node with no children."""
        self.children: List["MarkdownNode"] = []

    def add_child(self, child: "MarkdownNode") -> "MarkdownNode":
        """
        Add a child node to this node.

        Args:
            child: The child node to add

        Returns:
            The added child node for method chaining
        """
        self.children.append(child)
        return child

    def text_content(self) -> str:
        """Get the plain text of this node and all its descendants."""
        return "".join(child.text_content() for child in self.children)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(children={len(self.children)})"


class MarkdownRootNode(MarkdownNode):
    """Root node representing a whole document."""
    kind = MarkdownNodeKind.ROOT


class MarkdownParagraphNode(MarkdownNode):
    """Node representing a paragraph; children are inline nodes."""
    kind = MarkdownNodeKind.PARAGRAPH


class MarkdownHeadingNode(MarkdownNode):
    """Node representing a heading; children are inline nodes."""
    kind = MarkdownNodeKind.HEADING

    def __init__(self, level: int) -> None:
        """
        Initialize a heading node.

        Args:
            level: The heading level (1-6)
        """
        super().__init__()
        self.level = max(1, min(6, level))


class MarkdownBlockquoteNode(MarkdownNode):
    """Node representing a block quote."""
    kind = MarkdownNodeKind.BLOCKQUOTE


class MarkdownListNode(MarkdownNode):
    """Node representing an ordered or unordered list."""
    kind = MarkdownNodeKind.LIST

    def __init__(self, ordered: bool = False, start: int | None = None) -> None:
        """
        Initialize a list node.

        Args:
            ordered: True for an ordered (numbered) list
            start: The declared start index of an ordered list, if any
        """
        super().__init__()
        self.ordered = ordered
        self.start = start


class MarkdownListItemNode(MarkdownNode):
    """Node representing a single list item."""
    kind = MarkdownNodeKind.LIST_ITEM


class MarkdownCodeNode(MarkdownNode):
    """Node representing a fenced or indented code block."""
    kind = MarkdownNodeKind.CODE

    def __init__(self, content: str, language: str | None = None) -> None:
        """
        Initialize a code node.

        Args:
            content: The raw code, without the trailing newline
            language: Optional language name taken from the fence info string
        """
        super().__init__()
        self.content = content
        self.language = language

    def text_content(self) -> str:
        return self.content


class MarkdownTableNode(MarkdownNode):
    """Node representing a table; children are rows, the first being the header."""
    kind = MarkdownNodeKind.TABLE


class MarkdownTableRowNode(MarkdownNode):
    """Node representing a table row; children are cells."""
    kind = MarkdownNodeKind.TABLE_ROW


class MarkdownTableCellNode(MarkdownNode):
    """Node representing a table cell; children are inline nodes."""
    kind = MarkdownNodeKind.TABLE_CELL

    def __init__(self, is_header: bool = False, alignment: str | None = None) -> None:
        """
        Initialize a table cell node.

        Args:
            is_header: Whether this is a header cell
            alignment: Cell alignment ('left', 'center', 'right') or None
        """
        super().__init__()
        self.is_header = is_header
        self.alignment = alignment


class MarkdownThematicBreakNode(MarkdownNode):
    """Node representing a thematic break (horizontal rule)."""
    kind = MarkdownNodeKind.THEMATIC_BREAK


class MarkdownTextNode(MarkdownNode):
    """Node representing plain text."""
    kind = MarkdownNodeKind.TEXT

    def __init__(self, content: str) -> None:
        super().__init__()
        self.content = content

    def text_content(self) -> str:
        return self.content

    def __repr__(self) -> str:
        return f"MarkdownTextNode({self.content!r})"


class MarkdownEmphasisNode(MarkdownNode):
    """Node representing emphasized text."""
    kind = MarkdownNodeKind.EMPHASIS


class MarkdownStrongNode(MarkdownNode):
    """Node representing strong text."""
    kind = MarkdownNodeKind.STRONG


class MarkdownDeleteNode(MarkdownNode):
    """Node representing struck-through text."""
    kind = MarkdownNodeKind.DELETE


class MarkdownLinkNode(MarkdownNode):
    """Node representing a link."""
    kind = MarkdownNodeKind.LINK

    def __init__(self, url: str = "", title: str | None = None) -> None:
        """
        Initialize a link node.

        Args:
            url: The link URL
            title: Optional title attribute
        """
        super().__init__()
        self.url = url
        self.title = title


class MarkdownInlineCodeNode(MarkdownNode):
    """Node representing an inline code span."""
    kind = MarkdownNodeKind.INLINE_CODE

    def __init__(self, content: str) -> None:
        super().__init__()
        self.content = content

    def text_content(self) -> str:
        return self.content


class MarkdownBreakNode(MarkdownNode):
    """Node representing a hard line break."""
    kind = MarkdownNodeKind.BREAK

    def text_content(self) -> str:
        return "\n"


class MarkdownHtmlNode(MarkdownNode):
    """Node representing raw HTML, either inline or as a block."""
    kind = MarkdownNodeKind.HTML

    def __init__(self, content: str) -> None:
        super().__init__()
        self.content = content


class MarkdownImageNode(MarkdownNode):
    """Node representing an image."""
    kind = MarkdownNodeKind.IMAGE

    def __init__(self, url: str = "", alt_text: str = "", title: str | None = None) -> None:
        """
        Initialize an image node.

        Args:
            url: The image URL
            alt_text: Alternative text for the image
            title: Optional title attribute
        """
        super().__init__()
        self.url = url
        self.alt_text = alt_text
        self.title = title

    def text_content(self) -> str:
        return self.alt_text


class MarkdownOtherNode(MarkdownNode):
    """Node of a kind this package has no special handling for."""
    kind = MarkdownNodeKind.OTHER

    def __init__(self, name: str) -> None:
        """
        Initialize an unrecognized node.

        Args:
            name: The parser's name for this kind of node
        """
        super().__init__()
        self.name = name

    def __repr__(self) -> str:
        return f"MarkdownOtherNode({self.name!r}, children={len(self.children)})"
