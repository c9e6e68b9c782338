"""Flattened intermediate representation of a document, one entry per rendered block."""

from dataclasses import dataclass

from mdview.markdown_document_node import MarkdownNode


@dataclass(frozen=True)
class RenderMarker:
    """
    List marker shown beside the first block of a list item.

    A marker with no `index` is a bullet; otherwise it is an ordinal.
    """
    index: int | None = None

    @classmethod
    def bullet(cls) -> "RenderMarker":
        """Create a bullet marker."""
        return cls()

    @classmethod
    def ordered(cls, index: int) -> "RenderMarker":
        """Create an ordinal marker."""
        return cls(index)

    @property
    def is_ordered(self) -> bool:
        return self.index is not None

    def label(self, bullet: str = "•") -> str:
        """
        Get the text displayed for this marker.

        Args:
            bullet: Glyph used for bullet markers

        Returns:
            The bullet glyph, or the ordinal followed by a full stop
        """
        if self.index is None:
            return bullet

        return f"{self.index}."


@dataclass
class RenderBlock:
    """A single renderable unit of the flattened document."""
    node: MarkdownNode
    depth: int = 0
    marker: RenderMarker | None = None
    is_continuation: bool = False
