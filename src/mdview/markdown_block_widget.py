"""Capability contract shared by every block renderer."""

from abc import ABC, abstractmethod
from typing import Any, Callable, FrozenSet, Iterable

from mdview.markdown_document_node import MarkdownNode, MarkdownNodeKind


class BlockWidget(ABC):
    """
    A renderer for one kind of block.

    Instances are owned by the block registry and are reused across renders for as
    long as the block at their position stays a kind they accept.
    """

    @abstractmethod
    def root(self) -> Any:
        """Get the display root; the same object for the lifetime of this instance."""

    @abstractmethod
    def update(self, node: MarkdownNode) -> None:
        """
        Show the content of `node`.

        Must be idempotent, and must not touch the display when the content is unchanged.

        Args:
            node: The block node to display
        """

    @abstractmethod
    def accepts(self, node: MarkdownNode) -> bool:
        """Check whether this instance can be reused to display `node`."""

    @abstractmethod
    def duplicate(self) -> "BlockWidget":
        """Create an independent instance with the same configuration and no content."""


class BlockWidgetFactory:
    """Creates block renderers for a fixed set of node kinds."""

    def __init__(self, kinds: Iterable[MarkdownNodeKind], create: Callable[[], BlockWidget]) -> None:
        """
        Initialize the factory.

        Args:
            kinds: Node kinds this factory's renderers display
            create: Callable returning a new renderer
        """
        self._kinds: FrozenSet[MarkdownNodeKind] = frozenset(kinds)
        self._create = create

    @classmethod
    def from_template(cls, kinds: Iterable[MarkdownNodeKind], template: BlockWidget) -> "BlockWidgetFactory":
        """Create a factory whose renderers are duplicates of `template`."""
        return cls(kinds, template.duplicate)

    @property
    def kinds(self) -> FrozenSet[MarkdownNodeKind]:
        return self._kinds

    def matches(self, node: MarkdownNode) -> bool:
        return node.kind in self._kinds

    def create(self) -> BlockWidget:
        return self._create()
