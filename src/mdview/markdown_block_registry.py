"""
Position-keyed registry of live block renderers.

Each render pass reconciles the registry against a freshly flattened block list:
renderers whose position still holds a compatible block are updated in place, the
rest are evicted and replaced.  Nothing is ever keyed by node identity because the
document tree is rebuilt from scratch on every edit.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
import logging
from typing import Any, Callable, Dict, List, Sequence, Tuple

from mdview.markdown_block_widget import BlockWidget, BlockWidgetFactory
from mdview.markdown_render_block import RenderBlock, RenderMarker
from mdview.markdown_view_error import NoMatchingRendererError


class MarkdownBlockHost(ABC):
    """The container that displays block roots, in registry order."""

    @abstractmethod
    def insert_block_root(self, index: int, root: Any) -> None:
        """Insert a display root so it becomes the container's `index`th child."""

    @abstractmethod
    def remove_block_root(self, root: Any) -> None:
        """Detach a display root from the container."""

    @abstractmethod
    def wrap_with_marker(self, root: Any, marker: RenderMarker) -> Tuple[Any, int]:
        """
        Wrap a display root in a container that shows a list marker beside it.

        Args:
            root: The block's display root
            marker: The marker to show

        Returns:
            Tuple of (wrapper root, measured marker width)
        """

    @abstractmethod
    def update_marker(self, root: Any, marker: RenderMarker) -> int:
        """Change the marker shown by a wrapper root, returning the new marker width."""

    @abstractmethod
    def set_block_inset(self, root: Any, inset: int) -> None:
        """Set the left inset of a display root."""


@dataclass
class MarkdownBlock:
    """A registry entry: a renderer plus the root placed in the container."""
    block: BlockWidget
    root: Any
    marker: RenderMarker | None = None
    marker_width: int = 0


@dataclass
class ReconcileResult:
    """Counts of what a reconcile pass did."""
    created: int = 0
    reused: int = 0
    evicted: int = 0
    skipped: int = 0


class MarkdownBlockRegistry:
    """Maps block positions to live renderers and keeps the host container in step."""

    def __init__(
        self,
        host: MarkdownBlockHost,
        factories: Sequence[BlockWidgetFactory],
        depth_indent: int = 16,
        marker_spacing: int = 4,
        created_callback: Callable[[BlockWidget], None] | None = None
    ) -> None:
        """
        Initialize the registry.

        Args:
            host: Container that displays the block roots
            factories: Renderer factories, consulted in priority order
            depth_indent: Left inset added per level of list nesting
            marker_spacing: Gap between a list marker and its content
            created_callback: Optional callable run on each new renderer before its first update
        """
        self._logger = logging.getLogger("MarkdownBlockRegistry")
        self._host = host
        self._factories = list(factories)
        self._depth_indent = depth_indent
        self._marker_spacing = marker_spacing
        self._created_callback = created_callback
        self._entries: Dict[int, MarkdownBlock] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, position: int) -> MarkdownBlock | None:
        """Get the entry at a position, if there is one."""
        return self._entries.get(position)

    def entries(self) -> List[MarkdownBlock]:
        """Get all live entries in position order."""
        return [self._entries[position] for position in sorted(self._entries)]

    def set_created_callback(self, callback: Callable[[BlockWidget], None] | None) -> None:
        self._created_callback = callback

    def reconcile(self, blocks: Sequence[RenderBlock]) -> ReconcileResult:
        """
        Bring the registry and host container in line with a new block list.

        Args:
            blocks: The flattened blocks of the current document

        Returns:
            Counts of created, reused, evicted and skipped blocks
        """
        result = ReconcileResult()

        # Every stale root must be gone before anything new is inserted
        self._evict_stale(blocks, result)

        marker_widths: Dict[int, int] = {}
        container_index = 0

        for position, block in enumerate(blocks):
            entry = self._entries.get(position)
            if entry is not None:
                self._reuse(entry, block)
                result.reused += 1

            else:
                try:
                    entry = self._create(block)

                except NoMatchingRendererError as e:
                    self._logger.warning("Skipping block %d: %s", position, e)
                    result.skipped += 1

                    # The skipped item's continuations have no marker to line up with
                    if block.marker is not None:
                        self._forget_marker_widths(marker_widths, block.depth)

                    continue

                self._entries[position] = entry
                self._host.insert_block_root(container_index, entry.root)
                result.created += 1

            container_index += 1
            self._host.set_block_inset(entry.root, self._inset(block, entry, marker_widths))

        return result

    def clear(self) -> int:
        """Evict every entry, returning the number evicted."""
        count = len(self._entries)
        for position in sorted(self._entries):
            self._host.remove_block_root(self._entries[position].root)

        self._entries.clear()
        return count

    def _is_compatible(self, entry: MarkdownBlock, block: RenderBlock) -> bool:
        # A marker wrapper cannot be added to or removed from an existing root
        if (entry.marker is None) != (block.marker is None):
            return False

        return entry.block.accepts(block.node)

    def _evict_stale(self, blocks: Sequence[RenderBlock], result: ReconcileResult) -> None:
        for position in sorted(self._entries):
            entry = self._entries[position]
            if position < len(blocks) and self._is_compatible(entry, blocks[position]):
                continue

            self._logger.debug("Evicting block at position %d", position)
            self._host.remove_block_root(entry.root)
            del self._entries[position]
            result.evicted += 1

    def _reuse(self, entry: MarkdownBlock, block: RenderBlock) -> None:
        if block.marker is not None and block.marker != entry.marker:
            entry.marker_width = self._host.update_marker(entry.root, block.marker)
            entry.marker = block.marker

        entry.block.update(block.node)

    def _create(self, block: RenderBlock) -> MarkdownBlock:
        factory = next((f for f in self._factories if f.matches(block.node)), None)
        if factory is None:
            raise NoMatchingRendererError(
                f"No renderer for node kind {block.node.kind.name}",
                {"kind": block.node.kind.name}
            )

        widget = factory.create()
        if self._created_callback is not None:
            self._created_callback(widget)

        widget.update(block.node)

        root = widget.root()
        marker_width = 0
        if block.marker is not None:
            root, marker_width = self._host.wrap_with_marker(root, block.marker)

        return MarkdownBlock(widget, root, block.marker, marker_width)

    def _inset(self, block: RenderBlock, entry: MarkdownBlock, marker_widths: Dict[int, int]) -> int:
        """
        Work out the left inset of a block.

        Continuation blocks line up with the content beside their list item's marker,
        so they need the marker width of the most recent marker at the same depth.
        """
        inset = block.depth * self._depth_indent

        if block.marker is not None:
            self._forget_marker_widths(marker_widths, block.depth + 1)
            marker_widths[block.depth] = entry.marker_width
            return inset

        if block.is_continuation and block.depth in marker_widths:
            inset += marker_widths[block.depth] + self._marker_spacing

        return inset

    def _forget_marker_widths(self, marker_widths: Dict[int, int], min_depth: int) -> None:
        """Drop the recorded marker widths at `min_depth` and deeper."""
        for depth in [d for d in marker_widths if d >= min_depth]:
            del marker_widths[depth]
