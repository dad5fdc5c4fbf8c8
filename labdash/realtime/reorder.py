"""Optimistic drag-and-drop reordering of a CollectionView.

States: idle -> dragging -> hovering -> (dropped | cancelled) -> idle.

On drop the view's cache is reordered immediately and every item's
``sort_order`` is set to its new index. One update per row is then sent
in parallel. Failed updates are not rolled back; the view stays as it is
until the next change signal refreshes it.
"""

import enum
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence, TypeVar

from .collection_view import CollectionView

logger = logging.getLogger(__name__)

T = TypeVar("T")

PersistOne = Callable[[str, int], bool]


class DragState(str, enum.Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    HOVERING = "hovering"


def move_item(items: Sequence[T], source: int, target: int) -> List[T]:
    """Remove the element at ``source`` and reinsert it at ``target``."""
    if not (0 <= source < len(items)) or not (0 <= target < len(items)):
        raise IndexError(f"move {source} -> {target} out of range for {len(items)} items")
    moved = list(items)
    item = moved.pop(source)
    moved.insert(target, item)
    return moved


def with_sort_order(item, sort_order: int):
    """Copy of ``item`` with a new ``sort_order``.

    Pydantic models are copied; anything else is updated in place.
    """
    if hasattr(item, "model_copy"):
        return item.model_copy(update={"sort_order": sort_order})
    setattr(item, "sort_order", sort_order)
    return item


class ReorderController:
    """Drag state machine bound to one view."""

    def __init__(self, view: CollectionView, persist_one: PersistOne, max_workers: int = 8):
        self.view = view
        self._persist_one = persist_one
        self._max_workers = max_workers
        self.state = DragState.IDLE
        self.source: Optional[int] = None
        self.target: Optional[int] = None

    def start_drag(self, index: int) -> None:
        self.state = DragState.DRAGGING
        self.source = index
        self.target = None

    def hover(self, index: int) -> None:
        if self.state is DragState.IDLE:
            return
        self.state = DragState.HOVERING
        self.target = index

    def leave(self) -> None:
        if self.state is DragState.HOVERING:
            self.state = DragState.DRAGGING
            self.target = None

    def cancel(self) -> None:
        self._reset()

    def drop(self, target: Optional[int] = None) -> bool:
        """Finish the drag at ``target`` (or the hovered index).

        Returns False if any row failed to persist. A drop with no drag in
        progress, back onto the source, or onto an index the view no longer
        has changes nothing and returns True.
        """
        source = self.source
        if target is None:
            target = self.target
        self._reset()

        if source is None or target is None or source == target:
            return True

        items = self.view.items
        if not (0 <= source < len(items) and 0 <= target < len(items)):
            # A refresh shrank the view mid-drag.
            logger.info(
                "Dropped stale drag %d -> %d on %d items", source, target, len(items),
                extra={"view": self.view.name},
            )
            return True

        reordered = [with_sort_order(item, i) for i, item in enumerate(move_item(items, source, target))]
        self.view.replace(reordered)
        return self._persist(reordered)

    def _persist(self, items: List) -> bool:
        if not items:
            return True
        workers = max(1, min(self._max_workers, len(items)))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="reorder") as pool:
            results = list(pool.map(self._persist_row, items))
        ok = all(results)
        if not ok:
            logger.warning(
                "Reorder persisted %d of %d rows", sum(results), len(results),
                extra={"view": self.view.name},
            )
        return ok

    def _persist_row(self, item) -> bool:
        try:
            return bool(self._persist_one(item.id, item.sort_order))
        except Exception:
            logger.exception("Persisting sort_order for %s failed", getattr(item, "id", "?"))
            return False

    def _reset(self) -> None:
        self.state = DragState.IDLE
        self.source = None
        self.target = None
