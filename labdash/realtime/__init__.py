"""Change notification and client-side synchronization."""

from .hub import ChangeHub, ChangeSignal, change_hub
from .collection_view import CollectionView
from .reorder import DragState, ReorderController, move_item

__all__ = [
    "ChangeHub",
    "ChangeSignal",
    "change_hub",
    "CollectionView",
    "DragState",
    "ReorderController",
    "move_item",
]
