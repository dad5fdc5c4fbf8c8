"""View synchronizer: a locally cached copy of one server collection.

A view fetches the whole collection when activated and again whenever a
watched table changes. There is no diffing: every signal means "fetch
everything and replace the cache". Fetch failures are logged and leave an
empty cache.
"""

import logging
import threading
from typing import Callable, Generic, List, Optional, TypeVar

from ..core.identifiers import is_valid_uuid
from .hub import ChangeHub, ChangeSignal, change_hub

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CollectionView(Generic[T]):
    """Cached collection kept in sync through a ChangeHub.

    Usage::

        view = CollectionView(fetch_events, name="events").watch("events", owner_id=uid)
        with view:
            render(view.items)
    """

    def __init__(
        self,
        fetch: Callable[[], List[T]],
        hub: Optional[ChangeHub] = None,
        on_refresh: Optional[Callable[[List[T]], None]] = None,
        name: str = "",
    ):
        self._fetch = fetch
        self._hub = hub if hub is not None else change_hub
        self._on_refresh = on_refresh
        self.name = name or getattr(fetch, "__name__", "view")

        self._lock = threading.RLock()
        self._items: List[T] = []
        self._loading = True
        self._watches: list = []
        self._active = False
        self._unsubscribers: List[Callable[[], None]] = []

    # --- configuration ---

    def watch(self, table: str, owner_id: Optional[str] = None) -> "CollectionView[T]":
        """Refetch when ``table`` changes.

        With ``owner_id`` only rows owned by that user count. An owner id
        that fails the identifier gate registers nothing, so the view
        never refreshes from that table.
        """
        if owner_id is not None and not is_valid_uuid(owner_id):
            logger.debug("Not watching %s for invalid owner id", table, extra={"table": table})
            return self
        self._watches.append((table, owner_id))
        return self

    # --- lifecycle ---

    @property
    def active(self) -> bool:
        return self._active

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def items(self) -> List[T]:
        with self._lock:
            return list(self._items)

    def activate(self) -> "CollectionView[T]":
        if self.active:
            return self
        self._active = True
        self.refresh()
        for table, owner_id in self._watches:
            predicate = None
            if owner_id is not None:
                predicate = _owned_by(owner_id)
            self._unsubscribers.append(
                self._hub.subscribe(table, self._on_change, predicate)
            )
        return self

    def deactivate(self) -> None:
        self._active = False
        unsubscribers, self._unsubscribers = self._unsubscribers, []
        for unsubscribe in unsubscribers:
            unsubscribe()

    def __enter__(self) -> "CollectionView[T]":
        return self.activate()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.deactivate()

    # --- cache ---

    def refresh(self) -> List[T]:
        """Fetch the whole collection and replace the cache."""
        try:
            fetched = list(self._fetch())
        except Exception:
            logger.exception("Fetch for view %s failed", self.name)
            fetched = []
        self._set(fetched)
        return fetched

    def replace(self, items: List[T]) -> None:
        """Overwrite the cache locally. The next refresh wins."""
        self._set(list(items))

    def _set(self, items: List[T]) -> None:
        with self._lock:
            self._items = items
            self._loading = False
        if self._on_refresh is not None:
            self._on_refresh(list(items))

    def _on_change(self, signal: ChangeSignal) -> None:
        logger.debug(
            "View %s refreshing after %s on %s", self.name, signal.op, signal.table,
            extra={"table": signal.table, "op": signal.op},
        )
        self.refresh()


def _owned_by(owner_id: str) -> Callable[[ChangeSignal], bool]:
    def predicate(signal: ChangeSignal) -> bool:
        return signal.user_id == owner_id
    return predicate
