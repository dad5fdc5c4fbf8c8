"""In-process change notification hub.

The store publishes one ``ChangeSignal`` per (table, operation, owner)
after each successful commit. Subscribers register per table and get a
signal only, never row data: the contract is "something changed, fetch
again".

Listeners run synchronously on the committing thread. A failing listener
is logged and does not affect the commit or the other listeners.
"""

import itertools
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

logger = logging.getLogger(__name__)

INSERT = "INSERT"
UPDATE = "UPDATE"
DELETE = "DELETE"


@dataclass(frozen=True)
class ChangeSignal:
    """Notification that rows of ``table`` changed.

    ``user_id`` is the owning user of the changed row for user-scoped
    tables, ``None`` otherwise.
    """
    table: str
    op: str
    user_id: Optional[str] = None


Listener = Callable[[ChangeSignal], None]
Predicate = Callable[[ChangeSignal], bool]


@dataclass
class _Subscription:
    table: str
    listener: Listener
    predicate: Optional[Predicate]


class ChangeHub:
    """Registry of per-table change listeners."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._subscriptions: Dict[int, _Subscription] = {}
        self._ids = itertools.count(1)

    def subscribe(
        self,
        table: str,
        listener: Listener,
        predicate: Optional[Predicate] = None,
    ) -> Callable[[], None]:
        """Register ``listener`` for changes to ``table``.

        Returns an idempotent ``unsubscribe`` callable.
        """
        with self._lock:
            sub_id = next(self._ids)
            self._subscriptions[sub_id] = _Subscription(table, listener, predicate)
        logger.debug("Subscribed to %s", table, extra={"table": table, "subscription": sub_id})

        def unsubscribe() -> None:
            with self._lock:
                removed = self._subscriptions.pop(sub_id, None)
            if removed is not None:
                logger.debug("Unsubscribed from %s", table, extra={"table": table, "subscription": sub_id})

        return unsubscribe

    def publish(self, signal: ChangeSignal) -> int:
        """Deliver ``signal`` to matching listeners. Returns how many were called."""
        with self._lock:
            targets = [s for s in self._subscriptions.values() if s.table == signal.table]

        delivered = 0
        for sub in targets:
            try:
                if sub.predicate is not None and not sub.predicate(signal):
                    continue
                sub.listener(signal)
                delivered += 1
            except Exception:
                logger.exception(
                    "Change listener failed for %s", signal.table,
                    extra={"table": signal.table, "op": signal.op},
                )
        return delivered

    def publish_many(self, signals: Iterable[ChangeSignal]) -> None:
        for signal in signals:
            self.publish(signal)

    def subscriber_count(self, table: Optional[str] = None) -> int:
        with self._lock:
            if table is None:
                return len(self._subscriptions)
            return sum(1 for s in self._subscriptions.values() if s.table == table)

    def clear(self) -> None:
        """Drop every subscription (used on shutdown and between tests)."""
        with self._lock:
            self._subscriptions.clear()


# Process-wide hub fed by the database session hooks.
change_hub = ChangeHub()
