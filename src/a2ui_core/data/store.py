"""Reactive per-surface data store.

Holds one JSON tree behind a single "current snapshot" reference. Every
mutation builds a new tree with the pure functions in ``path`` and swaps the
reference under a lock, so a snapshot captured by a reader never changes.
Observers are notified after each swap.
"""

import copy
import threading
from typing import Any, Callable

from ..core.logging_config import get_logger
from .context import DataContext, ScopedDataContext
from .path import JSONValue, MISSING, delete_at, get_at, parse_path, set_at

logger = get_logger(__name__)

Subscriber = Callable[[JSONValue], None]
PathObserver = Callable[[Any], None]


def _same(old: Any, new: Any) -> bool:
    return old is new or (type(old) is type(new) and old == new)


class DataStore(DataContext):
    """
    Path-addressed JSON store for one surface.

    Examples:
        >>> store = DataStore()
        >>> store.update("/user/name", "Ada")
        >>> store.get_string("/user/name")
        'Ada'
        >>> store.delete("/user/name")
        >>> store.get_string("/user/name") is None
        True
    """

    def __init__(self, initial: dict[str, Any] | None = None):
        self._data: JSONValue = copy.deepcopy(initial) if initial is not None else {}
        self._lock = threading.Lock()
        self._subscribers: list[Subscriber] = []

    @property
    def snapshot(self) -> JSONValue:
        """Current tree. Treat as read-only; it is shared with later snapshots."""
        return self._data

    # Reads

    def get(self, path: str, default: Any = None) -> Any:
        return get_at(self._data, parse_path(path), default)

    def contains(self, path: str) -> bool:
        """True when ``path`` resolves to a value (JSON null included)."""
        return get_at(self._data, parse_path(path)) is not MISSING

    # Writes

    def update(self, path: str, value: Any) -> None:
        """
        Write ``value`` at ``path``.

        A container written at the root replaces the whole tree; a primitive
        written at the root is ignored.
        """
        segments = parse_path(path)
        value = copy.deepcopy(value)
        self._write(lambda tree: set_at(tree, segments, value))

    def delete(self, path: str) -> None:
        """Remove the key at ``path``; the root path clears the store."""
        segments = parse_path(path)
        self._write(lambda tree: delete_at(tree, segments))

    def set_data(self, data: JSONValue) -> None:
        """Replace the entire tree."""
        data = copy.deepcopy(data)
        self._write(lambda _tree: data)

    def _write(self, transform: Callable[[JSONValue], JSONValue]) -> None:
        with self._lock:
            previous = self._data
            current = transform(previous)
            if current is previous:
                return
            self._data = current
            subscribers = list(self._subscribers)

        for subscriber in subscribers:
            try:
                subscriber(current)
            except Exception:
                logger.exception("data_observer_failed", observer=repr(subscriber))

    # Observation

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Call ``callback(snapshot)`` after every change.

        Args:
            callback: Receives the new tree

        Returns:
            Function that removes the subscription
        """
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def observe(self, path: str, callback: PathObserver) -> Callable[[], None]:
        """
        Call ``callback(value)`` whenever the value at ``path`` changes.

        ``value`` is ``None`` once the path no longer resolves.

        Returns:
            Function that removes the observer
        """
        segments = parse_path(path)
        last = [get_at(self._data, segments)]

        def on_change(tree: JSONValue) -> None:
            value = get_at(tree, segments)
            if _same(last[0], value):
                return
            last[0] = value
            callback(None if value is MISSING else value)

        return self.subscribe(on_change)

    # Contexts

    def create_context(self, base_path: str = "") -> ScopedDataContext:
        """Context whose paths are relative to ``base_path``."""
        return ScopedDataContext(self, base_path)

    def with_base_path(self, base_path: str) -> ScopedDataContext:
        return self.create_context(base_path)

    def __repr__(self) -> str:
        keys = list(self._data) if isinstance(self._data, dict) else type(self._data).__name__
        return f"DataStore(keys={keys!r})"


__all__ = ["DataStore", "Subscriber", "PathObserver"]
