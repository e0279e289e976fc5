"""Data contexts: typed, path-addressed views over a data store.

A context is what bindings and functions resolve against. The store itself
is a context rooted at ``/``; ``with_base_path`` derives a scoped context
whose paths are relative to a prefix, which is how repeated (template) items
see their own data at ``/``.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from .path import join_path

if TYPE_CHECKING:
    from .store import DataStore


class DataContext(ABC):
    """Typed read access plus write-through to the owning store."""

    @abstractmethod
    def get(self, path: str, default: Any = None) -> Any:
        """Return the JSON value at ``path``, or ``default`` when absent."""

    @abstractmethod
    def update(self, path: str, value: Any) -> None:
        """Write ``value`` at ``path``."""

    @abstractmethod
    def delete(self, path: str) -> None:
        """Remove the key at ``path``."""

    @abstractmethod
    def with_base_path(self, base_path: str) -> "DataContext":
        """Return a context whose paths are relative to ``base_path``."""

    def get_string(self, path: str) -> str | None:
        value = self.get(path)
        return value if isinstance(value, str) else None

    def get_number(self, path: str) -> int | float | None:
        value = self.get(path)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        return value

    def get_boolean(self, path: str) -> bool | None:
        value = self.get(path)
        return value if isinstance(value, bool) else None

    def get_string_list(self, path: str) -> list[str] | None:
        """Return the string items of the array at ``path`` (non-strings skipped)."""
        value = self.get(path)
        if not isinstance(value, list):
            return None
        return [item for item in value if isinstance(item, str)]

    def get_array_length(self, path: str) -> int | None:
        value = self.get(path)
        return len(value) if isinstance(value, list) else None

    def get_object_keys(self, path: str) -> list[str] | None:
        value = self.get(path)
        return list(value.keys()) if isinstance(value, dict) else None


class ScopedDataContext(DataContext):
    """
    View over a store that prefixes every path with ``base_path``.

    Examples:
        >>> store = DataStore({"items": [{"name": "Apple"}]})
        >>> store.create_context("/items/0").get_string("/name")
        'Apple'
    """

    def __init__(self, store: "DataStore", base_path: str = ""):
        self._store = store
        self._base_path = base_path

    @property
    def store(self) -> "DataStore":
        return self._store

    @property
    def base_path(self) -> str:
        return self._base_path

    def resolve_path(self, path: str) -> str:
        """Absolute store path for a path relative to this context."""
        return join_path(self._base_path, path)

    def get(self, path: str, default: Any = None) -> Any:
        return self._store.get(self.resolve_path(path), default)

    def update(self, path: str, value: Any) -> None:
        self._store.update(self.resolve_path(path), value)

    def delete(self, path: str) -> None:
        self._store.delete(self.resolve_path(path))

    def with_base_path(self, base_path: str) -> "ScopedDataContext":
        return ScopedDataContext(self._store, join_path(self._base_path, base_path))

    def __repr__(self) -> str:
        return f"ScopedDataContext(base_path={self._base_path!r})"


__all__ = ["DataContext", "ScopedDataContext"]
