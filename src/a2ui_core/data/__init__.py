"""Path-addressed reactive data store."""

from .path import MISSING, parse_path, join_path, get_at, set_at, delete_at
from .context import DataContext, ScopedDataContext
from .store import DataStore

__all__ = [
    "MISSING",
    "parse_path",
    "join_path",
    "get_at",
    "set_at",
    "delete_at",
    "DataContext",
    "ScopedDataContext",
    "DataStore",
]
