"""Path resolution over immutable JSON trees.

Paths are JSON-Pointer style, ``/``-delimited strings such as ``/user/name``
or ``/items/0/title``. The empty path and ``/`` address the root.

Every function here is pure: input trees are never mutated. Writes rebuild
only the containers along the addressed path (shallow copies) and share every
untouched subtree with the input.
"""

from typing import Any

JSONValue = Any


class _Missing:
    """Marker for "no value at this path" (distinct from JSON null)."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def parse_path(path: str) -> tuple[str, ...]:
    """
    Split a path into its segments.

    Leading, trailing and repeated slashes are ignored, so ``""``, ``"/"``
    and ``"//"`` all parse to the root (no segments).

    Args:
        path: Pointer-style path

    Returns:
        Tuple of non-empty segments
    """
    if not path:
        return ()
    return tuple(segment for segment in path.split("/") if segment)


def join_path(base: str, path: str) -> str:
    """Prefix ``path`` with ``base``; ``"/"`` joined to a base is the base itself."""
    if not base:
        return path
    if path.startswith("/"):
        return f"{base}{path}"
    return f"{base}/{path}"


def is_container(value: Any) -> bool:
    return isinstance(value, (dict, list))


def _index(segment: str) -> int | None:
    if segment.isascii() and segment.isdigit():
        return int(segment)
    return None


def get_at(tree: JSONValue, segments: tuple[str, ...], default: Any = MISSING) -> Any:
    """
    Read the value addressed by ``segments``.

    Objects are indexed by key, arrays by integer segment. A missing key, an
    out-of-range or non-numeric index, or remaining segments below a
    primitive all yield ``default``.

    Args:
        tree: Root JSON value
        segments: Parsed path
        default: Returned when nothing is found

    Returns:
        The value at the path, or ``default``
    """
    current = tree
    for segment in segments:
        if isinstance(current, dict):
            if segment not in current:
                return default
            current = current[segment]
        elif isinstance(current, list):
            index = _index(segment)
            if index is None or index >= len(current):
                return default
            current = current[index]
        else:
            return default
    return current


def set_at(tree: JSONValue, segments: tuple[str, ...], value: JSONValue) -> JSONValue:
    """
    Return a new tree with ``value`` written at ``segments``.

    Writes descend through objects only. A missing intermediate, or one that
    is not an object (arrays included), is replaced by a new empty object;
    arrays are never created here. Writing at the root replaces the tree only
    when ``value`` is a container.

    Args:
        tree: Root JSON value (not modified)
        segments: Parsed path
        value: Value to write

    Returns:
        The updated tree
    """
    if not segments:
        return value if is_container(value) else tree
    return _set(tree, segments, value)


def _set(node: JSONValue, segments: tuple[str, ...], value: JSONValue) -> JSONValue:
    head, rest = segments[0], segments[1:]
    updated = dict(node) if isinstance(node, dict) else {}
    updated[head] = _set(updated.get(head), rest, value) if rest else value
    return updated


def delete_at(tree: JSONValue, segments: tuple[str, ...]) -> JSONValue:
    """
    Return a new tree without the leaf key addressed by ``segments``.

    Only object members are removed. If any segment is missing, or a
    container on the path is not an object, the input tree is returned
    unchanged (same object). Deleting the root yields an empty object.

    Args:
        tree: Root JSON value (not modified)
        segments: Parsed path

    Returns:
        The updated tree
    """
    if not segments:
        return {}
    return _delete(tree, segments)


def _delete(node: JSONValue, segments: tuple[str, ...]) -> JSONValue:
    if not isinstance(node, dict):
        return node

    head, rest = segments[0], segments[1:]
    if head not in node:
        return node

    updated = dict(node)
    if not rest:
        del updated[head]
        return updated

    child = node[head]
    new_child = _delete(child, rest)
    if new_child is child:
        return node
    updated[head] = new_child
    return updated


__all__ = [
    "MISSING",
    "JSONValue",
    "parse_path",
    "join_path",
    "is_container",
    "get_at",
    "set_at",
    "delete_at",
]
