"""
Dynamic references inside component properties.

A dynamic property is one of:
- a literal (``"Hello"``, ``42``, ``true``)
- a data binding (``{"path": "/user/name"}``)
- a function call (``{"call": "formatNumber", "args": {...}}``)

Children are either an explicit list of component ids or a template that
repeats one component for every item at a data path.
"""

from dataclasses import dataclass
from typing import Any, Iterator, Literal, Union

from ..data.context import DataContext
from ..data.path import join_path
from ..function.evaluator import FunctionEvaluator, as_boolean, as_number, as_string, get_evaluator

Kind = Literal["string", "number", "boolean", "any"]


@dataclass(frozen=True)
class LiteralRef:
    """Value given inline."""

    value: Any


@dataclass(frozen=True)
class PathRef:
    """Value bound to a data path."""

    path: str
    kind: Kind = "any"


@dataclass(frozen=True)
class FunctionCallRef:
    """Value computed by a catalog function."""

    call: str
    args: dict[str, Any] | None = None
    return_type: str | None = None


DynamicRef = Union[LiteralRef, PathRef, FunctionCallRef]


@dataclass(frozen=True)
class ExplicitChildren:
    """Fixed list of child component ids."""

    component_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class TemplateChildren:
    """One instance of ``component_id`` per item of the collection at ``path``."""

    component_id: str
    path: str

    def item_contexts(self, context: DataContext) -> Iterator[tuple[str, DataContext]]:
        """
        Yield ``(item_key, scoped_context)`` for every item at ``path``.

        Arrays yield their indices, objects their keys. Inside a scoped
        context, ``/`` is the item itself.
        """
        collection = context.get(self.path)
        if isinstance(collection, list):
            keys: list[str] = [str(index) for index in range(len(collection))]
        elif isinstance(collection, dict):
            keys = list(collection)
        else:
            return
        for key in keys:
            yield key, context.with_base_path(join_path(self.path, key))


ChildrenRef = Union[ExplicitChildren, TemplateChildren]


# ============================================================================
# Parsing
# ============================================================================


def _parse_object(element: dict[str, Any], kind: Kind) -> DynamicRef | None:
    path = element.get("path")
    if isinstance(path, str):
        return PathRef(path, kind)
    call = element.get("call")
    if isinstance(call, str):
        args = element.get("args")
        return_type = element.get("returnType")
        return FunctionCallRef(
            call=call,
            args=args if isinstance(args, dict) else None,
            return_type=return_type if isinstance(return_type, str) else None,
        )
    return None


def parse_string(element: Any) -> DynamicRef | None:
    if isinstance(element, dict):
        return _parse_object(element, "string")
    text = as_string(element)
    return LiteralRef(text) if text is not None else None


def parse_number(element: Any) -> DynamicRef | None:
    if isinstance(element, dict):
        return _parse_object(element, "number")
    number = as_number(element)
    return LiteralRef(number) if number is not None else None


def parse_boolean(element: Any) -> DynamicRef | None:
    if isinstance(element, dict):
        return _parse_object(element, "boolean")
    flag = as_boolean(element)
    return LiteralRef(flag) if flag is not None else None


def parse_string_list(element: Any) -> list[str] | None:
    """Literal array of strings; bindings need runtime resolution and give None."""
    if not isinstance(element, list):
        return None
    return [text for text in map(as_string, element) if text is not None]


def parse_component_ref(element: Any) -> str | None:
    """Component id named by a property, if any."""
    if isinstance(element, (dict, list)):
        return None
    return as_string(element)


def parse_children(element: Any) -> ChildrenRef | None:
    if isinstance(element, list):
        ids = (as_string(item) for item in element if not isinstance(item, (dict, list)))
        return ExplicitChildren(tuple(item for item in ids if item is not None))
    if isinstance(element, dict):
        component_id = element.get("componentId")
        path = element.get("path")
        if isinstance(component_id, str) and isinstance(path, str):
            return TemplateChildren(component_id, path)
    return None


# ============================================================================
# Resolution
# ============================================================================

_GETTERS = {
    "string": DataContext.get_string,
    "number": DataContext.get_number,
    "boolean": DataContext.get_boolean,
}


def resolve(
    ref: DynamicRef | None,
    context: DataContext,
    evaluator: FunctionEvaluator | None = None,
) -> Any:
    """
    Current value of a reference.

    Path bindings are narrowed to the kind they were parsed as; a value of
    another kind resolves to None.
    """
    if ref is None:
        return None
    if isinstance(ref, LiteralRef):
        return ref.value
    if isinstance(ref, PathRef):
        getter = _GETTERS.get(ref.kind)
        return getter(context, ref.path) if getter else context.get(ref.path)
    return (evaluator or get_evaluator()).evaluate(ref.call, ref.args, context)


__all__ = [
    "LiteralRef",
    "PathRef",
    "FunctionCallRef",
    "DynamicRef",
    "ExplicitChildren",
    "TemplateChildren",
    "ChildrenRef",
    "parse_string",
    "parse_number",
    "parse_boolean",
    "parse_string_list",
    "parse_component_ref",
    "parse_children",
    "resolve",
]
