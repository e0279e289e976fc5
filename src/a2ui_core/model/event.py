"""
Client events.

Messages the client sends back to the agent: user actions, two-way binding
changes and validation failures. Each serializes to a versioned envelope:

    {"version": "v0.9", "action": {"name": "submit", "surfaceId": "main", ...}}
    {"version": "v0.9", "error": {"code": "VALIDATION_FAILED", ...}}
"""

from datetime import datetime, timezone
from typing import Any, ClassVar, Mapping

from pydantic import Field

from ..core.json import safe_json_dumps
from ..core.validate import ProtocolModel
from ..data.context import DataContext

PROTOCOL_VERSION = "v0.9"
DEFAULT_ACTION_NAME = "click"
VALIDATION_FAILED = "VALIDATION_FAILED"


class ClientEvent(ProtocolModel):
    """Base for client-to-agent messages."""

    envelope_key: ClassVar[str]

    surface_id: str = Field(alias="surfaceId")

    def payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)

    def to_message(self) -> dict[str, Any]:
        """Versioned envelope for this event."""
        return {"version": PROTOCOL_VERSION, self.envelope_key: self.payload()}

    def to_json(self) -> str:
        return safe_json_dumps(self.to_message())


class ActionEvent(ClientEvent):
    """User triggered an action on a component."""

    envelope_key: ClassVar[str] = "action"

    name: str
    source_component_id: str = Field(alias="sourceComponentId")
    timestamp: str
    context: dict[str, Any] | None = None

    def payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude={"context"} if self.context is None else None)


class DataChangeEvent(ClientEvent):
    """Bound input changed the value at ``path``."""

    envelope_key: ClassVar[str] = "dataChange"

    path: str
    value: Any = None


class ValidationErrorEvent(ClientEvent):
    """Input at ``path`` failed a validation check."""

    envelope_key: ClassVar[str] = "error"

    code: str = VALIDATION_FAILED
    path: str
    message: str


def utc_timestamp() -> str:
    """Current time, ISO 8601 in UTC with millisecond precision."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def resolve_action_context(
    context_obj: Mapping[str, Any] | None, data_context: DataContext
) -> dict[str, Any] | None:
    """
    Resolve the context attached to an action.

    Each entry is a primitive literal or a ``{"path": ...}`` binding read at
    event time. Bindings that resolve to nothing, and nested structures, are
    dropped.

    Returns:
        Resolved entries, or None when nothing is left
    """
    if not context_obj:
        return None

    resolved: dict[str, Any] = {}
    for key, value in context_obj.items():
        if isinstance(value, dict):
            if "path" not in value:
                continue
            path = value["path"] if isinstance(value["path"], str) else ""
            for getter in (data_context.get_string, data_context.get_number, data_context.get_boolean):
                bound = getter(path)
                if bound is not None:
                    resolved[key] = bound
                    break
        elif not isinstance(value, list):
            resolved[key] = value

    return resolved or None


def action_name(action: Any) -> str:
    """Name of an action given as a string or as ``{"event": {"name": ...}}``."""
    if isinstance(action, str):
        return action
    if isinstance(action, dict):
        event = action.get("event")
        if isinstance(event, dict) and event.get("name") is not None:
            return str(event["name"])
    return DEFAULT_ACTION_NAME


def build_action_event(
    surface_id: str,
    component_id: str,
    action: Any,
    data_context: DataContext,
    item_key: str | None = None,
) -> ActionEvent:
    """
    Build the event for a triggered action.

    Args:
        surface_id: Surface the component belongs to
        component_id: Component that fired the action
        action: The component's ``action`` property
        data_context: Context the component renders against
        item_key: Template item key when the component is a repeated item

    Returns:
        Action event stamped with the current UTC time
    """
    event = action.get("event") if isinstance(action, dict) else None
    context_obj = event.get("context") if isinstance(event, dict) else None

    return ActionEvent(
        name=action_name(action),
        surface_id=surface_id,
        source_component_id=f"{component_id}:item{item_key}" if item_key is not None else component_id,
        timestamp=utc_timestamp(),
        context=resolve_action_context(context_obj if isinstance(context_obj, dict) else None, data_context),
    )


__all__ = [
    "PROTOCOL_VERSION",
    "VALIDATION_FAILED",
    "ClientEvent",
    "ActionEvent",
    "DataChangeEvent",
    "ValidationErrorEvent",
    "utc_timestamp",
    "resolve_action_context",
    "action_name",
    "build_action_event",
]
