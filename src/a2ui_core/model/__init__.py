"""Protocol models: operations, components, references and client events."""

from .operation import (
    ComponentDef,
    CreateSurface,
    UpdateComponents,
    UpdateDataModel,
    DeleteSurface,
    Operation,
    OPERATION_KEYS,
    operation_key,
    decode_operation,
)
from .component import ROOT_COMPONENT_ID, Component, SurfaceDefinition
from .reference import (
    LiteralRef,
    PathRef,
    FunctionCallRef,
    ExplicitChildren,
    TemplateChildren,
    parse_string,
    parse_number,
    parse_boolean,
    parse_string_list,
    parse_component_ref,
    parse_children,
    resolve,
)
from .event import (
    ActionEvent,
    DataChangeEvent,
    ValidationErrorEvent,
    resolve_action_context,
    build_action_event,
)

__all__ = [
    # Operations
    "ComponentDef",
    "CreateSurface",
    "UpdateComponents",
    "UpdateDataModel",
    "DeleteSurface",
    "Operation",
    "OPERATION_KEYS",
    "operation_key",
    "decode_operation",
    # Components
    "ROOT_COMPONENT_ID",
    "Component",
    "SurfaceDefinition",
    # References
    "LiteralRef",
    "PathRef",
    "FunctionCallRef",
    "ExplicitChildren",
    "TemplateChildren",
    "parse_string",
    "parse_number",
    "parse_boolean",
    "parse_string_list",
    "parse_component_ref",
    "parse_children",
    "resolve",
    # Events
    "ActionEvent",
    "DataChangeEvent",
    "ValidationErrorEvent",
    "resolve_action_context",
    "build_action_event",
]
