"""
a2ui-core
Synchronization core for agent-driven UI surfaces (A2UI v0.9).
"""

from .core import Settings, get_settings, configure_logging, get_logger
from .data import DataContext, DataStore, ScopedDataContext, parse_path
from .function import FunctionEvaluator, evaluate, evaluate_boolean, evaluate_string, is_action
from .model import (
    ActionEvent,
    Component,
    ComponentDef,
    CreateSurface,
    DataChangeEvent,
    DeleteSurface,
    SurfaceDefinition,
    UpdateComponents,
    UpdateDataModel,
    ValidationErrorEvent,
    build_action_event,
)
from .state import SurfaceProcessor
from .extension import (
    EXTENSION_URI,
    STANDARD_CATALOG_URI,
    MIME_TYPE,
    ClientCapabilities,
    ExtensionParams,
    standard_client_capabilities,
    client_capabilities,
)

__version__ = "0.9.0"

__all__ = [
    # Core
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Data
    "DataContext",
    "DataStore",
    "ScopedDataContext",
    "parse_path",
    # Functions
    "FunctionEvaluator",
    "evaluate",
    "evaluate_boolean",
    "evaluate_string",
    "is_action",
    # Models
    "ActionEvent",
    "Component",
    "ComponentDef",
    "CreateSurface",
    "DataChangeEvent",
    "DeleteSurface",
    "SurfaceDefinition",
    "UpdateComponents",
    "UpdateDataModel",
    "ValidationErrorEvent",
    "build_action_event",
    # State
    "SurfaceProcessor",
    # Extension
    "EXTENSION_URI",
    "STANDARD_CATALOG_URI",
    "MIME_TYPE",
    "ClientCapabilities",
    "ExtensionParams",
    "standard_client_capabilities",
    "client_capabilities",
]
