"""
Surface operations.

An operation is a JSON object with exactly one discriminating key naming its
type; the value under that key is the payload:

    {"createSurface": {"surfaceId": "main", "catalogId": "..."}}
    {"updateComponents": {"surfaceId": "main", "components": [...]}}
    {"updateDataModel": {"surfaceId": "main", "path": "/user", "value": {...}}}
    {"deleteSurface": {"surfaceId": "main"}}

Payloads decode into frozen pydantic models before any state changes.
"""

from typing import Any, Union

from pydantic import Field, ValidationError as PydanticValidationError, field_validator
from returns.result import Failure, Result, Success

from ..core.validate import (
    MAX_JSON_DEPTH,
    ProtocolModel,
    ValidationError,
    ValidationResult,
    validate_json_depth,
)
from ..function.evaluator import as_string

# Keys of a component definition that are not properties
RESERVED_COMPONENT_KEYS = frozenset({"id", "component", "weight"})


class ComponentDef(ProtocolModel):
    """
    Component definition in flat form.

    Every key other than ``id``, ``component`` and ``weight`` is a property:

        {"id": "title", "component": "Text", "text": "Hello", "variant": "h1"}
    """

    id: str
    component: str
    properties: dict[str, Any] = Field(default_factory=dict)
    weight: int | float | None = None

    @field_validator("weight", mode="before")
    @classmethod
    def _numeric_weight(cls, v: Any) -> Any:
        # Anything but a number means "no weight"
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            return None
        return v

    @classmethod
    def split(cls, raw: Any) -> Any:
        """Move non-reserved keys of a flat definition under ``properties``."""
        if not isinstance(raw, dict):
            return raw
        structured = {key: raw[key] for key in RESERVED_COMPONENT_KEYS if key in raw}
        structured["properties"] = {
            key: value for key, value in raw.items() if key not in RESERVED_COMPONENT_KEYS
        }
        return structured

    @classmethod
    def from_json(cls, raw: dict[str, Any]) -> "ComponentDef":
        """
        Build from a flat JSON object.

        Raises:
            pydantic.ValidationError: If ``id`` or ``component`` is missing or not a string
        """
        return cls.model_validate(cls.split(raw))


class CreateSurface(ProtocolModel):
    """Create a surface, or reset the metadata of an existing one."""

    surface_id: str = Field(alias="surfaceId")
    catalog_id: str | None = Field(default=None, alias="catalogId")
    theme: Any = None
    send_data_model: bool = Field(default=False, alias="sendDataModel")

    @field_validator("catalog_id", mode="before")
    @classmethod
    def _catalog_text(cls, v: Any) -> str | None:
        # Primitives are read as text; anything else means no catalog
        return as_string(v)

    @field_validator("send_data_model", mode="before")
    @classmethod
    def _lenient_flag(cls, v: Any) -> bool:
        return v is True or v == "true"


class UpdateComponents(ProtocolModel):
    """Add or replace components of a surface, keyed by id."""

    surface_id: str = Field(alias="surfaceId")
    components: tuple[ComponentDef, ...]

    @field_validator("components", mode="before")
    @classmethod
    def _split_definitions(cls, v: Any) -> Any:
        if not isinstance(v, list):
            return v
        definitions = []
        for index, item in enumerate(v):
            if isinstance(item, ComponentDef):
                definitions.append(item)
                continue
            try:
                definitions.append(ComponentDef.from_json(item))
            except PydanticValidationError as e:
                message, field = _describe(e)
                raise ValueError(f"component {index}: {field or 'value'}: {message}") from e
        return tuple(definitions)


class UpdateDataModel(ProtocolModel):
    """
    Write or delete data of a surface.

    A ``value`` key that is present (JSON null included) writes; an absent
    ``value`` key deletes the data at ``path``.
    """

    surface_id: str = Field(alias="surfaceId")
    path: str = "/"
    value: Any = None

    @field_validator("path", mode="before")
    @classmethod
    def _path_text(cls, v: Any) -> str:
        path = as_string(v)
        return "/" if path is None else path

    @property
    def has_value(self) -> bool:
        return "value" in self.model_fields_set


class DeleteSurface(ProtocolModel):
    """Remove a surface with its components and data."""

    surface_id: str = Field(alias="surfaceId")


Operation = Union[CreateSurface, UpdateComponents, UpdateDataModel, DeleteSurface]

# Discriminating key -> payload model, in dispatch order
OPERATION_TYPES: dict[str, type[ProtocolModel]] = {
    "createSurface": CreateSurface,
    "updateComponents": UpdateComponents,
    "updateDataModel": UpdateDataModel,
    "deleteSurface": DeleteSurface,
}

OPERATION_KEYS = tuple(OPERATION_TYPES)


def operation_key(raw: Any) -> str | None:
    """Discriminating key of a raw operation, or None if it names no known type."""
    if not isinstance(raw, dict):
        return None
    return next((key for key in OPERATION_KEYS if key in raw), None)


def _describe(error: PydanticValidationError) -> tuple[str, str | None]:
    first = error.errors()[0]
    field = ".".join(str(part) for part in first["loc"]) or None
    return first["msg"], field


def decode_operation(
    raw: dict[str, Any], max_depth: int = MAX_JSON_DEPTH
) -> Result[Operation, ValidationResult]:
    """
    Decode a raw operation (Result pattern).

    Args:
        raw: Operation object with one discriminating key
        max_depth: Maximum allowed nesting depth of the operation

    Returns:
        Success with the typed operation, or Failure describing why it is malformed
    """
    key = operation_key(raw)
    if key is None:
        keys = sorted(raw) if isinstance(raw, dict) else type(raw).__name__
        return Failure(ValidationResult("Unknown operation type", value=keys))

    try:
        validate_json_depth(raw, max_depth)
    except ValidationError as e:
        return Failure(ValidationResult(str(e), field=key))

    payload = raw[key]
    if not isinstance(payload, dict):
        return Failure(ValidationResult("Operation payload must be an object", field=key))

    try:
        return Success(OPERATION_TYPES[key].model_validate(payload))
    except PydanticValidationError as e:
        message, field = _describe(e)
        return Failure(ValidationResult(message, field=f"{key}.{field}" if field else key))


__all__ = [
    "RESERVED_COMPONENT_KEYS",
    "ComponentDef",
    "CreateSurface",
    "UpdateComponents",
    "UpdateDataModel",
    "DeleteSurface",
    "Operation",
    "OPERATION_TYPES",
    "OPERATION_KEYS",
    "operation_key",
    "decode_operation",
]
