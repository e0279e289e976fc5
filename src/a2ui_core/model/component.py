"""Component and surface definitions handed to renderers."""

import copy
from typing import Any

from pydantic import Field

from ..core.hash import hash_string
from ..core.json import safe_json_dumps
from ..core.validate import ProtocolModel
from .operation import ComponentDef

ROOT_COMPONENT_ID = "root"


class Component(ProtocolModel):
    """UI component: a typed node with properties, replaced wholesale on update."""

    id: str
    component_type: str
    properties: dict[str, Any] = Field(default_factory=dict)
    weight: int | float | None = None

    @classmethod
    def from_def(cls, definition: ComponentDef) -> "Component":
        return cls(
            id=definition.id,
            component_type=definition.component,
            properties=copy.deepcopy(definition.properties),
            weight=definition.weight,
        )

    def to_dict(self) -> dict[str, Any]:
        """Flat wire form: ``{"id", "component", "weight"?, **properties}``."""
        data: dict[str, Any] = {**self.properties, "id": self.id, "component": self.component_type}
        if self.weight is not None:
            data["weight"] = self.weight
        return data


class SurfaceDefinition(ProtocolModel):
    """
    Point-in-time view of a surface.

    Returned by the processor; later operations never change an existing
    instance.
    """

    surface_id: str
    components: dict[str, Component] = Field(default_factory=dict)
    catalog_id: str | None = None
    theme: Any = None
    send_data_model: bool = False

    @property
    def root_component(self) -> Component | None:
        """Component with id ``"root"``, if it has arrived yet."""
        return self.components.get(ROOT_COMPONENT_ID)

    def with_components(self, components: dict[str, Component]) -> "SurfaceDefinition":
        """Copy with ``components`` merged over the existing map."""
        return self.model_copy(update={"components": {**self.components, **components}})

    def to_dict(self) -> dict[str, Any]:
        return {
            "surfaceId": self.surface_id,
            "catalogId": self.catalog_id,
            "theme": self.theme,
            "sendDataModel": self.send_data_model,
            "components": [self.components[key].to_dict() for key in sorted(self.components)],
        }

    def fingerprint(self) -> str:
        """
        Stable digest of the definition.

        Identical content always yields the same fingerprint, regardless of
        the order in which components arrived.
        """
        return hash_string(safe_json_dumps(self.to_dict(), sort_keys=True))


__all__ = ["ROOT_COMPONENT_ID", "Component", "SurfaceDefinition"]
