"""Protocol extension metadata exchanged during capability negotiation."""

from typing import Any

from pydantic import Field

from .core.validate import ProtocolModel

EXTENSION_URI = "https://a2ui.org/a2a-extension/a2ui/v0.8"
STANDARD_CATALOG_URI = (
    "https://github.com/google/A2UI/blob/main/specification/0.8/json/standard_catalog_definition.json"
)
MIME_TYPE = "application/json+a2ui"


class ClientCapabilities(ProtocolModel):
    """Catalogs the client can render, sent in message metadata."""

    supported_catalog_ids: list[str] = Field(alias="supportedCatalogIds")

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class ExtensionParams(ProtocolModel):
    """Parameters of the extension declaration in an agent card."""

    supported_catalog_ids: list[str] | None = Field(default=None, alias="supportedCatalogIds")
    accepts_inline_catalogs: bool = Field(default=False, alias="acceptsInlineCatalogs")

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


def standard_client_capabilities() -> ClientCapabilities:
    """Capabilities of a client that renders the standard catalog only."""
    return ClientCapabilities(supported_catalog_ids=[STANDARD_CATALOG_URI])


def client_capabilities(*catalog_ids: str) -> ClientCapabilities:
    return ClientCapabilities(supported_catalog_ids=list(catalog_ids))


__all__ = [
    "EXTENSION_URI",
    "STANDARD_CATALOG_URI",
    "MIME_TYPE",
    "ClientCapabilities",
    "ExtensionParams",
    "standard_client_capabilities",
    "client_capabilities",
]
