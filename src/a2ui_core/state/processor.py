"""
Surface Operation Processor
Applies streamed operations to a registry of surfaces.

Snapshot messages carry an ordered operation list:

    {"operations": [{"createSurface": {...}}, {"updateComponents": {...}}]}

Delta messages are JSON Patch arrays; only appends to ``/operations/`` act:

    [{"op": "add", "path": "/operations/-", "value": {"deleteSurface": {...}}}]

Malformed operations are dropped with a warning and processing continues.
"""

import copy
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

from returns.pipeline import is_successful

from ..core.config import Settings, get_settings
from ..core.json import JSONParseError, parse_json
from ..core.logging_config import LogContext, get_logger
from ..data.store import DataStore
from ..model.component import Component, SurfaceDefinition
from ..model.operation import (
    CreateSurface,
    DeleteSurface,
    Operation,
    UpdateComponents,
    UpdateDataModel,
    decode_operation,
    operation_key,
)

logger = get_logger(__name__)

OPERATIONS_PATH_PREFIX = "/operations/"


@dataclass
class _SurfaceState:
    """Mutable registry entry; never handed out."""

    surface_id: str
    catalog_id: str | None = None
    theme: Any = None
    send_data_model: bool = False
    components: dict[str, Component] = field(default_factory=dict)
    store: DataStore = field(default_factory=DataStore)

    def definition(self) -> SurfaceDefinition:
        return SurfaceDefinition(
            surface_id=self.surface_id,
            components=dict(self.components),
            catalog_id=self.catalog_id,
            theme=copy.deepcopy(self.theme),
            send_data_model=self.send_data_model,
        )


class SurfaceProcessor:
    """
    Registry of surfaces driven by operations.

    Examples:
        >>> processor = SurfaceProcessor()
        >>> processor.process_snapshot({"operations": [
        ...     {"createSurface": {"surfaceId": "main"}},
        ...     {"updateComponents": {"surfaceId": "main", "components": [
        ...         {"id": "root", "component": "Text", "text": "Hi"}]}},
        ... ]})
        2
        >>> processor.get_surface("main").root_component.properties
        {'text': 'Hi'}
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """
        Initialize processor.

        Args:
            settings: Decoding limits (defaults to process settings)
        """
        settings = settings or get_settings()
        self.max_json_depth = settings.max_json_depth
        self._surfaces: dict[str, _SurfaceState] = {}
        self._lock = threading.RLock()
        self._handlers: dict[type, Callable[[Any], None]] = {
            CreateSurface: self._create_surface,
            UpdateComponents: self._update_components,
            UpdateDataModel: self._update_data_model,
            DeleteSurface: self._delete_surface,
        }

    # ========================================================================
    # Ingestion
    # ========================================================================

    def process_snapshot(self, message: Any, message_id: str | None = None) -> int:
        """
        Apply a snapshot message.

        Args:
            message: ``{"operations": [...]}`` as a dict, JSON text or bytes
            message_id: Identifier bound to log lines while processing

        Returns:
            Number of operations applied
        """
        with LogContext(message_id=message_id):
            if isinstance(message, (str, bytes)):
                try:
                    message = parse_json(message)
                except JSONParseError as e:
                    logger.warning("snapshot_dropped", error=str(e))
                    return 0

            operations = message.get("operations") if isinstance(message, dict) else None
            if not isinstance(operations, list):
                logger.warning("snapshot_dropped", error="missing 'operations' array")
                return 0

            return self.apply_snapshot(operations)

    def process_delta(self, patch: Any, message_id: str | None = None) -> int:
        """
        Apply a delta message (JSON Patch array, dict form or JSON text).

        Returns:
            Number of operations applied
        """
        with LogContext(message_id=message_id):
            if isinstance(patch, (str, bytes)):
                try:
                    patch = parse_json(patch)
                except JSONParseError as e:
                    logger.warning("delta_dropped", error=str(e))
                    return 0

            if not isinstance(patch, list):
                logger.warning("delta_dropped", error="patch must be an array")
                return 0

            return self.apply_delta(patch)

    def apply_snapshot(self, operations: Iterable[Any]) -> int:
        """Apply operations in order; returns how many were applied."""
        return sum(1 for raw in operations if self.apply_operation(raw))

    def apply_delta(self, patch: Iterable[Any]) -> int:
        """Apply the operations appended by a JSON Patch; other patch ops are ignored."""
        applied = 0
        for entry in patch:
            if not isinstance(entry, dict):
                logger.info("patch_entry_ignored", type=type(entry).__name__)
                continue

            op, path = entry.get("op"), entry.get("path")
            if op != "add" or not isinstance(path, str) or not path.startswith(OPERATIONS_PATH_PREFIX):
                logger.info("patch_entry_ignored", op=op, path=path)
                continue
            if "value" not in entry:
                logger.warning("operation_dropped", error="patch entry has no value", path=path)
                continue

            if self.apply_operation(entry["value"]):
                applied += 1
        return applied

    def apply_operation(self, raw: Any) -> bool:
        """
        Decode and apply one operation.

        Args:
            raw: Operation object, or an already decoded operation model

        Returns:
            True if the operation changed state, False if it was dropped or ignored
        """
        operation = raw if type(raw) in self._handlers else self._decode(raw)
        if operation is None:
            return False

        with self._lock:
            self._handlers[type(operation)](operation)
        return True

    def _decode(self, raw: Any) -> Operation | None:
        if not isinstance(raw, dict):
            logger.warning("operation_dropped", error="operation must be an object", type=type(raw).__name__)
            return None

        key = operation_key(raw)
        if key is None:
            logger.info("unknown_operation", keys=sorted(str(k) for k in raw))
            return None

        result = decode_operation(raw, self.max_json_depth)
        if not is_successful(result):
            failure = result.failure()
            logger.warning("operation_dropped", operation=key, error=failure.message, field=failure.field)
            return None
        return result.unwrap()

    # ========================================================================
    # Handlers (called with the registry lock held)
    # ========================================================================

    def _state(self, surface_id: str) -> _SurfaceState:
        state = self._surfaces.get(surface_id)
        if state is None:
            state = _SurfaceState(surface_id)
            self._surfaces[surface_id] = state
            logger.debug("surface_created", surface_id=surface_id)
        return state

    def _create_surface(self, op: CreateSurface) -> None:
        state = self._state(op.surface_id)
        state.catalog_id = op.catalog_id
        state.theme = copy.deepcopy(op.theme)
        state.send_data_model = op.send_data_model
        logger.debug(
            "surface_configured",
            surface_id=op.surface_id,
            catalog_id=op.catalog_id,
            send_data_model=op.send_data_model,
        )

    def _update_components(self, op: UpdateComponents) -> None:
        state = self._state(op.surface_id)
        for definition in op.components:
            state.components[definition.id] = Component.from_def(definition)
        logger.debug("components_updated", surface_id=op.surface_id, count=len(op.components))

    def _update_data_model(self, op: UpdateDataModel) -> None:
        state = self._state(op.surface_id)
        if op.has_value:
            state.store.update(op.path, op.value)
        else:
            state.store.delete(op.path)
        logger.debug("data_model_updated", surface_id=op.surface_id, path=op.path, deleted=not op.has_value)

    def _delete_surface(self, op: DeleteSurface) -> None:
        removed = self._surfaces.pop(op.surface_id, None)
        logger.debug("surface_deleted", surface_id=op.surface_id, existed=removed is not None)

    # ========================================================================
    # Queries
    # ========================================================================

    def list_surfaces(self) -> dict[str, SurfaceDefinition]:
        """Point-in-time definitions of every surface, keyed by id."""
        with self._lock:
            return {surface_id: state.definition() for surface_id, state in self._surfaces.items()}

    def get_surface(self, surface_id: str) -> SurfaceDefinition | None:
        with self._lock:
            state = self._surfaces.get(surface_id)
            return state.definition() if state else None

    def get_data_store(self, surface_id: str) -> DataStore | None:
        """Live data store of a surface (for bindings and two-way updates)."""
        with self._lock:
            state = self._surfaces.get(surface_id)
            return state.store if state else None

    def collect_data_models(self) -> dict[str, Any]:
        """Data of every surface that asked for it to be sent with client messages."""
        with self._lock:
            return {
                surface_id: copy.deepcopy(state.store.snapshot)
                for surface_id, state in self._surfaces.items()
                if state.send_data_model
            }

    def count(self) -> int:
        with self._lock:
            return len(self._surfaces)

    def clear(self) -> None:
        """Remove every surface."""
        with self._lock:
            self._surfaces.clear()
        logger.debug("surfaces_cleared")

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, surface_id: object) -> bool:
        with self._lock:
            return surface_id in self._surfaces


__all__ = ["SurfaceProcessor", "OPERATIONS_PATH_PREFIX"]
