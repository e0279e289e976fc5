"""Core utilities and infrastructure."""

from .config import Settings, get_settings
from .validate import (
    ValidationError,
    ValidationResult,
    ProtocolModel,
    validate_json_depth,
    check_json_depth,
)
from .logging_config import configure_logging, get_logger, LogContext
from .json import parse_json, safe_json_dumps, JSONParseError
from .hash import hash_string
from .cache import LRUCache, Stats


__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Validation
    "ValidationError",
    "ValidationResult",
    "ProtocolModel",
    "validate_json_depth",
    "check_json_depth",
    # Logging
    "configure_logging",
    "get_logger",
    "LogContext",
    # JSON
    "parse_json",
    "safe_json_dumps",
    "JSONParseError",
    # Hashing
    "hash_string",
    # Caching
    "LRUCache",
    "Stats",
]
