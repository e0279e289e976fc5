"""Structural validation with strong typing and the Result pattern."""

from dataclasses import dataclass
from typing import Any
from returns.result import Result, Success, Failure

from pydantic import BaseModel, ConfigDict


# Validation limits
MAX_JSON_DEPTH = 64


class ValidationError(Exception):
    """Validation failed."""

    pass


@dataclass(frozen=True)
class ValidationResult:
    """Validation error with details (for Result pattern)."""

    message: str
    field: str | None = None
    value: Any | None = None


class ProtocolModel(BaseModel):
    """Base for decoded protocol payloads.

    Immutable once built. Unknown keys are ignored so that newer protocol
    revisions never break decoding.
    """

    model_config = ConfigDict(
        strict=True, extra="ignore", frozen=True, populate_by_name=True
    )


def validate_json_depth(obj: Any, max_depth: int = MAX_JSON_DEPTH, current_depth: int = 0) -> None:
    """
    Validate JSON nesting depth to prevent stack overflow.

    Args:
        obj: Object to validate
        max_depth: Maximum allowed nesting depth
        current_depth: Current depth (internal)

    Raises:
        ValidationError: If depth exceeds limit
    """
    if current_depth > max_depth:
        raise ValidationError(f"JSON nesting depth {current_depth} exceeds maximum {max_depth}")

    if isinstance(obj, dict):
        for value in obj.values():
            validate_json_depth(value, max_depth, current_depth + 1)
    elif isinstance(obj, list):
        for item in obj:
            validate_json_depth(item, max_depth, current_depth + 1)


def check_json_depth(obj: Any, max_depth: int = MAX_JSON_DEPTH) -> Result[None, ValidationResult]:
    """
    Validate nesting depth (Result pattern version).

    Args:
        obj: Decoded JSON value
        max_depth: Maximum allowed nesting depth

    Returns:
        Result indicating success or validation error
    """
    try:
        validate_json_depth(obj, max_depth)
        return Success(None)
    except ValidationError as e:
        return Failure(ValidationResult(str(e)))


__all__ = [
    "MAX_JSON_DEPTH",
    "ValidationError",
    "ValidationResult",
    "ProtocolModel",
    "validate_json_depth",
    "check_json_depth",
]
