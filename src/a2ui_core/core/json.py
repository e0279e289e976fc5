"""Fast JSON decoding and encoding with msgspec and orjson."""

from typing import Any
import json

import msgspec
import orjson


class JSONParseError(Exception):
    """JSON parsing failed."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


_decoder = msgspec.json.Decoder()


def parse_json(data: str | bytes) -> Any:
    """
    Decode one complete JSON document.

    Args:
        data: JSON text or UTF-8 bytes

    Returns:
        Decoded value (dict, list or primitive)

    Raises:
        JSONParseError: If the document is not valid JSON
    """
    if isinstance(data, str):
        data = data.encode("utf-8")

    try:
        return _decoder.decode(data)
    except msgspec.DecodeError as e:
        raise JSONParseError(f"Invalid JSON: {e}", e) from e


def safe_json_dumps(obj: Any, sort_keys: bool = False, **kwargs: Any) -> str:
    """
    Encode object to JSON string using fastest available library.

    Args:
        obj: Object to encode
        sort_keys: Emit object keys in sorted order (canonical form)
        **kwargs: Additional arguments (indent, etc.)

    Returns:
        JSON string
    """
    indent = kwargs.get("indent", 0)

    # Use orjson for compact output (fastest)
    if indent == 0:
        option = orjson.OPT_SORT_KEYS if sort_keys else 0
        try:
            return orjson.dumps(obj, option=option).decode("utf-8")
        except (TypeError, ValueError):
            # Fallback for edge cases (e.g., integers outside 64-bit range)
            pass

    # Use msgspec for compact output when key order does not matter
    if indent == 0 and not sort_keys:
        try:
            return msgspec.json.encode(obj).decode("utf-8")
        except (TypeError, ValueError):
            pass

    # Use stdlib for pretty-printed output or as fallback (most compatible)
    return json.dumps(obj, indent=indent if indent > 0 else None, sort_keys=sort_keys)


__all__ = ["JSONParseError", "parse_json", "safe_json_dumps"]
