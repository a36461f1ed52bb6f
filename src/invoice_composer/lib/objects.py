"""
JSON serialization helpers.

Converts dataclasses, dates and byte payloads into JSON text for the
multipart ``invoice`` part sent to the persist endpoint.
"""

import json
from dataclasses import asdict, is_dataclass
from datetime import date
from typing import Any


def to_json(obj: Any) -> str:
    """
    Serialize an object to JSON string.

    Handles dataclasses by converting them to dictionaries first.

    Args:
        obj: Object to serialize.

    Returns:
        JSON string representation.
    """
    if is_dataclass(obj) and not isinstance(obj, type):
        obj = asdict(obj)
    return json.dumps(obj, default=_default_serializer)


def to_json_bytes(obj: Any) -> bytes:
    """Serialize an object to UTF-8 encoded JSON."""
    return to_json(obj).encode("utf-8")


def _default_serializer(obj: Any) -> Any:
    """
    Default serializer for JSON encoding.

    Dates become ISO calendar days. Raw bytes raise TypeError; logo
    content travels as its own multipart part.
    """
    if isinstance(obj, date):
        return obj.isoformat()
    if isinstance(obj, (bytes, bytearray)):
        raise TypeError("Binary content cannot be JSON encoded")
    if is_dataclass(obj) and not isinstance(obj, type):
        return asdict(obj)
    return str(obj)
