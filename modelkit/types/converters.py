"""
Value conversion utilities for modelkit.

Provides the recursive plain-value serializer used by structured
properties and the primitive checks used for change detection.

Usage:
    from modelkit.types import serialize_value

    serialize_value({"a": 1, "b": None, "c": [Timestamp.now()]})
"""

from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

PRIMITIVE_TYPES = (bool, int, float, str)


def is_primitive(value: Any) -> bool:
    return value is None or isinstance(value, PRIMITIVE_TYPES)


def same_value(a: Any, b: Any) -> bool:
    """Value equality for primitives, identity for everything else.

    Booleans never equal numbers; ints and floats compare by value.
    """
    if is_primitive(a) and is_primitive(b):
        if isinstance(a, bool) is not isinstance(b, bool):
            return False
        return a == b
    return a is b


def serialize_value(value: Any) -> Any:
    """Convert any value to its JSON-shaped form.

    Handles:
    - None: None (callers drop it)
    - bool/int/float/str: unchanged
    - objects with to_json(): to_json()
    - datetime/date: isoformat()
    - list/tuple: element-wise
    - mappings and plain objects: key-wise, dropping None results
    """
    if value is None:
        return None

    if isinstance(value, PRIMITIVE_TYPES):
        return value

    if hasattr(value, "to_json"):
        return value.to_json()

    if isinstance(value, (datetime, date)):
        return value.isoformat()

    if isinstance(value, (list, tuple)):
        return serialize_list(value)

    if isinstance(value, (set, frozenset)):
        return serialize_list(sorted(value, key=repr))

    if not isinstance(value, Mapping) and not hasattr(value, "__dict__"):
        return str(value)

    return serialize_mapping(value)


def serialize_mapping(value: Any) -> dict[str, Any]:
    if not isinstance(value, Mapping):
        value = {k: v for k, v in vars(value).items() if not k.startswith("_")}

    output = {}
    for key, item in value.items():
        item = serialize_value(item)
        if item is not None:
            output[key] = item
    return output


def serialize_list(value: list[Any] | tuple[Any, ...]) -> list[Any]:
    return [serialize_value(item) for item in value]
