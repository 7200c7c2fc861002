"""
Value types and conversion helpers.
"""

from modelkit.types.converters import (
    is_primitive,
    same_value,
    serialize_list,
    serialize_mapping,
    serialize_value,
)
from modelkit.types.timestamp import TIMESTAMP_FORMAT, Timestamp

__all__ = [
    "is_primitive",
    "same_value",
    "serialize_list",
    "serialize_mapping",
    "serialize_value",
    "TIMESTAMP_FORMAT",
    "Timestamp",
]
