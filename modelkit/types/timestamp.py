"""
Timestamp value type.

Serializes to a fixed-format UTC string and rebuilds itself from that
string, so it can be used directly as a property type.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from modelkit.core.exceptions import TypeMismatchError

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


class Timestamp:
    """Immutable UTC point in time."""

    __slots__ = ("_value",)

    def __init__(self, value: datetime) -> None:
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        object.__setattr__(self, "_value", value.astimezone(timezone.utc))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Timestamp is immutable")

    @classmethod
    def now(cls) -> Timestamp:
        return cls(datetime.now(timezone.utc))

    @classmethod
    def unserialize(cls, value: Any) -> Timestamp:
        if isinstance(value, Timestamp):
            return value
        if isinstance(value, datetime):
            return cls(value)
        if isinstance(value, str):
            try:
                return cls(datetime.strptime(value, TIMESTAMP_FORMAT))
            except ValueError:
                try:
                    return cls(datetime.fromisoformat(value))
                except ValueError:
                    raise TypeMismatchError("timestamp", value) from None
        raise TypeMismatchError("timestamp", value)

    def is_instance_of(self, cls: type) -> bool:
        return isinstance(self, cls)

    @property
    def as_datetime(self) -> datetime:
        return self._value

    def to_json(self) -> str:
        return self._value.strftime(TIMESTAMP_FORMAT)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Timestamp):
            return self._value == other._value
        return NotImplemented

    def __lt__(self, other: Timestamp) -> bool:
        return self._value < other._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return f"Timestamp({self.to_json()!r})"
