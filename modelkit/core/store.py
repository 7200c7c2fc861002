"""
Per-instance property value storage.

Values are always stored in converted form; ``None`` bypasses conversion
and means "unset". Assignments that do not change the stored value are
no-ops and emit nothing.
"""

from __future__ import annotations

from typing import Any, Callable

from modelkit.events.base import ModelEvent, ModelEventData
from modelkit.metadata.base import PropertyDefinition
from modelkit.types.converters import same_value

Emitter = Callable[[ModelEventData], Any]


class PropertyStore:
    """Value map owned by a single model instance."""

    def __init__(self, owner: Any = None, emit: Emitter | None = None) -> None:
        self._values: dict[str, Any] = {}
        self._owner = owner
        self._emit = emit

    def get(self, prop: PropertyDefinition) -> Any:
        return self._values.get(prop.name)

    def is_set(self, prop: PropertyDefinition) -> bool:
        return self._values.get(prop.name) is not None

    def set(self, prop: PropertyDefinition, value: Any) -> bool:
        """Store ``value`` for ``prop``.

        Returns:
            True when the stored value changed, False otherwise.
        """
        old_value = self.get(prop)
        if value is not None:
            value = prop.convert(value)
        if same_value(value, old_value):
            return False

        self._values[prop.name] = value
        if self._emit is not None:
            self._emit(ModelEventData(
                event=ModelEvent.PROPERTY_CHANGED,
                model=self._owner,
                property_name=prop.name,
                new_value=value,
                old_value=old_value,
            ))
        return True
