"""
Model event channel.

Provides synchronous change and lifecycle notifications for model
instances and model types.
"""

import logging
from enum import Enum
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class ModelEvent(str, Enum):
    """Model event types."""

    PROPERTY_CHANGED = "propertyChanged"
    MODEL_CHANGED = "modelChanged"
    CREATED = "created"
    UNSERIALIZED = "unserialized"


class ModelEventData(BaseModel):
    """Payload delivered to an event handler."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    event: ModelEvent = Field(..., description="Event type")
    model: Any = Field(default=None, description="Model instance the event concerns")
    property_name: str | None = Field(
        default=None,
        description="Changed property name, for property events",
    )
    new_value: Any = Field(default=None, description="Stored value after the change")
    old_value: Any = Field(default=None, description="Stored value before the change")


class PropertyMatcher(BaseModel):
    """Matcher routing property events to a handler."""

    matcher: str = Field(..., description="Property name pattern to match")

    def matches(self, property_name: str | None) -> bool:
        """Check if this matcher matches a property name."""
        if property_name is None:
            return False

        if self.matcher == "*":
            return True

        if self.matcher == property_name:
            return True

        if self.matcher.endswith("*"):
            prefix = self.matcher[:-1]
            return property_name.startswith(prefix)

        return False


Handler = Callable[[ModelEventData], Any]


class EventChannel:
    """Ordered handler registry with synchronous delivery.

    Example:
        channel = EventChannel()

        def on_name(data: ModelEventData) -> None:
            print(data.old_value, "->", data.new_value)

        channel.on(ModelEvent.PROPERTY_CHANGED, on_name, property="name")
    """

    def __init__(self) -> None:
        self._handlers: dict[ModelEvent, list[tuple[Handler, PropertyMatcher | None]]] = {}

    def on(
        self,
        event: str | ModelEvent,
        handler: Handler,
        property: str | None = None,
    ) -> Handler:
        """Register a handler.

        Args:
            event: The event type.
            handler: Callable receiving a ModelEventData.
            property: Optional property name pattern (property events only).

        Returns:
            The handler, so ``on`` can be used as a decorator helper.
        """
        event = ModelEvent(event)
        matcher = PropertyMatcher(matcher=property) if property else None
        self._handlers.setdefault(event, []).append((handler, matcher))

        logger.debug(f"Registered handler: {event.value} -> {getattr(handler, '__name__', handler)}")
        return handler

    def off(self, event: str | ModelEvent, handler: Handler) -> bool:
        """Remove a handler.

        Returns:
            True if removed, False if not found.
        """
        event = ModelEvent(event)
        entries = self._handlers.get(event, [])
        for index, (registered, _) in enumerate(entries):
            if registered == handler:
                del entries[index]
                return True
        return False

    def get_handlers(
        self,
        event: str | ModelEvent,
        property_name: str | None = None,
    ) -> list[Handler]:
        event = ModelEvent(event)
        return [
            handler
            for handler, matcher in self._handlers.get(event, [])
            if matcher is None or matcher.matches(property_name)
        ]

    def emit(self, data: ModelEventData) -> int:
        """Deliver ``data`` to every matching handler in registration order.

        Returns:
            Number of handlers called.
        """
        handlers = self.get_handlers(data.event, data.property_name)
        for handler in handlers:
            handler(data)
        return len(handlers)

    def clear(self, event: str | ModelEvent | None = None) -> None:
        if event:
            self._handlers.pop(ModelEvent(event), None)
        else:
            self._handlers.clear()

    def get_stats(self) -> dict[str, Any]:
        return {
            event.value: len(entries)
            for event, entries in self._handlers.items()
        }
