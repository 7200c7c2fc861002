"""Events module for model change notifications."""

from modelkit.events.base import (
    EventChannel,
    ModelEvent,
    ModelEventData,
    PropertyMatcher,
)

__all__ = ["EventChannel", "ModelEvent", "ModelEventData", "PropertyMatcher"]
