"""Shared fixtures for modelkit tests."""

import pytest

from modelkit.events import ModelEvent
from modelkit.metadata import ModelRegistry


@pytest.fixture(autouse=True)
def restore_registry():
    """Keep model types registered by one test out of the others."""
    saved = dict(ModelRegistry._types)
    yield
    ModelRegistry._types.clear()
    ModelRegistry._types.update(saved)


class EventRecorder:
    """Collects event payloads delivered by a channel."""

    def __init__(self):
        self.events = []

    def __call__(self, data):
        self.events.append(data)

    def count(self, event, property_name=None):
        return sum(
            1 for data in self.events
            if data.event == event
            and (property_name is None or data.property_name == property_name)
        )

    @property
    def model_changes(self):
        return self.count(ModelEvent.MODEL_CHANGED)


@pytest.fixture
def recorder():
    return EventRecorder()
