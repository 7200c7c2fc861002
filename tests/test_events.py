"""
Tests for change and lifecycle notifications.

Tests for EventChannel and the events emitted by Model.
"""

import pytest

from modelkit.core.exceptions import TypeMismatchError
from modelkit.events import EventChannel, ModelEvent, ModelEventData, PropertyMatcher
from modelkit.models import Model, Property


class Person(Model):
    first_name = Property(str)
    last_name = Property(str)


class TestPropertyMatcher:
    """Tests for PropertyMatcher."""

    def test_exact(self):
        assert PropertyMatcher(matcher="name").matches("name") is True
        assert PropertyMatcher(matcher="name").matches("age") is False

    def test_wildcard(self):
        assert PropertyMatcher(matcher="*").matches("anything") is True
        assert PropertyMatcher(matcher="first_*").matches("first_name") is True
        assert PropertyMatcher(matcher="first_*").matches("last_name") is False

    def test_none_property(self):
        assert PropertyMatcher(matcher="*").matches(None) is False


class TestEventChannel:
    """Tests for EventChannel class."""

    @pytest.fixture
    def channel(self):
        return EventChannel()

    def test_emit_in_registration_order(self, channel):
        calls = []
        channel.on(ModelEvent.CREATED, lambda data: calls.append("a"))
        channel.on(ModelEvent.CREATED, lambda data: calls.append("b"))

        count = channel.emit(ModelEventData(event=ModelEvent.CREATED))

        assert count == 2
        assert calls == ["a", "b"]

    def test_event_by_value(self, channel, recorder):
        channel.on("modelChanged", recorder)
        channel.emit(ModelEventData(event=ModelEvent.MODEL_CHANGED))
        assert recorder.model_changes == 1

    def test_unknown_event(self, channel, recorder):
        with pytest.raises(ValueError):
            channel.on("didChange", recorder)

    def test_property_filter(self, channel, recorder):
        channel.on(ModelEvent.PROPERTY_CHANGED, recorder, property="first_name")
        channel.emit(ModelEventData(event=ModelEvent.PROPERTY_CHANGED, property_name="last_name"))
        channel.emit(ModelEventData(event=ModelEvent.PROPERTY_CHANGED, property_name="first_name"))
        assert [data.property_name for data in recorder.events] == ["first_name"]

    def test_off(self, channel, recorder):
        channel.on(ModelEvent.CREATED, recorder)
        assert channel.off(ModelEvent.CREATED, recorder) is True
        assert channel.off(ModelEvent.CREATED, recorder) is False
        channel.emit(ModelEventData(event=ModelEvent.CREATED))
        assert recorder.events == []

    def test_handler_errors_propagate(self, channel):
        def boom(data):
            raise RuntimeError("boom")

        channel.on(ModelEvent.CREATED, boom)
        with pytest.raises(RuntimeError):
            channel.emit(ModelEventData(event=ModelEvent.CREATED))

    def test_clear_and_stats(self, channel, recorder):
        channel.on(ModelEvent.CREATED, recorder)
        channel.on(ModelEvent.MODEL_CHANGED, recorder)
        assert channel.get_stats() == {"created": 1, "modelChanged": 1}
        channel.clear(ModelEvent.CREATED)
        assert channel.get_stats() == {"modelChanged": 1}
        channel.clear()
        assert channel.get_stats() == {}


class TestModelEvents:
    """Tests for notifications emitted by model instances."""

    @pytest.fixture
    def person_type(self, recorder):
        class Watched(Person):
            pass

        Watched.on(ModelEvent.PROPERTY_CHANGED, recorder)
        Watched.on(ModelEvent.MODEL_CHANGED, recorder)
        return Watched

    def test_construction_fires_one_model_change(self, person_type, recorder):
        person_type({"last_name": "Dupont"})

        assert recorder.model_changes == 1
        assert recorder.count(ModelEvent.PROPERTY_CHANGED, "first_name") == 0
        assert recorder.count(ModelEvent.PROPERTY_CHANGED, "last_name") == 1

    def test_same_value_fires_nothing(self, person_type, recorder):
        person = person_type({"last_name": "Dupont"})
        recorder.events.clear()

        person.last_name = "Dupont"

        assert recorder.events == []

    def test_new_value_fires_each_event_once(self, person_type, recorder):
        person = person_type({"last_name": "Dupont"})
        recorder.events.clear()

        person.last_name = "Durand"

        assert recorder.count(ModelEvent.PROPERTY_CHANGED, "last_name") == 1
        assert recorder.model_changes == 1
        change = recorder.events[0]
        assert change.new_value == "Durand"
        assert change.old_value == "Dupont"
        assert change.model is person

    def test_bulk_fires_single_model_change_after_property_events(self, person_type, recorder):
        person = person_type()
        recorder.events.clear()

        person.update_value({"first_name": "Jean", "last_name": "Dupont"})

        assert [data.event for data in recorder.events] == [
            ModelEvent.PROPERTY_CHANGED,
            ModelEvent.PROPERTY_CHANGED,
            ModelEvent.MODEL_CHANGED,
        ]

    def test_bulk_without_change_fires_nothing(self, person_type, recorder):
        person = person_type({"last_name": "Dupont"})
        recorder.events.clear()

        person.update_value({"last_name": "Dupont"})
        person.replace_value({"last_name": "Dupont"})

        assert recorder.events == []

    def test_listener_observes_post_assignment_state(self, person_type):
        seen = []
        person_type.on(
            ModelEvent.MODEL_CHANGED,
            lambda data: seen.append(data.model.serialize()),
        )

        person_type({"first_name": "Jean", "last_name": "Dupont"})

        assert seen == [{"first_name": "Jean", "last_name": "Dupont"}]

    def test_instance_handlers(self, recorder):
        person = Person()
        person.on(ModelEvent.PROPERTY_CHANGED, recorder, property="first_name")

        person.first_name = "Jean"
        person.last_name = "Dupont"
        Person().first_name = "Paul"

        assert [data.new_value for data in recorder.events] == ["Jean"]

    def test_instance_off(self, recorder):
        person = Person()
        person.on(ModelEvent.MODEL_CHANGED, recorder)
        assert person.off(ModelEvent.MODEL_CHANGED, recorder) is True
        person.first_name = "Jean"
        assert recorder.events == []

    def test_type_handlers_run_before_instance_handlers(self):
        calls = []

        class Ordered(Person):
            pass

        Ordered.on(ModelEvent.MODEL_CHANGED, lambda data: calls.append("type"))
        person = Ordered()
        person.on(ModelEvent.MODEL_CHANGED, lambda data: calls.append("instance"))

        person.first_name = "Jean"

        assert calls == ["type", "instance"]

    def test_base_type_handlers_apply_to_subtypes(self, recorder):
        class Base(Model):
            name = Property(str)

        class Derived(Base):
            pass

        Base.on(ModelEvent.CREATED, recorder)
        Derived()
        Base()

        assert recorder.count(ModelEvent.CREATED) == 2

    def test_created_fires_after_defaults(self):
        seen = []

        class Flagged(Model):
            active = Property(bool, default_value=True)

        Flagged.on(ModelEvent.CREATED, lambda data: seen.append(data.model.active))
        Flagged()

        assert seen == [True]

    def test_equal_number_fires_nothing(self, recorder):
        class Sensor(Model):
            reading = Property(float)

        sensor = Sensor(reading=30)
        sensor.on(ModelEvent.PROPERTY_CHANGED, recorder)
        sensor.on(ModelEvent.MODEL_CHANGED, recorder)

        sensor.reading = 30.0
        sensor.reading = sensor.reading
        sensor.update_value({"reading": "30"})

        assert recorder.events == []

    def test_failed_bulk_still_fires_model_change(self, recorder):
        class Reading(Model):
            label = Property(str)
            value = Property(float)

        reading = Reading()
        reading.on(ModelEvent.PROPERTY_CHANGED, recorder)
        reading.on(ModelEvent.MODEL_CHANGED, recorder)

        with pytest.raises(TypeMismatchError):
            reading.update_value({"label": "outdoor", "value": "nan"})

        assert reading.label == "outdoor"
        assert reading.value is None
        assert [data.event for data in recorder.events] == [
            ModelEvent.PROPERTY_CHANGED,
            ModelEvent.MODEL_CHANGED,
        ]
