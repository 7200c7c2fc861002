"""
Model base class.

A model type declares its properties once, at class creation, either in
the class body or through ``add_property``:

    class Person(Model):
        first_name = Property(str)
        last_name = Property(str, validators=["is_filled"])
        is_alive = Property(bool, default_value=True)

    person = Person({"last_name": "Dupont"})
    person.first_name = "Jean"
    person.serialize()  # {"first_name": "Jean", "last_name": "Dupont", "is_alive": True}

Instances store converted values in a ``PropertyStore`` and deliver change
and lifecycle notifications synchronously through ``EventChannel``s owned by
the model type and by the instance.
"""

from __future__ import annotations

import logging
import types
from collections.abc import Mapping
from enum import Enum
from typing import Any, Callable, Iterator

from modelkit.core.exceptions import (
    ReservedNameError,
    TypeMismatchError,
    UnknownPropertyError,
    ValidationFailedError,
)
from modelkit.core.store import PropertyStore
from modelkit.events.base import EventChannel, Handler, ModelEvent, ModelEventData
from modelkit.metadata.base import PropertyDefinition
from modelkit.metadata.registry import ModelRegistry
from modelkit.validation.base import Validation, ValidationResult, ValidatorSet

logger = logging.getLogger(__name__)


class AssignMode(str, Enum):
    """Bulk assignment mode."""
    REPLACE = "replace"
    UPDATE = "update"


class Property:
    """Class-body property declaration, turned into a definition at class creation."""

    def __init__(self, type: Any = None, **options: Any) -> None:
        self.type = type
        self.options = options


class PropertyAccessor:
    """Descriptor installed on the model type for each declared property."""

    def __init__(self, prop: PropertyDefinition) -> None:
        self.prop = prop

    def __get__(self, instance: Model | None, owner: type) -> Any:
        if instance is None:
            return self.prop
        return instance.get_property_value(self.prop)

    def __set__(self, instance: Model, value: Any) -> None:
        if instance.set_property_value(self.prop, value):
            instance._emit(ModelEvent.MODEL_CHANGED)


class hybridmethod:
    """Bind to the class when accessed on the class, to the instance otherwise."""

    def __init__(self, func: Callable[..., Any]) -> None:
        self.func = func
        self.__doc__ = func.__doc__

    def __get__(self, instance: Any, owner: type) -> Callable[..., Any]:
        target = owner if instance is None else instance
        return types.MethodType(self.func, target)


def _has_key(source: Any, name: str) -> bool:
    if isinstance(source, Model):
        return source.get_property(name) is not None
    return name in source


def _read_key(source: Any, name: str) -> Any:
    if isinstance(source, Model):
        return source.get(name) if source.get_property(name) is not None else None
    return source.get(name)


def model_validator(model: Any, parent_path: str = "") -> ValidationResult:
    """Validate every declared property, composing dotted paths."""
    if not isinstance(model, Model):
        return ValidationResult(is_valid=True)

    result = ValidationResult(is_valid=True)
    for name, prop in model.get_properties().items():
        value = model.get_property_value(prop)
        path = f"{parent_path}.{name}" if parent_path else name
        result = result.merge(prop.check_validity(value, path))
    return result


class Model(Validation):
    """Base class for typed-property models."""

    _properties: dict[str, PropertyDefinition] = {}
    _validators: ValidatorSet = ValidatorSet()
    _channel: EventChannel = EventChannel()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._properties = dict(cls._properties)
        cls._validators = cls._validators.copy()
        cls._channel = EventChannel()

        declarations = [
            (name, value)
            for name, value in cls.__dict__.items()
            if isinstance(value, Property)
        ]
        for name, declaration in declarations:
            cls.add_property(name, declaration.type, **declaration.options)

        for validator in cls.__dict__.get("__validators__", ()):
            cls.add_validator(validator)

        ModelRegistry.register(cls)

    # ------------------------------------------------------------------
    # Type definition
    # ------------------------------------------------------------------

    @classmethod
    def extend(cls, name: str, body: Callable[[type], Any] | None = None) -> type[Model]:
        """Create a named subtype and run ``body`` against it."""
        subclass = type(name, (cls,), {"__module__": cls.__module__})
        if body is not None:
            body(subclass)
        return subclass

    @classmethod
    def add_property(cls, name: str, type: Any = None, **options: Any) -> PropertyDefinition:
        if isinstance(name, str) and (name.startswith("_") or hasattr(Model, name)):
            raise ReservedNameError(name)
        prop = PropertyDefinition.create(name, type, **options)
        cls._properties[name] = prop
        setattr(cls, name, PropertyAccessor(prop))
        logger.debug(f"Registered property: {cls.__name__}.{name} ({prop.kind.value})")
        return prop

    @classmethod
    def add_validator(cls, validator: Any) -> None:
        cls._validators.add(validator)

    @classmethod
    def get_properties(cls) -> Mapping[str, PropertyDefinition]:
        return types.MappingProxyType(cls._properties)

    @classmethod
    def get_property(cls, name: str) -> PropertyDefinition | None:
        return cls._properties.get(name)

    @classmethod
    def for_each_property(cls, fn: Callable[[PropertyDefinition, str], Any]) -> None:
        for name, prop in cls._properties.items():
            fn(prop, name)

    @classmethod
    def _get_validator_set(cls) -> ValidatorSet:
        return cls._validators

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def __init__(self, value: Any = None, /, **kwargs: Any) -> None:
        self._init_state()
        if kwargs:
            value = {**dict(value or {}), **kwargs}
        self.set_value(value, AssignMode.UPDATE)
        self.apply_default_values()
        self._emit(ModelEvent.CREATED)

    def _init_state(self) -> None:
        self._events: EventChannel | None = None
        self._store = PropertyStore(owner=self, emit=self._dispatch)

    @classmethod
    def create(cls, value: Any = None, /, **kwargs: Any) -> Model:
        return cls(value, **kwargs)

    @classmethod
    def unserialize(cls, json: Any) -> Model:
        """Rehydrate an instance from its serialized form, without defaults."""
        instance = cls.__new__(cls)
        instance._init_state()
        instance.set_value(json, AssignMode.UPDATE)
        instance._emit(ModelEvent.UNSERIALIZED)
        return instance

    def is_instance_of(self, cls: type) -> bool:
        return isinstance(self, cls)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def _get_channel(self) -> EventChannel:
        if self._events is None:
            self._events = EventChannel()
        return self._events

    @hybridmethod
    def on(target: Any, event: str | ModelEvent, handler: Handler, property: str | None = None) -> Handler:
        """Register a handler on the model type (class) or on one instance."""
        if isinstance(target, type):
            return target._channel.on(event, handler, property)
        return target._get_channel().on(event, handler, property)

    @hybridmethod
    def off(target: Any, event: str | ModelEvent, handler: Handler) -> bool:
        if isinstance(target, type):
            return target._channel.off(event, handler)
        return target._get_channel().off(event, handler)

    def _dispatch(self, data: ModelEventData) -> None:
        for klass in reversed(type(self).__mro__):
            channel = klass.__dict__.get("_channel")
            if channel is not None:
                channel.emit(data)
        if self._events is not None:
            self._events.emit(data)

    def _emit(self, event: ModelEvent) -> None:
        self._dispatch(ModelEventData(event=event, model=self))

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    def _require_property(self, name: str) -> PropertyDefinition:
        prop = self.get_property(name)
        if prop is None:
            raise UnknownPropertyError(name, type(self).__name__)
        return prop

    def get_property_value(self, prop: PropertyDefinition) -> Any:
        return self._store.get(prop)

    def set_property_value(self, prop: PropertyDefinition, value: Any) -> bool:
        return self._store.set(prop, value)

    def get(self, name: str) -> Any:
        return self.get_property_value(self._require_property(name))

    def set(self, name: str, value: Any) -> bool:
        """Assign a single property; emits MODEL_CHANGED when it changed."""
        changed = self.set_property_value(self._require_property(name), value)
        if changed:
            self._emit(ModelEvent.MODEL_CHANGED)
        return changed

    def set_value(self, source: Any = None, mode: str | AssignMode = AssignMode.REPLACE) -> Model:
        """Assign every declared property from ``source``.

        In replace mode properties missing from ``source`` are cleared; in
        update mode they are left untouched. At most one MODEL_CHANGED is
        emitted, after the per-property notifications. A conversion error
        stops the assignment; properties already assigned keep their new
        values and MODEL_CHANGED is still emitted for them.
        """
        mode = AssignMode(mode)
        if source is not None and not isinstance(source, (Mapping, Model)):
            raise TypeMismatchError("object", source)

        changed = False
        try:
            for name, prop in self._properties.items():
                if mode == AssignMode.UPDATE and (source is None or not _has_key(source, name)):
                    continue
                value = _read_key(source, name) if source is not None else None
                if self.set_property_value(prop, value):
                    changed = True
        finally:
            if changed:
                self._emit(ModelEvent.MODEL_CHANGED)
        return self

    def replace_value(self, value: Any) -> Model:
        return self.set_value(value, AssignMode.REPLACE)

    def update_value(self, value: Any) -> Model:
        return self.set_value(value, AssignMode.UPDATE)

    def clear_value(self) -> Model:
        return self.set_value(None, AssignMode.REPLACE)

    def apply_default_values(self) -> None:
        for prop in self._properties.values():
            if prop.default_value is None:
                continue
            if self._store.is_set(prop):
                continue
            self.set_property_value(prop, prop.get_default(self))

    # ------------------------------------------------------------------
    # Serialization and validation
    # ------------------------------------------------------------------

    def serialize(self) -> dict[str, Any]:
        json = {}
        for name, prop in self._properties.items():
            value = self.get_property_value(prop)
            if value is None:
                continue
            json[name] = prop.serialize(value)
        return json

    def to_json(self) -> dict[str, Any]:
        return self.serialize()

    def validate(self) -> None:
        validity = self.check_validity()
        if not validity.is_valid:
            logger.info(
                f"Validation of {type(self).__name__} failed with "
                f"{len(validity.reasons)} reason(s)"
            )
            raise ValidationFailedError(validity.reasons)

    def __iter__(self) -> Iterator[tuple[str, Any]]:
        for name, prop in self._properties.items():
            yield name, self.get_property_value(prop)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.serialize()!r})"


Model.add_validator(model_validator)
