"""
Property definition models.

A ``PropertyDefinition`` turns a declared ``(name, type, options)`` triple
into a frozen bundle of converter, serializer, default value and
validators. The declared type is resolved once to a ``PropertyKind`` and
the converter/serializer pair is looked up from that kind.
"""

from __future__ import annotations

import copy
import inspect
import math
from enum import Enum
from typing import Any, Callable

from modelkit.core.exceptions import (
    InvalidTypeError,
    MissingArgumentError,
    TypeMismatchError,
    UnknownOptionError,
)
from modelkit.types.converters import serialize_list, serialize_mapping
from modelkit.validation.base import Validation, ValidatorSet, get_validator_name


class PropertyKind(str, Enum):
    """Property kind enumeration."""
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    OBJECT = "object"
    ARRAY = "array"
    SERIALIZABLE = "serializable"
    CLASS = "class"
    CUSTOM = "custom"


_BUILTIN_KINDS: dict[type, PropertyKind] = {
    bool: PropertyKind.BOOLEAN,
    int: PropertyKind.NUMBER,
    float: PropertyKind.NUMBER,
    str: PropertyKind.STRING,
    dict: PropertyKind.OBJECT,
    list: PropertyKind.ARRAY,
    tuple: PropertyKind.ARRAY,
}

_STANDALONE_KINDS = {
    PropertyKind.BOOLEAN,
    PropertyKind.NUMBER,
    PropertyKind.STRING,
    PropertyKind.OBJECT,
    PropertyKind.ARRAY,
    PropertyKind.CUSTOM,
}


def resolve_kind(type_: Any) -> PropertyKind:
    """Resolve a declared type to its property kind."""
    if isinstance(type_, PropertyKind):
        if type_ not in _STANDALONE_KINDS:
            raise InvalidTypeError(type_)
        return type_
    if isinstance(type_, type):
        if type_ in _BUILTIN_KINDS:
            return _BUILTIN_KINDS[type_]
        if callable(getattr(type_, "unserialize", None)):
            return PropertyKind.SERIALIZABLE
        return PropertyKind.CLASS
    raise InvalidTypeError(type_)


def _convert_boolean(value: Any) -> bool:
    if not isinstance(value, bool):
        value = bool(value)
    return value


def _convert_number(value: Any) -> int | float:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        number = value
    else:
        try:
            text = str(value).strip()
            try:
                return int(text)
            except ValueError:
                number = float(text)
        except (TypeError, ValueError):
            raise TypeMismatchError(PropertyKind.NUMBER.value, value) from None
    # nan and inf have no JSON form
    if not math.isfinite(number):
        raise TypeMismatchError(PropertyKind.NUMBER.value, value)
    return number


def _convert_string(value: Any) -> str:
    if not isinstance(value, str):
        value = str(value)
    return value


def _convert_object(value: Any) -> Any:
    return copy.deepcopy(value)


def _convert_array(value: Any) -> list[Any]:
    if not isinstance(value, (list, tuple)):
        raise TypeMismatchError(PropertyKind.ARRAY.value, value)
    return list(copy.deepcopy(value))


def _identity(value: Any) -> Any:
    return value


def get_converter(type_: Any, kind: PropertyKind) -> Callable[[Any], Any]:
    if kind == PropertyKind.BOOLEAN:
        return _convert_boolean
    if kind == PropertyKind.NUMBER:
        return _convert_number
    if kind == PropertyKind.STRING:
        return _convert_string
    if kind == PropertyKind.OBJECT:
        return _convert_object
    if kind == PropertyKind.ARRAY:
        return _convert_array

    if kind == PropertyKind.SERIALIZABLE:
        def converter(value: Any) -> Any:
            is_instance_of = getattr(value, "is_instance_of", None)
            if not (callable(is_instance_of) and is_instance_of(type_)):
                value = type_.unserialize(value)
            return value
        return converter

    if kind == PropertyKind.CLASS:
        def converter(value: Any) -> Any:
            if not isinstance(value, type_):
                value = type_(value)
            return value
        return converter

    return _identity


def get_serializer(type_: Any, kind: PropertyKind) -> Callable[[Any], Any]:
    if kind == PropertyKind.OBJECT:
        return serialize_mapping
    if kind == PropertyKind.ARRAY:
        return serialize_list
    if kind in (PropertyKind.SERIALIZABLE, PropertyKind.CLASS):
        if callable(getattr(type_, "serialize", None)):
            return lambda value: value.serialize()
        if callable(getattr(type_, "to_json", None)):
            return lambda value: value.to_json()
    return _identity


class PropertyDefinition(Validation):
    """Frozen descriptor of a declared model property.

    Example:
        prop = PropertyDefinition("age", int, validators=["is_positive"])
        prop.convert("30")  # 30
    """

    OPTION_NAMES = frozenset({
        "type",
        "converter",
        "serializer",
        "default_value",
        "validators",
        "description",
    })

    def __init__(self, name: str, type: Any = None, **options: Any) -> None:
        if not isinstance(name, str) or not name:
            raise MissingArgumentError("name")
        if type is None:
            raise MissingArgumentError("type", details={"property": name})

        kind = resolve_kind(type)
        self.name = name
        self.type = type
        self.kind = kind
        self.converter = get_converter(type, kind)
        self.serializer = get_serializer(type, kind)
        self.default_value = None
        self.description = ""
        self._validators = ValidatorSet()

        for key, value in options.items():
            if key not in self.OPTION_NAMES:
                raise UnknownOptionError(key, name)
            if key == "validators":
                self._validators = ValidatorSet(value)
            else:
                setattr(self, key, value)

        self._frozen = True

    @classmethod
    def create(cls, name: str, type: Any = None, **options: Any) -> PropertyDefinition:
        return cls(name, type, **options)

    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, "_frozen", False):
            raise AttributeError(f"property definition '{self.name}' is frozen")
        super().__setattr__(name, value)

    @property
    def validators(self) -> tuple[Callable[..., Any], ...]:
        return tuple(self._validators)

    def _get_validator_set(self) -> ValidatorSet:
        return self._validators

    def convert(self, value: Any) -> Any:
        if value is None:
            return None
        return self.converter(value)

    def serialize(self, value: Any) -> Any:
        if value is None:
            return None
        return self.serializer(value)

    def get_default(self, instance: Any) -> Any:
        """Compute the default value for ``instance``.

        Plain functions declaring a positional parameter receive the
        instance; other callables are invoked without arguments.
        """
        default = self.default_value
        if not callable(default):
            return default
        if inspect.isfunction(default) and default.__code__.co_argcount > 0:
            return default(instance)
        return default()

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": getattr(self.type, "__name__", str(self.type)),
            "kind": self.kind.value,
            "has_default": self.default_value is not None,
            "validators": [get_validator_name(v) for v in self._validators],
            "description": self.description,
        }

    def __repr__(self) -> str:
        return f"PropertyDefinition(name={self.name!r}, kind={self.kind.value!r})"
