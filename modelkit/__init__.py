"""
modelkit - typed-property runtime for plain data models.

Usage:
    from modelkit import Model, Property

    class Person(Model):
        name = Property(str, validators=["is_filled"])
        age = Property(int, validators=["is_positive"])
        is_alive = Property(bool, default_value=True)

    person = Person(name="Dupont", age=30)
    person.validate()
    person.serialize()  # {"name": "Dupont", "age": 30, "is_alive": True}
"""

from modelkit.core.exceptions import (
    ErrorCategory,
    InvalidTypeError,
    InvalidValidatorError,
    MissingArgumentError,
    ModelKitError,
    ReservedNameError,
    TypeMismatchError,
    UnknownOptionError,
    UnknownPropertyError,
    UnknownValidatorError,
    ValidationFailedError,
)
from modelkit.core.store import PropertyStore
from modelkit.events import EventChannel, ModelEvent, ModelEventData
from modelkit.metadata import (
    ModelRegistry,
    PropertyDefinition,
    PropertyKind,
    SchemaLoader,
)
from modelkit.models import AssignMode, Model, Property
from modelkit.types import Timestamp, serialize_value
from modelkit.validation import (
    STANDARD_VALIDATORS,
    Reason,
    Validatable,
    ValidationResult,
    ValidatorSet,
)

__version__ = "0.1.0"

__all__ = [
    "AssignMode",
    "ErrorCategory",
    "EventChannel",
    "InvalidTypeError",
    "InvalidValidatorError",
    "MissingArgumentError",
    "Model",
    "ModelEvent",
    "ModelEventData",
    "ModelKitError",
    "ModelRegistry",
    "Property",
    "PropertyDefinition",
    "PropertyKind",
    "PropertyStore",
    "Reason",
    "ReservedNameError",
    "STANDARD_VALIDATORS",
    "SchemaLoader",
    "Timestamp",
    "TypeMismatchError",
    "UnknownOptionError",
    "UnknownPropertyError",
    "UnknownValidatorError",
    "Validatable",
    "ValidationFailedError",
    "ValidationResult",
    "ValidatorSet",
    "serialize_value",
]
