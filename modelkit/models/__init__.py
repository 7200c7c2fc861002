"""
Model types: declaration, storage, serialization and validation.
"""

from modelkit.models.base import (
    AssignMode,
    Model,
    Property,
    PropertyAccessor,
    model_validator,
)

__all__ = [
    "AssignMode",
    "Model",
    "Property",
    "PropertyAccessor",
    "model_validator",
]
