"""
modelkit Metadata Package.

Provides:
- Property definitions and kind resolution
- Model type registry
- YAML schema loader
"""

from .base import (
    PropertyDefinition,
    PropertyKind,
    get_converter,
    get_serializer,
    resolve_kind,
)
from .registry import ModelRegistry
from .loader import SchemaLoader

__all__ = [
    # Base
    "PropertyDefinition",
    "PropertyKind",
    "get_converter",
    "get_serializer",
    "resolve_kind",
    # Registry
    "ModelRegistry",
    # Loader
    "SchemaLoader",
]
