"""
Model type registry.

Every model type is recorded here by name when its class is created, so
schema documents and callers can refer to model types by name.
"""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)


class ModelRegistry:
    """Registry of model types keyed by type name."""

    _types: dict[str, Any] = {}

    @classmethod
    def register(cls, model_type: Any) -> None:
        name = model_type.__name__
        if name in cls._types and cls._types[name] is not model_type:
            logger.warning(f"Overwriting existing model type: {name}")
        cls._types[name] = model_type
        logger.debug(f"Registered model type: {name}")

    @classmethod
    def unregister(cls, name: str) -> bool:
        return cls._types.pop(name, None) is not None

    @classmethod
    def get(cls, name: str) -> Any | None:
        return cls._types.get(name)

    @classmethod
    def get_or_raise(cls, name: str) -> Any:
        model_type = cls._types.get(name)
        if model_type is None:
            raise ValueError(f"Unknown model type: {name}")
        return model_type

    @classmethod
    def list_all(cls) -> list[Any]:
        return list(cls._types.values())

    @classmethod
    def exists(cls, name: str) -> bool:
        return name in cls._types

    @classmethod
    def clear(cls) -> None:
        cls._types.clear()

    @classmethod
    def get_type_names(cls) -> list[str]:
        return list(cls._types.keys())
