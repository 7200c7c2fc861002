"""
Schema loader for YAML model definitions.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from modelkit.config import get_settings
from modelkit.core.exceptions import InvalidTypeError
from modelkit.metadata.base import PropertyKind
from modelkit.metadata.registry import ModelRegistry

logger = logging.getLogger(__name__)


class SchemaLoader:
    """Build model types from YAML documents or plain dicts.

    Example document:
        models:
          Company:
            properties:
              name: {type: string, validators: [is_filled]}
          Person:
            properties:
              name: {type: string, default_value: Anonymous}
              company: {type: Company}
    """

    def __init__(self, schema_dir: Path | None = None, base: type | None = None):
        if base is None:
            from modelkit.models.base import Model
            base = Model
        if schema_dir is None:
            schema_dir = get_settings().schema_dir
        self.schema_dir = schema_dir
        self.base = base

    def _load_yaml(self, filename: str | Path) -> dict[str, Any]:
        filepath = Path(filename)
        if self.schema_dir is not None and not filepath.is_absolute():
            filepath = self.schema_dir / filepath
        if not filepath.exists():
            logger.warning(f"Schema file not found: {filepath}")
            return {}

        with open(filepath, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

        return data or {}

    def _resolve_type(self, tag: str, model_name: str) -> Any:
        if isinstance(tag, str) and tag in PropertyKind._value2member_map_:
            return PropertyKind(tag)
        model_type = ModelRegistry.get(tag) if isinstance(tag, str) else None
        if model_type is None:
            raise InvalidTypeError(tag, model_name)
        return model_type

    def _parse_model(self, name: str, data: dict[str, Any]) -> type:
        parent_name = data.get("extends")
        parent = ModelRegistry.get_or_raise(parent_name) if parent_name else self.base
        model_type = parent.extend(name)

        for prop_name, prop_data in (data.get("properties") or {}).items():
            options = dict(prop_data or {})
            prop_type = self._resolve_type(options.pop("type", "string"), name)
            model_type.add_property(prop_name, prop_type, **options)

        for validator in data.get("validators") or []:
            model_type.add_validator(validator)

        return model_type

    def load_dict(self, data: dict[str, Any]) -> dict[str, type]:
        """Define every model of ``data`` in document order."""
        loaded = {}
        for name, model_data in (data.get("models") or {}).items():
            loaded[name] = self._parse_model(name, model_data or {})

        logger.debug(f"Loaded {len(loaded)} model types")
        return loaded

    def load_file(self, filename: str | Path) -> dict[str, type]:
        return self.load_dict(self._load_yaml(filename))

    def load_all(self) -> dict[str, type]:
        """Load every ``*.yaml`` file of the schema directory, sorted by name."""
        if self.schema_dir is None or not self.schema_dir.is_dir():
            logger.warning(f"Schema directory not found: {self.schema_dir}")
            return {}

        loaded = {}
        for filepath in sorted(self.schema_dir.glob("*.yaml")):
            loaded.update(self.load_file(filepath))
        return loaded
