"""
Exception hierarchy for modelkit.

Definition errors (bad property declarations, unknown validators) are
programmer errors and fail fast. Data validity problems are reported as
reasons by ``check_validity``; the only exception raised for them is
``ValidationFailedError`` from ``validate()``.
"""

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Error categories."""
    DEFINITION = "definition"
    CONVERSION = "conversion"
    VALIDATION = "validation"


class ModelKitError(Exception):
    """Base exception for modelkit errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.DEFINITION,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.category = category
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "details": self.details,
        }


class MissingArgumentError(ModelKitError, ValueError):
    """A required definition argument is missing or empty."""

    def __init__(self, argument: str, **kwargs: Any) -> None:
        details = kwargs.pop("details", {}) or {}
        details["argument"] = argument
        super().__init__(
            message=f"{argument} is missing",
            details=details,
            **kwargs,
        )
        self.argument = argument


class UnknownOptionError(ModelKitError, ValueError):
    """A property option does not match any definition attribute."""

    def __init__(self, option: str, property_name: str | None = None) -> None:
        details = {"option": option}
        if property_name:
            details["property"] = property_name
        super().__init__(
            message=f"option '{option}' is unknown",
            details=details,
        )
        self.option = option


class InvalidTypeError(ModelKitError, TypeError):
    """The declared property type cannot be resolved to a property kind."""

    def __init__(self, type_: Any, property_name: str | None = None) -> None:
        details = {"type": repr(type_)}
        if property_name:
            details["property"] = property_name
        super().__init__(
            message=f"invalid type {type_!r}",
            details=details,
        )


class TypeMismatchError(ModelKitError, TypeError):
    """A raw value cannot be converted to the declared kind."""

    def __init__(self, expected: str, value: Any = None) -> None:
        super().__init__(
            message=f"type mismatch (a value of kind '{expected}' was expected)",
            category=ErrorCategory.CONVERSION,
            details={"expected": expected, "value": repr(value)},
        )
        self.expected = expected


class UnknownValidatorError(ModelKitError, ValueError):
    """A validator name is not present in the standard registry."""

    def __init__(self, name: str) -> None:
        super().__init__(
            message=f"validator '{name}' is unknown",
            details={"validator": name},
        )
        self.name = name


class InvalidValidatorError(ModelKitError, TypeError):
    """A validator is neither a standard validator name nor a callable."""

    def __init__(self, validator: Any) -> None:
        super().__init__(
            message="validator should be a string or a callable",
            details={"validator": repr(validator)},
        )


class ValidationFailedError(ModelKitError):
    """Raised by ``validate()`` when an instance is invalid."""

    def __init__(self, reasons: list[Any]) -> None:
        self.reasons = list(reasons)
        rendered = ", ".join(
            f"{reason.failed_validator}@{reason.path or '<root>'}"
            for reason in self.reasons
        )
        super().__init__(
            message=f"validation failed (reasons=[{rendered}])",
            category=ErrorCategory.VALIDATION,
            details={"reasons": [reason.to_dict() for reason in self.reasons]},
        )


class UnknownPropertyError(ModelKitError, KeyError):
    """A property name is not declared on the model type."""

    def __init__(self, name: str, model_type: str | None = None) -> None:
        details = {"property": name}
        if model_type:
            details["model"] = model_type
        super().__init__(
            message=f"property '{name}' is unknown",
            details=details,
        )
        self.name = name

    def __str__(self) -> str:
        return self.message


class ReservedNameError(ModelKitError, ValueError):
    """A property name collides with a model attribute."""

    def __init__(self, name: str) -> None:
        super().__init__(
            message=f"property name '{name}' is reserved",
            details={"property": name},
        )
        self.name = name
