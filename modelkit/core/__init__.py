"""
Core Module - exceptions and per-instance value storage.
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

__all__ = [
    "ErrorCategory",
    "InvalidTypeError",
    "InvalidValidatorError",
    "MissingArgumentError",
    "ModelKitError",
    "ReservedNameError",
    "TypeMismatchError",
    "UnknownOptionError",
    "UnknownPropertyError",
    "UnknownValidatorError",
    "ValidationFailedError",
]
