"""
Validation engine: standard validators, validator sets and results.
"""

from modelkit.validation.base import (
    STANDARD_VALIDATORS,
    Reason,
    Validatable,
    Validation,
    ValidationResult,
    ValidatorSet,
    get_validator_name,
    is_filled,
    is_negative,
    is_positive,
    is_required,
    resolve_validator,
)

__all__ = [
    "STANDARD_VALIDATORS",
    "Reason",
    "Validatable",
    "Validation",
    "ValidationResult",
    "ValidatorSet",
    "get_validator_name",
    "is_filled",
    "is_negative",
    "is_positive",
    "is_required",
    "resolve_validator",
]
