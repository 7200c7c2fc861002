"""
Validation engine.

Validators are run in registration order against ``(value, path)``. A
validator returns either a boolean (``None`` counts as ``False``) or a
``ValidationResult``; a falsy boolean becomes a ``Reason`` named after the
validator. Values implementing ``Validatable`` are recursed into at the same
path, which is how nested models contribute their own failures.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Protocol, runtime_checkable

from modelkit.core.exceptions import InvalidValidatorError, UnknownValidatorError

Validator = Callable[[Any, str], Any]

_SELF = object()


@dataclass(frozen=True)
class Reason:
    """A single validation failure."""
    failed_validator: str
    path: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"failed_validator": self.failed_validator, "path": self.path}


@dataclass
class ValidationResult:
    """Validation result."""
    is_valid: bool
    reasons: list[Reason] = field(default_factory=list)

    def merge(self, other: ValidationResult) -> ValidationResult:
        return ValidationResult(
            is_valid=self.is_valid and other.is_valid,
            reasons=self.reasons + other.reasons,
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"is_valid": self.is_valid}
        if self.reasons:
            result["reasons"] = [reason.to_dict() for reason in self.reasons]
        return result


@runtime_checkable
class Validatable(Protocol):
    """Anything that can check its own validity at a given path."""

    def check_validity(self, value: Any = ..., path: str = "") -> ValidationResult:
        ...


def is_required(value: Any, path: str = "") -> bool:
    return value is not None


def is_filled(value: Any, path: str = "") -> bool:
    return bool(value)


def is_positive(value: Any, path: str = "") -> bool:
    try:
        return value > 0
    except TypeError:
        return False


def is_negative(value: Any, path: str = "") -> bool:
    try:
        return value < 0
    except TypeError:
        return False


STANDARD_VALIDATORS: dict[str, Validator] = {
    "is_required": is_required,
    "is_filled": is_filled,
    "is_positive": is_positive,
    "is_negative": is_negative,
}


def get_validator_name(validator: Validator) -> str:
    name = getattr(validator, "__name__", None)
    if name is None:
        name = type(validator).__name__
    return name


def resolve_validator(validator: str | Validator) -> Validator:
    """Turn a standard validator name or a callable into a validator."""
    if isinstance(validator, str):
        if validator not in STANDARD_VALIDATORS:
            raise UnknownValidatorError(validator)
        return STANDARD_VALIDATORS[validator]
    if not callable(validator):
        raise InvalidValidatorError(validator)
    return validator


def _coerce_result(validity: Any) -> ValidationResult | None:
    if isinstance(validity, ValidationResult):
        return validity
    if isinstance(validity, Mapping) and "is_valid" in validity:
        reasons = [
            reason if isinstance(reason, Reason) else Reason(**reason)
            for reason in validity.get("reasons") or []
        ]
        return ValidationResult(is_valid=bool(validity["is_valid"]), reasons=reasons)
    return None


class ValidatorSet:
    """Ordered list of validators with the recursive validity check."""

    def __init__(self, validators: Iterable[str | Validator] | str | Validator | None = None) -> None:
        self._validators: list[Validator] = []
        if validators is not None:
            self.extend(validators)

    def add(self, validator: str | Validator) -> Validator:
        resolved = resolve_validator(validator)
        self._validators.append(resolved)
        return resolved

    def extend(self, validators: Iterable[str | Validator] | str | Validator) -> None:
        if isinstance(validators, str) or callable(validators):
            validators = [validators]
        for validator in validators:
            self.add(validator)

    def copy(self) -> ValidatorSet:
        clone = ValidatorSet()
        clone._validators = list(self._validators)
        return clone

    def __iter__(self):
        return iter(self._validators)

    def __len__(self) -> int:
        return len(self._validators)

    def run(self, value: Any, path: str, owner: Any = None) -> ValidationResult:
        reasons: list[Reason] = []
        is_valid = True
        for validator in self._validators:
            validity = validator(value, path)
            result = _coerce_result(validity)
            if result is not None:
                if not result.is_valid:
                    is_valid = False
                    reasons.extend(result.reasons)
            elif not validity:
                is_valid = False
                reasons.append(Reason(get_validator_name(validator), path))

        if (
            value is not None
            and value is not owner
            and not isinstance(value, type)
            and isinstance(value, Validatable)
        ):
            nested = value.check_validity(value, path)
            if not nested.is_valid:
                is_valid = False
                reasons.extend(nested.reasons)

        return ValidationResult(is_valid=is_valid, reasons=reasons)


class Validation:
    """Mixin giving an object a ``validators`` set and ``check_validity``."""

    def _get_validator_set(self) -> ValidatorSet:
        raise NotImplementedError

    def check_validity(self, value: Any = _SELF, path: str = "") -> ValidationResult:
        if value is _SELF:
            value = self
        return self._get_validator_set().run(value, path, owner=self)
