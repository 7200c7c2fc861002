"""
Tests for the validation engine.

Tests for standard validators, ValidatorSet, model validation and validate().
"""

import pytest

from modelkit.core.exceptions import (
    InvalidValidatorError,
    UnknownValidatorError,
    ValidationFailedError,
)
from modelkit.metadata import PropertyDefinition
from modelkit.models import Model, Property
from modelkit.validation import (
    Reason,
    ValidationResult,
    ValidatorSet,
    is_filled,
    is_negative,
    is_positive,
    is_required,
)


def has_valid_status(value, path=""):
    return value in ("active", "retired")


class Person(Model):
    name = Property(str, validators=["is_filled"])
    age = Property(int, validators=["is_positive"])
    status = Property(str, validators=[has_valid_status])


class Company(Model):
    name = Property(str, validators=["is_required"])


class Employee(Model):
    name = Property(str, validators=["is_filled"])
    company = Property(Company)


class TestStandardValidators:
    """Tests for the standard validator functions."""

    def test_is_required(self):
        assert is_required(0) is True
        assert is_required("") is True
        assert is_required(None) is False

    def test_is_filled(self):
        assert is_filled("a") is True
        assert is_filled("") is False
        assert is_filled(None) is False

    def test_is_positive(self):
        assert is_positive(1) is True
        assert is_positive(0) is False
        assert is_positive(None) is False

    def test_is_negative(self):
        assert is_negative(-1) is True
        assert is_negative(0) is False
        assert is_negative("a") is False


class TestValidatorSet:
    """Tests for ValidatorSet."""

    def test_add_by_name(self):
        validators = ValidatorSet()
        assert validators.add("is_required") is is_required
        assert len(validators) == 1

    def test_add_unknown_name(self):
        with pytest.raises(UnknownValidatorError) as exc_info:
            ValidatorSet().add("is_shiny")
        assert exc_info.value.name == "is_shiny"

    def test_add_invalid_validator(self):
        with pytest.raises(InvalidValidatorError):
            ValidatorSet().add(42)

    def test_boolean_failure_is_named_after_validator(self):
        validators = ValidatorSet(["is_required"])
        result = validators.run(None, "name")
        assert result.is_valid is False
        assert result.reasons == [Reason("is_required", "name")]

    def test_none_counts_as_failure(self):
        def returns_nothing(value, path):
            return None

        result = ValidatorSet([returns_nothing]).run(1, "")
        assert result.reasons == [Reason("returns_nothing", "")]

    def test_structured_result_reasons_are_appended(self):
        def structured(value, path):
            return ValidationResult(is_valid=False, reasons=[Reason("custom", path + ".x")])

        result = ValidatorSet([structured]).run(1, "root")
        assert result.reasons == [Reason("custom", "root.x")]

    def test_mapping_result_is_accepted(self):
        def structured(value, path):
            return {"is_valid": False, "reasons": [{"failed_validator": "custom", "path": path}]}

        result = ValidatorSet([structured]).run(1, "p")
        assert result.reasons == [Reason("custom", "p")]

    def test_run_order_is_preserved(self):
        validators = ValidatorSet(["is_required", "is_filled", "is_positive"])
        result = validators.run(None, "x")
        assert [r.failed_validator for r in result.reasons] == [
            "is_required", "is_filled", "is_positive",
        ]

    def test_valid_result_has_no_reasons(self):
        result = ValidatorSet(["is_filled"]).run("a", "")
        assert result.is_valid is True
        assert result.to_dict() == {"is_valid": True}


class TestPropertyValidity:
    """Tests for PropertyDefinition.check_validity."""

    def test_property_validators(self):
        prop = PropertyDefinition("age", int, validators=["is_required", "is_positive"])
        result = prop.check_validity(-3, "age")
        assert result.reasons == [Reason("is_positive", "age")]

    def test_validators_receive_path(self):
        seen = []

        def record(value, path):
            seen.append(path)
            return True

        prop = PropertyDefinition("age", int, validators=[record])
        prop.check_validity(1, "person.age")
        assert seen == ["person.age"]


class TestModelValidity:
    """Tests for model-level validation."""

    def test_empty_instance_reports_every_property(self):
        result = Person().check_validity()
        assert result.is_valid is False
        assert len(result.reasons) == 3
        assert [r.path for r in result.reasons] == ["name", "age", "status"]

    def test_single_custom_failure(self):
        person = Person({"name": "Dupont", "age": 30, "status": "unknown"})
        result = person.check_validity()
        assert result.is_valid is False
        assert result.reasons == [Reason("has_valid_status", "status")]

    def test_valid_instance(self):
        person = Person({"name": "Dupont", "age": 30, "status": "active"})
        result = person.check_validity()
        assert result.is_valid is True
        assert result.reasons == []

    def test_nested_model_paths(self):
        employee = Employee({"name": "Jean", "company": {}})
        result = employee.check_validity()
        assert result.reasons == [Reason("is_required", "company.name")]

    def test_nested_model_under_parent_path(self):
        employee = Employee({"company": {}})
        result = employee.check_validity(employee, "staff")
        assert result.reasons == [
            Reason("is_filled", "staff.name"),
            Reason("is_required", "staff.company.name"),
        ]

    def test_model_level_validator(self):
        def has_name_or_age(model, path):
            return model.name is not None or model.age is not None

        class Contact(Model):
            name = Property(str)
            age = Property(int)
            __validators__ = [has_name_or_age]

        result = Contact().check_validity()
        assert result.reasons == [Reason("has_name_or_age", "")]
        assert Contact(name="x").check_validity().is_valid is True

    def test_add_validator_on_type(self):
        class Counter(Model):
            count = Property(int)

        def is_even(model, path):
            return (model.count or 0) % 2 == 0

        Counter.add_validator(is_even)
        assert Counter(count=3).check_validity().reasons == [Reason("is_even", "")]

    def test_check_validity_never_raises(self):
        result = Person().check_validity()
        assert isinstance(result, ValidationResult)


class TestValidate:
    """Tests for Model.validate."""

    def test_validate_passes(self):
        person = Person({"name": "Dupont", "age": 30, "status": "active"})
        assert person.validate() is None

    def test_validate_raises_with_reasons(self):
        with pytest.raises(ValidationFailedError) as exc_info:
            Person({"name": "Dupont", "age": 30, "status": "unknown"}).validate()

        error = exc_info.value
        assert error.reasons == [Reason("has_valid_status", "status")]
        assert "has_valid_status" in str(error)
        assert error.to_dict()["details"]["reasons"] == [
            {"failed_validator": "has_valid_status", "path": "status"},
        ]
