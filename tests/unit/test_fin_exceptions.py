"""Tests for the typed exception hierarchy."""

import pytest

from fin_kernel.exceptions import (
    DepreciationError,
    FinKernelError,
    UnsupportedRecoveryPeriodError,
    ValidationError,
)


class TestHierarchy:

    def test_validation_error_is_depreciation_error(self):
        assert issubclass(ValidationError, DepreciationError)
        assert issubclass(DepreciationError, FinKernelError)

    def test_unsupported_period_is_validation_error(self):
        """Callers catching ValidationError also catch bad FIN periods."""
        with pytest.raises(ValidationError):
            raise UnsupportedRecoveryPeriodError(6)

    def test_not_a_value_error(self):
        assert not issubclass(FinKernelError, ValueError)


class TestCodes:

    @pytest.mark.parametrize(
        "exc_class, code",
        [
            (FinKernelError, "FIN_KERNEL_ERROR"),
            (DepreciationError, "DEPRECIATION_ERROR"),
            (ValidationError, "VALIDATION_ERROR"),
            (UnsupportedRecoveryPeriodError, "UNSUPPORTED_RECOVERY_PERIOD"),
        ],
    )
    def test_code_available_without_instance(self, exc_class, code):
        assert exc_class.code == code


class TestStructuredData:

    def test_validation_error_carries_field_and_value(self):
        exc = ValidationError("Cost must be positive", field="cost", value=-1)
        assert str(exc) == "Cost must be positive"
        assert exc.field == "cost"
        assert exc.value == -1

    def test_field_defaults_to_none(self):
        exc = ValidationError("bad input")
        assert exc.field is None
        assert exc.value is None

    def test_unsupported_period_message(self):
        exc = UnsupportedRecoveryPeriodError(6)
        assert str(exc) == "FIN method only supports 5 or 7 year recovery periods"
        assert exc.recovery_period == 6
        assert exc.field == "useful_life"
        assert exc.supported == (5, 7)
