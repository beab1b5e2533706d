"""
Test the error model.
"""

import pytest

from pvm_client.runtime.errors import (
    ComplexityOverflowError,
    ErrorCode,
    GasLimitExceededError,
    InvalidDimensionsError,
    InvalidFeeConfigError,
    PvmError,
    UnsupportedAuthError,
    UnsupportedTransactionError,
    error_from_dict,
)


class TestPvmError:
    """Test the base error."""

    def test_str_includes_code_and_details(self):
        error = PvmError("boom", ErrorCode.INTERNAL, details={"k": 1})
        assert str(error) == "[INTERNAL] boom | Details: {'k': 1}"

    def test_str_with_cause(self):
        error = PvmError("boom", cause=RuntimeError("inner"))
        assert str(error).endswith("Caused by: inner")

    def test_to_dict(self):
        error = UnsupportedTransactionError(details={"type": "pvm.FooTx"})
        assert error.to_dict() == {
            "code": 400,
            "message": "Unsupported transaction type.",
            "details": {"type": "pvm.FooTx"},
        }

    def test_from_dict_unknown_code(self):
        error = PvmError.from_dict({"code": 12345, "message": "odd"})
        assert error.code == ErrorCode.UNKNOWN
        assert error.message == "odd"


class TestErrorHierarchy:
    """Test subclass codes and standard library compatibility."""

    @pytest.mark.parametrize("cls,code", [
        (UnsupportedTransactionError, ErrorCode.UNSUPPORTED_TRANSACTION),
        (UnsupportedAuthError, ErrorCode.UNSUPPORTED_AUTHORIZATION),
        (ComplexityOverflowError, ErrorCode.COMPLEXITY_OVERFLOW),
        (InvalidDimensionsError, ErrorCode.INVALID_DIMENSIONS),
        (GasLimitExceededError, ErrorCode.GAS_LIMIT_EXCEEDED),
        (InvalidFeeConfigError, ErrorCode.INVALID_FEE_CONFIG),
    ])
    def test_codes(self, cls, code):
        error = cls()
        assert error.code == code
        assert isinstance(error, PvmError)

    def test_builtin_bases(self):
        assert isinstance(ComplexityOverflowError(), ArithmeticError)
        assert isinstance(InvalidDimensionsError(), ValueError)
        assert isinstance(InvalidFeeConfigError(), ValueError)

    @pytest.mark.parametrize("cls", [
        UnsupportedTransactionError,
        UnsupportedAuthError,
        ComplexityOverflowError,
        InvalidDimensionsError,
        GasLimitExceededError,
        InvalidFeeConfigError,
    ])
    def test_error_from_dict_restores_class(self, cls):
        original = cls("message", details={"x": 1})
        restored = error_from_dict(original.to_dict())
        assert type(restored) is cls
        assert restored.message == "message"
        assert restored.details == {"x": 1}

    def test_error_from_dict_generic(self):
        restored = error_from_dict({"code": 2, "message": "internal"})
        assert type(restored) is PvmError
        assert restored.code == ErrorCode.INTERNAL
