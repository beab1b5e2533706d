"""Runtime helpers for the P-Chain client"""

from .errors import (
    ErrorCode,
    PvmError,
    UnsupportedTransactionError,
    UnsupportedAuthError,
    ComplexityOverflowError,
    InvalidDimensionsError,
    GasLimitExceededError,
    InvalidFeeConfigError,
    error_from_dict,
)

__all__ = [
    "ErrorCode",
    "PvmError",
    "UnsupportedTransactionError",
    "UnsupportedAuthError",
    "ComplexityOverflowError",
    "InvalidDimensionsError",
    "GasLimitExceededError",
    "InvalidFeeConfigError",
    "error_from_dict",
]
