"""
P-Chain Client Error Model

This module provides the error handling framework for the P-Chain client,
covering complexity calculation, gas conversion and fee configuration failures.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """P-Chain client error codes."""

    # Success
    OK = 0

    # General errors (1-99)
    UNKNOWN = 1
    INTERNAL = 2

    # Transaction shape errors (400-499)
    UNSUPPORTED_TRANSACTION = 400
    UNSUPPORTED_AUTHORIZATION = 401

    # Arithmetic errors (500-599)
    COMPLEXITY_OVERFLOW = 500
    INVALID_DIMENSIONS = 501
    GAS_LIMIT_EXCEEDED = 502

    # Configuration errors (600-699)
    INVALID_FEE_CONFIG = 600


class PvmError(Exception):
    """
    Base class for all P-Chain client errors.

    Carries a structured error code and optional details alongside the message.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize a P-Chain client error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PvmError':
        """Create error from dictionary representation."""
        try:
            code = ErrorCode(data.get("code", ErrorCode.UNKNOWN))
        except ValueError:
            code = ErrorCode.UNKNOWN
        message = data.get("message", "Unknown error")
        details = data.get("details")
        return cls(message, code, details)


class UnsupportedTransactionError(PvmError):
    """Transaction variant outside the supported set."""

    def __init__(self, message: str = "Unsupported transaction type.",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.UNSUPPORTED_TRANSACTION, details, cause)


class UnsupportedAuthError(PvmError):
    """Subnet authorization is not a secp256k1fx input."""

    def __init__(self, message: str = "Expected Input as subnet auth.",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.UNSUPPORTED_AUTHORIZATION, details, cause)


class ComplexityOverflowError(PvmError, ArithmeticError):
    """A complexity or gas value exceeded the uint64 range."""

    def __init__(self, message: str = "Complexity overflow",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.COMPLEXITY_OVERFLOW, details, cause)


class InvalidDimensionsError(PvmError, ValueError):
    """A dimension component is negative or not an integer."""

    def __init__(self, message: str = "Invalid dimensions",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_DIMENSIONS, details, cause)


class GasLimitExceededError(PvmError):
    """Transaction gas is above the configured maximum."""

    def __init__(self, message: str = "Gas limit exceeded",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.GAS_LIMIT_EXCEEDED, details, cause)


class InvalidFeeConfigError(PvmError, ValueError):
    """Unknown network preset or malformed fee configuration."""

    def __init__(self, message: str = "Invalid fee configuration",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_FEE_CONFIG, details, cause)


def error_from_dict(data: Dict[str, Any]) -> PvmError:
    """
    Create the most specific error for a serialized error dictionary.

    Args:
        data: Dictionary produced by PvmError.to_dict()

    Returns:
        Appropriate error instance
    """
    error = PvmError.from_dict(data)
    details = data.get("details")

    if error.code == ErrorCode.UNSUPPORTED_TRANSACTION:
        return UnsupportedTransactionError(error.message, details)
    elif error.code == ErrorCode.UNSUPPORTED_AUTHORIZATION:
        return UnsupportedAuthError(error.message, details)
    elif error.code == ErrorCode.COMPLEXITY_OVERFLOW:
        return ComplexityOverflowError(error.message, details)
    elif error.code == ErrorCode.INVALID_DIMENSIONS:
        return InvalidDimensionsError(error.message, details)
    elif error.code == ErrorCode.GAS_LIMIT_EXCEEDED:
        return GasLimitExceededError(error.message, details)
    elif error.code == ErrorCode.INVALID_FEE_CONFIG:
        return InvalidFeeConfigError(error.message, details)
    else:
        return error


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
