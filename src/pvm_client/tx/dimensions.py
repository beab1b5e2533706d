"""
Multi-dimensional complexity vectors.

A complexity vector measures the resources a transaction consumes along four
axes: bandwidth, database reads, database writes and compute. Vectors are
immutable; every combination yields a new vector.

Arithmetic is checked against the validator's uint64 width so that
accumulating costs across large transactions fails loudly instead of
wrapping.
"""

from __future__ import annotations
from dataclasses import dataclass, fields
from typing import Dict, Iterator, Tuple, Union

from ..enums import FeeDimension
from ..runtime.errors import ComplexityOverflowError, InvalidDimensionsError

MAX_UINT64 = 2**64 - 1

_AXIS_NAMES: Dict[str, FeeDimension] = {
    "bandwidth": FeeDimension.BANDWIDTH,
    "db_read": FeeDimension.DB_READ,
    "dbRead": FeeDimension.DB_READ,
    "db_write": FeeDimension.DB_WRITE,
    "dbWrite": FeeDimension.DB_WRITE,
    "compute": FeeDimension.COMPUTE,
}


def safe_add(a: int, b: int) -> int:
    """Add two non-negative integers, raising if the sum leaves uint64."""
    total = a + b
    if total > MAX_UINT64:
        raise ComplexityOverflowError(
            "Addition overflows uint64",
            details={"a": a, "b": b}
        )
    return total


def safe_mul(a: int, b: int) -> int:
    """Multiply two non-negative integers, raising if the product leaves uint64."""
    product = a * b
    if product > MAX_UINT64:
        raise ComplexityOverflowError(
            "Multiplication overflows uint64",
            details={"a": a, "b": b}
        )
    return product


@dataclass(frozen=True)
class Dimensions:
    """Complexity along the bandwidth, db_read, db_write and compute axes."""

    bandwidth: int = 0
    db_read: int = 0
    db_write: int = 0
    compute: int = 0

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            # bool is an int subclass but never a meaningful cost
            if not isinstance(value, int) or isinstance(value, bool):
                raise InvalidDimensionsError(
                    f"{f.name} must be an integer, got {type(value).__name__}"
                )
            if value < 0:
                raise InvalidDimensionsError(
                    f"{f.name} must be non-negative, got {value}"
                )
            if value > MAX_UINT64:
                raise ComplexityOverflowError(
                    f"{f.name} exceeds uint64",
                    details={f.name: value}
                )

    @classmethod
    def zero(cls) -> Dimensions:
        """Return the all-zero vector."""
        return cls()

    @classmethod
    def from_scalars(cls, bandwidth: int, db_read: int, db_write: int, compute: int) -> Dimensions:
        """Create a vector from its four components in axis order."""
        return cls(bandwidth=bandwidth, db_read=db_read, db_write=db_write, compute=compute)

    @classmethod
    def from_dict(cls, data: Dict[Union[str, FeeDimension], int]) -> Dimensions:
        """
        Create a vector from a mapping keyed by axis name or FeeDimension.

        Accepts the snake_case field names and the camelCase names emitted by
        to_dict(). Missing axes default to zero.

        Raises:
            InvalidDimensionsError: If a key names no axis
        """
        values = [0, 0, 0, 0]
        for key, value in data.items():
            axis = key if isinstance(key, FeeDimension) else _AXIS_NAMES.get(key)
            if axis is None:
                raise InvalidDimensionsError(
                    f"Unknown dimension: {key}",
                    details={"known": sorted(_AXIS_NAMES)}
                )
            values[axis] = value
        return cls(*values)

    def __add__(self, other: Dimensions) -> Dimensions:
        if not isinstance(other, Dimensions):
            return NotImplemented
        return Dimensions(
            bandwidth=safe_add(self.bandwidth, other.bandwidth),
            db_read=safe_add(self.db_read, other.db_read),
            db_write=safe_add(self.db_write, other.db_write),
            compute=safe_add(self.compute, other.compute),
        )

    def __getitem__(self, dimension: FeeDimension) -> int:
        return self.to_tuple()[FeeDimension(dimension)]

    def __iter__(self) -> Iterator[int]:
        return iter(self.to_tuple())

    def with_bandwidth(self, extra: int) -> Dimensions:
        """Return a copy with `extra` added to the bandwidth axis only."""
        return self + Dimensions(bandwidth=extra)

    def to_tuple(self) -> Tuple[int, int, int, int]:
        return (self.bandwidth, self.db_read, self.db_write, self.compute)

    def to_dict(self) -> Dict[str, int]:
        """Convert to dictionary keyed by axis name."""
        return {
            "bandwidth": self.bandwidth,
            "dbRead": self.db_read,
            "dbWrite": self.db_write,
            "compute": self.compute,
        }


def add_dimensions(*vectors: Dimensions) -> Dimensions:
    """
    Sum any number of complexity vectors elementwise.

    Returns the zero vector when called without arguments.
    """
    total = Dimensions.zero()
    for vector in vectors:
        total = total + vector
    return total


__all__ = [
    "MAX_UINT64",
    "Dimensions",
    "add_dimensions",
    "safe_add",
    "safe_mul",
]
