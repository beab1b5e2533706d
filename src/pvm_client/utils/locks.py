"""
Fund-lock classification for transferable outputs and inputs.

Answers whether an underlying output or input is stake-locked or a plain
transfer, and exposes the owner set behind either kind.
"""

from typing import Any, Optional

from ..transactions import (
    OutputOwners,
    StakeableLockIn,
    StakeableLockOut,
    TransferInput,
    TransferOutput,
)


def is_stakeable_lock_out(output: Any) -> bool:
    return isinstance(output, StakeableLockOut)


def is_stakeable_lock_in(inp: Any) -> bool:
    return isinstance(inp, StakeableLockIn)


def is_transfer_out(output: Any) -> bool:
    return isinstance(output, TransferOutput)


def is_transfer_in(inp: Any) -> bool:
    return isinstance(inp, TransferInput)


def get_output_owners(output: Any) -> Optional[OutputOwners]:
    """
    Return the owner set controlling an output.

    Args:
        output: Underlying output of a TransferableOutput

    Returns:
        The wrapped owner set for stake-locked outputs, the direct owner set
        for plain transfers, None for any other output kind
    """
    if is_stakeable_lock_out(output):
        return output.get_output_owners()
    if is_transfer_out(output):
        return output.output_owners
    return None


__all__ = [
    "is_stakeable_lock_out",
    "is_stakeable_lock_in",
    "is_transfer_out",
    "is_transfer_in",
    "get_output_owners",
]
