"""Utility helpers for the P-Chain client"""

from .locks import (
    is_stakeable_lock_out,
    is_stakeable_lock_in,
    is_transfer_out,
    is_transfer_in,
    get_output_owners,
)

__all__ = [
    "is_stakeable_lock_out",
    "is_stakeable_lock_in",
    "is_transfer_out",
    "is_transfer_in",
    "get_output_owners",
]
