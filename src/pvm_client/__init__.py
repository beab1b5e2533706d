"""
P-Chain Python Client - Transaction Complexity

This package computes the multi-dimensional complexity of P-Chain
transactions and the fees they require, ahead of signing and submission.
"""

# The tx package must load before transactions: transactions reads its
# field widths from tx.constants
from .enums import *
from .runtime.errors import *
from .tx import *
from .transactions import *
from .utils import *

__version__ = "0.1.0"
__all__ = [
    # Complexity engine
    "Dimensions",
    "add_dimensions",
    "get_output_complexity",
    "get_input_complexity",
    "get_signer_complexity",
    "get_owner_complexity",
    "get_auth_complexity",
    "get_base_tx_complexity",
    "get_tx_complexity",

    # Fees
    "FeeConfig",
    "get_fee_config",
    "to_gas",
    "calculate_fee",
    "estimate_tx_fee",

    # Errors
    "PvmError",
    "UnsupportedTransactionError",
    "UnsupportedAuthError",
    "ComplexityOverflowError",

    # All enums, transactions and utils are included via *
]
