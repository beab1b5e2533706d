"""
Complexity and fee estimation for P-Chain transactions.

Provides the complexity engine, its intrinsic cost tables, fee conversion
and the working state consumed by spend calculation.
"""

from . import constants, dimensions, complexity, fees, spend

from .dimensions import (
    MAX_UINT64,
    Dimensions,
    add_dimensions,
)

from .complexity import (
    get_output_complexity,
    get_input_complexity,
    get_signer_complexity,
    get_owner_complexity,
    get_auth_complexity,
    get_base_tx_complexity,
    get_tx_complexity,
)

from .fees import (
    FeeConfig,
    get_fee_config,
    to_gas,
    calculate_fee,
    estimate_tx_fee,
)

from .spend import (
    Utxo,
    SpendOptions,
    UTXOCalculationResult,
    UTXOCalculationState,
    UTXOCalculationFn,
    run_calculation_steps,
)

__all__ = [
    # Modules
    "constants",
    "dimensions",
    "complexity",
    "fees",
    "spend",

    # Dimension vectors
    "MAX_UINT64",
    "Dimensions",
    "add_dimensions",

    # Complexity engine
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

    # Spend calculation state
    "Utxo",
    "SpendOptions",
    "UTXOCalculationResult",
    "UTXOCalculationState",
    "UTXOCalculationFn",
    "run_calculation_steps",
]
