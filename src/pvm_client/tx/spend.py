"""
Working state shared with spend calculation.

Spend calculation picks UTXOs to cover the amounts a transaction burns and
stakes. Because the fee depends on the complexity of the very inputs and
change outputs chosen to pay it, every tentative addition folds its own
complexity into the running total. The selection algorithm itself lives with
the caller; this module only carries its state.

All amounts are integers in the asset's smallest denomination.
"""

from __future__ import annotations
from typing import Any, Callable, Dict, List, Optional
from pydantic import BaseModel, Field, field_validator

from ..transactions import (
    Output,
    TransferableInput,
    TransferableOutput,
    parse_output,
)
from .complexity import get_input_complexity, get_output_complexity
from .dimensions import Dimensions
from .fees import FeeConfig, calculate_fee, get_fee_config


class Utxo(BaseModel):
    """Unspent output available to spend."""
    tx_id: bytes = Field(alias="txId")
    output_idx: int = Field(ge=0, alias="outputIdx")
    asset_id: bytes = Field(alias="assetId")
    output: Output

    model_config = {"populate_by_name": True, "frozen": True}

    @field_validator('output', mode='before')
    @classmethod
    def validate_output(cls, v: Any) -> Any:
        return parse_output(v)

    @property
    def utxo_id(self) -> str:
        return f"{self.tx_id.hex()}:{self.output_idx}"


class SpendOptions(BaseModel):
    """Caller-supplied options for spend calculation."""
    fee_config: FeeConfig = Field(default_factory=get_fee_config, alias="feeConfig")
    change_addresses: List[bytes] = Field(default_factory=list, alias="changeAddresses")
    threshold: int = Field(default=1, ge=0)
    locktime: int = Field(default=0, ge=0)
    memo: bytes = b""

    model_config = {"populate_by_name": True, "frozen": True}


class UTXOCalculationResult(BaseModel):
    """Inputs and outputs chosen by spend calculation."""
    inputs: List[TransferableInput] = Field(default_factory=list)
    input_utxos: List[Utxo] = Field(default_factory=list, alias="inputUtxos")
    stake_outputs: List[TransferableOutput] = Field(default_factory=list, alias="stakeOutputs")
    change_outputs: List[TransferableOutput] = Field(default_factory=list, alias="changeOutputs")
    # One entry per input: address (hex) -> signature index
    address_maps: List[Dict[str, int]] = Field(default_factory=list, alias="addressMaps")

    model_config = {"populate_by_name": True, "frozen": True}


class UTXOCalculationState(UTXOCalculationResult):
    """
    Running state of spend calculation.

    Immutable: the with_* helpers return a new state whose complexity
    includes the added input or output.
    """
    amounts_to_burn: Dict[str, int] = Field(default_factory=dict, alias="amountsToBurn")
    amounts_to_stake: Dict[str, int] = Field(default_factory=dict, alias="amountsToStake")
    utxos: List[Utxo] = Field(default_factory=list)
    from_addresses: List[bytes] = Field(default_factory=list, alias="fromAddresses")
    options: SpendOptions = Field(default_factory=SpendOptions)
    complexity: Dimensions = Field(default_factory=Dimensions.zero)

    model_config = {
        "populate_by_name": True,
        "frozen": True,
        "arbitrary_types_allowed": True,
    }

    @field_validator('amounts_to_burn', 'amounts_to_stake')
    @classmethod
    def validate_amounts(cls, v: Dict[str, int]) -> Dict[str, int]:
        for asset_id, amount in v.items():
            if amount < 0:
                raise ValueError(f"amount for {asset_id} must be non-negative, got {amount}")
        return v

    def with_input(
        self,
        transferable_input: TransferableInput,
        utxo: Utxo,
        address_map: Optional[Dict[str, int]] = None
    ) -> UTXOCalculationState:
        """Return a state that also consumes `utxo` through `transferable_input`."""
        return self.model_copy(update={
            "inputs": self.inputs + [transferable_input],
            "input_utxos": self.input_utxos + [utxo],
            "address_maps": self.address_maps + [dict(address_map or {})],
            "complexity": self.complexity + get_input_complexity([transferable_input]),
        })

    def with_stake_output(self, output: TransferableOutput) -> UTXOCalculationState:
        """Return a state that also locks `output` as stake."""
        return self.model_copy(update={
            "stake_outputs": self.stake_outputs + [output],
            "complexity": self.complexity + get_output_complexity([output]),
        })

    def with_change_output(self, output: TransferableOutput) -> UTXOCalculationState:
        """Return a state that also returns `output` as change."""
        return self.model_copy(update={
            "change_outputs": self.change_outputs + [output],
            "complexity": self.complexity + get_output_complexity([output]),
        })

    def required_fee(self) -> int:
        """Fee owed for the current complexity under the configured fee options."""
        return calculate_fee(self.complexity, self.options.fee_config)

    def to_result(self) -> UTXOCalculationResult:
        return UTXOCalculationResult(
            inputs=list(self.inputs),
            input_utxos=list(self.input_utxos),
            stake_outputs=list(self.stake_outputs),
            change_outputs=list(self.change_outputs),
            address_maps=[dict(m) for m in self.address_maps],
        )


UTXOCalculationFn = Callable[[UTXOCalculationState], UTXOCalculationState]


def run_calculation_steps(
    state: UTXOCalculationState,
    steps: List[UTXOCalculationFn]
) -> UTXOCalculationState:
    """Apply spend calculation steps in order, each receiving the previous state."""
    for step in steps:
        state = step(state)
    return state


__all__ = [
    "Utxo",
    "SpendOptions",
    "UTXOCalculationResult",
    "UTXOCalculationState",
    "UTXOCalculationFn",
    "run_calculation_steps",
]
