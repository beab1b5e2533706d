"""
Transaction fee estimation for the P-Chain.

Converts a complexity vector into gas using per-dimension weights and prices
the gas at a caller-supplied rate. How the gas price evolves over time is
decided by the network and is not modelled here.
"""

from __future__ import annotations
import logging
from typing import Any, Dict, Optional, Sequence, Union
from pydantic import BaseModel, Field, field_validator

from ..runtime.errors import GasLimitExceededError, InvalidFeeConfigError
from .complexity import get_tx_complexity
from .dimensions import Dimensions, safe_add, safe_mul

logger = logging.getLogger(__name__)


class FeeConfig(BaseModel):
    """
    Fee parameters supplied by the caller of spend calculation.

    Weights may be given as a Dimensions instance, a 4-tuple in axis order,
    or a mapping keyed by axis name.
    """

    weights: Dimensions = Field(
        default_factory=lambda: Dimensions(bandwidth=1, db_read=1000, db_write=1000, compute=4),
        description="Gas per unit of complexity along each dimension"
    )
    gas_price: int = Field(
        default=1,
        ge=0,
        alias="gasPrice",
        description="Price of one unit of gas in nAVAX"
    )
    max_gas: Optional[int] = Field(
        default=None,
        ge=0,
        alias="maxGas",
        description="Largest gas a single transaction may consume"
    )

    model_config = {
        "populate_by_name": True,
        "arbitrary_types_allowed": True,
        "frozen": True,
    }

    @field_validator('weights', mode='before')
    @classmethod
    def validate_weights(cls, v: Any) -> Dimensions:
        """Normalize weights to a Dimensions vector."""
        if isinstance(v, Dimensions):
            return v
        if isinstance(v, dict):
            return Dimensions.from_dict(v)
        if isinstance(v, (list, tuple)):
            if len(v) != 4:
                raise ValueError(f"weights must have 4 components, got {len(v)}")
            return Dimensions.from_scalars(*v)
        raise ValueError(f"weights must be Dimensions, a 4-tuple or a mapping, got {type(v)}")

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "weights": self.weights.to_dict(),
            "gasPrice": self.gas_price,
        }
        if self.max_gas is not None:
            result["maxGas"] = self.max_gas
        return result


_NETWORK_PRESETS: Dict[str, Dict[str, Any]] = {
    "mainnet": {"weights": (1, 1000, 1000, 4), "gas_price": 1, "max_gas": 1_000_000},
    "fuji": {"weights": (1, 1000, 1000, 4), "gas_price": 1, "max_gas": 1_000_000},
    "local": {"weights": (1, 1000, 1000, 4), "gas_price": 1, "max_gas": None},
}


def get_fee_config(network: str = "mainnet", **overrides: Any) -> FeeConfig:
    """
    Get fee parameters for a known network.

    Args:
        network: Network name ("mainnet", "fuji" or "local")
        **overrides: Field values replacing the preset's

    Returns:
        Fee configuration

    Raises:
        InvalidFeeConfigError: If the network is unknown
    """
    preset = _NETWORK_PRESETS.get(network.lower())
    if preset is None:
        raise InvalidFeeConfigError(
            f"Unknown network: {network}",
            details={"known": sorted(_NETWORK_PRESETS)}
        )
    params = dict(preset)
    params.update(overrides)
    return FeeConfig(**params)


def to_gas(complexity: Dimensions, weights: Union[Dimensions, Sequence[int]]) -> int:
    """
    Collapse a complexity vector into gas as the weighted sum of its axes.

    Raises:
        ComplexityOverflowError: If the result leaves uint64
    """
    if not isinstance(weights, Dimensions):
        weights = Dimensions.from_scalars(*weights)

    gas = 0
    for value, weight in zip(complexity, weights):
        gas = safe_add(gas, safe_mul(value, weight))
    return gas


def calculate_fee(complexity: Dimensions, config: Optional[FeeConfig] = None) -> int:
    """
    Calculate the fee for a complexity vector.

    Args:
        complexity: Transaction complexity
        config: Fee configuration (mainnet preset if None)

    Returns:
        Fee in nAVAX

    Raises:
        GasLimitExceededError: If the gas exceeds config.max_gas
        ComplexityOverflowError: If gas or fee leaves uint64
    """
    if config is None:
        config = get_fee_config()

    gas = to_gas(complexity, config.weights)
    if config.max_gas is not None and gas > config.max_gas:
        raise GasLimitExceededError(
            f"Transaction gas {gas} exceeds maximum {config.max_gas}",
            details={"gas": gas, "max_gas": config.max_gas}
        )

    return safe_mul(gas, config.gas_price)


def estimate_tx_fee(tx: Any, config: Optional[FeeConfig] = None) -> int:
    """
    Estimate the minimum fee for a fully formed transaction.

    Args:
        tx: P-Chain transaction model
        config: Fee configuration (mainnet preset if None)

    Returns:
        Fee in nAVAX
    """
    complexity = get_tx_complexity(tx)
    fee = calculate_fee(complexity, config)
    logger.debug("Estimated fee for %s: %d", tx.type, fee)
    return fee


__all__ = [
    "FeeConfig",
    "get_fee_config",
    "to_gas",
    "calculate_fee",
    "estimate_tx_fee",
]
