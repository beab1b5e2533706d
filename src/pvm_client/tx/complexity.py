"""
Transaction complexity calculation for the P-Chain.

Computes the multi-dimensional complexity of a transaction with exact parity
to the validator's accounting, so that fees can be estimated before the
transaction is signed or submitted.

The structural calculators (outputs, inputs, owners, signer, auth) are
exposed individually because spend calculation recomputes complexity as it
tentatively adds inputs and change outputs.
"""

from __future__ import annotations
import logging
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping

from ..enums import TransactionType
from ..runtime.errors import UnsupportedAuthError, UnsupportedTransactionError
from ..transactions import (
    AddPermissionlessDelegatorTx,
    AddPermissionlessValidatorTx,
    AddSubnetValidatorTx,
    BaseTx,
    CreateChainTx,
    CreateSubnetTx,
    ExportTx,
    ImportTx,
    OutputOwners,
    PvmBaseTx,
    RemoveSubnetValidatorTx,
    Secp256k1Input,
    SignerEmpty,
    TransferSubnetOwnershipTx,
    TransferableInput,
    TransferableOutput,
    TX_MODEL_REGISTRY,
)
from ..utils.locks import get_output_owners, is_stakeable_lock_in, is_stakeable_lock_out
from .constants import (
    ID_LEN,
    INTRINSIC_INPUT_BANDWIDTH,
    INTRINSIC_INPUT_DB_READ,
    INTRINSIC_INPUT_DB_WRITE,
    INTRINSIC_OUTPUT_BANDWIDTH,
    INTRINSIC_OUTPUT_DB_WRITE,
    INTRINSIC_POP_BANDWIDTH,
    INTRINSIC_SECP256K1_FX_INPUT_BANDWIDTH,
    INTRINSIC_SECP256K1_FX_OUTPUT_BANDWIDTH,
    INTRINSIC_SECP256K1_FX_OUTPUT_OWNERS_BANDWIDTH,
    INTRINSIC_SECP256K1_FX_SIGNATURE_BANDWIDTH,
    INTRINSIC_SECP256K1_FX_TRANSFERABLE_INPUT_BANDWIDTH,
    INTRINSIC_STAKEABLE_LOCKED_INPUT_BANDWIDTH,
    INTRINSIC_STAKEABLE_LOCKED_OUTPUT_BANDWIDTH,
    INTRINSIC_TX_COMPLEXITIES,
    SHORT_ID_LEN,
)
from .dimensions import Dimensions, add_dimensions, safe_add, safe_mul

logger = logging.getLogger(__name__)


# =============================================================================
# Structural calculators
# =============================================================================

def get_output_complexity(transferable_outputs: Iterable[TransferableOutput]) -> Dimensions:
    """
    Returns the complexity outputs add to a transaction.

    Args:
        transferable_outputs: Outputs in transaction order (may be empty)

    Returns:
        Summed complexity of every output
    """
    complexity = Dimensions.zero()

    for transferable_output in transferable_outputs:
        output = transferable_output.output
        bandwidth = INTRINSIC_OUTPUT_BANDWIDTH + INTRINSIC_SECP256K1_FX_OUTPUT_BANDWIDTH

        if is_stakeable_lock_out(output):
            bandwidth += INTRINSIC_STAKEABLE_LOCKED_OUTPUT_BANDWIDTH

        # Outputs of any other fx kind contribute no addresses
        owners = get_output_owners(output)
        number_of_addresses = len(owners.addrs) if owners is not None else 0
        bandwidth = safe_add(bandwidth, safe_mul(number_of_addresses, SHORT_ID_LEN))

        complexity = complexity + Dimensions(
            bandwidth=bandwidth,
            db_write=INTRINSIC_OUTPUT_DB_WRITE,
        )

    return complexity


def get_input_complexity(transferable_inputs: Iterable[TransferableInput]) -> Dimensions:
    """
    Returns the complexity inputs add to a transaction.

    It includes the complexity that the corresponding credentials will add,
    counted from the signature indices each input declares rather than the
    signatures attached, since pricing happens before signing.
    """
    complexity = Dimensions.zero()

    for transferable_input in transferable_inputs:
        bandwidth = INTRINSIC_INPUT_BANDWIDTH + INTRINSIC_SECP256K1_FX_TRANSFERABLE_INPUT_BANDWIDTH

        if is_stakeable_lock_in(transferable_input.input):
            bandwidth += INTRINSIC_STAKEABLE_LOCKED_INPUT_BANDWIDTH

        number_of_signatures = len(transferable_input.sig_indices())
        bandwidth = safe_add(
            bandwidth,
            safe_mul(number_of_signatures, INTRINSIC_SECP256K1_FX_SIGNATURE_BANDWIDTH)
        )

        complexity = complexity + Dimensions(
            bandwidth=bandwidth,
            db_read=INTRINSIC_INPUT_DB_READ,
            db_write=INTRINSIC_INPUT_DB_WRITE,
            compute=0,  # TODO: price signature verification once the validator defines compute costs
        )

    return complexity


def get_signer_complexity(signer: Any) -> Dimensions:
    """Returns the complexity of a validator signer; empty signers are free."""
    if isinstance(signer, SignerEmpty):
        return Dimensions.zero()

    return Dimensions(bandwidth=INTRINSIC_POP_BANDWIDTH)


def get_owner_complexity(output_owners: OutputOwners) -> Dimensions:
    """Returns the complexity an owner set adds outside the output list."""
    number_of_addresses = len(output_owners.addrs)
    address_bandwidth = safe_mul(number_of_addresses, SHORT_ID_LEN)

    return Dimensions(
        bandwidth=safe_add(address_bandwidth, INTRINSIC_SECP256K1_FX_OUTPUT_OWNERS_BANDWIDTH)
    )


def get_auth_complexity(auth: Any) -> Dimensions:
    """
    Returns the complexity an authorization adds to a transaction.

    It does not include the typeID of the authorization. It does include the
    complexity that the corresponding credential will add, but not the
    credential's typeID.

    Raises:
        UnsupportedAuthError: If `auth` is not a Secp256k1Input
    """
    if not isinstance(auth, Secp256k1Input):
        raise UnsupportedAuthError(
            "Unable to calculate auth complexity of transaction. Expected Input as subnet auth.",
            details={"expected": "secp256k1fx.Input", "got": type(auth).__name__}
        )

    number_of_signatures = len(auth.sig_indices)
    signature_bandwidth = safe_mul(number_of_signatures, INTRINSIC_SECP256K1_FX_SIGNATURE_BANDWIDTH)

    return Dimensions(
        bandwidth=safe_add(signature_bandwidth, INTRINSIC_SECP256K1_FX_INPUT_BANDWIDTH)
    )


def get_base_tx_complexity(base_tx: BaseTx) -> Dimensions:
    """Complexity of the common envelope: outputs, inputs and memo bytes."""
    complexity = get_output_complexity(base_tx.outputs) + get_input_complexity(base_tx.inputs)
    return complexity.with_bandwidth(len(base_tx.memo))


# =============================================================================
# Per-kind composers
# =============================================================================

def _intrinsic(tx_type: TransactionType) -> Dimensions:
    return INTRINSIC_TX_COMPLEXITIES[tx_type]


def _base_tx(tx: PvmBaseTx) -> Dimensions:
    return add_dimensions(
        _intrinsic(TransactionType.BASE),
        get_base_tx_complexity(tx.base_tx),
    )


def _add_permissionless_validator_tx(tx: AddPermissionlessValidatorTx) -> Dimensions:
    return add_dimensions(
        _intrinsic(TransactionType.ADD_PERMISSIONLESS_VALIDATOR),
        get_base_tx_complexity(tx.base_tx),
        get_signer_complexity(tx.signer),
        get_output_complexity(tx.stake),
        get_owner_complexity(tx.get_validator_rewards_owner()),
        get_owner_complexity(tx.get_delegator_rewards_owner()),
    )


def _add_permissionless_delegator_tx(tx: AddPermissionlessDelegatorTx) -> Dimensions:
    return add_dimensions(
        _intrinsic(TransactionType.ADD_PERMISSIONLESS_DELEGATOR),
        get_base_tx_complexity(tx.base_tx),
        get_owner_complexity(tx.get_delegator_rewards_owner()),
        get_output_complexity(tx.stake),
    )


def _add_subnet_validator_tx(tx: AddSubnetValidatorTx) -> Dimensions:
    return add_dimensions(
        _intrinsic(TransactionType.ADD_SUBNET_VALIDATOR),
        get_base_tx_complexity(tx.base_tx),
        get_auth_complexity(tx.subnet_auth),
    )


def _create_chain_tx(tx: CreateChainTx) -> Dimensions:
    bandwidth = safe_mul(len(tx.fx_ids), ID_LEN)
    bandwidth = safe_add(bandwidth, tx.chain_name_length())
    bandwidth = safe_add(bandwidth, len(tx.genesis_data))

    return add_dimensions(
        _intrinsic(TransactionType.CREATE_CHAIN),
        Dimensions(bandwidth=bandwidth),
        get_base_tx_complexity(tx.base_tx),
        get_auth_complexity(tx.subnet_auth),
    )


def _create_subnet_tx(tx: CreateSubnetTx) -> Dimensions:
    return add_dimensions(
        _intrinsic(TransactionType.CREATE_SUBNET),
        get_base_tx_complexity(tx.base_tx),
        get_owner_complexity(tx.get_subnet_owners()),
    )


def _export_tx(tx: ExportTx) -> Dimensions:
    return add_dimensions(
        _intrinsic(TransactionType.EXPORT),
        get_base_tx_complexity(tx.base_tx),
        get_output_complexity(tx.outs),
    )


def _import_tx(tx: ImportTx) -> Dimensions:
    return add_dimensions(
        _intrinsic(TransactionType.IMPORT),
        get_base_tx_complexity(tx.base_tx),
        get_input_complexity(tx.ins),
    )


def _remove_subnet_validator_tx(tx: RemoveSubnetValidatorTx) -> Dimensions:
    return add_dimensions(
        _intrinsic(TransactionType.REMOVE_SUBNET_VALIDATOR),
        get_base_tx_complexity(tx.base_tx),
        get_auth_complexity(tx.subnet_auth),
    )


def _transfer_subnet_ownership_tx(tx: TransferSubnetOwnershipTx) -> Dimensions:
    return add_dimensions(
        _intrinsic(TransactionType.TRANSFER_SUBNET_OWNERSHIP),
        get_base_tx_complexity(tx.base_tx),
        get_auth_complexity(tx.subnet_auth),
        get_owner_complexity(tx.get_subnet_owners()),
    )


TX_COMPLEXITY_COMPOSERS: Mapping[TransactionType, Callable[[Any], Dimensions]] = MappingProxyType({
    TransactionType.BASE: _base_tx,
    TransactionType.ADD_PERMISSIONLESS_VALIDATOR: _add_permissionless_validator_tx,
    TransactionType.ADD_PERMISSIONLESS_DELEGATOR: _add_permissionless_delegator_tx,
    TransactionType.ADD_SUBNET_VALIDATOR: _add_subnet_validator_tx,
    TransactionType.CREATE_CHAIN: _create_chain_tx,
    TransactionType.CREATE_SUBNET: _create_subnet_tx,
    TransactionType.EXPORT: _export_tx,
    TransactionType.IMPORT: _import_tx,
    TransactionType.REMOVE_SUBNET_VALIDATOR: _remove_subnet_validator_tx,
    TransactionType.TRANSFER_SUBNET_OWNERSHIP: _transfer_subnet_ownership_tx,
})

# Every TransactionType needs a model, an intrinsic vector and a composer
_unsupported = [
    t.value for t in TransactionType
    if t not in TX_COMPLEXITY_COMPOSERS or t not in INTRINSIC_TX_COMPLEXITIES or t not in TX_MODEL_REGISTRY
]
if _unsupported:
    raise RuntimeError(f"Transaction types without complexity support: {_unsupported}")


# =============================================================================
# Dispatcher
# =============================================================================

def get_tx_complexity(tx: Any) -> Dimensions:
    """
    Returns the total complexity of a fully formed transaction.

    Args:
        tx: Any P-Chain transaction model

    Returns:
        Complexity vector of the transaction

    Raises:
        UnsupportedTransactionError: If the transaction variant is unknown
        UnsupportedAuthError: If a subnet authorization has the wrong shape
    """
    tag = getattr(tx, "type", None)
    try:
        tx_type = TransactionType(tag)
    except ValueError:
        raise UnsupportedTransactionError(details={"type": str(tag)}) from None

    if not isinstance(tx, TX_MODEL_REGISTRY[tx_type]):
        raise UnsupportedTransactionError(
            details={"type": tx_type.value, "class": type(tx).__name__}
        )

    complexity = TX_COMPLEXITY_COMPOSERS[tx_type](tx)
    logger.debug("Complexity of %s: %s", tx_type.value, complexity.to_dict())
    return complexity


__all__ = [
    "get_output_complexity",
    "get_input_complexity",
    "get_signer_complexity",
    "get_owner_complexity",
    "get_auth_complexity",
    "get_base_tx_complexity",
    "get_tx_complexity",
    "TX_COMPLEXITY_COMPOSERS",
]
