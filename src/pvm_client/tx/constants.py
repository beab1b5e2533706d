"""
Intrinsic complexity tables for P-Chain transactions.

Each constant is the number of bytes (or database operations) a field
contributes regardless of the transaction's size. Per-kind vectors cover the
fixed portion of every transaction variant; the structural calculators in
complexity.py add the variable portion.
"""

from types import MappingProxyType
from typing import Mapping

from ..enums import TransactionType
from .dimensions import Dimensions

# Field widths
ID_LEN = 32
SHORT_ID_LEN = 20
NODE_ID_LEN = 20
SHORT_LEN = 2
INT_LEN = 4
LONG_LEN = 8
CODEC_VERSION_LEN = SHORT_LEN

SECP256K1_SIGNATURE_LEN = 65
BLS_PUBLIC_KEY_LEN = 48
BLS_SIGNATURE_LEN = 96

INTRINSIC_VALIDATOR_BANDWIDTH = (
    NODE_ID_LEN  # nodeID
    + LONG_LEN  # start
    + LONG_LEN  # end
    + LONG_LEN  # weight
)

INTRINSIC_SUBNET_VALIDATOR_BANDWIDTH = (
    INTRINSIC_VALIDATOR_BANDWIDTH
    + ID_LEN  # subnetID
)

INTRINSIC_OUTPUT_BANDWIDTH = (
    ID_LEN  # assetID
    + INT_LEN  # output typeID
)

INTRINSIC_STAKEABLE_LOCKED_OUTPUT_BANDWIDTH = (
    LONG_LEN  # locktime
    + INT_LEN  # output typeID
)

INTRINSIC_SECP256K1_FX_OUTPUT_OWNERS_BANDWIDTH = (
    LONG_LEN  # locktime
    + INT_LEN  # threshold
    + INT_LEN  # number of addresses
)

INTRINSIC_SECP256K1_FX_OUTPUT_BANDWIDTH = (
    LONG_LEN  # amount
    + INTRINSIC_SECP256K1_FX_OUTPUT_OWNERS_BANDWIDTH
)

INTRINSIC_INPUT_BANDWIDTH = (
    ID_LEN  # txID
    + INT_LEN  # output index
    + ID_LEN  # assetID
    + INT_LEN  # input typeID
    + INT_LEN  # credential typeID
)

INTRINSIC_STAKEABLE_LOCKED_INPUT_BANDWIDTH = (
    LONG_LEN  # locktime
    + INT_LEN  # input typeID
)

INTRINSIC_SECP256K1_FX_INPUT_BANDWIDTH = (
    INT_LEN  # number of signature indices
    + INT_LEN  # number of signatures
)

INTRINSIC_SECP256K1_FX_TRANSFERABLE_INPUT_BANDWIDTH = (
    LONG_LEN  # amount
    + INTRINSIC_SECP256K1_FX_INPUT_BANDWIDTH
)

INTRINSIC_SECP256K1_FX_SIGNATURE_BANDWIDTH = (
    INT_LEN  # signature index
    + SECP256K1_SIGNATURE_LEN  # signature
)

INTRINSIC_POP_BANDWIDTH = (
    BLS_PUBLIC_KEY_LEN  # public key
    + BLS_SIGNATURE_LEN  # signature
)

INTRINSIC_INPUT_DB_READ = 1
INTRINSIC_INPUT_DB_WRITE = 1
INTRINSIC_OUTPUT_DB_WRITE = 1

INTRINSIC_BASE_TX_COMPLEXITIES = Dimensions(
    bandwidth=(
        CODEC_VERSION_LEN  # codec version
        + INT_LEN  # typeID
        + INT_LEN  # networkID
        + ID_LEN  # blockchainID
        + INT_LEN  # number of outputs
        + INT_LEN  # number of inputs
        + INT_LEN  # length of memo
        + INT_LEN  # number of credentials
    ),
)

_BASE_BANDWIDTH = INTRINSIC_BASE_TX_COMPLEXITIES.bandwidth

INTRINSIC_ADD_PERMISSIONLESS_VALIDATOR_TX_COMPLEXITIES = Dimensions(
    bandwidth=(
        _BASE_BANDWIDTH
        + INTRINSIC_VALIDATOR_BANDWIDTH  # validator
        + ID_LEN  # subnetID
        + INT_LEN  # signer typeID
        + INT_LEN  # number of stake outputs
        + INT_LEN  # validator rewards typeID
        + INT_LEN  # delegator rewards typeID
        + INT_LEN  # delegation shares
    ),
    db_read=1,
    db_write=1,
)

INTRINSIC_ADD_PERMISSIONLESS_DELEGATOR_TX_COMPLEXITIES = Dimensions(
    bandwidth=(
        _BASE_BANDWIDTH
        + INTRINSIC_VALIDATOR_BANDWIDTH  # validator
        + ID_LEN  # subnetID
        + INT_LEN  # number of stake outputs
        + INT_LEN  # delegator rewards typeID
    ),
    db_read=1,
    db_write=1,
)

INTRINSIC_ADD_SUBNET_VALIDATOR_TX_COMPLEXITIES = Dimensions(
    bandwidth=(
        _BASE_BANDWIDTH
        + INTRINSIC_SUBNET_VALIDATOR_BANDWIDTH  # subnet validator
        + INT_LEN  # subnetAuth typeID
        + INT_LEN  # subnetAuth credential typeID
    ),
    db_read=2,
    db_write=1,
)

INTRINSIC_CREATE_CHAIN_TX_COMPLEXITIES = Dimensions(
    bandwidth=(
        _BASE_BANDWIDTH
        + ID_LEN  # subnetID
        + SHORT_LEN  # chain name length
        + ID_LEN  # vmID
        + INT_LEN  # number of fxIDs
        + INT_LEN  # genesis length
        + INT_LEN  # subnetAuth typeID
        + INT_LEN  # subnetAuth credential typeID
    ),
    db_read=1,
    db_write=1,
)

INTRINSIC_CREATE_SUBNET_TX_COMPLEXITIES = Dimensions(
    bandwidth=(
        _BASE_BANDWIDTH
        + INT_LEN  # owner typeID
    ),
    db_write=1,
)

INTRINSIC_EXPORT_TX_COMPLEXITIES = Dimensions(
    bandwidth=(
        _BASE_BANDWIDTH
        + ID_LEN  # destination chainID
        + INT_LEN  # number of exported outputs
    ),
)

INTRINSIC_IMPORT_TX_COMPLEXITIES = Dimensions(
    bandwidth=(
        _BASE_BANDWIDTH
        + ID_LEN  # source chainID
        + INT_LEN  # number of imported inputs
    ),
)

INTRINSIC_REMOVE_SUBNET_VALIDATOR_TX_COMPLEXITIES = Dimensions(
    bandwidth=(
        _BASE_BANDWIDTH
        + NODE_ID_LEN  # nodeID
        + ID_LEN  # subnetID
        + INT_LEN  # subnetAuth typeID
        + INT_LEN  # subnetAuth credential typeID
    ),
    db_read=1,
    db_write=1,
)

INTRINSIC_TRANSFER_SUBNET_OWNERSHIP_TX_COMPLEXITIES = Dimensions(
    bandwidth=(
        _BASE_BANDWIDTH
        + ID_LEN  # subnetID
        + INT_LEN  # subnetAuth typeID
        + INT_LEN  # owner typeID
        + INT_LEN  # subnetAuth credential typeID
    ),
    db_read=1,
    db_write=1,
)

INTRINSIC_TX_COMPLEXITIES: Mapping[TransactionType, Dimensions] = MappingProxyType({
    TransactionType.BASE: INTRINSIC_BASE_TX_COMPLEXITIES,
    TransactionType.ADD_PERMISSIONLESS_VALIDATOR: INTRINSIC_ADD_PERMISSIONLESS_VALIDATOR_TX_COMPLEXITIES,
    TransactionType.ADD_PERMISSIONLESS_DELEGATOR: INTRINSIC_ADD_PERMISSIONLESS_DELEGATOR_TX_COMPLEXITIES,
    TransactionType.ADD_SUBNET_VALIDATOR: INTRINSIC_ADD_SUBNET_VALIDATOR_TX_COMPLEXITIES,
    TransactionType.CREATE_CHAIN: INTRINSIC_CREATE_CHAIN_TX_COMPLEXITIES,
    TransactionType.CREATE_SUBNET: INTRINSIC_CREATE_SUBNET_TX_COMPLEXITIES,
    TransactionType.EXPORT: INTRINSIC_EXPORT_TX_COMPLEXITIES,
    TransactionType.IMPORT: INTRINSIC_IMPORT_TX_COMPLEXITIES,
    TransactionType.REMOVE_SUBNET_VALIDATOR: INTRINSIC_REMOVE_SUBNET_VALIDATOR_TX_COMPLEXITIES,
    TransactionType.TRANSFER_SUBNET_OWNERSHIP: INTRINSIC_TRANSFER_SUBNET_OWNERSHIP_TX_COMPLEXITIES,
})
