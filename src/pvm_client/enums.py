# Enum definitions for the P-Chain client

from enum import Enum, IntEnum


class FeeDimension(IntEnum):
    """Axes of a complexity vector, in their fixed ordering."""
    BANDWIDTH = 0
    DB_READ = 1
    DB_WRITE = 2
    COMPUTE = 3


class TransactionType(str, Enum):
    """P-Chain transaction variants priced by the complexity engine."""
    BASE = "pvm.BaseTx"
    ADD_PERMISSIONLESS_VALIDATOR = "pvm.AddPermissionlessValidatorTx"
    ADD_PERMISSIONLESS_DELEGATOR = "pvm.AddPermissionlessDelegatorTx"
    ADD_SUBNET_VALIDATOR = "pvm.AddSubnetValidatorTx"
    CREATE_CHAIN = "pvm.CreateChainTx"
    CREATE_SUBNET = "pvm.CreateSubnetTx"
    EXPORT = "pvm.ExportTx"
    IMPORT = "pvm.ImportTx"
    REMOVE_SUBNET_VALIDATOR = "pvm.RemoveSubnetValidatorTx"
    TRANSFER_SUBNET_OWNERSHIP = "pvm.TransferSubnetOwnershipTx"


class OutputType(str, Enum):
    """Underlying output kinds a transferable output can wrap."""
    TRANSFER = "secp256k1fx.TransferOutput"
    MINT = "secp256k1fx.MintOutput"
    STAKEABLE_LOCK = "stakeable.LockOut"


class InputType(str, Enum):
    """Underlying input kinds a transferable input can wrap."""
    TRANSFER = "secp256k1fx.TransferInput"
    STAKEABLE_LOCK = "stakeable.LockIn"


__all__ = [
    "FeeDimension",
    "TransactionType",
    "OutputType",
    "InputType",
]
