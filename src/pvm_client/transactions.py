# Transaction type definitions for the P-Chain (platform VM)
# Read-only models consumed by the complexity engine and the spend calculator

from __future__ import annotations
from pydantic import BaseModel, BeforeValidator, Field, field_validator
from typing import Annotated, Optional, List, Union, Any, Dict, Type

from .enums import TransactionType, OutputType, InputType
from .tx.constants import (
    ID_LEN,
    SHORT_ID_LEN,
    NODE_ID_LEN,
    BLS_PUBLIC_KEY_LEN,
    BLS_SIGNATURE_LEN,
)


_FROZEN = {"populate_by_name": True, "frozen": True}


def _to_bytes(v: Any, name: str, length: Optional[int] = None) -> bytes:
    """Convert hex strings to bytes and check a fixed length when given."""
    if isinstance(v, (bytearray, memoryview)):
        v = bytes(v)
    if isinstance(v, str):
        v = bytes.fromhex(v[2:] if v.startswith("0x") else v)
    if not isinstance(v, bytes):
        raise ValueError(f"{name} must be bytes or hex string, got {type(v)}")
    if length is not None and len(v) != length:
        raise ValueError(f"{name} must be {length} bytes, got {len(v)}")
    return v


Id = Annotated[bytes, BeforeValidator(lambda v: _to_bytes(v, "id", ID_LEN))]
NodeId = Annotated[bytes, BeforeValidator(lambda v: _to_bytes(v, "node_id", NODE_ID_LEN))]


# =============================================================================
# Owners and fx outputs
# =============================================================================

class OutputOwners(BaseModel):
    """Threshold set of addresses that may spend an output."""
    locktime: int = Field(default=0, ge=0)
    threshold: int = Field(default=1, ge=0)
    addrs: List[bytes] = Field(default_factory=list)

    model_config = _FROZEN

    @field_validator('addrs', mode='before')
    @classmethod
    def validate_addrs(cls, v: Any) -> List[bytes]:
        if v is None:
            return []
        return [_to_bytes(addr, "address", SHORT_ID_LEN) for addr in v]


class TransferOutput(BaseModel):
    """Plain secp256k1fx transfer output."""
    type: str = Field(default=OutputType.TRANSFER.value, frozen=True)
    amount: int = Field(ge=0)
    output_owners: OutputOwners = Field(alias="outputOwners")

    model_config = _FROZEN


class MintOutput(BaseModel):
    """secp256k1fx mint output. Carries owners but no transferable amount."""
    type: str = Field(default=OutputType.MINT.value, frozen=True)
    output_owners: OutputOwners = Field(alias="outputOwners")

    model_config = _FROZEN


class StakeableLockOut(BaseModel):
    """Transfer output locked for staking until `locktime`."""
    type: str = Field(default=OutputType.STAKEABLE_LOCK.value, frozen=True)
    locktime: int = Field(ge=0)
    transferable_out: TransferOutput = Field(alias="transferableOut")

    model_config = _FROZEN

    def get_output_owners(self) -> OutputOwners:
        return self.transferable_out.output_owners


Output = Union[StakeableLockOut, TransferOutput, MintOutput]

_OUTPUT_TYPES: Dict[str, Type[BaseModel]] = {
    OutputType.TRANSFER.value: TransferOutput,
    OutputType.MINT.value: MintOutput,
    OutputType.STAKEABLE_LOCK.value: StakeableLockOut,
}


def parse_output(data: Any) -> Any:
    """Resolve a serialized output dictionary to its model by `type`."""
    if not isinstance(data, dict):
        return data
    out_type = data.get("type", OutputType.TRANSFER.value)
    out_class = _OUTPUT_TYPES.get(out_type)
    if out_class is None:
        raise ValueError(f"Unknown output type: {out_type}")
    return out_class.model_validate(data)


# =============================================================================
# fx inputs
# =============================================================================

class TransferInput(BaseModel):
    """Plain secp256k1fx transfer input."""
    type: str = Field(default=InputType.TRANSFER.value, frozen=True)
    amount: int = Field(ge=0)
    sig_indices: List[int] = Field(default_factory=list, alias="sigIndices")

    model_config = _FROZEN


class StakeableLockIn(BaseModel):
    """Input consuming a stake-locked output."""
    type: str = Field(default=InputType.STAKEABLE_LOCK.value, frozen=True)
    locktime: int = Field(ge=0)
    transferable_in: TransferInput = Field(alias="transferableIn")

    model_config = _FROZEN


class Secp256k1Input(BaseModel):
    """
    Bare secp256k1fx input: the signature indices of a subnet authorization.

    The only authorization shape the complexity engine can price.
    """
    type: str = Field(default="secp256k1fx.Input", frozen=True)
    sig_indices: List[int] = Field(default_factory=list, alias="sigIndices")

    model_config = _FROZEN


Input = Union[StakeableLockIn, TransferInput]

_INPUT_TYPES: Dict[str, Type[BaseModel]] = {
    InputType.TRANSFER.value: TransferInput,
    InputType.STAKEABLE_LOCK.value: StakeableLockIn,
}


def parse_input(data: Any) -> Any:
    """Resolve a serialized input dictionary to its model by `type`."""
    if not isinstance(data, dict):
        return data
    in_type = data.get("type", InputType.TRANSFER.value)
    in_class = _INPUT_TYPES.get(in_type)
    if in_class is None:
        raise ValueError(f"Unknown input type: {in_type}")
    return in_class.model_validate(data)


def parse_auth(data: Any) -> Any:
    """Resolve a serialized subnet authorization; unknown shapes pass through."""
    if isinstance(data, dict) and data.get("type") == "secp256k1fx.Input":
        return Secp256k1Input.model_validate(data)
    return data


AuthInput = Annotated[Any, BeforeValidator(parse_auth)]


# =============================================================================
# Transferables and the common envelope
# =============================================================================

class TransferableOutput(BaseModel):
    """Output of a specific asset."""
    asset_id: bytes = Field(alias="assetId")
    output: Output

    model_config = _FROZEN

    @field_validator('asset_id', mode='before')
    @classmethod
    def validate_asset_id(cls, v: Any) -> bytes:
        return _to_bytes(v, "asset_id", ID_LEN)

    @field_validator('output', mode='before')
    @classmethod
    def validate_output(cls, v: Any) -> Any:
        return parse_output(v)


class TransferableInput(BaseModel):
    """Reference to a UTXO being consumed, with the input that unlocks it."""
    tx_id: bytes = Field(alias="txId")
    output_idx: int = Field(ge=0, alias="outputIdx")
    asset_id: bytes = Field(alias="assetId")
    input: Input

    model_config = _FROZEN

    @field_validator('tx_id', 'asset_id', mode='before')
    @classmethod
    def validate_ids(cls, v: Any) -> bytes:
        return _to_bytes(v, "id", ID_LEN)

    @field_validator('input', mode='before')
    @classmethod
    def validate_input(cls, v: Any) -> Any:
        return parse_input(v)

    def sig_indices(self) -> List[int]:
        """Signature indices the input requires, unwrapping stake locks."""
        inner = self.input
        if isinstance(inner, StakeableLockIn):
            inner = inner.transferable_in
        return list(inner.sig_indices)


class BaseTx(BaseModel):
    """Common envelope shared by every P-Chain transaction."""
    network_id: int = Field(default=1, ge=0, alias="networkId")
    blockchain_id: bytes = Field(default=bytes(ID_LEN), alias="blockchainId")
    outputs: List[TransferableOutput] = Field(default_factory=list)
    inputs: List[TransferableInput] = Field(default_factory=list)
    memo: bytes = b""

    model_config = _FROZEN

    @field_validator('blockchain_id', mode='before')
    @classmethod
    def validate_blockchain_id(cls, v: Any) -> bytes:
        return _to_bytes(v, "blockchain_id", ID_LEN)

    @field_validator('memo', mode='before')
    @classmethod
    def validate_memo(cls, v: Any) -> bytes:
        if v is None:
            return b""
        # 0x-prefixed strings are hex like every other byte field; other text is UTF-8
        if isinstance(v, str) and not v.startswith("0x"):
            return v.encode("utf-8")
        return _to_bytes(v, "memo")


# =============================================================================
# Validators and signers
# =============================================================================

class Validator(BaseModel):
    """Staker identity and staking period."""
    node_id: bytes = Field(alias="nodeId")
    start_time: int = Field(default=0, ge=0, alias="startTime")
    end_time: int = Field(ge=0, alias="endTime")
    weight: int = Field(ge=0)

    model_config = _FROZEN

    @field_validator('node_id', mode='before')
    @classmethod
    def validate_node_id(cls, v: Any) -> bytes:
        return _to_bytes(v, "node_id", NODE_ID_LEN)


class SubnetValidator(BaseModel):
    """Validator scoped to a subnet."""
    validator: Validator
    subnet_id: bytes = Field(alias="subnetId")

    model_config = _FROZEN

    @field_validator('subnet_id', mode='before')
    @classmethod
    def validate_subnet_id(cls, v: Any) -> bytes:
        return _to_bytes(v, "subnet_id", ID_LEN)


class ProofOfPossession(BaseModel):
    """BLS public key and the signature proving its possession."""
    public_key: bytes = Field(alias="publicKey")
    signature: bytes

    model_config = _FROZEN

    @field_validator('public_key', mode='before')
    @classmethod
    def validate_public_key(cls, v: Any) -> bytes:
        return _to_bytes(v, "public_key", BLS_PUBLIC_KEY_LEN)

    @field_validator('signature', mode='before')
    @classmethod
    def validate_signature(cls, v: Any) -> bytes:
        return _to_bytes(v, "signature", BLS_SIGNATURE_LEN)


class Signer(BaseModel):
    """Validator signer carrying a proof of possession."""
    type: str = Field(default="signer", frozen=True)
    proof_of_possession: ProofOfPossession = Field(alias="proofOfPossession")

    model_config = _FROZEN


class SignerEmpty(BaseModel):
    """Signer placeholder used when no BLS key is registered."""
    type: str = Field(default="signer.empty", frozen=True)

    model_config = _FROZEN


def parse_signer(data: Any) -> Any:
    """Resolve a serialized signer dictionary to Signer or SignerEmpty."""
    if not isinstance(data, dict):
        return data
    if data.get("type") == "signer.empty" or (
        "proofOfPossession" not in data and "proof_of_possession" not in data
    ):
        return SignerEmpty()
    return Signer.model_validate(data)


# =============================================================================
# Transaction variants
# =============================================================================

class PvmTransaction(BaseModel):
    """Base class for P-Chain transaction variants."""
    type: str
    base_tx: BaseTx = Field(default_factory=BaseTx, alias="baseTx")

    model_config = _FROZEN

    @property
    def tx_type(self) -> TransactionType:
        return TransactionType(self.type)


class PvmBaseTx(PvmTransaction):
    """Plain transfer of funds on the P-Chain."""
    type: str = Field(default=TransactionType.BASE.value, frozen=True)


class AddPermissionlessValidatorTx(PvmTransaction):
    """Adds a validator to the primary network or a permissionless subnet."""
    type: str = Field(default=TransactionType.ADD_PERMISSIONLESS_VALIDATOR.value, frozen=True)
    validator: Validator
    subnet_id: Id = Field(default=bytes(ID_LEN), alias="subnetId")
    signer: Union[Signer, SignerEmpty] = Field(default_factory=SignerEmpty)
    stake: List[TransferableOutput] = Field(default_factory=list)
    validator_rewards_owner: OutputOwners = Field(alias="validatorRewardsOwner")
    delegator_rewards_owner: OutputOwners = Field(alias="delegatorRewardsOwner")
    delegation_shares: int = Field(default=0, ge=0, alias="delegationShares")

    @field_validator('signer', mode='before')
    @classmethod
    def validate_signer(cls, v: Any) -> Any:
        return parse_signer(v)

    def get_validator_rewards_owner(self) -> OutputOwners:
        return self.validator_rewards_owner

    def get_delegator_rewards_owner(self) -> OutputOwners:
        return self.delegator_rewards_owner


class AddPermissionlessDelegatorTx(PvmTransaction):
    """Delegates stake to a permissionless validator."""
    type: str = Field(default=TransactionType.ADD_PERMISSIONLESS_DELEGATOR.value, frozen=True)
    validator: Validator
    subnet_id: Id = Field(default=bytes(ID_LEN), alias="subnetId")
    stake: List[TransferableOutput] = Field(default_factory=list)
    delegator_rewards_owner: OutputOwners = Field(alias="delegatorRewardsOwner")

    def get_delegator_rewards_owner(self) -> OutputOwners:
        return self.delegator_rewards_owner


class AddSubnetValidatorTx(PvmTransaction):
    """Adds a validator to a permissioned subnet."""
    type: str = Field(default=TransactionType.ADD_SUBNET_VALIDATOR.value, frozen=True)
    subnet_validator: SubnetValidator = Field(alias="subnetValidator")
    subnet_auth: AuthInput = Field(alias="subnetAuth")


class CreateChainTx(PvmTransaction):
    """Creates a blockchain validated by a subnet."""
    type: str = Field(default=TransactionType.CREATE_CHAIN.value, frozen=True)
    subnet_id: Id = Field(alias="subnetId")
    chain_name: str = Field(default="", alias="chainName")
    vm_id: Id = Field(alias="vmId")
    fx_ids: List[Id] = Field(default_factory=list, alias="fxIds")
    genesis_data: bytes = Field(default=b"", alias="genesisData")
    subnet_auth: AuthInput = Field(alias="subnetAuth")

    @field_validator('genesis_data', mode='before')
    @classmethod
    def validate_genesis_data(cls, v: Any) -> bytes:
        if v is None:
            return b""
        return _to_bytes(v, "genesis_data")

    def chain_name_length(self) -> int:
        """Byte length of the chain name as serialized on the wire."""
        return len(self.chain_name.encode("utf-8"))


class CreateSubnetTx(PvmTransaction):
    """Creates a subnet owned by `subnet_owners`."""
    type: str = Field(default=TransactionType.CREATE_SUBNET.value, frozen=True)
    subnet_owners: OutputOwners = Field(alias="subnetOwners")

    def get_subnet_owners(self) -> OutputOwners:
        return self.subnet_owners


class ExportTx(PvmTransaction):
    """Exports outputs to another chain's shared memory."""
    type: str = Field(default=TransactionType.EXPORT.value, frozen=True)
    destination_chain: Id = Field(alias="destinationChain")
    outs: List[TransferableOutput] = Field(default_factory=list)


class ImportTx(PvmTransaction):
    """Imports inputs from another chain's shared memory."""
    type: str = Field(default=TransactionType.IMPORT.value, frozen=True)
    source_chain: Id = Field(alias="sourceChain")
    ins: List[TransferableInput] = Field(default_factory=list)


class RemoveSubnetValidatorTx(PvmTransaction):
    """Removes a validator from a permissioned subnet."""
    type: str = Field(default=TransactionType.REMOVE_SUBNET_VALIDATOR.value, frozen=True)
    node_id: NodeId = Field(alias="nodeId")
    subnet_id: Id = Field(alias="subnetId")
    subnet_auth: AuthInput = Field(alias="subnetAuth")


class TransferSubnetOwnershipTx(PvmTransaction):
    """Hands a subnet over to a new owner set."""
    type: str = Field(default=TransactionType.TRANSFER_SUBNET_OWNERSHIP.value, frozen=True)
    subnet_id: Id = Field(alias="subnetId")
    subnet_auth: AuthInput = Field(alias="subnetAuth")
    subnet_owners: OutputOwners = Field(alias="subnetOwners")

    def get_subnet_owners(self) -> OutputOwners:
        return self.subnet_owners


Transaction = Union[
    PvmBaseTx,
    AddPermissionlessValidatorTx,
    AddPermissionlessDelegatorTx,
    AddSubnetValidatorTx,
    CreateChainTx,
    CreateSubnetTx,
    ExportTx,
    ImportTx,
    RemoveSubnetValidatorTx,
    TransferSubnetOwnershipTx,
]

TX_MODEL_REGISTRY: Dict[TransactionType, Type[PvmTransaction]] = {
    TransactionType.BASE: PvmBaseTx,
    TransactionType.ADD_PERMISSIONLESS_VALIDATOR: AddPermissionlessValidatorTx,
    TransactionType.ADD_PERMISSIONLESS_DELEGATOR: AddPermissionlessDelegatorTx,
    TransactionType.ADD_SUBNET_VALIDATOR: AddSubnetValidatorTx,
    TransactionType.CREATE_CHAIN: CreateChainTx,
    TransactionType.CREATE_SUBNET: CreateSubnetTx,
    TransactionType.EXPORT: ExportTx,
    TransactionType.IMPORT: ImportTx,
    TransactionType.REMOVE_SUBNET_VALIDATOR: RemoveSubnetValidatorTx,
    TransactionType.TRANSFER_SUBNET_OWNERSHIP: TransferSubnetOwnershipTx,
}


def parse_transaction(data: Dict[str, Any]) -> Transaction:
    """
    Parse a transaction from a dictionary.

    Args:
        data: Dictionary representation of the transaction

    Returns:
        The appropriate transaction model instance
    """
    tx_type = data.get("type", "")
    try:
        tx_class = TX_MODEL_REGISTRY[TransactionType(tx_type)]
    except ValueError:
        raise ValueError(f"Unknown transaction type: {tx_type}") from None

    return tx_class.model_validate(data)


__all__ = [
    "OutputOwners",
    "TransferOutput",
    "MintOutput",
    "StakeableLockOut",
    "Output",
    "TransferInput",
    "StakeableLockIn",
    "Secp256k1Input",
    "Input",
    "TransferableOutput",
    "TransferableInput",
    "BaseTx",
    "Validator",
    "SubnetValidator",
    "ProofOfPossession",
    "Signer",
    "SignerEmpty",
    "PvmTransaction",
    "PvmBaseTx",
    "AddPermissionlessValidatorTx",
    "AddPermissionlessDelegatorTx",
    "AddSubnetValidatorTx",
    "CreateChainTx",
    "CreateSubnetTx",
    "ExportTx",
    "ImportTx",
    "RemoveSubnetValidatorTx",
    "TransferSubnetOwnershipTx",
    "Transaction",
    "TX_MODEL_REGISTRY",
    "parse_output",
    "parse_input",
    "parse_auth",
    "parse_signer",
    "parse_transaction",
]
