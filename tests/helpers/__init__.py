from .factories import (
    mk_id,
    mk_address,
    mk_owners,
    mk_transfer_output,
    mk_stake_output,
    mk_mint_output,
    mk_transfer_input,
    mk_stake_input,
    mk_auth,
    mk_signer,
    mk_validator,
    mk_base_tx,
    mk_tx,
)

__all__ = [
    "mk_id",
    "mk_address",
    "mk_owners",
    "mk_transfer_output",
    "mk_stake_output",
    "mk_mint_output",
    "mk_transfer_input",
    "mk_stake_input",
    "mk_auth",
    "mk_signer",
    "mk_validator",
    "mk_base_tx",
    "mk_tx",
]
