"""
Test transaction complexity calculation.

Tests each structural calculator, every per-kind composer against the
published intrinsic constants, and the dispatcher's handling of unknown
transaction variants.
"""

import itertools
import logging
import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))
from helpers import (
    mk_auth,
    mk_base_tx,
    mk_id,
    mk_mint_output,
    mk_owners,
    mk_signer,
    mk_stake_input,
    mk_stake_output,
    mk_transfer_input,
    mk_transfer_output,
    mk_tx,
)

from pvm_client.enums import TransactionType
from pvm_client.runtime.errors import UnsupportedAuthError, UnsupportedTransactionError
from pvm_client.transactions import (
    OutputOwners,
    PvmBaseTx,
    PvmTransaction,
    SignerEmpty,
    TransferInput,
    parse_transaction,
)
from pvm_client.tx import constants as c
from pvm_client.tx.complexity import (
    TX_COMPLEXITY_COMPOSERS,
    get_auth_complexity,
    get_base_tx_complexity,
    get_input_complexity,
    get_output_complexity,
    get_owner_complexity,
    get_signer_complexity,
    get_tx_complexity,
)
from pvm_client.tx.dimensions import Dimensions, add_dimensions


OUTPUT_BW = c.INTRINSIC_OUTPUT_BANDWIDTH + c.INTRINSIC_SECP256K1_FX_OUTPUT_BANDWIDTH
INPUT_BW = c.INTRINSIC_INPUT_BANDWIDTH + c.INTRINSIC_SECP256K1_FX_TRANSFERABLE_INPUT_BANDWIDTH


class TestIntrinsicConstants:
    """Pin the intrinsic tables to the values validators use."""

    def test_field_costs(self):
        assert c.INTRINSIC_VALIDATOR_BANDWIDTH == 44
        assert c.INTRINSIC_SUBNET_VALIDATOR_BANDWIDTH == 76
        assert c.INTRINSIC_OUTPUT_BANDWIDTH == 36
        assert c.INTRINSIC_STAKEABLE_LOCKED_OUTPUT_BANDWIDTH == 12
        assert c.INTRINSIC_SECP256K1_FX_OUTPUT_OWNERS_BANDWIDTH == 16
        assert c.INTRINSIC_SECP256K1_FX_OUTPUT_BANDWIDTH == 24
        assert c.INTRINSIC_INPUT_BANDWIDTH == 76
        assert c.INTRINSIC_STAKEABLE_LOCKED_INPUT_BANDWIDTH == 12
        assert c.INTRINSIC_SECP256K1_FX_INPUT_BANDWIDTH == 8
        assert c.INTRINSIC_SECP256K1_FX_TRANSFERABLE_INPUT_BANDWIDTH == 16
        assert c.INTRINSIC_SECP256K1_FX_SIGNATURE_BANDWIDTH == 69
        assert c.INTRINSIC_POP_BANDWIDTH == 144

    @pytest.mark.parametrize("tx_type,expected", [
        (TransactionType.BASE, (58, 0, 0, 0)),
        (TransactionType.ADD_PERMISSIONLESS_VALIDATOR, (154, 1, 1, 0)),
        (TransactionType.ADD_PERMISSIONLESS_DELEGATOR, (142, 1, 1, 0)),
        (TransactionType.ADD_SUBNET_VALIDATOR, (142, 2, 1, 0)),
        (TransactionType.CREATE_CHAIN, (140, 1, 1, 0)),
        (TransactionType.CREATE_SUBNET, (62, 0, 1, 0)),
        (TransactionType.EXPORT, (94, 0, 0, 0)),
        (TransactionType.IMPORT, (94, 0, 0, 0)),
        (TransactionType.REMOVE_SUBNET_VALIDATOR, (118, 1, 1, 0)),
        (TransactionType.TRANSFER_SUBNET_OWNERSHIP, (102, 1, 1, 0)),
    ])
    def test_per_kind_vectors(self, tx_type, expected):
        assert c.INTRINSIC_TX_COMPLEXITIES[tx_type].to_tuple() == expected

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            c.INTRINSIC_TX_COMPLEXITIES[TransactionType.BASE] = Dimensions.zero()


class TestOutputComplexity:
    """Test output-list complexity."""

    def test_empty(self):
        assert get_output_complexity([]) == Dimensions.zero()

    def test_plain_transfer(self):
        assert get_output_complexity([mk_transfer_output(1)]) == Dimensions(
            bandwidth=OUTPUT_BW + 20, db_write=1
        )

    def test_address_count_scales_bandwidth(self):
        assert get_output_complexity([mk_transfer_output(3)]).bandwidth == OUTPUT_BW + 3 * c.SHORT_ID_LEN

    def test_stake_locked_uses_wrapped_owners(self):
        assert get_output_complexity([mk_stake_output(2)]) == Dimensions(
            bandwidth=OUTPUT_BW + c.INTRINSIC_STAKEABLE_LOCKED_OUTPUT_BANDWIDTH + 2 * c.SHORT_ID_LEN,
            db_write=1,
        )

    def test_other_output_kind_has_no_addresses(self):
        assert get_output_complexity([mk_mint_output(5)]) == Dimensions(bandwidth=OUTPUT_BW, db_write=1)

    def test_stake_surcharge_once_per_locked_output(self):
        locked = [mk_stake_output(1), mk_stake_output(2), mk_stake_output(0)]
        plain = [mk_transfer_output(1), mk_transfer_output(4)]
        addresses = 1 + 2 + 0 + 1 + 4

        complexity = get_output_complexity(locked + plain)

        assert complexity.bandwidth == (
            len(locked) * (OUTPUT_BW + c.INTRINSIC_STAKEABLE_LOCKED_OUTPUT_BANDWIDTH)
            + len(plain) * OUTPUT_BW
            + addresses * c.SHORT_ID_LEN
        )
        assert complexity.db_write == 5
        assert complexity.db_read == 0
        assert complexity.compute == 0

    def test_additive(self):
        a = [mk_transfer_output(1), mk_stake_output(2)]
        b = [mk_mint_output(1), mk_transfer_output(3)]
        assert get_output_complexity(a + b) == get_output_complexity(a) + get_output_complexity(b)

    def test_order_independent(self):
        outputs = [mk_transfer_output(1), mk_stake_output(2), mk_mint_output(1)]
        expected = get_output_complexity(outputs)
        for perm in itertools.permutations(outputs):
            assert get_output_complexity(list(perm)) == expected

    def test_accepts_generator(self):
        outputs = [mk_transfer_output(1), mk_transfer_output(1)]
        assert get_output_complexity(o for o in outputs) == get_output_complexity(outputs)


class TestInputComplexity:
    """Test input-list complexity."""

    def test_empty(self):
        assert get_input_complexity([]) == Dimensions.zero()

    def test_plain_transfer(self):
        assert get_input_complexity([mk_transfer_input(1)]) == Dimensions(
            bandwidth=INPUT_BW + 69, db_read=1, db_write=1
        )

    def test_signature_count_from_declared_indices(self):
        assert get_input_complexity([mk_transfer_input(3)]).bandwidth == INPUT_BW + 3 * 69
        assert get_input_complexity([mk_transfer_input(0)]).bandwidth == INPUT_BW

    def test_stake_locked(self):
        assert get_input_complexity([mk_stake_input(2)]) == Dimensions(
            bandwidth=INPUT_BW + c.INTRINSIC_STAKEABLE_LOCKED_INPUT_BANDWIDTH + 2 * 69,
            db_read=1,
            db_write=1,
        )

    def test_additive(self):
        a = [mk_transfer_input(1), mk_stake_input(1)]
        b = [mk_transfer_input(2)]
        assert get_input_complexity(a + b) == get_input_complexity(a) + get_input_complexity(b)

    def test_db_costs_per_input(self):
        complexity = get_input_complexity([mk_transfer_input(1) for _ in range(4)])
        assert complexity.db_read == 4
        assert complexity.db_write == 4

    def test_many_inputs(self):
        complexity = get_input_complexity([mk_transfer_input(1) for _ in range(5_000)])
        assert complexity.bandwidth == 5_000 * (INPUT_BW + 69)


class TestOwnerSignerAuth:
    """Test owner, signer and authorization complexity."""

    def test_owner_complexity(self):
        assert get_owner_complexity(mk_owners(2)) == Dimensions(bandwidth=2 * 20 + 16)

    def test_owner_complexity_no_addresses(self):
        assert get_owner_complexity(OutputOwners()) == Dimensions(bandwidth=16)

    def test_empty_signer(self):
        assert get_signer_complexity(SignerEmpty()) == Dimensions.zero()

    def test_proof_of_possession_signer(self):
        assert get_signer_complexity(mk_signer()) == Dimensions(bandwidth=144)

    def test_auth_complexity(self):
        assert get_auth_complexity(mk_auth(1)) == Dimensions(bandwidth=69 + 8)
        assert get_auth_complexity(mk_auth(3)) == Dimensions(bandwidth=3 * 69 + 8)
        assert get_auth_complexity(mk_auth(0)) == Dimensions(bandwidth=8)

    @pytest.mark.parametrize("auth", [
        None,
        OutputOwners(),
        TransferInput(amount=1, sig_indices=[0]),
        {"sigIndices": [0]},
        [0, 1],
    ])
    def test_auth_rejects_wrong_shape(self, auth):
        with pytest.raises(UnsupportedAuthError) as exc_info:
            get_auth_complexity(auth)
        assert "Input" in exc_info.value.message
        assert exc_info.value.details["expected"] == "secp256k1fx.Input"


class TestBaseTxComplexity:
    """Test the common envelope."""

    def test_empty_envelope(self):
        assert get_base_tx_complexity(mk_base_tx()) == Dimensions.zero()

    def test_memo_adds_bandwidth_only(self):
        base = mk_base_tx(outputs=[mk_transfer_output(1)], inputs=[mk_transfer_input(1)])
        with_memo = mk_base_tx(outputs=[mk_transfer_output(1)], inputs=[mk_transfer_input(1)], memo=b"hello")

        diff_bw = get_base_tx_complexity(with_memo).bandwidth - get_base_tx_complexity(base).bandwidth
        assert diff_bw == 5
        assert get_base_tx_complexity(with_memo).db_read == get_base_tx_complexity(base).db_read
        assert get_base_tx_complexity(with_memo).db_write == get_base_tx_complexity(base).db_write

    def test_hex_memo_priced_by_decoded_length(self):
        tx = parse_transaction({"type": "pvm.BaseTx", "baseTx": {"memo": "0x0102"}})
        assert get_tx_complexity(tx).bandwidth == c.INTRINSIC_BASE_TX_COMPLEXITIES.bandwidth + 2

    def test_text_memo_priced_by_utf8_length(self):
        tx = parse_transaction({"type": "pvm.BaseTx", "baseTx": {"memo": "héllo"}})
        assert get_tx_complexity(tx).bandwidth == c.INTRINSIC_BASE_TX_COMPLEXITIES.bandwidth + 6

    def test_outputs_plus_inputs(self):
        outputs = [mk_transfer_output(2)]
        inputs = [mk_stake_input(1)]
        assert get_base_tx_complexity(mk_base_tx(outputs, inputs)) == (
            get_output_complexity(outputs) + get_input_complexity(inputs)
        )


class TestPerKindComplexity:
    """Test every transaction variant end to end."""

    def test_base_tx_end_to_end(self, simple_base_tx):
        expected = add_dimensions(
            c.INTRINSIC_BASE_TX_COMPLEXITIES,
            Dimensions(
                bandwidth=c.INTRINSIC_INPUT_BANDWIDTH
                + c.INTRINSIC_SECP256K1_FX_TRANSFERABLE_INPUT_BANDWIDTH
                + 1 * c.INTRINSIC_SECP256K1_FX_SIGNATURE_BANDWIDTH,
                db_read=c.INTRINSIC_INPUT_DB_READ,
                db_write=c.INTRINSIC_INPUT_DB_WRITE,
            ),
            Dimensions(
                bandwidth=c.INTRINSIC_OUTPUT_BANDWIDTH
                + c.INTRINSIC_SECP256K1_FX_OUTPUT_BANDWIDTH
                + 1 * c.SHORT_ID_LEN,
                db_write=c.INTRINSIC_OUTPUT_DB_WRITE,
            ),
        )
        assert get_tx_complexity(simple_base_tx) == expected
        assert get_tx_complexity(simple_base_tx) == Dimensions(299, 1, 2, 0)

    @pytest.mark.parametrize("tx_type,expected", [
        # 154 + signer 144 + stake 92 + two owners 36
        (TransactionType.ADD_PERMISSIONLESS_VALIDATOR, (462, 1, 2, 0)),
        # 142 + owner 36 + stake 80
        (TransactionType.ADD_PERMISSIONLESS_DELEGATOR, (258, 1, 2, 0)),
        # 142 + auth with two signatures 146
        (TransactionType.ADD_SUBNET_VALIDATOR, (288, 2, 1, 0)),
        # 140 + dynamic 165 + auth 77
        (TransactionType.CREATE_CHAIN, (382, 1, 1, 0)),
        # 62 + owners with two addresses 56
        (TransactionType.CREATE_SUBNET, (118, 0, 1, 0)),
        # 94 + output 80
        (TransactionType.EXPORT, (174, 0, 1, 0)),
        # 94 + input 161
        (TransactionType.IMPORT, (255, 1, 1, 0)),
        # 118 + auth 77
        (TransactionType.REMOVE_SUBNET_VALIDATOR, (195, 1, 1, 0)),
        # 102 + auth 77 + owner 36
        (TransactionType.TRANSFER_SUBNET_OWNERSHIP, (215, 1, 1, 0)),
        (TransactionType.BASE, (58, 0, 0, 0)),
    ])
    def test_minimal_transactions(self, tx_type, expected):
        assert get_tx_complexity(mk_tx(tx_type)).to_tuple() == expected

    def test_validator_with_empty_signer(self):
        with_pop = get_tx_complexity(mk_tx(TransactionType.ADD_PERMISSIONLESS_VALIDATOR))
        without_pop = get_tx_complexity(
            mk_tx(TransactionType.ADD_PERMISSIONLESS_VALIDATOR, signer=SignerEmpty())
        )
        assert with_pop.bandwidth - without_pop.bandwidth == 144

    def test_create_chain_dynamic_bandwidth(self):
        auth = mk_auth(1)
        base = mk_base_tx(outputs=[mk_transfer_output(1)], inputs=[mk_transfer_input(2)])
        tx = mk_tx(
            TransactionType.CREATE_CHAIN,
            base_tx=base,
            fx_ids=[mk_id(1), mk_id(2)],
            chain_name="x",
            genesis_data=b"\x01" * 100,
            subnet_auth=auth,
        )

        static = add_dimensions(
            c.INTRINSIC_CREATE_CHAIN_TX_COMPLEXITIES,
            get_base_tx_complexity(base),
            get_auth_complexity(auth),
        )
        dynamic = get_tx_complexity(tx).bandwidth - static.bandwidth
        assert dynamic == 2 * c.ID_LEN + 1 + 100

    def test_create_chain_name_measured_in_bytes(self):
        ascii_tx = mk_tx(TransactionType.CREATE_CHAIN, chain_name="ab")
        utf8_tx = mk_tx(TransactionType.CREATE_CHAIN, chain_name="éé")
        assert get_tx_complexity(utf8_tx).bandwidth - get_tx_complexity(ascii_tx).bandwidth == 2

    def test_envelope_counted_for_every_kind(self, all_transactions):
        base = mk_base_tx(outputs=[mk_transfer_output(1)], inputs=[mk_transfer_input(1)], memo=b"abc")
        envelope = get_base_tx_complexity(base)
        for tx_type, tx in all_transactions.items():
            loaded = mk_tx(tx_type, base_tx=base)
            assert get_tx_complexity(loaded) == get_tx_complexity(tx) + envelope, tx_type

    def test_compute_is_zero_for_every_kind(self, all_transactions):
        for tx in all_transactions.values():
            assert get_tx_complexity(tx).compute == 0

    @pytest.mark.parametrize("tx_type", list(TransactionType))
    def test_monotonic_in_outputs(self, tx_type):
        before = get_tx_complexity(mk_tx(tx_type))
        for extra in (mk_transfer_output(1), mk_stake_output(3), mk_mint_output(1)):
            after = get_tx_complexity(mk_tx(tx_type, base_tx=mk_base_tx(outputs=[extra])))
            assert all(a >= b for a, b in zip(after, before))

    def test_export_counts_exported_outputs(self):
        one = get_tx_complexity(mk_tx(TransactionType.EXPORT, outs=[mk_transfer_output(1)]))
        two = get_tx_complexity(
            mk_tx(TransactionType.EXPORT, outs=[mk_transfer_output(1), mk_stake_output(1)])
        )
        assert two.bandwidth - one.bandwidth == OUTPUT_BW + 12 + 20
        assert two.db_write - one.db_write == 1

    def test_import_counts_imported_inputs(self):
        tx = mk_tx(TransactionType.IMPORT, ins=[mk_transfer_input(1), mk_transfer_input(2)])
        assert get_tx_complexity(tx) == add_dimensions(
            c.INTRINSIC_IMPORT_TX_COMPLEXITIES,
            get_input_complexity([mk_transfer_input(1), mk_transfer_input(2)]),
        )

    def test_subnet_auth_from_dict(self):
        tx = mk_tx(
            TransactionType.REMOVE_SUBNET_VALIDATOR,
            subnet_auth={"type": "secp256k1fx.Input", "sigIndices": [0, 1]},
        )
        assert get_tx_complexity(tx).bandwidth == 118 + 2 * 69 + 8

    @pytest.mark.parametrize("tx_type", [
        TransactionType.ADD_SUBNET_VALIDATOR,
        TransactionType.CREATE_CHAIN,
        TransactionType.REMOVE_SUBNET_VALIDATOR,
        TransactionType.TRANSFER_SUBNET_OWNERSHIP,
    ])
    def test_wrong_auth_shape_fails_whole_transaction(self, tx_type):
        tx = mk_tx(tx_type, subnet_auth=mk_owners(1))
        with pytest.raises(UnsupportedAuthError):
            get_tx_complexity(tx)


class TestCompositionOrder:
    """Extra terms may be summed in any order."""

    def test_validator_terms_commute(self):
        tx = mk_tx(
            TransactionType.ADD_PERMISSIONLESS_VALIDATOR,
            base_tx=mk_base_tx(outputs=[mk_transfer_output(2)], inputs=[mk_stake_input(1)]),
        )
        terms = [
            c.INTRINSIC_ADD_PERMISSIONLESS_VALIDATOR_TX_COMPLEXITIES,
            get_base_tx_complexity(tx.base_tx),
            get_signer_complexity(tx.signer),
            get_output_complexity(tx.stake),
            get_owner_complexity(tx.validator_rewards_owner),
            get_owner_complexity(tx.delegator_rewards_owner),
        ]
        expected = get_tx_complexity(tx)
        for perm in itertools.permutations(terms):
            assert add_dimensions(*perm) == expected


class TestDispatcher:
    """Test routing and rejection of unknown variants."""

    def test_every_type_has_a_composer(self):
        assert set(TX_COMPLEXITY_COMPOSERS) == set(TransactionType)

    def test_defined_for_every_known_variant(self, all_transactions):
        assert set(all_transactions) == set(TransactionType)
        for tx in all_transactions.values():
            assert isinstance(get_tx_complexity(tx), Dimensions)

    def test_unknown_type_tag(self):
        tx = PvmTransaction(type="pvm.AdvanceTimeTx")
        with pytest.raises(UnsupportedTransactionError) as exc_info:
            get_tx_complexity(tx)
        assert exc_info.value.details["type"] == "pvm.AdvanceTimeTx"

    @pytest.mark.parametrize("value", [None, object(), {"type": "pvm.BaseTx"}, "pvm.BaseTx"])
    def test_unclassifiable_values(self, value):
        with pytest.raises(UnsupportedTransactionError):
            get_tx_complexity(value)

    def test_tag_and_model_must_agree(self):
        mislabeled = PvmBaseTx.model_construct(type=TransactionType.EXPORT.value, base_tx=mk_base_tx())
        with pytest.raises(UnsupportedTransactionError):
            get_tx_complexity(mislabeled)

    def test_logs_complexity(self, simple_base_tx, caplog):
        with caplog.at_level(logging.DEBUG, logger="pvm_client.tx.complexity"):
            get_tx_complexity(simple_base_tx)
        assert "pvm.BaseTx" in caplog.text

    def test_deterministic(self, all_transactions):
        for tx in all_transactions.values():
            assert get_tx_complexity(tx) == get_tx_complexity(tx)
