"""
Test bootstrap:
- Put src/ and tests/ on sys.path (collection-time safe)
- Provide shared fixtures for transactions and fee configuration
"""
import sys
import pathlib
import pytest

ROOT = pathlib.Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
TESTS = ROOT / "tests"

# Ensure src/ and the helpers package are importable at collect-time
for path in (SRC, TESTS):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))


@pytest.fixture
def simple_base_tx():
    """Base transfer spending one single-signature input into one single-address output."""
    from helpers import mk_base_tx, mk_transfer_input, mk_transfer_output, mk_tx
    from pvm_client.enums import TransactionType

    base = mk_base_tx(outputs=[mk_transfer_output(1)], inputs=[mk_transfer_input(1)])
    return mk_tx(TransactionType.BASE, base_tx=base)


@pytest.fixture
def all_transactions():
    """One minimal transaction of every supported variant, keyed by type."""
    from helpers import mk_tx
    from pvm_client.enums import TransactionType

    return {tx_type: mk_tx(tx_type) for tx_type in TransactionType}


@pytest.fixture
def fee_config():
    """Mainnet fee configuration."""
    from pvm_client.tx.fees import get_fee_config

    return get_fee_config("mainnet")
