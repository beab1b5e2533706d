"""
Smoke test: the package and its public surface import cleanly.
"""

import importlib

import pytest


@pytest.mark.parametrize("module", [
    "pvm_client",
    "pvm_client.enums",
    "pvm_client.runtime",
    "pvm_client.runtime.errors",
    "pvm_client.transactions",
    "pvm_client.tx",
    "pvm_client.tx.constants",
    "pvm_client.tx.dimensions",
    "pvm_client.tx.complexity",
    "pvm_client.tx.fees",
    "pvm_client.tx.spend",
    "pvm_client.utils",
    "pvm_client.utils.locks",
])
def test_module_imports(module):
    assert importlib.import_module(module) is not None


def test_public_surface():
    import pvm_client

    for name in pvm_client.__all__:
        assert hasattr(pvm_client, name), name
    assert pvm_client.__version__ == "0.1.0"


def test_top_level_reexports():
    from pvm_client import Dimensions, TransactionType, get_tx_complexity, parse_transaction

    tx = parse_transaction({"type": TransactionType.BASE.value})
    assert get_tx_complexity(tx) == Dimensions(bandwidth=58)
