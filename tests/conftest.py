"""Pytest configuration and shared fixtures."""

import pytest
from helpers import (
    ANCESTOR_1,
    ANCESTOR_2,
    COINBASE_PREV,
    TARGET_TXID,
    FakeLedgerClient,
    make_tx,
    make_vin,
    make_vout,
)
from loguru import logger


@pytest.fixture
def two_in_two_out_client():
    """
    Two inputs (50,000 and 30,000 sats) and two outputs.

    Output 0 (70,000 sats) pays addr_A, which also funds input 0.
    Output 1 (9,000 sats) pays addr_B, which appears on no input.
    """
    transactions = {
        ANCESTOR_1: make_tx(ANCESTOR_1, vout=[make_vout(1_000), make_vout(50_000, "addr_A")]),
        ANCESTOR_2: make_tx(ANCESTOR_2, vout=[make_vout(30_000, "addr_C")]),
        TARGET_TXID: make_tx(
            TARGET_TXID,
            vin=[make_vin(ANCESTOR_1, 1), make_vin(ANCESTOR_2, 0)],
            vout=[make_vout(70_000, "addr_A"), make_vout(9_000, "addr_B")],
        ),
    }
    return FakeLedgerClient(
        transactions=transactions,
        hexes={TARGET_TXID: "02000000000102deadbeef"},
        outspends={TARGET_TXID: [{"spent": True}, {"spent": False}]},
    )


@pytest.fixture
def coinbase_client():
    """Coinbase transaction: one coinbase input, reward output plus a zero-value commitment."""
    transactions = {
        TARGET_TXID: make_tx(
            TARGET_TXID,
            vin=[make_vin(COINBASE_PREV, 4294967295, is_coinbase=True)],
            vout=[
                make_vout(312_500_000, "miner_addr"),
                make_vout(0, None, script_type="op_return"),
            ],
            fee=0,
        ),
    }
    return FakeLedgerClient(
        transactions=transactions,
        outspends={TARGET_TXID: [{"spent": False}, {"spent": False}]},
    )


@pytest.fixture
def warning_messages():
    """Collect messages logged at WARNING or above while the test runs."""
    messages = []
    handler_id = logger.add(
        lambda message: messages.append(message.record["message"]), level="WARNING"
    )
    yield messages
    logger.remove(handler_id)
