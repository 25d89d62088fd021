"""High-level explain API: validate, fetch, resolve, aggregate, guess change."""

from __future__ import annotations

import re
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from typing import Optional

from loguru import logger

from tx_explainer.aggregator import build_details, choose_fee, sum_input_values, sum_output_values
from tx_explainer.api import LedgerClient
from tx_explainer.config import load_settings
from tx_explainer.errors import InvalidIdentifier
from tx_explainer.heuristics import guess_change_output_index
from tx_explainer.models import OutSpend, RawTransaction, TransactionSummary
from tx_explainer.resolver import resolve_inputs, resolve_outputs

TXID_PATTERN = re.compile(r"^[0-9a-fA-F]{64}$")
SAMPLE_LIMIT = 5


def validate_txid(candidate: Optional[str]) -> str:
    """
    Check that `candidate` is a 64-character hex transaction id.

    Surrounding whitespace is ignored; case is preserved.

    Raises:
        InvalidIdentifier: If the id has the wrong length or non-hex characters
    """
    txid = (candidate or "").strip()
    if not TXID_PATTERN.match(txid):
        raise InvalidIdentifier(candidate or "")
    return txid


def _fetch_transaction_bundle(
    client: LedgerClient, txid: str
) -> tuple[RawTransaction, str, list[OutSpend]]:
    """Fetch transaction, raw hex and outspends concurrently; the first failure wins."""
    executor = ThreadPoolExecutor(max_workers=3)
    try:
        tx_future = executor.submit(client.get_transaction, txid)
        hex_future = executor.submit(client.get_transaction_hex, txid)
        outspends_future = executor.submit(client.get_outspends, txid)

        wait([tx_future, hex_future, outspends_future], return_when=FIRST_EXCEPTION)
        for future in (tx_future, hex_future, outspends_future):
            if future.done() and future.exception() is not None:
                raise future.exception()

        return tx_future.result(), hex_future.result(), outspends_future.result()
    finally:
        executor.shutdown(wait=False, cancel_futures=True)


def explain_transaction(
    txid: str,
    client: Optional[LedgerClient] = None,
    max_workers: Optional[int] = None,
) -> TransactionSummary:
    """
    Explain a transaction end-to-end.

    Args:
        txid: Candidate transaction id (validated before any network access)
        client: Ledger client to use (default: one built from the environment)
        max_workers: Upper bound on concurrent ancestor fetches

    Returns:
        Fully assembled summary

    Raises:
        InvalidIdentifier: If `txid` is malformed
        UpstreamUnavailable: If the transaction, hex or outspends fetch fails
    """
    txid = validate_txid(txid)

    if client is None:
        client = LedgerClient()
    if max_workers is None:
        max_workers = load_settings().max_workers

    logger.info(f"Explaining transaction: {txid}")
    tx, raw_hex, outspends = _fetch_transaction_bundle(client, txid)

    inputs = resolve_inputs(client, tx.vin, max_workers=max_workers)
    outputs = resolve_outputs(tx.txid, tx.vout, outspends)

    total_input = sum_input_values(inputs)
    total_output = sum_output_values(tx.vout)
    all_resolved = all(inp.resolved and not inp.is_coinbase for inp in inputs)
    fee = choose_fee(tx.fee, total_input, total_output, all_inputs_resolved=all_resolved)

    change_output_index = guess_change_output_index(inputs, outputs)

    logger.info(f"Inputs: {len(inputs)}, Outputs: {len(outputs)}")
    logger.info(f"Total in: {total_input:,} sats, total out: {total_output:,} sats")
    logger.info(f"Fee: {fee:,} sats, likely change output: {change_output_index}")

    return TransactionSummary(
        txid=tx.txid,
        fee=fee,
        total_input=total_input,
        total_output=total_output,
        inputs=inputs,
        outputs=outputs,
        status=tx.status,
        details=build_details(tx),
        raw_hex=raw_hex,
        change_output_index=change_output_index,
    )


def list_sample_txids(
    client: Optional[LedgerClient] = None, limit: int = SAMPLE_LIMIT
) -> list[str]:
    """
    List up to `limit` recent unconfirmed transaction ids.

    Raises:
        UpstreamUnavailable: If the mempool listing cannot be fetched
    """
    if client is None:
        client = LedgerClient()

    return client.get_recent_txids(limit=max(0, min(limit, SAMPLE_LIMIT)))
