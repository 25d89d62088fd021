"""Resolve inputs against the outputs they spend, and index outputs."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Protocol

from loguru import logger

from tx_explainer.config import load_settings
from tx_explainer.errors import UpstreamUnavailable
from tx_explainer.models import (
    OutSpend,
    RawInput,
    RawOutput,
    RawTransaction,
    ResolvedInput,
    ResolvedOutput,
)


class AncestorSource(Protocol):
    def get_transaction(self, txid: str) -> RawTransaction: ...


def _unresolved(vin: RawInput) -> ResolvedInput:
    return ResolvedInput(txid=vin.txid, vout=vin.vout, resolved=False)


def resolve_input(client: AncestorSource, vin: RawInput) -> ResolvedInput:
    """
    Resolve one input by reading the referenced output of its ancestor.

    Coinbase inputs are returned without any fetch. A failed ancestor fetch or
    an out-of-range output index degrades to a zero-value input instead of
    raising, so one bad ancestor cannot fail the whole explanation.
    """
    if vin.is_coinbase:
        return ResolvedInput(txid=vin.txid, vout=vin.vout, is_coinbase=True)

    try:
        ancestor = client.get_transaction(vin.txid)
    except UpstreamUnavailable as exc:
        logger.warning(f"Could not resolve input {vin.txid}:{vin.vout}: {exc}")
        return _unresolved(vin)

    if not 0 <= vin.vout < len(ancestor.vout):
        logger.warning(
            f"Ancestor {vin.txid} has {len(ancestor.vout)} outputs, "
            f"input references index {vin.vout}"
        )
        return _unresolved(vin)

    prevout = ancestor.vout[vin.vout]
    return ResolvedInput(
        txid=vin.txid,
        vout=vin.vout,
        value=prevout.value,
        address=prevout.scriptpubkey_address,
        script_type=prevout.scriptpubkey_type,
    )


def resolve_inputs(
    client: AncestorSource,
    vin: list[RawInput],
    max_workers: Optional[int] = None,
) -> list[ResolvedInput]:
    """
    Resolve all inputs concurrently, one ancestor fetch per non-coinbase input.

    Ancestors are not deduplicated. The result is index-aligned with `vin`.

    Args:
        client: Anything providing `get_transaction`
        vin: Raw inputs in protocol order
        max_workers: Upper bound on concurrent fetches (default from settings)

    Returns:
        Resolved inputs in the same order as `vin`
    """
    if not vin:
        return []

    if max_workers is None:
        max_workers = load_settings().max_workers

    to_fetch = sum(1 for inp in vin if not inp.is_coinbase)
    logger.info(f"Resolving {len(vin)} input(s), {to_fetch} ancestor fetch(es)")

    workers = max(1, min(max_workers, to_fetch))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        # map preserves input order regardless of completion order
        resolved = list(executor.map(lambda inp: resolve_input(client, inp), vin))

    unresolved = sum(1 for inp in resolved if not inp.resolved)
    if unresolved:
        logger.warning(f"{unresolved} input(s) could not be resolved and count as 0 sats")

    return resolved


def resolve_outputs(
    txid: str, vout: list[RawOutput], outspends: list[OutSpend]
) -> list[ResolvedOutput]:
    """Attach each output's own index and spend flag (missing status means unspent)."""
    return [
        ResolvedOutput(
            txid=txid,
            vout=idx,
            value=out.value,
            address=out.scriptpubkey_address,
            script_type=out.scriptpubkey_type,
            spent=outspends[idx].spent if idx < len(outspends) else False,
        )
        for idx, out in enumerate(vout)
    ]
