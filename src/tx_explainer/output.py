"""Output utilities: JSON response and human-readable summary."""

import json
from pathlib import Path

from loguru import logger

from tx_explainer.models import TransactionSummary

SATS_PER_BTC = 100_000_000


def sats_to_btc(sats: int) -> str:
    """Format a satoshi amount as BTC with 8 decimals."""
    return f"{sats / SATS_PER_BTC:.8f}"


def summary_to_json(summary: TransactionSummary) -> dict:
    """Convert summary to the camelCase response consumed by the presentation layer."""
    return summary.model_dump(mode="json", by_alias=True)


def print_summary(summary: TransactionSummary) -> None:
    """Log a readable explanation of the transaction."""

    logger.info("=" * 70)
    logger.info(f"TRANSACTION {summary.txid}")
    logger.info("=" * 70)

    status = summary.status
    if status.confirmed:
        logger.info(f"Confirmed in block {status.block_height} ({status.block_hash})")
    else:
        logger.info("Unconfirmed (in mempool)")

    details = summary.details
    logger.info(
        f"Version {details.version}, locktime {details.locktime}, "
        f"{details.size} bytes, {details.weight} WU ({details.vsize} vB)"
    )

    logger.info(f"\nInputs ({details.vin_count}):")
    for idx, inp in enumerate(summary.inputs):
        if inp.is_coinbase:
            logger.info(f"  #{idx}  coinbase (new coins)")
        elif not inp.resolved:
            logger.warning(f"  #{idx}  {inp.txid}:{inp.vout}  unresolved, counted as 0 BTC")
        else:
            logger.info(
                f"  #{idx}  {sats_to_btc(inp.value)} BTC  {inp.address or 'unknown address'}"
                f"  [{inp.script_type or '?'}]"
            )

    logger.info(f"\nOutputs ({details.vout_count}):")
    for idx, out in enumerate(summary.outputs):
        tags = []
        if idx == summary.change_output_index:
            tags.append("likely change")
        tags.append("spent" if out.spent else "unspent")
        logger.info(
            f"  #{idx}  {sats_to_btc(out.value)} BTC  {out.address or 'no address'}"
            f"  [{out.script_type or '?'}]  ({', '.join(tags)})"
        )

    logger.info("")
    logger.info(f"Total input:  {sats_to_btc(summary.total_input)} BTC")
    logger.info(f"Total output: {sats_to_btc(summary.total_output)} BTC")
    logger.info(
        f"Fee:          {sats_to_btc(summary.fee)} BTC "
        f"({summary.fee:,} sats, ~{summary.fee_rate:.1f} sat/vB)"
    )

    if summary.change_output is not None:
        logger.info(
            f"Likely change: output #{summary.change_output_index} "
            f"(heuristic guess, not a protocol fact)"
        )
    else:
        logger.info("Likely change: no defensible guess")

    if summary.unresolved_inputs:
        logger.warning(
            f"Inputs {summary.unresolved_inputs} could not be resolved; totals may be understated"
        )


def save_summary(summary: TransactionSummary, output_path: Path) -> None:
    """Save the JSON response to a file."""

    data = summary_to_json(summary)

    output_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    logger.info(f"✓ Saved explanation to {output_path}")
