"""Value totals, fee selection and structural details."""

from typing import Optional

from loguru import logger

from tx_explainer.models import RawOutput, RawTransaction, ResolvedInput, TxDetails


def sum_input_values(inputs: list[ResolvedInput]) -> int:
    """Total input value in satoshis. Unresolved and coinbase inputs add 0."""
    return sum(inp.value for inp in inputs)


def sum_output_values(outputs: list[RawOutput]) -> int:
    """Total output value in satoshis."""
    return sum(out.value for out in outputs)


def choose_fee(
    declared_fee: Optional[int],
    total_input: int,
    total_output: int,
    all_inputs_resolved: bool = True,
) -> int:
    """
    Pick the fee to report.

    The upstream-declared fee is trusted as-is when present and non-negative;
    otherwise the fee is total_input - total_output, floored at 0. A declared
    fee that disagrees with the arithmetic difference is only logged.
    """
    computed = max(total_input - total_output, 0)

    if declared_fee is None or declared_fee < 0:
        return computed

    if all_inputs_resolved and declared_fee != total_input - total_output:
        logger.warning(
            f"Declared fee {declared_fee:,} sats differs from inputs - outputs "
            f"({total_input - total_output:,} sats); using declared fee"
        )

    return declared_fee


def build_details(tx: RawTransaction) -> TxDetails:
    return TxDetails(
        version=tx.version,
        locktime=tx.locktime,
        size=tx.size,
        weight=tx.weight,
        vin_count=len(tx.vin),
        vout_count=len(tx.vout),
    )
