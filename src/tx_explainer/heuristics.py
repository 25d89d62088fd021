"""Change output detection heuristic."""

from typing import Optional

from loguru import logger

from tx_explainer.models import ResolvedInput, ResolvedOutput

DUST_THRESHOLD = 1000  # sats; outputs at or below are treated as dust


def guess_change_output_index(
    inputs: list[ResolvedInput], outputs: list[ResolvedOutput]
) -> Optional[int]:
    """
    Guess which output returns change to the sender. Best effort only.

    Steps:
    1. Fewer than two outputs: no guess.
    2. Candidates are outputs paying an address that also appears among the
       inputs. If none do, every output is a candidate.
    3. Prefer candidates above DUST_THRESHOLD, unless all of them are dust.
    4. Pick the smallest value; ties go to the earliest output.

    The result is a heuristic, not a protocol fact: wallets that send change
    to fresh addresses or pay out the smaller amount will be misread.

    Returns:
        Index into `outputs`, or None when there is no defensible guess
    """
    if len(outputs) < 2:
        return None

    input_addresses = {inp.address for inp in inputs if inp.address}

    indexed = list(enumerate(outputs))
    candidates = [
        (idx, out) for idx, out in indexed if out.address and out.address in input_addresses
    ]
    if candidates:
        logger.debug(f"{len(candidates)} output(s) return to an input address")
    else:
        candidates = indexed

    non_dust = [(idx, out) for idx, out in candidates if out.value > DUST_THRESHOLD]
    base = non_dust or candidates

    if not base:
        return None

    # min() keeps the first of equal values, preserving output order on ties
    change_idx, _ = min(base, key=lambda pair: pair[1].value)
    return change_idx
