"""Pydantic models for upstream transaction data and the explained result."""

import math
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Upstream records: field names follow the Esplora JSON keys, unknown keys are ignored.


class RawInput(BaseModel):
    """Transaction input as returned by the upstream API."""

    txid: str
    vout: int
    is_coinbase: bool = False


class RawOutput(BaseModel):
    """Transaction output as returned by the upstream API."""

    value: int = Field(ge=0)  # satoshis
    scriptpubkey_address: Optional[str] = None
    scriptpubkey_type: Optional[str] = None


class TxStatus(BaseModel):
    """Confirmation status of a transaction."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    confirmed: bool = False
    block_height: Optional[int] = None
    block_hash: Optional[str] = None
    block_time: Optional[int] = None


class RawTransaction(BaseModel):
    """Transaction record from `/tx/{txid}`."""

    txid: str
    fee: Optional[int] = None  # declared by upstream, not verified
    version: int
    locktime: int
    size: int
    weight: int
    vin: list[RawInput]
    vout: list[RawOutput]
    status: TxStatus = Field(default_factory=TxStatus)


class OutSpend(BaseModel):
    """Spend status of one output, from `/tx/{txid}/outspends`."""

    spent: bool = False


# Result models: immutable, serialised with camelCase keys.


class _ResultModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class ResolvedInput(_ResultModel):
    """Input enriched with the value and address of the output it spends."""

    txid: str
    vout: int
    value: int = 0  # satoshis, 0 when unresolved or coinbase
    address: Optional[str] = None
    script_type: Optional[str] = None
    is_coinbase: bool = False
    resolved: bool = True


class ResolvedOutput(_ResultModel):
    """Output enriched with its own index and spend status."""

    txid: str
    vout: int
    value: int  # satoshis
    address: Optional[str] = None
    script_type: Optional[str] = None
    spent: bool = False


class TxDetails(_ResultModel):
    """Structural fields copied from the raw transaction."""

    version: int
    locktime: int
    size: int
    weight: int
    vin_count: int
    vout_count: int

    @property
    def vsize(self) -> int:
        """Virtual size in vbytes."""
        return math.ceil(self.weight / 4)


class TransactionSummary(_ResultModel):
    """Complete explanation of one transaction."""

    txid: str
    fee: int
    total_input: int
    total_output: int
    inputs: tuple[ResolvedInput, ...]
    outputs: tuple[ResolvedOutput, ...]
    status: TxStatus
    details: TxDetails
    raw_hex: str
    # Best-effort guess, see heuristics.guess_change_output_index
    change_output_index: Optional[int] = None

    @property
    def change_output(self) -> Optional[ResolvedOutput]:
        if self.change_output_index is None:
            return None
        return self.outputs[self.change_output_index]

    @property
    def unresolved_inputs(self) -> list[int]:
        """Indices of inputs whose previous output could not be read."""
        return [idx for idx, inp in enumerate(self.inputs) if not inp.resolved]

    @property
    def fee_rate(self) -> float:
        """Fee rate in sat/vB (display only)."""
        if self.details.vsize == 0:
            return 0.0
        return self.fee / self.details.vsize
