"""Bitcoin transaction explainer."""

__version__ = "0.1.0"

from tx_explainer.api import LedgerClient
from tx_explainer.errors import ExplainerError, InvalidIdentifier, UpstreamUnavailable
from tx_explainer.explainer import explain_transaction, list_sample_txids, validate_txid
from tx_explainer.heuristics import guess_change_output_index
from tx_explainer.models import (
    ResolvedInput,
    ResolvedOutput,
    TransactionSummary,
    TxDetails,
    TxStatus,
)
from tx_explainer.output import print_summary, save_summary, summary_to_json

__all__ = [
    "LedgerClient",
    "ExplainerError",
    "InvalidIdentifier",
    "UpstreamUnavailable",
    "ResolvedInput",
    "ResolvedOutput",
    "TransactionSummary",
    "TxDetails",
    "TxStatus",
    "explain_transaction",
    "list_sample_txids",
    "validate_txid",
    "guess_change_output_index",
    "summary_to_json",
    "print_summary",
    "save_summary",
]
