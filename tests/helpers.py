"""Esplora payload builders and an in-memory ledger client double."""

import threading
from typing import Optional

from tx_explainer.errors import UpstreamUnavailable
from tx_explainer.models import OutSpend, RawTransaction

TARGET_TXID = "a" * 64
ANCESTOR_1 = "b" * 64
ANCESTOR_2 = "c" * 64
COINBASE_PREV = "0" * 64


def make_tx(
    txid: str,
    vin: Optional[list[dict]] = None,
    vout: Optional[list[dict]] = None,
    fee: Optional[int] = None,
    confirmed: bool = True,
) -> dict:
    """Build an Esplora-shaped `/tx/{txid}` payload."""
    tx = {
        "txid": txid,
        "version": 2,
        "locktime": 0,
        "size": 223,
        "weight": 562,
        "vin": vin or [],
        "vout": vout or [],
        "status": (
            {
                "confirmed": True,
                "block_height": 100_000,
                "block_hash": "f" * 64,
                "block_time": 1_700_000_000,
            }
            if confirmed
            else {"confirmed": False}
        ),
    }
    if fee is not None:
        tx["fee"] = fee
    return tx


def make_vin(txid: str, vout: int, is_coinbase: bool = False) -> dict:
    return {"txid": txid, "vout": vout, "is_coinbase": is_coinbase, "sequence": 4294967293}


def make_vout(value: int, address: Optional[str] = None, script_type: str = "v0_p2wpkh") -> dict:
    out = {"value": value, "scriptpubkey_type": script_type, "scriptpubkey": "0014" + "00" * 20}
    if address is not None:
        out["scriptpubkey_address"] = address
    return out


class FakeLedgerClient:
    """
    In-memory LedgerClient double.

    Transactions are keyed by txid; ids listed in `failing` raise
    UpstreamUnavailable. Every call is recorded in `calls`.
    """

    def __init__(
        self,
        transactions: Optional[dict[str, dict]] = None,
        hexes: Optional[dict[str, str]] = None,
        outspends: Optional[dict[str, list[dict]]] = None,
        recent: Optional[list[dict]] = None,
        failing: Optional[set[str]] = None,
    ):
        self.transactions = transactions or {}
        self.hexes = hexes or {}
        self.outspends = outspends or {}
        self.recent = recent or []
        self.failing = failing or set()
        self.calls: list[tuple[str, str]] = []
        self._lock = threading.Lock()

    def _record(self, op: str, arg: str) -> None:
        with self._lock:
            self.calls.append((op, arg))

    def _check(self, path: str, key: str) -> None:
        if key in self.failing:
            raise UpstreamUnavailable(path, 503)

    def get_transaction(self, txid: str) -> RawTransaction:
        self._record("tx", txid)
        self._check(f"/tx/{txid}", txid)
        if txid not in self.transactions:
            raise UpstreamUnavailable(f"/tx/{txid}", 404)
        return RawTransaction.model_validate(self.transactions[txid])

    def get_transaction_hex(self, txid: str) -> str:
        self._record("hex", txid)
        self._check(f"/tx/{txid}/hex", f"{txid}/hex")
        return self.hexes.get(txid, "0200000001")

    def get_outspends(self, txid: str) -> list[OutSpend]:
        self._record("outspends", txid)
        self._check(f"/tx/{txid}/outspends", f"{txid}/outspends")
        return [OutSpend.model_validate(entry) for entry in self.outspends.get(txid, [])]

    def get_recent_txids(self, limit: Optional[int] = None) -> list[str]:
        self._record("recent", "")
        self._check("/mempool/recent", "recent")
        txids = [entry["txid"] for entry in self.recent]
        return txids[:limit] if limit is not None else txids

    def fetched(self, op: str) -> list[str]:
        return [arg for name, arg in self.calls if name == op]
