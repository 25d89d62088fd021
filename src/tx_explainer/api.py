"""HTTP client for the Esplora-compatible ledger API."""

from __future__ import annotations

from typing import Any, Optional

import requests
from loguru import logger
from pydantic import TypeAdapter, ValidationError

from tx_explainer.config import load_settings
from tx_explainer.errors import UpstreamUnavailable
from tx_explainer.models import OutSpend, RawTransaction

_OUTSPENDS = TypeAdapter(list[OutSpend])


class LedgerClient:
    """
    Read-only client for an Esplora-compatible API.

    Every call is a live GET: there is no session, connection pool or cache,
    and nothing is retried. Any failure surfaces as `UpstreamUnavailable`.
    """

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        if base_url is None or timeout is None:
            settings = load_settings()
            base_url = base_url or settings.api_base
            timeout = timeout if timeout is not None else settings.timeout

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _get(self, path: str) -> requests.Response:
        url = f"{self.base_url}{path}"
        logger.debug(f"GET {url}")

        try:
            response = requests.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            logger.warning(f"Upstream returned {status} for {path}")
            raise UpstreamUnavailable(path, status) from exc
        except requests.RequestException as exc:
            logger.warning(f"Upstream request failed for {path}: {exc}")
            raise UpstreamUnavailable(path, reason=str(exc)) from exc

        return response

    def _get_json(self, path: str) -> tuple[Any, int]:
        response = self._get(path)
        try:
            return response.json(), response.status_code
        except ValueError as exc:
            logger.warning(f"Upstream returned invalid JSON for {path}")
            raise UpstreamUnavailable(path, response.status_code, "invalid JSON") from exc

    def get_transaction(self, txid: str) -> RawTransaction:
        """
        Fetch a transaction record.

        Args:
            txid: Transaction ID (hex string)

        Returns:
            Parsed transaction

        Raises:
            UpstreamUnavailable: If the fetch fails or the payload is malformed
        """
        path = f"/tx/{txid}"
        data, status = self._get_json(path)
        try:
            return RawTransaction.model_validate(data)
        except ValidationError as exc:
            logger.warning(f"Malformed transaction payload for {path}")
            raise UpstreamUnavailable(path, status, "malformed transaction") from exc

    def get_transaction_hex(self, txid: str) -> str:
        """Fetch the raw serialized transaction as hex text."""
        return self._get(f"/tx/{txid}/hex").text.strip()

    def get_outspends(self, txid: str) -> list[OutSpend]:
        """Fetch per-output spend status, aligned with the transaction outputs."""
        path = f"/tx/{txid}/outspends"
        data, status = self._get_json(path)
        try:
            return _OUTSPENDS.validate_python(data)
        except ValidationError as exc:
            logger.warning(f"Malformed outspends payload for {path}")
            raise UpstreamUnavailable(path, status, "malformed outspends") from exc

    def get_recent_txids(self, limit: Optional[int] = None) -> list[str]:
        """Fetch ids of the most recent mempool transactions, newest first."""
        path = "/mempool/recent"
        data, status = self._get_json(path)
        try:
            txids = [entry["txid"] for entry in data]
        except (TypeError, KeyError) as exc:
            raise UpstreamUnavailable(path, status, "malformed mempool listing") from exc

        if limit is not None:
            txids = txids[:limit]
        return txids
