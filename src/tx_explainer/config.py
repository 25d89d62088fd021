"""Environment-driven settings for the ledger client."""

from __future__ import annotations

import os

from pydantic import BaseModel, Field

DEFAULT_API_BASE = "https://mempool.space/testnet4/api"
DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_WORKERS = 8


class Settings(BaseModel):
    """Runtime settings, read fresh for every request."""

    api_base: str = DEFAULT_API_BASE
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    max_workers: int = Field(default=DEFAULT_MAX_WORKERS, ge=1)


def load_settings() -> Settings:
    """
    Build settings from the environment.

    Recognised variables:
        BITCOIN_API_BASE: Esplora-compatible base URL
        TX_EXPLAINER_TIMEOUT: per-request timeout in seconds
        TX_EXPLAINER_MAX_WORKERS: upper bound on concurrent upstream reads

    Raises:
        ValueError: If a variable is set to an invalid value
    """
    api_base = (os.getenv("BITCOIN_API_BASE") or "").strip() or DEFAULT_API_BASE
    timeout = (os.getenv("TX_EXPLAINER_TIMEOUT") or "").strip() or DEFAULT_TIMEOUT
    max_workers = (os.getenv("TX_EXPLAINER_MAX_WORKERS") or "").strip() or DEFAULT_MAX_WORKERS

    return Settings(
        api_base=api_base.rstrip("/"),
        timeout=timeout,
        max_workers=max_workers,
    )
