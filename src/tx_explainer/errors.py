"""Failure conditions surfaced to callers of the explainer."""

from __future__ import annotations

from typing import Optional


class ExplainerError(Exception):
    """Base class for request-level failures. Carries an HTTP-style status code."""

    status_code: int = 500
    user_message: str = "Failed to explain transaction."


class InvalidIdentifier(ExplainerError):
    """The supplied transaction id is not 64 hexadecimal characters."""

    status_code = 400
    user_message = "Please provide a valid 64-character hex transaction id."

    def __init__(self, candidate: str):
        self.candidate = candidate
        super().__init__(f"Invalid transaction id: {candidate!r}")


class UpstreamUnavailable(ExplainerError):
    """An upstream read failed: non-success status, network error or unreadable payload."""

    status_code = 502
    user_message = "Failed to fetch or decode transaction from the upstream API."

    def __init__(self, path: str, upstream_status: Optional[int] = None, reason: str = ""):
        self.path = path
        self.upstream_status = upstream_status
        self.reason = reason

        detail = f"Upstream API error ({upstream_status}) for {path}"
        if reason:
            detail = f"{detail}: {reason}"
        super().__init__(detail)
