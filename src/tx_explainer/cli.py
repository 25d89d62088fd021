"""CLI entry point for the transaction explainer."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from tx_explainer.api import LedgerClient
from tx_explainer.errors import ExplainerError, InvalidIdentifier
from tx_explainer.explainer import explain_transaction, list_sample_txids
from tx_explainer.output import print_summary, save_summary, summary_to_json

EXIT_OK = 0
EXIT_UPSTREAM = 1
EXIT_INVALID = 2


def configure_logger(verbose: bool = False) -> None:
    """Configure loguru logger for CLI output."""

    logger.remove()
    logger.add(
        sys.stderr,
        format=(
            "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>"
        ),
        level="DEBUG" if verbose else "INFO",
    )


def run_samples(client: LedgerClient) -> int:
    """Print recent mempool transaction ids, one per line."""

    try:
        txids = list_sample_txids(client)
    except ExplainerError as exc:
        logger.error(f"{exc.user_message} ({exc})")
        return EXIT_UPSTREAM

    if not txids:
        logger.warning("Mempool is empty, no sample transactions available")
    for txid in txids:
        print(txid)
    return EXIT_OK


def run_explainer(
    txid: str, client: LedgerClient, as_json: bool, output_path: Optional[Path]
) -> int:
    """Explain one transaction and report it."""

    try:
        summary = explain_transaction(txid, client=client)
    except InvalidIdentifier as exc:
        logger.error(exc.user_message)
        return EXIT_INVALID
    except ExplainerError as exc:
        logger.error(exc.user_message)
        logger.debug(f"Upstream detail: {exc}")
        return EXIT_UPSTREAM

    if as_json:
        print(json.dumps(summary_to_json(summary), indent=2))
    else:
        print_summary(summary)

    if output_path is not None:
        save_summary(summary, output_path)

    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""

    import argparse

    parser = argparse.ArgumentParser(
        prog="tx-explain",
        description="Explain a Bitcoin transaction: inputs, outputs, fee and likely change",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  tx-explain --samples
  tx-explain <txid>
  tx-explain <txid> --json --api-url https://mempool.space/api
        """,
    )
    parser.add_argument("txid", nargs="?", help="Transaction ID (64 hex characters)")
    parser.add_argument(
        "--samples",
        action="store_true",
        help="List up to 5 recent mempool transaction ids instead",
    )
    parser.add_argument("--json", action="store_true", help="Print the JSON response to stdout")
    parser.add_argument(
        "--output",
        type=Path,
        metavar="PATH",
        help="Also save the JSON response to PATH",
    )
    parser.add_argument(
        "--api-url",
        metavar="URL",
        help="Esplora-compatible API base URL (default: $BITCOIN_API_BASE)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)

    configure_logger(args.verbose)

    if not args.samples and args.txid is None:
        parser.error("a transaction id is required unless --samples is given")

    client = LedgerClient(base_url=args.api_url)

    if args.samples:
        return run_samples(client)

    return run_explainer(args.txid, client, args.json, args.output)


if __name__ == "__main__":
    sys.exit(main())
