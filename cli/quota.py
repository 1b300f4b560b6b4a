#!/usr/bin/env python3
"""
CLI for inspecting story credits and redeeming promo codes.

Usage:
    python cli/quota.py status
    python cli/quota.py promo ankara
"""

import argparse
import sys
from datetime import datetime
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from masal.config import STORAGE_PATH  # noqa: E402
from masal.core.quota import QuotaLedger  # noqa: E402
from masal.core.storage import JsonFileStore  # noqa: E402


def format_reset_time(reset_time) -> str:
    if reset_time is None:
        return "not running"
    return datetime.fromtimestamp(reset_time / 1000).strftime("%Y-%m-%d %H:%M:%S")


def main():
    parser = argparse.ArgumentParser(description="Story credits and promo codes")
    parser.add_argument(
        "--storage",
        type=Path,
        default=STORAGE_PATH,
        help="Local storage file holding quota and promo state",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("status", help="Show remaining credits")
    promo_parser = subparsers.add_parser("promo", help="Redeem a promo code")
    promo_parser.add_argument("code", type=str)

    args = parser.parse_args()
    ledger = QuotaLedger(JsonFileStore(args.storage))

    if args.command == "status":
        status = ledger.check_quota()
        print(f"Remaining credits: {status.remaining}")
        print(f"Reset: {format_reset_time(status.reset_time)}")
        print(f"Promo code used: {'yes' if ledger.promo_redeemed() else 'no'}")
        return

    result = ledger.apply_promo(args.code)
    print(result.message)
    print(f"Remaining credits: {result.remaining}")
    if not result.success:
        sys.exit(1)


if __name__ == "__main__":
    main()
