#!/usr/bin/env python3
"""
Register a coin directly in the database.

Usage:
  python scripts/add_coin.py --korean-name 비트코인 [--english-name Bitcoin] [--code KRW-BTC]
"""
from __future__ import annotations

import argparse
import sys

from coinboard.domain.entities import CoinData
from coinboard.services.coin_service import CoinService


def main() -> None:
    ap = argparse.ArgumentParser(description="Register a coin")
    ap.add_argument("--korean-name", required=True, help="Korean display name (e.g. 비트코인)")
    ap.add_argument("--english-name", help="English name (e.g. Bitcoin)")
    ap.add_argument("--code", help="Market code (e.g. KRW-BTC)")
    args = ap.parse_args()

    korean_name = (args.korean_name or "").strip()
    if not korean_name:
        raise SystemExit("Korean name must not be empty")
    code = (args.code or "").strip().upper() or None

    coin = CoinService().create(
        CoinData(korean_name=korean_name, english_name=(args.english_name or "").strip() or None, code=code)
    )
    print("OK: coin registered")
    print(f"  ID: {coin.id}")
    print(f"  Korean name: {coin.korean_name}")
    if coin.english_name:
        print(f"  English name: {coin.english_name}")
    if coin.code:
        print(f"  Code: {coin.code}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
