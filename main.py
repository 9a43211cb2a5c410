"""Command line entry-point for the CryptoMarket client."""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Optional

from cryptomkt import Client, CryptoMktError, OrderType
from cryptomkt.config import load_settings
from cryptomkt.utils import configure_logging


LOGGER = logging.getLogger(__name__)


async def show_markets(client: Client, args: argparse.Namespace) -> list[dict[str, Any]]:
    """Last ticker of every market; markets without one are skipped."""
    rows: list[dict[str, Any]] = []
    for market in await client.get_markets():
        try:
            ticker = await market.get_current_ticker()
        except CryptoMktError as exc:
            LOGGER.warning("No ticker for %s: %s", market.name, exc)
            continue
        rows.append(ticker.model_dump())
    return rows


async def show_ticker(client: Client, args: argparse.Namespace) -> dict[str, Any]:
    ticker = await client.create_market(args.market).get_current_ticker()
    return ticker.model_dump()


async def show_book(client: Client, args: argparse.Namespace) -> list[dict[str, Any]]:
    market = client.create_market(args.market)
    orders = await market.get_orders_book(OrderType(args.side), page=args.page, limit=args.limit)
    return [order.model_dump() for order in orders]


async def show_balance(client: Client, args: argparse.Namespace) -> list[dict[str, Any]]:
    return [balance.model_dump() for balance in await client.get_balance()]


COMMANDS = {
    "markets": show_markets,
    "ticker": show_ticker,
    "book": show_book,
    "balance": show_balance,
}


async def run(args: argparse.Namespace) -> Any:
    settings = load_settings(args.env)
    async with Client.from_settings(settings) as client:
        return await COMMANDS[args.command](client, args)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Query the CryptoMarket REST API")
    parser.add_argument("--env", help="Path to .env file with CRYPTOMKT_* settings", default=None)
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("markets", help="Last ticker of every market")
    ticker = sub.add_parser("ticker", help="Current ticker of one market")
    ticker.add_argument("market")
    book = sub.add_parser("book", help="Order book page of one market")
    book.add_argument("market")
    book.add_argument("--side", choices=[t.value for t in OrderType], default=OrderType.BUY.value)
    book.add_argument("--page", type=int, default=0)
    book.add_argument("--limit", type=int, default=20)
    sub.add_parser("balance", help="Wallet balances (needs API credentials)")
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose)
    try:
        result = asyncio.run(run(args))
    except CryptoMktError as exc:
        print(f"CryptoMarket API error: {exc}", file=sys.stderr)
        return 1
    except FileNotFoundError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    print(json.dumps(result, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
