"""Public market data for a single CryptoMarket pair."""

from __future__ import annotations

from .core import CryptoMktApi, CryptoMktError, Endpoint, ErrorKind
from .models import BookOrder, OrderType, Ticker, Trade

TICKER = Endpoint("ticker", public=True)
BOOK = Endpoint("book", public=True)
TRADES = Endpoint("trades", public=True)


def trade_params(
    market: str,
    start: str | None = None,
    end: str | None = None,
    page: int | None = None,
    limit: int | None = None,
) -> dict[str, str]:
    params = {"market": market}
    if start:
        params["start"] = start
    if end:
        params["end"] = end
    if page is not None:
        params["page"] = str(page)
    if limit is not None:
        params["limit"] = str(limit)
    return params


class Market:
    """Handle for one market pair, e.g. ``ETHCLP``."""

    def __init__(self, api: CryptoMktApi, name: str) -> None:
        self.api = api
        self.name = name

    def __repr__(self) -> str:
        return f"Market({self.name!r})"

    async def get_current_ticker(self) -> Ticker:
        tickers = await self.api.call(TICKER, {"market": self.name}, list[Ticker])
        if not tickers:
            raise CryptoMktError(ErrorKind.NOT_FOUND)
        return tickers[0]

    async def get_orders_book(
        self,
        order_type: OrderType,
        page: int = 0,
        limit: int = 20,
    ) -> list[BookOrder]:
        """Return one page of the buy or sell side of the order book."""
        params = {
            "market": self.name,
            "type": OrderType(order_type).value,
            "page": str(page),
            "limit": str(limit),
        }
        return await self.api.call(BOOK, params, list[BookOrder])

    async def get_trades(
        self,
        start: str | None = None,
        end: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> list[Trade]:
        """Return executed trades, oldest first.

        ``start`` is inclusive and ``end`` exclusive (``YYYY-MM-DD``); the
        exchange applies its own defaults when they are omitted.
        """
        params = trade_params(self.name, start, end, page, limit)
        return await self.api.call(TRADES, params, list[Trade])


__all__ = ["Market", "trade_params"]
