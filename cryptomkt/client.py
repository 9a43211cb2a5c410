"""High level client for the CryptoMarket REST API."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING

from .core import AiohttpTransport, Credentials, CryptoMktApi, Endpoint, HttpTransport, RequestMethod
from .core.api import DEFAULT_API_VERSION, DEFAULT_DOMAIN
from .market import TRADES, Market, trade_params
from .models import Balance, Payment, Trade

if TYPE_CHECKING:
    from .config import Settings

LOGGER = logging.getLogger(__name__)

MARKETS = Endpoint("market", public=True)
BALANCE = Endpoint("balance")
PAYMENT_NEW_ORDER = Endpoint("payment/new_order", method=RequestMethod.POST)
PAYMENT_STATUS = Endpoint("payment/status")
PAYMENT_ORDERS = Endpoint("payment/orders")


def format_amount(value: float | Decimal | str) -> str:
    """Plain decimal text for an amount: ``3000.0`` is sent as ``"3000"``."""
    if isinstance(value, str):
        return value
    return format(Decimal(str(value)).normalize(), "f")


class Client:
    """Async CryptoMarket client.

    Usage::

        async with Client(API_KEY, API_SECRET) as client:
            for market in await client.get_markets():
                print(await market.get_current_ticker())
    """

    def __init__(
        self,
        api_key: str,
        secret_key: str,
        *,
        transport: HttpTransport | None = None,
        domain: str = DEFAULT_DOMAIN,
        api_version: str = DEFAULT_API_VERSION,
    ) -> None:
        self.api = CryptoMktApi(
            Credentials(api_key=api_key, secret_key=secret_key),
            transport=transport,
            domain=domain,
            api_version=api_version,
        )

    @classmethod
    def from_settings(cls, settings: Settings, transport: HttpTransport | None = None) -> Client:
        return cls(
            settings.api_key,
            settings.secret_key,
            transport=transport or AiohttpTransport(timeout=settings.timeout),
            domain=settings.domain,
            api_version=settings.api_version,
        )

    async def close(self) -> None:
        await self.api.close()

    async def __aenter__(self) -> Client:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def get_markets(self) -> list[Market]:
        names = await self.api.call(MARKETS, result_type=list[str])
        LOGGER.debug("Exchange lists %d markets", len(names))
        return [Market(self.api, name) for name in names]

    def create_market(self, name: str) -> Market:
        return Market(self.api, name)

    async def get_balance(self) -> list[Balance]:
        """Available and accounting balance of every wallet."""
        return await self.api.call(BALANCE, result_type=list[Balance])

    async def create_payment_order(
        self,
        to_receive: float | Decimal | str,
        to_receive_currency: str,
        payment_receiver: str,
        external_id: str | None = None,
        callback_url: str | None = None,
        error_url: str | None = None,
        success_url: str | None = None,
        refund_email: str | None = None,
    ) -> Payment:
        """Create a payment order; the response carries the QR and payment url."""
        params = {
            "to_receive": format_amount(to_receive),
            "to_receive_currency": to_receive_currency,
            "payment_receiver": payment_receiver,
        }
        optional = {
            "external_id": external_id,
            "callback_url": callback_url,
            "error_url": error_url,
            "success_url": success_url,
            "refund_email": refund_email,
        }
        params.update({key: value for key, value in optional.items() if value is not None})
        return await self.api.call(PAYMENT_NEW_ORDER, params, Payment)

    async def payment_order_status(self, id: str) -> Payment:
        return await self.api.call(PAYMENT_STATUS, {"id": id}, Payment)

    async def get_payment_orders(
        self,
        start_date: str,
        end_date: str,
        page: int | None = None,
        limit: int | None = None,
    ) -> list[Payment]:
        params = {"start_date": start_date, "end_date": end_date}
        if page is not None:
            params["page"] = str(page)
        if limit is not None:
            params["limit"] = str(limit)
        return await self.api.call(PAYMENT_ORDERS, params, list[Payment])

    async def get_trades(
        self,
        market: str,
        start: str | None = None,
        end: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> list[Trade]:
        params = trade_params(market, start, end, page, limit)
        return await self.api.call(TRADES, params, list[Trade])


__all__ = ["Client", "format_amount"]
