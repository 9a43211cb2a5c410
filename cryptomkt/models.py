"""Typed views of the entities returned by the CryptoMarket API.

Amounts and prices are kept as the decimal strings the exchange sends.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class OrderType(str, Enum):
    BUY = "buy"
    SELL = "sell"


class _Resource(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True, frozen=True)


class Ticker(_Resource):
    market: str
    last_price: str
    bid: str | None = None
    ask: str | None = None
    low: str | None = None
    high: str | None = None
    volume: str | None = None
    timestamp: str | None = None


class BookOrder(_Resource):
    price: str
    amount: str
    timestamp: str | None = None


class Trade(_Resource):
    market: str
    price: str
    amount: str
    market_taker: str | None = None
    timestamp: str | None = None


class Balance(_Resource):
    wallet: str
    available: str
    balance: str


class Payment(_Resource):
    id: str
    status: int
    to_receive: str
    to_receive_currency: str
    external_id: str | None = None
    expected_amount: str | None = None
    expected_currency: str | None = None
    deposit_address: str | None = None
    refund_email: str | None = None
    qr: str | None = None
    obs: str | None = None
    callback_url: str | None = None
    error_url: str | None = None
    success_url: str | None = None
    payment_url: str | None = None
    remaining: int | None = None
    language: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    server_at: str | None = None


__all__ = ["Balance", "BookOrder", "OrderType", "Payment", "Ticker", "Trade"]
