"""Async client for the CryptoMarket exchange REST API."""

from .client import Client
from .core import CryptoMktApi, CryptoMktError, Endpoint, ErrorKind, RequestMethod
from .market import Market
from .models import Balance, BookOrder, OrderType, Payment, Ticker, Trade

__all__ = [
    "Balance",
    "BookOrder",
    "Client",
    "CryptoMktApi",
    "CryptoMktError",
    "Endpoint",
    "ErrorKind",
    "Market",
    "OrderType",
    "Payment",
    "RequestMethod",
    "Ticker",
    "Trade",
]
