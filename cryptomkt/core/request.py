"""URL and signature-message construction for CryptoMarket requests."""

from __future__ import annotations

import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from urllib.parse import urlencode

Clock = Callable[[], float]


class RequestMethod(str, Enum):
    GET = "GET"
    POST = "POST"


@dataclass(frozen=True)
class Endpoint:
    """Relative API path plus the way it has to be called."""

    path: str
    method: RequestMethod = RequestMethod.GET
    public: bool = False

    @property
    def is_get(self) -> bool:
        return self.method is RequestMethod.GET


@dataclass(frozen=True)
class SignatureMessage:
    """Canonical string signed for private calls.

    The timestamp is kept as its own field so the ``X-MKT-TIMESTAMP`` header
    can reuse it verbatim instead of parsing it back out of the rendered text.
    """

    timestamp: str
    api_version: str
    endpoint: str
    body: str = ""

    def render(self) -> str:
        return f"{self.timestamp}/{self.api_version}/{self.endpoint}{self.body}"

    def __str__(self) -> str:
        return self.render()


def build_url(
    domain: str,
    api_version: str,
    endpoint: str,
    params: Mapping[str, str] | None = None,
) -> str:
    """Join ``domain/api_version/endpoint`` and append the query string."""
    url = f"{domain.rstrip('/')}/{api_version.strip('/')}/{endpoint.lstrip('/')}"
    if params:
        url = f"{url}?{urlencode(list(params.items()))}"
    return url


def signature_message(
    api_version: str,
    endpoint: str,
    payload: Mapping[str, str] | None,
    is_get: bool,
    clock: Clock = time.time,
) -> SignatureMessage:
    """Build the message for ``X-MKT-SIGNATURE``.

    Writes fold the payload values (not the keys) in ascending key order with
    no separator, e.g. ``1700000000/v1/orders/create0.3ethclp10000buy``.
    GET requests never include payload values.
    """
    body = ""
    if not is_get and payload:
        body = "".join(payload[key] for key in sorted(payload))
    return SignatureMessage(
        timestamp=str(int(clock())),
        api_version=api_version.strip("/"),
        endpoint=endpoint.lstrip("/"),
        body=body,
    )


__all__ = [
    "Clock",
    "Endpoint",
    "RequestMethod",
    "SignatureMessage",
    "build_url",
    "signature_message",
]
