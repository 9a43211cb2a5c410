"""Signed request pipeline for the CryptoMarket REST API."""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

from .auth import Credentials, build_headers, sign
from .errors import CryptoMktError, ErrorKind
from .request import Clock, Endpoint, SignatureMessage, build_url, signature_message
from .transport import AiohttpTransport, HttpTransport

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_DOMAIN = "https://api.cryptomkt.com/"
DEFAULT_API_VERSION = "v1"


class Envelope(BaseModel, Generic[T]):
    """Every successful response is wrapped as ``{"data": ...}``.

    ``data`` is checked strictly: ``"42"`` is not an ``int``. Resource models
    keep their own config for the numeric strings the exchange sends.
    """

    model_config = ConfigDict(strict=True)

    data: T


def decode(body: str, result_type: Any) -> Any:
    """Parse ``body`` as ``{"data": result_type}`` and return the data."""
    try:
        envelope = Envelope[result_type].model_validate_json(body)
    except ValidationError as exc:
        LOGGER.debug("Malformed response body: %s", exc)
        raise CryptoMktError(ErrorKind.MALFORMED_RESOURCE) from None
    return envelope.data


class CryptoMktApi:
    """Builds, signs and dispatches requests, then decodes the responses.

    The instance holds no per-call state, so one api object can serve any
    number of concurrent calls.
    """

    def __init__(
        self,
        credentials: Credentials,
        transport: HttpTransport | None = None,
        domain: str = DEFAULT_DOMAIN,
        api_version: str = DEFAULT_API_VERSION,
        clock: Clock = time.time,
    ) -> None:
        self._credentials = credentials
        self.transport: HttpTransport = transport or AiohttpTransport()
        self._domain = domain
        self._api_version = api_version
        self._clock = clock

    @property
    def domain(self) -> str:
        return self._domain

    @property
    def api_version(self) -> str:
        return self._api_version

    def build_url(self, endpoint: str, params: Mapping[str, str] | None = None) -> str:
        return build_url(self._domain, self._api_version, endpoint, params)

    def signature_message(
        self,
        endpoint: str,
        payload: Mapping[str, str] | None,
        is_get: bool,
    ) -> SignatureMessage:
        return signature_message(self._api_version, endpoint, payload, is_get, clock=self._clock)

    def sign_msg(self, message: str) -> str:
        return sign(self._credentials.secret_key, message)

    def build_headers(
        self,
        endpoint: str,
        payload: Mapping[str, str] | None,
        is_public: bool,
        is_get: bool,
    ) -> dict[str, str]:
        return build_headers(
            self._credentials,
            self._api_version,
            endpoint,
            payload,
            is_public,
            is_get,
            clock=self._clock,
        )

    async def call(
        self,
        endpoint: Endpoint,
        params: Mapping[str, str] | None = None,
        result_type: Any = Any,
    ) -> Any:
        """Perform one request and return the decoded ``data`` field."""
        params = dict(params or {})
        headers = self.build_headers(endpoint.path, params, endpoint.public, endpoint.is_get)
        if endpoint.is_get:
            body = await self.transport.get(self.build_url(endpoint.path, params), headers)
        else:
            body = await self.transport.post(self.build_url(endpoint.path), headers, params)
        return decode(body, result_type)

    async def close(self) -> None:
        await self.transport.close()


__all__ = [
    "CryptoMktApi",
    "DEFAULT_API_VERSION",
    "DEFAULT_DOMAIN",
    "Envelope",
    "decode",
]
