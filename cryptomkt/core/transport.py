"""HTTP transports used by the CryptoMarket API orchestrator.

``AiohttpTransport`` talks to the live exchange; ``CannedTransport`` replays
queued responses so the signing pipeline can be exercised without network I/O.
Both translate non-2xx statuses into :class:`CryptoMktError` the same way.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

import aiohttp

from .errors import CryptoMktError, ErrorKind, status_error

LOGGER = logging.getLogger(__name__)


class HttpTransport(Protocol):
    async def get(self, url: str, headers: Mapping[str, str]) -> str:  # pragma: no cover - protocol hook
        ...

    async def post(
        self,
        url: str,
        headers: Mapping[str, str],
        payload: Mapping[str, str],
    ) -> str:  # pragma: no cover - protocol hook
        ...

    async def close(self) -> None:  # pragma: no cover - protocol hook
        ...


def _is_success(status: int) -> bool:
    return 200 <= status < 300


class AiohttpTransport:
    """Live transport backed by a shared :class:`aiohttp.ClientSession`.

    ``timeout`` (seconds; ``None`` keeps the session default) is applied to every request,
    including requests sent through an injected ``session``.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession | None = None,
        timeout: float | None = 10.0,
    ) -> None:
        self._session = session
        self._owns_session = session is None
        if timeout is not None and timeout <= 0:
            raise ValueError("timeout must be positive or None")
        self._timeout = aiohttp.ClientTimeout(total=timeout) if timeout is not None else None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> AiohttpTransport:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def get(self, url: str, headers: Mapping[str, str]) -> str:
        return await self._send("GET", url, headers)

    async def post(
        self,
        url: str,
        headers: Mapping[str, str],
        payload: Mapping[str, str],
    ) -> str:
        return await self._send("POST", url, headers, payload)

    async def _send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        payload: Mapping[str, str] | None = None,
    ) -> str:
        session = self._get_session()
        LOGGER.debug("HTTP %s %s", method, url)
        options: dict[str, Any] = {"headers": dict(headers)}
        if payload is not None:
            options["data"] = dict(payload)
        if self._timeout is not None:
            options["timeout"] = self._timeout
        try:
            async with session.request(method, url, **options) as response:
                if not _is_success(response.status):
                    raise status_error(method, response.status)
                return await response.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            LOGGER.error("%s %s failed: %s", method, url, exc)
            raise CryptoMktError(ErrorKind.BAD_REQUEST) from exc
        except UnicodeDecodeError as exc:
            LOGGER.error("%s %s returned an undecodable body", method, url)
            raise CryptoMktError(ErrorKind.MALFORMED_RESOURCE) from exc


class CannedTransportExhausted(AssertionError):
    """Raised when a canned transport receives more requests than it was given."""


@dataclass(frozen=True)
class CannedResponse:
    status: int = 200
    body: str = ""


@dataclass(frozen=True)
class RecordedRequest:
    method: str
    url: str
    headers: dict[str, str]
    payload: dict[str, str] | None = None


@dataclass
class CannedTransport:
    """In-memory transport that replays queued responses in order."""

    responses: Iterable[CannedResponse] = ()
    requests: list[RecordedRequest] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._queue: deque[CannedResponse] = deque(self.responses)

    def push(self, body: str, status: int = 200) -> None:
        self._queue.append(CannedResponse(status=status, body=body))

    async def get(self, url: str, headers: Mapping[str, str]) -> str:
        self.requests.append(RecordedRequest("GET", url, dict(headers)))
        return self._reply("GET")

    async def post(
        self,
        url: str,
        headers: Mapping[str, str],
        payload: Mapping[str, str],
    ) -> str:
        self.requests.append(RecordedRequest("POST", url, dict(headers), dict(payload)))
        return self._reply("POST")

    async def close(self) -> None:
        return None

    def _reply(self, method: str) -> str:
        if not self._queue:
            raise CannedTransportExhausted(f"No canned response left for {method}")
        response = self._queue.popleft()
        if not _is_success(response.status):
            raise status_error(method, response.status)
        return response.body


__all__ = [
    "AiohttpTransport",
    "CannedResponse",
    "CannedTransport",
    "CannedTransportExhausted",
    "HttpTransport",
    "RecordedRequest",
]
