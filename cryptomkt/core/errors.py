"""Error taxonomy for CryptoMarket API failures."""

from __future__ import annotations

import logging
from enum import Enum

LOGGER = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    METHOD_NOT_ALLOWED = "method_not_allowed"
    NOT_ACCEPTABLE = "not_acceptable"
    GONE = "gone"
    TEAPOT = "teapot"
    TOO_MANY_REQUESTS = "too_many_requests"
    INTERNAL_SERVER_ERROR = "internal_server_error"
    SERVICE_UNAVAILABLE = "service_unavailable"
    MALFORMED_RESOURCE = "malformed_resource"


_STATUS_KINDS: dict[int, ErrorKind] = {
    401: ErrorKind.UNAUTHORIZED,
    403: ErrorKind.FORBIDDEN,
    404: ErrorKind.NOT_FOUND,
    405: ErrorKind.METHOD_NOT_ALLOWED,
    406: ErrorKind.NOT_ACCEPTABLE,
    410: ErrorKind.GONE,
    # CryptoMarket answers some requests with 418; kept distinct on purpose.
    418: ErrorKind.TEAPOT,
    429: ErrorKind.TOO_MANY_REQUESTS,
    500: ErrorKind.INTERNAL_SERVER_ERROR,
    503: ErrorKind.SERVICE_UNAVAILABLE,
}


class CryptoMktError(RuntimeError):
    """Base exception for CryptoMarket API failures."""

    def __init__(self, kind: ErrorKind, status: int | None = None) -> None:
        self.kind = kind
        self.status = status
        message = kind.value if status is None else f"{status} {kind.value}"
        super().__init__(message)


class InvalidHeaderError(ValueError):
    """Raised when an auth header value cannot be sent over HTTP."""


def translate_status(status: int) -> ErrorKind:
    """Map an HTTP status code to its :class:`ErrorKind`."""
    return _STATUS_KINDS.get(status, ErrorKind.BAD_REQUEST)


def status_error(prefix: str, status: int) -> CryptoMktError:
    kind = translate_status(status)
    LOGGER.error("%s: status %d (%s)", prefix, status, kind.value)
    return CryptoMktError(kind, status=status)


__all__ = [
    "CryptoMktError",
    "ErrorKind",
    "InvalidHeaderError",
    "status_error",
    "translate_status",
]
