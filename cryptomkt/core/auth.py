"""Helpers for generating CryptoMarket-compatible auth headers."""

from __future__ import annotations

import hmac
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from hashlib import sha384

from .errors import InvalidHeaderError
from .request import Clock, signature_message

X_MKT_APIKEY = "X-MKT-APIKEY"
X_MKT_SIGNATURE = "X-MKT-SIGNATURE"
X_MKT_TIMESTAMP = "X-MKT-TIMESTAMP"


@dataclass(frozen=True)
class Credentials:
    api_key: str = field(repr=False)
    secret_key: str = field(repr=False)


def sign(secret_key: str, message: str) -> str:
    """Return the lowercase hex HMAC-SHA384 of ``message``."""

    return hmac.new(secret_key.encode(), message.encode(), sha384).hexdigest()


def _header_value(name: str, value: str) -> str:
    if not all(ch == "\t" or 32 <= ord(ch) < 127 for ch in value):
        raise InvalidHeaderError(f"{name} contains characters not allowed in a header value")
    return value


def build_headers(
    credentials: Credentials,
    api_version: str,
    endpoint: str,
    payload: Mapping[str, str] | None,
    is_public: bool,
    is_get: bool,
    clock: Clock = time.time,
) -> dict[str, str]:
    """Create the auth headers for a call; public calls get none."""

    if is_public:
        return {}

    message = signature_message(api_version, endpoint, payload, is_get, clock=clock)
    signature = sign(credentials.secret_key, message.render())
    # An invalid value raises before the mapping exists.
    return {
        X_MKT_APIKEY: _header_value(X_MKT_APIKEY, credentials.api_key),
        X_MKT_SIGNATURE: _header_value(X_MKT_SIGNATURE, signature),
        X_MKT_TIMESTAMP: _header_value(X_MKT_TIMESTAMP, message.timestamp),
    }


__all__ = [
    "Credentials",
    "X_MKT_APIKEY",
    "X_MKT_SIGNATURE",
    "X_MKT_TIMESTAMP",
    "build_headers",
    "sign",
]
