"""Core signed request pipeline."""

from .api import CryptoMktApi, Envelope, decode
from .auth import Credentials, build_headers, sign
from .errors import CryptoMktError, ErrorKind, InvalidHeaderError, translate_status
from .request import Endpoint, RequestMethod, SignatureMessage, build_url, signature_message
from .transport import AiohttpTransport, CannedResponse, CannedTransport, HttpTransport

__all__ = [
    "AiohttpTransport",
    "CannedResponse",
    "CannedTransport",
    "Credentials",
    "CryptoMktApi",
    "CryptoMktError",
    "Endpoint",
    "Envelope",
    "ErrorKind",
    "HttpTransport",
    "InvalidHeaderError",
    "RequestMethod",
    "SignatureMessage",
    "build_headers",
    "build_url",
    "decode",
    "sign",
    "signature_message",
    "translate_status",
]
