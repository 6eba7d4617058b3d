import logging

from .config import ClientConfig, configure_logging
from .errors import (
    RawHttpError,
    TransportError,
    AddressResolutionError,
    ConnectError,
    TlsSetupError,
    TlsHandshakeError,
    IoError,
    SocketWriteError,
    SocketReadError,
    HttpClientError,
    ProxyError,
    ProxyParseError,
    ProxyTunnelRejected,
)
from .method import Method
from .proxy import Proxy
from .request import Request
from .resolver import Endpoint
from .response import Response
from .tls import TlsConnector

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ClientConfig",
    "configure_logging",
    "Endpoint",
    "Method",
    "Proxy",
    "Request",
    "Response",
    "TlsConnector",
    "RawHttpError",
    "TransportError",
    "AddressResolutionError",
    "ConnectError",
    "TlsSetupError",
    "TlsHandshakeError",
    "IoError",
    "SocketWriteError",
    "SocketReadError",
    "HttpClientError",
    "ProxyError",
    "ProxyParseError",
    "ProxyTunnelRejected",
]
