class RawHttpError(Exception):
    """Base exception for the rawhttp library."""
    pass

# --- Transport Errors ---

class TransportError(RawHttpError):
    """A generic error occurred in the transport layer."""
    pass

class AddressResolutionError(TransportError): pass
class ConnectError(TransportError): pass
class TlsSetupError(TransportError): pass
class TlsHandshakeError(TransportError): pass

class IoError(TransportError):
    """A read or write failed after the connection was established."""
    pass

class SocketWriteError(IoError): pass
class SocketReadError(IoError): pass

# --- HTTP Client Errors ---

class HttpClientError(RawHttpError):
    """A generic error occurred in the HTTP client logic."""
    pass

class ProxyError(HttpClientError): pass

class ProxyParseError(ProxyError, AddressResolutionError):
    """The proxy descriptor string could not be split into host and port."""
    pass

class ProxyTunnelRejected(ProxyError):
    """The proxy answered the CONNECT request with something other than 200."""

    def __init__(self, status_line: str):
        super().__init__(f"Proxy refused tunnel: {status_line}")
        self.status_line = status_line
