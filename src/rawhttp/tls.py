import logging
import socket
import ssl
from typing import Optional

from .config import ClientConfig
from .errors import TlsSetupError, TlsHandshakeError

logger = logging.getLogger(__name__)


class TlsConnector:
    """
    Upgrades a connected TCP socket to TLS.

    The connector is a lightweight handle around one ssl.SSLContext. Cloned
    requests share it; each wrap() performs its own handshake.
    """

    def __init__(self, context: Optional[ssl.SSLContext] = None) -> None:
        if context is None:
            try:
                context = ssl.create_default_context()
            except (ssl.SSLError, OSError) as e:
                raise TlsSetupError(f"Could not create TLS context: {e}") from e
        self._context = context

    @classmethod
    def from_config(cls, config: ClientConfig) -> "TlsConnector":
        try:
            context = ssl.create_default_context(cafile=config.ca_file)
        except (ssl.SSLError, OSError) as e:
            raise TlsSetupError(f"Could not create TLS context: {e}") from e

        if not config.verify_tls:
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE
        return cls(context)

    @property
    def context(self) -> ssl.SSLContext:
        return self._context

    def wrap(self, sock: socket.socket, hostname: str) -> ssl.SSLSocket:
        try:
            tls_sock = self._context.wrap_socket(sock, server_hostname=hostname)
        except OSError as e:
            # ssl.SSLError and a peer reset mid-handshake both land here.
            raise TlsHandshakeError(f"TLS handshake with '{hostname}' failed: {e}") from e

        logger.debug("TLS established with %s using %s", hostname, tls_sock.version())
        return tls_sock
