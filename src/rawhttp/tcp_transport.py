import logging
import socket
from typing import Callable, Optional

from .errors import (
    TransportError,
    IoError,
    ConnectError,
    SocketWriteError,
    SocketReadError,
)
from .resolver import Endpoint
from .transport import Transport

logger = logging.getLogger(__name__)


class TcpTransport(Transport):
    def __init__(self, connect_timeout: Optional[float] = None, read_timeout: Optional[float] = None) -> None:
        self._sock: socket.socket | None = None
        self._connect_timeout = connect_timeout
        self._read_timeout = read_timeout

    @property
    def sock(self) -> socket.socket:
        if self._sock is None:
            raise TransportError("Transport is not connected.")
        return self._sock

    def connect(self, endpoint: Endpoint) -> None:
        if self._sock is not None:
            raise TransportError("Transport is already connected.")

        try:
            self._sock = socket.socket(endpoint.family, socket.SOCK_STREAM)
            self._sock.settimeout(self._connect_timeout)
            self._sock.connect(endpoint.sockaddr)
            self._sock.settimeout(self._read_timeout)
            self._sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
        except OSError as e:
            if self._sock is not None:
                self._sock.close()
            self._sock = None
            raise ConnectError(f"Socket connection to {endpoint} failed: {e}") from e

        logger.debug("Connected to %s", endpoint)

    def write(self, data: bytes) -> int:
        if self._sock is None:
            raise TransportError("Cannot write on a disconnected transport.")

        try:
            self._sock.sendall(data)
        except OSError as e:
            raise SocketWriteError(f"Socket write failed: {e}") from e
        return len(data)

    def read_into(self, buffer: bytearray) -> int:
        if self._sock is None:
            raise TransportError("Cannot read from a disconnected transport.")

        try:
            return self._sock.recv_into(buffer)
        except OSError as e:
            raise SocketReadError(f"Socket read failed: {e}") from e

    def upgrade(self, wrap: Callable[[socket.socket], socket.socket]) -> None:
        """Replaces the underlying socket with wrap(sock), e.g. a TLS-wrapped socket."""
        self._sock = wrap(self.sock)

    def shutdown(self) -> None:
        if self._sock is None:
            raise TransportError("Cannot shut down a disconnected transport.")

        try:
            self._sock.shutdown(socket.SHUT_RDWR)
        except OSError as e:
            raise IoError(f"Socket shutdown failed: {e}") from e

    def close(self) -> None:
        if self._sock is not None:
            try:
                self._sock.close()
            finally:
                self._sock = None
