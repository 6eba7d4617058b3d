import logging
from typing import TYPE_CHECKING

from .config import ClientConfig
from .errors import SocketReadError, ProxyTunnelRejected
from .response import Response
from .tcp_transport import TcpTransport
from .transport import Transport

if TYPE_CHECKING:
    from .proxy import Proxy
    from .request import Request

logger = logging.getLogger(__name__)

_TUNNEL_HEADER_END = b"\r\n\r\n"
_TUNNEL_OK_PREFIX = b"HTTP/1.1 200"


def _open(config: ClientConfig) -> TcpTransport:
    return TcpTransport(connect_timeout=config.connect_timeout, read_timeout=config.read_timeout)


def _read_to_end(transport: Transport, chunk_size: int) -> bytes:
    """Reads until the peer closes its side of the connection."""
    buffer = bytearray()
    chunk = bytearray(chunk_size)
    view = memoryview(chunk)

    while True:
        bytes_read = transport.read_into(chunk)
        if bytes_read == 0:
            break
        buffer += view[:bytes_read]

    return bytes(buffer)


def _exchange(transport: Transport, request: "Request") -> Response:
    raw_request = request.raw_bytes()
    transport.write(raw_request)
    logger.debug("Wrote %d request bytes", len(raw_request))

    raw_response = _read_to_end(transport, request.config.read_chunk_size)
    logger.debug("Read %d response bytes", len(raw_response))
    return Response(raw_response)


def _open_tunnel(transport: TcpTransport, request: "Request", proxy: "Proxy") -> None:
    target = f"{request.host}:{request.port}"
    connect_request = (
        f"CONNECT {target} HTTP/1.1\r\n"
        f"Host: {target}\r\n"
        f"{proxy.authorization_header}"
        f"\r\n"
    )
    transport.write(connect_request.encode("utf-8"))

    # One byte at a time so nothing past the proxy's header block is consumed.
    reply = bytearray()
    byte = bytearray(1)
    while not reply.endswith(_TUNNEL_HEADER_END):
        if transport.read_into(byte) == 0:
            raise SocketReadError("Proxy closed the connection during CONNECT")
        reply += byte

    status_line = reply.split(b"\r\n", 1)[0].decode("latin-1")
    if not reply.startswith(_TUNNEL_OK_PREFIX):
        logger.warning("Proxy %s rejected CONNECT %s: %s", proxy.endpoint, target, status_line)
        raise ProxyTunnelRejected(status_line)

    logger.debug("Tunnel to %s open via %s: %s", target, proxy.endpoint, status_line)


def perform(request: "Request") -> Response:
    transport = _open(request.config)
    try:
        transport.connect(request.endpoint)
        return _exchange(transport, request)
    finally:
        transport.close()


def perform_with_tls(request: "Request") -> Response:
    transport = _open(request.config)
    try:
        transport.connect(request.endpoint)
        transport.upgrade(lambda sock: request.tls.wrap(sock, request.host))
        return _exchange(transport, request)
    finally:
        transport.close()


def perform_with_http_proxy(request: "Request", proxy: "Proxy") -> Response:
    """
    Sends the request through a CONNECT tunnel without TLS on top.

    The request bytes go over the tunnel as plaintext, so this is only
    correct for plaintext targets. Use perform_with_https_proxy for TLS ones.
    """
    transport = _open(request.config)
    try:
        transport.connect(proxy.endpoint)
        _open_tunnel(transport, request, proxy)
        response = _exchange(transport, request)
        transport.shutdown()
        return response
    finally:
        transport.close()


def perform_with_https_proxy(request: "Request", proxy: "Proxy") -> Response:
    transport = _open(request.config)
    try:
        transport.connect(proxy.endpoint)
        _open_tunnel(transport, request, proxy)
        transport.upgrade(lambda sock: request.tls.wrap(sock, request.host))
        response = _exchange(transport, request)
        transport.shutdown()
        return response
    finally:
        transport.close()
