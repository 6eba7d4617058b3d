import socket
import ssl
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Generator

import pytest

CERTS_DIR = Path(__file__).parent / "certs"
CA_FILE = str(CERTS_DIR / "ca.pem")


@dataclass
class ServerDetails:
    host: str = ""
    port: int = 0


def recv_until(sock: socket.socket, marker: bytes) -> bytes:
    data = b""
    while marker not in data:
        chunk = sock.recv(1024)
        if not chunk:
            break
        data += chunk
    return data


def recv_all(sock: socket.socket) -> bytes:
    data = b""
    while True:
        chunk = sock.recv(1024)
        if not chunk:
            return data
        data += chunk


def server_tls_context() -> ssl.SSLContext:
    """Server side of the test PKI: a localhost / 127.0.0.1 leaf signed by certs/ca.pem."""
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_SERVER)
    context.load_cert_chain(CERTS_DIR / "cert.pem", CERTS_DIR / "key.pem")
    return context


def read_http_request(sock: socket.socket) -> bytes:
    """Reads one request, honouring Content-Length for the body."""
    data = recv_until(sock, b"\r\n\r\n")
    head, _, body = data.partition(b"\r\n\r\n")

    content_length = 0
    for line in head.split(b"\r\n")[1:]:
        key, _, value = line.partition(b": ")
        if key.lower() == b"content-length":
            content_length = int(value)

    while len(body) < content_length:
        chunk = sock.recv(1024)
        if not chunk:
            break
        body += chunk
    return head + b"\r\n\r\n" + body


@pytest.fixture
def server_factory() -> Callable[[Callable[[socket.socket], None]], Generator[ServerDetails, None, None]]:
    @contextmanager
    def _factory(handler: Callable[[socket.socket], None], tls: bool = False):
        details = ServerDetails()

        def server_loop(listener: socket.socket):
            try:
                client_sock, _ = listener.accept()
                if tls:
                    client_sock = server_tls_context().wrap_socket(client_sock, server_side=True)
                with client_sock:
                    handler(client_sock)
            except (socket.timeout, OSError):
                pass

        listener_sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        listener_sock.bind(("127.0.0.1", 0))
        details.host, details.port = listener_sock.getsockname()

        server_thread = None
        try:
            listener_sock.settimeout(2.0)
            listener_sock.listen()
            server_thread = threading.Thread(target=server_loop, args=(listener_sock,))
            server_thread.start()
            yield details
        finally:
            # Unblocks accept() if the client never connected.
            try:
                with socket.create_connection((details.host, details.port), timeout=0.1):
                    pass
            except OSError:
                pass

            if server_thread:
                server_thread.join(timeout=2.0)
            listener_sock.close()

    return _factory


@pytest.fixture
def unused_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]
