import copy
import logging
from typing import Optional, Union

from . import dispatch
from .config import ClientConfig
from .method import Method
from .proxy import Proxy
from .resolver import Endpoint, resolve_first
from .response import Response
from .tls import TlsConnector

logger = logging.getLogger(__name__)


class Request:
    """
    One HTTP/1.1 request, accumulated directly in its wire form.

    The buffer always opens with the request line followed by the Host and
    ``Connection: close`` headers. Headers and body are appended verbatim in
    call order; nothing is validated or de-duplicated, and the caller is
    responsible for ``Content-Length``. Only set_body writes the blank line
    that ends the header block, so a request without a body must still call
    ``set_body("")`` before it is sent.

    The target is resolved once, at construction. Every perform_* method
    opens a fresh connection and leaves the request untouched, so the same
    request may be sent more than once.
    """

    def __init__(
        self,
        method: Method,
        host: str,
        port: int,
        path: str,
        tls: Optional[TlsConnector] = None,
        config: Optional[ClientConfig] = None,
    ):
        self._config = config or ClientConfig()
        self._config.validate()
        self._host = host
        self._port = port

        self._raw = bytearray()
        self._raw += f"{method.value} {path} HTTP/1.1\r\n".encode("utf-8")
        self._raw += f"Host: {host}\r\n".encode("utf-8")
        self._raw += b"Connection: close\r\n"

        self._endpoint = resolve_first(host, port)
        self._tls = tls if tls is not None else TlsConnector.from_config(self._config)

    @property
    def host(self) -> str:
        return self._host

    @property
    def port(self) -> int:
        return self._port

    @property
    def endpoint(self) -> Endpoint:
        return self._endpoint

    @property
    def tls(self) -> TlsConnector:
        return self._tls

    @property
    def config(self) -> ClientConfig:
        return self._config

    def set_header(self, key: str, value: str) -> None:
        self._raw += f"{key}: {value}\r\n".encode("utf-8")

    def set_body(self, body: Union[str, bytes]) -> None:
        if isinstance(body, str):
            body = body.encode("utf-8")
        self._raw += b"\r\n" + body

    def raw_bytes(self) -> bytes:
        return bytes(self._raw)

    def raw_string(self) -> str:
        """The wire form as text. Undecodable body bytes become U+FFFD."""
        return self._raw.decode("utf-8", errors="replace")

    def clone(self) -> "Request":
        cloned = copy.copy(self)
        cloned._raw = bytearray(self._raw)
        return cloned

    def perform(self) -> Response:
        logger.debug("%s via plain TCP", self._describe())
        return dispatch.perform(self)

    def perform_with_tls(self) -> Response:
        logger.debug("%s via TLS", self._describe())
        return dispatch.perform_with_tls(self)

    def perform_with_http_proxy(self, proxy: Proxy) -> Response:
        logger.debug("%s via CONNECT proxy %s", self._describe(), proxy.endpoint)
        return dispatch.perform_with_http_proxy(self, proxy)

    def perform_with_https_proxy(self, proxy: Proxy) -> Response:
        logger.debug("%s via CONNECT proxy %s with TLS", self._describe(), proxy.endpoint)
        return dispatch.perform_with_https_proxy(self, proxy)

    def _describe(self) -> str:
        request_line = self._raw.split(b"\r\n", 1)[0].decode("utf-8", errors="replace")
        return f"{request_line} -> {self._host}:{self._port}"

    def __repr__(self) -> str:
        return f"Request({self._describe()!r})"
