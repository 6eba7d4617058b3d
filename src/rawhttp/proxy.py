import base64
import copy
import logging

from .errors import ProxyParseError
from .resolver import Endpoint, resolve_first

logger = logging.getLogger(__name__)


def _split_host_port(hostport: str) -> tuple[str, int]:
    if hostport.startswith("["):
        host, sep, rest = hostport[1:].partition("]")
        if not sep or not rest.startswith(":"):
            raise ProxyParseError(f"Invalid proxy address '{hostport}'")
        port_text = rest[1:]
    else:
        host, sep, port_text = hostport.rpartition(":")
        if not sep:
            raise ProxyParseError(f"Proxy address '{hostport}' is missing a port")

    if not host or not port_text.isdigit() or int(port_text) > 0xFFFF:
        raise ProxyParseError(f"Invalid proxy address '{hostport}'")
    return host, int(port_text)


class Proxy:
    """
    An HTTP proxy able to open CONNECT tunnels.

    Built from a descriptor of the form ``[user:password@]host:port``. The
    credentials, when present, are pre-rendered into a complete
    ``Proxy-Authorization`` header line ready to splice into the CONNECT request.
    """

    def __init__(self, endpoint: Endpoint, authorization_header: str = ""):
        self._endpoint = endpoint
        self._authorization_header = authorization_header

    @classmethod
    def parse_http(cls, descriptor: str) -> "Proxy":
        if "@" in descriptor:
            credentials, _, hostport = descriptor.partition("@")
            token = base64.b64encode(credentials.encode("utf-8")).decode("ascii")
            authorization_header = f"Proxy-Authorization: Basic {token}\r\n"
        else:
            hostport = descriptor
            authorization_header = ""

        host, port = _split_host_port(hostport)
        endpoint = resolve_first(host, port)
        logger.debug("Proxy %s (auth: %s)", endpoint, "yes" if authorization_header else "no")
        return cls(endpoint, authorization_header)

    @property
    def endpoint(self) -> Endpoint:
        return self._endpoint

    @property
    def authorization_header(self) -> str:
        return self._authorization_header

    def clone(self) -> "Proxy":
        return copy.copy(self)

    def __repr__(self) -> str:
        return f"Proxy({self._endpoint}, auth={bool(self._authorization_header)})"
