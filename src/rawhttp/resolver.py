import logging
import socket
from dataclasses import dataclass

from .errors import AddressResolutionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Endpoint:
    family: int
    address: str
    port: int

    @property
    def sockaddr(self) -> tuple:
        return (self.address, self.port)

    def __str__(self) -> str:
        if self.family == socket.AF_INET6:
            return f"[{self.address}]:{self.port}"
        return f"{self.address}:{self.port}"


def resolve(host: str, port: int) -> list[Endpoint]:
    """
    Resolves host:port to every TCP endpoint the system resolver knows.

    Raises AddressResolutionError when the lookup fails or comes back empty.
    """
    try:
        infos = socket.getaddrinfo(host, port, type=socket.SOCK_STREAM)
    except (socket.gaierror, UnicodeError, OverflowError) as e:
        raise AddressResolutionError(f"Could not resolve '{host}:{port}': {e}") from e

    endpoints = [
        Endpoint(family=family, address=sockaddr[0], port=sockaddr[1])
        for family, _, _, _, sockaddr in infos
        if family in (socket.AF_INET, socket.AF_INET6)
    ]
    if not endpoints:
        raise AddressResolutionError(f"No address found for '{host}:{port}'")

    logger.debug("Resolved %s:%d to %s", host, port, ", ".join(map(str, endpoints)))
    return endpoints


def resolve_first(host: str, port: int) -> Endpoint:
    return resolve(host, port)[0]
