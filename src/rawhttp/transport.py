from typing import Protocol

from .resolver import Endpoint

class Transport(Protocol):
    def connect(self, endpoint: Endpoint) -> None:
        ...

    def write(self, data: bytes) -> int:
        ...

    def read_into(self, buffer: bytearray) -> int:
        ...

    def close(self) -> None:
        ...
