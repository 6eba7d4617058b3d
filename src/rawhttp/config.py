"""
Dispatch configuration.

The core never imposes a deadline: both timeouts default to None, which keeps
every socket in blocking mode. Applications that want deadlines opt in here,
either in code or through RAWHTTP_* environment variables.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env_float(name: str) -> Optional[float]:
    value = os.environ.get(name)
    if value is None or value == "":
        return None
    return float(value)


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() not in ("0", "false", "no", "off")


@dataclass
class ClientConfig:
    read_chunk_size: int = 4096
    """Bytes requested from the socket per recv_into call."""

    connect_timeout: Optional[float] = None
    """Seconds to wait for the TCP connect. None blocks indefinitely."""

    read_timeout: Optional[float] = None
    """Seconds to wait on each read or write once connected. None blocks indefinitely."""

    verify_tls: bool = True
    """Verify the server certificate and hostname during the TLS handshake."""

    ca_file: Optional[str] = None
    """Extra CA bundle to trust, in PEM format."""

    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """
        Builds a config from the environment, falling back to defaults.

        Recognised variables:
            RAWHTTP_READ_CHUNK_SIZE
            RAWHTTP_CONNECT_TIMEOUT
            RAWHTTP_READ_TIMEOUT
            RAWHTTP_VERIFY_TLS
            RAWHTTP_CA_FILE
            RAWHTTP_LOG_LEVEL
        """
        return cls(
            read_chunk_size=int(os.environ.get("RAWHTTP_READ_CHUNK_SIZE", cls.read_chunk_size)),
            connect_timeout=_env_float("RAWHTTP_CONNECT_TIMEOUT"),
            read_timeout=_env_float("RAWHTTP_READ_TIMEOUT"),
            verify_tls=_env_bool("RAWHTTP_VERIFY_TLS", cls.verify_tls),
            ca_file=os.environ.get("RAWHTTP_CA_FILE") or None,
            log_level=os.environ.get("RAWHTTP_LOG_LEVEL", cls.log_level).upper(),
        )

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        if self.read_chunk_size <= 0:
            raise ValueError(f"read_chunk_size must be positive, got {self.read_chunk_size}")
        for name in ("connect_timeout", "read_timeout"):
            value = getattr(self, name)
            if value is not None and value <= 0:
                raise ValueError(f"{name} must be positive or None, got {value}")
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {self.log_level}")


def configure_logging(config: ClientConfig) -> None:
    """Attaches a stream handler to the rawhttp logger at the configured level."""
    logger = logging.getLogger("rawhttp")
    logger.setLevel(config.log_level.upper())
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
