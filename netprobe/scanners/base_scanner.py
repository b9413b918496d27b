"""
Base scanner interface for netprobe.

This module defines the TCP connect primitive shared by the liveness prober
and the port scanner, and the base class that gives both of them an
injectable connector and optional logging.
"""

import socket
from abc import ABC
from typing import Callable, Optional

from ..utils.error_handler import classify_socket_error
from ..utils.logger import Logger, get_logger

Connector = Callable[[str, int, float], bool]

_connect_logger = get_logger("netprobe.connect")


def tcp_connect(address: str, port: int, timeout: float) -> bool:
    """
    Attempt a single TCP connection.

    The socket is closed straight away; no data is exchanged. Refused,
    timed out and unreachable connections all count as "not open".

    Args:
        address: IPv4 address to connect to
        port: TCP port
        timeout: Connect timeout in seconds

    Returns:
        True if the connection was established within the timeout
    """
    try:
        with socket.create_connection((address, port), timeout=timeout):
            return True
    except OSError as e:
        _connect_logger.debug(
            f"{address}:{port} did not respond",
            reason=classify_socket_error(e).value,
        )
        return False


class BaseScanner(ABC):
    """
    Common base for the connect-based probes.

    Concrete probes call self._connect() instead of touching sockets
    directly, so tests can swap in a simulated network through the
    connector argument.
    """

    def __init__(self, logger: Optional[Logger] = None, connector: Optional[Connector] = None):
        """
        Initialize the base scanner.

        Args:
            logger: Logger instance for outputting probe details
            connector: Callable (address, port, timeout) -> bool used for
                every connection attempt; defaults to tcp_connect
        """
        self.logger = logger
        self.connector: Connector = connector or tcp_connect

    def _connect(self, address: str, port: int, timeout: float) -> bool:
        return self.connector(address, port, timeout)

    def _log_debug(self, message: str) -> None:
        """Log a debug message if logger is available."""
        if self.logger:
            self.logger.debug(message)
