"""
Best-effort reverse DNS for discovered hosts.
"""

import socket
from typing import Optional

from .base_scanner import BaseScanner
from ..utils.error_handler import classify_socket_error
from ..utils.logger import Logger


class HostnameResolver(BaseScanner):
    """
    Resolves an address to a hostname through the system resolver.

    The lookup has no timeout of its own; it is bounded by the resolver
    configuration of the host running the sweep.
    """

    def __init__(self, logger: Optional[Logger] = None):
        super().__init__(logger)

    def resolve(self, address: str) -> Optional[str]:
        """
        Look up the PTR name of an address.

        Args:
            address: IPv4 address to resolve

        Returns:
            Hostname, or None if the lookup failed for any reason
        """
        try:
            hostname = socket.gethostbyaddr(address)[0]
        except (OSError, UnicodeError) as e:
            reason = classify_socket_error(e).value if isinstance(e, OSError) else "malformed_response"
            self._log_debug(f"No hostname for {address} ({reason})")
            return None
        return hostname or None
