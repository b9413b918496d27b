"""
Liveness probing for candidate hosts.

A host counts as alive when any of a short list of commonly open ports
accepts a TCP connection.
"""

from typing import Optional, Sequence

from .base_scanner import BaseScanner, Connector
from ..utils.logger import Logger

# Web first, then SSH, Windows RPC, HTTPS and RDP
LIVENESS_PORTS = (80, 22, 135, 443, 3389)


class LivenessProber(BaseScanner):
    """
    Decides whether a host is worth a full port scan.

    Ports are tried one after another with the same timeout, so a silent
    host costs up to len(ports) x timeout.
    """

    def __init__(
        self,
        logger: Optional[Logger] = None,
        connector: Optional[Connector] = None,
        ports: Sequence[int] = LIVENESS_PORTS,
    ):
        super().__init__(logger, connector)
        self.ports = tuple(ports)

    def is_alive(self, address: str, timeout: float) -> bool:
        """
        Check whether a host answers on any liveness port.

        Args:
            address: IPv4 address to probe
            timeout: Per-connect timeout in seconds

        Returns:
            True on the first successful connect, False after every port failed
        """
        for port in self.ports:
            if self._connect(address, port, timeout):
                self._log_debug(f"{address} is alive (answered on port {port})")
                return True
        return False
