"""
TCP connect port scanner for live hosts.

Probes a fixed list of well-known ports. By default the ports of one host
are tried sequentially; with parallel=True they go through a small thread
pool, and the result keeps the fixed list order either way.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence

from .base_scanner import BaseScanner, Connector
from ..utils.logger import Logger

COMMON_PORTS = (
    21, 22, 23, 25, 53, 80, 110, 135, 139, 143, 443, 445,
    993, 995, 1723, 3306, 3389, 5900, 8080,
)

PortCallback = Callable[[str, int], None]


class PortScanner(BaseScanner):
    """
    Records which of the well-known ports accept a connection.

    Each port gets a single attempt with no retry. Sequential mode costs up
    to len(ports) x timeout per host.
    """

    def __init__(
        self,
        logger: Optional[Logger] = None,
        connector: Optional[Connector] = None,
        ports: Sequence[int] = COMMON_PORTS,
        parallel: bool = False,
        max_parallel: int = 8,
    ):
        """
        Initialize the port scanner.

        Args:
            logger: Logger instance for probe details
            connector: Connection primitive, see BaseScanner
            ports: Ports to probe, in reporting order
            parallel: Probe the ports of one host concurrently
            max_parallel: Thread count used when parallel is set
        """
        super().__init__(logger, connector)
        self.ports = tuple(ports)
        self.parallel = parallel
        self.max_parallel = max(1, max_parallel)

    def scan_ports(
        self, address: str, timeout: float, on_open: Optional[PortCallback] = None
    ) -> List[int]:
        """
        Probe every port in the list on one host.

        Args:
            address: IPv4 address of a live host
            timeout: Per-connect timeout in seconds
            on_open: Called with (address, port) for each open port

        Returns:
            List[int]: Open ports in list order
        """
        if not self.ports:
            return []

        if self.parallel:
            with ThreadPoolExecutor(max_workers=min(self.max_parallel, len(self.ports))) as executor:
                results = list(
                    executor.map(lambda port: self._connect(address, port, timeout), self.ports)
                )
        else:
            results = [self._connect(address, port, timeout) for port in self.ports]

        open_ports = [port for port, is_open in zip(self.ports, results) if is_open]

        for port in open_ports:
            self._log_debug(f"{address}: port {port} open")
            if on_open:
                on_open(address, port)

        return open_ports
