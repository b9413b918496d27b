"""
Shared fixtures: a simulated network that answers connect attempts from a
table of open (address, port) pairs, and a coordinator wired to it.
"""

import threading
from typing import Dict, Iterable, List, Optional

import pytest

from netprobe.config.config_loader import ScanConfig
from netprobe.core.scan_coordinator import ScanCoordinator
from netprobe.scanners.liveness_prober import LivenessProber
from netprobe.scanners.port_scanner import PortScanner


class FakeNetwork:
    """Connector that records every attempt and opens only the listed ports."""

    def __init__(self, open_ports: Optional[Dict[str, Iterable[int]]] = None):
        self.open_ports = {ip: set(ports) for ip, ports in (open_ports or {}).items()}
        self.attempts: List[tuple] = []
        self._lock = threading.Lock()

    def __call__(self, address: str, port: int, timeout: float) -> bool:
        with self._lock:
            self.attempts.append((address, port))
        return port in self.open_ports.get(address, ())

    def attempts_for(self, address: str) -> List[int]:
        with self._lock:
            return [port for ip, port in self.attempts if ip == address]


class FakeResolver:
    def __init__(self, names: Optional[Dict[str, str]] = None):
        self.names = names or {}

    def resolve(self, address: str) -> Optional[str]:
        return self.names.get(address)


class EventRecorder:
    def __init__(self):
        self.events = []
        self._lock = threading.Lock()

    def __call__(self, event) -> None:
        with self._lock:
            self.events.append(event)

    def of_type(self, event_type):
        return [e for e in self.events if e.event_type == event_type]


@pytest.fixture
def events():
    return EventRecorder()


@pytest.fixture
def make_coordinator(events):
    """Build a coordinator whose probes talk to a FakeNetwork."""

    def _make(network: FakeNetwork, config: Optional[ScanConfig] = None, names=None, parallel=False):
        return ScanCoordinator(
            config or ScanConfig(timeout_ms=10, max_threads=10),
            prober=LivenessProber(connector=network),
            port_scanner=PortScanner(connector=network, parallel=parallel),
            resolver=FakeResolver(names),
            event_callback=events,
        )

    return _make


@pytest.fixture(autouse=True)
def _reset_log_level():
    from netprobe.utils.logger import LogLevel, set_log_level

    yield
    set_log_level(LogLevel.INFO)
