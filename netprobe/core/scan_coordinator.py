"""
Scan Coordinator for netprobe.

This module provides the ScanCoordinator class that runs one sweep: it
enumerates candidate hosts, partitions them into contiguous chunks, hands
the chunks to a bounded worker pool and merges the device records the
workers produce into a single inventory.
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Callable, List, Optional

from .data_models import (
    CoordinatorState,
    DeviceRecord,
    NetworkRange,
    ScanEvent,
    ScanEventType,
    ScanSummary,
)
from .host_enumerator import enumerate_hosts
from .service_identifier import identify_services
from ..config.config_loader import ScanConfig
from ..scanners.liveness_prober import LivenessProber
from ..scanners.port_scanner import PortScanner
from ..scanners.hostname_resolver import HostnameResolver
from ..utils.logger import Logger, get_logger

EventCallback = Callable[[ScanEvent], None]


def partition_hosts(hosts: List[str], max_threads: int) -> List[List[str]]:
    """
    Split the candidate list into contiguous chunks.

    chunk_size is max(len(hosts) // max_threads, 1); the last chunk may be
    shorter. Concatenating the chunks gives back the input list.

    Args:
        hosts: Candidate addresses in probe order
        max_threads: Configured worker cap

    Returns:
        List of non-empty chunks
    """
    chunk_size = max(len(hosts) // max(max_threads, 1), 1)
    return [hosts[i:i + chunk_size] for i in range(0, len(hosts), chunk_size)]


class LoggingEventSink:
    """Renders ScanEvents through the project logger."""

    def __init__(self, logger: Optional[Logger] = None):
        self.logger = logger or get_logger("netprobe.scan")

    def __call__(self, event: ScanEvent) -> None:
        if event.event_type == ScanEventType.SCAN_STARTED:
            self.logger.info(f"🎯 Starting sweep of {event.network} ({event.count} candidate hosts)")
        elif event.event_type == ScanEventType.HOST_ALIVE:
            self.logger.info(f"🔍 Analyzing device: {event.address}")
        elif event.event_type == ScanEventType.PORT_OPEN:
            self.logger.info(f"   Port {event.port} open on {event.address}")
        elif event.event_type == ScanEventType.DEVICE_FOUND:
            self.logger.debug(f"Recorded {event.address}", services=",".join(event.device.services))
        elif event.event_type == ScanEventType.SCAN_FINISHED:
            self.logger.success(f"📊 Devices found: {event.count}")


class ScanCoordinator:
    """
    Runs sweeps over a network range with a bounded worker pool.

    One pool task is submitted per chunk and the pool never holds more than
    config.max_threads threads. The inventory lock is held only while a
    record is appended; probing happens outside it.
    """

    def __init__(
        self,
        config: Optional[ScanConfig] = None,
        prober: Optional[LivenessProber] = None,
        port_scanner: Optional[PortScanner] = None,
        resolver: Optional[HostnameResolver] = None,
        event_callback: Optional[EventCallback] = None,
        logger: Optional[Logger] = None,
    ):
        """
        Initialize the coordinator.

        Args:
            config: Timeout and worker cap; defaults to ScanConfig()
            prober: Liveness prober (optional)
            port_scanner: Port scanner (optional)
            resolver: Hostname resolver (optional)
            event_callback: Receives progress events; defaults to LoggingEventSink
            logger: Logger for coordinator messages (optional)
        """
        self.config = config or ScanConfig()
        self.logger = logger or get_logger(__name__)
        self.prober = prober or LivenessProber(self.logger)
        self.port_scanner = port_scanner or PortScanner(self.logger, parallel=self.config.parallel_ports)
        self.resolver = resolver or HostnameResolver(self.logger)
        self.event_callback = event_callback or LoggingEventSink()

        self._state = CoordinatorState.IDLE
        self._state_lock = threading.Lock()
        self.last_summary: Optional[ScanSummary] = None

    @property
    def state(self) -> CoordinatorState:
        return self._state

    def _set_state(self, state: CoordinatorState) -> None:
        with self._state_lock:
            self._state = state
        self.logger.debug(f"Coordinator state: {state.value}")

    def _emit(self, event: ScanEvent) -> None:
        self.event_callback(event)

    def comprehensive_scan(self, network_range: NetworkRange) -> List[DeviceRecord]:
        """
        Sweep a network range and return the discovered devices.

        Down hosts, closed ports and failed lookups are normal outcomes and
        never abort the sweep. Device order follows worker completion, not
        address order.

        Args:
            network_range: Range to sweep

        Returns:
            List[DeviceRecord]: One record per live host
        """
        started = datetime.now()
        hosts = enumerate_hosts(network_range)
        summary = ScanSummary(network_scanned=str(network_range), hosts_enumerated=len(hosts))
        self._emit(ScanEvent(ScanEventType.SCAN_STARTED, network=network_range, count=len(hosts)))

        self._set_state(CoordinatorState.PARTITIONING)
        chunks = partition_hosts(hosts, self.config.max_threads)
        summary.chunk_count = len(chunks)
        summary.chunk_size = len(chunks[0]) if chunks else 0

        inventory: List[DeviceRecord] = []
        inventory_lock = threading.Lock()

        self._set_state(CoordinatorState.DISPATCHING)
        if chunks:
            summary.workers_used = min(self.config.max_threads, len(chunks))
            with ThreadPoolExecutor(
                max_workers=summary.workers_used, thread_name_prefix="netprobe-worker"
            ) as executor:
                futures = [
                    executor.submit(self._scan_chunk, chunk, inventory, inventory_lock, summary.errors)
                    for chunk in chunks
                ]

                self._set_state(CoordinatorState.AWAITING_COMPLETION)
                for chunk, future in zip(chunks, futures):
                    try:
                        future.result()
                    except Exception as e:
                        error_msg = f"Worker for {chunk[0]}..{chunk[-1]} failed: {str(e)}"
                        self.logger.error(error_msg, exception=e)
                        with inventory_lock:
                            summary.errors.append(error_msg)
        else:
            self._set_state(CoordinatorState.AWAITING_COMPLETION)

        with inventory_lock:
            result = list(inventory)
        self._set_state(CoordinatorState.MERGED)

        summary.devices_found = len(result)
        summary.scan_duration = (datetime.now() - started).total_seconds()
        self.last_summary = summary

        self._emit(ScanEvent(ScanEventType.SCAN_FINISHED, network=network_range, count=len(result)))
        return result

    def _scan_chunk(
        self,
        chunk: List[str],
        inventory: List[DeviceRecord],
        lock: threading.Lock,
        errors: List[str],
    ) -> None:
        """
        Worker body: probe the chunk's hosts in order and publish live ones.

        A failure on one host is logged and recorded in errors; the worker
        moves on to the next host in its chunk.
        """
        for address in chunk:
            try:
                device = self.scan_host(address)
            except Exception as e:
                self._record_error(f"Scan of {address} failed: {str(e)}", e, lock, errors)
                continue

            if device is None:
                continue
            with lock:
                inventory.append(device)

            try:
                self._emit(ScanEvent(ScanEventType.DEVICE_FOUND, address=address, device=device))
            except Exception as e:
                self._record_error(f"Event handler failed for {address}: {str(e)}", e, lock, errors)

    def _record_error(self, message: str, error: Exception, lock: threading.Lock, errors: List[str]) -> None:
        self.logger.error(message, exception=error)
        with lock:
            errors.append(message)

    def scan_host(self, address: str) -> Optional[DeviceRecord]:
        """
        Fingerprint a single host.

        Args:
            address: IPv4 address

        Returns:
            DeviceRecord if the host is alive, None otherwise
        """
        timeout = self.config.timeout
        if not self.prober.is_alive(address, timeout):
            return None

        self._emit(ScanEvent(ScanEventType.HOST_ALIVE, address=address))

        open_ports = self.port_scanner.scan_ports(
            address,
            timeout,
            on_open=lambda host, port: self._emit(ScanEvent(ScanEventType.PORT_OPEN, address=host, port=port)),
        )
        services = identify_services(open_ports)
        hostname = self.resolver.resolve(address)

        return DeviceRecord(
            ip_address=address,
            mac_address=None,
            hostname=hostname,
            open_ports=tuple(open_ports),
            services=tuple(services),
        )
