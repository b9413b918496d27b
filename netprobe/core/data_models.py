"""
Core data models and enums for netprobe.

This module defines the data structures used throughout a sweep, including
the network range being scanned, discovered device records, coordinator
states, progress events and per-sweep statistics.
"""

import ipaddress
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from ..utils.error_handler import ValidationError


class CoordinatorState(Enum):
    """Lifecycle of a single sweep inside the ScanCoordinator."""
    IDLE = "idle"
    PARTITIONING = "partitioning"
    DISPATCHING = "dispatching"
    AWAITING_COMPLETION = "awaiting_completion"
    MERGED = "merged"


class ScanEventType(Enum):
    """Kinds of progress notifications emitted by the engine."""
    SCAN_STARTED = "scan_started"
    HOST_ALIVE = "host_alive"
    PORT_OPEN = "port_open"
    DEVICE_FOUND = "device_found"
    SCAN_FINISHED = "scan_finished"


@dataclass(frozen=True)
class NetworkRange:
    """
    IPv4 network address plus prefix length.

    The address is used exactly as supplied; it is not normalised to the
    all-zero host bits form.

    Attributes:
        address: Dotted IPv4 address (e.g., 192.168.1.0)
        prefix: Prefix length, 0 to 32
    """
    address: str
    prefix: int

    def __post_init__(self):
        valid_type = isinstance(self.prefix, int) and not isinstance(self.prefix, bool)
        if not valid_type or not 0 <= self.prefix <= 32:
            raise ValidationError(f"Prefix must be between 0 and 32, got {self.prefix}")
        try:
            ipaddress.IPv4Address(self.address)
        except ipaddress.AddressValueError as e:
            raise ValidationError(f"Invalid IP address: {self.address}") from e

    @property
    def network_int(self) -> int:
        """Address as an unsigned 32-bit integer."""
        return int(ipaddress.IPv4Address(self.address))

    @property
    def octets(self) -> Tuple[int, int, int, int]:
        return tuple(ipaddress.IPv4Address(self.address).packed)

    def __str__(self) -> str:
        return f"{self.address}/{self.prefix}"


@dataclass(frozen=True)
class DeviceRecord:
    """
    A live host found during a sweep.

    Attributes:
        ip_address: IP address of the device
        mac_address: Always None; MAC resolution is not performed
        hostname: Reverse-DNS name, if one resolved
        open_ports: Open TCP ports in probe order
        services: Service labels for the open ports, same order
    """
    ip_address: str
    mac_address: Optional[str] = None
    hostname: Optional[str] = None
    open_ports: Tuple[int, ...] = ()
    services: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ScanEvent:
    """
    Progress notification from a running sweep.

    Attributes:
        event_type: What happened
        address: Host the event concerns, if any
        port: Port the event concerns (PORT_OPEN only)
        device: Record that was added (DEVICE_FOUND only)
        count: Candidate count (SCAN_STARTED) or device count (SCAN_FINISHED)
        network: Range being swept
    """
    event_type: ScanEventType
    address: Optional[str] = None
    port: Optional[int] = None
    device: Optional[DeviceRecord] = None
    count: Optional[int] = None
    network: Optional[NetworkRange] = None


@dataclass
class ScanSummary:
    """
    Statistics about a completed sweep.

    Attributes:
        network_scanned: Range that was swept (CIDR notation)
        hosts_enumerated: Number of candidate addresses
        chunk_size: Hosts per chunk
        chunk_count: Number of chunks dispatched
        workers_used: Size of the worker pool
        devices_found: Number of device records in the inventory
        scan_duration: Wall-clock duration in seconds
        errors: Unexpected worker failures, one string each
    """
    network_scanned: str = ""
    hosts_enumerated: int = 0
    chunk_size: int = 0
    chunk_count: int = 0
    workers_used: int = 0
    devices_found: int = 0
    scan_duration: float = 0.0
    errors: List[str] = field(default_factory=list)


@dataclass
class InterfaceInfo:
    """
    A local network interface.

    Attributes:
        name: Interface name (e.g., eth0)
        description: Human readable description
        index: OS interface index, 0 when unknown
        mac_address: Hardware address, if the interface has one
        addresses: IPv4 addresses with their prefix lengths
        is_up: Whether the interface is administratively up
        is_loopback: Whether this is a loopback interface
    """
    name: str
    description: str = ""
    index: int = 0
    mac_address: Optional[str] = None
    addresses: List[Tuple[str, int]] = field(default_factory=list)
    is_up: bool = False
    is_loopback: bool = False

    @property
    def status(self) -> str:
        if self.is_loopback:
            return "Loopback"
        if self.is_up:
            return "Up"
        return "Down"

    @property
    def has_ipv4(self) -> bool:
        return bool(self.addresses)
