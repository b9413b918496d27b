"""
Local interface enumeration and default network detection.

This module provides the NetworkDetector class which lists the host's
network interfaces through psutil, picks the default one (the first that
is up, not loopback and has an IPv4 address) and derives the NetworkRange
to sweep when the operator does not supply one.
"""

import ipaddress
import socket
from typing import List, Optional

import psutil

from .data_models import InterfaceInfo, NetworkRange
from ..utils.error_handler import NetworkDetectionError
from ..utils.logger import Logger, get_logger
from ..utils.network_utils import is_link_local, is_loopback_ip, netmask_to_cidr


class NetworkDetector:
    """
    Detects host interfaces and the local network range.

    Selection is purely by enumeration order; there is no metric or
    priority logic.
    """

    def __init__(self, logger: Optional[Logger] = None):
        self.logger = logger or get_logger(__name__)

    def list_interfaces(self) -> List[InterfaceInfo]:
        """
        Enumerate local network interfaces.

        Returns:
            List[InterfaceInfo]: Interfaces in the order psutil reports them
        """
        addrs = psutil.net_if_addrs()
        stats = psutil.net_if_stats()
        interfaces = []

        for name, entries in addrs.items():
            mac_address = None
            ipv4 = []

            for entry in entries:
                if entry.family == psutil.AF_LINK:
                    mac_address = entry.address
                elif entry.family == socket.AF_INET:
                    ipv4.append((entry.address, self._prefix_for(entry.netmask)))

            stat = stats.get(name)
            flags = getattr(stat, "flags", "") or ""
            is_loopback = (
                "loopback" in flags
                or name in ("lo", "lo0")
                or any(is_loopback_ip(ip) for ip, _ in ipv4)
            )

            interfaces.append(InterfaceInfo(
                name=name,
                description=name,
                index=self._index_for(name),
                mac_address=mac_address,
                addresses=ipv4,
                is_up=bool(stat and stat.isup),
                is_loopback=is_loopback,
            ))

        return interfaces

    def get_default_interface(self) -> Optional[InterfaceInfo]:
        """First interface that is up, non-loopback and has an IPv4 address."""
        for iface in self.list_interfaces():
            if iface.is_up and not iface.is_loopback and iface.has_ipv4:
                return iface
        return None

    def get_local_network(self) -> NetworkRange:
        """
        Determine the network to sweep from the default interface.

        Returns:
            NetworkRange: First non-loopback, non-link-local IPv4 address of
            the default interface with its prefix length

        Raises:
            NetworkDetectionError: If no interface or address qualifies
        """
        iface = self.get_default_interface()
        if iface is None:
            raise NetworkDetectionError("Could not determine local network: no active IPv4 interface")

        for ip, prefix in iface.addresses:
            if not is_loopback_ip(ip) and not is_link_local(ip):
                self.logger.info(f"Detected default interface: {iface.name}")
                return NetworkRange(address=ip, prefix=prefix)

        raise NetworkDetectionError(
            f"Could not determine local network: {iface.name} has no usable IPv4 address"
        )

    def _prefix_for(self, netmask: Optional[str]) -> int:
        if not netmask:
            return 32
        try:
            return netmask_to_cidr(netmask)
        except ValueError:
            self.logger.warning(f"Unrecognised netmask {netmask}, assuming /32")
            return 32

    @staticmethod
    def _index_for(name: str) -> int:
        try:
            return socket.if_nametoindex(name)
        except (OSError, AttributeError):
            return 0


def describe_network(network_range: NetworkRange) -> str:
    """Canonical CIDR form of the range, e.g. 192.168.1.0/24 for 192.168.1.37/24."""
    return str(ipaddress.IPv4Network(str(network_range), strict=False))
