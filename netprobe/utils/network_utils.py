"""
Network utility functions for IP address calculations and target parsing.

This module provides helper functions for IPv4 validation, integer
conversion, netmask handling and parsing of "<IP>/<prefix>" targets.
"""

import ipaddress
from typing import Optional

from ..core.data_models import NetworkRange
from .error_handler import ValidationError


def is_valid_ip(ip_address: str) -> bool:
    """
    Check if a string represents a valid IPv4 address.

    Args:
        ip_address: String to validate as IPv4 address

    Returns:
        bool: True if valid IPv4 address, False otherwise
    """
    try:
        ipaddress.IPv4Address(ip_address)
        return True
    except ipaddress.AddressValueError:
        return False


def int_to_ip(value: int) -> str:
    """Convert an unsigned 32-bit value to a dotted IPv4 address."""
    return str(ipaddress.IPv4Address(value & 0xFFFFFFFF))


def netmask_to_cidr(netmask: str) -> int:
    """
    Convert dotted decimal netmask to CIDR notation.

    Args:
        netmask: Dotted decimal netmask (e.g., "255.255.255.0")

    Returns:
        int: CIDR prefix length

    Raises:
        ValueError: If netmask is invalid
    """
    try:
        network = ipaddress.IPv4Network(f"0.0.0.0/{netmask}")
        return network.prefixlen
    except (ipaddress.AddressValueError, ipaddress.NetmaskValueError) as e:
        raise ValueError(f"Invalid netmask: {netmask}") from e


def calculate_host_count(prefix: int) -> int:
    """Usable host count for a prefix (total addresses minus network and broadcast)."""
    if not 0 <= prefix <= 32:
        raise ValidationError(f"Prefix must be between 0 and 32, got {prefix}")
    return max(0, 2 ** (32 - prefix) - 2)


def is_link_local(ip_address: str) -> bool:
    try:
        return ipaddress.IPv4Address(ip_address).is_link_local
    except ipaddress.AddressValueError:
        return False


def is_loopback_ip(ip_address: str) -> bool:
    try:
        return ipaddress.IPv4Address(ip_address).is_loopback
    except ipaddress.AddressValueError:
        return False


def parse_target(target: str, max_prefix: Optional[int] = 31) -> NetworkRange:
    """
    Parse a command-line target of the form "<IP>/<prefix>".

    The address is kept as given; it is not normalised to the network base.

    Args:
        target: Target string, e.g. "192.168.1.0/24"
        max_prefix: Largest prefix accepted (the CLI allows up to /31)

    Returns:
        NetworkRange for the target

    Raises:
        ValidationError: If the format, address or prefix is invalid
    """
    if "/" not in target:
        raise ValidationError(f"Invalid format: {target}. Expected <IP>/<prefix>")

    ip_part, prefix_part = target.split("/", 1)

    if not (prefix_part.isascii() and prefix_part.isdigit()):
        raise ValidationError(f"Invalid network prefix: {prefix_part}")
    prefix = int(prefix_part)

    upper = 32 if max_prefix is None else max_prefix
    if not 0 <= prefix <= upper:
        raise ValidationError(f"Network prefix must be between 0 and {upper}, got {prefix}")

    if not is_valid_ip(ip_part):
        raise ValidationError(f"Invalid IP address: {ip_part}")

    return NetworkRange(address=ip_part, prefix=prefix)
